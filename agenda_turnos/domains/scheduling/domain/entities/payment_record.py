"""Payment Record Entity.

Only the status flag of a payment is tracked; the ledger lives in the backend.
"""

from dataclasses import dataclass

from agenda_turnos.core.domain import Entity, InvalidTransitionException, Money

from ..value_objects.payment_status import PaymentStatus


@dataclass
class PaymentRecord(Entity[str]):
    """Pago asociado a un turno."""

    appointment_id: str = ""
    status: PaymentStatus = PaymentStatus.PENDIENTE
    amount: Money | None = None

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAGADO

    def mark_paid(self) -> None:
        """pendiente -> pagado; anything else is rejected."""
        self.assert_can_mark_paid()
        self.status = PaymentStatus.PAGADO
        self.touch()

    def assert_can_mark_paid(self) -> None:
        if not self.status.can_transition_to(PaymentStatus.PAGADO):
            raise InvalidTransitionException(
                "mark_paid",
                self.status.value,
                f"El turno {self.appointment_id} no tiene un pago pendiente ({self.status.display_name})",
            )

    @classmethod
    def pending_for(cls, appointment_id: str, amount: Money | None = None) -> "PaymentRecord":
        return cls(id=appointment_id, appointment_id=appointment_id, status=PaymentStatus.PENDIENTE, amount=amount)
