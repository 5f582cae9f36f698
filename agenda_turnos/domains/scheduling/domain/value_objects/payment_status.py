"""Payment Status Value Object."""

from enum import Enum


class PaymentStatus(str, Enum):
    """Estado de pago de un turno."""

    PAGADO = "pagado"
    PENDIENTE = "pendiente"
    UNKNOWN = "unknown"  # Sin registro de pago

    @property
    def display_name(self) -> str:
        names = {
            "pagado": "Pagado",
            "pendiente": "Pendiente de pago",
            "unknown": "Sin información de pago",
        }
        return names[self.value]

    @classmethod
    def from_wire(cls, value: str | None) -> "PaymentStatus":
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    def can_transition_to(self, new_status: "PaymentStatus") -> bool:
        """Only pendiente -> pagado is allowed."""
        return self == PaymentStatus.PENDIENTE and new_status == PaymentStatus.PAGADO
