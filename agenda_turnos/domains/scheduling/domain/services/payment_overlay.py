"""
Payment Overlay

Read-side join of payment statuses onto appointments.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from ..entities.appointment import Appointment
from ..entities.payment_record import PaymentRecord
from ..value_objects.payment_status import PaymentStatus


@dataclass(frozen=True)
class AppointmentPayment:
    """An appointment with its payment status attached."""

    appointment: Appointment
    payment_status: PaymentStatus
    payment: PaymentRecord | None = None


class PaymentOverlay:
    """Looks up payment records by appointment id."""

    @staticmethod
    def find(payments: Iterable[PaymentRecord], appointment_id: str) -> PaymentRecord | None:
        target = str(appointment_id)
        for payment in payments:
            if str(payment.appointment_id) == target:
                return payment
        return None

    @classmethod
    def status_for(cls, payments: Iterable[PaymentRecord], appointment_id: str) -> PaymentStatus:
        """pagado / pendiente, or unknown when there is no record."""
        payment = cls.find(payments, appointment_id)
        return payment.status if payment else PaymentStatus.UNKNOWN

    @classmethod
    def attach(
        cls,
        appointments: Iterable[Appointment],
        payments: Iterable[PaymentRecord],
    ) -> list[AppointmentPayment]:
        by_id = {str(payment.appointment_id): payment for payment in payments}
        result = []
        for appointment in appointments:
            payment = by_id.get(str(appointment.id))
            result.append(
                AppointmentPayment(
                    appointment=appointment,
                    payment_status=payment.status if payment else PaymentStatus.UNKNOWN,
                    payment=payment,
                )
            )
        return result
