# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for paying an appointment.
# ============================================================================
"""Mark Appointment Paid Use Case.

Payments only move pendiente -> pagado. After a successful remote mark the
payment, appointment, express and slot caches are invalidated so the next
read sees ``pagado``.
"""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException, EntityNotFoundException

from ...domain.services import PaymentOverlay
from ..dto import MarkAppointmentPaidRequest, PaymentStatusResult

if TYPE_CHECKING:
    from ..ports import IPaymentStore
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class MarkAppointmentPaidUseCase:
    def __init__(self, payment_store: "IPaymentStore", reader: "SchedulingReader") -> None:
        self._store = payment_store
        self._reader = reader

    async def execute(self, request: MarkAppointmentPaidRequest) -> PaymentStatusResult:
        logger.info(f"Marking appointment {request.appointment_id} as paid")

        try:
            read = await self._reader.payments(request.requested_by)
            payment = PaymentOverlay.find(read.value, request.appointment_id)
            if payment is None:
                raise EntityNotFoundException("Pago", request.appointment_id)
            payment.assert_can_mark_paid()
        except DomainException as e:
            logger.info(f"Cannot mark appointment {request.appointment_id} as paid: {e.code}")
            return PaymentStatusResult.from_exception(e)

        response = await self._store.pagar_turno(request.appointment_id)
        if not response.success:
            logger.warning(f"Failed to pay appointment: {response.error_code} - {response.error_message}")
            return PaymentStatusResult.error(
                response.error_code or "PAYMENT_ERROR",
                response.error_message or "Error al registrar el pago",
                status=payment.status,
                payment=payment,
            )

        payment.mark_paid()
        cache = self._reader.cache
        cache.invalidate_payments()
        # Payment rows carry no professional, so every slot window goes
        cache.invalidate_after_booking_change(None)

        logger.info(f"Appointment {request.appointment_id} paid")
        return PaymentStatusResult.ok(data=response.data, status=payment.status, payment=payment)
