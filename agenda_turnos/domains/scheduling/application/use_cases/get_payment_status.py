# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for an appointment's payment status.
# ============================================================================
"""Get Payment Status Use Case."""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException

from ...domain.services import PaymentOverlay
from ..dto import GetPaymentStatusRequest, PaymentStatusResult

if TYPE_CHECKING:
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class GetPaymentStatusUseCase:
    """Returns pagado, pendiente or unknown (no payment record)."""

    def __init__(self, reader: "SchedulingReader") -> None:
        self._reader = reader

    async def execute(self, request: GetPaymentStatusRequest) -> PaymentStatusResult:
        try:
            read = await self._reader.payments(request.requested_by)
        except DomainException as e:
            logger.warning(f"Failed to get payments: {e.code} - {e.message}")
            return PaymentStatusResult.from_exception(e)

        payment = PaymentOverlay.find(read.value, request.appointment_id)
        status = PaymentOverlay.status_for(read.value, request.appointment_id)
        logger.debug(f"Payment status of {request.appointment_id}: {status.value}")
        return PaymentStatusResult.ok(data={"estado": status.value}, status=status, payment=payment)
