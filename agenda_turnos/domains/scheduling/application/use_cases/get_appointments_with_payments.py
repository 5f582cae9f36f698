# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case joining payment statuses onto an appointment list.
# ============================================================================
"""Get Appointments With Payments Use Case."""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException

from ...domain.services import PaymentOverlay
from ...domain.value_objects import PartyRole
from ..dto import PaymentOverlayResult

if TYPE_CHECKING:
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class GetAppointmentsWithPaymentsUseCase:
    """Appointments of a party with their payment status attached (detail views)."""

    def __init__(self, reader: "SchedulingReader") -> None:
        self._reader = reader

    async def execute(self, party: PartyRole = PartyRole.PATIENT) -> PaymentOverlayResult:
        try:
            appointments = await self._reader.appointments(party)
            payments = await self._reader.payments(party)
        except DomainException as e:
            logger.warning(f"Failed to build payment overlay: {e.code} - {e.message}")
            return PaymentOverlayResult.from_exception(e)

        items = PaymentOverlay.attach(appointments.value, payments.value)
        return PaymentOverlayResult.ok(items=items)
