# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for the professional's pending express requests.
# ============================================================================
"""List Pending Express Requests Use Case.

Express turnos of the professional that are still pending and that the
professional has not answered yet (``expressAceptado`` not set).
"""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException

from ...domain.entities import Appointment, ExpressRequest
from ...domain.value_objects import AppointmentStatus, PartyRole
from ..dto import ExpressListResult

if TYPE_CHECKING:
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


def is_pending_express(appointment: Appointment) -> bool:
    return (
        appointment.is_express
        and appointment.status == AppointmentStatus.PENDING
        and not appointment.express_accepted
    )


class ListPendingExpressRequestsUseCase:
    def __init__(self, reader: "SchedulingReader") -> None:
        self._reader = reader

    async def execute(self) -> ExpressListResult:
        cache = self._reader.cache
        inner_stale = False

        async def load() -> list[ExpressRequest]:
            nonlocal inner_stale
            read = await self._reader.appointments(PartyRole.PROFESSIONAL)
            inner_stale = read.stale
            return [ExpressRequest.from_appointment(a) for a in read.value if is_pending_express(a)]

        try:
            read = await cache.fetch(cache.express_key(PartyRole.PROFESSIONAL), load)
        except DomainException as e:
            logger.warning(f"Failed to list express requests: {e.code} - {e.message}")
            return ExpressListResult.from_exception(e)

        logger.info(f"Found {len(read.value)} pending express requests")
        return ExpressListResult.ok(requests=read.value, stale=read.stale or inner_stale)
