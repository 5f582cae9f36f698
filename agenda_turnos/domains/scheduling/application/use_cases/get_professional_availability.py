# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for reading a professional's weekly availability.
# ============================================================================
"""Get Professional Availability Use Case."""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException

from ..dto import AvailabilityResult, GetProfessionalAvailabilityRequest

if TYPE_CHECKING:
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class GetProfessionalAvailabilityUseCase:
    """Fetches and normalizes the weekly availability of a professional (cached)."""

    def __init__(self, reader: "SchedulingReader") -> None:
        self._reader = reader

    async def execute(self, request: GetProfessionalAvailabilityRequest) -> AvailabilityResult:
        logger.info(f"Getting availability for professional {request.professional_ref}")

        try:
            read = await self._reader.availability(request.professional_ref)
        except DomainException as e:
            logger.warning(f"Failed to get availability: {e.code} - {e.message}")
            return AvailabilityResult.from_exception(e)

        availability, report = read.value
        return AvailabilityResult.ok(
            data={"weekdays": [day.value for day in availability.weekdays()]},
            availability=availability,
            report=report,
            stale=read.stale,
        )
