# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for the bookable slots of a week window.
# ============================================================================
"""Get Week Slots Use Case.

Combines the professional's availability with the patient's own reservations
and projects them onto a rolling 7-day window.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException, ValidationException

from ...domain.services import ReservationConflictFilter, SlotGenerator
from ...domain.value_objects import PartyRole, WeekSlots
from ..dto import GetWeekSlotsRequest, WeekSlotsResult

if TYPE_CHECKING:
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class GetWeekSlotsUseCase:
    """Use case for getting the bookable slots of a professional.

    Results are cached per professional and week offset. A result whose read
    was overtaken by an invalidation is returned with ``stale=True``.
    """

    def __init__(
        self,
        reader: "SchedulingReader",
        slot_generator: SlotGenerator | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._reader = reader
        self._generator = slot_generator or SlotGenerator()
        self._clock = clock or datetime.now

    async def execute(self, request: GetWeekSlotsRequest) -> WeekSlotsResult:
        logger.info(f"Getting slots for professional {request.professional_ref} (week offset {request.week_offset})")

        if request.week_offset < 0:
            return WeekSlotsResult.from_exception(
                ValidationException("No se puede navegar a semanas anteriores", field="week_offset")
            )

        stale = False

        async def build_week() -> WeekSlots:
            nonlocal stale
            availability_read = await self._reader.availability(request.professional_ref)
            appointments_read = await self._reader.appointments(PartyRole.PATIENT)
            stale = availability_read.stale or appointments_read.stale

            availability, _ = availability_read.value
            reserved = ReservationConflictFilter.reserved_for(appointments_read.value, request.professional_ref)
            return self._generator.generate(availability, self._clock(), request.week_offset, reserved)

        cache = self._reader.cache
        try:
            read = await cache.fetch(cache.slots_key(request.professional_ref, request.week_offset), build_week)
        except DomainException as e:
            logger.warning(f"Failed to get slots: {e.code} - {e.message}")
            return WeekSlotsResult.from_exception(e)

        week = read.value
        return WeekSlotsResult.ok(
            data={"total_slots": len(week.all_slots())},
            week=week,
            stale=read.stale or stale,
        )
