# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use cases for listing the appointments of each party.
# ============================================================================
"""Get Appointments Use Cases.

Patient list order: confirmed, realized, cancelled, pending, then date/time.
Professional list order: date/time.
"""

import logging
from datetime import date, time
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException

from ...domain.entities import Appointment
from ...domain.value_objects import AppointmentStatus, PartyRole
from ..dto import AppointmentListResult, GetAppointmentsRequest

if TYPE_CHECKING:
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


def _filter(appointments: list[Appointment], request: GetAppointmentsRequest) -> list[Appointment]:
    result = appointments
    if request.professional_ref:
        result = [a for a in result if a.belongs_to_professional(request.professional_ref)]
    if not request.include_cancelled:
        result = [a for a in result if a.status != AppointmentStatus.CANCELLED]
    return result


class GetPatientAppointmentsUseCase:
    """Use case for the authenticated patient's appointments."""

    def __init__(self, reader: "SchedulingReader") -> None:
        self._reader = reader

    async def execute(self, request: GetAppointmentsRequest | None = None) -> AppointmentListResult:
        request = request or GetAppointmentsRequest()
        try:
            read = await self._reader.appointments(PartyRole.PATIENT)
        except DomainException as e:
            logger.warning(f"Failed to get patient appointments: {e.code} - {e.message}")
            return AppointmentListResult.from_exception(e)

        appointments = sorted(_filter(read.value, request), key=lambda a: a.list_sort_key())
        logger.info(f"Found {len(appointments)} patient appointments")
        return AppointmentListResult.ok(appointments=appointments, stale=read.stale)


class GetProfessionalAppointmentsUseCase:
    """Use case for every appointment of the authenticated professional."""

    def __init__(self, reader: "SchedulingReader") -> None:
        self._reader = reader

    async def execute(self, request: GetAppointmentsRequest | None = None) -> AppointmentListResult:
        request = request or GetAppointmentsRequest()
        try:
            read = await self._reader.appointments(PartyRole.PROFESSIONAL)
        except DomainException as e:
            logger.warning(f"Failed to get professional appointments: {e.code} - {e.message}")
            return AppointmentListResult.from_exception(e)

        appointments = sorted(
            _filter(read.value, request),
            key=lambda a: (a.appointment_date or date.max, a.start_time or time.max),
        )
        logger.info(f"Found {len(appointments)} professional appointments")
        return AppointmentListResult.ok(appointments=appointments, stale=read.stale)
