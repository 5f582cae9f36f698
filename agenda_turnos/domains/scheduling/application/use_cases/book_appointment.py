# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for booking a new appointment.
# ============================================================================
"""Book Appointment Use Case.

Validates the requested slot locally, then creates the appointment in the
backend. The local checks only spare a round trip: the backend decides
conflicts, and when it reports one the result carries refreshed slots.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import (
    DomainException,
    PastDateException,
    SlotUnavailableException,
)

from ...domain.entities import Appointment
from ...domain.services import ReservationConflictFilter
from ...domain.value_objects import (
    AppointmentStatus,
    PartyRole,
    TimeBlock,
    format_request_date,
    format_time_of_day,
)
from ..dto import BookAppointmentRequest, BookAppointmentResult, GetWeekSlotsRequest
from ..utils import TurnosWireMapper

if TYPE_CHECKING:
    from ..ports import IAppointmentStore
    from ..services.scheduling_reader import SchedulingReader
    from .get_week_slots import GetWeekSlotsUseCase

logger = logging.getLogger(__name__)


class BookAppointmentUseCase:
    """Use case for booking a new appointment."""

    def __init__(
        self,
        appointment_store: "IAppointmentStore",
        reader: "SchedulingReader",
        week_slots: "GetWeekSlotsUseCase",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize use case.

        Args:
            appointment_store: Appointment store interface (DIP).
            reader: Cached reads of availability and appointments.
            week_slots: Used to refresh the slots after a conflict.
            clock: Current local time provider.
        """
        self._store = appointment_store
        self._reader = reader
        self._week_slots = week_slots
        self._clock = clock or datetime.now

    async def execute(self, request: BookAppointmentRequest) -> BookAppointmentResult:
        """Execute the book appointment use case.

        Returns:
            BookAppointmentResult with the created appointment or error
            (INVALID_RANGE, PAST_DATE, PAST_TIME, SLOT_UNAVAILABLE, remote codes).
        """
        logger.info(
            f"Booking appointment with {request.professional_ref} on {request.appointment_date} "
            f"{format_time_of_day(request.start_time)}"
        )

        try:
            block = TimeBlock(start=request.start_time, end=request.end_time)
            self._check_not_past(request)

            appointments = await self._reader.appointments(PartyRole.PATIENT)
            reserved = ReservationConflictFilter.reserved_for(appointments.value, request.professional_ref)
            if ReservationConflictFilter.conflicts(reserved, request.appointment_date, block):
                raise SlotUnavailableException(
                    request.professional_ref,
                    f"{request.appointment_date.isoformat()} {block}",
                    "Ya tenés un turno reservado en ese horario",
                )
        except DomainException as e:
            logger.info(f"Booking rejected locally: {e.code}")
            return BookAppointmentResult.from_exception(e)

        response = await self._store.crear_turno(
            email_profesional=request.professional_ref,
            fecha=format_request_date(request.appointment_date),
            hora_inicio=format_time_of_day(block.start),
            hora_fin=format_time_of_day(block.end),
            estado=AppointmentStatus.CONFIRMED.wire_value,
            tipo=request.kind.value,
        )

        if not response.success:
            logger.warning(f"Failed to book appointment: {response.error_code} - {response.error_message}")
            if response.error_code == "SLOT_UNAVAILABLE":
                return await self._conflict_result(request, response.error_message)
            return BookAppointmentResult.error(
                response.error_code or "BOOKING_ERROR",
                response.error_message or "Error al crear el turno",
            )

        appointment = Appointment(
            id=TurnosWireMapper.created_appointment_id(response.data) or None,
            professional_ref=request.professional_ref,
            appointment_date=request.appointment_date,
            start_time=block.start,
            end_time=block.end,
            kind=request.kind,
            status=AppointmentStatus.CONFIRMED,
        )
        self._reader.cache.invalidate_after_booking_change(request.professional_ref)

        logger.info(f"Appointment booked successfully: {appointment.id}")
        return BookAppointmentResult.ok(data=response.data, appointment=appointment)

    def _check_not_past(self, request: BookAppointmentRequest) -> None:
        now = self._clock()
        today = now.date()
        if request.appointment_date < today:
            raise PastDateException(request.appointment_date.isoformat())
        if request.appointment_date == today and request.start_time <= now.time().replace(second=0, microsecond=0):
            raise PastDateException(request.appointment_date.isoformat(), format_time_of_day(request.start_time))

    async def _conflict_result(self, request: BookAppointmentRequest, message: str | None) -> BookAppointmentResult:
        """SLOT_UNAVAILABLE with the refreshed week containing the requested date."""
        self._reader.cache.invalidate_after_booking_change(request.professional_ref)
        offset = max((request.appointment_date - self._clock().date()).days // 7, 0)
        refreshed = await self._week_slots.execute(GetWeekSlotsRequest(request.professional_ref, offset))

        exc = SlotUnavailableException(
            request.professional_ref,
            f"{request.appointment_date.isoformat()} {format_time_of_day(request.start_time)}",
            message,
        )
        return BookAppointmentResult.from_exception(exc, available_slots=refreshed.week)
