# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for marking an appointment as realized.
# ============================================================================
"""Mark Appointment Realized Use Case.

Professional-only: a confirmed appointment becomes realized once attended.
"""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException, EntityNotFoundException

from ...domain.value_objects import AppointmentStatus, PartyRole
from ..dto import AppointmentResult, MarkAppointmentRealizedRequest

if TYPE_CHECKING:
    from ..ports import IAppointmentStore
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class MarkAppointmentRealizedUseCase:
    def __init__(self, appointment_store: "IAppointmentStore", reader: "SchedulingReader") -> None:
        self._store = appointment_store
        self._reader = reader

    async def execute(self, request: MarkAppointmentRealizedRequest) -> AppointmentResult:
        logger.info(f"Marking appointment {request.appointment_id} as realized")

        try:
            appointment = await self._reader.find_appointment(PartyRole.PROFESSIONAL, request.appointment_id)
            if appointment is None:
                raise EntityNotFoundException("Turno", request.appointment_id)
            appointment.assert_can_transition("mark_realized", AppointmentStatus.REALIZED)
        except DomainException as e:
            logger.warning(f"Cannot mark appointment {request.appointment_id} as realized: {e.code}")
            return AppointmentResult.from_exception(e)

        response = await self._store.marcar_turno_realizado(request.appointment_id)
        if not response.success:
            logger.warning(f"Failed to mark appointment realized: {response.error_code} - {response.error_message}")
            return AppointmentResult.error(
                response.error_code or "APPOINTMENT_ERROR",
                response.error_message or "Error al marcar el turno como realizado",
            )

        appointment.mark_realized()
        self._reader.cache.invalidate_after_booking_change(appointment.professional_ref)

        return AppointmentResult.ok(
            data={"appointment_id": request.appointment_id, "status": appointment.status.value},
            appointment=appointment,
        )
