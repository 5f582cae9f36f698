# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for cancelling an appointment.
# ============================================================================
"""Cancel Appointment Use Case."""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException, EntityNotFoundException

from ...domain.value_objects import AppointmentStatus
from ..dto import AppointmentResult, CancelAppointmentRequest

if TYPE_CHECKING:
    from ..ports import IAppointmentStore
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class CancelAppointmentUseCase:
    """Use case for cancelling an appointment.

    The appointment is looked up in the requesting party's own list, so a
    party can only cancel appointments it takes part in.
    """

    def __init__(self, appointment_store: "IAppointmentStore", reader: "SchedulingReader") -> None:
        self._store = appointment_store
        self._reader = reader

    async def execute(self, request: CancelAppointmentRequest) -> AppointmentResult:
        logger.info(f"Cancelling appointment {request.appointment_id} ({request.requested_by.value})")

        try:
            appointment = await self._reader.find_appointment(request.requested_by, request.appointment_id)
            if appointment is None:
                raise EntityNotFoundException("Turno", request.appointment_id)
            appointment.assert_can_transition("cancel", AppointmentStatus.CANCELLED)
        except DomainException as e:
            logger.warning(f"Cannot cancel appointment {request.appointment_id}: {e.code}")
            return AppointmentResult.from_exception(e)

        response = await self._store.cancelar_turno(request.appointment_id)
        if not response.success:
            logger.warning(f"Failed to cancel appointment: {response.error_code} - {response.error_message}")
            return AppointmentResult.error(
                response.error_code or "CANCELLATION_ERROR",
                response.error_message or "Error al cancelar el turno",
            )

        appointment.cancel()
        self._reader.cache.invalidate_after_booking_change(appointment.professional_ref)

        logger.info(f"Appointment {request.appointment_id} cancelled successfully")
        return AppointmentResult.ok(
            data={"appointment_id": request.appointment_id, "status": appointment.status.value},
            appointment=appointment,
        )
