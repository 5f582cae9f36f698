# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for rejecting an express request or proposal.
# ============================================================================
"""Reject Express Appointment Use Case.

Either party may reject while the negotiation is open. The backend records
the turno as ``cancelado``; no payment is created.
"""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException, EntityNotFoundException

from ...domain.entities import ExpressRequest
from ..dto import ExpressRequestResult, RejectExpressAppointmentRequest

if TYPE_CHECKING:
    from ..ports import IAppointmentStore
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class RejectExpressAppointmentUseCase:
    def __init__(self, appointment_store: "IAppointmentStore", reader: "SchedulingReader") -> None:
        self._store = appointment_store
        self._reader = reader

    async def execute(self, request: RejectExpressAppointmentRequest) -> ExpressRequestResult:
        logger.info(f"Rejecting express appointment {request.turno_id} ({request.requested_by.value})")

        try:
            appointment = await self._reader.find_appointment(request.requested_by, request.turno_id)
            if appointment is None or not appointment.is_express:
                raise EntityNotFoundException("Turno express", request.turno_id)

            express = ExpressRequest.from_appointment(appointment)
            express.assert_can_reject()
        except DomainException as e:
            logger.info(f"Cannot reject express appointment {request.turno_id}: {e.code}")
            return ExpressRequestResult.from_exception(e)

        response = await self._store.cancelar_turno(request.turno_id)
        if not response.success:
            logger.warning(f"Failed to reject express appointment: {response.error_code} - {response.error_message}")
            return ExpressRequestResult.error(
                response.error_code or "EXPRESS_ERROR",
                response.error_message or "Error al rechazar el turno express",
            )

        express.reject()
        for event in express.pull_domain_events():
            logger.debug(f"Express {event.turno_id}: {event.previous} -> {event.current}")
        self._reader.cache.invalidate_after_booking_change(express.professional_ref)

        return ExpressRequestResult.ok(data=response.data, request=express)
