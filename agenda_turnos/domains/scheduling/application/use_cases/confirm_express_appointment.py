# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for the patient confirming an express proposal.
# ============================================================================
"""Confirm Express Appointment Use Case.

Confirming books the appointment at the proposed schedule and leaves a
pending payment for the professional's express rate.
"""

import logging
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException, EntityNotFoundException

from ...domain.entities import ExpressRequest, PaymentRecord
from ...domain.value_objects import PartyRole
from ..dto import ConfirmExpressAppointmentRequest, ConfirmExpressResult
from ..utils import TurnosWireMapper

if TYPE_CHECKING:
    from ..ports import IExpressNegotiator
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class ConfirmExpressAppointmentUseCase:
    """Use case for moving an express request from Proposed to Confirmed.

    Confirming twice fails with INVALID_TRANSITION without reaching the store.
    """

    def __init__(self, negotiator: "IExpressNegotiator", reader: "SchedulingReader", currency: str = "ARS") -> None:
        self._negotiator = negotiator
        self._reader = reader
        self._currency = currency

    async def execute(self, request: ConfirmExpressAppointmentRequest) -> ConfirmExpressResult:
        logger.info(f"Confirming express appointment {request.turno_id}")

        try:
            appointment = await self._reader.find_appointment(PartyRole.PATIENT, request.turno_id)
            if appointment is None or not appointment.is_express:
                raise EntityNotFoundException("Turno express", request.turno_id)

            express = ExpressRequest.from_appointment(appointment)
            express.assert_can_confirm()
        except DomainException as e:
            logger.info(f"Cannot confirm express appointment {request.turno_id}: {e.code}")
            return ConfirmExpressResult.from_exception(e)

        response = await self._negotiator.confirmar_turno_express(request.turno_id)
        if not response.success:
            logger.warning(f"Failed to confirm express appointment: {response.error_code} - {response.error_message}")
            return ConfirmExpressResult.error(
                response.error_code or "EXPRESS_ERROR",
                response.error_message or "Error al confirmar el turno express",
            )

        booked = express.confirm(TurnosWireMapper.cost_from_response(response.data, self._currency))
        for event in express.pull_domain_events():
            logger.debug(f"Express {event.turno_id}: {event.previous} -> {event.current}")
        payment = PaymentRecord.pending_for(str(booked.id), booked.cost)

        cache = self._reader.cache
        cache.invalidate_after_booking_change(booked.professional_ref)
        cache.invalidate_payments()

        logger.info(f"Express appointment {request.turno_id} confirmed ({booked.cost or 'sin costo'})")
        return ConfirmExpressResult.ok(data=response.data, request=express, appointment=booked, payment=payment)
