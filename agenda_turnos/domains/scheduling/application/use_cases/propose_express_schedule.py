# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for the professional proposing an express schedule.
# ============================================================================
"""Propose Express Schedule Use Case.

The proposal is validated before anything is read from or sent to the
backend. The turno stays ``pendiente`` remotely; only ``expressAceptado``
changes.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from agenda_turnos.core.domain import DomainException, EntityNotFoundException

from ...domain.entities import ExpressRequest
from ...domain.services import ExpressProposalPolicy
from ...domain.value_objects import PartyRole, format_request_date, format_time_of_day
from ..dto import ExpressRequestResult, ProposeExpressScheduleRequest

if TYPE_CHECKING:
    from ..ports import IExpressNegotiator
    from ..services.scheduling_reader import SchedulingReader

logger = logging.getLogger(__name__)


class ProposeExpressScheduleUseCase:
    """Use case for moving an express request from Requested to Proposed."""

    def __init__(
        self,
        negotiator: "IExpressNegotiator",
        reader: "SchedulingReader",
        policy: ExpressProposalPolicy | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._negotiator = negotiator
        self._reader = reader
        self._policy = policy or ExpressProposalPolicy()
        self._clock = clock or datetime.now

    async def execute(self, request: ProposeExpressScheduleRequest) -> ExpressRequestResult:
        logger.info(f"Proposing schedule for express request {request.turno_id}")

        try:
            proposal = self._policy.validate(
                request.turno_id,
                request.proposed_date,
                request.start,
                request.end,
                today=self._clock().date(),
            )

            appointment = await self._reader.find_appointment(PartyRole.PROFESSIONAL, request.turno_id)
            if appointment is None or not appointment.is_express:
                raise EntityNotFoundException("Turno express", request.turno_id)

            express = ExpressRequest.from_appointment(appointment)
            express.assert_can_propose()
        except DomainException as e:
            logger.info(f"Proposal for {request.turno_id} rejected: {e.code}")
            return ExpressRequestResult.from_exception(e)

        response = await self._negotiator.aceptar_turno_express(
            turno_id=proposal.turno_id,
            fecha=format_request_date(proposal.date),
            inicio=format_time_of_day(proposal.start),
            fin=format_time_of_day(proposal.end),
            token=express.token,
        )
        if not response.success:
            logger.warning(f"Failed to propose express schedule: {response.error_code} - {response.error_message}")
            return ExpressRequestResult.error(
                response.error_code or "EXPRESS_ERROR",
                response.error_message or "Error al aceptar el turno express",
            )

        express.propose(proposal)
        for event in express.pull_domain_events():
            logger.debug(f"Express {event.turno_id}: {event.previous} -> {event.current}")
        self._reader.cache.invalidate_after_booking_change(express.professional_ref)

        logger.info(f"Express request {request.turno_id} proposed for {proposal}")
        return ExpressRequestResult.ok(data=response.data, request=express)
