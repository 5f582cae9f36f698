# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for a patient requesting an express appointment.
# ============================================================================
"""Request Express Appointment Use Case.

The patient only picks the professional; date and time come later in the
professional's proposal, so no slot validation happens here.
"""

import logging
from typing import TYPE_CHECKING

from ...domain.entities import ExpressRequest
from ...domain.value_objects import PartyRole, Requested
from ..dto import ExpressRequestResult, RequestExpressAppointmentRequest
from ..utils import TurnosWireMapper

if TYPE_CHECKING:
    from ..ports import IExpressNegotiator
    from ..services.scheduling_cache import SchedulingCache

logger = logging.getLogger(__name__)


class RequestExpressAppointmentUseCase:
    """Use case for creating an express request in the Requested state."""

    def __init__(self, negotiator: "IExpressNegotiator", cache: "SchedulingCache") -> None:
        self._negotiator = negotiator
        self._cache = cache

    async def execute(self, request: RequestExpressAppointmentRequest) -> ExpressRequestResult:
        logger.info(f"Requesting express appointment with {request.professional_ref}")

        response = await self._negotiator.solicitar_turno_express(request.professional_ref)
        if not response.success:
            logger.warning(f"Failed to request express appointment: {response.error_code} - {response.error_message}")
            return ExpressRequestResult.error(
                response.error_code or "EXPRESS_ERROR",
                response.error_message or "Error al solicitar el turno express",
            )

        express = ExpressRequest(
            id=TurnosWireMapper.created_appointment_id(response.data) or None,
            professional_ref=request.professional_ref,
            state=Requested(),
        )
        self._cache.invalidate_prefix("appointments:")
        self._cache.invalidate(self._cache.express_key(PartyRole.PROFESSIONAL))

        logger.info(f"Express request {express.id} created")
        return ExpressRequestResult.ok(data=response.data, request=express)
