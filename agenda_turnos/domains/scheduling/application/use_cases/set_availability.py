# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for saving a professional's weekly availability.
# ============================================================================
"""Set Availability Use Case."""

import logging
from typing import TYPE_CHECKING

from ...domain.services import AvailabilityValidator
from ..dto import SetAvailabilityRequest, SetAvailabilityResult
from ..utils import TurnosWireMapper

if TYPE_CHECKING:
    from ..ports import IAvailabilityStore
    from ..services.scheduling_cache import SchedulingCache

logger = logging.getLogger(__name__)


class SetAvailabilityUseCase:
    """Validates and saves the professional's availability.

    Invalid blocks are reported one by one and nothing is sent to the store.
    """

    def __init__(
        self,
        availability_store: "IAvailabilityStore",
        cache: "SchedulingCache",
        validator: AvailabilityValidator | None = None,
    ) -> None:
        self._store = availability_store
        self._cache = cache
        self._validator = validator or AvailabilityValidator()

    async def execute(self, request: SetAvailabilityRequest) -> SetAvailabilityResult:
        logger.info(f"Saving availability for professional {request.professional_ref}")

        validation = self._validator.validate(request.schedule, request.professional_ref)
        if not validation.is_valid:
            logger.info(f"Availability rejected: {len(validation.issues)} invalid blocks")
            return SetAvailabilityResult.error(
                "INVALID_AVAILABILITY",
                "Hay bloques horarios inválidos",
                {"issues": [issue.to_dict() for issue in validation.issues]},
                issues=validation.issues,
            )

        horarios = TurnosWireMapper.horarios_payload(validation.availability)
        response = await self._store.establecer_disponibilidad(horarios)

        if not response.success:
            logger.warning(f"Failed to save availability: {response.error_code} - {response.error_message}")
            return SetAvailabilityResult.error(
                response.error_code or "AVAILABILITY_ERROR",
                response.error_message or "Error al guardar la disponibilidad",
            )

        self._cache.invalidate_professional(request.professional_ref)
        logger.info(f"Availability saved: {validation.availability.block_count} blocks")

        return SetAvailabilityResult.ok(data=horarios, availability=validation.availability)
