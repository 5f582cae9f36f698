# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Professional availability port (ISP compliant).
# ============================================================================
"""Availability Store Port.

Defines the interface for reading and saving a professional's weekly availability.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .response import ExternalResponse


@runtime_checkable
class IAvailabilityStore(Protocol):
    """Interface for professional availability operations.

    Implementations: TurnosApiClient
    """

    async def obtener_disponibilidad(self, email_profesional: str) -> "ExternalResponse":
        """Get the weekly availability rows of a professional.

        Args:
            email_profesional: Professional's email.

        Returns:
            ExternalResponse with ``{"disponibilidad": [{dia_semana, hora_inicio, hora_fin}]}``.
        """
        ...

    async def establecer_disponibilidad(self, horarios: dict[str, list[dict[str, str]]]) -> "ExternalResponse":
        """Replace the authenticated professional's availability.

        Args:
            horarios: ``{"lunes": [{"inicio": "08:00", "fin": "09:00"}], ...}``.

        Returns:
            ExternalResponse with success or error.
        """
        ...
