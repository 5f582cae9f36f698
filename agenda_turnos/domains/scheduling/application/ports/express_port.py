# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Express negotiation port (ISP compliant).
# ============================================================================
"""Express Negotiator Port.

Defines the interface for the express appointment protocol.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .response import ExternalResponse


@runtime_checkable
class IExpressNegotiator(Protocol):
    """Interface for express appointment operations."""

    async def solicitar_turno_express(self, email_profesional: str) -> "ExternalResponse":
        """Patient asks a professional for an express appointment.

        Returns:
            ExternalResponse with ``{"turnoId": ...}``.
        """
        ...

    async def aceptar_turno_express(
        self,
        turno_id: str,
        fecha: str,
        inicio: str,
        fin: str,
        token: str | None = None,
    ) -> "ExternalResponse":
        """Professional proposes a schedule for an express request.

        Args:
            turno_id: Express appointment ID.
            fecha: Proposed date (YYYY-MM-DD).
            inicio: Proposed start (HH:MM).
            fin: Proposed end (HH:MM).
            token: Express token of the turno (sent to the professional by email).

        Returns:
            ExternalResponse with success or error.
        """
        ...

    async def confirmar_turno_express(self, turno_id: str) -> "ExternalResponse":
        """Patient accepts the proposed schedule.

        The backend books the appointment and creates a pending payment.

        Returns:
            ExternalResponse with success or error (may include ``costo``).
        """
        ...
