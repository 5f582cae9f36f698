# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Appointment store port (ISP compliant).
# ============================================================================
"""Appointment Store Port.

Defines the interface for appointment-related operations.
Part of the segregated interface design (ISP).
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .response import ExternalResponse


@runtime_checkable
class IAppointmentStore(Protocol):
    """Interface for appointment operations.

    The authenticated party is resolved by the backend from the bearer token.
    Dates are sent as YYYY-MM-DD and times as HH:MM.
    """

    async def obtener_turnos_paciente(self) -> "ExternalResponse":
        """Get the authenticated patient's appointments.

        Returns:
            ExternalResponse with ``{"turnos": [...]}``.
        """
        ...

    async def obtener_turnos_profesional(self) -> "ExternalResponse":
        """Get every appointment of the authenticated professional.

        Returns:
            ExternalResponse with ``{"turnos": [...]}``.
        """
        ...

    async def crear_turno(
        self,
        email_profesional: str,
        fecha: str,
        hora_inicio: str,
        hora_fin: str,
        estado: str = "confirmado",
        tipo: str = "consulta",
    ) -> "ExternalResponse":
        """Create a new appointment.

        Args:
            email_profesional: Professional's email.
            fecha: Date (YYYY-MM-DD).
            hora_inicio: Start (HH:MM).
            hora_fin: End (HH:MM).
            estado: Initial status.
            tipo: Appointment kind.

        Returns:
            ExternalResponse with ``{"turnoid": ...}`` or error
            (SLOT_UNAVAILABLE when the backend reports a conflict).
        """
        ...

    async def cancelar_turno(self, turno_id: str) -> "ExternalResponse":
        """Cancel an appointment.

        Args:
            turno_id: Appointment ID.

        Returns:
            ExternalResponse with success or error.
        """
        ...

    async def marcar_turno_realizado(self, turno_id: str) -> "ExternalResponse":
        """Mark a confirmed appointment as realized (professional only).

        Args:
            turno_id: Appointment ID.

        Returns:
            ExternalResponse with success or error.
        """
        ...
