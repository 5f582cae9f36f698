# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Payment store port (ISP compliant).
# ============================================================================
"""Payment Store Port."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .response import ExternalResponse


@runtime_checkable
class IPaymentStore(Protocol):
    """Interface for payment status operations."""

    async def obtener_pagos_paciente(self) -> "ExternalResponse":
        """Get the authenticated patient's payments (``{"pagos": [...]}`` or a raw list)."""
        ...

    async def obtener_pagos_profesional(self) -> "ExternalResponse":
        """Get the authenticated professional's payments."""
        ...

    async def pagar_turno(self, turno_id: str) -> "ExternalResponse":
        """Mark the payment of an appointment as paid."""
        ...
