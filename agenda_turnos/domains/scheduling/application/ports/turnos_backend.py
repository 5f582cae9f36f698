# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Turnos backend port - Combined interface.
# ============================================================================
"""Turnos Backend Port.

Combined interface for clients that implement every scheduling port.
"""

from typing import Protocol, runtime_checkable

from .appointment_port import IAppointmentStore
from .availability_port import IAvailabilityStore
from .express_port import IExpressNegotiator
from .payment_port import IPaymentStore


@runtime_checkable
class ITurnosBackend(
    IAvailabilityStore,
    IAppointmentStore,
    IExpressNegotiator,
    IPaymentStore,
    Protocol,
):
    """Combined interface for turnos backend clients.

    Implementations: TurnosApiClient

    Use segregated interfaces when only a subset of functionality is needed.
    """

    async def close(self) -> None:
        """Close connections and release resources."""
        ...
