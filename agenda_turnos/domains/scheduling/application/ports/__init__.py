# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Ports (interfaces) for the turnos backend.
# ============================================================================
"""Scheduling Application Ports.

Segregated Interfaces:
- IAvailabilityStore: Professional availability
- IAppointmentStore: Appointment CRUD
- IExpressNegotiator: Express appointment protocol
- IPaymentStore: Payment status

Combined Interface:
- ITurnosBackend: All of the above
"""

from .appointment_port import IAppointmentStore
from .availability_port import IAvailabilityStore
from .express_port import IExpressNegotiator
from .payment_port import IPaymentStore
from .response import ExternalResponse
from .turnos_backend import ITurnosBackend

__all__ = [
    # Response type
    "ExternalResponse",
    # Segregated interfaces (ISP)
    "IAvailabilityStore",
    "IAppointmentStore",
    "IExpressNegotiator",
    "IPaymentStore",
    # Combined interface
    "ITurnosBackend",
]
