# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Scheduling)
# Description: Turnos REST API client module.
# ============================================================================
"""Turnos API Client Module.

Components:
- TurnosApiClient: Main client implementing ITurnosBackend
- EndpointRegistry: Extensible endpoint configuration (OCP)
- CircuitBreaker: Resilience pattern for backend failures

Usage:
    from agenda_turnos.domains.scheduling.infrastructure.external.turnos_api import (
        TurnosApiClient,
    )

    client = TurnosApiClient(base_url="http://localhost:3000", token_provider=lambda: token)
    result = await client.obtener_turnos_paciente()
"""

from .client import TurnosApiClient
from .endpoint_registry import EndpointConfig, EndpointRegistry, create_default_registry, get_default_registry
from .resilience import CircuitBreaker, CircuitBreakerConfig, CircuitOpenError, CircuitState

__all__ = [
    "TurnosApiClient",
    "EndpointRegistry",
    "EndpointConfig",
    "create_default_registry",
    "get_default_registry",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitOpenError",
    "CircuitState",
]
