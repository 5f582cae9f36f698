"""External integrations for the Scheduling domain."""

from .turnos_api import TurnosApiClient

__all__ = ["TurnosApiClient"]
