"""
Scheduling Domain

Weekly availability, bookable slots, appointments, the express negotiation
protocol and payment status overlay.

Usage:
    from agenda_turnos.domains.scheduling import AgendaService, create_agenda_service
"""

from agenda_turnos.domains.scheduling.application.services.agenda_service import (
    AgendaService,
    create_agenda_service,
)

__all__ = ["AgendaService", "create_agenda_service"]
