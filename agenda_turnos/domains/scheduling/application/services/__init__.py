# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Application services for the scheduling domain.
# ============================================================================
"""Application Services.

Contains the query cache, the cached reader shared by the use cases and the
AgendaService facade.
"""

from .agenda_service import AgendaService, create_agenda_service
from .scheduling_cache import CacheRead, SchedulingCache
from .scheduling_reader import SchedulingReader, ensure_success

__all__ = [
    "AgendaService",
    "create_agenda_service",
    "CacheRead",
    "SchedulingCache",
    "SchedulingReader",
    "ensure_success",
]
