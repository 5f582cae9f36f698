# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Utility classes for response extraction and wire mapping
# ============================================================================
"""Application utilities for the Scheduling domain.

- Response extraction from ExternalResponse objects
- Mapping between backend payloads and domain objects
"""

from .response_extractor import ResponseExtractor
from .wire_mapper import TurnosWireMapper
from .wire_models import AvailabilityRow, PagoRow, TurnoRow

__all__ = [
    "ResponseExtractor",
    "TurnosWireMapper",
    "AvailabilityRow",
    "TurnoRow",
    "PagoRow",
]
