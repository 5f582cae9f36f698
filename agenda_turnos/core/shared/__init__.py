"""
Shared Utilities

Cross-cutting helpers used by every layer: logging and in-memory caching.
"""

from agenda_turnos.core.shared.cache import CacheEntry, CacheStats, MemoryCache
from agenda_turnos.core.shared.logger import (
    ColoredFormatter,
    ContextLogger,
    JSONFormatter,
    configure_logging,
    get_client_logger,
    get_service_logger,
)

__all__ = [
    # Cache
    "MemoryCache",
    "CacheEntry",
    "CacheStats",
    # Logging
    "configure_logging",
    "get_service_logger",
    "get_client_logger",
    "ContextLogger",
    "JSONFormatter",
    "ColoredFormatter",
]
