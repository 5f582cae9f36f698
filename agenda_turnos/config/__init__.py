"""
Configuration Module

Engine configuration settings.
"""

from agenda_turnos.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
