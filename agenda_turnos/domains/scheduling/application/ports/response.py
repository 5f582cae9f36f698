# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Result type shared by every turnos backend port.
# ============================================================================
"""External Response Type.

Ports never raise for remote failures; they hand back an ExternalResponse and
the use case decides what the failure means.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ExternalResponse:
    """Outcome of one backend call.

    Error codes are the engine's stable codes (SLOT_UNAVAILABLE, NOT_FOUND,
    REMOTE_UNAVAILABLE, REMOTE_REJECTED, ...). ``error_message`` carries the
    backend's ``message`` verbatim when it sent one.
    """

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, data: dict[str, Any] | list[Any] | None = None) -> "ExternalResponse":
        return cls(success=True, data=data)

    @classmethod
    def error(cls, code: str, message: str) -> "ExternalResponse":
        return cls(success=False, error_code=code, error_message=message)
