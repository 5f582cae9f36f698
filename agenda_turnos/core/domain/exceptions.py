"""
Domain Exceptions for Domain-Driven Design

These exceptions represent business rule violations and domain-specific errors.
Use cases catch them and translate them into UseCaseResult error codes.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "SLOT_UNAVAILABLE")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when domain validation fails.

    Use for invalid entity states, value object creation failures, etc.
    """

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class EntityNotFoundException(DomainException):
    """
    Raised when an entity is not found.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} with ID {entity_id} not found"
        super().__init__(
            msg,
            "NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InvalidTransitionException(DomainException):
    """Raised when a state machine transition is not allowed from the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None):
        self.operation = operation
        self.current_state = current_state
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(
            msg,
            "INVALID_TRANSITION",
            {"operation": operation, "current_state": current_state},
        )


class InvalidRangeException(DomainException):
    """Raised when a time range has start >= end."""

    def __init__(self, start: str, end: str, message: str | None = None):
        self.start = start
        self.end = end
        super().__init__(
            message or f"La hora de inicio ({start}) debe ser menor a la hora de fin ({end})",
            "INVALID_RANGE",
            {"start": start, "end": end},
        )


class PastDateException(DomainException):
    """Raised when a date (or a time on the current day) is already in the past."""

    def __init__(self, date_value: str, time_value: str | None = None):
        self.date_value = date_value
        self.time_value = time_value
        details: dict[str, Any] = {"date": date_value}
        if time_value is None:
            code = "PAST_DATE"
            msg = f"La fecha {date_value} ya pasó"
        else:
            code = "PAST_TIME"
            msg = f"El horario {time_value} del {date_value} ya pasó"
            details["time"] = time_value
        super().__init__(msg, code, details)


class SlotUnavailableException(DomainException):
    """Raised when there's a scheduling conflict (local check or remote rejection)."""

    def __init__(
        self,
        professional_ref: str | None = None,
        time_slot: str | None = None,
        message: str | None = None,
    ):
        self.professional_ref = professional_ref
        self.time_slot = time_slot
        msg = message or "El horario seleccionado ya no está disponible"
        details: dict[str, Any] = {}
        if professional_ref:
            details["professional_ref"] = professional_ref
        if time_slot:
            details["time_slot"] = time_slot
        super().__init__(msg, "SLOT_UNAVAILABLE", details)


class InvalidProposalWindowException(DomainException):
    """Raised when an express proposal falls outside the allowed window or is malformed."""

    def __init__(self, reason: str, message: str):
        self.reason = reason
        super().__init__(message, "INVALID_PROPOSAL_WINDOW", {"reason": reason})


class IntegrationException(DomainException):
    """Raised when an external integration fails."""

    def __init__(self, service: str, message: str, code: str = "INTEGRATION_ERROR"):
        self.service = service
        super().__init__(message, code, {"service": service})


class RemoteUnavailableException(IntegrationException):
    """Raised when the remote store cannot be reached (network, timeout, 5xx, open circuit)."""

    def __init__(self, service: str, message: str | None = None):
        super().__init__(
            service,
            message or "El servicio no está disponible temporalmente. Intente nuevamente.",
            "REMOTE_UNAVAILABLE",
        )
