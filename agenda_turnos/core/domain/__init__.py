"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from agenda_turnos.core.domain.entities import AggregateRoot, Entity
from agenda_turnos.core.domain.exceptions import (
    DomainException,
    EntityNotFoundException,
    IntegrationException,
    InvalidProposalWindowException,
    InvalidRangeException,
    InvalidTransitionException,
    PastDateException,
    RemoteUnavailableException,
    SlotUnavailableException,
    ValidationException,
)
from agenda_turnos.core.domain.value_objects import Money, ValueObject

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    # Value Objects
    "ValueObject",
    "Money",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "InvalidTransitionException",
    "InvalidRangeException",
    "PastDateException",
    "SlotUnavailableException",
    "InvalidProposalWindowException",
    "IntegrationException",
    "RemoteUnavailableException",
]
