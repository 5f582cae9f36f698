"""
Base Entity Classes

Identity is the backend id (turno id, professional email). Two entities with
the same non-empty id are the same entity, whatever their other fields say.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

TId = TypeVar("TId")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class Entity(ABC, Generic[TId]):
    """
    Identity-bearing domain object.

    Example:
        ```python
        @dataclass
        class PaymentRecord(Entity[str]):
            status: PaymentStatus = PaymentStatus.PENDING
        ```
    """

    id: TId | None = field(default=None)
    updated_at: datetime = field(default_factory=_utcnow, compare=False)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self) or self.id is None:
            return False
        return self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id)) if self.id is not None else id(self)

    def touch(self) -> None:
        """Mark the entity as modified."""
        self.updated_at = _utcnow()


@dataclass
class AggregateRoot(Entity[TId], Generic[TId]):
    """Entity that records domain events for its own state changes."""

    _domain_events: list[Any] = field(default_factory=list, repr=False, compare=False)

    def _record_event(self, event: Any) -> None:
        self._domain_events.append(event)

    def get_domain_events(self) -> list[Any]:
        return list(self._domain_events)

    def pull_domain_events(self) -> list[Any]:
        """Return the recorded events and forget them."""
        events, self._domain_events = self._domain_events, []
        return events
