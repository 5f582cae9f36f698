"""Time block and slot value objects."""

from dataclasses import dataclass, field
from datetime import date, datetime, time

from agenda_turnos.core.domain import InvalidRangeException, ValueObject

from .schedule_format import format_time_of_day
from .weekday import Weekday


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True)
class TimeBlock(ValueObject):
    """Half-open interval of time within a single day (start < end)."""

    start: time
    end: time

    def _validate(self) -> None:
        if self.start >= self.end:
            raise InvalidRangeException(format_time_of_day(self.start), format_time_of_day(self.end))

    @property
    def duration_minutes(self) -> int:
        return _minutes(self.end) - _minutes(self.start)

    def overlaps(self, other: "TimeBlock") -> bool:
        """True when both blocks share any instant (touching ends do not overlap)."""
        return self.start < other.end and self.end > other.start

    def merge(self, other: "TimeBlock") -> "TimeBlock":
        """Smallest block covering both."""
        return TimeBlock(start=min(self.start, other.start), end=max(self.end, other.end))

    def __str__(self) -> str:
        return f"{format_time_of_day(self.start)}-{format_time_of_day(self.end)}"


@dataclass(frozen=True)
class BookableSlot:
    """A block the patient can book on a concrete date."""

    date: date
    start: time
    end: time

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, self.start)


@dataclass(frozen=True)
class ReservedSlot:
    """A (date, start, end) already taken by an active appointment."""

    date: date
    start: time
    end: time | None = None

    def collides_with(self, on: date, block: TimeBlock) -> bool:
        """True when this reservation takes any part of ``block`` on ``on``.

        Without a usable end only the start instant counts.
        """
        if self.date != on:
            return False
        if self.end is None or self.end <= self.start:
            return block.start <= self.start < block.end
        return self.start < block.end and self.end > block.start


@dataclass(frozen=True)
class DaySlots:
    """Bookable slots of one calendar day."""

    date: date
    weekday: Weekday
    is_past: bool = False
    slots: tuple[BookableSlot, ...] = field(default_factory=tuple)

    @property
    def has_slots(self) -> bool:
        return bool(self.slots)


@dataclass(frozen=True)
class WeekSlots:
    """Seven rolling days of bookable slots starting at ``today + 7 * week_offset``."""

    week_offset: int
    days: tuple[DaySlots, ...] = field(default_factory=tuple)

    @property
    def can_go_back(self) -> bool:
        return self.week_offset > 0

    def for_date(self, value: date) -> DaySlots | None:
        for day in self.days:
            if day.date == value:
                return day
        return None

    def all_slots(self) -> list[BookableSlot]:
        return [slot for day in self.days for slot in day.slots]
