"""
Slot Generator

Projects a professional's weekly availability onto a rolling window of seven
calendar days, removing past and already-reserved time.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Protocol, runtime_checkable

from agenda_turnos.core.domain import ValidationException

from ..entities.weekly_availability import WeeklyAvailability
from ..value_objects.time_block import BookableSlot, DaySlots, ReservedSlot, TimeBlock, WeekSlots
from ..value_objects.weekday import Weekday

DAYS_PER_WINDOW = 7


@runtime_checkable
class SlotPolicy(Protocol):
    """Decides how an availability block is offered to patients."""

    def split(self, block: TimeBlock) -> list[TimeBlock]: ...


class WholeBlockPolicy:
    """Each availability block is offered as one bookable slot."""

    def split(self, block: TimeBlock) -> list[TimeBlock]:
        return [block]


def merge_blocks(blocks: Iterable[TimeBlock]) -> list[TimeBlock]:
    """Sort by start and merge overlapping blocks.

    Exact duplicates collapse into one. Touching blocks (08-09, 09-10) stay separate.
    """
    merged: list[TimeBlock] = []
    for block in sorted(blocks, key=lambda b: (b.start, b.end)):
        if merged and merged[-1].overlaps(block):
            merged[-1] = merged[-1].merge(block)
        else:
            merged.append(block)
    return merged


class SlotGenerator:
    """
    Generates bookable slots for a week window.

    Pure function of its inputs: the caller passes ``now`` explicitly.

    Example:
        ```python
        generator = SlotGenerator()
        week = generator.generate(availability, now=datetime.now(), week_offset=0)
        for day in week.days:
            print(day.date, [str(s.start) for s in day.slots])
        ```
    """

    def __init__(self, policy: SlotPolicy | None = None):
        self._policy = policy or WholeBlockPolicy()

    @staticmethod
    def window_dates(today: date, week_offset: int) -> list[date]:
        """The 7 consecutive dates starting at ``today + 7 * week_offset``."""
        if week_offset < 0:
            raise ValidationException("No se puede navegar a semanas anteriores", field="week_offset")
        first = today + timedelta(days=week_offset * DAYS_PER_WINDOW)
        return [first + timedelta(days=i) for i in range(DAYS_PER_WINDOW)]

    def generate(
        self,
        availability: WeeklyAvailability,
        now: datetime,
        week_offset: int = 0,
        reserved: Iterable[ReservedSlot] = (),
    ) -> WeekSlots:
        """
        Build the week of slots.

        Args:
            availability: Professional's weekly availability
            now: Current local date/time
            week_offset: 0 for the current window, 1 for the next, ...
            reserved: Slots already taken; a piece overlapping any of them
                on its date is dropped, also after merging overlaps

        Returns:
            WeekSlots with one DaySlots per date

        Raises:
            ValidationException: If week_offset is negative
        """
        today = now.date()
        dates = self.window_dates(today, week_offset)
        reserved_slots = list(reserved)
        now_minute = now.time().replace(second=0, microsecond=0)

        days = []
        for day in dates:
            weekday = Weekday.from_date(day)
            if day < today:
                days.append(DaySlots(date=day, weekday=weekday, is_past=True))
                continue

            slots = []
            for block in merge_blocks(availability.blocks_for(weekday)):
                for piece in self._policy.split(block):
                    if day == today and piece.start <= now_minute:
                        continue
                    if any(slot.collides_with(day, piece) for slot in reserved_slots):
                        continue
                    slots.append(BookableSlot(date=day, start=piece.start, end=piece.end))

            days.append(DaySlots(date=day, weekday=weekday, slots=tuple(slots)))

        return WeekSlots(week_offset=week_offset, days=tuple(days))

    def slots_for_date(
        self,
        availability: WeeklyAvailability,
        target: date,
        now: datetime,
        reserved: Iterable[ReservedSlot] = (),
    ) -> DaySlots:
        """Slots of a single date (uses the window that contains it)."""
        today = now.date()
        if target < today:
            return DaySlots(date=target, weekday=Weekday.from_date(target), is_past=True)
        offset = (target - today).days // DAYS_PER_WINDOW
        week = self.generate(availability, now, offset, reserved)
        day = week.for_date(target)
        if day is None:
            raise ValidationException(f"Fecha fuera de la ventana: {target.isoformat()}", field="date")
        return day
