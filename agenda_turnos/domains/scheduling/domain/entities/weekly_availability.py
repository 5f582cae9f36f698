"""Weekly Availability Entity.

Recurring availability of a professional: ordered time blocks per weekday.
"""

from dataclasses import dataclass, field

from agenda_turnos.core.domain import Entity

from ..value_objects.availability_record import AvailabilityRecord
from ..value_objects.schedule_format import format_time_of_day
from ..value_objects.time_block import TimeBlock
from ..value_objects.weekday import Weekday


@dataclass
class WeeklyAvailability(Entity[str]):
    """Disponibilidad semanal de un profesional.

    Blocks keep their insertion order. Weekdays without blocks are not stored.
    """

    professional_ref: str | None = None
    blocks: dict[Weekday, list[TimeBlock]] = field(default_factory=dict)

    def add_block(self, weekday: Weekday, block: TimeBlock) -> None:
        self.blocks.setdefault(weekday, []).append(block)

    def blocks_for(self, weekday: Weekday) -> list[TimeBlock]:
        return list(self.blocks.get(weekday, []))

    def weekdays(self) -> list[Weekday]:
        """Weekdays with at least one block, Monday first."""
        return [day for day in Weekday.ordered() if self.blocks.get(day)]

    @property
    def is_empty(self) -> bool:
        return not any(self.blocks.values())

    @property
    def block_count(self) -> int:
        return sum(len(day_blocks) for day_blocks in self.blocks.values())

    def copy(self) -> "WeeklyAvailability":
        return WeeklyAvailability(
            id=self.id,
            professional_ref=self.professional_ref,
            blocks={day: list(day_blocks) for day, day_blocks in self.blocks.items()},
        )

    def to_records(self) -> list[AvailabilityRecord]:
        """Flatten back into backend-style rows."""
        return [
            AvailabilityRecord(
                weekday=day.value,
                start=format_time_of_day(block.start),
                end=format_time_of_day(block.end),
            )
            for day, day_blocks in self.blocks.items()
            for block in day_blocks
        ]
