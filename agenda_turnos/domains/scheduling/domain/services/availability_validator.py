"""
Availability Validator

Checks an availability edited by a professional before it is saved.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ..entities.weekly_availability import WeeklyAvailability
from ..value_objects.schedule_format import parse_strict_time
from ..value_objects.time_block import TimeBlock
from ..value_objects.weekday import Weekday

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityIssue:
    """One invalid block of the edited schedule."""

    weekday: str
    index: int  # Posición del bloque dentro del día
    start: str
    end: str
    reason: str  # unknown_weekday | invalid_format | invalid_range | minute_step | too_long | overlap
    message: str

    def to_dict(self) -> dict[str, str | int]:
        return {
            "weekday": self.weekday,
            "index": self.index,
            "start": self.start,
            "end": self.end,
            "reason": self.reason,
            "message": self.message,
        }


@dataclass
class AvailabilityValidation:
    """Valid blocks plus the issues found."""

    availability: WeeklyAvailability
    issues: list[AvailabilityIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues


class AvailabilityValidator:
    """
    Validates weekly schedules edited by the professional.

    Rules per block: start < end, minutes multiple of ``minute_step``,
    duration up to ``max_block_minutes``, no overlap with an earlier block of
    the same day. When two blocks overlap the first one is kept.
    """

    def __init__(self, minute_step: int = 5, max_block_minutes: int = 60):
        self.minute_step = minute_step
        self.max_block_minutes = max_block_minutes

    def validate(
        self,
        schedule: Mapping[str, Sequence[tuple[str, str]]],
        professional_ref: str | None = None,
    ) -> AvailabilityValidation:
        """
        Validate a schedule of ``{weekday: [(start, end), ...]}`` in "HH:MM".

        Returns:
            AvailabilityValidation with the cleaned availability and issues
        """
        result = AvailabilityValidation(availability=WeeklyAvailability(professional_ref=professional_ref))

        for day_name, day_blocks in schedule.items():
            weekday = Weekday.parse(day_name)
            for index, (start_raw, end_raw) in enumerate(day_blocks):
                if weekday is None:
                    reason, message = "unknown_weekday", f"Día desconocido: {day_name}"
                    block = None
                else:
                    block, reason, message = self._check_block(result.availability, weekday, start_raw, end_raw)

                if block is None or weekday is None:
                    result.issues.append(
                        AvailabilityIssue(
                            weekday=str(day_name),
                            index=index,
                            start=start_raw,
                            end=end_raw,
                            reason=reason,
                            message=message,
                        )
                    )
                    continue

                result.availability.add_block(weekday, block)

        if result.issues:
            logger.debug(f"Availability validation found {len(result.issues)} invalid blocks")
        return result

    def remove_invalid_blocks(
        self,
        schedule: Mapping[str, Sequence[tuple[str, str]]],
        professional_ref: str | None = None,
    ) -> WeeklyAvailability:
        """Cleaned copy holding only the valid blocks."""
        return self.validate(schedule, professional_ref).availability

    def _check_block(
        self,
        kept: WeeklyAvailability,
        weekday: Weekday,
        start_raw: str,
        end_raw: str,
    ) -> tuple[TimeBlock | None, str, str]:
        start = parse_strict_time(start_raw)
        end = parse_strict_time(end_raw)
        if start is None or end is None:
            return None, "invalid_format", "El horario debe tener formato HH:MM"
        if start >= end:
            return None, "invalid_range", "La hora de inicio debe ser menor a la hora de fin"
        if start.minute % self.minute_step or end.minute % self.minute_step:
            return None, "minute_step", f"Los minutos deben ser múltiplos de {self.minute_step}"

        block = TimeBlock(start=start, end=end)
        if block.duration_minutes > self.max_block_minutes:
            return None, "too_long", f"Cada bloque puede durar como máximo {self.max_block_minutes} minutos"
        if any(block.overlaps(other) for other in kept.blocks_for(weekday)):
            return None, "overlap", f"El bloque {block} se superpone con otro del mismo día"
        return block, "", ""
