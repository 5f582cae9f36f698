"""
Availability Normalizer

Turns flat availability rows into a WeeklyAvailability. Ingestion is
permissive: bad rows are skipped and reported, never raised.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from agenda_turnos.core.domain import InvalidRangeException

from ..entities.weekly_availability import WeeklyAvailability
from ..value_objects.availability_record import AvailabilityRecord
from ..value_objects.schedule_format import parse_time_of_day
from ..value_objects.time_block import TimeBlock
from ..value_objects.weekday import Weekday

logger = logging.getLogger(__name__)


@dataclass
class SkippedRecord:
    """A row that could not become a TimeBlock."""

    record: Any
    reason: str  # missing_fields | unknown_weekday | invalid_time | invalid_range | malformed


@dataclass
class NormalizationReport:
    """Outcome of a normalization pass."""

    accepted: int = 0
    skipped: list[SkippedRecord] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.skipped)

    def skip(self, record: Any, reason: str) -> None:
        self.skipped.append(SkippedRecord(record=record, reason=reason))


def normalize_availability(
    records: Iterable[AvailabilityRecord] | None,
    professional_ref: str | None = None,
    report: NormalizationReport | None = None,
) -> WeeklyAvailability:
    """
    Build a WeeklyAvailability from availability records.

    Weekday names are matched ignoring case, spaces and accents; times are
    truncated to minutes. Blocks are appended in source order.

    Args:
        records: Rows as read from the backend
        professional_ref: Professional the availability belongs to
        report: Optional report collecting skipped rows

    Returns:
        WeeklyAvailability (empty for empty or malformed input)
    """
    report = report if report is not None else NormalizationReport()
    availability = WeeklyAvailability(professional_ref=professional_ref)

    if not records:
        return availability

    try:
        rows = list(records)
    except TypeError:
        logger.warning(f"Availability input is not iterable: {type(records).__name__}")
        report.skip(records, "malformed")
        return availability

    for record in rows:
        if not isinstance(record, AvailabilityRecord):
            report.skip(record, "malformed")
            logger.warning(f"Skipping malformed availability row: {record!r}")
            continue

        if not record.weekday or not record.start or not record.end:
            report.skip(record, "missing_fields")
            logger.warning(f"Skipping availability row with missing fields: {record}")
            continue

        weekday = Weekday.parse(record.weekday)
        if weekday is None:
            report.skip(record, "unknown_weekday")
            logger.warning(f"Skipping availability row with unknown weekday '{record.weekday}'")
            continue

        start = parse_time_of_day(record.start)
        end = parse_time_of_day(record.end)
        if start is None or end is None:
            report.skip(record, "invalid_time")
            logger.warning(f"Skipping availability row with invalid time: {record.start}-{record.end}")
            continue

        try:
            block = TimeBlock(start=start, end=end)
        except InvalidRangeException:
            report.skip(record, "invalid_range")
            logger.warning(
                f"Skipping availability row with start >= end on {weekday.value}: {record.start}-{record.end}"
            )
            continue

        availability.add_block(weekday, block)
        report.accepted += 1

    if report.has_issues:
        logger.info(f"Availability normalized with {report.accepted} blocks, {len(report.skipped)} rows skipped")

    return availability
