"""Raw availability row as stored by the backend."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AvailabilityRecord:
    """``{dia_semana, hora_inicio, hora_fin}`` with untouched string values."""

    weekday: str | None
    start: str | None
    end: str | None
