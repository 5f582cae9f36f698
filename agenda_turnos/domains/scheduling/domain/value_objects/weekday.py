"""Weekday Value Object.

Canonical day-of-week keys used by professional availability.
"""

import unicodedata
from datetime import date
from enum import Enum


def strip_accents(value: str) -> str:
    """Remove diacritics ("miércoles" -> "miercoles")."""
    normalized = unicodedata.normalize("NFD", value)
    return "".join(c for c in normalized if unicodedata.category(c) != "Mn")


class Weekday(str, Enum):
    """Día de la semana en su forma canónica (minúsculas, sin tildes)."""

    LUNES = "lunes"
    MARTES = "martes"
    MIERCOLES = "miercoles"
    JUEVES = "jueves"
    VIERNES = "viernes"
    SABADO = "sabado"
    DOMINGO = "domingo"

    @property
    def display_name(self) -> str:
        """Nombre para mostrar en español."""
        names = {
            "lunes": "Lunes",
            "martes": "Martes",
            "miercoles": "Miércoles",
            "jueves": "Jueves",
            "viernes": "Viernes",
            "sabado": "Sábado",
            "domingo": "Domingo",
        }
        return names[self.value]

    @property
    def iso_index(self) -> int:
        """Monday=0 ... Sunday=6, aligned with ``date.weekday()``."""
        return _ORDER.index(self)

    @classmethod
    def parse(cls, token: str | None) -> "Weekday | None":
        """Parse a weekday name case- and accent-insensitively.

        Returns None when the token is not a recognized weekday.
        """
        if not token or not isinstance(token, str):
            return None
        key = strip_accents(token.strip().lower())
        try:
            return cls(key)
        except ValueError:
            return None

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        """Weekday of a calendar date."""
        return _ORDER[value.weekday()]

    @classmethod
    def ordered(cls) -> list["Weekday"]:
        """Weekdays from Monday to Sunday."""
        return list(_ORDER)


_ORDER: tuple[Weekday, ...] = (
    Weekday.LUNES,
    Weekday.MARTES,
    Weekday.MIERCOLES,
    Weekday.JUEVES,
    Weekday.VIERNES,
    Weekday.SABADO,
    Weekday.DOMINGO,
)
