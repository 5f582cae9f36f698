"""Appointment Status and Kind Value Objects.

Defines the possible states of an appointment (turno) and their valid transitions.
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    """Estados del turno con máquina de estados."""

    PENDING = "pending"  # Pendiente (también express sin confirmar)
    CONFIRMED = "confirmed"  # Confirmado
    REALIZED = "realized"  # Realizado (atendido)
    CANCELLED = "cancelled"  # Cancelado

    @property
    def display_name(self) -> str:
        """Nombre para mostrar en español."""
        names = {
            "pending": "Pendiente",
            "confirmed": "Confirmado",
            "realized": "Realizado",
            "cancelled": "Cancelado",
        }
        return names.get(self.value, self.value)

    @property
    def wire_value(self) -> str:
        """Valor que entiende el backend (``estado``)."""
        return _TO_WIRE[self]

    @classmethod
    def from_wire(cls, value: str | None) -> "AppointmentStatus":
        """Map a backend ``estado``; unknown or missing values read as pending."""
        if not value:
            return cls.PENDING
        return _FROM_WIRE.get(value.strip().lower(), cls.PENDING)

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Validar si la transición de estado es válida.

        State machine:
        - pending -> confirmed, cancelled
        - confirmed -> realized, cancelled
        - realized -> (final state)
        - cancelled -> (final state)
        """
        transitions: dict[str, list[str]] = {
            "pending": ["confirmed", "cancelled"],
            "confirmed": ["realized", "cancelled"],
            "realized": [],
            "cancelled": [],
        }
        return new_status.value in transitions.get(self.value, [])

    def is_active(self) -> bool:
        """¿El turno ocupa su horario?"""
        return self in (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)

    def is_final(self) -> bool:
        return self in (AppointmentStatus.REALIZED, AppointmentStatus.CANCELLED)

    @property
    def list_priority(self) -> int:
        """Orden en el listado del paciente: confirmados, realizados, cancelados, pendientes."""
        return _LIST_PRIORITY[self]


_TO_WIRE = {
    AppointmentStatus.PENDING: "pendiente",
    AppointmentStatus.CONFIRMED: "confirmado",
    AppointmentStatus.REALIZED: "realizado",
    AppointmentStatus.CANCELLED: "cancelado",
}

_FROM_WIRE = {
    "pendiente": AppointmentStatus.PENDING,
    "confirmado": AppointmentStatus.CONFIRMED,
    "realizado": AppointmentStatus.REALIZED,
    "completado": AppointmentStatus.REALIZED,
    "cancelado": AppointmentStatus.CANCELLED,
}

_LIST_PRIORITY = {
    AppointmentStatus.CONFIRMED: 1,
    AppointmentStatus.REALIZED: 2,
    AppointmentStatus.CANCELLED: 3,
    AppointmentStatus.PENDING: 4,
}


class AppointmentKind(str, Enum):
    """Tipo de turno (``tipo``)."""

    CONSULTA = "consulta"
    CONTROL = "control"
    EXPRESS = "express"
    URGENCIA = "urgencia"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: str | None) -> "AppointmentKind":
        if not value:
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER
