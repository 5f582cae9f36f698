"""Party role of the authenticated user."""

from enum import Enum


class PartyRole(str, Enum):
    """Quién realiza la operación."""

    PATIENT = "paciente"
    PROFESSIONAL = "profesional"
