# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Pydantic models for backend rows (read direction).
# ============================================================================
"""Backend row schemas.

Validated shapes of the rows the backend returns. Field aliases cover the
naming variants seen in responses (camelCase, snake_case, ``turno_ID``).
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _to_optional_str(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return str(value)
    return value


class AvailabilityRow(BaseModel):
    """``{dia_semana, hora_inicio, hora_fin}``"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    dia_semana: str | None = Field(None, validation_alias=AliasChoices("dia_semana", "diaSemana", "dia"))
    hora_inicio: str | None = Field(None, validation_alias=AliasChoices("hora_inicio", "horaInicio", "inicio"))
    hora_fin: str | None = Field(None, validation_alias=AliasChoices("hora_fin", "horaFin", "fin"))


class TurnoRow(BaseModel):
    """A turno as listed by ``/buscarTurno`` or ``/obtenerMisTurnos``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    turno_id: str | None = Field(None, validation_alias=AliasChoices("turnoId", "turno_ID", "turnoid", "id"))
    fecha_turno: str | None = Field(None, validation_alias=AliasChoices("fechaTurno", "fecha_turno", "fecha"))
    hora_inicio: str | None = Field(None, validation_alias=AliasChoices("hora_inicio", "horaInicio"))
    hora_fin: str | None = Field(None, validation_alias=AliasChoices("hora_fin", "horaFin"))
    estado: str | None = None
    tipo: str | None = None

    email_profesional: str | None = Field(
        None, validation_alias=AliasChoices("emailProfesional", "email_profesional")
    )
    email_paciente: str | None = Field(None, validation_alias=AliasChoices("emailPaciente", "email_paciente"))
    nombre_profesional: str | None = Field(
        None, validation_alias=AliasChoices("nombreProfesional", "nombre_profesional")
    )
    apellido_profesional: str | None = Field(
        None, validation_alias=AliasChoices("apellidoProfesional", "apellido_profesional")
    )
    nombre_paciente: str | None = Field(None, validation_alias=AliasChoices("nombrePaciente", "nombre_paciente"))
    apellido_paciente: str | None = Field(
        None, validation_alias=AliasChoices("apellidoPaciente", "apellido_paciente")
    )

    costo: Any = None
    express_aceptado: bool = Field(False, validation_alias=AliasChoices("expressAceptado", "express_aceptado"))
    token: str | None = None

    @field_validator("turno_id", "fecha_turno", "hora_inicio", "hora_fin", mode="before")
    @classmethod
    def coerce_str(cls, value: Any) -> Any:
        return _to_optional_str(value)

    @field_validator("express_aceptado", mode="before")
    @classmethod
    def parse_express_flag(cls, value: Any) -> bool:
        """expressAceptado comes as 1/0 from the database or as a boolean."""
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true")
        return value is True or value == 1

    @property
    def professional_name(self) -> str:
        return " ".join(p for p in (self.nombre_profesional, self.apellido_profesional) if p)

    @property
    def patient_name(self) -> str:
        return " ".join(p for p in (self.nombre_paciente, self.apellido_paciente) if p)


class PagoRow(BaseModel):
    """A payment as listed by ``/VerPagos`` or ``/VerPagosProfesional``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    turno_id: str | None = Field(None, validation_alias=AliasChoices("turnoId", "turno_ID", "turnoid"))
    estado: str | None = None
    estado_pago: str | None = Field(None, validation_alias=AliasChoices("estadoPago", "estado_pago"))
    monto: Any = None

    @field_validator("turno_id", mode="before")
    @classmethod
    def coerce_str(cls, value: Any) -> Any:
        return _to_optional_str(value)

    @property
    def status_value(self) -> str | None:
        # El backend puede devolver 'estado' o 'estadoPago'
        return self.estado or self.estado_pago
