# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Mapping between backend payloads and domain objects
# ============================================================================
"""Wire format mapper.

The only place that knows backend field names and the date/time formats
(DD-MM-YYYY and HH:MM:SS when reading, YYYY-MM-DD and HH:MM when writing).
"""

import logging
from typing import Any

from pydantic import ValidationError

from agenda_turnos.core.domain import Money

from ...domain.entities import Appointment, PaymentRecord, WeeklyAvailability
from ...domain.services.availability_normalizer import NormalizationReport, normalize_availability
from ...domain.value_objects import (
    AppointmentKind,
    AppointmentStatus,
    AvailabilityRecord,
    PaymentStatus,
    format_time_of_day,
    parse_backend_date,
    parse_time_of_day,
)
from .response_extractor import ResponseExtractor
from .wire_models import AvailabilityRow, PagoRow, TurnoRow

logger = logging.getLogger(__name__)


class TurnosWireMapper:
    """Converts backend payloads into domain objects and back.

    Rows that fail validation are skipped and logged; a listing never fails
    because of one bad row.
    """

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    @staticmethod
    def availability_records(data: Any) -> list[AvailabilityRecord]:
        records = []
        for row in ResponseExtractor.extract_items(data, "disponibilidad", "horarios"):
            try:
                parsed = AvailabilityRow.model_validate(row)
            except ValidationError as e:
                logger.warning(f"Skipping invalid availability row {row}: {e.error_count()} errors")
                continue
            records.append(AvailabilityRecord(weekday=parsed.dia_semana, start=parsed.hora_inicio, end=parsed.hora_fin))
        return records

    @classmethod
    def normalize_availability_rows(
        cls,
        data: Any,
        professional_ref: str | None = None,
        report: NormalizationReport | None = None,
    ) -> WeeklyAvailability:
        """Raw ``/obtenerDisponibilidadProfesional`` payload -> WeeklyAvailability."""
        return normalize_availability(cls.availability_records(data), professional_ref, report)

    @staticmethod
    def horarios_payload(availability: WeeklyAvailability) -> dict[str, list[dict[str, str]]]:
        """``{"lunes": [{"inicio": "08:00", "fin": "09:00"}], ...}`` in weekday order."""
        return {
            day.value: [
                {"inicio": format_time_of_day(block.start), "fin": format_time_of_day(block.end)}
                for block in availability.blocks_for(day)
            ]
            for day in availability.weekdays()
        }

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------

    @staticmethod
    def appointment_from_row(row: dict[str, Any], currency: str = "ARS") -> Appointment | None:
        try:
            parsed = TurnoRow.model_validate(row)
        except ValidationError as e:
            logger.warning(f"Skipping invalid turno row: {e.error_count()} errors")
            return None

        if not parsed.turno_id:
            logger.warning(f"Skipping turno row without id: {row}")
            return None

        kind = AppointmentKind.from_wire(parsed.tipo)
        return Appointment(
            id=parsed.turno_id,
            professional_ref=parsed.email_profesional,
            patient_ref=parsed.email_paciente,
            professional_name=parsed.professional_name,
            patient_name=parsed.patient_name,
            appointment_date=parse_backend_date(parsed.fecha_turno),
            start_time=parse_time_of_day(parsed.hora_inicio),
            end_time=parse_time_of_day(parsed.hora_fin),
            kind=kind,
            kind_raw=(parsed.tipo or "") if kind == AppointmentKind.OTHER else "",
            status=AppointmentStatus.from_wire(parsed.estado),
            cost=Money.from_wire(parsed.costo, currency),
            express_accepted=parsed.express_aceptado,
            token=parsed.token,
        )

    @classmethod
    def appointments(cls, data: Any, currency: str = "ARS") -> list[Appointment]:
        """``{"turnos": [...]}`` -> Appointments (invalid rows dropped)."""
        result = []
        for row in ResponseExtractor.extract_items(data, "turnos"):
            appointment = cls.appointment_from_row(row, currency)
            if appointment is not None:
                result.append(appointment)
        return result

    @staticmethod
    def created_appointment_id(data: Any) -> str:
        return ResponseExtractor.get_field(ResponseExtractor.as_dict(data), "turnoid", "turnoId", "turno_ID", "id")

    @staticmethod
    def cost_from_response(data: Any, currency: str = "ARS") -> Money | None:
        payload = ResponseExtractor.as_dict(data)
        return Money.from_wire(payload.get("costo", payload.get("monto")), currency)

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    @staticmethod
    def payments(data: Any, currency: str = "ARS") -> list[PaymentRecord]:
        """``{"pagos": [...]}`` or a raw list -> PaymentRecords."""
        result = []
        for row in ResponseExtractor.extract_items(data, "pagos"):
            try:
                parsed = PagoRow.model_validate(row)
            except ValidationError as e:
                logger.warning(f"Skipping invalid pago row: {e.error_count()} errors")
                continue
            if not parsed.turno_id:
                continue
            result.append(
                PaymentRecord(
                    id=parsed.turno_id,
                    appointment_id=parsed.turno_id,
                    status=PaymentStatus.from_wire(parsed.status_value),
                    amount=Money.from_wire(parsed.monto, currency),
                )
            )
        return result
