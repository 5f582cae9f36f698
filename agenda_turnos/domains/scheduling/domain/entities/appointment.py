"""Appointment Entity - Aggregate Root.

Represents a booked appointment (turno) with the state machine rules for
confirmation, cancellation and marking it as realized.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any

from agenda_turnos.core.domain import AggregateRoot, InvalidTransitionException, Money

from ..value_objects.appointment_status import AppointmentKind, AppointmentStatus
from ..value_objects.schedule_format import format_time_of_day
from ..value_objects.time_block import ReservedSlot, TimeBlock


@dataclass
class Appointment(AggregateRoot[str]):
    """Turno - Aggregate Root.

    ``professional_ref`` is the professional's email, the key the backend uses
    for everything professional-related.
    """

    professional_ref: str | None = None
    patient_ref: str | None = None
    professional_name: str = ""
    patient_name: str = ""

    appointment_date: date | None = None
    start_time: time | None = None
    end_time: time | None = None

    kind: AppointmentKind = AppointmentKind.CONSULTA
    kind_raw: str = ""  # Valor original de ``tipo`` cuando no es uno conocido
    status: AppointmentStatus = AppointmentStatus.PENDING
    cost: Money | None = None

    express_accepted: bool = False
    token: str | None = None  # Token del turno express (viaja en el email)

    def _transition(self, operation: str, target: AppointmentStatus) -> None:
        self.assert_can_transition(operation, target)
        self.status = target
        self.touch()

    def assert_can_transition(self, operation: str, target: AppointmentStatus) -> None:
        """Raise InvalidTransitionException without changing state."""
        if not self.status.can_transition_to(target):
            raise InvalidTransitionException(
                operation,
                self.status.value,
                f"No se puede {_OPERATION_VERBS[operation]} un turno en estado {self.status.display_name}",
            )

    def confirm(self) -> None:
        self._transition("confirm", AppointmentStatus.CONFIRMED)

    def cancel(self) -> None:
        self._transition("cancel", AppointmentStatus.CANCELLED)

    def mark_realized(self) -> None:
        self._transition("mark_realized", AppointmentStatus.REALIZED)

    # Query methods
    @property
    def has_schedule(self) -> bool:
        return self.appointment_date is not None and self.start_time is not None

    @property
    def is_express(self) -> bool:
        return self.kind == AppointmentKind.EXPRESS

    @property
    def time_block(self) -> TimeBlock | None:
        if self.start_time is None or self.end_time is None or self.start_time >= self.end_time:
            return None
        return TimeBlock(start=self.start_time, end=self.end_time)

    @property
    def starts_at(self) -> datetime | None:
        if self.appointment_date is None or self.start_time is None:
            return None
        return datetime.combine(self.appointment_date, self.start_time)

    def occupies_slot(self) -> bool:
        """Active appointments with a schedule block their time."""
        return self.status.is_active() and self.has_schedule

    def to_reserved_slot(self) -> ReservedSlot | None:
        if self.appointment_date is None or self.start_time is None:
            return None
        return ReservedSlot(date=self.appointment_date, start=self.start_time, end=self.end_time)

    def belongs_to_professional(self, professional_ref: str) -> bool:
        if not self.professional_ref:
            return False
        return self.professional_ref.strip().lower() == professional_ref.strip().lower()

    def list_sort_key(self) -> tuple[int, date, time]:
        """Key for the patient's appointment list (status priority, then date/time)."""
        return (
            self.status.list_priority,
            self.appointment_date or date.max,
            self.start_time or time.max,
        )

    def to_summary_dict(self) -> dict[str, Any]:
        """Diccionario con resumen del turno."""
        return {
            "id": self.id,
            "professional_ref": self.professional_ref,
            "professional_name": self.professional_name,
            "patient_ref": self.patient_ref,
            "patient_name": self.patient_name,
            "date": self.appointment_date.isoformat() if self.appointment_date else None,
            "start": format_time_of_day(self.start_time) if self.start_time else None,
            "end": format_time_of_day(self.end_time) if self.end_time else None,
            "kind": self.kind.value,
            "status": self.status.value,
            "status_name": self.status.display_name,
            "cost": str(self.cost) if self.cost else None,
        }


_OPERATION_VERBS = {
    "confirm": "confirmar",
    "cancel": "cancelar",
    "mark_realized": "marcar como realizado",
}
