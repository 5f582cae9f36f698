"""Express Request Entity - Aggregate Root.

Tracks one express negotiation: the patient asks, the professional proposes a
schedule, and the patient confirms or rejects it.
"""

from dataclasses import dataclass, field
from datetime import datetime

from agenda_turnos.core.domain import AggregateRoot, InvalidTransitionException, Money, ValidationException

from ..value_objects.appointment_status import AppointmentKind, AppointmentStatus
from ..value_objects.express_state import (
    Confirmed,
    ExpressProposal,
    ExpressState,
    Proposed,
    Rejected,
    Requested,
)
from .appointment import Appointment


@dataclass(frozen=True)
class ExpressStateChanged:
    """Domain event recorded on every protocol transition."""

    turno_id: str | None
    previous: str
    current: str


@dataclass
class ExpressRequest(AggregateRoot[str]):
    """Solicitud de turno express."""

    professional_ref: str | None = None
    patient_ref: str | None = None
    patient_name: str = ""
    professional_name: str = ""
    state: ExpressState = field(default_factory=Requested)
    cost: Money | None = None  # Valor de consulta express del profesional
    token: str | None = None
    # Sin política de vencimiento: queda en None
    expires_at: datetime | None = None

    @property
    def state_name(self) -> str:
        return self.state.name

    @property
    def is_awaiting_proposal(self) -> bool:
        return isinstance(self.state, Requested)

    @property
    def proposal(self) -> ExpressProposal | None:
        if isinstance(self.state, Proposed):
            return self.state.schedule
        return None

    def _move_to(self, new_state: ExpressState) -> None:
        previous = self.state.name
        self.state = new_state
        self.touch()
        self._record_event(ExpressStateChanged(turno_id=self.id, previous=previous, current=new_state.name))

    # Guards
    def assert_can_propose(self) -> None:
        if not isinstance(self.state, Requested):
            raise InvalidTransitionException("propose", self.state.name)

    def assert_can_confirm(self) -> None:
        if not isinstance(self.state, Proposed):
            raise InvalidTransitionException("confirm", self.state.name)
        if self.state.schedule is None:
            raise ValidationException("La propuesta no tiene fecha u horario", field="schedule")

    def assert_can_reject(self) -> None:
        if not isinstance(self.state, (Requested, Proposed)):
            raise InvalidTransitionException("reject", self.state.name)

    # Transitions
    def propose(self, proposal: ExpressProposal) -> None:
        self.assert_can_propose()
        self._move_to(Proposed(schedule=proposal))

    def confirm(self, cost: Money | None = None) -> Appointment:
        """Accept the proposal and materialize the booked appointment.

        Args:
            cost: Fee reported by the backend; falls back to the request's rate.
        """
        self.assert_can_confirm()
        schedule = self.proposal
        if schedule is None:
            raise ValidationException("La propuesta no tiene fecha u horario", field="schedule")

        appointment = Appointment(
            id=self.id,
            professional_ref=self.professional_ref,
            patient_ref=self.patient_ref,
            professional_name=self.professional_name,
            patient_name=self.patient_name,
            appointment_date=schedule.date,
            start_time=schedule.start,
            end_time=schedule.end,
            kind=AppointmentKind.EXPRESS,
            status=AppointmentStatus.CONFIRMED,
            cost=cost or self.cost,
            express_accepted=True,
            token=self.token,
        )
        self._move_to(Confirmed(appointment_id=str(self.id)))
        return appointment

    def reject(self) -> None:
        self.assert_can_reject()
        self._move_to(Rejected())

    # Factory methods
    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "ExpressRequest":
        """Derive the negotiation state from an express turno read from the backend.

        cancelado -> Rejected, confirmado/realizado -> Confirmed,
        pendiente + expressAceptado -> Proposed, otherwise Requested.
        """
        state: ExpressState
        if appointment.status == AppointmentStatus.CANCELLED:
            state = Rejected()
        elif appointment.status in (AppointmentStatus.CONFIRMED, AppointmentStatus.REALIZED):
            state = Confirmed(appointment_id=str(appointment.id))
        elif appointment.express_accepted:
            schedule = None
            if (
                appointment.appointment_date is not None
                and appointment.start_time is not None
                and appointment.end_time is not None
            ):
                schedule = ExpressProposal(
                    turno_id=str(appointment.id),
                    date=appointment.appointment_date,
                    start=appointment.start_time,
                    end=appointment.end_time,
                )
            state = Proposed(schedule=schedule)
        else:
            state = Requested()

        return cls(
            id=appointment.id,
            professional_ref=appointment.professional_ref,
            patient_ref=appointment.patient_ref,
            patient_name=appointment.patient_name,
            professional_name=appointment.professional_name,
            state=state,
            cost=appointment.cost,
            token=appointment.token,
        )
