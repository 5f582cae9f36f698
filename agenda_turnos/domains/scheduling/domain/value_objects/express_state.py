"""Express negotiation state.

The backend keeps a single ``pendiente`` turno while the negotiation runs and
overloads ``expressAceptado`` plus the schedule fields to tell a fresh request
apart from a proposal. The engine makes that explicit with a tagged variant.
"""

from dataclasses import dataclass
from datetime import date, time

from .schedule_format import format_time_of_day
from .time_block import TimeBlock


@dataclass(frozen=True)
class ExpressProposal:
    """Schedule proposed by the professional for an express request."""

    turno_id: str
    date: date
    start: time
    end: time

    @property
    def block(self) -> TimeBlock:
        return TimeBlock(start=self.start, end=self.end)

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {format_time_of_day(self.start)}-{format_time_of_day(self.end)}"


@dataclass(frozen=True)
class Requested:
    """Patient asked for an express appointment; no schedule yet."""

    name = "requested"


@dataclass(frozen=True)
class Proposed:
    """Professional proposed a schedule; waiting for the patient.

    ``schedule`` is None only when the backend flagged the request as accepted
    without sending the proposed date/time.
    """

    schedule: ExpressProposal | None
    name = "proposed"


@dataclass(frozen=True)
class Confirmed:
    """Patient accepted the proposal; the appointment is booked."""

    appointment_id: str
    name = "confirmed"


@dataclass(frozen=True)
class Rejected:
    """Request or proposal was turned down."""

    name = "rejected"


ExpressState = Requested | Proposed | Confirmed | Rejected
