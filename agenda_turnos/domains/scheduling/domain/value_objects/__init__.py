# Domain Value Objects
from .appointment_status import AppointmentKind, AppointmentStatus
from .availability_record import AvailabilityRecord
from .express_state import Confirmed, ExpressProposal, ExpressState, Proposed, Rejected, Requested
from .party import PartyRole
from .payment_status import PaymentStatus
from .schedule_format import (
    STRICT_TIME_PATTERN,
    format_display_date,
    format_request_date,
    format_time_of_day,
    parse_backend_date,
    parse_strict_time,
    parse_time_of_day,
)
from .time_block import BookableSlot, DaySlots, ReservedSlot, TimeBlock, WeekSlots
from .weekday import Weekday, strip_accents

__all__ = [
    "AppointmentKind",
    "AppointmentStatus",
    "AvailabilityRecord",
    "BookableSlot",
    "Confirmed",
    "DaySlots",
    "ExpressProposal",
    "ExpressState",
    "PartyRole",
    "PaymentStatus",
    "Proposed",
    "Rejected",
    "Requested",
    "ReservedSlot",
    "STRICT_TIME_PATTERN",
    "TimeBlock",
    "WeekSlots",
    "Weekday",
    "format_display_date",
    "format_request_date",
    "format_time_of_day",
    "parse_backend_date",
    "parse_strict_time",
    "parse_time_of_day",
    "strip_accents",
]
