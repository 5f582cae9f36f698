# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Data Transfer Objects for scheduling operations.
# ============================================================================
"""Scheduling DTOs.

Request and result objects for availability, booking, express negotiation
and payment operations.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any

from agenda_turnos.core.domain import DomainException

from ...domain.entities import Appointment, ExpressRequest, PaymentRecord, WeeklyAvailability
from ...domain.services import AppointmentPayment, AvailabilityIssue, NormalizationReport
from ...domain.value_objects import AppointmentKind, PartyRole, PaymentStatus, WeekSlots

# =============================================================================
# Request DTOs
# =============================================================================


@dataclass(frozen=True)
class GetProfessionalAvailabilityRequest:
    """Request DTO for reading a professional's weekly availability."""

    professional_ref: str


@dataclass(frozen=True)
class GetWeekSlotsRequest:
    """Request DTO for the bookable slots of a week window."""

    professional_ref: str
    week_offset: int = 0  # 0 = desde hoy, 1 = próximos 7 días, ...


@dataclass(frozen=True)
class SetAvailabilityRequest:
    """Request DTO for saving the professional's availability.

    ``schedule`` maps weekday names to ``(start, end)`` pairs in "HH:MM".
    """

    professional_ref: str
    schedule: dict[str, list[tuple[str, str]]]


@dataclass(frozen=True)
class BookAppointmentRequest:
    """Request DTO for booking a new appointment."""

    professional_ref: str
    appointment_date: date
    start_time: time
    end_time: time
    kind: AppointmentKind = AppointmentKind.CONSULTA


@dataclass(frozen=True)
class CancelAppointmentRequest:
    """Request DTO for cancelling an appointment."""

    appointment_id: str
    requested_by: PartyRole = PartyRole.PATIENT


@dataclass(frozen=True)
class MarkAppointmentRealizedRequest:
    """Request DTO for marking an appointment as realized."""

    appointment_id: str


@dataclass(frozen=True)
class GetAppointmentsRequest:
    """Request DTO for listing the authenticated party's appointments."""

    professional_ref: str | None = None  # Filtra por profesional (solo paciente)
    include_cancelled: bool = True


@dataclass(frozen=True)
class RequestExpressAppointmentRequest:
    """Request DTO for asking a professional for an express appointment."""

    professional_ref: str


@dataclass(frozen=True)
class ProposeExpressScheduleRequest:
    """Request DTO for the professional's express proposal."""

    turno_id: str
    proposed_date: date | None
    start: str | None  # "HH:MM"
    end: str | None  # "HH:MM"


@dataclass(frozen=True)
class ConfirmExpressAppointmentRequest:
    """Request DTO for the patient accepting an express proposal."""

    turno_id: str


@dataclass(frozen=True)
class RejectExpressAppointmentRequest:
    """Request DTO for rejecting an express request or proposal."""

    turno_id: str
    requested_by: PartyRole = PartyRole.PATIENT


@dataclass(frozen=True)
class GetPaymentStatusRequest:
    """Request DTO for an appointment's payment status."""

    appointment_id: str
    requested_by: PartyRole = PartyRole.PATIENT


@dataclass(frozen=True)
class MarkAppointmentPaidRequest:
    """Request DTO for paying an appointment."""

    appointment_id: str
    requested_by: PartyRole = PartyRole.PATIENT


# =============================================================================
# Result DTOs
# =============================================================================


@dataclass
class UseCaseResult:
    """Generic result for use case operations."""

    success: bool
    data: Any | None = None
    error_code: str | None = None
    error_message: str | None = None
    error_details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: Any = None, **fields: Any):
        """Create successful result."""
        return cls(success=True, data=data, **fields)

    @classmethod
    def error(cls, code: str, message: str, details: dict[str, Any] | None = None, **fields: Any):
        """Create error result."""
        return cls(success=False, error_code=code, error_message=message, error_details=details or {}, **fields)

    @classmethod
    def from_exception(cls, exc: DomainException, **fields: Any):
        """Create error result from a domain exception."""
        return cls.error(exc.code, exc.message, exc.details, **fields)


@dataclass
class AvailabilityResult(UseCaseResult):
    """Result for get professional availability."""

    availability: WeeklyAvailability | None = None
    report: NormalizationReport | None = None
    stale: bool = False


@dataclass
class WeekSlotsResult(UseCaseResult):
    """Result for get week slots."""

    week: WeekSlots | None = None
    stale: bool = False


@dataclass
class SetAvailabilityResult(UseCaseResult):
    """Result for set availability. ``issues`` lists the invalid blocks."""

    availability: WeeklyAvailability | None = None
    issues: list[AvailabilityIssue] = field(default_factory=list)


@dataclass
class AppointmentResult(UseCaseResult):
    """Result for operations on a single appointment."""

    appointment: Appointment | None = None


@dataclass
class BookAppointmentResult(AppointmentResult):
    """Result for book appointment.

    On a slot conflict ``available_slots`` holds the refreshed week so the
    caller can offer another slot.
    """

    available_slots: WeekSlots | None = None


@dataclass
class AppointmentListResult(UseCaseResult):
    """Result for appointment listings."""

    appointments: list[Appointment] = field(default_factory=list)
    stale: bool = False


@dataclass
class ExpressRequestResult(UseCaseResult):
    """Result for express request operations."""

    request: ExpressRequest | None = None


@dataclass
class ExpressListResult(UseCaseResult):
    """Result for listing pending express requests."""

    requests: list[ExpressRequest] = field(default_factory=list)
    stale: bool = False


@dataclass
class ConfirmExpressResult(ExpressRequestResult):
    """Result for confirming an express proposal."""

    appointment: Appointment | None = None
    payment: PaymentRecord | None = None


@dataclass
class PaymentStatusResult(UseCaseResult):
    """Result for payment status queries and mark-paid."""

    status: PaymentStatus = PaymentStatus.UNKNOWN
    payment: PaymentRecord | None = None


@dataclass
class PaymentOverlayResult(UseCaseResult):
    """Result for appointments joined with their payment status."""

    items: list[AppointmentPayment] = field(default_factory=list)
