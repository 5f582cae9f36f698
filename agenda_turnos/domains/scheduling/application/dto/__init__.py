# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: DTO exports.
# ============================================================================
"""Data Transfer Objects for the Scheduling domain."""

from .scheduling_dtos import (
    AppointmentListResult,
    AppointmentResult,
    AvailabilityResult,
    BookAppointmentRequest,
    BookAppointmentResult,
    CancelAppointmentRequest,
    ConfirmExpressAppointmentRequest,
    ConfirmExpressResult,
    ExpressListResult,
    ExpressRequestResult,
    GetAppointmentsRequest,
    GetPaymentStatusRequest,
    GetProfessionalAvailabilityRequest,
    GetWeekSlotsRequest,
    MarkAppointmentPaidRequest,
    MarkAppointmentRealizedRequest,
    PaymentOverlayResult,
    PaymentStatusResult,
    ProposeExpressScheduleRequest,
    RejectExpressAppointmentRequest,
    RequestExpressAppointmentRequest,
    SetAvailabilityRequest,
    SetAvailabilityResult,
    UseCaseResult,
    WeekSlotsResult,
)

__all__ = [
    # Requests
    "GetProfessionalAvailabilityRequest",
    "GetWeekSlotsRequest",
    "SetAvailabilityRequest",
    "BookAppointmentRequest",
    "CancelAppointmentRequest",
    "MarkAppointmentRealizedRequest",
    "GetAppointmentsRequest",
    "RequestExpressAppointmentRequest",
    "ProposeExpressScheduleRequest",
    "ConfirmExpressAppointmentRequest",
    "RejectExpressAppointmentRequest",
    "GetPaymentStatusRequest",
    "MarkAppointmentPaidRequest",
    # Results
    "UseCaseResult",
    "AvailabilityResult",
    "WeekSlotsResult",
    "SetAvailabilityResult",
    "AppointmentResult",
    "BookAppointmentResult",
    "AppointmentListResult",
    "ExpressRequestResult",
    "ExpressListResult",
    "ConfirmExpressResult",
    "PaymentStatusResult",
    "PaymentOverlayResult",
]
