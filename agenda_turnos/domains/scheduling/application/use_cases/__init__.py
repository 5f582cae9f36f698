# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case exports.
# ============================================================================
"""Scheduling Use Cases.

Availability:
- GetProfessionalAvailabilityUseCase, GetWeekSlotsUseCase, SetAvailabilityUseCase

Appointments:
- BookAppointmentUseCase, CancelAppointmentUseCase, MarkAppointmentRealizedUseCase
- GetPatientAppointmentsUseCase, GetProfessionalAppointmentsUseCase

Express:
- RequestExpressAppointmentUseCase, ListPendingExpressRequestsUseCase
- ProposeExpressScheduleUseCase, ConfirmExpressAppointmentUseCase, RejectExpressAppointmentUseCase

Payments:
- GetPaymentStatusUseCase, MarkAppointmentPaidUseCase, GetAppointmentsWithPaymentsUseCase
"""

from .book_appointment import BookAppointmentUseCase
from .cancel_appointment import CancelAppointmentUseCase
from .confirm_express_appointment import ConfirmExpressAppointmentUseCase
from .get_appointments import GetPatientAppointmentsUseCase, GetProfessionalAppointmentsUseCase
from .get_appointments_with_payments import GetAppointmentsWithPaymentsUseCase
from .get_payment_status import GetPaymentStatusUseCase
from .get_professional_availability import GetProfessionalAvailabilityUseCase
from .get_week_slots import GetWeekSlotsUseCase
from .list_pending_express_requests import ListPendingExpressRequestsUseCase
from .mark_appointment_paid import MarkAppointmentPaidUseCase
from .mark_appointment_realized import MarkAppointmentRealizedUseCase
from .propose_express_schedule import ProposeExpressScheduleUseCase
from .reject_express_appointment import RejectExpressAppointmentUseCase
from .request_express_appointment import RequestExpressAppointmentUseCase
from .set_availability import SetAvailabilityUseCase

__all__ = [
    # Availability
    "GetProfessionalAvailabilityUseCase",
    "GetWeekSlotsUseCase",
    "SetAvailabilityUseCase",
    # Appointments
    "BookAppointmentUseCase",
    "CancelAppointmentUseCase",
    "MarkAppointmentRealizedUseCase",
    "GetPatientAppointmentsUseCase",
    "GetProfessionalAppointmentsUseCase",
    # Express
    "RequestExpressAppointmentUseCase",
    "ListPendingExpressRequestsUseCase",
    "ProposeExpressScheduleUseCase",
    "ConfirmExpressAppointmentUseCase",
    "RejectExpressAppointmentUseCase",
    # Payments
    "GetPaymentStatusUseCase",
    "MarkAppointmentPaidUseCase",
    "GetAppointmentsWithPaymentsUseCase",
]
