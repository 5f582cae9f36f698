# Domain Entities
from .appointment import Appointment
from .express_request import ExpressRequest, ExpressStateChanged
from .payment_record import PaymentRecord
from .weekly_availability import WeeklyAvailability

__all__ = ["Appointment", "ExpressRequest", "ExpressStateChanged", "PaymentRecord", "WeeklyAvailability"]
