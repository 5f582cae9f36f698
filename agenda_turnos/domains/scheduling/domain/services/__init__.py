"""
Scheduling Domain Services

Logic that spans several entities: normalization, slot generation,
reservation filtering and proposal/availability validation.
"""

from agenda_turnos.domains.scheduling.domain.services.availability_normalizer import (
    NormalizationReport,
    SkippedRecord,
    normalize_availability,
)
from agenda_turnos.domains.scheduling.domain.services.availability_validator import (
    AvailabilityIssue,
    AvailabilityValidation,
    AvailabilityValidator,
)
from agenda_turnos.domains.scheduling.domain.services.express_policy import ExpressProposalPolicy
from agenda_turnos.domains.scheduling.domain.services.payment_overlay import AppointmentPayment, PaymentOverlay
from agenda_turnos.domains.scheduling.domain.services.reservation_filter import ReservationConflictFilter
from agenda_turnos.domains.scheduling.domain.services.slot_generator import (
    SlotGenerator,
    SlotPolicy,
    WholeBlockPolicy,
    merge_blocks,
)

__all__ = [
    "normalize_availability",
    "NormalizationReport",
    "SkippedRecord",
    "SlotGenerator",
    "SlotPolicy",
    "WholeBlockPolicy",
    "merge_blocks",
    "ReservationConflictFilter",
    "AvailabilityValidator",
    "AvailabilityValidation",
    "AvailabilityIssue",
    "ExpressProposalPolicy",
    "PaymentOverlay",
    "AppointmentPayment",
]
