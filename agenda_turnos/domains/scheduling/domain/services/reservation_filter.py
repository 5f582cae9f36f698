"""
Reservation Conflict Filter

Derives the slots a patient already holds with a professional so the slot
generator can hide them.
"""

from collections.abc import Iterable
from datetime import date

from ..entities.appointment import Appointment
from ..value_objects.time_block import ReservedSlot, TimeBlock


class ReservationConflictFilter:
    """Selects active, scheduled appointments with a given professional."""

    @staticmethod
    def reserved_for(appointments: Iterable[Appointment], professional_ref: str) -> list[ReservedSlot]:
        """
        Reserved slots of the patient with ``professional_ref``.

        Only pending/confirmed appointments with a date and start count.
        Appointments without a professional reference are kept as conflicts.
        """
        reserved: list[ReservedSlot] = []
        for appointment in appointments:
            if not appointment.occupies_slot():
                continue
            if appointment.professional_ref and not appointment.belongs_to_professional(professional_ref):
                continue
            slot = appointment.to_reserved_slot()
            if slot is not None:
                reserved.append(slot)
        return reserved

    @staticmethod
    def conflicts(reserved: Iterable[ReservedSlot], on: date, block: TimeBlock) -> bool:
        """True when any reserved slot overlaps ``block`` on date ``on``."""
        return any(slot.collides_with(on, block) for slot in reserved)
