"""
Express Proposal Policy

Validates the schedule a professional proposes for an express request.
"""

from datetime import date

from agenda_turnos.core.domain import InvalidProposalWindowException

from ..value_objects.express_state import ExpressProposal
from ..value_objects.schedule_format import parse_strict_time


class ExpressProposalPolicy:
    """
    Proposal rules, checked in order:

    1. turno, date, start and end are present
    2. date is today or later
    3. start and end are 24-hour "HH:MM"
    4. start < end
    5. start hour >= window_start_hour and end hour <= window_end_hour

    The window is compared by hour only, so with the default 22 an end of
    "22:30" is accepted.
    """

    def __init__(self, window_start_hour: int = 7, window_end_hour: int = 22):
        self.window_start_hour = window_start_hour
        self.window_end_hour = window_end_hour

    def validate(
        self,
        turno_id: str | None,
        proposed_date: date | None,
        start: str | None,
        end: str | None,
        today: date,
    ) -> ExpressProposal:
        """
        Build the proposal or raise InvalidProposalWindowException.

        Args:
            turno_id: Express turno being answered
            proposed_date: Proposed date
            start: Proposed start "HH:MM"
            end: Proposed end "HH:MM"
            today: Current local date
        """
        if not turno_id or proposed_date is None or not start or not end:
            raise InvalidProposalWindowException("missing_fields", "Debe completar fecha, hora de inicio y hora de fin")

        if proposed_date < today:
            raise InvalidProposalWindowException("past_date", "La fecha no puede ser anterior a hoy")

        start_time = parse_strict_time(start)
        end_time = parse_strict_time(end)
        if start_time is None or end_time is None:
            raise InvalidProposalWindowException("invalid_format", "Formato de hora inválido. Use HH:MM (ej: 09:00)")

        if start_time >= end_time:
            raise InvalidProposalWindowException("invalid_range", "La hora de inicio debe ser menor a la hora de fin")

        if start_time.hour < self.window_start_hour or end_time.hour > self.window_end_hour:
            raise InvalidProposalWindowException(
                "outside_window",
                f"El horario debe estar entre las {self.window_start_hour:02d}:00 y las {self.window_end_hour:02d}:00",
            )

        return ExpressProposal(turno_id=str(turno_id), date=proposed_date, start=start_time, end=end_time)
