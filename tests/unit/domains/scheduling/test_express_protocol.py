# ============================================================================
# Tests for the express appointment negotiation
# ============================================================================
"""Unit tests for the express protocol.

Covers ExpressProposalPolicy, the ExpressRequest state machine and the
request -> propose -> confirm/reject flow through AgendaService.
"""

from datetime import date, time
from decimal import Decimal

import pytest
from scheduling_fakes import PROFESSIONAL_EMAIL, FakeTurnosBackend, turno_row

from agenda_turnos.core.domain import InvalidProposalWindowException, InvalidTransitionException, ValidationException
from agenda_turnos.domains.scheduling.application.services import AgendaService
from agenda_turnos.domains.scheduling.domain.entities import Appointment, ExpressRequest
from agenda_turnos.domains.scheduling.domain.services import ExpressProposalPolicy
from agenda_turnos.domains.scheduling.domain.value_objects import (
    AppointmentKind,
    AppointmentStatus,
    Confirmed,
    ExpressProposal,
    PartyRole,
    PaymentStatus,
    Proposed,
    Rejected,
    Requested,
)

TODAY = date(2025, 11, 18)
THURSDAY = date(2025, 11, 20)


def _proposal() -> ExpressProposal:
    return ExpressProposal(turno_id="7", date=THURSDAY, start=time(9), end=time(10))


def _express_appointment(**overrides) -> Appointment:
    fields = {
        "id": "7",
        "professional_ref": PROFESSIONAL_EMAIL,
        "kind": AppointmentKind.EXPRESS,
        "status": AppointmentStatus.PENDING,
        "token": "tok",
    }
    fields.update(overrides)
    return Appointment(**fields)


# ============================================================================
# POLICY
# ============================================================================


class TestExpressProposalPolicy:
    """Tests for ExpressProposalPolicy.validate()."""

    @pytest.fixture
    def policy(self) -> ExpressProposalPolicy:
        return ExpressProposalPolicy()

    @pytest.mark.parametrize(
        "start,end",
        [("07:00", "08:00"), ("21:00", "22:00"), ("21:30", "22:30")],
    )
    def test_accepts_hours_inside_window(self, policy: ExpressProposalPolicy, start: str, end: str) -> None:
        """Should accept start from 07 and end up to hour 22."""
        proposal = policy.validate("7", THURSDAY, start, end, TODAY)

        assert proposal.turno_id == "7"
        assert proposal.date == THURSDAY

    @pytest.mark.parametrize("start,end", [("06:00", "07:00"), ("22:00", "23:00"), ("23:00", "23:30")])
    def test_rejects_hours_outside_window(self, policy: ExpressProposalPolicy, start: str, end: str) -> None:
        """Should reject proposals starting before 07 or ending after hour 22."""
        with pytest.raises(InvalidProposalWindowException) as exc_info:
            policy.validate("7", THURSDAY, start, end, TODAY)

        assert exc_info.value.code == "INVALID_PROPOSAL_WINDOW"
        assert exc_info.value.reason == "outside_window"

    @pytest.mark.parametrize(
        "args,reason",
        [
            (("7", None, "09:00", "10:00"), "missing_fields"),
            (("7", THURSDAY, "", "10:00"), "missing_fields"),
            (("7", date(2025, 11, 17), "09:00", "10:00"), "past_date"),
            (("7", THURSDAY, "9am", "10:00"), "invalid_format"),
            (("7", THURSDAY, "10:00", "10:00"), "invalid_range"),
            (("7", THURSDAY, "11:00", "10:00"), "invalid_range"),
        ],
    )
    def test_reports_reason(self, policy: ExpressProposalPolicy, args: tuple, reason: str) -> None:
        """Should report which rule failed."""
        with pytest.raises(InvalidProposalWindowException) as exc_info:
            policy.validate(*args, today=TODAY)

        assert exc_info.value.details == {"reason": reason}

    def test_today_is_allowed(self, policy: ExpressProposalPolicy) -> None:
        """Should accept a proposal for the current day."""
        assert policy.validate("7", TODAY, "18:00", "19:00", TODAY).date == TODAY


# ============================================================================
# STATE MACHINE
# ============================================================================


class TestExpressRequestTransitions:
    """Tests for ExpressRequest state changes."""

    def test_requested_to_proposed_to_confirmed(self) -> None:
        """Should follow the happy path and build the booked appointment."""
        express = ExpressRequest.from_appointment(_express_appointment())
        assert express.is_awaiting_proposal

        express.propose(_proposal())
        booked = express.confirm()

        assert isinstance(express.state, Confirmed)
        assert booked.kind == AppointmentKind.EXPRESS
        assert booked.status == AppointmentStatus.CONFIRMED
        assert (booked.appointment_date, booked.start_time, booked.end_time) == (THURSDAY, time(9), time(10))
        assert [event.current for event in express.get_domain_events()] == ["proposed", "confirmed"]

    def test_pull_domain_events_drains(self) -> None:
        """Should hand out recorded events once."""
        express = ExpressRequest.from_appointment(_express_appointment())
        express.propose(_proposal())

        pulled = express.pull_domain_events()

        assert [(event.previous, event.current) for event in pulled] == [("requested", "proposed")]
        assert express.get_domain_events() == []

    def test_cannot_confirm_without_proposal(self) -> None:
        """Should reject confirm while still Requested."""
        express = ExpressRequest.from_appointment(_express_appointment())

        with pytest.raises(InvalidTransitionException):
            express.confirm()
        assert isinstance(express.state, Requested)

    def test_cannot_propose_twice(self) -> None:
        """Should reject a second proposal."""
        express = ExpressRequest.from_appointment(_express_appointment())
        express.propose(_proposal())

        with pytest.raises(InvalidTransitionException):
            express.propose(_proposal())

    @pytest.mark.parametrize("state", [Confirmed(appointment_id="7"), Rejected()])
    def test_final_states_reject_everything(self, state) -> None:
        """Should not leave Confirmed or Rejected."""
        express = ExpressRequest(id="7", state=state)

        for action in (express.reject, express.confirm, lambda: express.propose(_proposal())):
            with pytest.raises(InvalidTransitionException):
                action()
        assert express.state == state

    def test_reject_from_requested_and_proposed(self) -> None:
        """Should allow rejecting before and after a proposal."""
        fresh = ExpressRequest(id="1")
        fresh.reject()
        proposed = ExpressRequest(id="2", state=Proposed(schedule=_proposal()))
        proposed.reject()

        assert isinstance(fresh.state, Rejected)
        assert isinstance(proposed.state, Rejected)

    def test_confirm_without_schedule_is_validation_error(self) -> None:
        """Should refuse to book an accepted request that has no schedule."""
        express = ExpressRequest(id="7", state=Proposed(schedule=None))

        with pytest.raises(ValidationException):
            express.confirm()


class TestFromAppointment:
    """Tests for ExpressRequest.from_appointment()."""

    def test_accepted_with_schedule_is_proposed(self) -> None:
        """Should read expressAceptado plus schedule as Proposed."""
        express = ExpressRequest.from_appointment(
            _express_appointment(
                express_accepted=True,
                appointment_date=THURSDAY,
                start_time=time(9),
                end_time=time(10),
            )
        )

        assert isinstance(express.state, Proposed)
        assert express.proposal == ExpressProposal(turno_id="7", date=THURSDAY, start=time(9), end=time(10))

    def test_accepted_without_schedule(self) -> None:
        """Should map a flagged row without schedule to Proposed(None)."""
        express = ExpressRequest.from_appointment(_express_appointment(express_accepted=True))

        assert express.state == Proposed(schedule=None)

    def test_accepted_with_partial_schedule(self) -> None:
        """Should treat a schedule missing its end as no proposal."""
        express = ExpressRequest.from_appointment(
            _express_appointment(express_accepted=True, appointment_date=THURSDAY, start_time=time(9))
        )

        assert express.state == Proposed(schedule=None)
        with pytest.raises(ValidationException):
            express.confirm()

    @pytest.mark.parametrize(
        "status,expected",
        [
            (AppointmentStatus.CANCELLED, Rejected),
            (AppointmentStatus.CONFIRMED, Confirmed),
            (AppointmentStatus.REALIZED, Confirmed),
        ],
    )
    def test_final_statuses(self, status: AppointmentStatus, expected: type) -> None:
        """Should map cancelled to Rejected and confirmed/realized to Confirmed."""
        express = ExpressRequest.from_appointment(_express_appointment(status=status))

        assert isinstance(express.state, expected)


# ============================================================================
# FLOW THROUGH THE SERVICE
# ============================================================================


class TestExpressFlow:
    """Tests for the express flow through AgendaService."""

    @pytest.mark.asyncio
    async def test_request_propose_confirm(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should book a confirmed express appointment with a pending payment."""
        requested = await service.request_express(PROFESSIONAL_EMAIL)
        assert requested.success
        turno_id = str(requested.request.id)

        pending = await service.list_pending_express()
        assert [str(r.id) for r in pending.requests] == [turno_id]

        proposed = await service.propose_express(turno_id, THURSDAY, "09:00", "10:00")
        assert proposed.success
        assert backend.calls_to("aceptar_turno_express")[0]["token"] == f"express-token-{turno_id}"

        confirmed = await service.confirm_express(turno_id)

        assert confirmed.success
        appointment = confirmed.appointment
        assert appointment.kind == AppointmentKind.EXPRESS
        assert appointment.status == AppointmentStatus.CONFIRMED
        assert (appointment.appointment_date, appointment.start_time, appointment.end_time) == (
            THURSDAY,
            time(9),
            time(10),
        )
        assert appointment.cost.amount == Decimal("15000.00")
        assert appointment.cost.currency == "ARS"
        assert confirmed.payment.status == PaymentStatus.PENDIENTE

        status = await service.get_payment_status(turno_id)
        assert status.status == PaymentStatus.PENDIENTE

    @pytest.mark.asyncio
    async def test_proposal_outside_window_never_reaches_backend(
        self, service: AgendaService, backend: FakeTurnosBackend
    ) -> None:
        """Should fail with INVALID_PROPOSAL_WINDOW and leave the request untouched."""
        requested = await service.request_express(PROFESSIONAL_EMAIL)
        turno_id = str(requested.request.id)

        result = await service.propose_express(turno_id, THURSDAY, "23:00", "23:30")

        assert result.success is False
        assert result.error_code == "INVALID_PROPOSAL_WINDOW"
        assert backend.calls_to("aceptar_turno_express") == []
        assert backend.calls_to("obtener_turnos_profesional") == []
        pending = await service.list_pending_express()
        assert isinstance(pending.requests[0].state, Requested)

    @pytest.mark.asyncio
    async def test_propose_unknown_turno(self, service: AgendaService) -> None:
        """Should return NOT_FOUND for a turno that is not an express request."""
        result = await service.propose_express("999", THURSDAY, "09:00", "10:00")

        assert result.error_code == "NOT_FOUND"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("estado", ["confirmado", "cancelado"])
    async def test_confirm_or_reject_final_request(
        self, service: AgendaService, backend: FakeTurnosBackend, estado: str
    ) -> None:
        """Should return INVALID_TRANSITION without calling the store."""
        backend.turnos.append(turno_row(50, THURSDAY, "09:00", "10:00", estado=estado, tipo="express"))

        confirm = await service.confirm_express("50")
        reject = await service.reject_express("50")

        assert confirm.error_code == "INVALID_TRANSITION"
        assert reject.error_code == "INVALID_TRANSITION"
        assert backend.calls_to("confirmar_turno_express") == []
        assert backend.calls_to("cancelar_turno") == []

    @pytest.mark.asyncio
    async def test_reject_proposal(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should cancel the turno and drop it from the pending list."""
        requested = await service.request_express(PROFESSIONAL_EMAIL)
        turno_id = str(requested.request.id)

        result = await service.reject_express(turno_id)

        assert result.success
        assert isinstance(result.request.state, Rejected)
        assert backend.find_turno(turno_id)["estado"] == "cancelado"
        pending = await service.list_pending_express()
        assert pending.requests == []

    @pytest.mark.asyncio
    async def test_professional_can_reject(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should let the professional turn down a request."""
        requested = await service.request_express(PROFESSIONAL_EMAIL)

        result = await service.reject_express(str(requested.request.id), PartyRole.PROFESSIONAL)

        assert result.success
        assert backend.calls_to("obtener_turnos_profesional")

    @pytest.mark.asyncio
    async def test_confirm_remote_failure(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should surface the remote error and keep the request proposed."""
        requested = await service.request_express(PROFESSIONAL_EMAIL)
        turno_id = str(requested.request.id)
        await service.propose_express(turno_id, THURSDAY, "09:00", "10:00")
        backend.fail("confirmar_turno_express", "REMOTE_UNAVAILABLE", "Servicio no disponible")

        result = await service.confirm_express(turno_id)

        assert result.success is False
        assert result.error_code == "REMOTE_UNAVAILABLE"
        assert backend.find_turno(turno_id)["estado"] == "pendiente"
