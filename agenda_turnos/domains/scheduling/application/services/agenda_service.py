# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Facade wiring the scheduling use cases, cache and backend.
# ============================================================================
"""Agenda Service.

Single entry point for callers (UI, scripts). Builds every use case over one
backend and one cache so invalidations made by a mutation are seen by the
next read.

Usage:
    service = create_agenda_service(token_provider=lambda: session.token)

    week = await service.get_week_slots("medico@mail.com", week_offset=0)
    result = await service.book_appointment("medico@mail.com", date(2025, 11, 20), time(9), time(10))

    await service.close()
"""

from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime, time
from typing import TYPE_CHECKING

from agenda_turnos.config.settings import Settings, get_settings
from agenda_turnos.core.shared.logger import configure_logging, get_service_logger

from ...domain.services import AvailabilityValidator, ExpressProposalPolicy, SlotGenerator
from ...domain.value_objects import AppointmentKind, PartyRole
from ..dto import (
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
    WeekSlotsResult,
)
from ..use_cases import (
    BookAppointmentUseCase,
    CancelAppointmentUseCase,
    ConfirmExpressAppointmentUseCase,
    GetAppointmentsWithPaymentsUseCase,
    GetPatientAppointmentsUseCase,
    GetPaymentStatusUseCase,
    GetProfessionalAppointmentsUseCase,
    GetProfessionalAvailabilityUseCase,
    GetWeekSlotsUseCase,
    ListPendingExpressRequestsUseCase,
    MarkAppointmentPaidUseCase,
    MarkAppointmentRealizedUseCase,
    ProposeExpressScheduleUseCase,
    RejectExpressAppointmentUseCase,
    RequestExpressAppointmentUseCase,
    SetAvailabilityUseCase,
)
from .scheduling_cache import SchedulingCache
from .scheduling_reader import SchedulingReader

if TYPE_CHECKING:
    from ..ports import ITurnosBackend

logger = get_service_logger("agenda")


class AgendaService:
    """Facade over the scheduling use cases.

    Every method returns the use case result object; no method raises for
    business or remote errors.
    """

    def __init__(
        self,
        backend: "ITurnosBackend",
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize service.

        Args:
            backend: Implementation of every scheduling port.
            settings: Engine settings (defaults to ``get_settings()``).
            clock: Current local time provider (defaults to ``datetime.now``).
        """
        self._settings = settings or get_settings()
        self._backend = backend
        clock = clock or datetime.now
        currency = self._settings.DEFAULT_CURRENCY

        self.cache = SchedulingCache(ttl=self._settings.CACHE_TTL_SECONDS, max_size=self._settings.CACHE_MAX_SIZE)
        self.reader = SchedulingReader(backend, backend, backend, cache=self.cache, currency=currency)

        validator = AvailabilityValidator(
            minute_step=self._settings.AVAILABILITY_MINUTE_STEP,
            max_block_minutes=self._settings.AVAILABILITY_MAX_BLOCK_MINUTES,
        )
        policy = ExpressProposalPolicy(
            window_start_hour=self._settings.EXPRESS_WINDOW_START_HOUR,
            window_end_hour=self._settings.EXPRESS_WINDOW_END_HOUR,
        )

        # Availability
        self._get_availability = GetProfessionalAvailabilityUseCase(self.reader)
        self._get_week_slots = GetWeekSlotsUseCase(self.reader, SlotGenerator(), clock)
        self._set_availability = SetAvailabilityUseCase(backend, self.cache, validator)

        # Appointments
        self._book = BookAppointmentUseCase(backend, self.reader, self._get_week_slots, clock)
        self._cancel = CancelAppointmentUseCase(backend, self.reader)
        self._mark_realized = MarkAppointmentRealizedUseCase(backend, self.reader)
        self._patient_appointments = GetPatientAppointmentsUseCase(self.reader)
        self._professional_appointments = GetProfessionalAppointmentsUseCase(self.reader)

        # Express
        self._request_express = RequestExpressAppointmentUseCase(backend, self.cache)
        self._pending_express = ListPendingExpressRequestsUseCase(self.reader)
        self._propose_express = ProposeExpressScheduleUseCase(backend, self.reader, policy, clock)
        self._confirm_express = ConfirmExpressAppointmentUseCase(backend, self.reader, currency)
        self._reject_express = RejectExpressAppointmentUseCase(backend, self.reader)

        # Payments
        self._payment_status = GetPaymentStatusUseCase(self.reader)
        self._mark_paid = MarkAppointmentPaidUseCase(backend, self.reader)
        self._with_payments = GetAppointmentsWithPaymentsUseCase(self.reader)

    # =========================================================================
    # Availability
    # =========================================================================

    async def get_professional_availability(self, professional_ref: str) -> AvailabilityResult:
        return await self._get_availability.execute(GetProfessionalAvailabilityRequest(professional_ref))

    async def get_week_slots(self, professional_ref: str, week_offset: int = 0) -> WeekSlotsResult:
        return await self._get_week_slots.execute(GetWeekSlotsRequest(professional_ref, week_offset))

    async def set_availability(
        self,
        professional_ref: str,
        schedule: Mapping[str, Sequence[tuple[str, str]]],
    ) -> SetAvailabilityResult:
        request = SetAvailabilityRequest(
            professional_ref=professional_ref,
            schedule={day: list(blocks) for day, blocks in schedule.items()},
        )
        return await self._set_availability.execute(request)

    # =========================================================================
    # Appointments
    # =========================================================================

    async def book_appointment(
        self,
        professional_ref: str,
        appointment_date: date,
        start_time: time,
        end_time: time,
        kind: AppointmentKind = AppointmentKind.CONSULTA,
    ) -> BookAppointmentResult:
        result = await self._book.execute(
            BookAppointmentRequest(professional_ref, appointment_date, start_time, end_time, kind)
        )
        if not result.success:
            logger.info("Booking failed", professional=professional_ref, error_code=result.error_code)
        return result

    async def cancel_appointment(
        self,
        appointment_id: str,
        requested_by: PartyRole = PartyRole.PATIENT,
    ) -> AppointmentResult:
        return await self._cancel.execute(CancelAppointmentRequest(appointment_id, requested_by))

    async def mark_appointment_realized(self, appointment_id: str) -> AppointmentResult:
        return await self._mark_realized.execute(MarkAppointmentRealizedRequest(appointment_id))

    async def get_patient_appointments(
        self,
        professional_ref: str | None = None,
        include_cancelled: bool = True,
    ) -> AppointmentListResult:
        return await self._patient_appointments.execute(GetAppointmentsRequest(professional_ref, include_cancelled))

    async def get_professional_appointments(self, include_cancelled: bool = True) -> AppointmentListResult:
        return await self._professional_appointments.execute(
            GetAppointmentsRequest(include_cancelled=include_cancelled)
        )

    # =========================================================================
    # Express
    # =========================================================================

    async def request_express(self, professional_ref: str) -> ExpressRequestResult:
        return await self._request_express.execute(RequestExpressAppointmentRequest(professional_ref))

    async def list_pending_express(self) -> ExpressListResult:
        return await self._pending_express.execute()

    async def propose_express(
        self,
        turno_id: str,
        proposed_date: date | None,
        start: str | None,
        end: str | None,
    ) -> ExpressRequestResult:
        return await self._propose_express.execute(ProposeExpressScheduleRequest(turno_id, proposed_date, start, end))

    async def confirm_express(self, turno_id: str) -> ConfirmExpressResult:
        result = await self._confirm_express.execute(ConfirmExpressAppointmentRequest(turno_id))
        if result.success:
            logger.info("Express appointment confirmed", turno_id=turno_id)
        return result

    async def reject_express(
        self,
        turno_id: str,
        requested_by: PartyRole = PartyRole.PATIENT,
    ) -> ExpressRequestResult:
        return await self._reject_express.execute(RejectExpressAppointmentRequest(turno_id, requested_by))

    # =========================================================================
    # Payments
    # =========================================================================

    async def get_payment_status(
        self,
        appointment_id: str,
        requested_by: PartyRole = PartyRole.PATIENT,
    ) -> PaymentStatusResult:
        return await self._payment_status.execute(GetPaymentStatusRequest(appointment_id, requested_by))

    async def mark_paid(
        self,
        appointment_id: str,
        requested_by: PartyRole = PartyRole.PATIENT,
    ) -> PaymentStatusResult:
        return await self._mark_paid.execute(MarkAppointmentPaidRequest(appointment_id, requested_by))

    async def get_appointments_with_payments(self, party: PartyRole = PartyRole.PATIENT) -> PaymentOverlayResult:
        return await self._with_payments.execute(party)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def invalidate_all(self) -> None:
        """Drop every cached query (e.g. after logout or a user switch)."""
        self.cache.clear()

    async def close(self) -> None:
        """Close the backend connections."""
        await self._backend.close()
        logger.debug("Agenda service closed")


def create_agenda_service(
    settings: Settings | None = None,
    token_provider: Callable[[], object] | None = None,
    clock: Callable[[], datetime] | None = None,
    setup_logging: bool = False,
) -> AgendaService:
    """Build an AgendaService over the REST client configured in settings.

    With ``setup_logging`` the root logger is configured from LOG_LEVEL and
    LOG_FORMAT first (scripts and standalone use).
    """
    from ...infrastructure.external.turnos_api import CircuitBreakerConfig, TurnosApiClient

    settings = settings or get_settings()
    if setup_logging:
        configure_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)
    client = TurnosApiClient(
        base_url=settings.TURNOS_API_BASE_URL,
        token_provider=token_provider,
        timeout=settings.TURNOS_API_TIMEOUT,
        circuit_breaker_config=CircuitBreakerConfig(
            failure_threshold=settings.CIRCUIT_BREAKER_FAILURE_THRESHOLD,
            recovery_timeout=settings.CIRCUIT_BREAKER_RECOVERY_TIMEOUT,
        ),
    )
    logger.info("Agenda service created", base_url=settings.TURNOS_API_BASE_URL)
    return AgendaService(client, settings, clock)
