# ============================================================================
# Tests for availability and slot use cases
# ============================================================================
"""Use case tests for reading, editing and projecting availability."""

from datetime import date, time
from unittest.mock import AsyncMock

import pytest
from scheduling_fakes import PROFESSIONAL_EMAIL, FakeTurnosBackend

from agenda_turnos.domains.scheduling.application.dto import SetAvailabilityRequest
from agenda_turnos.domains.scheduling.application.ports import ExternalResponse
from agenda_turnos.domains.scheduling.application.services import AgendaService, SchedulingCache
from agenda_turnos.domains.scheduling.application.use_cases import SetAvailabilityUseCase
from agenda_turnos.domains.scheduling.domain.services import AvailabilityValidator
from agenda_turnos.domains.scheduling.domain.value_objects import TimeBlock, Weekday


class TestAvailabilityValidator:
    """Tests for AvailabilityValidator.validate()."""

    @pytest.fixture
    def validator(self) -> AvailabilityValidator:
        return AvailabilityValidator(minute_step=5, max_block_minutes=60)

    def test_valid_schedule(self, validator: AvailabilityValidator) -> None:
        """Should keep every valid block."""
        result = validator.validate(
            {"lunes": [("08:00", "09:00"), ("09:00", "10:00")], "Miércoles": [("14:05", "15:00")]}
        )

        assert result.is_valid
        assert result.availability.weekdays() == [Weekday.LUNES, Weekday.MIERCOLES]
        assert result.availability.block_count == 3

    @pytest.mark.parametrize(
        "blocks,reason",
        [
            ([("8:00", "09:00")], "invalid_format"),
            ([("09:00", "09:00")], "invalid_range"),
            ([("10:00", "09:00")], "invalid_range"),
            ([("08:03", "09:00")], "minute_step"),
            ([("08:00", "09:30")], "too_long"),
        ],
    )
    def test_block_rules(self, validator: AvailabilityValidator, blocks: list, reason: str) -> None:
        """Should report the failed rule for each invalid block."""
        result = validator.validate({"martes": blocks})

        assert [issue.reason for issue in result.issues] == [reason]
        assert result.availability.is_empty

    def test_overlap_keeps_first_block(self, validator: AvailabilityValidator) -> None:
        """Should flag the later of two overlapping blocks."""
        result = validator.validate({"jueves": [("09:00", "10:00"), ("09:30", "10:15")]})

        assert [(i.index, i.reason) for i in result.issues] == [(1, "overlap")]
        assert result.availability.blocks_for(Weekday.JUEVES) == [TimeBlock(start=time(9), end=time(10))]

    def test_unknown_weekday(self, validator: AvailabilityValidator) -> None:
        """Should flag blocks under an unknown day name."""
        result = validator.validate({"funday": [("09:00", "10:00")]})

        assert result.issues[0].reason == "unknown_weekday"

    def test_remove_invalid_blocks(self, validator: AvailabilityValidator) -> None:
        """Should return only the valid blocks."""
        cleaned = validator.remove_invalid_blocks({"viernes": [("09:00", "10:00"), ("11:00", "10:00")]})

        assert cleaned.block_count == 1


class TestSetAvailability:
    """Tests for AgendaService.set_availability()."""

    @pytest.mark.asyncio
    async def test_invalid_blocks_are_not_sent(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should list every issue and skip the store."""
        result = await service.set_availability(
            PROFESSIONAL_EMAIL,
            {"lunes": [("08:00", "09:00"), ("10:00", "09:00")], "martes": [("07:02", "08:00")]},
        )

        assert result.error_code == "INVALID_AVAILABILITY"
        assert [(i.weekday, i.index, i.reason) for i in result.issues] == [
            ("lunes", 1, "invalid_range"),
            ("martes", 0, "minute_step"),
        ]
        assert result.error_details["issues"][0]["reason"] == "invalid_range"
        assert backend.calls_to("establecer_disponibilidad") == []

    @pytest.mark.asyncio
    async def test_saves_and_invalidates(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should send the horarios payload and serve the new availability afterwards."""
        first = await service.get_professional_availability(PROFESSIONAL_EMAIL)
        assert first.availability.is_empty

        result = await service.set_availability(
            PROFESSIONAL_EMAIL,
            {"martes": [("14:00", "15:00")], "lunes": [("08:00", "09:00")]},
        )

        assert result.success
        assert backend.calls_to("establecer_disponibilidad")[0]["horarios"] == {
            "lunes": [{"inicio": "08:00", "fin": "09:00"}],
            "martes": [{"inicio": "14:00", "fin": "15:00"}],
        }
        second = await service.get_professional_availability(PROFESSIONAL_EMAIL)
        assert second.availability.weekdays() == [Weekday.LUNES, Weekday.MARTES]

    @pytest.mark.asyncio
    async def test_store_failure(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should return the backend error."""
        backend.fail("establecer_disponibilidad", "REMOTE_REJECTED", "No autorizado")

        result = await service.set_availability(PROFESSIONAL_EMAIL, {"lunes": [("08:00", "09:00")]})

        assert result.error_code == "REMOTE_REJECTED"
        assert result.error_message == "No autorizado"


class TestGetAvailability:
    """Tests for AgendaService.get_professional_availability()."""

    @pytest.mark.asyncio
    async def test_skips_bad_rows(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should keep good rows and report the skipped ones."""
        backend.availability[PROFESSIONAL_EMAIL] = [
            {"dia_semana": "Sábado", "hora_inicio": "09:00:00", "hora_fin": "12:00:00"},
            {"dia_semana": "feriado", "hora_inicio": "09:00:00", "hora_fin": "12:00:00"},
            {"dia_semana": "lunes", "hora_inicio": "12:00:00", "hora_fin": "09:00:00"},
        ]

        result = await service.get_professional_availability(PROFESSIONAL_EMAIL)

        assert result.success
        assert result.availability.weekdays() == [Weekday.SABADO]
        assert [s.reason for s in result.report.skipped] == ["unknown_weekday", "invalid_range"]
        assert result.data == {"weekdays": ["sabado"]}

    @pytest.mark.asyncio
    async def test_remote_failure(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should return the error code of the failed read."""
        backend.fail("obtener_disponibilidad", "NOT_FOUND", "Profesional no encontrado")

        result = await service.get_professional_availability("nadie@mail.com")

        assert result.error_code == "NOT_FOUND"


class TestGetWeekSlots:
    """Tests for AgendaService.get_week_slots()."""

    @pytest.mark.asyncio
    async def test_slots_are_cached(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should fetch availability once for repeated reads of a window."""
        backend.availability[PROFESSIONAL_EMAIL] = [
            {"dia_semana": "viernes", "hora_inicio": "09:00:00", "hora_fin": "10:00:00"}
        ]

        first = await service.get_week_slots(PROFESSIONAL_EMAIL)
        second = await service.get_week_slots(PROFESSIONAL_EMAIL)

        assert first.data == {"total_slots": 1}
        assert second.week == first.week
        assert len(backend.calls_to("obtener_disponibilidad")) == 1

    @pytest.mark.asyncio
    async def test_next_window(self, service: AgendaService) -> None:
        """Should start the next window seven days later."""
        result = await service.get_week_slots(PROFESSIONAL_EMAIL, week_offset=1)

        assert result.week.days[0].date == date(2025, 11, 25)
        assert result.week.can_go_back

    @pytest.mark.asyncio
    async def test_negative_offset(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should reject navigating before the current window."""
        result = await service.get_week_slots(PROFESSIONAL_EMAIL, week_offset=-1)

        assert result.error_code == "VALIDATION_ERROR"
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_overtaken_read_is_stale(self, service: AgendaService, backend: FakeTurnosBackend) -> None:
        """Should flag a read invalidated while in flight and not cache it."""
        original = backend.obtener_disponibilidad

        async def racing(email_profesional: str):
            service.cache.invalidate_professional(email_profesional)
            return await original(email_profesional)

        backend.obtener_disponibilidad = racing

        result = await service.get_week_slots(PROFESSIONAL_EMAIL)
        backend.obtener_disponibilidad = original
        again = await service.get_week_slots(PROFESSIONAL_EMAIL)

        assert result.success
        assert result.stale is True
        assert again.stale is False
        assert len(backend.calls_to("obtener_disponibilidad")) == 2


class TestSetAvailabilityUseCase:
    """Tests for SetAvailabilityUseCase with a mocked store."""

    @pytest.fixture
    def mock_store(self) -> AsyncMock:
        store = AsyncMock()
        store.establecer_disponibilidad.return_value = ExternalResponse.ok({"message": "ok"})
        return store

    @pytest.mark.asyncio
    async def test_invalidates_professional_caches(self, mock_store: AsyncMock) -> None:
        """Should drop the professional's availability and slot windows only."""
        cache = SchedulingCache()
        keys = [
            cache.availability_key(PROFESSIONAL_EMAIL),
            cache.slots_key(PROFESSIONAL_EMAIL, 0),
            cache.availability_key("otro@mail.com"),
        ]
        for key in keys:
            await cache.store(key, cache.begin_read(key), "value")
        use_case = SetAvailabilityUseCase(mock_store, cache, AvailabilityValidator())

        result = await use_case.execute(SetAvailabilityRequest(PROFESSIONAL_EMAIL, {"lunes": [("08:00", "09:00")]}))

        assert result.success
        mock_store.establecer_disponibilidad.assert_awaited_once_with({"lunes": [{"inicio": "08:00", "fin": "09:00"}]})
        assert cache.stats["size"] == 1
        assert await cache.get(cache.availability_key("otro@mail.com")) == "value"

    @pytest.mark.asyncio
    async def test_rejects_without_store_call(self, mock_store: AsyncMock) -> None:
        """Should never call the store with invalid blocks."""
        use_case = SetAvailabilityUseCase(mock_store, SchedulingCache())

        result = await use_case.execute(SetAvailabilityRequest(PROFESSIONAL_EMAIL, {"lunes": [("09:00", "08:00")]}))

        assert result.success is False
        mock_store.establecer_disponibilidad.assert_not_awaited()
