# ============================================================================
# Shared fixtures for Scheduling domain tests
# ============================================================================
"""Fixtures for the scheduling tests (backend fake, fixed clock, service)."""

import pytest
from scheduling_fakes import FIXED_NOW, FakeTurnosBackend, MutableClock

from agenda_turnos.config.settings import Settings
from agenda_turnos.domains.scheduling.application.services import AgendaService

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(FIXED_NOW)


@pytest.fixture
def backend() -> FakeTurnosBackend:
    return FakeTurnosBackend()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def service(backend: FakeTurnosBackend, settings: Settings, clock: MutableClock) -> AgendaService:
    return AgendaService(backend, settings, clock=clock)
