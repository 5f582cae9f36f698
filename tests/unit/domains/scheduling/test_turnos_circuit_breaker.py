# ============================================================================
# Tests for CircuitBreaker
# ============================================================================
"""Unit tests for the circuit breaker state machine."""

import pytest

from agenda_turnos.domains.scheduling.infrastructure.external.turnos_api import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitOpenError,
    CircuitState,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def _ok() -> str:
    return "ok"


async def _boom() -> str:
    raise ConnectionError("backend down")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def breaker(clock: FakeClock) -> CircuitBreaker:
    config = CircuitBreakerConfig(failure_threshold=2, recovery_timeout=10.0, success_threshold=2)
    return CircuitBreaker(config, name="test", clock=clock)


async def _trip(breaker: CircuitBreaker) -> None:
    for _ in range(2):
        with pytest.raises(ConnectionError):
            await breaker.call(_boom)


class TestCircuitBreaker:
    """Tests for CircuitBreaker transitions."""

    @pytest.mark.asyncio
    async def test_opens_after_threshold(self, breaker: CircuitBreaker) -> None:
        """Should open after consecutive failures and reject calls."""
        await _trip(breaker)

        assert breaker.state == CircuitState.OPEN
        with pytest.raises(CircuitOpenError) as exc_info:
            await breaker.call(_ok)
        assert exc_info.value.retry_in == pytest.approx(10.0)

    @pytest.mark.asyncio
    async def test_success_resets_failure_count(self, breaker: CircuitBreaker) -> None:
        """Should only count consecutive failures."""
        with pytest.raises(ConnectionError):
            await breaker.call(_boom)
        await breaker.call(_ok)

        assert breaker.failure_count == 0
        assert breaker.is_closed

    @pytest.mark.asyncio
    async def test_half_open_recovers(self, breaker: CircuitBreaker, clock: FakeClock) -> None:
        """Should allow a trial call after the recovery timeout and close after enough successes."""
        await _trip(breaker)
        clock.now += 10.0

        await breaker.call(_ok)
        assert breaker.state == CircuitState.HALF_OPEN
        await breaker.call(_ok)

        assert breaker.is_closed

    @pytest.mark.asyncio
    async def test_failure_while_half_open_reopens(self, breaker: CircuitBreaker, clock: FakeClock) -> None:
        """Should go back to OPEN when the trial call fails."""
        await _trip(breaker)
        clock.now += 11.0

        with pytest.raises(ConnectionError):
            await breaker.call(_boom)

        assert breaker.is_open

    @pytest.mark.asyncio
    async def test_reset(self, breaker: CircuitBreaker) -> None:
        """Should return to CLOSED on reset."""
        await _trip(breaker)

        breaker.reset()

        assert breaker.get_info() == {"name": "test", "state": "closed", "failure_count": 0, "retry_in": 0.0}
