# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Scheduling)
# Description: Circuit breaker for turnos backend calls
# ============================================================================
"""Resilience patterns for the turnos API client.

Only failures that mean "the backend is not answering" (transport errors,
timeouts, 5xx) are raised inside the breaker; business rejections (4xx) come
back as responses and never trip it.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Backend failing, calls rejected
    HALF_OPEN = "half_open"  # Probing recovery


@dataclass
class CircuitBreakerConfig:
    """Configuration for circuit breaker.

    Attributes:
        failure_threshold: Consecutive failures before opening the circuit.
        recovery_timeout: Seconds to wait before probing the backend again.
        success_threshold: Successes needed in half-open to close.
    """

    failure_threshold: int = 5
    recovery_timeout: float = 60.0
    success_threshold: int = 2


@dataclass
class CircuitBreakerState:
    """Internal state for circuit breaker."""

    state: CircuitState = CircuitState.CLOSED
    failure_count: int = 0
    success_count: int = 0
    last_failure_time: float = 0.0
    last_state_change: float = field(default_factory=time.monotonic)


class CircuitOpenError(Exception):
    """Raised when a call is attempted while the circuit is open."""

    def __init__(self, name: str, retry_in: float):
        self.name = name
        self.retry_in = retry_in
        super().__init__(f"Circuit '{name}' is open. Recovery in {retry_in:.1f}s")


class CircuitBreaker:
    """Circuit breaker shared by every request of one client.

    Example:
        >>> breaker = CircuitBreaker(name="turnos_api")
        >>> response = await breaker.call(send_request, endpoint, payload)

    States:
        - CLOSED: requests pass through, failures are counted
        - OPEN: requests fail fast with CircuitOpenError
        - HALF_OPEN: requests pass; one failure reopens, enough successes close
    """

    def __init__(
        self,
        config: CircuitBreakerConfig | None = None,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self._config = config or CircuitBreakerConfig()
        self._state = CircuitBreakerState(last_state_change=clock())
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CircuitState:
        return self._state.state

    @property
    def is_open(self) -> bool:
        return self._state.state == CircuitState.OPEN

    @property
    def is_closed(self) -> bool:
        return self._state.state == CircuitState.CLOSED

    @property
    def failure_count(self) -> int:
        return self._state.failure_count

    async def call(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Execute ``func`` with circuit breaker protection.

        Raises:
            CircuitOpenError: If the circuit is open.
            Exception: Whatever ``func`` raised (counted as a failure).
        """
        async with self._lock:
            self._maybe_half_open()
            if self._state.state == CircuitState.OPEN:
                raise CircuitOpenError(self.name, self._time_until_recovery())

        try:
            result = await func(*args, **kwargs)
        except Exception:
            await self._on_failure()
            raise
        await self._on_success()
        return result

    def _maybe_half_open(self) -> None:
        if self._state.state != CircuitState.OPEN:
            return
        if self._clock() - self._state.last_failure_time >= self._config.recovery_timeout:
            self._transition_to(CircuitState.HALF_OPEN)
            logger.info(f"Circuit '{self.name}' HALF_OPEN, probing backend")

    async def _on_success(self) -> None:
        async with self._lock:
            if self._state.state == CircuitState.HALF_OPEN:
                self._state.success_count += 1
                if self._state.success_count >= self._config.success_threshold:
                    self._transition_to(CircuitState.CLOSED)
                    logger.info(f"Circuit '{self.name}' CLOSED (backend recovered)")
            elif self._state.state == CircuitState.CLOSED:
                self._state.failure_count = 0

    async def _on_failure(self) -> None:
        async with self._lock:
            self._state.failure_count += 1
            self._state.last_failure_time = self._clock()

            if self._state.state == CircuitState.HALF_OPEN:
                self._transition_to(CircuitState.OPEN)
                logger.warning(f"Circuit '{self.name}' OPEN (failure during recovery)")
            elif (
                self._state.state == CircuitState.CLOSED
                and self._state.failure_count >= self._config.failure_threshold
            ):
                self._transition_to(CircuitState.OPEN)
                logger.warning(f"Circuit '{self.name}' OPEN after {self._state.failure_count} failures")

    def _transition_to(self, new_state: CircuitState) -> None:
        self._state.state = new_state
        self._state.last_state_change = self._clock()
        if new_state == CircuitState.HALF_OPEN:
            self._state.success_count = 0
        elif new_state == CircuitState.CLOSED:
            self._state.failure_count = 0
            self._state.success_count = 0

    def _time_until_recovery(self) -> float:
        elapsed = self._clock() - self._state.last_failure_time
        return max(0.0, self._config.recovery_timeout - elapsed)

    def reset(self) -> None:
        """Reset circuit breaker to CLOSED."""
        self._state = CircuitBreakerState(last_state_change=self._clock())
        logger.info(f"Circuit '{self.name}' reset to CLOSED")

    def get_info(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "state": self._state.state.value,
            "failure_count": self._state.failure_count,
            "retry_in": self._time_until_recovery() if self.is_open else 0.0,
        }
