"""Per-provider circuit breaker with lazy cooldown expiry."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

import structlog

from jobfit_core.models.provider import CircuitState

logger = structlog.get_logger()


class CircuitBreaker:
    """Two-state (closed/open) breaker guarding calls to one flaky upstream.

    The circuit opens once ``failure_threshold`` consecutive failures are
    recorded and closes again the first time ``is_open`` is queried after
    ``cooldown_seconds`` have elapsed. Any success closes it immediately.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 3,
        cooldown_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize a closed breaker."""
        self.name = name
        self.failure_threshold = failure_threshold
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._failure_count = 0
        self._opened_at: float | None = None

    @property
    def failure_count(self) -> int:
        """Consecutive failures recorded since the last reset."""
        with self._lock:
            return self._failure_count

    @property
    def opened_at(self) -> float | None:
        """Clock time the circuit opened, or None while closed."""
        with self._lock:
            return self._opened_at

    def is_open(self) -> bool:
        """Return True while calls should be short-circuited."""
        with self._lock:
            if self._opened_at is None:
                return False
            if self._clock() - self._opened_at > self.cooldown_seconds:
                self._failure_count = 0
                self._opened_at = None
                logger.info("circuit_closed", provider=self.name, reason="cooldown_elapsed")
                return False
            return True

    def record_success(self) -> None:
        """Close the circuit and clear the failure count."""
        with self._lock:
            self._failure_count = 0
            self._opened_at = None

    def record_failure(self) -> None:
        """Count a failure, opening the circuit at the threshold."""
        with self._lock:
            self._failure_count += 1
            if self._failure_count >= self.failure_threshold and self._opened_at is None:
                self._opened_at = self._clock()
                logger.warning(
                    "circuit_opened",
                    provider=self.name,
                    failures=self._failure_count,
                    cooldown_seconds=self.cooldown_seconds,
                )

    def reset(self) -> None:
        """Force the breaker back to a fresh closed state."""
        self.record_success()

    def snapshot(self) -> CircuitState:
        """Return the current state as a plain model."""
        with self._lock:
            return CircuitState(failure_count=self._failure_count, opened_at=self._opened_at)
