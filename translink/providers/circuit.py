"""
Per-provider circuit breaker.

A provider that fails `failure_threshold` times in a row is skipped for
`cooldown_seconds`. Once the cooldown has elapsed a single trial request is
let through (half-open); its outcome either closes the circuit or restarts
the cooldown.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from translink.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CircuitState:
    """Failure bookkeeping for one provider."""
    consecutive_failures: int = 0
    opened_at: Optional[float] = None
    trial_in_flight: bool = False


class CircuitBreaker:
    """Tracks provider health and decides whether a provider may be called."""

    def __init__(
        self,
        failure_threshold: int = 3,
        cooldown_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.failure_threshold = max(1, int(failure_threshold))
        self.cooldown_seconds = float(cooldown_seconds)
        self._clock = clock
        self._states: Dict[str, CircuitState] = {}
        self._lock = threading.Lock()

    def _state(self, name: str) -> CircuitState:
        state = self._states.get(name)
        if state is None:
            state = CircuitState()
            self._states[name] = state
        return state

    def allow(self, name: str) -> bool:
        """Return True when the provider may be called now."""
        with self._lock:
            state = self._state(name)
            if state.opened_at is None:
                return True
            if self._clock() - state.opened_at < self.cooldown_seconds:
                return False
            if state.trial_in_flight:
                return False
            state.trial_in_flight = True
            logger.info(f"Circuit for '{name}' half-open, allowing a trial request")
            return True

    def record_success(self, name: str) -> None:
        with self._lock:
            state = self._state(name)
            if state.opened_at is not None:
                logger.info(f"Circuit for '{name}' closed")
            state.consecutive_failures = 0
            state.opened_at = None
            state.trial_in_flight = False

    def record_failure(self, name: str) -> None:
        with self._lock:
            state = self._state(name)
            state.consecutive_failures += 1
            state.trial_in_flight = False
            if state.opened_at is not None or state.consecutive_failures >= self.failure_threshold:
                state.opened_at = self._clock()
                logger.warning(
                    f"Circuit for '{name}' open after {state.consecutive_failures} consecutive failures; "
                    f"skipping it for {self.cooldown_seconds:.0f}s"
                )

    def release_trial(self, name: str) -> None:
        """Give back a half-open trial that ended without an outcome (e.g. cancellation)."""
        with self._lock:
            state = self._states.get(name)
            if state is not None:
                state.trial_in_flight = False

    def is_open(self, name: str) -> bool:
        """True while the provider is inside its cooldown window."""
        with self._lock:
            state = self._states.get(name)
            if state is None or state.opened_at is None:
                return False
            return self._clock() - state.opened_at < self.cooldown_seconds

    def reset(self) -> None:
        with self._lock:
            self._states.clear()
