"""Session-scoped reward bookkeeping."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from emotion_scanner.domain.classification import ClassificationResult


@dataclass
class RewardLedger:
    """Counts reward signals for the current viewing session.

    The pulse is derived from a monotonic clock rather than a timer callback,
    so it expires on its own regardless of how often the sampler ticks.
    """

    pulse_seconds: float = 3.0
    clock: Callable[[], float] = time.monotonic
    session_count: int = 0
    _pulse_until: float | None = field(default=None, init=False, repr=False)

    @property
    def pulse_active(self) -> bool:
        """Return True while the last increment is still being shown."""
        if self._pulse_until is None:
            return False
        if self.clock() >= self._pulse_until:
            self._pulse_until = None
            return False
        return True

    def record_if_rewarded(self, result: ClassificationResult) -> bool:
        """Increment the count once for a qualifying result."""
        if not result.is_rewarded:
            return False
        self.session_count += 1
        self._pulse_until = self.clock() + self.pulse_seconds
        return True

    def reset(self) -> None:
        """Start a new session."""
        self.session_count = 0
        self._pulse_until = None
