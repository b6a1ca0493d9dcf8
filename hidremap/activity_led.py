"""Activity LED that lights on traffic and goes dark after a short delay."""

from __future__ import annotations

from typing import Callable, Optional

LED_ON_DURATION_US = 50000


class ActivityLed:
    """Tracks an activity LED; times are in microseconds."""

    def __init__(self, write: Optional[Callable[[bool], None]] = None) -> None:
        self._write = write if write is not None else (lambda state: None)
        self._lit = False
        self._turn_off_after = 0

    @property
    def lit(self) -> bool:
        return self._lit

    def on(self, now: int) -> None:
        """Light the LED and keep it lit until ``now`` plus the on duration."""
        self._lit = True
        self._write(True)
        self._turn_off_after = now + LED_ON_DURATION_US

    def off_maybe(self, now: int) -> bool:
        """Turn the LED off if its time has passed; return True if it was turned off."""
        if self._lit and now > self._turn_off_after:
            self._lit = False
            self._write(False)
            return True
        return False