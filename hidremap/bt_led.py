"""Status LED blinking and pairing-button handling of the Bluetooth variant."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Optional

CLEAR_BONDS_BUTTON_PRESS_MS = 3000
BLINK_ON_MS = 100
BLINK_OFF_MS = 100
BLINK_PAUSE_MS = 1000


class LedMode(IntEnum):
    OFF = 0
    ON = 1
    BLINK = 2


@dataclass(frozen=True)
class LedStep:
    """Result of one LED update: the LED state and when to update next (None: not again)."""

    lit: bool
    next_ms: Optional[int]


class LedBlinker:
    """Status LED: off, on, or blinking once per connected device, then a pause."""

    def __init__(self, write: Optional[Callable[[bool], None]] = None) -> None:
        self._write = write if write is not None else (lambda state: None)
        self.mode = LedMode.OFF
        self.blink_count = 0
        self._blinks_left = 0
        self._next_blink_state = True

    def set_mode(self, mode: LedMode) -> bool:
        """Change mode; return True if it differed and the LED should be updated now."""
        mode = LedMode(mode)
        changed = mode is not self.mode
        self.mode = mode
        return changed

    def step(self) -> LedStep:
        """Update the LED according to the mode."""
        if self.mode is LedMode.OFF:
            return self._set(False, None)
        if self.mode is LedMode.ON:
            return self._set(True, None)
        if self._next_blink_state:
            if self._blinks_left > 0:
                self._blinks_left -= 1
                self._next_blink_state = False
                return self._set(True, BLINK_ON_MS)
            self._blinks_left = self.blink_count
            return self._set(False, BLINK_PAUSE_MS)
        self._next_blink_state = True
        return self._set(False, BLINK_OFF_MS)

    def _set(self, lit: bool, next_ms: Optional[int]) -> LedStep:
        self._write(lit)
        return LedStep(lit=lit, next_ms=next_ms)


class ButtonAction(Enum):
    PAIR_NEW_DEVICE = "pair_new_device"
    CLEAR_BONDS = "clear_bonds"


def button_action(held_ms: int) -> ButtonAction:
    """What a button release after ``held_ms`` milliseconds does."""
    if held_ms > CLEAR_BONDS_BUTTON_PRESS_MS:
        return ButtonAction.CLEAR_BONDS
    return ButtonAction.PAIR_NEW_DEVICE