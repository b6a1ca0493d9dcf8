"""GPIO pin handling: debounced active-low inputs and masked outputs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

DEFAULT_DEBOUNCE_TIME_US = 5000
_SCANNED_PINS = range(30)
_U32 = 0xFFFFFFFF


class GpioOutputMode(IntEnum):
    """How output pins express their state."""

    PUSH_PULL = 0  # pins are driven high or low
    OPEN_DRAIN = 1  # pins are driven low when active, left floating otherwise


@dataclass(frozen=True)
class GpioEvent:
    """A debounced change on an input pin; inputs are active low."""

    pin: int
    pressed: bool


@dataclass(frozen=True)
class GpioOutput:
    """Pin levels and directions to apply to the pins in ``mask``."""

    levels: int
    directions: int
    mask: int


class GpioController:
    """Tracks input/output pin assignment, input debouncing and output state."""

    def __init__(
        self,
        valid_pins_mask: int,
        debounce_time: int = DEFAULT_DEBOUNCE_TIME_US,
        output_mode: GpioOutputMode = GpioOutputMode.PUSH_PULL,
    ) -> None:
        self.valid_pins_mask = valid_pins_mask & _U32
        self.debounce_time = debounce_time
        self.output_mode = GpioOutputMode(output_mode)
        self.suspended = False
        self.direction_pending = False
        self._in_mask = 0
        self._out_mask = 0
        self._prev_state = 0
        self._last_change = [0] * 32

    @property
    def in_mask(self) -> int:
        return self._in_mask

    @property
    def out_mask(self) -> int:
        return self._out_mask

    @property
    def pull_up_mask(self) -> int:
        """Pins that get pull-ups: the valid input pins among GPIO 0-29."""
        scanned = sum(1 << pin for pin in _SCANNED_PINS)
        return self._in_mask & self.valid_pins_mask & scanned

    def set_inout_masks(self, in_mask: int, out_mask: int) -> None:
        """Assign pins; a pin in both masks is an input, all non-outputs read as inputs."""
        self._out_mask = (out_mask & ~in_mask) & self.valid_pins_mask
        self._in_mask = self.valid_pins_mask & ~self._out_mask
        self.direction_pending = True

    def read(self, pin_levels: int, now: int) -> list[GpioEvent]:
        """Feed raw pin levels sampled at ``now`` (µs); return accepted changes."""
        state = pin_levels & self._in_mask
        changed = self._prev_state ^ state
        if not changed:
            return []
        events = []
        for pin in _SCANNED_PINS:
            bit = 1 << pin
            if not changed & bit:
                continue
            if self._last_change[pin] + self.debounce_time <= now:
                events.append(GpioEvent(pin=pin, pressed=not state & bit))
                self._last_change[pin] = now
            else:
                state ^= bit  # ignore this change until the pin settles
        self._prev_state = state
        return events

    def output(self, out_state: bytes | bytearray) -> Optional[GpioOutput]:
        """Turn four bytes of output state into pin settings; None while suspended."""
        if self.suspended:
            return None
        data = bytes(out_state)
        if len(data) != 4:
            raise ValueError(f"output state must be 4 bytes, got {len(data)}")
        value = int.from_bytes(data, "little")
        mask = self._out_mask
        if self.output_mode is GpioOutputMode.PUSH_PULL:
            return GpioOutput(levels=value & mask, directions=mask, mask=mask)
        return GpioOutput(levels=0, directions=value & mask, mask=mask)


def unique_id_from_bytes(data: bytes | bytearray) -> int:
    """Combine an 8-byte board id into an integer, first byte most significant."""
    raw = bytes(data)
    if len(raw) != 8:
        raise ValueError(f"unique id must be 8 bytes, got {len(raw)}")
    return int.from_bytes(raw, "big")