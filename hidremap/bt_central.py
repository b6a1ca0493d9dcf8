"""Scanning policy and data checks of the Bluetooth central variant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .bt_led import LedMode

PERSISTED_CONFIG_SIZE = 2048
_UUID128_LEN = 16
_UUID16_POSITIONS = (12, 13)


@dataclass(frozen=True)
class ScanDecision:
    """Outcome of setting up scan filters.

    ``scan`` says whether scanning should start, ``filter_by_address`` whether
    only bonded peers are accepted, ``peers_only`` the updated pairing state
    and ``led_mode`` what the status LED should show afterwards.
    """

    scan: bool
    filter_by_address: bool
    peers_only: bool
    led_mode: LedMode


def decide_scan(peers_only: bool, bonded_count: int, conn_count: int) -> ScanDecision:
    """Decide whether and how to scan given the bond and connection counts."""
    if bonded_count < 0 or conn_count < 0:
        raise ValueError("counts must not be negative")
    if peers_only and bonded_count > 0:
        if conn_count == bonded_count:
            # All bonded peers are connected: nothing to look for.
            return ScanDecision(
                scan=False,
                filter_by_address=False,
                peers_only=True,
                led_mode=LedMode.BLINK,
            )
        return ScanDecision(
            scan=True,
            filter_by_address=True,
            peers_only=True,
            led_mode=LedMode.BLINK,
        )
    return ScanDecision(
        scan=True,
        filter_by_address=False,
        peers_only=False,
        led_mode=LedMode.ON,
    )


def patch_broken_uuid(uuid128: bytes | bytearray) -> Optional[int]:
    """Return the 16-bit UUID hidden in a malformed 128-bit one, or None.

    Some devices report 16-bit UUIDs as 128-bit values that are zero apart
    from bytes 12 and 13 (little-endian order) instead of using the Bluetooth
    base UUID. Such values are mapped back to their 16-bit form.
    """
    raw = bytes(uuid128)
    if len(raw) != _UUID128_LEN:
        raise ValueError(f"128-bit UUID must be 16 bytes, got {len(raw)}")
    if any(byte for i, byte in enumerate(raw) if i not in _UUID16_POSITIONS):
        return None
    return raw[13] << 8 | raw[12]


def strip_report_id(report_with_id: bytes | bytearray) -> bytes:
    """Drop a leading zero report ID before sending a report over USB."""
    report = bytes(report_with_id)
    if not report:
        raise ValueError("report is empty")
    if report[0] == 0:
        return report[1:]
    return report


def validate_persisted_config(
    data: bytes | bytearray, size: int = PERSISTED_CONFIG_SIZE
) -> bytes:
    """Check that a stored configuration blob has exactly the expected size."""
    blob = bytes(data)
    if len(blob) != size:
        raise ValueError(f"persisted config must be {size} bytes, got {len(blob)}")
    return blob