"""CRC-32 checksum used to protect persisted configuration and config reports."""

from __future__ import annotations

from collections.abc import Iterable

_POLYNOMIAL = 0xEDB88320


def _make_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (c >> 1) ^ _POLYNOMIAL if c & 1 else c >> 1
        table.append(c)
    return tuple(table)


_TABLE = _make_table()


def crc32(data: bytes | bytearray | memoryview | Iterable[int]) -> int:
    """Return the reflected CRC-32 (IEEE 802.3) of ``data`` as an unsigned int."""
    c = 0xFFFFFFFF
    for byte in data:
        c = _TABLE[(c ^ byte) & 0xFF] ^ (c >> 8)
    return c ^ 0xFFFFFFFF