"""HID report descriptor parsing and per-interface index bookkeeping."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum

HID_INPUT = 0x80
HID_OUTPUT = 0x90
HID_FEATURE = 0xB0
HID_COLLECTION = 0xA0
HID_USAGE_PAGE = 0x04
HID_REPORT_SIZE = 0x74
HID_REPORT_ID = 0x84
HID_REPORT_COUNT = 0x94
HID_USAGE = 0x08
HID_USAGE_MINIMUM = 0x18
HID_USAGE_MAXIMUM = 0x28
HID_LOGICAL_MINIMUM = 0x14
HID_LOGICAL_MAXIMUM = 0x24

_U32 = 0xFFFFFFFF
_U16 = 0xFFFF


class ReportType(IntEnum):
    """Kind of report a main item contributes to."""

    INPUT = 0
    OUTPUT = 1
    FEATURE = 2


_MAIN_ITEM_TYPES = {
    HID_INPUT: ReportType.INPUT,
    HID_OUTPUT: ReportType.OUTPUT,
    HID_FEATURE: ReportType.FEATURE,
}


@dataclass(frozen=True)
class UsageDef:
    """Where a usage lives inside a report and how its value is interpreted."""

    report_id: int
    size: int
    bitpos: int
    is_relative: bool
    logical_minimum: int
    logical_maximum: int
    is_array: bool = False
    index: int = 0
    count: int = 0
    usage_maximum: int = 0


UsageMap = dict[int, dict[int, UsageDef]]  # report_id -> usage -> definition


@dataclass
class ParsedDescriptor:
    """Everything learned from one report descriptor."""

    input_usages: UsageMap = field(default_factory=dict)
    output_usages: UsageMap = field(default_factory=dict)
    feature_usages: UsageMap = field(default_factory=dict)
    has_report_id: bool = False
    report_sizes: dict[ReportType, dict[int, int]] = field(default_factory=dict)

    def usages(self, report_type: ReportType) -> UsageMap:
        """Usage map for the given report type."""
        return {
            ReportType.INPUT: self.input_usages,
            ReportType.OUTPUT: self.output_usages,
            ReportType.FEATURE: self.feature_usages,
        }[report_type]


def _mark_usage(usage_map: UsageMap, usage: int, definition: UsageDef) -> None:
    # Reports longer than 64 bytes are not handled; skip usages beyond that.
    limit = 8 * (64 if definition.report_id == 0 else 63)
    if definition.bitpos >= limit:
        return
    usage_map.setdefault(definition.report_id, {}).setdefault(usage, definition)


def _sign_extend(value: int, nbytes: int) -> int:
    if nbytes == 0:
        return 0
    bits = nbytes * 8
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return value


def _items(data: bytes):
    idx = 0
    length = len(data)
    while idx < length:
        prefix = data[idx]
        if prefix == 0 and idx == length - 1:
            break
        item = prefix & 0xFC
        item_size = prefix & 0x03
        if item_size == 3:
            item_size = 4
        idx += 1
        if idx + item_size > length:
            raise ValueError(f"descriptor truncated at offset {idx - 1}")
        value = int.from_bytes(data[idx : idx + item_size], "little")
        idx += item_size
        yield item, item_size, value


def parse_descriptor(data: bytes | bytearray | memoryview) -> ParsedDescriptor:
    """Parse a HID report descriptor into usage locations and report sizes (bytes)."""
    data = bytes(data)
    result = ParsedDescriptor()
    bitpos: dict[ReportType, dict[int, int]] = {}

    report_id = 0
    report_size = 0
    report_count = 0
    usage_page = 0
    usages: deque[int] = deque()
    usage_minimum = 0
    usage_maximum = 0
    logical_minimum = 0
    logical_maximum = 0

    for item, item_size, value in _items(data):
        if item in _MAIN_ITEM_TYPES:
            report_type = _MAIN_ITEM_TYPES[item]
            usage_map = result.usages(report_type)
            positions = bitpos.setdefault(report_type, {})
            positions.setdefault(report_id, 0)
            relative = bool(value & 0x04)

            def define(usage: int, **extra) -> None:
                _mark_usage(
                    usage_map,
                    usage,
                    UsageDef(
                        report_id=report_id,
                        size=report_size,
                        bitpos=positions[report_id],
                        is_relative=relative,
                        logical_minimum=logical_minimum,
                        logical_maximum=logical_maximum,
                        **extra,
                    ),
                )

            def advance(bits: int) -> None:
                positions[report_id] = (positions[report_id] + bits) & _U16

            kind = value & 0x03
            if kind == 0x02:  # variable
                if usage_minimum and usage_maximum:
                    usage = usage_minimum
                    for _ in range(report_count):
                        define(usage)
                        if usage < usage_maximum:
                            usage += 1
                        advance(report_size)
                elif usages:
                    usage = 0
                    for _ in range(report_count):
                        if usages:
                            usage = usages.popleft()
                        define(usage)
                        advance(report_size)
                else:
                    advance(report_size * report_count)
            elif kind == 0x00:  # array
                if usage_minimum and usage_maximum:
                    effective_maximum = min(
                        usage_maximum,
                        (usage_minimum + logical_maximum - logical_minimum) & _U32,
                    )
                    define(
                        usage_minimum,
                        is_array=True,
                        index=logical_minimum,
                        count=report_count,
                        usage_maximum=effective_maximum,
                    )
                elif usages:
                    for index in range(logical_minimum, logical_maximum + 1):
                        usage = usages.popleft()
                        define(usage, is_array=True, index=index, count=report_count)
                        if not usages:
                            # Further indices would only repeat the last usage.
                            break
                advance(report_size * report_count)
            else:  # constant
                advance(report_size * report_count)

            usages.clear()
            usage_minimum = 0
            usage_maximum = 0
        elif item == HID_COLLECTION:
            usages.clear()
            usage_minimum = 0
            usage_maximum = 0
        elif item == HID_USAGE_PAGE:
            usage_page = value
        elif item == HID_REPORT_SIZE:
            report_size = value
        elif item == HID_REPORT_ID:
            report_id = value & 0xFF
            result.has_report_id = True
        elif item == HID_REPORT_COUNT:
            report_count = value
        elif item in (HID_USAGE, HID_USAGE_MINIMUM, HID_USAGE_MAXIMUM):
            full_usage = ((usage_page << 16) | value) & _U32 if item_size <= 2 else value
            if item == HID_USAGE:
                usages.append(full_usage)
            elif item == HID_USAGE_MINIMUM:
                usage_minimum = full_usage
            else:
                usage_maximum = full_usage
        elif item == HID_LOGICAL_MINIMUM:
            logical_minimum = _sign_extend(value, item_size)
        elif item == HID_LOGICAL_MAXIMUM:
            logical_maximum = _sign_extend(value, item_size)

    result.report_sizes = {
        report_type: {rid: bits // 8 for rid, bits in positions.items()}
        for report_type, positions in bitpos.items()
    }
    return result


class InterfaceIndexAllocator:
    """Hands out a small unique index (0-31) to each device interface."""

    MAX_INDEX = 31

    def __init__(self) -> None:
        self._index: dict[int, int] = {}
        self._in_use = 0

    @property
    def in_use(self) -> int:
        """Bit mask of indices currently handed out."""
        return self._in_use

    def __contains__(self, interface: int) -> bool:
        return interface in self._index

    def __getitem__(self, interface: int) -> int:
        return self._index[interface]

    def __len__(self) -> int:
        return len(self._index)

    def assign(self, interface: int) -> int:
        """Return the interface's index, allocating the lowest free one if needed."""
        if interface in self._index:
            return self._index[interface]
        i = 0
        while i < self.MAX_INDEX and (self._in_use >> i) & 1:
            i += 1
        # Beyond 32 interfaces, the extra ones share the last index.
        self._index[interface] = i
        self._in_use |= 1 << i
        return i

    def release_device(self, dev_addr: int) -> list[int]:
        """Free the indices of all interfaces of a device; return those interfaces."""
        released = sorted(itf for itf in self._index if itf >> 8 == dev_addr)
        for interface in released:
            index = self._index.pop(interface)
            self._in_use &= ~(1 << index)
        return released