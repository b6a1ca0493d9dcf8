"""Messages exchanged between the two halves of a dual-chip remapper."""

from __future__ import annotations

import struct
from dataclasses import dataclass, fields
from enum import IntEnum
from typing import ClassVar, Optional, Union


class DualCommand(IntEnum):
    """First byte of every message on the inter-chip link."""

    DEVICE_CONNECTED = 1
    DEVICE_DISCONNECTED = 2
    REPORT_RECEIVED = 3
    REQUEST_B_INIT = 4
    B_INIT = 5
    RESTART = 6
    SEND_OUT_REPORT = 7
    START_OF_FRAME = 8
    SET_FEATURE_REPORT = 9
    GET_FEATURE_REPORT = 10
    GET_FEATURE_RESPONSE = 11
    SET_FEATURE_COMPLETE = 12
    MIDI_RECEIVED = 13


@dataclass(frozen=True)
class DeviceConnected:
    """A HID interface appeared on the host side, with its report descriptor."""

    vid: int
    pid: int
    dev_addr: int
    interface: int
    hub_port: int
    itf_num: int
    report_descriptor: bytes = b""

    command: ClassVar[DualCommand] = DualCommand.DEVICE_CONNECTED
    _layout: ClassVar[struct.Struct] = struct.Struct("<HHBBBB")
    _tail: ClassVar[Optional[str]] = "report_descriptor"


@dataclass(frozen=True)
class DeviceDisconnected:
    """A HID interface went away."""

    dev_addr: int
    interface: int

    command: ClassVar[DualCommand] = DualCommand.DEVICE_DISCONNECTED
    _layout: ClassVar[struct.Struct] = struct.Struct("<BB")
    _tail: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class ReportReceived:
    """An input report arrived from a device."""

    dev_addr: int
    interface: int
    report: bytes = b""

    command: ClassVar[DualCommand] = DualCommand.REPORT_RECEIVED
    _layout: ClassVar[struct.Struct] = struct.Struct("<BB")
    _tail: ClassVar[Optional[str]] = "report"


@dataclass(frozen=True)
class RequestBInit:
    """The host side asks for its initial settings."""

    command: ClassVar[DualCommand] = DualCommand.REQUEST_B_INIT
    _layout: ClassVar[struct.Struct] = struct.Struct("<")
    _tail: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class BInit:
    """Initial settings sent to the host side."""

    interval_override: int

    command: ClassVar[DualCommand] = DualCommand.B_INIT
    _layout: ClassVar[struct.Struct] = struct.Struct("<B")
    _tail: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class Restart:
    """Ask the other side to restart."""

    command: ClassVar[DualCommand] = DualCommand.RESTART
    _layout: ClassVar[struct.Struct] = struct.Struct("<")
    _tail: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class SendOutReport:
    """An output report to be delivered to a device."""

    dev_addr: int
    interface: int
    report_id: int
    report: bytes = b""

    command: ClassVar[DualCommand] = DualCommand.SEND_OUT_REPORT
    _layout: ClassVar[struct.Struct] = struct.Struct("<BBB")
    _tail: ClassVar[Optional[str]] = "report"


@dataclass(frozen=True)
class StartOfFrame:
    """USB start-of-frame tick forwarded to the host side."""

    command: ClassVar[DualCommand] = DualCommand.START_OF_FRAME
    _layout: ClassVar[struct.Struct] = struct.Struct("<")
    _tail: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class SetFeatureReport:
    """A feature report to be written to a device."""

    dev_addr: int
    interface: int
    report_id: int
    report: bytes = b""

    command: ClassVar[DualCommand] = DualCommand.SET_FEATURE_REPORT
    _layout: ClassVar[struct.Struct] = struct.Struct("<BBB")
    _tail: ClassVar[Optional[str]] = "report"


@dataclass(frozen=True)
class GetFeatureReport:
    """Request to read a feature report of a given length from a device."""

    dev_addr: int
    interface: int
    report_id: int
    len: int

    command: ClassVar[DualCommand] = DualCommand.GET_FEATURE_REPORT
    _layout: ClassVar[struct.Struct] = struct.Struct("<BBBB")
    _tail: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class GetFeatureResponse:
    """The feature report read from a device."""

    dev_addr: int
    interface: int
    report_id: int
    report: bytes = b""

    command: ClassVar[DualCommand] = DualCommand.GET_FEATURE_RESPONSE
    _layout: ClassVar[struct.Struct] = struct.Struct("<BBB")
    _tail: ClassVar[Optional[str]] = "report"


@dataclass(frozen=True)
class SetFeatureComplete:
    """A feature report write has finished."""

    dev_addr: int
    interface: int
    report_id: int

    command: ClassVar[DualCommand] = DualCommand.SET_FEATURE_COMPLETE
    _layout: ClassVar[struct.Struct] = struct.Struct("<BBB")
    _tail: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class MidiReceived:
    """A four-byte USB-MIDI event packet from a device."""

    hub_port: int
    msg: bytes

    command: ClassVar[DualCommand] = DualCommand.MIDI_RECEIVED
    _layout: ClassVar[struct.Struct] = struct.Struct("<B4s")
    _tail: ClassVar[Optional[str]] = None

    def __post_init__(self) -> None:
        msg = bytes(self.msg)
        if len(msg) != 4:
            raise ValueError(f"MIDI message must be 4 bytes, got {len(msg)}")
        object.__setattr__(self, "msg", msg)


Message = Union[
    DeviceConnected,
    DeviceDisconnected,
    ReportReceived,
    RequestBInit,
    BInit,
    Restart,
    SendOutReport,
    StartOfFrame,
    SetFeatureReport,
    GetFeatureReport,
    GetFeatureResponse,
    SetFeatureComplete,
    MidiReceived,
]

_REGISTRY: dict[DualCommand, type] = {
    cls.command: cls
    for cls in (
        DeviceConnected,
        DeviceDisconnected,
        ReportReceived,
        RequestBInit,
        BInit,
        Restart,
        SendOutReport,
        StartOfFrame,
        SetFeatureReport,
        GetFeatureReport,
        GetFeatureResponse,
        SetFeatureComplete,
        MidiReceived,
    )
}


def encode_message(message: Message) -> bytes:
    """Serialise a message to its packed little-endian wire form."""
    cls = type(message)
    if _REGISTRY.get(getattr(cls, "command", None)) is not cls:
        raise TypeError(f"not a link message: {message!r}")
    tail_name = cls._tail
    names = [f.name for f in fields(message) if f.name != tail_name]
    try:
        header = cls._layout.pack(*(getattr(message, name) for name in names))
    except struct.error as exc:
        raise ValueError(f"cannot encode {cls.__name__}: {exc}") from exc
    tail = bytes(getattr(message, tail_name)) if tail_name else b""
    return bytes([cls.command]) + header + tail


def decode_message(data: bytes | bytearray | memoryview) -> Message:
    """Parse a message from its wire form."""
    data = bytes(data)
    if not data:
        raise ValueError("empty message")
    try:
        command = DualCommand(data[0])
    except ValueError:
        raise ValueError(f"unknown command {data[0]}") from None
    cls = _REGISTRY[command]
    body = data[1:]
    size = cls._layout.size
    if len(body) < size:
        raise ValueError(f"{cls.__name__} truncated: need {size} bytes, got {len(body)}")
    values = cls._layout.unpack_from(body)
    if cls._tail:
        return cls(*values, body[size:])
    if len(body) != size:
        raise ValueError(f"{cls.__name__} has {len(body) - size} unexpected trailing bytes")
    return cls(*values)