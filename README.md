# hidremap

Pure-Python building blocks for an HID remapper: the parts of a remapper's
logic that do not depend on a particular microcontroller, written as plain
functions, dataclasses and small state machines that you drive yourself.

## Modules

- `hidremap.crc` – `crc32(data)`, the reflected CRC-32 (IEEE 802.3) used to
  guard persisted configuration and configuration reports.
- `hidremap.dual` – the messages exchanged between the two chips of a
  dual-chip remapper. `DualCommand` lists the command bytes; each message is a
  frozen dataclass (`DeviceConnected`, `DeviceDisconnected`, `ReportReceived`,
  `RequestBInit`, `BInit`, `Restart`, `SendOutReport`, `StartOfFrame`,
  `SetFeatureReport`, `GetFeatureReport`, `GetFeatureResponse`,
  `SetFeatureComplete`, `MidiReceived`). `encode_message(message)` packs a
  message into its little-endian wire form and `decode_message(data)` parses
  it back, raising `ValueError` on unknown commands, truncated messages or
  unexpected trailing bytes.
- `hidremap.boards` – static definitions of the supported RP2040/RP2350
  boards: `Board`, `get_board(name)` (raises `KeyError` for unknown names),
  `board_names()`, and `Board.valid_pins()` for the GPIO numbers a board
  allows.
- `hidremap.activity_led` – `ActivityLed`, which lights on `on(now)` and goes
  dark in `off_maybe(now)` once 50 ms (times in microseconds) have passed.
  An optional callback receives each LED state change.
- `hidremap.descriptor_parser` – `parse_descriptor(data)` turns an HID report
  descriptor into a `ParsedDescriptor`: `UsageDef` entries per report ID for
  input, output and feature reports (`ReportType`), whether report IDs are
  used, and each report's size in bytes. Usages that would lie beyond a
  64-byte report are skipped. `InterfaceIndexAllocator` hands out a small
  index (0–31) per device interface with `assign(interface)` and frees them
  with `release_device(dev_addr)`.
- `hidremap.gpio` – `GpioController` assigns pins with
  `set_inout_masks(in_mask, out_mask)` (a pin in both masks is an input),
  debounces active-low inputs with `read(pin_levels, now)` returning
  `GpioEvent`s, and turns four bytes of output state into a `GpioOutput`
  with `output(out_state)` according to `GpioOutputMode` (`PUSH_PULL` or
  `OPEN_DRAIN`). `unique_id_from_bytes(data)` combines an 8-byte board id
  into an integer.
- `hidremap.bt_led` – the status LED of the Bluetooth variant: `LedMode` and
  `LedBlinker`, whose `step()` returns a `LedStep` (LED state and delay to the
  next step) and blinks once per connected device followed by a pause.
  `button_action(held_ms)` returns a `ButtonAction`: releases after more than
  3000 ms clear bonds, shorter ones pair a new device.
- `hidremap.bt_central` – decisions of the Bluetooth central role:
  `decide_scan(peers_only, bonded_count, conn_count)` returns a
  `ScanDecision`; `patch_broken_uuid(uuid128)` recovers the 16-bit UUID from
  a malformed 128-bit one; `strip_report_id(report_with_id)` drops a leading
  zero report ID; `validate_persisted_config(data, size)` checks the size of
  a stored configuration blob.

## Example

```python
from hidremap.crc import crc32
from hidremap.descriptor_parser import ReportType, parse_descriptor
from hidremap.dual import DeviceDisconnected, decode_message, encode_message

assert crc32(b"123456789") == 0xCBF43926

# Three mouse buttons followed by five bits of padding
parsed = parse_descriptor(bytes([
    0x05, 0x01, 0x09, 0x02, 0xA1, 0x01, 0x09, 0x01, 0xA1, 0x00,
    0x05, 0x09, 0x19, 0x01, 0x29, 0x03, 0x15, 0x00, 0x25, 0x01,
    0x95, 0x03, 0x75, 0x01, 0x81, 0x02, 0x95, 0x01, 0x75, 0x05,
    0x81, 0x03, 0xC0, 0xC0,
]))
assert parsed.input_usages[0][0x00090002].bitpos == 1
assert parsed.report_sizes[ReportType.INPUT][0] == 1

wire = encode_message(DeviceDisconnected(dev_addr=1, interface=0))
assert wire == b"\x02\x01\x00"
assert decode_message(wire) == DeviceDisconnected(dev_addr=1, interface=0)
```

## What this package does not do

It talks to no hardware: there is no USB device or host stack, no Bluetooth
stack, no flash storage and no mapping engine that turns input reports into
output reports. The classes here keep state and compute results; reading pins,
writing LEDs, sending reports and storing configuration are left to the
caller. The package provides no command-line program.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```

The package has no runtime dependencies and supports Python 3.10 and later.