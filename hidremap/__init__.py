"""HID remapper logic: descriptor parsing, CRC-32, inter-chip messages, board definitions and GPIO/LED state machines."""

__version__ = "0.1.0"