import uuid

import pytest

from hidremap.bt_central import (
    PERSISTED_CONFIG_SIZE,
    ScanDecision,
    decide_scan,
    patch_broken_uuid,
    strip_report_id,
    validate_persisted_config,
)
from hidremap.bt_led import LedMode


def _le(text: str) -> bytes:
    return uuid.UUID(text).bytes[::-1]


def test_all_bonded_peers_connected_stops_scanning():
    decision = decide_scan(True, 2, 2)
    assert decision == ScanDecision(
        scan=False, filter_by_address=False, peers_only=True, led_mode=LedMode.BLINK
    )


def test_missing_bonded_peer_scans_by_address():
    decision = decide_scan(True, 2, 1)
    assert decision.scan
    assert decision.filter_by_address
    assert decision.peers_only
    assert decision.led_mode is LedMode.BLINK


def test_no_bonds_scans_for_new_peers():
    decision = decide_scan(True, 0, 0)
    assert decision.scan
    assert not decision.filter_by_address
    assert not decision.peers_only
    assert decision.led_mode is LedMode.ON


@pytest.mark.parametrize("bonded,conn", [(0, 0), (3, 3), (3, 1)])
def test_pairing_mode_always_scans_for_new_peers(bonded, conn):
    decision = decide_scan(False, bonded, conn)
    assert decision.scan
    assert not decision.filter_by_address
    assert decision.peers_only is False


def test_negative_counts_rejected():
    with pytest.raises(ValueError):
        decide_scan(True, -1, 0)


def test_broken_uuid_is_patched():
    raw = _le("00002a4a-0000-0000-0000-000000000000")
    assert patch_broken_uuid(raw) == 0x2A4A


def test_proper_base_uuid_left_alone():
    raw = _le("00002a4a-0000-1000-8000-00805f9b34fb")
    assert patch_broken_uuid(raw) is None


def test_patch_uuid_wrong_length():
    with pytest.raises(ValueError):
        patch_broken_uuid(bytes(15))


def test_strip_zero_report_id():
    assert strip_report_id(bytes([0, 1, 2, 3])) == bytes([1, 2, 3])


def test_nonzero_report_id_kept():
    report = bytes([5, 1, 2])
    assert strip_report_id(report) == report


def test_strip_empty_report_rejected():
    with pytest.raises(ValueError):
        strip_report_id(b"")


def test_persisted_config_default_size():
    blob = bytes(range(256)) * (PERSISTED_CONFIG_SIZE // 256)
    assert validate_persisted_config(blob) == blob
    assert PERSISTED_CONFIG_SIZE == 2048


def test_persisted_config_explicit_size():
    assert validate_persisted_config(bytearray(b"abcd"), 4) == b"abcd"


@pytest.mark.parametrize("length", [0, PERSISTED_CONFIG_SIZE - 1, PERSISTED_CONFIG_SIZE + 1])
def test_persisted_config_wrong_size(length):
    with pytest.raises(ValueError):
        validate_persisted_config(bytes(length))