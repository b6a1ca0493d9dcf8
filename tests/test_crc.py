import zlib

import pytest

from hidremap.crc import crc32


def test_standard_check_value():
    assert crc32(b"123456789") == 0xCBF43926


def test_empty_input_is_zero():
    assert crc32(b"") == 0


@pytest.mark.parametrize(
    "data",
    [b"\x00", b"\xff", b"hello world", bytes(range(256)), b"\x00" * 4092],
)
def test_matches_zlib(data):
    assert crc32(data) == zlib.crc32(data)


def test_accepts_bytearray_and_memoryview():
    payload = b"remapper configuration"
    expected = crc32(payload)
    assert crc32(bytearray(payload)) == expected
    assert crc32(memoryview(payload)) == expected


def test_accepts_iterable_of_ints():
    payload = b"\x10\x20\x30"
    assert crc32([0x10, 0x20, 0x30]) == crc32(payload)


def test_trailing_crc_verifies():
    body = bytes(range(60))
    stored = crc32(body).to_bytes(4, "little")
    block = body + stored
    assert int.from_bytes(block[-4:], "little") == crc32(block[:-4])


def test_result_fits_32_bits():
    for size in (1, 7, 64, 300):
        value = crc32(bytes([0xA5]) * size)
        assert 0 <= value <= 0xFFFFFFFF


def test_string_rejected():
    with pytest.raises(TypeError):
        crc32("not bytes")