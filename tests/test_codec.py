"""Unit tests for the chunk header codec."""
import pytest
from wavqc.audio.codec import encode_ascii, encode_uint32, read_ascii, read_uint
from wavqc.core.errors import BufferUnderrun


def test_read_uint_little_endian():
    """Test 16- and 32-bit little-endian decoding."""
    buffer = bytes([0x40, 0x1F, 0x00, 0x00, 0x01, 0x00])

    assert read_uint(buffer, 4, 0) == 8000
    assert read_uint(buffer, 2, 0) == 8000
    assert read_uint(buffer, 2, 4) == 1


def test_read_uint_rejects_other_widths():
    """Only 2- and 4-byte integers are supported."""
    with pytest.raises(ValueError):
        read_uint(b"\x00" * 8, 3, 0)


def test_read_past_end_raises_underrun():
    """Out-of-range reads must never be tolerated."""
    with pytest.raises(BufferUnderrun) as exc_info:
        read_uint(b"\x01\x02\x03", 4, 0)
    assert exc_info.value.available == 3

    with pytest.raises(BufferUnderrun):
        read_uint(b"\x01\x02\x03\x04", 2, 3)

    with pytest.raises(BufferUnderrun):
        read_ascii(b"RIF", 4, 0)

    with pytest.raises(BufferUnderrun):
        read_ascii(b"RIFF", 4, -1)


def test_read_ascii_at_offset():
    """Test fixed-length tag decoding."""
    buffer = b"RIFF\x24\x00\x00\x00WAVE"

    assert read_ascii(buffer, 4, 0) == "RIFF"
    assert read_ascii(buffer, 4, 8) == "WAVE"


def test_encode_matches_decode_layout():
    """Encoders produce the on-disk byte layout."""
    assert encode_uint32(36) == b"\x24\x00\x00\x00"
    assert encode_ascii("data") == b"data"
    assert read_uint(encode_uint32(0xFFFFFFFF), 4, 0) == 0xFFFFFFFF
