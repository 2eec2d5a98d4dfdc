"""Bounded little-endian integer and fixed-length ASCII helpers for chunk headers."""
import struct
from wavqc.core.errors import BufferUnderrun

_UINT_FORMATS = {2: "<H", 4: "<I"}


def _check_window(buffer: bytes, length: int, offset: int) -> None:
    if offset < 0 or offset + length > len(buffer):
        raise BufferUnderrun(offset, length, len(buffer))


def read_uint(buffer: bytes, length: int, offset: int) -> int:
    """
    Decode an unsigned little-endian integer.

    Args:
        buffer: Source bytes
        length: Field width in bytes, 2 or 4
        offset: Position of the first byte

    Returns:
        Decoded value
    """
    if length not in _UINT_FORMATS:
        raise ValueError(f"Unsupported integer width: {length}")
    _check_window(buffer, length, offset)
    return struct.unpack_from(_UINT_FORMATS[length], buffer, offset)[0]


def read_ascii(buffer: bytes, length: int, offset: int) -> str:
    """Decode `length` bytes at `offset` as one character per byte."""
    _check_window(buffer, length, offset)
    return bytes(buffer[offset:offset + length]).decode("latin-1")


def encode_uint32(value: int) -> bytes:
    """Encode an unsigned 32-bit little-endian integer."""
    return struct.pack("<I", value)


def encode_ascii(text: str) -> bytes:
    """Encode a tag such as "RIFF" back to its raw bytes."""
    return text.encode("latin-1")
