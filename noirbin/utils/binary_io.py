"""
Big-endian integer primitives for NRB streams.

All multi-byte values are stored most significant byte first. Signed
pitch values are stored in a single byte with a bias of 128:

    stored = value + 128        value in [-128, 127]

Readers return None when the stream ends before the value is complete
or the stream raises OSError. They never reject a value for being
outside the format's semantic range; that check is layered on top by
the caller (see fits_signed64).

Writers raise ContractViolation for values that do not fit the field
width. Errors raised by the stream itself propagate unchanged.
"""

import struct
from typing import BinaryIO, Optional

from noirbin.constants import (
    BIAS8,
    MAX_BIAS8,
    MAX_INT32,
    MAX_INT64,
    MAX_UINT8,
    MAX_UINT16,
    MAX_UINT32,
    MAX_UINT64,
    MIN_BIAS8,
)
from noirbin.utils.validation import ContractViolation, is_int

_UINT16 = struct.Struct(">H")
_UINT32 = struct.Struct(">I")
_UINT64 = struct.Struct(">Q")


def _read_exact(stream: BinaryIO, size: int) -> Optional[bytes]:
    try:
        data = stream.read(size)
    except OSError:
        return None
    if data is None or len(data) != size:
        return None
    return data


def _check_width(value, high: int, name: str) -> None:
    if not is_int(value) or not 0 <= value <= high:
        raise ContractViolation(f"{name} value out of range: {value!r}")


# Writers


def write_byte(stream: BinaryIO, value: int) -> None:
    """Write an unsigned 8-bit value."""
    _check_width(value, MAX_UINT8, "uint8")
    stream.write(bytes((value,)))


def write_uint16(stream: BinaryIO, value: int) -> None:
    """Write an unsigned 16-bit big-endian value."""
    _check_width(value, MAX_UINT16, "uint16")
    stream.write(_UINT16.pack(value))


def write_uint32(stream: BinaryIO, value: int) -> None:
    """Write an unsigned 32-bit big-endian value."""
    _check_width(value, MAX_UINT32, "uint32")
    stream.write(_UINT32.pack(value))


def write_uint64(stream: BinaryIO, value: int) -> None:
    """Write an unsigned 64-bit big-endian value."""
    _check_width(value, MAX_UINT64, "uint64")
    stream.write(_UINT64.pack(value))


def write_bias8(stream: BinaryIO, value: int) -> None:
    """
    Write a signed value as a biased byte.

    Args:
        stream: Output stream
        value: Signed value in [-128, 127]
    """
    if not is_int(value) or not MIN_BIAS8 <= value <= MAX_BIAS8:
        raise ContractViolation(f"bias8 value out of range: {value!r}")
    stream.write(bytes((value + BIAS8,)))


# Readers


def read_byte(stream: BinaryIO) -> Optional[int]:
    """Read an unsigned 8-bit value, or None at end of stream."""
    data = _read_exact(stream, 1)
    if data is None:
        return None
    return data[0]


def read_uint16(stream: BinaryIO) -> Optional[int]:
    """Read an unsigned 16-bit big-endian value, or None at end of stream."""
    data = _read_exact(stream, 2)
    if data is None:
        return None
    return _UINT16.unpack(data)[0]


def read_uint32(stream: BinaryIO) -> Optional[int]:
    """Read an unsigned 32-bit big-endian value, or None at end of stream."""
    data = _read_exact(stream, 4)
    if data is None:
        return None
    return _UINT32.unpack(data)[0]


def read_uint64(stream: BinaryIO) -> Optional[int]:
    """Read an unsigned 64-bit big-endian value, or None at end of stream."""
    data = _read_exact(stream, 8)
    if data is None:
        return None
    return _UINT64.unpack(data)[0]


def read_bias8(stream: BinaryIO) -> Optional[int]:
    """
    Read a biased byte and return the signed value.

    Returns:
        Value in [-128, 127], or None at end of stream
    """
    value = read_byte(stream)
    if value is None:
        return None
    return value - BIAS8


# Range checks layered over raw reads


def fits_signed32(value: Optional[int]) -> bool:
    """Check that a raw 32-bit read is present and has its top bit clear."""
    return value is not None and value <= MAX_INT32


def fits_signed64(value: Optional[int]) -> bool:
    """Check that a raw 64-bit read is present and has its top bit clear."""
    return value is not None and value <= MAX_INT64
