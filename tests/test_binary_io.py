"""Tests for big-endian and biased-byte primitives."""

from io import BytesIO

import pytest

from noirbin.utils.binary_io import (
    fits_signed32,
    fits_signed64,
    read_bias8,
    read_byte,
    read_uint16,
    read_uint32,
    read_uint64,
    write_bias8,
    write_byte,
    write_uint16,
    write_uint32,
    write_uint64,
)
from noirbin.utils.validation import ContractViolation


class TestWriters:
    """Test cases for primitive writers."""

    def test_big_endian_layout(self):
        """Test that multi-byte values are written MSB first."""
        out = BytesIO()
        write_uint16(out, 0x0102)
        write_uint32(out, 0x03040506)
        write_uint64(out, 0x0708090A0B0C0D0E)

        assert out.getvalue() == bytes(range(1, 15))

    def test_bias8_stores_value_plus_128(self):
        out = BytesIO()
        write_bias8(out, -128)
        write_bias8(out, 0)
        write_bias8(out, 127)

        assert out.getvalue() == bytes([0x00, 0x80, 0xFF])

    @pytest.mark.parametrize(
        "writer,value",
        [
            (write_byte, 256),
            (write_byte, -1),
            (write_uint16, 0x10000),
            (write_uint32, 0x100000000),
            (write_uint64, -1),
            (write_bias8, 128),
            (write_bias8, -129),
        ],
    )
    def test_out_of_width_rejected(self, writer, value):
        """Test that values wider than the field are a contract violation."""
        out = BytesIO()
        with pytest.raises(ContractViolation, match="out of range"):
            writer(out, value)

        assert out.getvalue() == b""


class TestReaders:
    """Test cases for primitive readers."""

    def test_read_sequence(self):
        stream = BytesIO(bytes(range(1, 16)))

        assert read_uint16(stream) == 0x0102
        assert read_uint32(stream) == 0x03040506
        assert read_uint64(stream) == 0x0708090A0B0C0D0E
        assert read_byte(stream) == 0x0F

    def test_end_of_stream_returns_none(self):
        """Test that short reads signal failure instead of a value."""
        assert read_byte(BytesIO(b"")) is None
        assert read_uint16(BytesIO(b"\x01")) is None
        assert read_uint32(BytesIO(b"\x01\x02\x03")) is None
        assert read_uint64(BytesIO(bytes(7))) is None
        assert read_bias8(BytesIO(b"")) is None

    def test_stream_error_returns_none(self):
        """Test that an OSError from the stream is a read failure."""

        class BrokenStream:
            def read(self, size):
                raise OSError("device error")

        assert read_byte(BrokenStream()) is None
        assert read_uint32(BrokenStream()) is None
        assert read_uint64(BrokenStream()) is None

    def test_high_bit_values_are_returned_raw(self):
        """Test that readers do not apply the signed range check."""
        assert read_uint32(BytesIO(b"\xff\xff\xff\xff")) == 0xFFFFFFFF
        assert read_uint64(BytesIO(b"\x80" + bytes(7))) == 1 << 63

    def test_bias8_symmetry(self):
        """Test every signed byte value survives encode then decode."""
        out = BytesIO()
        for value in range(-128, 128):
            write_bias8(out, value)

        stream = BytesIO(out.getvalue())
        decoded = [read_bias8(stream) for _ in range(256)]

        assert decoded == list(range(-128, 128))


class TestRangeChecks:
    """Test cases for the signed range checks layered on raw reads."""

    def test_fits_signed32(self):
        assert fits_signed32(0x7FFFFFFF)
        assert not fits_signed32(0x80000000)
        assert not fits_signed32(None)

    def test_fits_signed64(self):
        assert fits_signed64(0)
        assert fits_signed64((1 << 63) - 1)
        assert not fits_signed64(1 << 63)
        assert not fits_signed64(None)
