"""
Unit tests for Module 2: ByteArray

Tests cover:
- Cursor movement on write and read
- Endian-dependent integer encoding
- Overwrite vs. extend semantics
- Length truncation
- Error handling at the end of the buffer
"""

import pytest

from src.module2_byte_array import ByteArray, ByteArrayError, Endian, EOFByteArrayError


class TestByteArray:
    """Test suite for ByteArray."""

    def test_initial_state(self):
        """Test a new buffer is empty, at position 0, big-endian."""
        ba = ByteArray()
        assert len(ba) == 0
        assert ba.position == 0
        assert ba.endian is Endian.BIG
        assert ba.bytes_available == 0

    def test_unsigned_int_endianness(self):
        """Test that write_unsigned_int follows the current endian."""
        ba = ByteArray()
        ba.write_unsigned_int(0x01020304)
        ba.endian = Endian.LITTLE
        ba.write_unsigned_int(0x01020304)

        assert ba.to_bytes() == b"\x01\x02\x03\x04\x04\x03\x02\x01"
        assert ba.position == 8

    def test_unsigned_int_wraps(self):
        """Test that values wrap to 32 bits like a uint store."""
        ba = ByteArray()
        ba.write_unsigned_int(-1)
        assert ba.to_bytes() == b"\xff\xff\xff\xff"

    def test_byte_and_short_wrap(self):
        """Test write_byte and write_short keep only the low 8 / 16 bits."""
        ba = ByteArray()
        ba.write_byte(300)
        ba.write_byte(-1)
        ba.write_short(70000)
        ba.endian = Endian.LITTLE
        ba.write_short(-2)

        assert ba.to_bytes() == b"\x2c\xff\x11\x70\xfe\xff"
        assert ba.position == 6

    def test_write_in_middle_overwrites(self):
        """Test that writing before the end replaces bytes in place."""
        ba = ByteArray(b"abcdef")
        ba.position = 2
        ba.write_bytes(b"XY")

        assert ba.to_bytes() == b"abXYef"
        assert ba.position == 4

    def test_write_across_end_extends(self):
        """Test that writing over the end grows the buffer."""
        ba = ByteArray(b"abc")
        ba.position = 2
        ba.write_bytes(b"XYZ")

        assert ba.to_bytes() == b"abXYZ"
        assert len(ba) == 5

    def test_write_beyond_end_zero_fills(self):
        """Test that a gap between the end and the cursor is zero filled."""
        ba = ByteArray(b"abc")
        ba.position = 5
        ba.write_bytes(b"Z")

        assert ba.to_bytes() == b"abc\x00\x00Z"

    def test_file_style_write(self):
        """Test write() returns the byte count so serializers can use it."""
        ba = ByteArray()
        assert ba.write(b"hello") == 5
        assert ba.to_bytes() == b"hello"

    def test_read_back(self):
        """Test reads advance the cursor and honour endian."""
        ba = ByteArray(b"\x00\x00\x01\x00\x2a\x00\x10")
        assert ba.read_unsigned_int() == 256
        ba.endian = Endian.LITTLE
        ba.position = 4
        assert ba.read_unsigned_byte() == 0x2a
        assert ba.read_unsigned_short() == 0x1000
        assert ba.bytes_available == 0

    def test_read_past_end_raises(self):
        """Test reading past the end raises EOFByteArrayError."""
        ba = ByteArray(b"\x01\x02")
        with pytest.raises(EOFByteArrayError, match="requested 4 bytes") as exc_info:
            ba.read_unsigned_int()

        assert exc_info.value.available == 2
        assert isinstance(exc_info.value, IndexError)
        assert isinstance(exc_info.value, ByteArrayError)
        # Failed read leaves the cursor alone
        assert ba.position == 0

    def test_length_truncates_and_clamps(self):
        """Test shrinking the length cuts data and pulls the cursor back."""
        ba = ByteArray(b"abcdef")
        ba.position = 6
        ba.length = 3

        assert ba.to_bytes() == b"abc"
        assert ba.position == 3

    def test_length_extends_with_zeros(self):
        """Test growing the length pads with zero bytes."""
        ba = ByteArray(b"ab")
        ba.truncate(4)
        assert ba.to_bytes() == b"ab\x00\x00"

    def test_negative_position_rejected(self):
        """Test that the cursor cannot go below zero."""
        ba = ByteArray()
        with pytest.raises(ValueError, match="non-negative"):
            ba.position = -1

    def test_clear(self):
        """Test clear empties the buffer and rewinds."""
        ba = ByteArray(b"abc")
        ba.position = 2
        ba.clear()
        assert len(ba) == 0
        assert ba.position == 0
