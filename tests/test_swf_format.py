# file: tests/test_swf_format.py

"""
Unit tests for Module 1: SWF Container Format.

Test coverage:
    - RECT bit packing and signed field widths
    - Header layout of the uncompressed writer
    - Compressed containers (CWS / ZWS) read back to the same header
    - Tag header encoding and tag stream walking
    - Failure modes and exceptions
"""

import io
import struct

import pytest

from src.module1_swf_format import (
    END_TAG,
    END_TAG_SIZE,
    Compression,
    DecompressionError,
    InvalidFieldError,
    InvalidSignatureError,
    Rectangle,
    SwfHeader,
    Tag,
    TagCode,
    TruncatedHeaderError,
    find_file_attributes,
    from_pixels,
    iter_tag_headers,
    read_swf_header,
    to_pixels,
    write_rectangle,
    write_swf,
    write_swf_header,
    write_tag_header,
)
from src.module1_swf_format.bit_io import BitReader, BitWriter, count_sbits


def make_header(compression=Compression.NONE, **overrides):
    fields = {
        'version': 10,
        'stage_size': Rectangle(x_min=0, x_max=11000, y_min=0, y_max=8000),
        'frame_rate': 24.0,
        'num_frames': 1,
        'compression': compression,
    }
    fields.update(overrides)
    return SwfHeader(**fields)


def write_to_bytes(header, tags):
    buffer = io.BytesIO()
    written = write_swf(header, tags, buffer)
    assert written == len(buffer.getvalue())
    return buffer.getvalue()


class TestBitIO:
    """Test bit-level packing helpers."""

    def test_count_sbits(self):
        """Test signed bit widths, including the zero and -1 special cases."""
        assert count_sbits(0) == 0
        assert count_sbits(-1) == 1
        assert count_sbits(1) == 2
        assert count_sbits(-2) == 2
        assert count_sbits(11000) == 15

    def test_writer_reader_signed_values(self):
        """Test that signed values survive packing at a shared width."""
        writer = BitWriter()
        writer.write_ubits(5, 12)
        writer.write_sbits(12, -1000)
        writer.write_sbits(12, 2047)

        reader = BitReader(writer.to_bytes())
        assert reader.read_ubits(5) == 12
        assert reader.read_sbits(12) == -1000
        assert reader.read_sbits(12) == 2047
        assert reader.bytes_consumed == 4

    def test_value_too_wide_raises(self):
        """Test that overflowing a field width is rejected."""
        writer = BitWriter()
        with pytest.raises(InvalidFieldError, match="does not fit"):
            writer.write_ubits(3, 8)
        with pytest.raises(InvalidFieldError, match="does not fit"):
            writer.write_sbits(4, 8)

    def test_reader_past_end_raises(self):
        """Test that reading beyond the buffer raises TruncatedHeaderError."""
        reader = BitReader(b"\xff")
        with pytest.raises(TruncatedHeaderError):
            reader.read_ubits(9)


class TestRectangle:
    """Test RECT encoding."""

    def test_zero_rectangle_is_one_byte(self):
        """Test that an all-zero rectangle only stores its 5-bit width."""
        assert write_rectangle(Rectangle()) == b"\x00"

    def test_small_rectangle_layout(self):
        """Test exact bit layout: x_min, x_max, y_min, y_max order."""
        # nbits=2: 00010 00 01 00 01 + padding
        assert write_rectangle(Rectangle(x_min=0, x_max=1, y_min=0, y_max=1)) == b"\x10\x88"

    def test_negative_coordinate(self):
        """Test that -1 is stored in a single signed bit."""
        assert write_rectangle(Rectangle(x_min=-1)) == b"\x0c\x00"

    def test_stage_rectangle_size(self):
        """Test that a 550x400 stage needs 15-bit fields (9 bytes)."""
        rect = Rectangle(x_min=0, x_max=11000, y_min=0, y_max=8000)
        assert len(write_rectangle(rect)) == 9

    def test_twips_conversion(self):
        """Test twips to pixels and back."""
        assert to_pixels(11000) == 550.0
        assert to_pixels(8000) == 400.0
        assert to_pixels(-30) == -1.5
        assert from_pixels(550) == 11000


class TestWriter:
    """Test the container writer."""

    def test_empty_tag_stream_layout(self):
        """Test the exact bytes of a minimal uncompressed container."""
        header = make_header(stage_size=Rectangle())
        data = write_to_bytes(header, [])

        expected = (
            b"FWS" + bytes([10]) + struct.pack('<I', 15) +
            b"\x00" +          # RECT, nbits=0
            b"\x00\x18" +      # 24.0 fps, 8.8 fixed
            b"\x01\x00" +      # 1 frame
            END_TAG
        )
        assert data == expected

    def test_implicit_end_tag_always_written(self):
        """Test that the writer terminates even an empty tag stream."""
        data = write_to_bytes(make_header(), [])
        assert data.endswith(END_TAG)

    def test_length_field_covers_whole_file(self):
        """Test that bytes 4..8 hold the total uncompressed length."""
        tags = [Tag(TagCode.SHOW_FRAME), Tag(TagCode.SET_BACKGROUND_COLOR, b"\xff\x00\x00")]
        data = write_to_bytes(make_header(), tags)
        assert struct.unpack('<I', data[4:8])[0] == len(data)

    def test_bare_header_matches_writer_minus_end_tag(self):
        """Test that write_swf_header agrees with write_swf for an empty tag stream."""
        header = make_header()
        full = write_to_bytes(header, [])

        bare = io.BytesIO()
        header_length = write_swf_header(header, bare)

        assert header_length == len(full) - END_TAG_SIZE
        # Identical apart from the length field
        assert bare.getvalue()[:4] == full[:4]
        assert bare.getvalue()[8:] == full[8:header_length]
        assert bare.getvalue()[4:8] == b"\x00\x00\x00\x00"

    def test_bare_header_rejects_compression(self):
        """Test that write_swf_header only writes uncompressed headers."""
        with pytest.raises(InvalidFieldError, match="compressed"):
            write_swf_header(make_header(Compression.ZLIB), io.BytesIO())

    def test_invalid_fields(self):
        """Test out-of-range header fields."""
        with pytest.raises(InvalidFieldError, match="version"):
            write_to_bytes(make_header(version=256), [])
        with pytest.raises(InvalidFieldError, match="Frame rate"):
            write_to_bytes(make_header(frame_rate=256.0), [])
        with pytest.raises(InvalidFieldError, match="Frame count"):
            write_to_bytes(make_header(num_frames=70000), [])


class TestReader:
    """Test reading containers back."""

    @pytest.mark.parametrize("compression", list(Compression))
    def test_header_survives_each_compression(self, compression):
        """Test that every signature reads back to the header that was written."""
        header = make_header(compression, frame_rate=29.5, num_frames=12)
        tags = [Tag(TagCode.SHOW_FRAME)] * 12
        data = write_to_bytes(header, tags)

        swf_buf = read_swf_header(data)

        assert data[:3] == compression.signature
        assert swf_buf.header == header
        assert swf_buf.header_length == 21
        assert swf_buf.data == b"\x40\x00" * 12 + END_TAG
        assert swf_buf.uncompressed_length == 21 + 24 + 2

    def test_compressed_output_is_smaller(self):
        """Test that a repetitive body actually gets compressed."""
        tags = [Tag(TagCode.SET_BACKGROUND_COLOR, b"\x00\x00\x00")] * 500
        plain = write_to_bytes(make_header(Compression.NONE), tags)
        zlib_data = write_to_bytes(make_header(Compression.ZLIB), tags)
        lzma_data = write_to_bytes(make_header(Compression.LZMA), tags)

        assert len(zlib_data) < len(plain)
        assert len(lzma_data) < len(plain)

    def test_invalid_signature(self):
        """Test that unknown signatures are rejected."""
        with pytest.raises(InvalidSignatureError, match="signature"):
            read_swf_header(b"XWS\x0a\x10\x00\x00\x00\x00\x00")

    def test_truncated_preamble(self):
        """Test input shorter than the 8-byte preamble."""
        with pytest.raises(TruncatedHeaderError, match="too short") as exc_info:
            read_swf_header(b"FWS\x0a")
        assert exc_info.value.available == 4

    def test_truncated_header_body(self):
        """Test a container that ends inside the frame rate field."""
        data = write_to_bytes(make_header(), [])
        with pytest.raises(TruncatedHeaderError):
            read_swf_header(data[:18])

    def test_corrupt_zlib_body(self):
        """Test that a broken zlib body raises DecompressionError."""
        data = b"CWS\x0a" + struct.pack('<I', 100) + b"definitely not zlib"
        with pytest.raises(DecompressionError, match="zlib"):
            read_swf_header(data)

    def test_truncated_lzma_prefix(self):
        """Test a ZWS container too short to hold its LZMA properties."""
        with pytest.raises(TruncatedHeaderError, match="LZMA"):
            read_swf_header(b"ZWS\x0a" + struct.pack('<I', 100) + b"\x00\x00")


class TestTags:
    """Test tag header encoding and walking."""

    def test_short_and_long_tag_headers(self):
        """Test the 0x3f long-form boundary."""
        assert write_tag_header(1, 0x3e) == b"\x7e\x00"
        assert write_tag_header(1, 0x3f) == b"\x7f\x00\x3f\x00\x00\x00"
        assert write_tag_header(0, 0) == END_TAG

    def test_iter_tag_headers(self):
        """Test walking a stream with short and long tags."""
        stream = (
            write_tag_header(TagCode.FILE_ATTRIBUTES, 4) + b"\x08\x00\x00\x00" +
            write_tag_header(TagCode.SHOW_FRAME, 0) +
            write_tag_header(TagCode.SET_BACKGROUND_COLOR, 100) + bytes(100) +
            END_TAG +
            b"trailing bytes after the end tag"
        )

        assert list(iter_tag_headers(stream)) == [
            (TagCode.FILE_ATTRIBUTES, 4, 2),
            (TagCode.SHOW_FRAME, 0, 8),
            (TagCode.SET_BACKGROUND_COLOR, 100, 14),
        ]

    def test_iter_tag_headers_truncated_body(self):
        """Test that a tag body running past the data raises."""
        stream = write_tag_header(TagCode.SET_BACKGROUND_COLOR, 10) + b"abc"
        with pytest.raises(TruncatedHeaderError, match="runs past"):
            list(iter_tag_headers(stream))

    def test_find_file_attributes(self):
        """Test that FileAttributes is only honoured as the first tag."""
        attributes = write_tag_header(TagCode.FILE_ATTRIBUTES, 4) + b"\x08\x00\x00\x00"
        show_frame = write_tag_header(TagCode.SHOW_FRAME, 0)

        assert find_file_attributes(attributes + show_frame + END_TAG) == 0x08
        assert find_file_attributes(show_frame + attributes + END_TAG) is None
        assert find_file_attributes(b"") is None
        assert find_file_attributes(b"\x00") is None

    def test_find_file_attributes_long_header(self):
        """Test the long-form length is honoured, including an empty body."""
        show_frame = write_tag_header(TagCode.SHOW_FRAME, 0)
        long_empty = struct.pack('<HI', (TagCode.FILE_ATTRIBUTES << 6) | 0x3f, 0)
        long_as3 = struct.pack('<HI', (TagCode.FILE_ATTRIBUTES << 6) | 0x3f, 4) + b"\x08\x00\x00\x00"

        # ShowFrame's header byte 0x40 must not be mistaken for flags
        assert find_file_attributes(long_empty + show_frame + END_TAG) == 0
        assert find_file_attributes(long_as3 + show_frame + END_TAG) == 0x08
        assert find_file_attributes(long_empty[:4]) is None
