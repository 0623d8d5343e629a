"""
SWF container writer.

Container structure (uncompressed):
    [signature:3][version:1][uncompressed_length:4 LE]
    [RECT:bit-packed][frame_rate:2 LE 8.8][num_frames:2 LE]
    [tag records...][end tag:2]

write_swf() always terminates the tag stream with an end tag, even when
no tags are given. write_swf_header() writes only the header, with a zero
length field, for callers that append their own tag stream and backfill
the length themselves.
"""

import logging
import lzma
import struct
import zlib
from typing import Any, Dict, Optional, Sequence

from .bit_io import BitWriter, count_sbits
from .errors import InvalidFieldError
from .types import END_TAG, PREAMBLE_SIZE, Compression, Rectangle, SwfHeader, Tag


logger = logging.getLogger(__name__)

DEFAULT_ZLIB_LEVEL = 9
DEFAULT_LZMA_PRESET = 6

# Short tag headers pack the length into 6 bits; 0x3f flags a long header
SHORT_TAG_MAX_LENGTH = 0x3e
LONG_TAG_MARKER = 0x3f

# LZMA "alone" stream: 5 bytes of properties + 8-byte uncompressed size
LZMA_PROPS_SIZE = 5
LZMA_ALONE_HEADER_SIZE = 13


def write_rectangle(rect: Rectangle) -> bytes:
    """
    Encode a RECT record.

    Layout: 5-bit field width, then x_min, x_max, y_min, y_max as signed
    values of that width.
    """
    num_bits = max(
        count_sbits(rect.x_min),
        count_sbits(rect.x_max),
        count_sbits(rect.y_min),
        count_sbits(rect.y_max),
    )
    if num_bits > 31:
        raise InvalidFieldError(f"Rectangle coordinates need {num_bits} bits (max 31)")

    bits = BitWriter()
    bits.write_ubits(5, num_bits)
    bits.write_sbits(num_bits, rect.x_min)
    bits.write_sbits(num_bits, rect.x_max)
    bits.write_sbits(num_bits, rect.y_min)
    bits.write_sbits(num_bits, rect.y_max)
    return bits.to_bytes()


def encode_fixed8(value: float) -> int:
    """Encode a non-negative number as unsigned 8.8 fixed point."""
    raw = int(round(value * 256))
    if not 0 <= raw <= 0xFFFF:
        raise InvalidFieldError(f"Frame rate {value} out of 8.8 fixed point range")
    return raw


def write_tag_header(code: int, length: int) -> bytes:
    """Encode a tag record header (short form when the body fits)."""
    if not 0 <= code < (1 << 10):
        raise InvalidFieldError(f"Tag code {code} out of range")
    if length <= SHORT_TAG_MAX_LENGTH:
        return struct.pack('<H', (code << 6) | length)
    return struct.pack('<HI', (code << 6) | LONG_TAG_MARKER, length)


def encode_tag(tag: Tag) -> bytes:
    return write_tag_header(tag.code, len(tag.data)) + tag.data


def _encode_header_body(header: SwfHeader) -> bytes:
    """Fields following the preamble: RECT, frame rate and frame count."""
    if not 0 <= header.num_frames <= 0xFFFF:
        raise InvalidFieldError(f"Frame count {header.num_frames} out of range")

    return (
        write_rectangle(header.stage_size) +
        struct.pack('<HH', encode_fixed8(header.frame_rate), header.num_frames)
    )


def _encode_preamble(header: SwfHeader, uncompressed_length: int) -> bytes:
    if not 0 <= header.version <= 0xFF:
        raise InvalidFieldError(f"SWF version {header.version} out of range")

    return (
        header.compression.signature +
        bytes([header.version]) +
        struct.pack('<I', uncompressed_length)  # Little-endian uint32
    )


def write_swf_header(header: SwfHeader, output) -> int:
    """
    Write an uncompressed header with a zero length field and no tag stream.

    The caller is responsible for appending the tag stream and patching
    the length field at offset 4.

    Args:
        header: Header to write (compression must be NONE)
        output: Writable object with a write(bytes) method

    Returns:
        Number of bytes written (the header length)

    Raises:
        InvalidFieldError: If the header declares compression
    """
    if header.compression is not Compression.NONE:
        raise InvalidFieldError(
            f"Cannot write a bare header for compressed container ({header.compression.name})"
        )

    data = _encode_preamble(header, 0) + _encode_header_body(header)
    output.write(data)
    return len(data)


def write_swf(
    header: SwfHeader,
    tags: Sequence[Tag],
    output,
    config: Optional[Dict[str, Any]] = None
) -> int:
    """
    Write a complete container.

    The tag stream is always terminated with an implicit end tag, so an
    empty tag list still yields two bytes after the header.

    Args:
        header: Container header; header.compression selects the body codec
        tags: Tag records to write before the end tag
        output: Writable object with a write(bytes) method
        config: Optional configuration dictionary with 'swf' section

    Returns:
        Number of bytes written

    Configuration Schema:
        config['swf']['zlib_level']: zlib level for CWS output (default: 9)
        config['swf']['lzma_preset']: LZMA preset for ZWS output (default: 6)
    """
    swf_config = (config or {}).get('swf', {})

    body = _encode_header_body(header)
    body += b"".join(encode_tag(tag) for tag in tags)
    body += END_TAG

    uncompressed_length = PREAMBLE_SIZE + len(body)
    preamble = _encode_preamble(header, uncompressed_length)

    if header.compression is Compression.NONE:
        data = preamble + body
    elif header.compression is Compression.ZLIB:
        level = swf_config.get('zlib_level', DEFAULT_ZLIB_LEVEL)
        data = preamble + zlib.compress(body, level)
    elif header.compression is Compression.LZMA:
        preset = swf_config.get('lzma_preset', DEFAULT_LZMA_PRESET)
        data = preamble + _compress_lzma(body, preset)
    else:
        raise InvalidFieldError(f"Unknown compression: {header.compression}")

    logger.debug(
        "Wrote %s container: %d tags, %d bytes (uncompressed %d)",
        header.compression.value, len(tags), len(data), uncompressed_length
    )

    output.write(data)
    return len(data)


def _compress_lzma(body: bytes, preset: int) -> bytes:
    """
    Compress a body in the ZWS layout.

    ZWS stores [compressed_length:4 LE][props:5][raw LZMA1 data]; the
    8-byte size field of the "alone" format is dropped.
    """
    compressor = lzma.LZMACompressor(format=lzma.FORMAT_ALONE, preset=preset)
    stream = compressor.compress(body) + compressor.flush()

    props = stream[:LZMA_PROPS_SIZE]
    raw = stream[LZMA_ALONE_HEADER_SIZE:]

    return struct.pack('<I', len(raw)) + props + raw
