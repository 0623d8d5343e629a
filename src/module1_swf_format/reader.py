"""
SWF container reader.

Parses the preamble, decompresses the body (CWS: zlib, ZWS: LZMA) and
decodes the header fields. Tag bodies are left undecoded; the remaining
tag stream is returned as a single blob.
"""

import logging
import lzma
import struct
import zlib
from typing import Iterator, Optional, Tuple

from .bit_io import BitReader
from .errors import DecompressionError, InvalidSignatureError, TruncatedHeaderError
from .types import (
    LENGTH_FIELD_OFFSET,
    PREAMBLE_SIZE,
    Compression,
    Rectangle,
    SwfBuf,
    SwfHeader,
    TagCode,
)
from .writer import LONG_TAG_MARKER, LZMA_PROPS_SIZE


logger = logging.getLogger(__name__)

# ZWS: preamble + compressed length (4) + LZMA properties (5)
ZWS_PREFIX_SIZE = PREAMBLE_SIZE + 4 + LZMA_PROPS_SIZE


def read_swf_header(data: bytes) -> SwfBuf:
    """
    Read a container and decode its header.

    Args:
        data: Complete container bytes (compressed or not)

    Returns:
        SwfBuf with the parsed header, the declared uncompressed length,
        the decompressed tag stream and the header length

    Raises:
        TruncatedHeaderError: If data is too short for the header
        InvalidSignatureError: If the signature is not FWS, CWS or ZWS
        DecompressionError: If the body cannot be decompressed
    """
    data = bytes(data)
    if len(data) < PREAMBLE_SIZE:
        raise TruncatedHeaderError(
            f"Container too short: {len(data)} bytes (minimum {PREAMBLE_SIZE})",
            needed=PREAMBLE_SIZE,
            available=len(data),
        )

    try:
        compression = Compression.from_signature(data[:3])
    except ValueError as e:
        raise InvalidSignatureError(f"Invalid SWF signature: {data[:3]!r}") from e

    version = data[3]
    uncompressed_length = struct.unpack(
        '<I', data[LENGTH_FIELD_OFFSET:LENGTH_FIELD_OFFSET + 4]
    )[0]

    body = _decompress_body(data, compression, uncompressed_length)

    expected_body = max(uncompressed_length - PREAMBLE_SIZE, 0)
    if len(body) != expected_body:
        # Players tolerate this; keep going with what we have
        logger.warning(
            "Body length %d does not match declared length %d",
            len(body), expected_body
        )

    reader = BitReader(body)
    num_bits = reader.read_ubits(5)
    stage_size = Rectangle(
        x_min=reader.read_sbits(num_bits),
        x_max=reader.read_sbits(num_bits),
        y_min=reader.read_sbits(num_bits),
        y_max=reader.read_sbits(num_bits),
    )
    offset = reader.bytes_consumed

    if len(body) < offset + 4:
        raise TruncatedHeaderError(
            "Container ends before frame rate and frame count",
            needed=PREAMBLE_SIZE + offset + 4,
            available=PREAMBLE_SIZE + len(body),
        )
    frame_rate_raw, num_frames = struct.unpack('<HH', body[offset:offset + 4])
    offset += 4

    header = SwfHeader(
        version=version,
        stage_size=stage_size,
        frame_rate=frame_rate_raw / 256.0,
        num_frames=num_frames,
        compression=compression,
    )

    logger.debug(
        "Read %s header: version %d, %d frames, header length %d",
        compression.value, version, num_frames, PREAMBLE_SIZE + offset
    )

    return SwfBuf(
        header=header,
        uncompressed_length=uncompressed_length,
        data=body[offset:],
        header_length=PREAMBLE_SIZE + offset,
    )


def _decompress_body(data: bytes, compression: Compression, uncompressed_length: int) -> bytes:
    if compression is Compression.NONE:
        return data[PREAMBLE_SIZE:]

    if compression is Compression.ZLIB:
        try:
            return zlib.decompress(data[PREAMBLE_SIZE:])
        except zlib.error as e:
            raise DecompressionError(f"Invalid zlib body: {e}") from e

    if len(data) < ZWS_PREFIX_SIZE:
        raise TruncatedHeaderError(
            f"LZMA container too short: {len(data)} bytes (minimum {ZWS_PREFIX_SIZE})",
            needed=ZWS_PREFIX_SIZE,
            available=len(data),
        )

    props = data[PREAMBLE_SIZE + 4:ZWS_PREFIX_SIZE]
    decompressor = lzma.LZMADecompressor(
        format=lzma.FORMAT_RAW,
        filters=[_lzma1_filter(props)]
    )
    # Raw streams may or may not carry an end marker; stop at the declared size
    try:
        return decompressor.decompress(
            data[ZWS_PREFIX_SIZE:],
            max_length=max(uncompressed_length - PREAMBLE_SIZE, 0)
        )
    except lzma.LZMAError as e:
        raise DecompressionError(f"Invalid LZMA body: {e}") from e


def _lzma1_filter(props: bytes) -> dict:
    """Decode the 5-byte LZMA properties block into a raw filter spec."""
    packed = props[0]
    if packed >= 9 * 5 * 5:
        raise DecompressionError(f"Invalid LZMA properties byte: 0x{packed:02x}")

    lc = packed % 9
    packed //= 9
    lp = packed % 5
    pb = packed // 5
    dict_size = struct.unpack('<I', props[1:5])[0]

    return {
        "id": lzma.FILTER_LZMA1,
        "dict_size": dict_size,
        "lc": lc,
        "lp": lp,
        "pb": pb,
    }


def iter_tag_headers(data: bytes) -> Iterator[Tuple[int, int, int]]:
    """
    Walk a tag stream without decoding tag bodies.

    Yields:
        (code, length, body_offset) for each tag before the end tag

    Raises:
        TruncatedHeaderError: If a tag header or body runs past the data
    """
    offset = 0
    while offset + 2 <= len(data):
        code_and_length = struct.unpack('<H', data[offset:offset + 2])[0]
        offset += 2

        code = code_and_length >> 6
        length = code_and_length & LONG_TAG_MARKER
        if length == LONG_TAG_MARKER:
            if offset + 4 > len(data):
                raise TruncatedHeaderError(
                    f"Long tag header for code {code} truncated at offset {offset}"
                )
            length = struct.unpack('<I', data[offset:offset + 4])[0]
            offset += 4

        if code == TagCode.END:
            return

        if offset + length > len(data):
            raise TruncatedHeaderError(
                f"Tag {code} body ({length} bytes) runs past end of data at offset {offset}",
                needed=offset + length,
                available=len(data),
            )

        yield code, length, offset
        offset += length


def find_file_attributes(data: bytes) -> Optional[int]:
    """
    Return the FileAttributes flag byte from a tag stream, if present.

    FileAttributes is only honoured as the first tag; anything else
    (including a stream too short to hold a tag header) yields None.
    """
    if len(data) < 2:
        return None

    code_and_length = struct.unpack('<H', data[:2])[0]
    if code_and_length >> 6 != TagCode.FILE_ATTRIBUTES:
        return None

    body_offset = 2
    length = code_and_length & LONG_TAG_MARKER
    if length == LONG_TAG_MARKER:
        if len(data) < 6:
            return None
        length = struct.unpack('<I', data[2:6])[0]
        body_offset = 6

    if length == 0:
        return 0
    if len(data) <= body_offset:
        return None
    return data[body_offset]
