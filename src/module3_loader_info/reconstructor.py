"""
Byte-stream reconstruction for the loader info `bytes` property.

The loaded movie only keeps its header and decompressed tag stream, so
an uncompressed container is synthesized on demand:

    1. Write the header (compression forced to NONE) with an empty tag
       list. The writer terminates the stream with a 2-byte end tag.
    2. Drop that end tag; the real tag stream brings its own.
    3. Append the tag stream verbatim.
    4. Patch the length field at offset 4 (always little-endian).
    5. Rewind to 0 and switch to big-endian for the caller.
"""

import logging
import struct
from dataclasses import replace
from typing import Any, Dict, Optional

from ..module1_swf_format import (
    END_TAG,
    END_TAG_SIZE,
    LENGTH_FIELD_OFFSET,
    PREAMBLE_SIZE,
    Compression,
    SwfFormatError,
    encode_fixed8,
    read_swf_header,
    write_swf,
)
from ..module2_byte_array import ByteArray, Endian
from .errors import ReconstructionInvariantError
from .movie import SwfMovie


logger = logging.getLogger(__name__)


def reconstruct_movie_bytes(
    movie: SwfMovie,
    config: Optional[Dict[str, Any]] = None
) -> ByteArray:
    """
    Build a fresh uncompressed container for a loaded movie.

    Args:
        movie: Loaded movie (header + tag data)
        config: Configuration dictionary with optional 'reconstruction' section

    Returns:
        New ByteArray of length header_len + len(movie.data), positioned
        at 0, big-endian

    Raises:
        ReconstructionInvariantError: If the writer output does not have the
            expected layout, or (with verify_output) the result does not
            parse back to the source header
    """
    config = config or {}
    verify_output = config.get('reconstruction', {}).get('verify_output', True)

    header = movie.header.with_compression(Compression.NONE)
    data = movie.data

    output = ByteArray()
    try:
        write_swf(header, [], output)
    except SwfFormatError as e:
        raise ReconstructionInvariantError(f"Could not write movie header: {e}") from e

    header_length = _header_length(output)

    # Cut off the implicit end tag and append the real tag stream
    output.truncate(header_length)
    output.position = header_length
    output.write_bytes(data)

    # The writer computed the length for an empty tag stream
    total_length = header_length + len(data)
    output.position = LENGTH_FIELD_OFFSET
    output.endian = Endian.LITTLE
    output.write_unsigned_int(total_length)

    output.position = 0
    output.endian = Endian.BIG

    if len(output) != total_length:
        raise ReconstructionInvariantError(
            f"Synthesized container is {len(output)} bytes, expected {total_length}"
        )

    if verify_output:
        _verify(output, movie, header_length)

    logger.debug(
        "Reconstructed %r: header %d bytes + tag data %d bytes",
        movie, header_length, len(data)
    )

    return output


def _header_length(output: ByteArray) -> int:
    """
    Length of the header the writer produced, without its end tag.

    Checks the writer's framing of an empty tag stream before relying
    on it: the output must end with the end tag and its length field
    must describe the whole output.
    """
    written = output.to_bytes()

    if len(written) < PREAMBLE_SIZE + END_TAG_SIZE:
        raise ReconstructionInvariantError(
            f"Writer output too short: {len(written)} bytes"
        )
    if written[-END_TAG_SIZE:] != END_TAG:
        raise ReconstructionInvariantError(
            f"Writer output does not end with an end tag: {written[-END_TAG_SIZE:].hex()}"
        )

    declared = struct.unpack(
        '<I', written[LENGTH_FIELD_OFFSET:LENGTH_FIELD_OFFSET + 4]
    )[0]
    if declared != len(written):
        raise ReconstructionInvariantError(
            f"Writer length field {declared} does not match output size {len(written)}"
        )

    return len(written) - END_TAG_SIZE


def _verify(output: ByteArray, movie: SwfMovie, header_length: int) -> None:
    # Frame rate only survives to 8.8 fixed point precision
    expected_header = replace(
        movie.header.with_compression(Compression.NONE),
        frame_rate=encode_fixed8(movie.header.frame_rate) / 256.0,
    )

    try:
        parsed = read_swf_header(output.to_bytes())
    except SwfFormatError as e:
        raise ReconstructionInvariantError(f"Synthesized container does not parse: {e}") from e

    if parsed.header != expected_header:
        raise ReconstructionInvariantError(
            f"Synthesized header {parsed.header} differs from source {expected_header}"
        )
    if parsed.header_length != header_length:
        raise ReconstructionInvariantError(
            f"Synthesized header length {parsed.header_length}, expected {header_length}"
        )
    if parsed.uncompressed_length != len(output):
        raise ReconstructionInvariantError(
            f"Length field {parsed.uncompressed_length} does not match size {len(output)}"
        )
