# file: src/module1_swf_format/__init__.py

"""
Module 1: SWF Container Format

Reads and writes the binary container that wraps a movie: signature,
version, total length, stage rectangle, frame rate, frame count and
the tag stream.

Public API:
    - write_swf(header, tags, output, config=None) -> int
    - write_swf_header(header, output) -> int
    - read_swf_header(data: bytes) -> SwfBuf
    - iter_tag_headers(data: bytes) -> Iterator[(code, length, offset)]
    - find_file_attributes(data: bytes) -> Optional[int]
"""

from .types import (
    TWIPS_PER_PIXEL,
    PREAMBLE_SIZE,
    LENGTH_FIELD_OFFSET,
    END_TAG,
    END_TAG_SIZE,
    FILE_ATTRIBUTE_IS_ACTION_SCRIPT_3,
    Compression,
    TagCode,
    Rectangle,
    SwfHeader,
    SwfBuf,
    Tag,
    to_pixels,
    from_pixels,
)
from .writer import write_swf, write_swf_header, write_rectangle, write_tag_header, encode_fixed8
from .reader import read_swf_header, iter_tag_headers, find_file_attributes
from .errors import (
    SwfFormatError,
    InvalidSignatureError,
    TruncatedHeaderError,
    DecompressionError,
    InvalidFieldError,
)

__version__ = "1.0.0"

__all__ = [
    "TWIPS_PER_PIXEL",
    "PREAMBLE_SIZE",
    "LENGTH_FIELD_OFFSET",
    "END_TAG",
    "END_TAG_SIZE",
    "FILE_ATTRIBUTE_IS_ACTION_SCRIPT_3",
    "Compression",
    "TagCode",
    "Rectangle",
    "SwfHeader",
    "SwfBuf",
    "Tag",
    "to_pixels",
    "from_pixels",
    "write_swf",
    "write_swf_header",
    "write_rectangle",
    "write_tag_header",
    "encode_fixed8",
    "read_swf_header",
    "iter_tag_headers",
    "find_file_attributes",
    "SwfFormatError",
    "InvalidSignatureError",
    "TruncatedHeaderError",
    "DecompressionError",
    "InvalidFieldError",
]
