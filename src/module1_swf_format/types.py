"""
Data types for the SWF container format.

Geometry is stored in twips (1/20 pixel), the unit used by every
coordinate field in the container.
"""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum


TWIPS_PER_PIXEL = 20

# Preamble: signature (3) + version (1) + uncompressed length (4)
PREAMBLE_SIZE = 8
LENGTH_FIELD_OFFSET = 4

END_TAG = b"\x00\x00"
END_TAG_SIZE = len(END_TAG)


class Compression(Enum):
    """Body compression declared by the container signature."""
    NONE = "FWS"
    ZLIB = "CWS"
    LZMA = "ZWS"

    @property
    def signature(self) -> bytes:
        return self.value.encode("ascii")

    @classmethod
    def from_signature(cls, signature: bytes) -> "Compression":
        for compression in cls:
            if compression.signature == signature:
                return compression
        raise ValueError(f"Unknown signature: {signature!r}")


class TagCode(IntEnum):
    """Tag codes referenced by this package."""
    END = 0
    SHOW_FRAME = 1
    SET_BACKGROUND_COLOR = 9
    FILE_ATTRIBUTES = 69
    DO_ABC = 82


# FileAttributes flag bits (first byte of the tag body)
FILE_ATTRIBUTE_IS_ACTION_SCRIPT_3 = 0x08


def to_pixels(twips: int) -> float:
    """Convert a twips distance to pixels."""
    return twips / TWIPS_PER_PIXEL


def from_pixels(pixels: float) -> int:
    """Convert a pixel distance to the nearest whole twip."""
    return int(round(pixels * TWIPS_PER_PIXEL))


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle in twips."""
    x_min: int = 0
    x_max: int = 0
    y_min: int = 0
    y_max: int = 0

    @property
    def width(self) -> int:
        return self.x_max - self.x_min

    @property
    def height(self) -> int:
        return self.y_max - self.y_min


@dataclass(frozen=True)
class SwfHeader:
    """
    Parsed container header.

    frame_rate is carried as a float but travels as 8.8 fixed point,
    so only multiples of 1/256 survive a write/read cycle unchanged.
    """
    version: int
    stage_size: Rectangle
    frame_rate: float
    num_frames: int = 1
    compression: Compression = Compression.NONE

    def with_compression(self, compression: Compression) -> "SwfHeader":
        return replace(self, compression=compression)


@dataclass(frozen=True)
class Tag:
    """A raw tag record: code plus undecoded body bytes."""
    code: int
    data: bytes = b""


@dataclass(frozen=True)
class SwfBuf:
    """
    Result of reading a container.

    Attributes:
        header: Parsed header (compression as declared by the signature)
        uncompressed_length: Value of the length field in the preamble
        data: Decompressed tag stream following the header
        header_length: Size of the uncompressed header, preamble included
    """
    header: SwfHeader
    uncompressed_length: int
    data: bytes
    header_length: int
