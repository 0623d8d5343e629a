"""
Growable byte buffer with a read/write cursor and a default byte order.

Writes at the cursor overwrite existing bytes and extend the buffer when
they run past the end. Multi-byte integers use the current endian.
"""

import struct
from enum import Enum
from typing import Union

from .errors import EOFByteArrayError


class Endian(Enum):
    """Byte order for multi-byte reads and writes."""
    BIG = "bigEndian"
    LITTLE = "littleEndian"

    @property
    def struct_prefix(self) -> str:
        return '>' if self is Endian.BIG else '<'


BytesLike = Union[bytes, bytearray, memoryview]


class ByteArray:
    """
    In-memory byte buffer.

    Invariants:
        - 0 <= position (position may exceed length; the next write pads with zeros)
        - endian defaults to Endian.BIG
    """

    def __init__(self, data: BytesLike = b"", endian: Endian = Endian.BIG):
        self._data = bytearray(data)
        self._position = 0
        self.endian = endian

    # ------------------------------------------------------------------
    # Cursor and size
    # ------------------------------------------------------------------

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"Position must be non-negative, got {value}")
        self._position = value

    @property
    def length(self) -> int:
        return len(self._data)

    @length.setter
    def length(self, value: int) -> None:
        """Truncate or zero-extend the buffer; the cursor is clamped to the new end."""
        if value < 0:
            raise ValueError(f"Length must be non-negative, got {value}")
        if value < len(self._data):
            del self._data[value:]
        else:
            self._data.extend(bytes(value - len(self._data)))
        self._position = min(self._position, value)

    def truncate(self, size: int) -> None:
        self.length = size

    @property
    def bytes_available(self) -> int:
        return max(len(self._data) - self._position, 0)

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        self._data.clear()
        self._position = 0

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write(self, data: BytesLike) -> int:
        """File-style write so the buffer can be handed to serializers."""
        self.write_bytes(data)
        return len(data)

    def write_bytes(self, data: BytesLike) -> None:
        end = self._position + len(data)
        if self._position > len(self._data):
            self._data.extend(bytes(self._position - len(self._data)))
        self._data[self._position:end] = data
        self._position = end

    def write_byte(self, value: int) -> None:
        self.write_bytes(struct.pack('B', value & 0xFF))

    def write_short(self, value: int) -> None:
        self.write_bytes(struct.pack(self.endian.struct_prefix + 'H', value & 0xFFFF))

    def write_unsigned_int(self, value: int) -> None:
        # Wraps like a uint32 store
        self.write_bytes(struct.pack(self.endian.struct_prefix + 'I', value & 0xFFFFFFFF))

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_bytes(self, count: int) -> bytes:
        if count < 0:
            raise ValueError(f"Count must be non-negative, got {count}")
        if count > self.bytes_available:
            raise EOFByteArrayError(
                f"End of ByteArray: requested {count} bytes, {self.bytes_available} available",
                requested=count,
                available=self.bytes_available,
            )
        start = self._position
        self._position += count
        return bytes(self._data[start:self._position])

    def _read(self, fmt: str) -> int:
        size = struct.calcsize(fmt)
        return struct.unpack(self.endian.struct_prefix + fmt, self.read_bytes(size))[0]

    def read_unsigned_byte(self) -> int:
        return self._read('B')

    def read_unsigned_short(self) -> int:
        return self._read('H')

    def read_unsigned_int(self) -> int:
        return self._read('I')

    def __repr__(self) -> str:
        return (
            f"ByteArray(length={len(self._data)}, position={self._position}, "
            f"endian={self.endian.name})"
        )
