"""
Bit-level I/O for packed header fields.

The container packs RECT records as a 5-bit width followed by four
signed values of that width, MSB first, padded to a byte boundary.
Bits are held as uint8 arrays and packed/unpacked with numpy in
big-endian bit order.
"""

import numpy as np
from typing import List

from .errors import InvalidFieldError, TruncatedHeaderError


def count_ubits(value: int) -> int:
    """Number of bits needed to store an unsigned value."""
    if value < 0:
        raise InvalidFieldError(f"Unsigned value cannot be negative: {value}")
    return value.bit_length()


def count_sbits(value: int) -> int:
    """
    Number of bits needed to store a signed (two's complement) value.

    Zero needs no bits at all; -1 needs one.
    """
    if value == 0:
        return 0
    if value == -1:
        return 1
    if value < 0:
        return count_ubits(~value) + 1
    return count_ubits(value) + 1


class BitWriter:
    """
    Accumulates bit fields and packs them into bytes.

    Output is padded with zero bits to the next byte boundary.
    """

    def __init__(self):
        self._chunks: List[np.ndarray] = []
        self._num_bits = 0

    def write_ubits(self, num_bits: int, value: int) -> None:
        """Append an unsigned value using exactly num_bits bits."""
        if num_bits == 0:
            return
        if value < 0 or value >= (1 << num_bits):
            raise InvalidFieldError(
                f"Value {value} does not fit in {num_bits} unsigned bits"
            )
        shifts = np.arange(num_bits - 1, -1, -1, dtype=np.int64)
        bits = ((value >> shifts) & 1).astype(np.uint8)
        self._chunks.append(bits)
        self._num_bits += num_bits

    def write_sbits(self, num_bits: int, value: int) -> None:
        """Append a signed value in two's complement using num_bits bits."""
        if num_bits == 0:
            if value != 0:
                raise InvalidFieldError(f"Value {value} does not fit in 0 signed bits")
            return
        low = -(1 << (num_bits - 1))
        high = (1 << (num_bits - 1)) - 1
        if not low <= value <= high:
            raise InvalidFieldError(
                f"Value {value} does not fit in {num_bits} signed bits"
            )
        self.write_ubits(num_bits, value & ((1 << num_bits) - 1))

    @property
    def num_bits(self) -> int:
        return self._num_bits

    def to_bytes(self) -> bytes:
        """Pack accumulated bits (MSB first), zero padding the final byte."""
        if self._num_bits == 0:
            return b''

        bits = np.concatenate(self._chunks)

        # np.packbits pads the trailing partial byte with zeros
        return bytes(np.packbits(bits, bitorder='big'))


class BitReader:
    """Reads bit fields from a byte buffer, MSB first."""

    def __init__(self, data: bytes, offset: int = 0):
        chunk = bytes(data[offset:])
        if chunk:
            self._bits = np.unpackbits(
                np.frombuffer(chunk, dtype=np.uint8),
                bitorder='big'
            )
        else:
            self._bits = np.zeros(0, dtype=np.uint8)
        self._pos = 0

    def read_ubits(self, num_bits: int) -> int:
        if num_bits == 0:
            return 0
        end = self._pos + num_bits
        if end > len(self._bits):
            raise TruncatedHeaderError(
                f"Bit field runs past end of data: need {end} bits, have {len(self._bits)}",
                needed=(end + 7) // 8,
                available=len(self._bits) // 8,
            )
        value = 0
        for bit in self._bits[self._pos:end]:
            value = (value << 1) | int(bit)
        self._pos = end
        return value

    def read_sbits(self, num_bits: int) -> int:
        if num_bits == 0:
            return 0
        value = self.read_ubits(num_bits)
        if value & (1 << (num_bits - 1)):
            value -= 1 << num_bits
        return value

    @property
    def bytes_consumed(self) -> int:
        """Whole bytes touched so far (partial final byte counts as one)."""
        return (self._pos + 7) // 8
