"""
Module 2: ByteArray

Cursor-based byte buffer returned to scripts. The loader info `bytes`
property hands out a fresh ByteArray positioned at 0 in big-endian mode.
"""

from .byte_array import ByteArray, Endian
from .errors import ByteArrayError, EOFByteArrayError

__all__ = [
    'ByteArray',
    'Endian',
    'ByteArrayError',
    'EOFByteArrayError',
]

__version__ = '1.0.0'
