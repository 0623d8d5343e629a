# file: src/module1_swf_format/errors.py

"""
SWF container format exception hierarchy.

All exceptions inherit from SwfFormatError for unified handling.
"""


class SwfFormatError(Exception):
    """Base exception for all SWF container errors."""
    pass


class InvalidSignatureError(SwfFormatError):
    """Raised when the 3-byte signature is not FWS, CWS or ZWS."""
    pass


class TruncatedHeaderError(SwfFormatError):
    """Raised when the input ends before the header is complete."""
    
    def __init__(self, message: str, needed: int = None, available: int = None):
        super().__init__(message)
        self.needed = needed
        self.available = available


class DecompressionError(SwfFormatError):
    """Raised when the zlib or LZMA body cannot be decompressed."""
    pass


class InvalidFieldError(SwfFormatError):
    """Raised when a header field is out of range for its wire encoding."""
    pass
