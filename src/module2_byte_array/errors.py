"""
ByteArray error types.
"""


class ByteArrayError(Exception):
    """Base exception for ByteArray operations."""
    pass


class EOFByteArrayError(ByteArrayError, IndexError):
    """Raised when a read runs past the end of the buffer."""
    
    def __init__(self, message: str, requested: int = None, available: int = None):
        super().__init__(message)
        self.requested = requested
        self.available = available
