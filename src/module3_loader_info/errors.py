# file: src/module3_loader_info/errors.py

"""
Loader info error types.
"""


class LoaderInfoError(Exception):
    """Base exception for loader info operations."""
    pass


class ConstructionForbiddenError(LoaderInfoError):
    """Raised when a LoaderInfo is instantiated directly."""
    pass


class StageUnsupportedError(LoaderInfoError):
    """Raised when a movie-only property is read from the stage's loader info."""
    
    def __init__(self, message: str, property_name: str = None):
        super().__init__(message)
        self.property_name = property_name


class ReconstructionInvariantError(LoaderInfoError):
    """
    Raised when the synthesized container violates its layout assumptions.

    Never expected in normal operation; indicates the container writer
    changed how it frames an empty tag stream.
    """
    pass


class UnknownPropertyError(LoaderInfoError, KeyError):
    """Raised when a property name is not part of the loader info surface."""
    
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ''


class ReadOnlyPropertyError(LoaderInfoError):
    """Raised on any attempt to assign a loader info property."""
    pass
