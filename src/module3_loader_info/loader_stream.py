"""
Loader stream: what a loader info describes.

Two variants only:
    - StageRoot: the implicit top-level stage content (no payload)
    - LoadedMovie: an explicitly loaded movie and its content root
"""

from dataclasses import dataclass
from typing import Union

from .library import ContentRoot
from .movie import SwfMovie


@dataclass(frozen=True)
class StageRoot:
    """The stage's own loader stream."""
    pass


@dataclass(frozen=True)
class LoadedMovie:
    """A loaded movie together with the root of its content."""
    movie: SwfMovie
    root: ContentRoot


LoaderStream = Union[StageRoot, LoadedMovie]
