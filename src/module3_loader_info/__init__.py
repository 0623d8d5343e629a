"""
Module 3: Loader Info

Reports metadata about the stage or a loaded movie and rebuilds an
uncompressed container for a loaded movie on demand.

Public Interface:
    - LoaderInfo: Property surface (for_stage / for_movie factories)
    - StageRoot, LoadedMovie: Loader stream variants
    - SwfMovie: Decoded movie metadata
    - MovieLibrary, PlayerContext: Runtime collaborators
    - reconstruct_movie_bytes: Container synthesis behind `bytes`

Example usage:
    >>> from src.module3_loader_info import LoaderInfo, SwfMovie, PlayerContext, ContentRoot
    >>> movie = SwfMovie.from_bytes(data, url="http://example.com/game.swf")
    >>> context = PlayerContext(stage_movie=movie)
    >>> info = LoaderInfo.for_movie(movie, context, root=ContentRoot("root"))
    >>> info.width, info.height
    >>> container = info.bytes
"""

from .loader_info import LoaderInfo, LOADER_INFO_PROPERTIES, MOVIE_CONTENT_TYPE
from .loader_stream import StageRoot, LoadedMovie, LoaderStream
from .movie import SwfMovie, AvmType, ActionScriptVersion
from .library import ApplicationDomain, ContentRoot, MovieLibrary, PlayerContext
from .reconstructor import reconstruct_movie_bytes
from .config import load_config, get_default_config
from .errors import (
    LoaderInfoError,
    ConstructionForbiddenError,
    StageUnsupportedError,
    ReconstructionInvariantError,
    UnknownPropertyError,
    ReadOnlyPropertyError,
)

__all__ = [
    "LoaderInfo",
    "LOADER_INFO_PROPERTIES",
    "MOVIE_CONTENT_TYPE",
    "StageRoot",
    "LoadedMovie",
    "LoaderStream",
    "SwfMovie",
    "AvmType",
    "ActionScriptVersion",
    "ApplicationDomain",
    "ContentRoot",
    "MovieLibrary",
    "PlayerContext",
    "reconstruct_movie_bytes",
    "load_config",
    "get_default_config",
    "LoaderInfoError",
    "ConstructionForbiddenError",
    "StageUnsupportedError",
    "ReconstructionInvariantError",
    "UnknownPropertyError",
    "ReadOnlyPropertyError",
]

__version__ = "1.0.0"
