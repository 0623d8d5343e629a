"""
LoaderInfo: read-only metadata about the stage or a loaded movie.

Every property dispatches on the loader stream. Properties that only
make sense for a loaded movie raise StageUnsupportedError on the stage's
loader info.
"""

import logging
from typing import Any, Dict, List, Optional

from ..module1_swf_format import to_pixels
from ..module2_byte_array import ByteArray
from .errors import (
    ConstructionForbiddenError,
    ReadOnlyPropertyError,
    StageUnsupportedError,
    UnknownPropertyError,
)
from .library import ApplicationDomain, ContentRoot, PlayerContext
from .loader_stream import LoadedMovie, LoaderStream, StageRoot
from .movie import ActionScriptVersion, SwfMovie
from .reconstructor import reconstruct_movie_bytes


logger = logging.getLogger(__name__)

MOVIE_CONTENT_TYPE = "application/x-shockwave-flash"

# Completes "The stage's loader info does not have ..."
_STAGE_MISSING = {
    'actionScriptVersion': "an AS version",
    'frameRate': "a frame rate",
    'height': "a height",
    'width': "a width",
    'swfVersion': "a SWF version",
    'url': "a URL",
    'loaderURL': "a loader URL",
    'parameters': "parameters",
    'bytes': "a bytestream",
}

_CONSTRUCTION_TOKEN = object()


class LoaderInfo:
    """
    Loader info for either the stage or one loaded movie.

    Scripts cannot construct instances; use for_stage() or for_movie().
    The loader stream is fixed at construction.
    """

    def __init__(
        self,
        stream: Optional[LoaderStream] = None,
        context: Optional[PlayerContext] = None,
        *,
        _token: object = None
    ):
        if _token is not _CONSTRUCTION_TOKEN:
            raise ConstructionForbiddenError("LoaderInfo cannot be constructed")
        if not isinstance(stream, (StageRoot, LoadedMovie)):
            raise TypeError(f"Unknown loader stream: {stream!r}")

        self._stream = stream
        self._context = context

    @classmethod
    def from_stream(cls, stream: LoaderStream, context: PlayerContext) -> "LoaderInfo":
        return cls(stream, context, _token=_CONSTRUCTION_TOKEN)

    @classmethod
    def for_stage(cls, context: PlayerContext) -> "LoaderInfo":
        """Loader info of the implicit top-level content."""
        return cls.from_stream(StageRoot(), context)

    @classmethod
    def for_movie(
        cls,
        movie: SwfMovie,
        context: PlayerContext,
        root: Optional[ContentRoot] = None
    ) -> "LoaderInfo":
        """
        Loader info of a loaded movie.

        Without an explicit root, the movie's root is looked up in the
        context's library (KeyError if the movie was never registered).
        """
        if root is None:
            root = context.library.root_of(movie)
        logger.debug("Creating loader info for %r", movie)
        return cls.from_stream(LoadedMovie(movie, root), context)

    @property
    def stream(self) -> LoaderStream:
        return self._stream

    def _loaded_movie(self, property_name: str) -> LoadedMovie:
        """Return the loaded movie stream or fail for the stage."""
        stream = self._stream
        if isinstance(stream, LoadedMovie):
            return stream
        if isinstance(stream, StageRoot):
            raise StageUnsupportedError(
                f"Error: The stage's loader info does not have {_STAGE_MISSING[property_name]}",
                property_name=property_name,
            )
        raise TypeError(f"Unknown loader stream: {stream!r}")

    # ------------------------------------------------------------------
    # Properties available on both streams
    # ------------------------------------------------------------------

    @property
    def application_domain(self) -> ApplicationDomain:
        stream = self._stream
        library = self._context.library
        if isinstance(stream, StageRoot):
            return library.global_domain()
        if isinstance(stream, LoadedMovie):
            return library.resolve_domain(stream.movie)
        raise TypeError(f"Unknown loader stream: {stream!r}")

    @property
    def bytes_total(self) -> int:
        # No streaming loads: everything is loaded by the time we exist
        stream = self._stream
        if isinstance(stream, StageRoot):
            return self._context.stage_movie.compressed_length
        if isinstance(stream, LoadedMovie):
            return stream.movie.compressed_length
        raise TypeError(f"Unknown loader stream: {stream!r}")

    bytes_loaded = bytes_total

    @property
    def content(self) -> ContentRoot:
        stream = self._stream
        if isinstance(stream, StageRoot):
            return self._context.library.stage_root()
        if isinstance(stream, LoadedMovie):
            return stream.root
        raise TypeError(f"Unknown loader stream: {stream!r}")

    @property
    def content_type(self) -> Optional[str]:
        stream = self._stream
        if isinstance(stream, StageRoot):
            return None
        if isinstance(stream, LoadedMovie):
            return MOVIE_CONTENT_TYPE
        raise TypeError(f"Unknown loader stream: {stream!r}")

    @property
    def is_url_inaccessible(self) -> bool:
        # Always false
        return False

    # ------------------------------------------------------------------
    # Loaded movie only
    # ------------------------------------------------------------------

    @property
    def action_script_version(self) -> ActionScriptVersion:
        movie = self._loaded_movie('actionScriptVersion').movie
        return self._context.library.avm_type(movie).into_loader_version()

    @property
    def frame_rate(self) -> float:
        return self._loaded_movie('frameRate').movie.header.frame_rate

    @property
    def height(self) -> float:
        stage_size = self._loaded_movie('height').movie.header.stage_size
        return to_pixels(stage_size.y_max - stage_size.y_min)

    @property
    def width(self) -> float:
        stage_size = self._loaded_movie('width').movie.header.stage_size
        return to_pixels(stage_size.x_max - stage_size.x_min)

    @property
    def swf_version(self) -> int:
        return self._loaded_movie('swfVersion').movie.header.version

    @property
    def url(self) -> str:
        return self._loaded_movie('url').movie.url or ""

    @property
    def loader_url(self) -> str:
        movie = self._loaded_movie('loaderURL').movie
        return movie.loader_url or movie.url or ""

    @property
    def parameters(self) -> Dict[str, str]:
        """A new dict on every read; changes do not reach the movie."""
        movie = self._loaded_movie('parameters').movie
        return {key: value for key, value in movie.parameters.items()}

    @property
    def bytes(self) -> ByteArray:
        """A freshly synthesized, uncompressed container for the movie."""
        movie = self._loaded_movie('bytes').movie
        return reconstruct_movie_bytes(movie, self._context.config)

    # ------------------------------------------------------------------
    # Script-facing access
    # ------------------------------------------------------------------

    def get_property(self, name: str) -> Any:
        """
        Read a property by its script name (e.g. "bytesTotal").

        Raises:
            UnknownPropertyError: If name is not a loader info property
            StageUnsupportedError: If the property needs a loaded movie
        """
        attribute = LOADER_INFO_PROPERTIES.get(name)
        if attribute is None:
            raise UnknownPropertyError(f"LoaderInfo has no property named {name!r}")
        return getattr(self, attribute)

    def set_property(self, name: str, value: Any) -> None:
        if name not in LOADER_INFO_PROPERTIES:
            raise UnknownPropertyError(f"LoaderInfo has no property named {name!r}")
        raise ReadOnlyPropertyError(f"Property {name} is read-only on LoaderInfo")

    @staticmethod
    def property_names() -> List[str]:
        return [name for name in LOADER_INFO_PROPERTIES if name not in _ALIASES]

    def __repr__(self) -> str:
        return f"LoaderInfo({self._stream!r})"


# Script name -> Python attribute
LOADER_INFO_PROPERTIES = {
    'actionScriptVersion': 'action_script_version',
    'applicationDomain': 'application_domain',
    'bytesLoaded': 'bytes_loaded',
    'bytesTotal': 'bytes_total',
    'content': 'content',
    'contentType': 'content_type',
    'frameRate': 'frame_rate',
    'height': 'height',
    'isURLInaccessible': 'is_url_inaccessible',
    'swfVersion': 'swf_version',
    'url': 'url',
    'width': 'width',
    'bytes': 'bytes',
    'loaderURL': 'loader_url',
    'loaderUrl': 'loader_url',
    'parameters': 'parameters',
}

_ALIASES = {'loaderUrl'}
