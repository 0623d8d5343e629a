"""
Runtime collaborators of a loader info: application domains, content
roots and the per-movie library that ties them together.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .config import get_default_config
from .movie import AvmType, SwfMovie


logger = logging.getLogger(__name__)


class ApplicationDomain:
    """Script namespace isolation unit; child domains see their parent's classes."""

    def __init__(self, name: str, parent: Optional["ApplicationDomain"] = None):
        self.name = name
        self.parent = parent

    def is_child_of(self, other: "ApplicationDomain") -> bool:
        domain = self.parent
        while domain is not None:
            if domain is other:
                return True
            domain = domain.parent
        return False

    def __repr__(self) -> str:
        return f"ApplicationDomain({self.name!r})"


@dataclass(eq=False)
class ContentRoot:
    """Root display object of some loaded content."""
    name: str
    movie: Optional[SwfMovie] = None


class MovieLibrary:
    """
    Per-movie runtime state.

    Resolves application domains and content roots for movie handles.
    Movies without a registered domain get a child of the global domain
    on first lookup; that domain is then reused.
    """

    def __init__(self, stage_root: Optional[ContentRoot] = None):
        self._global_domain = ApplicationDomain("global")
        self._stage_root = stage_root or ContentRoot("root1")
        self._domains: Dict[SwfMovie, ApplicationDomain] = {}
        self._roots: Dict[SwfMovie, ContentRoot] = {}

    def register(
        self,
        movie: SwfMovie,
        root: ContentRoot,
        domain: Optional[ApplicationDomain] = None
    ) -> None:
        self._roots[movie] = root
        if domain is not None:
            self._domains[movie] = domain

    def global_domain(self) -> ApplicationDomain:
        return self._global_domain

    def resolve_domain(self, movie: SwfMovie) -> ApplicationDomain:
        domain = self._domains.get(movie)
        if domain is None:
            domain = ApplicationDomain(movie.url or "anonymous", parent=self._global_domain)
            self._domains[movie] = domain
            logger.debug("Created application domain %r for %r", domain, movie)
        return domain

    def stage_root(self) -> ContentRoot:
        return self._stage_root

    def root_of(self, movie: SwfMovie) -> ContentRoot:
        try:
            return self._roots[movie]
        except KeyError:
            raise KeyError(f"No content root registered for {movie!r}") from None

    def avm_type(self, movie: SwfMovie) -> AvmType:
        return movie.avm_type


@dataclass
class PlayerContext:
    """
    What a loader info needs from the running player.

    Attributes:
        stage_movie: Movie backing the top-level stage content
        library: Movie library for domain and content root lookups
        config: Configuration dictionary (see default_config.yaml)
    """
    stage_movie: SwfMovie
    library: MovieLibrary = field(default_factory=MovieLibrary)
    config: Dict[str, Any] = field(default_factory=get_default_config)
