"""Binding resolver - finds and loads a native artifact for a module name.

Resolution order:
1. Cache lookup on (normalized name, origin)
2. Project root: nearest ancestor of origin holding a root marker
3. Candidate paths from the fixed template list
4. First candidate that loads wins; the result is cached
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any

from .cache import BindingCache
from .cache import CacheKey
from .candidates import generate_candidates
from .config import DEFAULT_NAME
from .config import BindingConfig
from .config import check_overrides
from .config import normalize_name
from .errors import InvalidArgumentError
from .loaders import ArtifactLoader
from .loaders import ExtensionModuleLoader
from .root import ROOT_MARKERS
from .root import ensure_origin
from .root import find_root
from .search import load_first

logger = logging.getLogger(__name__)

# Cache miss marker; None is a valid artifact
_MISSING = object()


class BindingResolver:
    """Resolve and load native bindings, memoizing successful loads.

    The cache belongs to the resolver and lives as long as it does.
    """

    def __init__(
        self,
        loader: ArtifactLoader | None = None,
        cache: BindingCache | None = None,
        markers: tuple[str, ...] = ROOT_MARKERS,
        **config_overrides: Any,
    ):
        """Initialize resolver.

        Args:
            loader: Load capability (default: ExtensionModuleLoader)
            cache: Result cache to use (default: a new private cache)
            markers: Entry names that mark a project root
            **config_overrides: BindingConfig field overrides, e.g. compiled_dir="dist"

        Raises:
            InvalidArgumentError: An override names an unknown field, root or name
        """
        check_overrides(config_overrides)
        self.loader = loader or ExtensionModuleLoader()
        self.cache = cache if cache is not None else BindingCache()
        self.markers = markers
        self.config_overrides = config_overrides

    def load(self, name: str, origin: str | os.PathLike) -> Any:
        """Resolve name relative to origin and load it.

        Args:
            name: Module name, with or without the binary extension
            origin: Directory, file path, or file: URI to search from

        Returns:
            The loaded artifact (cached after the first success)

        Raises:
            InvalidArgumentError: name or origin has the wrong type
            UnsupportedFileURIError: origin is a file: URI this host cannot map
            NoProjectRootError: No root marker above origin
            BindingNotFoundError: No candidate could be loaded
            Exception: Any non-not-found failure from the loader, unchanged
        """
        name = normalize_name(name, self.loader.extension)
        origin = ensure_origin(origin)
        key = CacheKey(name, origin)

        cached = self.cache.get(key, _MISSING)
        if cached is not _MISSING:
            logger.debug(f"[binding:cache] hit {name} ({origin})")
            return cached

        with self.cache.lock_for(key):
            cached = self.cache.get(key, _MISSING)
            if cached is not _MISSING:
                logger.debug(f"[binding:cache] hit {name} ({origin}) after wait")
                return cached

            config = self._build_config(name, origin)
            result = load_first(generate_candidates(config), self.loader)
            return self.cache.set(key, result.artifact)

    def candidates(self, name: str, origin: str | os.PathLike) -> list[Path]:
        """Return the ordered candidate paths load() would try, without loading.

        Raises:
            InvalidArgumentError, UnsupportedFileURIError, NoProjectRootError
        """
        name = normalize_name(name, self.loader.extension)
        return generate_candidates(self._build_config(name, ensure_origin(origin)))

    def _build_config(self, name: str, origin: str) -> BindingConfig:
        root = find_root(origin, self.markers)
        logger.debug(f"[binding:resolve] {name} from {origin} (root {root})")
        return BindingConfig.create(root=root, name=name, **self.config_overrides)

    def __repr__(self) -> str:
        return f"BindingResolver({self.loader!r}, {self.cache!r})"


_default_resolver: BindingResolver | None = None
_default_lock = threading.Lock()


def default_resolver() -> BindingResolver:
    """Process-wide resolver used by load_binding()."""
    global _default_resolver
    with _default_lock:
        if _default_resolver is None:
            _default_resolver = BindingResolver()
        return _default_resolver


def load_binding(name: str = DEFAULT_NAME, origin: str | os.PathLike | None = None) -> Any:
    """Load a native binding with the process-wide resolver.

    Args:
        name: Module name (default: "bindings")
        origin: Where to start the root search, typically Path(__file__).parent

    Returns:
        The loaded artifact
    """
    if origin is None:
        raise InvalidArgumentError('"path" must be a string.')
    return default_resolver().load(name, origin)
