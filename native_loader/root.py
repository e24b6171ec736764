"""Project root discovery.

Walks upward from a search origin until a directory holds one of the
root markers. The filesystem root is its own parent, which ends the walk.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from urllib.parse import unquote
from urllib.parse import urlparse
from urllib.request import url2pathname

from .errors import InvalidArgumentError
from .errors import NoProjectRootError
from .errors import UnsupportedFileURIError

logger = logging.getLogger(__name__)

# Package descriptor file or dependency directory; either one marks a root.
ROOT_MARKERS: tuple[str, ...] = ("package.json", "node_modules")


def ensure_origin(origin: str | os.PathLike) -> str:
    """Normalize a search origin to a plain filesystem path.

    A "file:" URI (e.g. a module's own file URL) is converted to the
    directory containing that file. Plain paths are returned as text.

    Args:
        origin: Filesystem path or file: URI

    Returns:
        Filesystem path as a string

    Raises:
        InvalidArgumentError: origin is neither text nor path-like
        UnsupportedFileURIError: The URI cannot be mapped to a local path
    """
    if isinstance(origin, os.PathLike):
        origin = os.fspath(origin)

    if not isinstance(origin, str):
        raise InvalidArgumentError('"path" must be a string.')

    if origin.startswith("file:"):
        return os.path.dirname(file_uri_to_path(origin))

    return origin


def file_uri_to_path(url: str) -> str:
    """Convert a file: URI to a local filesystem path."""
    parsed = urlparse(url)

    if parsed.scheme != "file":
        raise UnsupportedFileURIError(url, "Not a file URL")

    if "%2f" in parsed.path.lower() or (sys.platform == "win32" and "%5c" in parsed.path.lower()):
        raise UnsupportedFileURIError(url, "File URL path must not include encoded path separators")

    host = parsed.netloc
    if host in ("", "localhost"):
        path = parsed.path if parsed.path.startswith("/") else "/" + parsed.path
        return url2pathname(path) if sys.platform == "win32" else unquote(path)

    if sys.platform == "win32":
        # UNC share: file://server/share/file -> \\server\share\file
        return "\\\\" + host + url2pathname(parsed.path)

    raise UnsupportedFileURIError(url, f"File URL host must be \"localhost\" or empty on {sys.platform}")


def _has_marker(directory: Path, markers: tuple[str, ...]) -> bool:
    return any((directory / marker).exists() for marker in markers)


def find_root(origin: str, markers: tuple[str, ...] = ROOT_MARKERS) -> Path:
    """Find the nearest directory, starting at origin, that holds a root marker.

    Args:
        origin: Filesystem path to start from (a file starts from its directory)
        markers: Entry names that mark a project root

    Returns:
        Absolute, resolved project root

    Raises:
        NoProjectRootError: The filesystem root was reached without a marker
    """
    current = Path(origin).resolve()
    if current.is_file():
        current = current.parent

    while not _has_marker(current, markers):
        parent = current.parent
        if parent == current:
            raise NoProjectRootError(origin, markers)
        current = parent

    logger.debug(f"[binding:root] {origin} -> {current}")
    return current
