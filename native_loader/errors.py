"""Binding resolution errors and load-failure classification.

Error taxonomy:
- InvalidArgumentError: name or origin is not text
- UnsupportedFileURIError: a file: URI cannot be turned into a local path
- NoProjectRootError: no root marker between the origin and the filesystem root
- BindingLoadError: an artifact exists at a candidate path but fails to load
- CandidateNotFoundError: per-candidate "nothing here" signal (never surfaced)
- BindingNotFoundError: every candidate was tried without success

Any other exception raised by a load capability is treated as fatal and
propagates to the caller unchanged.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path


class FailureKind(str, Enum):
    """How a single load failure is classified.

    Kinds:
    - MODULE_NOT_FOUND: the loader reported that no module exists at the path
    - PATH_RESOLUTION_FAILED: the path itself could not be resolved
    - MESSAGE_NOT_FOUND: an untyped error whose text says the file was not found
    - FATAL: anything else; the search stops
    """

    MODULE_NOT_FOUND = "module_not_found"
    PATH_RESOLUTION_FAILED = "path_resolution_failed"
    MESSAGE_NOT_FOUND = "message_not_found"
    FATAL = "fatal"

    @property
    def is_not_found(self) -> bool:
        return self is not FailureKind.FATAL


# Matches e.g. "Could not find module '...'" from ctypes on Windows.
NOT_FOUND_MESSAGE = re.compile(r"not find", re.IGNORECASE)


class BindingError(Exception):
    """Base class for binding resolution errors."""

    code = "ERR_BINDINGS"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidArgumentError(BindingError, TypeError):
    """Raised when a name or origin argument has the wrong type."""

    code = "ERR_INVALID_ARG_TYPE"


class UnsupportedFileURIError(BindingError):
    """Raised when a file: URI cannot be converted on this host."""

    code = "ERR_BINDINGS_FILE_URI"

    def __init__(self, url: str, reason: str | None = None):
        self.url = url
        message = "File URLs are unsupported on this platform."
        if reason:
            message = f"{message} {reason}: {url}"
        super().__init__(message)


class NoProjectRootError(BindingError):
    """Raised when walking up from the origin never meets a root marker."""

    code = "ERR_BINDINGS_NO_ROOT"

    def __init__(self, path: str, markers: tuple[str, ...] = ("package.json", "node_modules")):
        self.path = path
        self.markers = markers
        super().__init__(
            f'Could not find module root given file: "{path}". Do you have a `{markers[0]}` file?'
        )


class CandidateNotFoundError(BindingError):
    """Raised by a load capability to say "nothing loadable at this path".

    The search loop swallows it and moves on to the next candidate.
    """

    code = "ERR_BINDINGS_CANDIDATE_NOT_FOUND"

    def __init__(self, path: str | Path, kind: FailureKind = FailureKind.MODULE_NOT_FOUND):
        if kind is FailureKind.FATAL:
            raise ValueError("CandidateNotFoundError cannot carry FailureKind.FATAL")
        self.path = Path(path)
        self.kind = kind
        super().__init__(f"Cannot find module '{path}'")


class BindingLoadError(BindingError, ImportError):
    """Raised when an artifact exists at a candidate path but fails to load.

    Always fatal, whatever the wrapped error says; the original failure is
    kept as __cause__.
    """

    code = "ERR_BINDINGS_LOAD_FAILED"

    def __init__(self, path: str | Path, reason: BaseException):
        super().__init__(f"Failed to load native binding {path}: {reason}")
        # ImportError.__init__ resets .path
        self.path = Path(path)


class BindingNotFoundError(BindingError):
    """Raised when no candidate path held a loadable artifact."""

    code = "ERR_BINDINGS_NOT_FOUND"

    def __init__(self, tries: list[Path]):
        self.tries = list(tries)
        listing = "\n".join(f" - {file}" for file in self.tries)
        super().__init__(f"Could not locate the bindings file. Tried:\n{listing}")


def classify_failure(error: BaseException) -> FailureKind:
    """Classify a load failure as not-found (keep searching) or fatal.

    Structured signals win over message text:
    1. CandidateNotFoundError carries its own kind; BindingLoadError is always FATAL
    2. ModuleNotFoundError -> MODULE_NOT_FOUND
    3. FileNotFoundError -> PATH_RESOLUTION_FAILED
    4. Exception text containing "not find" -> MESSAGE_NOT_FOUND

    Args:
        error: Exception raised by a load capability

    Returns:
        The failure kind; FailureKind.FATAL for anything unrecognized
    """
    if isinstance(error, CandidateNotFoundError):
        return error.kind
    if isinstance(error, BindingLoadError):
        return FailureKind.FATAL
    if isinstance(error, ModuleNotFoundError):
        return FailureKind.MODULE_NOT_FOUND
    if isinstance(error, FileNotFoundError):
        return FailureKind.PATH_RESOLUTION_FAILED
    if isinstance(error, Exception) and NOT_FOUND_MESSAGE.search(str(error)):
        return FailureKind.MESSAGE_NOT_FOUND
    return FailureKind.FATAL
