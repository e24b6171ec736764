"""Attempt-and-classify search over candidate paths."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from .errors import BindingNotFoundError
from .errors import classify_failure
from .loaders import ArtifactLoader

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """A successfully loaded artifact and where it came from."""

    artifact: Any
    path: Path
    tries: list[Path] = field(default_factory=list)


def load_first(candidates: Iterable[Path], loader: ArtifactLoader) -> SearchResult:
    """Load the first candidate that holds an artifact.

    Not-found failures move on to the next candidate. Any other failure
    propagates unchanged and the remaining candidates are never tried.

    Args:
        candidates: Paths in preference order
        loader: Load capability

    Returns:
        SearchResult for the first successful load

    Raises:
        BindingNotFoundError: Every candidate reported not-found
    """
    tries: list[Path] = []

    for path in candidates:
        tries.append(path)

        try:
            artifact = loader.load(path)
        except Exception as e:
            kind = classify_failure(e)
            if not kind.is_not_found:
                logger.debug(f"[binding:try] {path} failed: {type(e).__name__}, aborting search")
                raise
            logger.debug(f"[binding:try] {path} -> {kind.value}")
            continue

        logger.info(f"[binding:try] loaded {path}", extra={"event": "binding:loaded", "attempts": len(tries)})
        return SearchResult(artifact=artifact, path=path, tries=tries)

    raise BindingNotFoundError(tries)
