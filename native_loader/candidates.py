"""Candidate path templates and their expansion.

Templates are tried in order; earlier entries are the preferred build
locations. The order is part of the resolution contract.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import NamedTuple
from typing import Union

from .config import BindingConfig


class Var(NamedTuple):
    """Template segment substituted from a BindingConfig field."""

    field: str


Segment = Union[str, Var]
PathTemplate = tuple[Segment, ...]

ROOT = Var("root")
NAME = Var("name")

TEMPLATES: tuple[PathTemplate, ...] = (
    # node-gyp style linked output
    (ROOT, "build", NAME),
    # gyp multi-config output
    (ROOT, "build", "Debug", NAME),
    (ROOT, "build", "Release", NAME),
    # CMake, single-configuration generators
    (ROOT, NAME),
    # CMake, multi-configuration generators
    (ROOT, "Debug", NAME),
    (ROOT, "Release", NAME),
    (ROOT, "MinSizeRel", NAME),
    (ROOT, "RelWithDebInfo", NAME),
    # Legacy development layout
    (ROOT, "out", "Debug", NAME),
    (ROOT, "Debug", NAME),
    # Legacy hand-built release layout
    (ROOT, "out", "Release", NAME),
    (ROOT, "Release", NAME),
    # waf
    (ROOT, "build", "default", NAME),
    # Versioned production output
    (ROOT, Var("compiled_dir"), Var("host_version"), Var("platform"), Var("arch"), NAME),
    # qbs
    (ROOT, "addon-build", "release", "install-root", NAME),
    (ROOT, "addon-build", "debug", "install-root", NAME),
    (ROOT, "addon-build", "default", "install-root", NAME),
    # Prebuilt binaries, lib/binding/<abi>-<platform>-<arch>
    (ROOT, "lib", "binding", Var("prebuilt_tag"), NAME),
)


def expand(template: PathTemplate, config: BindingConfig) -> Path:
    parts = [getattr(config, segment.field) if isinstance(segment, Var) else segment for segment in template]
    return Path(os.path.join(*parts))


def generate_candidates(config: BindingConfig, templates: tuple[PathTemplate, ...] = TEMPLATES) -> list[Path]:
    """Expand every template against config, preserving template order.

    Args:
        config: Substitution values
        templates: Ordered templates (defaults to the built-in search order)

    Returns:
        One absolute path per template, duplicates included
    """
    return [expand(template, config) for template in templates]
