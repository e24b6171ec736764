"""Substitution values for candidate path templates.

A BindingConfig is built fresh for every resolution from host defaults
plus the call's own values (root and name), and is never mutated.
"""

from __future__ import annotations

import os
import platform
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .errors import InvalidArgumentError

COMPILED_DIR_ENV = "NATIVE_BINDINGS_COMPILED_DIR"
DEFAULT_COMPILED_DIR = "compiled"
DEFAULT_NAME = "bindings"

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
}


class BindingConfig(BaseModel):
    """Values that candidate path templates can reference."""

    model_config = ConfigDict(frozen=True)

    root: str = Field(..., description="Absolute project root directory")
    name: str = Field(..., description="Artifact file name, including the binary extension")
    arch: str = Field(..., description="Host CPU architecture")
    platform: str = Field(..., description="Host platform (sys.platform)")
    host_version: str = Field(..., description="Host interpreter version")
    compiled_dir: str = Field(DEFAULT_COMPILED_DIR, description="Compiled-output directory name")
    prebuilt_tag: str = Field(..., description="ABI tag used by prebuilt binary layouts")

    @classmethod
    def create(cls, root: str | Path, name: str, **overrides: Any) -> BindingConfig:
        """Build a config from host defaults, then apply overrides field by field.

        Args:
            root: Project root directory
            name: Normalized artifact file name
            **overrides: Replacement values for any other field

        Returns:
            Frozen BindingConfig

        Raises:
            InvalidArgumentError: An override names an unknown field, root or name
        """
        check_overrides(overrides)

        values = host_defaults()
        values.update(overrides)
        values["root"] = str(root)
        values["name"] = name
        return cls(**values)


def normalize_arch(machine: str) -> str:
    machine = machine.lower()
    return _ARCH_ALIASES.get(machine, machine)


def host_defaults() -> dict[str, str]:
    """Read host metadata and environment overrides.

    Returns:
        Default values for every BindingConfig field except root and name
    """
    arch = normalize_arch(platform.machine())
    return {
        "arch": arch,
        "platform": sys.platform,
        "host_version": platform.python_version(),
        "compiled_dir": os.environ.get(COMPILED_DIR_ENV) or DEFAULT_COMPILED_DIR,
        "prebuilt_tag": f"{sys.implementation.cache_tag}-{sys.platform}-{arch}",
    }


def normalize_name(name: str, extension: str) -> str:
    """Append the binary extension to a module name that lacks it.

    Args:
        name: Logical module name, e.g. "addon" or "addon.so"
        extension: Recognized binary extension, including the dot

    Returns:
        File name ending in the extension

    Raises:
        InvalidArgumentError: name is not a string
    """
    if not isinstance(name, str):
        raise InvalidArgumentError('"name" must be a string.')

    if os.path.splitext(name)[1] != extension:
        name += extension

    return name


def check_overrides(overrides: dict[str, Any]) -> None:
    """Reject override names that are not overridable BindingConfig fields.

    root and name come from each call, never from overrides.

    Raises:
        InvalidArgumentError: An override names an unknown field, root or name
    """
    per_call = {"root", "name"} & set(overrides)
    if per_call:
        raise InvalidArgumentError(
            f"Binding config field(s) {', '.join(sorted(per_call))} are set per call and cannot be overridden"
        )

    unknown = set(overrides) - set(BindingConfig.model_fields)
    if unknown:
        raise InvalidArgumentError(f"Unknown binding config field(s): {', '.join(sorted(unknown))}")
