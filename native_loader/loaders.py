"""Load capabilities - map an artifact file into the running process.

Concrete implementations of the ArtifactLoader protocol:
- ExtensionModuleLoader: CPython extension modules via importlib
- SharedLibraryLoader: plain shared libraries via ctypes

A loader signals "nothing here" with CandidateNotFoundError, ModuleNotFoundError
or FileNotFoundError. Anything else it raises stops the search.
"""

from __future__ import annotations

import ctypes
import importlib.machinery
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from .errors import BindingLoadError
from .errors import CandidateNotFoundError
from .errors import FailureKind

logger = logging.getLogger(__name__)


@runtime_checkable
class ArtifactLoader(Protocol):
    """Anything that can load a binary artifact from a path."""

    extension: str

    def load(self, path: Path) -> Any: ...


def default_extension() -> str:
    return ".pyd" if sys.platform == "win32" else ".so"


def shared_library_extension() -> str:
    if sys.platform == "win32":
        return ".dll"
    if sys.platform == "darwin":
        return ".dylib"
    return ".so"


class ExtensionModuleLoader:
    """Load a CPython extension module from an explicit file path."""

    def __init__(self, extension: str | None = None, register: bool = False):
        """Initialize loader.

        Args:
            extension: Recognized file extension (default: .pyd on Windows, .so elsewhere)
            register: Add the loaded module to sys.modules when the name is free
        """
        self.extension = extension or default_extension()
        self.register = register

    def load(self, path: Path) -> Any:
        """Load and execute the extension module at path.

        Raises:
            CandidateNotFoundError: No file at path
            BindingLoadError: The file exists but could not be loaded or initialized
        """
        path = Path(path)
        if not path.is_file():
            raise CandidateNotFoundError(path, FailureKind.MODULE_NOT_FOUND)

        # PyInit_<name> is looked up from the part of the file name before the first dot
        module_name = path.name.split(".", 1)[0]
        loader = importlib.machinery.ExtensionFileLoader(module_name, str(path))
        spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
        if spec is None:
            raise BindingLoadError(path, ImportError(f"Cannot create module spec for {path}"))

        # The file exists; any import failure from here on, ModuleNotFoundError included, is fatal
        try:
            module = importlib.util.module_from_spec(spec)
            loader.exec_module(module)
        except ImportError as e:
            raise BindingLoadError(path, e) from e

        if self.register:
            existing = sys.modules.get(module_name)
            if existing is None:
                sys.modules[module_name] = module
            elif existing is not module:
                logger.warning(f"[binding:load] not registering {path}: sys.modules[{module_name!r}] is taken")

        logger.debug(f"[binding:load] extension module {module_name} from {path}")
        return module

    def __repr__(self) -> str:
        return f"ExtensionModuleLoader({self.extension})"


class SharedLibraryLoader:
    """Load a plain shared library with ctypes."""

    def __init__(self, extension: str | None = None, mode: int | None = None):
        """Initialize loader.

        Args:
            extension: Recognized file extension (default: host shared library suffix)
            mode: dlopen mode passed to ctypes.CDLL (default: ctypes.DEFAULT_MODE)
        """
        self.extension = extension or shared_library_extension()
        self.mode = ctypes.DEFAULT_MODE if mode is None else mode

    def load(self, path: Path) -> ctypes.CDLL:
        """Open the shared library at path.

        Raises:
            FileNotFoundError: No file at path
            OSError: The file exists but could not be opened
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Shared library not found: {path}")

        library = ctypes.CDLL(str(path), mode=self.mode)
        logger.debug(f"[binding:load] shared library {path}")
        return library

    def __repr__(self) -> str:
        return f"SharedLibraryLoader({self.extension})"
