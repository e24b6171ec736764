"""Locate and load prebuilt native bindings from conventional build directories."""

from .cache import BindingCache
from .cache import CacheKey
from .candidates import TEMPLATES
from .candidates import generate_candidates
from .config import BindingConfig
from .display import describe_error
from .display import render_error
from .errors import BindingError
from .errors import BindingLoadError
from .errors import BindingNotFoundError
from .errors import CandidateNotFoundError
from .errors import FailureKind
from .errors import InvalidArgumentError
from .errors import NoProjectRootError
from .errors import UnsupportedFileURIError
from .loaders import ArtifactLoader
from .loaders import ExtensionModuleLoader
from .loaders import SharedLibraryLoader
from .logging_setup import init_json_logging
from .resolver import BindingResolver
from .resolver import default_resolver
from .resolver import load_binding
from .root import find_root

__all__ = [
    "ArtifactLoader",
    "BindingCache",
    "BindingConfig",
    "BindingError",
    "BindingLoadError",
    "BindingNotFoundError",
    "BindingResolver",
    "CacheKey",
    "CandidateNotFoundError",
    "ExtensionModuleLoader",
    "FailureKind",
    "InvalidArgumentError",
    "NoProjectRootError",
    "SharedLibraryLoader",
    "TEMPLATES",
    "UnsupportedFileURIError",
    "default_resolver",
    "describe_error",
    "find_root",
    "generate_candidates",
    "init_json_logging",
    "load_binding",
    "render_error",
]
