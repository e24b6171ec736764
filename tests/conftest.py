"""Pytest configuration for native_loader tests."""

from pathlib import Path

import pytest

from native_loader.errors import CandidateNotFoundError


class RecordingLoader:
    """Fake load capability that records every path it is asked to load.

    Paths in ``artifacts`` load successfully, paths in ``failures`` raise the
    mapped exception, and everything else reports not-found.
    """

    extension = ".so"

    def __init__(self, artifacts: dict | None = None, failures: dict | None = None):
        self.artifacts = {Path(k): v for k, v in (artifacts or {}).items()}
        self.failures = {Path(k): v for k, v in (failures or {}).items()}
        self.attempts: list[Path] = []

    def load(self, path: Path):
        path = Path(path)
        self.attempts.append(path)
        if path in self.failures:
            raise self.failures[path]
        if path in self.artifacts:
            return self.artifacts[path]
        raise CandidateNotFoundError(path)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with a package.json marker and a nested source directory."""
    root = tmp_path.resolve() / "proj"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "package.json").write_text('{"name": "proj"}')
    return root


@pytest.fixture
def host_config(monkeypatch):
    """Pin host metadata so candidate paths are predictable."""
    monkeypatch.setattr(
        "native_loader.config.host_defaults",
        lambda: {
            "arch": "x64",
            "platform": "linux",
            "host_version": "3.12.1",
            "compiled_dir": "compiled",
            "prebuilt_tag": "cpython-312-linux-x64",
        },
    )
