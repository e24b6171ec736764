"""Tests for origin normalization and project root discovery."""

import sys
from pathlib import Path

import pytest

from native_loader.errors import InvalidArgumentError
from native_loader.errors import NoProjectRootError
from native_loader.errors import UnsupportedFileURIError
from native_loader.root import ensure_origin
from native_loader.root import file_uri_to_path
from native_loader.root import find_root

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX file URL layout")


class TestEnsureOrigin:
    def test_plain_path_unchanged(self):
        assert ensure_origin("/some/dir") == "/some/dir"

    def test_pathlike_accepted(self, tmp_path: Path):
        assert ensure_origin(tmp_path) == str(tmp_path)

    def test_rejects_non_text(self):
        with pytest.raises(InvalidArgumentError):
            ensure_origin(None)

    @posix_only
    def test_file_uri_becomes_containing_directory(self):
        assert ensure_origin("file:///proj/index.js") == "/proj"

    @posix_only
    def test_localhost_uri(self):
        assert ensure_origin("file://localhost/proj/lib/main.py") == "/proj/lib"

    @posix_only
    def test_percent_decoding(self):
        assert file_uri_to_path("file:///my%20proj/a.py") == "/my proj/a.py"

    @posix_only
    def test_remote_host_unsupported(self):
        with pytest.raises(UnsupportedFileURIError) as exc_info:
            ensure_origin("file://fileserver/share/index.js")
        assert exc_info.value.code == "ERR_BINDINGS_FILE_URI"
        assert exc_info.value.url == "file://fileserver/share/index.js"

    def test_encoded_separator_unsupported(self):
        with pytest.raises(UnsupportedFileURIError):
            ensure_origin("file:///proj%2Fsub/index.js")


class TestFindRoot:
    def test_walks_up_to_marker(self, tmp_path: Path):
        a = tmp_path.resolve() / "a"
        c = a / "b" / "c"
        c.mkdir(parents=True)
        (a / "package.json").write_text("{}")

        assert find_root(str(c)) == a

    def test_start_directory_counts(self, project: Path):
        assert find_root(str(project)) == project

    def test_dependency_directory_marker(self, tmp_path: Path):
        root = tmp_path.resolve() / "app"
        (root / "node_modules").mkdir(parents=True)
        (root / "lib").mkdir()

        assert find_root(str(root / "lib")) == root

    def test_file_origin_starts_from_parent(self, project: Path):
        module = project / "src" / "pkg" / "mod.py"
        module.write_text("")

        assert find_root(str(module)) == project

    def test_nearest_marker_wins(self, project: Path):
        nested = project / "src" / "pkg"
        (nested / "package.json").write_text("{}")

        assert find_root(str(nested)) == nested

    def test_custom_markers(self, tmp_path: Path):
        root = tmp_path.resolve() / "pyproj"
        (root / "src").mkdir(parents=True)
        (root / "pyproject.toml").write_text("[project]\nname = 'x'\n")

        assert find_root(str(root / "src"), markers=("pyproject.toml",)) == root

    def test_no_marker_reaches_filesystem_root(self, tmp_path: Path):
        start = tmp_path / "x" / "y"
        start.mkdir(parents=True)
        markers = ("no-such-marker-8c1f2e.json",)

        with pytest.raises(NoProjectRootError) as exc_info:
            find_root(str(start), markers=markers)

        error = exc_info.value
        assert error.code == "ERR_BINDINGS_NO_ROOT"
        assert error.path == str(start)
        assert str(start) in str(error)
