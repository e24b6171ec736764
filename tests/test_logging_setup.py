"""Tests for the JSONL logging bootstrap."""

import json
import logging
from pathlib import Path

import pytest

from native_loader.logging_setup import JsonlHandler
from native_loader.logging_setup import init_json_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _records(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_writes_jsonl_with_extras(tmp_path: Path, restore_root_logger):
    log_path = tmp_path / "logs" / "loader.jsonl"
    init_json_logging(str(log_path), "debug")

    logging.getLogger("native_loader.search").info(
        "[binding:try] loaded /proj/build/foo.so", extra={"event": "binding:loaded", "attempts": 1}
    )

    (record,) = _records(log_path)
    assert record["lvl"] == "INFO"
    assert record["logger"] == "native_loader.search"
    assert record["event"] == "binding:loaded"
    assert record["attempts"] == 1
    assert record["message"] == "[binding:try] loaded /proj/build/foo.so"
    assert "msg" not in record


def test_reinit_replaces_handler(tmp_path: Path, restore_root_logger):
    init_json_logging(str(tmp_path / "a.jsonl"))
    init_json_logging(str(tmp_path / "b.jsonl"))

    handlers = [h for h in restore_root_logger.handlers if isinstance(h, JsonlHandler)]
    assert len(handlers) == 1
    assert handlers[0].path == tmp_path / "b.jsonl"


def test_env_configuration(tmp_path: Path, monkeypatch, restore_root_logger):
    log_path = tmp_path / "env.jsonl"
    monkeypatch.setenv("NATIVE_LOADER_LOG_PATH", str(log_path))
    monkeypatch.setenv("NATIVE_LOADER_LOG_LEVEL", "warning")

    handler = init_json_logging()
    logging.getLogger("native_loader").info("dropped")
    logging.getLogger("native_loader").warning("kept")

    assert handler.path == log_path
    assert [r["message"] for r in _records(log_path)] == ["kept"]
