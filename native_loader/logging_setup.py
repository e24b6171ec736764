"""
JSONL logging bootstrap for applications that embed the binding resolver.
The library itself only emits records; call init_json_logging() to persist them.
"""

import json
import logging
import os
from datetime import datetime
from datetime import timezone
from pathlib import Path

PATH_ENV = "NATIVE_LOADER_LOG_PATH"
LEVEL_ENV = "NATIVE_LOADER_LOG_LEVEL"

_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class JsonlHandler(logging.Handler):
    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def format_record(self, record: logging.LogRecord) -> dict:
        base = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "native_loader.log", "ver": "1.0.0"},
            "logger": record.name,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        # Extra fields passed via logger.x(..., extra={...})
        for k, v in record.__dict__.items():
            if k in _RESERVED:
                continue
            base.setdefault(k, v)
        if record.exc_info:
            base["exc"] = logging.Formatter().formatException(record.exc_info)
        return base

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.format_record(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | None = None, level: str | None = None) -> JsonlHandler:
    path = path or os.environ.get(PATH_ENV, "./native-loader.log.jsonl")
    level = (level or os.environ.get(LEVEL_ENV, "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    handler = JsonlHandler(path)
    root.addHandler(handler)
    return handler
