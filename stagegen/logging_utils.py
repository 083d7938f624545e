"""Structured key=value logging for generation diagnostics.

    from .logging_utils import get_logger
    log = get_logger("stagegen.rooms")
    log.warn(event="room_placement_failed", requested=8, placed=6)

Each call prints one line: ``level=... ts=... k=v ...`` or, with
STAGEGEN_LOG_JSON set, one JSON object. STAGEGEN_LOG_LEVEL picks the threshold
(debug|info|warn|error, default info). Both are read per call. Fields whose
value is None are dropped; spaces in text values are removed.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "yes", "on")


def _threshold() -> int:
    return LEVELS.get(os.getenv("STAGEGEN_LOG_LEVEL", "info").lower(), LEVELS["info"])


def render(level: str, fields: Dict[str, Any]) -> str:
    kept = {k: v for k, v in fields.items() if v is not None}
    stamp = int(time.time())
    if os.getenv("STAGEGEN_LOG_JSON", "0").lower() in _TRUTHY:
        return json.dumps({**kept, "level": level, "ts": stamp}, separators=(",", ":"), default=str)
    pairs = [f"level={level}", f"ts={stamp}"]
    for key, value in kept.items():
        text = value if isinstance(value, (int, float)) else str(value).replace(" ", "")
        pairs.append(f"{key}={text}")
    return " ".join(pairs)


class StageLogger:
    def __init__(self, name: str):
        self.name = name

    def _emit(self, level: str, fields: Dict[str, Any]) -> None:
        if LEVELS[level] < _threshold():
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if level == "error" else sys.stdout
        print(render(level, fields), file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_LOGGERS: Dict[str, StageLogger] = {}


def get_logger(name: str) -> StageLogger:
    if name not in _LOGGERS:
        _LOGGERS[name] = StageLogger(name)
    return _LOGGERS[name]
