"""
project: Delve
module: logging_utils.py
License: MIT

Minimal structured logging helper.

Emits key=value pairs with a timestamp and level, one line per event, so
generation and request logs stay grep-able without a logging config.

Usage:
    from delve.logging_utils import log
    log.info(event="server_start", port=5000)

Set DELVE_LOG_JSON=1 for one JSON object per line instead. Reserved keys:
level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time
from contextlib import contextmanager

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("DELVE_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("DELVE_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "delve"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)

    @contextmanager
    def timed(self, level: str = "debug", **fields):
        """Log ``fields`` plus ``elapsed_ms`` once the wrapped block finishes.

        The record is still emitted (with ``failed=True``) when the block raises.
        """
        start = time.perf_counter()
        failed = False
        try:
            yield fields
        except Exception:
            failed = True
            raise
        finally:
            fields["elapsed_ms"] = round((time.perf_counter() - start) * 1000, 3)
            if failed:
                fields["failed"] = True
            self._log(level, **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("delve")
