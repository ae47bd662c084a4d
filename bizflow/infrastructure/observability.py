"""Structured Logging - JSON formatter, setup, and a stopwatch for timing batches.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (module_id, sub_module, error_code, elapsed_ms, ...) surfaced when present
    - JSON format in production, human-readable otherwise
    - Stopwatch starts on construction and truncates like integer division

Design Decisions:
    - JSONFormatter on stdlib logging, no third-party log library
    - setup_logging called once by the host application
"""

import json
import logging
import time
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "module_id", "sub_module", "error_code", "function_count",
    "failure_count", "group_index", "elapsed_ms", "properties_file",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging for the host application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


class Stopwatch:
    """Elapsed wall time since construction."""

    def __init__(self):
        self._start_ns = time.perf_counter_ns()

    def elapsed_ms(self) -> int:
        return (time.perf_counter_ns() - self._start_ns) // 1_000_000

    def elapsed_s(self) -> int:
        return (time.perf_counter_ns() - self._start_ns) // 1_000_000_000
