"""Structured logging and progress reporting for compiler invocations."""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

LOGGER_NAME = "dillc"

_PY_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "status": logging.INFO,
    "trace": logging.DEBUG,
}


@dataclass(slots=True)
class BuildLogger:
    """Record sink with error, trace and status channels.

    Every record is kept in ``records`` and mirrored to the stdlib logger named
    ``dillc``. Safe to write from several threads.
    """

    operation: str = "build"
    records: list[dict[str, Any]] = field(default_factory=list)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(LOGGER_NAME))
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def log(
        self,
        *,
        level: str,
        message: str,
        extra: dict[str, Any] | None = None,
        mirror_level: int | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": self.operation,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        with self._lock:
            self.records.append(record)
        if mirror_level is None:
            mirror_level = _PY_LEVELS.get(level, logging.INFO)
        self.logger.log(mirror_level, message)

    def print_error(self, message: str) -> None:
        self.log(level="error", message=message)

    def print_trace(self, message: str) -> None:
        self.log(level="trace", message=message)

    def print_status(self, message: str) -> None:
        self.log(level="status", message=message)

    def start_progress(self, message: str, *, timeout: float | None = None) -> Status:
        status = Status(logger=self, message=message, timeout=timeout)
        self.log(
            level="status",
            message=message,
            extra={"progress": "started", "timeout_seconds": timeout},
        )
        return status

    def records_for_level(self, level: str) -> list[dict[str, Any]]:
        with self._lock:
            return [record for record in self.records if record.get("level") == level]

    def messages(self, level: str) -> list[str]:
        return [record["message"] for record in self.records_for_level(level)]

    def to_json_lines(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            lines = [json.dumps(record, sort_keys=True) for record in self.records]
        output_path.write_text("\n".join(lines) + "\n" if lines else "", encoding="utf-8")
        return output_path


@dataclass(slots=True)
class Status:
    """A running progress indicator.

    ``timeout`` is informational and recorded on the start record; ``None``
    means the build may run indefinitely. Cancellation is mirrored at DEBUG.
    """

    logger: BuildLogger
    message: str
    timeout: float | None = None
    started_at: float = field(default_factory=time.monotonic)
    cancelled: bool = False

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started_at

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self.logger.log(
            level="status",
            message=self.message,
            extra={"progress": "cancelled", "elapsed_seconds": round(self.elapsed, 3)},
            mirror_level=logging.DEBUG,
        )
