"""
Per-day access log file: one JSON object per line.

File: <log_dir>/access-YYYY-MM-DD.log, opened in append mode at startup and held
for the process lifetime (a new day needs a restart to roll to a new file).
Writes are serialized with a lock so concurrent requests never interleave lines.

Logging is best effort: a directory or file that cannot be opened or written is
reported as a warning and the request carries on.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, TextIO

from echo_mirror.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AccessLogEntry:
    """One completed request."""

    timestamp: str
    method: str
    uri: str
    status: int
    request_body: Any
    response_time_ms: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "method": self.method,
            "URI": self.uri,
            "status": self.status,
            "requestBody": self.request_body,
            "responseTime": self.response_time_ms,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


def access_log_path(log_dir: Path, day: date | None = None) -> Path:
    """Path of the access log for day (default: today)."""
    day = day or date.today()
    return log_dir / f"access-{day:%Y-%m-%d}.log"


class AccessLogFile:
    """Shared, lock-guarded append handle on today's access log."""

    def __init__(self, log_dir: Path | str) -> None:
        self.log_dir = Path(log_dir)
        self.path: Path | None = None
        self._handle: TextIO | None = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self) -> bool:
        """
        Create log_dir and open today's file for append.

        Returns False (after logging a warning) when the file cannot be opened;
        subsequent writes are then dropped.
        """
        if self.is_open:
            return True
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("access_log_dir_create_failed", log_dir=str(self.log_dir), error=str(e))
        path = access_log_path(self.log_dir)
        try:
            handle = open(path, "a", encoding="utf-8")
        except OSError as e:
            logger.warning("access_log_open_failed", path=str(path), error=str(e))
            return False
        with self._lock:
            self._handle = handle
            self.path = path
        logger.info("access_log_opened", path=str(path))
        return True

    def write(self, entry: AccessLogEntry) -> bool:
        """Append entry as one line. Returns False if the line was not written."""
        line = entry.to_json() + "\n"
        with self._lock:
            if self._handle is None:
                return False
            try:
                self._handle.write(line)
                self._handle.flush()
            except (OSError, ValueError) as e:
                logger.warning("access_log_write_failed", path=str(self.path), error=str(e))
                return False
        return True

    def close(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.close()
                self._handle = None
