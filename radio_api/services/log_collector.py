"""In-memory ring buffer of recent log records, served by /api/app/logs."""

from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime, timezone

from radio_api.schemas.app_info import LogEntry


class LogCollector(logging.Handler):
    """Logging handler keeping the most recent ``capacity`` records at INFO and above."""

    def __init__(self, capacity: int = 500, level: int = logging.INFO):
        super().__init__(level=level)
        self.capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._entries_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            exception = None
            if record.exc_info:
                exception = logging.Formatter().formatException(record.exc_info)
            entry = LogEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
                level=record.levelname,
                message=f"[{record.name}] {record.getMessage()}",
                exception=exception,
            )
        except Exception:
            self.handleError(record)
            return
        with self._entries_lock:
            self._entries.append(entry)

    def recent(self, count: int = 100) -> list[LogEntry]:
        """Return up to ``count`` most recent entries, oldest first."""
        if count <= 0:
            return []
        with self._entries_lock:
            snapshot = list(self._entries)
        return snapshot[-count:]
