"""
Error Log Service

Keeps the most recent client and server error reports in a bounded buffer
and forwards each one to the standard logging pipeline.
"""
import logging
import threading
from collections import deque
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

LEVELS = ('error', 'warning', 'info')

_LOGGING_LEVELS = {
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
}


@dataclass
class ErrorLogEntry:
    message: str
    level: str = 'error'
    stack: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    user_id: Optional[str] = None
    url: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ErrorLogService:
    """
    Ring buffer of the last `max_entries` log entries.
    """

    def __init__(self, max_entries: int = 100):
        self.max_entries = max_entries
        self._entries = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def log(self, message: str, level: str = 'error', **details) -> ErrorLogEntry:
        if level not in LEVELS:
            level = 'error'

        entry = ErrorLogEntry(message=message, level=level, **details)
        with self._lock:
            self._entries.append(entry)

        logger.log(_LOGGING_LEVELS[level], f"[{level.upper()}] {message}", extra={'context': entry.context})
        return entry

    def error(self, message: str, **details) -> ErrorLogEntry:
        return self.log(message, level='error', **details)

    def warning(self, message: str, **details) -> ErrorLogEntry:
        return self.log(message, level='warning', **details)

    def info(self, message: str, **details) -> ErrorLogEntry:
        return self.log(message, level='info', **details)

    def recent(self, level: Optional[str] = None) -> List[ErrorLogEntry]:
        """Entries oldest first, optionally filtered by level."""
        with self._lock:
            entries = list(self._entries)
        if level:
            entries = [entry for entry in entries if entry.level == level]
        return entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self):
        return len(self._entries)
