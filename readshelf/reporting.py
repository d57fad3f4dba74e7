"""
Error/Success Reporter

Turns failures and confirmations into user-visible notifications.
The notification sink is whatever the UI provides (a toast queue, a
status bar); reporting never raises even if the sink does.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Protocol

from loguru import logger


DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


class NotificationLevel(str, Enum):
    """Notification severity."""
    ERROR = "error"
    SUCCESS = "success"


class NotificationSink(Protocol):
    """Receives user-visible notifications."""
    
    def notify(self, level: NotificationLevel, message: str) -> None:
        ...


@dataclass
class Notification:
    """A notification captured by CollectingSink."""
    
    level: NotificationLevel
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class CollectingSink:
    """Sink that keeps notifications in memory."""
    
    def __init__(self):
        self.notifications: list[Notification] = []
    
    def notify(self, level: NotificationLevel, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))
    
    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.notifications]
    
    def clear(self) -> None:
        self.notifications.clear()


def error_message(error: Any) -> str:
    """Derive a display message from an exception, a string, or anything else."""
    if isinstance(error, BaseException):
        message = getattr(error, "message", None) or str(error)
        return message if isinstance(message, str) and message else DEFAULT_ERROR_MESSAGE
    if isinstance(error, str):
        return error
    return DEFAULT_ERROR_MESSAGE


class Reporter:
    """Reports errors and successes to a sink and to the log."""
    
    def __init__(self, sink: Optional[NotificationSink] = None):
        self.sink = sink
    
    def _emit(self, level: NotificationLevel, message: str) -> None:
        if self.sink is None:
            return
        try:
            self.sink.notify(level, message)
        except Exception as e:
            logger.warning(f"Notification sink failed: {e}")
    
    def report_error(self, error: Any) -> None:
        """Show an error notification and log the original value."""
        message = error_message(error)
        self._emit(NotificationLevel.ERROR, message)
        try:
            description = repr(error)
        except Exception:
            description = message
        logger.error(f"API Error: {description}")
    
    def report_success(self, message: str) -> None:
        """Show a success notification."""
        self._emit(NotificationLevel.SUCCESS, message)
        logger.info(f"Success: {message}")
