"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

Wraps Python's logging module and emits one JSON object per record.

Example:
    >>> logger = StructuredLogger(component="engine")
    >>> logger.info(
    ...     event=LogEvent.RUN_STARTED,
    ...     message="Sampling started",
    ...     metadata={'workers': 4, 'total_points': 100000}
    ... )

Output:
    {
        "timestamp": "2026-10-18T15:30:45.123456+00:00",
        "level": "INFO",
        "component": "engine",
        "event": "sampling.run.started",
        "message": "Sampling started",
        "metadata": {"workers": 4, "total_points": 100000}
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent


class StructuredLogger:
    """
    JSON structured logger.

    Attributes:
        component: Component name (e.g., "engine", "cli")
        logger: Underlying Python logger instance

    Thread Safety:
        Thread-safe via Python's logging module. Sampling workers log
        through a shared instance.
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "engine")
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: polyarea.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"polyarea.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        # Configure JSON formatter if not already configured
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)
            self.logger.propagate = False

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        log_level = getattr(logging, level)
        if not self.logger.isEnabledFor(log_level):
            return

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        self.logger.log(log_level, json.dumps(log_entry, default=str))

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log INFO level message.

        Example:
            >>> logger.info(
            ...     event=LogEvent.RUN_COMPLETED,
            ...     message="Sampling finished",
            ...     metadata={'checked': 100000, 'inside': 25013}
            ... )
        """
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log WARNING level message."""
        self._log('WARNING', event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log ERROR level message.

        Example:
            >>> try:
            ...     load_polygon(path)
            ... except IOFailure as e:
            ...     logger.error(
            ...         event=LogEvent.IO_FAILURE,
            ...         message="Could not read polygon",
            ...         exc_info=e,
            ...         metadata={'path': str(path)}
            ...     )
        """
        self._log('ERROR', event, message, metadata, exc_info)


class JSONFormatter(logging.Formatter):
    """Pass-through formatter: StructuredLogger messages are already JSON."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Example:
        >>> logger = create_logger("engine", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
