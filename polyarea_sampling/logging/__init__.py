"""
Structured Logging for polyarea
===============================

Bounded Context: Observability

JSON-structured logging with typed event names.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from polyarea_sampling.logging import create_logger, LogEvent
    >>> logger = create_logger("engine")
    >>> logger.info(
    ...     event=LogEvent.RUN_STARTED,
    ...     message="Sampling started",
    ...     metadata={'workers': 4}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
