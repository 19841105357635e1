"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (namespace.category.action)
- Searchable in log aggregators

Event Naming Convention:
    <component>.<category>.<action>

    component: sampling, polygon, error
    category: run, worker, domain, loaded
    action: started, finished, completed, cancelled

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.workers
    | filter event = "sampling.run.completed"
    | stats avg(metadata.elapsed_s) by metadata.workers
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - sampling.*: Sampling engine lifecycle
    - polygon.*: Polygon input
    - error.*: Error conditions
    """

    # ========== Sampling Events ==========
    RUN_STARTED = "sampling.run.started"
    """Workers spawned for a sampling run."""

    WORKER_FINISHED = "sampling.worker.finished"
    """One worker classified its whole share."""

    RUN_COMPLETED = "sampling.run.completed"
    """All workers joined, final counters available."""

    RUN_CANCELLED = "sampling.run.cancelled"
    """Run stopped before every sample was classified."""

    DOMAIN_MISMATCH = "sampling.domain.mismatch"
    """Polygon extends beyond the sampling domain."""

    # ========== Polygon Events ==========
    POLYGON_LOADED = "polygon.loaded"
    """Polygon vertices parsed from a source."""

    # ========== Error Events ==========
    INVALID_CONFIG = "error.invalid_config"
    """Run configuration rejected before sampling."""

    INVALID_POLYGON = "error.invalid_polygon"
    """Polygon rejected before sampling."""

    IO_FAILURE = "error.io_failure"
    """Polygon source could not be read."""

    WORKER_FAILED = "error.worker_failed"
    """A sampling worker raised an exception."""
