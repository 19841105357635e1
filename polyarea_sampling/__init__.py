"""
polyarea_sampling - Concurrent Monte Carlo area estimation

This package draws random points from a sampling domain, classifies them
against a polygon with the geometry kernel, and turns the inside ratio into
an area estimate.

Architecture:
- RunConfig / SamplingDomain: Immutable, validated run configuration
- SampleCounters: Thread-safe shared (checked, inside) counters
- SamplingEngine: Worker orchestration
- ProgressReporter: Concurrent progress observer
- estimate(): Final counters -> area

Threading Model:
- Worker Threads (one per share of the samples)
- Progress Reporter Thread (read-only on counters)
- Caller Thread (joins workers, reads final counters)
"""

from polyarea_sampling.config import RunConfig, SamplingDomain, InvalidConfig
from polyarea_sampling.counter import SampleCounters, CounterSnapshot
from polyarea_sampling.engine import (
    SamplingEngine,
    SamplingCancelled,
    partition_points,
    spawn_generators,
    run,
)
from polyarea_sampling.progress import ProgressReporter, ConsoleProgress, percent_complete
from polyarea_sampling.estimator import AreaEstimate, estimate, estimate_area, format_estimate

__all__ = [
    # Config
    "RunConfig",
    "SamplingDomain",
    "InvalidConfig",
    # Counters
    "SampleCounters",
    "CounterSnapshot",
    # Engine
    "SamplingEngine",
    "SamplingCancelled",
    "partition_points",
    "spawn_generators",
    "run",
    # Progress
    "ProgressReporter",
    "ConsoleProgress",
    "percent_complete",
    # Estimator
    "AreaEstimate",
    "estimate",
    "estimate_area",
    "format_estimate",
]

__version__ = "1.0.0"
