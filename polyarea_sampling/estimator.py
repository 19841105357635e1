"""
Area Estimator
==============

Turns final counters into an area estimate: inside / total * domain area.
"""

from dataclasses import dataclass

from polyarea_sampling.config import RunConfig
from polyarea_sampling.counter import CounterSnapshot, SampleCounters


@dataclass(frozen=True)
class AreaEstimate:
    """Area estimate together with the counters it was computed from."""

    area: float
    counters: CounterSnapshot
    domain_area: float

    def __str__(self) -> str:
        return format_estimate(self.area)


def estimate(counters, config: RunConfig) -> float:
    """
    Monte Carlo area estimate.

    Args:
        counters: CounterSnapshot or SampleCounters of a finished run
        config: Configuration the run used

    Returns:
        (inside / total_points) * domain area
    """
    if isinstance(counters, SampleCounters):
        counters = counters.snapshot()
    return (counters.inside / config.total_points) * config.domain.area


def estimate_area(counters, config: RunConfig) -> AreaEstimate:
    """Same as estimate(), bundled with its inputs for reporting."""
    if isinstance(counters, SampleCounters):
        counters = counters.snapshot()
    return AreaEstimate(
        area=estimate(counters, config),
        counters=counters,
        domain_area=config.domain.area,
    )


def format_estimate(area: float) -> str:
    return f"estimated area: {area:.2f} square units"
