"""
Configuration schema for a sampling run.

This module defines the sampling domain and the run configuration
(sample count, worker count, random seed, batching and progress settings).
Both are immutable and validated at construction, before any worker starts.
"""

import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Tuple
import yaml

from polyarea_geometry import Polygon


class InvalidConfig(ValueError):
    """Raised when a run configuration is rejected before sampling starts."""
    pass


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class SamplingDomain:
    """
    Axis-aligned rectangle random points are drawn from.

    Its area is the Monte Carlo reference area.
    """

    x_min: float = 0.0
    y_min: float = 0.0
    x_max: float = 2.0
    y_max: float = 2.0

    def __post_init__(self):
        """Validate domain bounds."""
        bounds = (self.x_min, self.y_min, self.x_max, self.y_max)
        if not all(_is_number(b) for b in bounds):
            raise InvalidConfig(f"Domain bounds must be numbers, got {bounds}")
        if not all(math.isfinite(b) for b in bounds):
            raise InvalidConfig(f"Domain bounds must be finite, got {bounds}")
        if self.x_max <= self.x_min or self.y_max <= self.y_min:
            raise InvalidConfig(
                f"Domain must have positive width and height, got {bounds}"
            )

    @property
    def area(self) -> float:
        return (self.x_max - self.x_min) * (self.y_max - self.y_min)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self.x_min, self.y_min, self.x_max, self.y_max

    def contains_polygon(self, polygon: Polygon) -> bool:
        """Check whether the polygon's bounding box lies inside the domain."""
        x_min, y_min, x_max, y_max = polygon.bounds
        return (
            self.x_min <= x_min and x_max <= self.x_max
            and self.y_min <= y_min and y_max <= self.y_max
        )

    @classmethod
    def from_polygon(cls, polygon: Polygon, margin: float = 0.0) -> "SamplingDomain":
        """
        Derive the domain from a polygon's bounding box.

        Args:
            polygon: Polygon to enclose
            margin: Extra space added on every side
        """
        if margin < 0:
            raise InvalidConfig(f"margin must be non-negative, got {margin}")

        x_min, y_min, x_max, y_max = polygon.bounds
        return cls(
            x_min=x_min - margin,
            y_min=y_min - margin,
            x_max=x_max + margin,
            y_max=y_max + margin,
        )


@dataclass(frozen=True)
class RunConfig:
    """
    Configuration for one sampling run.

    Immutable after construction (frozen dataclass).

    Attributes:
        total_points: Number of random samples to classify
        worker_count: Number of concurrent sampling workers
        domain: Region samples are drawn from
        ray_extreme_x: Ray end point for ray casting (derived when None)
        seed: Seed for the per-worker random streams (fresh entropy when None)
        batch_size: Samples a worker classifies between counter commits
        progress_interval: Seconds between progress reports
    """

    total_points: int
    worker_count: int
    domain: SamplingDomain = field(default_factory=SamplingDomain)
    ray_extreme_x: Optional[float] = None
    seed: Optional[int] = None
    batch_size: int = 1024
    progress_interval: float = 1.0

    def __post_init__(self):
        """Validate run configuration."""
        if not _is_int(self.total_points):
            raise InvalidConfig(
                f"total_points must be an integer, got {self.total_points!r}"
            )
        if self.total_points <= 0:
            raise InvalidConfig(
                f"total_points must be greater than 0, got {self.total_points}"
            )

        if not _is_int(self.worker_count):
            raise InvalidConfig(
                f"worker_count must be an integer, got {self.worker_count!r}"
            )
        if self.worker_count <= 0:
            raise InvalidConfig(
                f"worker_count must be greater than 0, got {self.worker_count}"
            )

        if not isinstance(self.domain, SamplingDomain):
            raise InvalidConfig(
                f"domain must be a SamplingDomain, got {type(self.domain).__name__}"
            )

        if self.ray_extreme_x is not None:
            if not _is_number(self.ray_extreme_x) or not math.isfinite(self.ray_extreme_x):
                raise InvalidConfig(
                    f"ray_extreme_x must be a finite number, got {self.ray_extreme_x!r}"
                )
            if not self.ray_extreme_x > self.domain.x_max:
                raise InvalidConfig(
                    f"ray_extreme_x must lie right of the domain "
                    f"(x_max={self.domain.x_max}), got {self.ray_extreme_x}"
                )

        if self.seed is not None:
            if not _is_int(self.seed):
                raise InvalidConfig(f"seed must be an integer, got {self.seed!r}")
            if self.seed < 0:
                raise InvalidConfig(f"seed must be non-negative, got {self.seed}")

        if not _is_int(self.batch_size):
            raise InvalidConfig(
                f"batch_size must be an integer, got {self.batch_size!r}"
            )
        if self.batch_size <= 0:
            raise InvalidConfig(
                f"batch_size must be greater than 0, got {self.batch_size}"
            )

        if not _is_number(self.progress_interval):
            raise InvalidConfig(
                f"progress_interval must be a number, got {self.progress_interval!r}"
            )
        if not (self.progress_interval > 0 and math.isfinite(self.progress_interval)):
            raise InvalidConfig(
                f"progress_interval must be a positive finite number, got {self.progress_interval}"
            )

    @classmethod
    def from_yaml(cls, yaml_path: Path, **overrides) -> "RunConfig":
        """
        Load configuration from YAML file.

        Keyword overrides take precedence over values in the file; overrides
        set to None are ignored.

        Example YAML:
            total_points: 1000000
            worker_count: 4
            seed: 42
            batch_size: 2048
            progress_interval: 0.5

            domain:
              x_min: 0.0
              y_min: 0.0
              x_max: 2.0
              y_max: 2.0

            ray_extreme_x: null
        """
        try:
            with open(yaml_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidConfig(f"Invalid YAML in {yaml_path}: {e}")
        except OSError as e:
            raise InvalidConfig(f"Cannot read config file {yaml_path}: {e}")

        if not isinstance(data, dict):
            raise InvalidConfig(f"Config {yaml_path} must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidConfig(
                f"Unknown config keys in {yaml_path}: {', '.join(sorted(unknown))}"
            )

        data.update({k: v for k, v in overrides.items() if v is not None})

        domain_data = data.pop("domain", None)
        if isinstance(domain_data, SamplingDomain):
            domain = domain_data
        else:
            try:
                domain = SamplingDomain(**(domain_data or {}))
            except TypeError as e:
                raise InvalidConfig(f"Invalid domain in {yaml_path}: {e}")

        if "total_points" not in data or "worker_count" not in data:
            raise InvalidConfig(
                f"total_points and worker_count are required (file: {yaml_path})"
            )

        return cls(domain=domain, **data)
