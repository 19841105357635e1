"""
Geometric Shapes Module
========================

Pure geometric representations - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Vertices stored once as a read-only float array
- Thread-safe (immutable after init)
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Iterable, Tuple


class InvalidPolygon(ValueError):
    """Raised when a vertex list cannot form a polygon (fewer than 3 vertices)."""
    pass


@dataclass(frozen=True)
class Point:
    """
    Immutable planar point.

    Attributes:
        x: Finite x coordinate
        y: Finite y coordinate
    """

    x: float
    y: float

    def __post_init__(self):
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Point coordinates must be finite, got ({self.x}, {self.y})")

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Polygon:
    """
    Immutable simple polygon, interpreted as a closed loop.

    The last vertex implicitly connects to the first. Consecutive duplicate
    vertices are not rejected; classification against such polygons is
    undefined.

    Design:
    - Vertices validated and frozen at init
    - Point tuple precomputed for the kernel hot loop
    - Shared read-only by all sampling workers

    Attributes:
        vertices: Nx2 array of (x, y) polygon vertices
    """

    vertices: np.ndarray

    def __post_init__(self):
        """Validate vertices and precompute the point tuple."""
        if not isinstance(self.vertices, np.ndarray):
            raise TypeError(f"vertices must be np.ndarray, got {type(self.vertices)}")
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 2:
            raise ValueError(f"vertices must be Nx2 array, got shape {self.vertices.shape}")
        if len(self.vertices) < 3:
            raise InvalidPolygon(
                f"Polygon must have at least 3 vertices, got {len(self.vertices)}"
            )
        if not np.all(np.isfinite(self.vertices)):
            raise ValueError("Polygon vertices must have finite coordinates")

        vertices = self.vertices.astype(np.float64, copy=True)
        vertices.flags.writeable = False
        object.__setattr__(self, "vertices", vertices)

        points = tuple(Point(float(x), float(y)) for x, y in vertices)
        object.__setattr__(self, "_points", points)

    @classmethod
    def from_points(cls, points: Iterable) -> "Polygon":
        """
        Build a polygon from (x, y) pairs or Point instances.

        Raises:
            InvalidPolygon: If fewer than 3 vertices are given
        """
        coordinates = [(float(x), float(y)) for x, y in points]
        if len(coordinates) < 3:
            raise InvalidPolygon(
                f"Polygon must have at least 3 vertices, got {len(coordinates)}"
            )
        return cls(vertices=np.array(coordinates, dtype=np.float64))

    @property
    def points(self) -> Tuple[Point, ...]:
        """Vertices as Point instances, in boundary order."""
        return self._points

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Axis-aligned bounding box as (x_min, y_min, x_max, y_max)."""
        x_min, y_min = self.vertices.min(axis=0)
        x_max, y_max = self.vertices.max(axis=0)
        return float(x_min), float(y_min), float(x_max), float(y_max)

    def __len__(self) -> int:
        return len(self._points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return np.array_equal(self.vertices, other.vertices)

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"Polygon(vertices={len(self._points)}, bounds={self.bounds})"
