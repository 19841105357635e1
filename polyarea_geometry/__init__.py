"""
Geometry Layer
==============

Bounded Context: Pure planar geometry for point-in-polygon classification.

Responsibilities:
- Shape representation (immutable)
- Orientation and segment intersection predicates
- Ray-casting point-in-polygon test
- NO state, NO counting, NO sampling

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
- Zero side effects (safe to share across worker threads)

Usage:

    from polyarea_geometry import Point, Polygon, point_in_polygon

    square = Polygon.from_points([(0, 0), (1, 0), (1, 1), (0, 1)])
    point_in_polygon(square, Point(0.5, 0.5))  # True
"""

from polyarea_geometry.shapes import Point, Polygon, InvalidPolygon
from polyarea_geometry.kernel import (
    Orientation,
    RayCaster,
    DEFAULT_EXTREME_X,
    orientation,
    on_segment,
    segments_intersect,
    point_in_polygon,
)

__all__ = [
    # Shapes
    "Point",
    "Polygon",
    "InvalidPolygon",
    # Kernel
    "Orientation",
    "RayCaster",
    "DEFAULT_EXTREME_X",
    "orientation",
    "on_segment",
    "segments_intersect",
    "point_in_polygon",
]
