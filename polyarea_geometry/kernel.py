"""
Geometry Kernel Module
======================

Stateless predicates - orientation, segment intersection, ray casting.

Design:
- Pure functions (no state)
- Exact float comparison for colinearity (no epsilon)
- Ray end point is explicit configuration (RayCaster), not a hidden constant
- Thread-safe (no mutations)

Known limitation:
    A horizontal ray that passes exactly through a polygon vertex can be
    counted twice (or not at all) and misclassify the query point. Random
    samples hit this with probability zero, degenerate polygons make it
    more likely. This is kept as-is.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence, Union

from polyarea_geometry.shapes import Point, Polygon

# Ray end point used by the baseline [0,2]x[0,2] domain.
DEFAULT_EXTREME_X = 2.5

# Distance kept between the ray end point and everything it must clear.
RAY_MARGIN = 0.5


class Orientation(IntEnum):
    """Rotational sense of an ordered point triplet."""

    COLINEAR = 0
    CLOCKWISE = 1
    COUNTERCLOCKWISE = 2


def orientation(p: Point, q: Point, r: Point) -> Orientation:
    """
    Orientation of the ordered triplet (p, q, r).

    Uses the sign of (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y):
    positive is clockwise, negative counterclockwise, exactly zero colinear.
    """
    val = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)

    if val == 0:
        return Orientation.COLINEAR
    return Orientation.CLOCKWISE if val > 0 else Orientation.COUNTERCLOCKWISE


def on_segment(p: Point, q: Point, r: Point) -> bool:
    """
    Check whether q lies inside the bounding box of segment p-r.

    Only meaningful once orientation() has established that p, q, r are
    colinear; this does not check colinearity itself.
    """
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def segments_intersect(p1: Point, q1: Point, p2: Point, q2: Point) -> bool:
    """
    Check whether segments p1-q1 and p2-q2 intersect.

    Touching endpoints and overlapping colinear segments count as
    intersecting.
    """
    o1 = orientation(p1, q1, p2)
    o2 = orientation(p1, q1, q2)
    o3 = orientation(p2, q2, p1)
    o4 = orientation(p2, q2, q1)

    # General case
    if o1 != o2 and o3 != o4:
        return True

    # Colinear cases
    if o1 == Orientation.COLINEAR and on_segment(p1, p2, q1):
        return True
    if o2 == Orientation.COLINEAR and on_segment(p1, q2, q1):
        return True
    if o3 == Orientation.COLINEAR and on_segment(p2, p1, q2):
        return True
    if o4 == Orientation.COLINEAR and on_segment(p2, q1, q2):
        return True

    return False


def point_in_polygon(
    polygon: Union[Polygon, Sequence[Point]],
    point: Point,
    extreme_x: float = DEFAULT_EXTREME_X,
) -> bool:
    """
    Ray-casting point-in-polygon test.

    Casts a horizontal ray from point to (extreme_x, point.y) and counts
    edge crossings; odd means inside. A point colinear with an edge it
    touches is decided by that edge alone, so boundary points count as
    inside.

    Args:
        polygon: Polygon or sequence of Points in boundary order
        point: Query point
        extreme_x: x of the ray end point, must lie right of the polygon

    Returns:
        True if point is inside (or on the boundary of) the polygon. Always
        False for fewer than 3 vertices.
    """
    vertices = polygon.points if isinstance(polygon, Polygon) else polygon
    n = len(vertices)
    if n < 3:
        return False

    extreme = Point(extreme_x, point.y)

    count = 0
    for i in range(n):
        current = vertices[i]
        following = vertices[(i + 1) % n]

        if segments_intersect(current, following, point, extreme):
            if orientation(current, point, following) == Orientation.COLINEAR:
                return on_segment(current, point, following)
            count += 1

    return count % 2 == 1


@dataclass(frozen=True)
class RayCaster:
    """
    Point-in-polygon classifier bound to one polygon and one ray end point.

    Attributes:
        polygon: Polygon to classify against (shared read-only)
        extreme_x: x of the ray end point
    """

    polygon: Polygon
    extreme_x: float = DEFAULT_EXTREME_X

    def __post_init__(self):
        _, _, x_max, _ = self.polygon.bounds
        if not self.extreme_x > x_max:
            raise ValueError(
                f"Ray end point x={self.extreme_x} must lie right of the polygon "
                f"(x_max={x_max})"
            )

    @classmethod
    def for_polygon(
        cls,
        polygon: Polygon,
        domain_x_max: float,
        extreme_x: Optional[float] = None,
    ) -> "RayCaster":
        """
        Build a caster whose ray clears both the polygon and the sampling domain.

        Args:
            polygon: Polygon to classify against
            domain_x_max: Right edge of the sampling domain
            extreme_x: Explicit ray end point (derived when None)

        Raises:
            ValueError: If an explicit extreme_x does not clear the domain
        """
        _, _, polygon_x_max, _ = polygon.bounds
        reach = max(domain_x_max, polygon_x_max)

        if extreme_x is None:
            extreme_x = reach + RAY_MARGIN
        elif not extreme_x > reach:
            raise ValueError(
                f"Ray end point x={extreme_x} must lie right of the polygon and "
                f"the sampling domain (x_max={reach})"
            )

        return cls(polygon=polygon, extreme_x=float(extreme_x))

    def contains(self, point: Point) -> bool:
        """Check if point is inside the polygon (boundary counts as inside)."""
        return point_in_polygon(self.polygon, point, self.extreme_x)
