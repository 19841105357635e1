"""
Polygon source loader.

Reads one vertex per line ("x y", whitespace separated) in boundary order.
Lines that do not start with two numbers are skipped.
"""

import logging
import math
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from polyarea_geometry import Polygon, InvalidPolygon

logger = logging.getLogger(__name__)

MAX_VERTICES = 1_000_000


class IOFailure(OSError):
    """Raised when the polygon source cannot be opened or read."""
    pass


def parse_vertex(line: str):
    """
    Parse the first two tokens of a line as an (x, y) pair.

    Returns:
        (x, y) tuple, or None if the line does not hold two finite numbers
    """
    tokens = line.split()
    if len(tokens) < 2:
        return None

    try:
        x, y = float(tokens[0]), float(tokens[1])
    except ValueError:
        return None

    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return x, y


def parse_vertices(
    lines: Iterable[str],
    max_vertices: int = MAX_VERTICES,
) -> List[Tuple[float, float]]:
    """
    Parse vertex lines, skipping anything that is not two numbers.

    Raises:
        InvalidPolygon: If more than max_vertices vertices are parsed
    """
    vertices = []
    skipped = 0

    for line in lines:
        vertex = parse_vertex(line)
        if vertex is None:
            if line.strip():
                skipped += 1
            continue

        vertices.append(vertex)
        if len(vertices) > max_vertices:
            raise InvalidPolygon(
                f"Polygon exceeds the maximum of {max_vertices} vertices"
            )

    if skipped:
        logger.debug(f"Skipped {skipped} unparseable polygon lines")

    return vertices


def load_polygon(path: Union[str, Path], max_vertices: int = MAX_VERTICES) -> Polygon:
    """
    Load a polygon from a vertex file.

    Args:
        path: Polygon source path
        max_vertices: Upper bound on parsed vertices

    Returns:
        Polygon with the parsed vertices

    Raises:
        IOFailure: If the file cannot be read
        InvalidPolygon: If fewer than 3 vertices were parsed
    """
    path = Path(path)

    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            vertices = parse_vertices(f, max_vertices=max_vertices)
    except OSError as e:
        raise IOFailure(f"Cannot read polygon file {path}: {e.strerror or e}") from e

    if len(vertices) < 3:
        raise InvalidPolygon(
            f"Invalid polygon or insufficient data in {path}: "
            f"need at least 3 vertices, got {len(vertices)}"
        )

    polygon = Polygon.from_points(vertices)
    logger.info(f"Loaded polygon from {path}: {len(polygon)} vertices, bounds={polygon.bounds}")
    return polygon
