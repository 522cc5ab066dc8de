"""Geometric operations on polygon rings.

This module provides core mathematical utilities for:
- Orientation (shoelace sum and signed area)
- Point-in-polygon testing (ray casting algorithm)
- Bezier curve flattening
- Near-duplicate removal with index tracking
- Bounding boxes

Rings are plain lists of Point without a repeated closing point unless
stated otherwise. All functions are pure and stateless.
"""

from collections.abc import Iterable, Sequence

from signcraft.core._bezier import flatten_cubic as _flatten_cubic
from signcraft.core._bezier import flatten_quadratic as _flatten_quadratic
from signcraft.domain import Point

Bounds = tuple[float, float, float, float]


def shoelace_sum(points: Sequence[Point]) -> float:
    """Calculate the orientation sum ``sum((x[i+1]-x[i]) * (y[i+1]+y[i]))``.

    Positive for rings that run clockwise in a y-up frame.

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Orientation sum (minus twice the signed area)

    Examples:
        >>> square = [Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)]
        >>> shoelace_sum(square)
        2.0
    """
    total = 0.0
    n = len(points)
    for i in range(n):
        p = points[i]
        q = points[(i + 1) % n]
        total += (q.x - p.x) * (q.y + p.y)
    return total


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction in a y-up frame:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    if len(points) < 3:
        return 0.0
    return -shoelace_sum(points) / 2.0


def is_outer(points: Sequence[Point]) -> bool:
    """Classify an outline-space ring: positive shoelace sum means outer shell."""
    return shoelace_sum(points) > 0


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> point_in_polygon(Point(1.0, 1.0), square)  # Center
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)  # Outside
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def bezier_flatten(points: list[Point], tolerance: float = 0.5) -> list[Point]:
    """Convert Bezier curve to line segments using recursive subdivision.

    Handles both quadratic (3 points) and cubic (4 points) Bezier curves.
    Uses recursive subdivision until the curve is flat enough (within tolerance).

    Args:
        points: Control points of the Bezier curve (3 for quadratic, 4 for cubic)
        tolerance: Maximum distance from true curve (in outline units)

    Returns:
        List of points forming line segments that approximate the curve

    Raises:
        ValueError: If points list is not of length 2 to 4
    """
    if len(points) == 2:
        return points
    elif len(points) == 3:
        return _flatten_quadratic(points, tolerance)
    elif len(points) == 4:
        return _flatten_cubic(points, tolerance)
    else:
        raise ValueError(f"Expected 2-4 points for Bezier curve, got {len(points)}")


def vertex_centroid(points: Sequence[Point]) -> Point:
    """Average of the ring's vertices."""
    n = len(points)
    if n == 0:
        return Point(0.0, 0.0)
    return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)


def ring_bounds(points: Iterable[Point]) -> Bounds:
    """Bounding box of a set of points.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y)

    Raises:
        ValueError: If no points are given
    """
    xs: list[float] = []
    ys: list[float] = []
    for p in points:
        xs.append(p.x)
        ys.append(p.y)
    if not xs:
        raise ValueError("Cannot compute bounds of an empty ring")
    return (min(xs), min(ys), max(xs), max(ys))


def union_bounds(boxes: Iterable[Bounds]) -> Bounds | None:
    """Smallest box containing every given box, or None if there are none."""
    result: Bounds | None = None
    for min_x, min_y, max_x, max_y in boxes:
        if result is None:
            result = (min_x, min_y, max_x, max_y)
        else:
            result = (
                min(result[0], min_x),
                min(result[1], min_y),
                max(result[2], max_x),
                max(result[3], max_y),
            )
    return result


def clean_ring(points: Sequence[Point], tolerance: float) -> tuple[list[Point], list[int]]:
    """Remove near-duplicate points from a closed ring.

    A point is dropped when it lies within ``tolerance`` of the last kept
    point. Afterwards trailing points within ``tolerance`` of the first
    point are dropped too, which also removes an explicit closing point.
    The operation is idempotent.

    Args:
        points: Ring points, optionally with a repeated closing point
        tolerance: Merge distance

    Returns:
        Tuple of (cleaned ring, index map). ``index_map[i]`` is the index in
        the cleaned ring that input point ``i`` was merged into.

    Examples:
        >>> ring = [Point(0, 0), Point(0, 0.001), Point(1, 0), Point(1, 1), Point(0, 0)]
        >>> cleaned, mapping = clean_ring(ring, 0.01)
        >>> len(cleaned), mapping
        (3, [0, 0, 1, 2, 0])
    """
    kept: list[Point] = []
    index_map: list[int] = []

    for p in points:
        if kept and p.distance_to(kept[-1]) <= tolerance:
            index_map.append(len(kept) - 1)
            continue
        kept.append(p)
        index_map.append(len(kept) - 1)

    while len(kept) > 1 and kept[-1].distance_to(kept[0]) <= tolerance:
        dropped = len(kept) - 1
        kept.pop()
        index_map = [0 if idx == dropped else idx for idx in index_map]

    return kept, index_map


def remove_near_duplicates(points: Sequence[Point], tolerance: float) -> list[Point]:
    """Clean a ring and discard the index map (see clean_ring)."""
    return clean_ring(points, tolerance)[0]


def orient(points: Sequence[Point], counter_clockwise: bool) -> list[Point]:
    """Return the ring with the requested y-up winding.

    Args:
        points: Ring points
        counter_clockwise: True for positive signed area

    Returns:
        The ring itself or its reversal
    """
    area = signed_area(points)
    if (area > 0) == counter_clockwise:
        return list(points)
    return list(reversed(points))
