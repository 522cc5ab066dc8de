"""Polygon triangulation with holes.

This module triangulates a polygon with zero or more hole rings using
constrained Delaunay triangulation from shapely (GEOS). When the input
is invalid or the triangulation fails, it falls back to a fan from the
outer ring's centroid. The fan ignores holes, so it is a degraded result
and is always logged and flagged.

Key classes:
- PolygonTriangulator: Cleans rings and triangulates them
- Triangulation: Triangles plus fallback information
"""

from collections.abc import Sequence
from dataclasses import dataclass

import shapely
import structlog
from shapely.errors import GEOSException
from shapely.geometry import Polygon

from signcraft.core.geometry import remove_near_duplicates, vertex_centroid
from signcraft.domain import Point
from signcraft.exceptions import TriangulationError

logger = structlog.get_logger(__name__)

Triangle2 = tuple[Point, Point, Point]


@dataclass
class Triangulation:
    """Result of triangulating one polygon.

    Attributes:
        triangles: Counter-clockwise triangles (y-up)
        used_fallback: True if the fan fallback produced the triangles
        reason: Why the constrained triangulation was abandoned
    """

    triangles: list[Triangle2]
    used_fallback: bool = False
    reason: str | None = None

    def area(self) -> float:
        """Total area covered by the triangles."""
        return sum(abs(_cross(a, b, c)) / 2.0 for a, b, c in self.triangles)


def build_polygon(shell: Sequence[Point], holes: Sequence[Sequence[Point]] = ()) -> Polygon:
    """Build a shapely polygon from rings, each closed explicitly."""
    return Polygon(_closed(shell), [_closed(hole) for hole in holes])


def is_valid_polygon(shell: Sequence[Point], holes: Sequence[Sequence[Point]] = ()) -> bool:
    """Check that the rings form a valid polygon with holes."""
    if len(shell) < 3 or any(len(hole) < 3 for hole in holes):
        return False
    try:
        return bool(build_polygon(shell, holes).is_valid)
    except (GEOSException, ValueError):
        return False


class PolygonTriangulator:
    """Triangulates polygons with holes.

    Example:
        triangulator = PolygonTriangulator(tolerance=0.005)
        result = triangulator.triangulate(outer_points, [hole_points])
        for a, b, c in result.triangles:
            ...
    """

    def __init__(self, tolerance: float = 0.01) -> None:
        """Initialize triangulator.

        Args:
            tolerance: Near-duplicate distance for ring cleaning, in the
                units of the rings passed to triangulate()
        """
        self.tolerance = tolerance

    def triangulate(
        self,
        outer: Sequence[Point],
        holes: Sequence[Sequence[Point]] = (),
    ) -> Triangulation:
        """Triangulate an outer ring minus its holes.

        Args:
            outer: Outer ring points
            holes: Hole rings, already known to lie inside the outer ring

        Returns:
            Triangulation with counter-clockwise triangles
        """
        shell = remove_near_duplicates(outer, self.tolerance)
        if len(shell) < 3:
            logger.debug("Skipping degenerate outer ring", points=len(shell))
            return Triangulation(triangles=[])

        hole_rings: list[list[Point]] = []
        for hole in holes:
            ring = remove_near_duplicates(hole, self.tolerance)
            if len(ring) >= 3:
                hole_rings.append(ring)

        try:
            triangles = self._constrained(shell, hole_rings)
        except TriangulationError as e:
            logger.warning(
                "Constrained triangulation failed, using fan fallback",
                reason=e.reason,
                points=len(shell),
                holes=len(hole_rings),
            )
            return Triangulation(
                triangles=self._fan(shell),
                used_fallback=True,
                reason=e.reason,
            )

        return Triangulation(triangles=triangles)

    def _constrained(self, shell: list[Point], holes: list[list[Point]]) -> list[Triangle2]:
        """Run the constrained Delaunay triangulation.

        Raises:
            TriangulationError: If the polygon is invalid or GEOS fails
        """
        try:
            polygon = build_polygon(shell, holes)
            if not polygon.is_valid:
                raise TriangulationError(shapely.is_valid_reason(polygon))
            result = shapely.constrained_delaunay_triangles(polygon)
        except (GEOSException, ValueError) as e:
            raise TriangulationError(str(e)) from e

        triangles: list[Triangle2] = []
        for triangle in getattr(result, "geoms", ()):
            coords = list(triangle.exterior.coords)[:3]
            if len(coords) < 3:
                continue
            a, b, c = (Point(float(x), float(y)) for x, y, *_ in coords)
            triangles.append(_counter_clockwise(a, b, c))

        if not triangles:
            raise TriangulationError("no triangles produced")
        return triangles

    def _fan(self, shell: list[Point]) -> list[Triangle2]:
        center = vertex_centroid(shell)
        n = len(shell)
        return [_counter_clockwise(center, shell[i], shell[(i + 1) % n]) for i in range(n)]


def _cross(a: Point, b: Point, c: Point) -> float:
    return (b - a).cross(c - a)


def _counter_clockwise(a: Point, b: Point, c: Point) -> Triangle2:
    if _cross(a, b, c) < 0:
        return (a, c, b)
    return (a, b, c)


def _closed(ring: Sequence[Point]) -> list[tuple[float, float]]:
    coords = [p.to_tuple() for p in ring]
    if coords:
        coords.append(coords[0])
    return coords
