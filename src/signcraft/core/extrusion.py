"""Beveled extrusion of glyph regions into closed letter solids.

Each glyph region (outer shell plus holes) becomes a closed solid with
three z-planes:

- z_base: bottom cap, sitting on the plate
- z_top: end of the straight walls, start of the bevel band
- z_bevel: top cap, inset by the bevel offset

Rings are converted from y-down outline space to y-up model space
(millimeters), cleaned of near duplicates, and oriented so outers run
counter-clockwise and holes clockwise. With that orientation the same
quad formula gives outward-facing walls for shells and holes alike.

Body and front together form one closed solid. When they are exported
as separate objects, ``separate_parts`` adds a pair of z_top caps so
each band is closed on its own.
"""

from dataclasses import dataclass, field

import structlog

from signcraft.config import BevelStyle, GeometryConfig, SignDimensions
from signcraft.core.bevel import miter_offset, radial_offset
from signcraft.core.geometry import clean_ring, orient, signed_area
from signcraft.core.triangulator import PolygonTriangulator, Triangulation, is_valid_polygon
from signcraft.domain import DOWN, UP, Contour, GlyphRegion, Point, Point3, Triangle

logger = structlog.get_logger(__name__)


@dataclass
class LetterSolid:
    """Triangles of one extruded region, split by height band.

    Attributes:
        body: Straight walls and bottom cap (plus a z_top cap when split)
        front: Bevel band and top cap (plus a z_top cap when split)
        fallbacks: Number of caps that needed the fan fallback
        bevel_collapsed: True if the bevel inset was abandoned for this region
    """

    body: list[Triangle] = field(default_factory=list)
    front: list[Triangle] = field(default_factory=list)
    fallbacks: int = 0
    bevel_collapsed: bool = False

    @property
    def triangles(self) -> list[Triangle]:
        return self.body + self.front


@dataclass
class _BevelRing:
    """Inset ring plus the map from source vertex to inset vertex."""

    points: list[Point]
    index_map: list[int]


class LetterExtruder:
    """Builds beveled letter solids from glyph regions.

    Example:
        extruder = LetterExtruder(SignDimensions(), GeometryConfig())
        solid = extruder.extrude(region)
    """

    def __init__(
        self,
        dimensions: SignDimensions,
        geometry: GeometryConfig,
        triangulator: PolygonTriangulator | None = None,
        separate_parts: bool = False,
    ) -> None:
        """Initialize extruder.

        Args:
            dimensions: Plate and letter dimensions
            geometry: Scale factor, tolerances and bevel settings
            triangulator: Cap triangulator (created from geometry if None)
            separate_parts: Close body and front on their own at z_top
        """
        self.dimensions = dimensions
        self.geometry = geometry
        self.tolerance = geometry.model_tolerance()
        self.inset = geometry.bevel_inset(dimensions)
        self.triangulator = triangulator or PolygonTriangulator(self.tolerance)
        self.separate_parts = separate_parts

        self.z_base = dimensions.z_base
        self.z_top = dimensions.z_top
        self.z_bevel = dimensions.z_bevel

    def to_model(self, contour: Contour) -> list[Point]:
        """Convert an outline-space contour to model-space points (y flipped)."""
        s = self.geometry.scale_factor
        return [Point(p.x * s, -p.y * s) for p in contour.points]

    def prepare_ring(self, contour: Contour, is_outer: bool) -> list[Point] | None:
        """Convert, clean and orient a contour.

        Args:
            contour: Outline-space contour
            is_outer: Orient counter-clockwise (outer) or clockwise (hole)

        Returns:
            Model-space ring, or None if it is degenerate
        """
        ring, _ = clean_ring(self.to_model(contour), self.tolerance)
        if len(ring) < 3 or abs(signed_area(ring)) <= self.tolerance * self.tolerance:
            return None
        return orient(ring, counter_clockwise=is_outer)

    def extrude(self, region: GlyphRegion) -> LetterSolid:
        """Build the closed solid for one region.

        Args:
            region: Outer contour and its holes, in outline space

        Returns:
            LetterSolid with body and front triangles
        """
        solid = LetterSolid()

        outer = self.prepare_ring(region.outer, is_outer=True)
        if outer is None:
            logger.debug("Skipping degenerate outer contour", points=len(region.outer))
            return solid

        holes: list[list[Point]] = []
        for hole in region.holes:
            ring = self.prepare_ring(hole, is_outer=False)
            if ring is None:
                logger.debug("Skipping degenerate hole contour", points=len(hole))
                continue
            holes.append(ring)

        rings = [outer, *holes]
        bevels, collapsed = self._bevel_rings(rings)
        solid.bevel_collapsed = collapsed

        # Straight walls, z_base to z_top
        for ring in rings:
            solid.body.extend(self._walls(ring))

        bottom = self.triangulator.triangulate(outer, holes)
        solid.body.extend(self._cap(bottom, self.z_base, facing_up=False))

        top = self.triangulator.triangulate(bevels[0].points, [b.points for b in bevels[1:]])
        top_cap = self._cap(top, self.z_bevel, facing_up=True)

        if self.dimensions.bevel_height > 0:
            # Bevel band, z_top to z_bevel
            for ring, bevel in zip(rings, bevels):
                solid.front.extend(self._bevel_walls(ring, bevel))
            solid.front.extend(top_cap)
            if self.separate_parts:
                # Shared z_top plane, once per band with opposite facing
                solid.body.extend(self._cap(bottom, self.z_top, facing_up=True))
                solid.front.extend(self._cap(bottom, self.z_top, facing_up=False))
        elif self.separate_parts:
            # No bevel band, the body carries the top cap
            solid.body.extend(top_cap)
        else:
            solid.front.extend(top_cap)

        solid.fallbacks = int(bottom.used_fallback) + int(top.used_fallback)
        return solid

    def _offset(self, ring: list[Point], is_outer: bool) -> list[Point]:
        if self.geometry.bevel_style == BevelStyle.RADIAL:
            return radial_offset(
                ring,
                self.inset,
                inward=is_outer,
                epsilon=self.geometry.degenerate_epsilon,
            )
        return miter_offset(
            ring,
            self.inset,
            miter_limit=self.geometry.miter_limit,
            epsilon=self.geometry.degenerate_epsilon,
        )

    def _bevel_rings(self, rings: list[list[Point]]) -> tuple[list[_BevelRing], bool]:
        """Compute inset rings for a region.

        Falls back to a zero inset for the whole region if any inset ring
        degenerates, flips orientation or breaks polygon validity.

        Returns:
            Tuple of (bevel ring per input ring, collapsed flag)
        """
        identity = [_BevelRing(list(ring), list(range(len(ring)))) for ring in rings]
        if self.inset <= 0 or self.dimensions.bevel_height <= 0:
            return identity, False

        bevels: list[_BevelRing] = []
        for idx, ring in enumerate(rings):
            points, index_map = clean_ring(self._offset(ring, is_outer=idx == 0), self.tolerance)
            bevels.append(_BevelRing(points, index_map))

        if self._is_sound(rings, bevels):
            return bevels, False

        logger.warning(
            "Bevel inset collapses region, extruding without inset",
            inset=round(self.inset, 4),
            rings=len(rings),
        )
        return identity, True

    def _is_sound(self, rings: list[list[Point]], bevels: list[_BevelRing]) -> bool:
        for ring, bevel in zip(rings, bevels):
            if len(bevel.points) < 3:
                return False
            if (signed_area(ring) > 0) != (signed_area(bevel.points) > 0):
                return False
        return is_valid_polygon(bevels[0].points, [b.points for b in bevels[1:]])

    def _walls(self, ring: list[Point]) -> list[Triangle]:
        triangles: list[Triangle] = []
        n = len(ring)
        for i in range(n):
            a = ring[i]
            b = ring[(i + 1) % n]
            triangles.extend(
                _quad(
                    Point3(a.x, a.y, self.z_base),
                    Point3(b.x, b.y, self.z_base),
                    Point3(b.x, b.y, self.z_top),
                    Point3(a.x, a.y, self.z_top),
                )
            )
        return triangles

    def _bevel_walls(self, ring: list[Point], bevel: _BevelRing) -> list[Triangle]:
        triangles: list[Triangle] = []
        n = len(ring)
        for i in range(n):
            a = ring[i]
            b = ring[(i + 1) % n]
            ia = bevel.index_map[i]
            ib = bevel.index_map[(i + 1) % n]
            top_a = Point3(a.x, a.y, self.z_top)
            top_b = Point3(b.x, b.y, self.z_top)
            bev_a = bevel.points[ia]
            bev_b = bevel.points[ib]
            if ia == ib:
                # Both inset corners merged into one vertex
                triangles.append(
                    Triangle.from_points(top_a, top_b, Point3(bev_a.x, bev_a.y, self.z_bevel))
                )
                continue
            triangles.extend(
                _quad(
                    top_a,
                    top_b,
                    Point3(bev_b.x, bev_b.y, self.z_bevel),
                    Point3(bev_a.x, bev_a.y, self.z_bevel),
                )
            )
        return triangles

    def _cap(self, triangulation: Triangulation, z: float, facing_up: bool) -> list[Triangle]:
        triangles: list[Triangle] = []
        for a, b, c in triangulation.triangles:
            pa = Point3(a.x, a.y, z)
            pb = Point3(b.x, b.y, z)
            pc = Point3(c.x, c.y, z)
            if facing_up:
                triangles.append(Triangle(pa, pb, pc, UP))
            else:
                triangles.append(Triangle(pa, pc, pb, DOWN))
        return triangles


def _quad(p1: Point3, p2: Point3, p3: Point3, p4: Point3) -> list[Triangle]:
    """Split a planar quad (p1, p2, p3, p4) into two triangles with computed normals."""
    return [
        Triangle.from_points(p1, p2, p3),
        Triangle.from_points(p1, p3, p4),
    ]
