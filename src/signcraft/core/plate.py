"""Base plate under the letters."""

import structlog

from signcraft.config import SignDimensions
from signcraft.core.geometry import Bounds
from signcraft.domain import Point3, Triangle

logger = structlog.get_logger(__name__)

# Outward normals of the six faces
_NORMALS = {
    "bottom": Point3(0.0, 0.0, -1.0),
    "top": Point3(0.0, 0.0, 1.0),
    "front": Point3(0.0, -1.0, 0.0),
    "right": Point3(1.0, 0.0, 0.0),
    "back": Point3(0.0, 1.0, 0.0),
    "left": Point3(-1.0, 0.0, 0.0),
}


class BasePlateBuilder:
    """Builds the rectangular plate that carries the letters.

    The plate spans the text bounds grown by ``base_margin`` on every side,
    from z=0 to z=base_height, as 6 quads (12 triangles).
    """

    def __init__(self, dimensions: SignDimensions) -> None:
        self.dimensions = dimensions

    def plate_bounds(self, text_bounds: Bounds) -> Bounds:
        """Grow model-space text bounds by the margin.

        Args:
            text_bounds: (min_x, min_y, max_x, max_y) of all text in mm

        Returns:
            Plate footprint as (min_x, min_y, max_x, max_y)
        """
        m = self.dimensions.base_margin
        min_x, min_y, max_x, max_y = text_bounds
        return (min_x - m, min_y - m, max_x + m, max_y + m)

    def build(self, text_bounds: Bounds) -> list[Triangle]:
        """Build the plate triangles.

        Args:
            text_bounds: (min_x, min_y, max_x, max_y) of all text in mm

        Returns:
            12 triangles with outward normals
        """
        x0, y0, x1, y1 = self.plate_bounds(text_bounds)
        z0 = 0.0
        z1 = self.dimensions.base_height

        logger.debug(
            "Building base plate",
            width=round(x1 - x0, 3),
            depth=round(y1 - y0, 3),
            height=z1,
        )

        faces = {
            "bottom": (
                Point3(x0, y0, z0), Point3(x0, y1, z0), Point3(x1, y1, z0), Point3(x1, y0, z0)
            ),
            "top": (
                Point3(x0, y0, z1), Point3(x1, y0, z1), Point3(x1, y1, z1), Point3(x0, y1, z1)
            ),
            "front": (
                Point3(x0, y0, z0), Point3(x1, y0, z0), Point3(x1, y0, z1), Point3(x0, y0, z1)
            ),
            "right": (
                Point3(x1, y0, z0), Point3(x1, y1, z0), Point3(x1, y1, z1), Point3(x1, y0, z1)
            ),
            "back": (
                Point3(x1, y1, z0), Point3(x0, y1, z0), Point3(x0, y1, z1), Point3(x1, y1, z1)
            ),
            "left": (
                Point3(x0, y1, z0), Point3(x0, y0, z0), Point3(x0, y0, z1), Point3(x0, y1, z1)
            ),
        }

        triangles: list[Triangle] = []
        for name, (p1, p2, p3, p4) in faces.items():
            normal = _NORMALS[name]
            triangles.append(Triangle(p1, p2, p3, normal))
            triangles.append(Triangle(p1, p3, p4, normal))
        return triangles
