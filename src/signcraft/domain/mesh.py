"""3D mesh primitives in model space (millimeters).

This module defines:
- Point3: An immutable 3D point that doubles as a vector
- Triangle: Three points plus a unit normal
- Mesh: A named, ordered triangle list
- MeshPart: Names of the height bands a sign is split into
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class MeshPart(str, Enum):
    """Height band a triangle belongs to.

    BASE is the plate, BODY the straight letter walls and bottom caps,
    FRONT the bevel band and the top caps.
    """

    BASE = "Base"
    BODY = "Body"
    FRONT = "Front"


@dataclass(frozen=True, slots=True)
class Point3:
    """A point (or vector) in 3D model space.

    Attributes:
        x: X coordinate in millimeters
        y: Y coordinate in millimeters
        z: Z coordinate in millimeters
    """

    x: float
    y: float
    z: float

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: "Point3") -> "Point3":
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point3") -> "Point3":
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> "Point3":
        return Point3(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: "Point3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Point3") -> "Point3":
        return Point3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> "Point3":
        """Unit vector in the same direction.

        Returns:
            Normalized vector, or the zero vector if the length is zero
        """
        length = self.length()
        if length == 0.0:
            return Point3(0.0, 0.0, 0.0)
        return Point3(self.x / length, self.y / length, self.z / length)


UP = Point3(0.0, 0.0, 1.0)
DOWN = Point3(0.0, 0.0, -1.0)


@dataclass(frozen=True, slots=True)
class Triangle:
    """A triangle with counter-clockwise winding seen from outside.

    Attributes:
        p1: First vertex
        p2: Second vertex
        p3: Third vertex
        normal: Unit outward normal
    """

    p1: Point3
    p2: Point3
    p3: Point3
    normal: Point3

    @classmethod
    def from_points(
        cls,
        p1: Point3,
        p2: Point3,
        p3: Point3,
        normal: Point3 | None = None,
    ) -> "Triangle":
        """Create a triangle, computing the normal from the winding if not given.

        Args:
            p1: First vertex
            p2: Second vertex
            p3: Third vertex
            normal: Explicit unit normal for axis-aligned faces

        Returns:
            Triangle instance
        """
        if normal is None:
            normal = (p2 - p1).cross(p3 - p1).normalized()
        return cls(p1, p2, p3, normal)

    @property
    def vertices(self) -> tuple[Point3, Point3, Point3]:
        return (self.p1, self.p2, self.p3)

    def winding_normal(self) -> Point3:
        """Unit normal implied by the vertex order."""
        return (self.p2 - self.p1).cross(self.p3 - self.p1).normalized()

    def area(self) -> float:
        return (self.p2 - self.p1).cross(self.p3 - self.p1).length() / 2.0

    def centroid(self) -> Point3:
        return Point3(
            (self.p1.x + self.p2.x + self.p3.x) / 3.0,
            (self.p1.y + self.p2.y + self.p3.y) / 3.0,
            (self.p1.z + self.p2.z + self.p3.z) / 3.0,
        )


@dataclass
class Mesh:
    """An ordered triangle list, optionally tagged with a part name.

    Attributes:
        name: Part or object name
        triangles: Triangles in emission order
    """

    name: str
    triangles: list[Triangle] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.triangles)

    def extend(self, triangles: Iterable[Triangle]) -> None:
        self.triangles.extend(triangles)

    def is_empty(self) -> bool:
        return not self.triangles

    def bounds(self) -> tuple[Point3, Point3]:
        """Axis-aligned bounds of the mesh.

        Returns:
            Tuple of (min corner, max corner)

        Raises:
            ValueError: If the mesh has no triangles
        """
        if not self.triangles:
            raise ValueError(f"Mesh '{self.name}' is empty")
        points = [p for tri in self.triangles for p in tri.vertices]
        return (
            Point3(min(p.x for p in points), min(p.y for p in points), min(p.z for p in points)),
            Point3(max(p.x for p in points), max(p.y for p in points), max(p.z for p in points)),
        )
