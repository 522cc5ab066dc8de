"""Core 2D geometric types for contour representation.

This module defines the fundamental 2D types used by the outline pipeline:
- Point: An immutable 2D point that doubles as a vector
- Contour: A closed polygonal loop of points
- WindingDirection: Enum for contour winding direction
"""

import math
from dataclasses import dataclass, field
from enum import Enum, auto


class WindingDirection(Enum):
    """Contour winding direction.

    The direction is derived from the shoelace sum
    ``sum((x[i+1] - x[i]) * (y[i+1] + y[i]))``. A positive sum is reported as
    CLOCKWISE, which is how outlines in y-down outline space mark outer
    shells. Zero or negative sums are COUNTER_CLOCKWISE and mark holes.

    Note: this is a contract with the outline provider, not a statement
    about screen orientation.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> "Point":
        """Multiply both components by a factor."""
        return Point(self.x * factor, self.y * factor)

    def dot(self, other: "Point") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """Z component of the 3D cross product with another vector."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalized(self) -> "Point":
        """Unit vector in the same direction.

        Returns:
            Normalized vector, or the zero vector if the length is zero
        """
        length = self.length()
        if length == 0.0:
            return Point(0.0, 0.0)
        return Point(self.x / length, self.y / length)

    def left_normal(self) -> "Point":
        """Vector rotated a quarter turn counter-clockwise (y-up)."""
        return Point(-self.y, self.x)


@dataclass
class Contour:
    """A closed contour representing a shape boundary.

    The last point implicitly connects back to the first. Contours fresh
    from the extractor usually repeat the first point at the end; ring
    cleaning removes that duplicate.

    Attributes:
        points: List of points forming the contour
    """

    points: list[Point]
    _cached_sum: float | None = field(default=None, repr=False, init=False)
    _cached_bbox: tuple[float, float, float, float] | None = field(
        default=None, repr=False, init=False
    )

    def __len__(self) -> int:
        return len(self.points)

    def shoelace_sum(self) -> float:
        """Calculate the orientation sum ``sum((x[i+1]-x[i]) * (y[i+1]+y[i]))``.

        The sum equals minus twice the signed area. Result is cached.

        Returns:
            Orientation sum of the contour
        """
        if self._cached_sum is not None:
            return self._cached_sum

        total = 0.0
        n = len(self.points)
        for i in range(n):
            p = self.points[i]
            q = self.points[(i + 1) % n]
            total += (q.x - p.x) * (q.y + p.y)

        self._cached_sum = total
        return total

    def signed_area(self) -> float:
        """Signed area with the usual counter-clockwise-positive convention."""
        return -self.shoelace_sum() / 2.0

    def area(self) -> float:
        """Unsigned enclosed area."""
        return abs(self.signed_area())

    @property
    def direction(self) -> WindingDirection:
        """Winding direction derived from the shoelace sum."""
        if self.shoelace_sum() > 0:
            return WindingDirection.CLOCKWISE
        return WindingDirection.COUNTER_CLOCKWISE

    @property
    def is_outer(self) -> bool:
        """Whether the contour is an outer shell (positive shoelace sum)."""
        return self.direction == WindingDirection.CLOCKWISE

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the contour.

        Result is cached for efficiency.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self._cached_bbox is not None:
            return self._cached_bbox

        if not self.points:
            self._cached_bbox = (0.0, 0.0, 0.0, 0.0)
            return self._cached_bbox

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]

        self._cached_bbox = (min(xs), min(ys), max(xs), max(ys))
        return self._cached_bbox
