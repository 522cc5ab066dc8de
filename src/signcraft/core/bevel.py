"""Bevel ring offsets.

The bevel ring is the letter outline moved horizontally into the letter
material. Rings are expected in model space (y-up) with outers running
counter-clockwise and holes clockwise, so "to the left of the direction
of travel" is always into the material.

Two techniques:
- miter_offset: per-vertex miter joint, uniform band width at corners
- radial_offset: move each vertex toward (or away from) the ring centroid
"""

import math
from collections.abc import Sequence

from signcraft.core.geometry import vertex_centroid
from signcraft.domain import Point


def miter_offset(
    points: Sequence[Point],
    distance: float,
    miter_limit: float = 4.0,
    epsilon: float = 0.001,
) -> list[Point]:
    """Offset a closed ring to the left of its direction of travel.

    Each vertex moves along the bisector of the left normals of its two
    edges, by ``distance / sqrt((1 + cos(theta)) / 2)`` where theta is the
    angle between the normals. The scale is clamped at ``miter_limit``.

    Args:
        points: Closed ring without a repeated closing point
        distance: Offset distance; negative offsets to the right
        miter_limit: Maximum scale of the offset at sharp corners
        epsilon: Edges shorter than this leave the vertex in place

    Returns:
        Offset ring with one point per input point

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> corner = miter_offset(square, 0.5)[0]
        >>> round(corner.x, 6), round(corner.y, 6)
        (0.5, 0.5)
    """
    n = len(points)
    if n < 3 or distance == 0.0:
        return list(points)

    result: list[Point] = []
    for i in range(n):
        prev = points[i - 1]
        cur = points[i]
        nxt = points[(i + 1) % n]

        incoming = cur - prev
        outgoing = nxt - cur
        if incoming.length() < epsilon or outgoing.length() < epsilon:
            result.append(cur)
            continue

        n1 = incoming.normalized().left_normal()
        n2 = outgoing.normalized().left_normal()
        bisector = n1 + n2
        if bisector.length() < epsilon:
            # Edge reverses onto itself; push straight out along one normal
            result.append(cur + n1.scale(distance))
            continue

        cos_theta = max(-1.0, min(1.0, n1.dot(n2)))
        half = math.sqrt((1.0 + cos_theta) / 2.0)
        scale = min(1.0 / half if half > 0.0 else miter_limit, miter_limit)
        result.append(cur + bisector.normalized().scale(distance * scale))

    return result


def radial_offset(
    points: Sequence[Point],
    distance: float,
    inward: bool = True,
    epsilon: float = 0.001,
) -> list[Point]:
    """Move each vertex toward or away from the ring's vertex centroid.

    Args:
        points: Closed ring without a repeated closing point
        distance: Distance to move each vertex
        inward: Move toward the centroid (outer shells) or away (holes)
        epsilon: Vertices this close to the centroid stay in place

    Returns:
        Offset ring with one point per input point
    """
    center = vertex_centroid(points)
    result: list[Point] = []
    for p in points:
        direction = center - p if inward else p - center
        if direction.length() < epsilon:
            result.append(p)
            continue
        result.append(p + direction.normalized().scale(distance))
    return result
