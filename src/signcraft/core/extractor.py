"""Contour extraction from flattened outline paths.

This module turns a sequence of move/line/close commands into closed
polygonal contours.

Key classes:
- ContourExtractor: Accumulates and seals contours
"""

from collections.abc import Iterable

import structlog

from signcraft.domain import Contour, PathCommand, PathCommandType, Point

logger = structlog.get_logger(__name__)


class ContourExtractor:
    """Walks an outline path and collects its closed contours.

    Rules:
    - move-to seals the current contour if it has more than two points and
      starts a new one
    - line-to appends a point unless it is within ``epsilon`` of the last one
    - close appends a copy of the first point when the last point is not
      within ``epsilon`` of it, then seals
    - a trailing open contour is sealed with the same closing rule

    Example:
        extractor = ContourExtractor()
        contours = extractor.extract(commands)
    """

    def __init__(self, epsilon: float = 0.001) -> None:
        """Initialize extractor.

        Args:
            epsilon: Minimum distance between consecutive points
        """
        self.epsilon = epsilon

    def extract(self, commands: Iterable[PathCommand]) -> list[Contour]:
        """Extract contours from a path.

        Args:
            commands: Flattened path commands

        Returns:
            Contours in path order, each with more than two points
        """
        contours: list[Contour] = []
        current: list[Point] = []

        for cmd in commands:
            if cmd.kind == PathCommandType.MOVE_TO:
                if len(current) > 2:
                    contours.append(Contour(points=current))
                current = [cmd.point] if cmd.point is not None else []
            elif cmd.kind == PathCommandType.LINE_TO:
                if cmd.point is None:
                    continue
                if not current:
                    # Line without a preceding move starts a contour
                    current = [cmd.point]
                elif cmd.point.distance_to(current[-1]) >= self.epsilon:
                    current.append(cmd.point)
            elif cmd.kind == PathCommandType.CLOSE:
                self._seal(current, contours)
                current = []

        if current:
            logger.debug("Sealing unclosed trailing contour", points=len(current))
            self._seal(current, contours)

        return contours

    def _seal(self, points: list[Point], contours: list[Contour]) -> None:
        if not points:
            return
        if points[-1].distance_to(points[0]) >= self.epsilon:
            points.append(points[0])
        if len(points) > 2:
            contours.append(Contour(points=points))
