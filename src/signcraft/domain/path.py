"""Flattened outline path commands.

Outline providers hand the pipeline a flat list of commands. Curves are
already flattened into line segments, so only three kinds remain.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto

from signcraft.domain.contour import Point


class PathCommandType(Enum):
    """Kind of path command."""

    MOVE_TO = auto()
    LINE_TO = auto()
    CLOSE = auto()


@dataclass(frozen=True, slots=True)
class PathCommand:
    """A single move/line/close command in outline space.

    Attributes:
        kind: Command type
        point: Target point (None for CLOSE)
    """

    kind: PathCommandType
    point: Point | None = None

    @classmethod
    def move_to(cls, x: float, y: float) -> "PathCommand":
        return cls(PathCommandType.MOVE_TO, Point(x, y))

    @classmethod
    def line_to(cls, x: float, y: float) -> "PathCommand":
        return cls(PathCommandType.LINE_TO, Point(x, y))

    @classmethod
    def close(cls) -> "PathCommand":
        return cls(PathCommandType.CLOSE)

    def translated(self, dx: float, dy: float) -> "PathCommand":
        """Return the command moved by (dx, dy)."""
        if self.point is None:
            return self
        return PathCommand(self.kind, Point(self.point.x + dx, self.point.y + dy))


def translate_commands(
    commands: Iterable[PathCommand], dx: float, dy: float
) -> list[PathCommand]:
    """Translate every command of a path.

    Args:
        commands: Path commands
        dx: X offset
        dy: Y offset

    Returns:
        New list of translated commands
    """
    return [cmd.translated(dx, dy) for cmd in commands]


def commands_bounds(
    commands: Iterable[PathCommand],
) -> tuple[float, float, float, float] | None:
    """Bounding box of all points referenced by a path.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y), or None for a path without points
    """
    xs: list[float] = []
    ys: list[float] = []
    for cmd in commands:
        if cmd.point is not None:
            xs.append(cmd.point.x)
            ys.append(cmd.point.y)
    if not xs:
        return None
    return (min(xs), min(ys), max(xs), max(ys))
