"""Multi-line text layout.

Lines are fetched from an outline provider one at a time, measured,
stacked top to bottom in y-down outline space and shifted horizontally
according to the alignment.
"""

from dataclasses import dataclass
from typing import Protocol

import structlog

from signcraft.config import TextAlign
from signcraft.core.geometry import Bounds
from signcraft.domain import FontDescriptor, PathCommand, commands_bounds, translate_commands
from signcraft.exceptions import EmptyInputError

logger = structlog.get_logger(__name__)


class OutlineProvider(Protocol):
    """Resolves a line of text to flattened outline commands.

    Outlines are in y-down outline space with the line's baseline at y=0
    and its pen origin at x=0. Outer shells must have a positive shoelace
    sum, holes a negative one.
    """

    def outline_for(self, line: str, font: FontDescriptor) -> list[PathCommand]: ...


@dataclass
class LaidOutLine:
    """A text line placed on the sign.

    Attributes:
        text: Line text
        commands: Outline commands translated to their final position
        bounds: (min_x, min_y, max_x, max_y) of the placed outline
    """

    text: str
    commands: list[PathCommand]
    bounds: Bounds


class TextLayout:
    """Places the lines of a text.

    Example:
        layout = TextLayout(provider, line_gap=10.0)
        lines = layout.layout("HELLO\\nWORLD", font, TextAlign.CENTER)
    """

    def __init__(self, provider: OutlineProvider, line_gap: float = 10.0) -> None:
        self.provider = provider
        self.line_gap = line_gap

    def layout(self, text: str, font: FontDescriptor, align: TextAlign) -> list[LaidOutLine]:
        """Lay out all non-blank lines.

        Args:
            text: Text with lines separated by newlines
            font: Font to resolve outlines with
            align: Horizontal alignment

        Returns:
            Placed lines, top line first

        Raises:
            EmptyInputError: If no line yields an outline
        """
        if not text or not text.strip():
            raise EmptyInputError()

        measured: list[tuple[str, list[PathCommand], Bounds]] = []
        for line in text.splitlines():
            if not line.strip():
                continue
            commands = self.provider.outline_for(line, font)
            bounds = commands_bounds(commands)
            if bounds is None:
                logger.warning("Line produced no outline", line=line)
                continue
            measured.append((line, commands, bounds))

        if not measured:
            raise EmptyInputError()

        # Horizontal extent of all lines before alignment
        left = min(b[0] for _, _, b in measured)
        right = max(b[2] for _, _, b in measured)
        placed: list[LaidOutLine] = []
        current_y = 0.0

        for line, commands, bounds in measured:
            height = bounds[3] - bounds[1]
            x_offset = _align_offset(align, bounds, left, right)

            moved = translate_commands(commands, x_offset, current_y)
            moved_bounds = (
                bounds[0] + x_offset,
                bounds[1] + current_y,
                bounds[2] + x_offset,
                bounds[3] + current_y,
            )
            placed.append(LaidOutLine(text=line, commands=moved, bounds=moved_bounds))
            logger.debug(
                "Line placed", line=line, x_offset=round(x_offset, 3), y=round(current_y, 3)
            )

            current_y += height + self.line_gap

        return placed


def _align_offset(align: TextAlign, bounds: Bounds, left: float, right: float) -> float:
    """Shift that aligns a line's ink with the extent of all lines.

    LEFT keeps the pen origin, so left bearings stay as the font draws them.
    """
    if align == TextAlign.CENTER:
        return (left + right) / 2 - (bounds[0] + bounds[2]) / 2
    if align == TextAlign.RIGHT:
        return right - bounds[2]
    return 0.0
