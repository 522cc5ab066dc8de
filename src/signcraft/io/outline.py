"""Glyph outlines from font files via fontTools.

The provider draws each character of a line through a pen chain:

    glyph -> [ReverseContourPen] -> TransformPen -> FlatteningPen

- ReverseContourPen is used for TrueType (glyf) fonts, whose outer
  contours wind clockwise in y-up font space. CFF outers already wind
  counter-clockwise.
- TransformPen scales font units to the requested size, flips y into
  y-down outline space and moves the glyph to the pen cursor.
- FlatteningPen turns curves into line segments.

After this chain every outer shell has a positive shoelace sum, which is
what the contour classifier expects.
"""

from pathlib import Path
from typing import Any

import structlog
from fontTools.pens.basePen import BasePen
from fontTools.pens.reverseContourPen import ReverseContourPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont, TTLibError

from signcraft.core.geometry import bezier_flatten
from signcraft.domain import FontDescriptor, PathCommand, Point
from signcraft.exceptions import FontLoadError, GlyphNotFoundError

logger = structlog.get_logger(__name__)


class FlatteningPen(BasePen):
    """Pen that records flattened move/line/close commands.

    Example:
        pen = FlatteningPen(tolerance=0.5)
        glyph_set["O"].draw(pen)
        commands = pen.commands
    """

    def __init__(self, tolerance: float = 0.5, glyphSet: Any = None) -> None:  # noqa: N803
        super().__init__(glyphSet)
        self.tolerance = tolerance
        self.commands: list[PathCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(PathCommand.move_to(*pt))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(PathCommand.line_to(*pt))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        start = self._getCurrentPoint()
        points = bezier_flatten([Point(*start), Point(*pt1), Point(*pt2)], self.tolerance)
        for p in points[1:]:
            self.commands.append(PathCommand.line_to(p.x, p.y))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        start = self._getCurrentPoint()
        points = bezier_flatten(
            [Point(*start), Point(*pt1), Point(*pt2), Point(*pt3)], self.tolerance
        )
        for p in points[1:]:
            self.commands.append(PathCommand.line_to(p.x, p.y))

    def _closePath(self) -> None:
        self.commands.append(PathCommand.close())

    def _endPath(self) -> None:
        # Open contours are sealed by the extractor
        pass


class FontToolsOutlineProvider:
    """Outline provider backed by TrueType/OpenType font files.

    Loaded fonts are cached per provider. Use as a context manager or
    call close() to release them.

    Example:
        with FontToolsOutlineProvider() as provider:
            commands = provider.outline_for("HELLO", FontDescriptor("Arial.ttf", 36))
    """

    def __init__(self, flatten_tolerance: float = 0.5) -> None:
        """Initialize provider.

        Args:
            flatten_tolerance: Curve flattening tolerance in outline units
        """
        self.flatten_tolerance = flatten_tolerance
        self._fonts: dict[Path, TTFont] = {}

    def __enter__(self) -> "FontToolsOutlineProvider":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close all cached fonts."""
        for font in self._fonts.values():
            font.close()
        self._fonts.clear()

    def load_font(self, font: FontDescriptor) -> TTFont:
        """Load (or fetch from cache) the font file of a descriptor.

        Args:
            font: Font descriptor

        Returns:
            Loaded TTFont

        Raises:
            FontLoadError: If the file is missing, unreadable or has no outlines
        """
        path = font.resolve_path()
        cached = self._fonts.get(path)
        if cached is not None:
            return cached

        if not path.is_file():
            raise FontLoadError(str(path), "font file not found")

        try:
            tt = TTFont(path)
        except (OSError, TTLibError) as e:
            raise FontLoadError(str(path), str(e)) from e

        if "glyf" not in tt and "CFF " not in tt and "CFF2" not in tt:
            tt.close()
            raise FontLoadError(str(path), "font has no glyph outlines")

        logger.debug(
            "Font loaded",
            path=str(path),
            format="TrueType" if "glyf" in tt else "OpenType",
            upm=tt["head"].unitsPerEm,
        )
        self._fonts[path] = tt
        return tt

    def glyph_name(self, font: FontDescriptor, char: str) -> str:
        """Name of the glyph the font maps a character to.

        Raises:
            FontLoadError: If the font cannot be loaded
            GlyphNotFoundError: If the character is not in the cmap or has no glyph
        """
        tt = self.load_font(font)
        name = (tt.getBestCmap() or {}).get(ord(char))
        if name is None or name not in tt.getGlyphOrder():
            raise GlyphNotFoundError(char)
        return name

    def outline_for(self, line: str, font: FontDescriptor) -> list[PathCommand]:
        """Flattened outline of a text line.

        The baseline is at y=0 and the pen starts at x=0; y grows downward.
        Characters without a glyph are skipped with a warning.

        Args:
            line: Text of one line
            font: Font descriptor

        Returns:
            Path commands for the whole line
        """
        tt = self.load_font(font)
        scale = font.size / tt["head"].unitsPerEm
        glyph_set = tt.getGlyphSet()
        hmtx = tt["hmtx"]
        reverse = "glyf" in tt

        pen = FlatteningPen(self.flatten_tolerance)
        cursor = 0.0

        for char in line:
            try:
                glyph_name = self.glyph_name(font, char)
            except GlyphNotFoundError:
                logger.warning("Glyph not found, skipping character", char=char, font=font.name)
                continue

            target: Any = TransformPen(pen, (scale, 0, 0, -scale, cursor, 0))
            if reverse:
                target = ReverseContourPen(target)
            glyph_set[glyph_name].draw(target)

            advance, _ = hmtx[glyph_name]
            cursor += advance * scale

        return pen.commands
