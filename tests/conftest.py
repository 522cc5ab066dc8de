"""Shared fixtures for signcraft tests."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from signcraft.config import SignSettings
from signcraft.core.geometry import shoelace_sum
from signcraft.domain import FontDescriptor, PathCommand, Point

# Outlines of the fake provider, in y-down outline space with the
# baseline at y=0. Each entry is (ring, is_outer).
FAKE_GLYPHS: dict[str, list[tuple[list[tuple[float, float]], bool]]] = {
    "I": [([(0, -10), (10, -10), (10, 0), (0, 0)], True)],
    "O": [
        ([(0, -10), (10, -10), (10, 0), (0, 0)], True),
        ([(3, -7), (7, -7), (7, -3), (3, -3)], False),
    ],
    "L": [([(0, 0), (0, -10), (3, -10), (3, -3), (8, -3), (8, 0)], True)],
    "-": [([(0, -5), (10, -5), (10, -4), (0, -4)], True)],
}
FAKE_ADVANCE = 12.0


def ring_commands(points: list[tuple[float, float]], outer: bool) -> list[PathCommand]:
    """Path commands for a closed ring, wound as an outer shell or a hole."""
    pts = list(points)
    if (shoelace_sum([Point(x, y) for x, y in pts]) > 0) != outer:
        pts.reverse()
    commands = [PathCommand.move_to(*pts[0])]
    commands.extend(PathCommand.line_to(x, y) for x, y in pts[1:])
    commands.append(PathCommand.close())
    return commands


class FakeOutlineProvider:
    """Outline provider with a handful of block letters.

    Characters without an outline advance the pen and draw nothing.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []

    def outline_for(self, line: str, font: FontDescriptor) -> list[PathCommand]:
        self.calls.append(line)
        commands: list[PathCommand] = []
        cursor = 0.0
        for char in line:
            for ring, outer in FAKE_GLYPHS.get(char, []):
                commands.extend(ring_commands([(x + cursor, y) for x, y in ring], outer))
            cursor += FAKE_ADVANCE
        return commands


@pytest.fixture
def fake_provider() -> FakeOutlineProvider:
    """Fake outline provider with I, O, L and - glyphs."""
    return FakeOutlineProvider()


@pytest.fixture
def fake_font() -> FontDescriptor:
    """Font descriptor for the fake provider (never resolved)."""
    return FontDescriptor(name="Fake", size=36)


@pytest.fixture
def settings() -> SignSettings:
    """Default settings."""
    return SignSettings()


def _rect(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int, clockwise: bool) -> None:
    # Font space is y-up
    if clockwise:
        points = [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]
    else:
        points = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    pen.moveTo(points[0])
    for p in points[1:]:
        pen.lineTo(p)
    pen.closePath()


@pytest.fixture
def test_font_path(tmp_path: Path) -> Path:
    """TrueType font with .notdef, space, I, O and D glyphs.

    Outer contours wind clockwise and holes counter-clockwise in font
    space, as TrueType fonts do. D has quadratic curves.
    """
    upm = 1000
    glyph_order = [".notdef", "space", "I", "O", "D"]
    fb = FontBuilder(upm, isTTF=True)
    fb.setupGlyphOrder(glyph_order)

    glyphs = {}
    glyphs[".notdef"] = TTGlyphPen(None).glyph()
    glyphs["space"] = TTGlyphPen(None).glyph()

    pen = TTGlyphPen(None)
    _rect(pen, 100, 0, 300, 700, clockwise=True)
    glyphs["I"] = pen.glyph()

    pen = TTGlyphPen(None)
    _rect(pen, 100, 0, 600, 700, clockwise=True)
    _rect(pen, 250, 200, 450, 500, clockwise=False)
    glyphs["O"] = pen.glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((300, 700))
    pen.qCurveTo((600, 700), (600, 350))
    pen.qCurveTo((600, 0), (300, 0))
    pen.closePath()
    glyphs["D"] = pen.glyph()

    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(
        {
            ".notdef": (500, 0),
            "space": (250, 0),
            "I": (400, 100),
            "O": (700, 100),
            "D": (700, 100),
        }
    )
    fb.setupCharacterMap({0x20: "space", ord("I"): "I", ord("O"): "O", ord("D"): "D"})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupNameTable({"familyName": "Signcraft Test", "styleName": "Regular"})
    fb.setupPost()

    path = tmp_path / "SigncraftTest.ttf"
    fb.save(str(path))
    return path
