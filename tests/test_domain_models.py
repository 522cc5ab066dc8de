"""Tests for domain models to verify they work correctly."""

import math

import pytest

from signcraft.config import TextAlign
from signcraft.domain import (
    Contour,
    FontDescriptor,
    FontStyle,
    GlyphRegion,
    Mesh,
    MeshPart,
    PathCommand,
    PathCommandType,
    Point,
    Point3,
    Sign,
    Triangle,
    WindingDirection,
    commands_bounds,
    translate_commands,
)
from signcraft.exceptions import InvalidProjectFileError


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_vector_arithmetic(self) -> None:
        """Test addition, subtraction and scaling."""
        a = Point(1.0, 2.0)
        b = Point(3.0, 5.0)
        assert a + b == Point(4.0, 7.0)
        assert b - a == Point(2.0, 3.0)
        assert a.scale(2.0) == Point(2.0, 4.0)

    def test_dot_and_cross(self) -> None:
        """Test dot and cross products."""
        a = Point(1.0, 0.0)
        b = Point(0.0, 1.0)
        assert a.dot(b) == 0.0
        assert a.cross(b) == 1.0
        assert b.cross(a) == -1.0

    def test_normalized(self) -> None:
        """Test unit vectors, including the zero vector."""
        n = Point(3.0, 4.0).normalized()
        assert math.isclose(n.length(), 1.0)
        assert Point(0.0, 0.0).normalized() == Point(0.0, 0.0)

    def test_left_normal(self) -> None:
        """Test quarter-turn rotation."""
        assert Point(1.0, 0.0).left_normal() == Point(-0.0, 1.0)


class TestContour:
    """Tests for Contour class."""

    def test_contour_creation(self) -> None:
        """Test basic contour creation."""
        points = [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]
        contour = Contour(points=points)
        assert len(contour) == 4

    def test_clockwise_square_is_outer(self) -> None:
        """A positive shoelace sum marks an outer shell."""
        contour = Contour([Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)])
        assert contour.shoelace_sum() == 200.0
        assert contour.direction == WindingDirection.CLOCKWISE
        assert contour.is_outer

    def test_reversed_square_is_hole(self) -> None:
        """Reversing a contour flips the classification."""
        contour = Contour([Point(10, 0), Point(10, 10), Point(0, 10), Point(0, 0)])
        assert contour.shoelace_sum() == -200.0
        assert contour.direction == WindingDirection.COUNTER_CLOCKWISE
        assert not contour.is_outer

    def test_area(self) -> None:
        """Test signed and unsigned area."""
        contour = Contour([Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)])
        assert contour.signed_area() == -100.0
        assert contour.area() == 100.0

    def test_bounding_box(self) -> None:
        """Test bounding box calculation."""
        contour = Contour([Point(-5, 2), Point(10, 3), Point(4, 8)])
        assert contour.bounding_box() == (-5, 2, 10, 8)

    def test_empty_bounding_box(self) -> None:
        """Test bounding box of an empty contour."""
        assert Contour([]).bounding_box() == (0.0, 0.0, 0.0, 0.0)


class TestGlyphRegion:
    """Tests for GlyphRegion class."""

    def test_contours_outer_first(self) -> None:
        """Test that the outer contour comes first."""
        outer = Contour([Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)])
        hole = Contour([Point(3, 3), Point(7, 3), Point(7, 7), Point(3, 7)])
        region = GlyphRegion(outer=outer, holes=[hole])
        assert region.contours == [outer, hole]
        assert region.has_holes()
        assert region.bounding_box() == (0, 0, 10, 10)

    def test_region_without_holes(self) -> None:
        """Test region defaults."""
        region = GlyphRegion(outer=Contour([Point(0, 0), Point(1, 0), Point(0, 1)]))
        assert not region.has_holes()


class TestPathCommand:
    """Tests for path commands."""

    def test_factories(self) -> None:
        """Test command constructors."""
        assert PathCommand.move_to(1, 2).kind == PathCommandType.MOVE_TO
        assert PathCommand.line_to(1, 2).point == Point(1, 2)
        assert PathCommand.close().point is None

    def test_translate_commands(self) -> None:
        """Test that translation moves points and keeps close commands."""
        commands = [PathCommand.move_to(0, 0), PathCommand.line_to(1, 1), PathCommand.close()]
        moved = translate_commands(commands, 10, -5)
        assert moved[0].point == Point(10, -5)
        assert moved[1].point == Point(11, -4)
        assert moved[2] == PathCommand.close()

    def test_commands_bounds(self) -> None:
        """Test bounds over all command points."""
        commands = [PathCommand.move_to(0, -3), PathCommand.line_to(4, 2), PathCommand.close()]
        assert commands_bounds(commands) == (0, -3, 4, 2)
        assert commands_bounds([PathCommand.close()]) is None


class TestMeshPrimitives:
    """Tests for Point3, Triangle and Mesh."""

    def test_cross_product(self) -> None:
        """Test 3D cross product."""
        x = Point3(1.0, 0.0, 0.0)
        y = Point3(0.0, 1.0, 0.0)
        assert x.cross(y) == Point3(0.0, 0.0, 1.0)

    def test_triangle_normal_from_winding(self) -> None:
        """Counter-clockwise vertices seen from +z give a +z normal."""
        tri = Triangle.from_points(
            Point3(0, 0, 0), Point3(1, 0, 0), Point3(0, 1, 0)
        )
        assert tri.normal == Point3(0.0, 0.0, 1.0)
        assert tri.area() == 0.5

    def test_triangle_explicit_normal(self) -> None:
        """An explicit normal is stored as given."""
        normal = Point3(0.0, 0.0, -1.0)
        tri = Triangle.from_points(Point3(0, 0, 0), Point3(0, 1, 0), Point3(1, 0, 0), normal)
        assert tri.normal == normal
        assert tri.winding_normal() == normal

    def test_mesh_bounds(self) -> None:
        """Test mesh bounds."""
        mesh = Mesh(name=MeshPart.BODY.value)
        mesh.extend([Triangle.from_points(Point3(0, 0, 0), Point3(2, 0, 1), Point3(0, 3, 0))])
        low, high = mesh.bounds()
        assert low == Point3(0, 0, 0)
        assert high == Point3(2, 3, 1)

    def test_empty_mesh_bounds(self) -> None:
        """Test that bounds of an empty mesh raise."""
        mesh = Mesh(name="empty")
        assert mesh.is_empty()
        with pytest.raises(ValueError, match="empty"):
            mesh.bounds()


class TestFontDescriptor:
    """Tests for FontDescriptor."""

    def test_resolve_explicit_path(self, tmp_path) -> None:
        """The explicit path wins over the name."""
        font = FontDescriptor(name="Arial", path=tmp_path / "a.ttf")
        assert font.resolve_path() == tmp_path / "a.ttf"

    def test_resolve_name_as_path(self) -> None:
        """Without a path the name is used as one."""
        assert str(FontDescriptor(name="fonts/a.ttf").resolve_path()) == "fonts/a.ttf"


class TestSign:
    """Tests for the Sign project model."""

    EXPECTED_JSON = (
        "{\n"
        '    "text": "Must be a\\nSign!!",\n'
        '    "fontName": "Times Roman",\n'
        '    "fontSize": 40,\n'
        '    "fontStyle": 1,\n'
        '    "alignment": "CENTER",\n'
        '    "baseHeight": 1.000000,\n'
        '    "baseMargin": 2.000000,\n'
        '    "letterHeight": 3.000000,\n'
        '    "bevelHeight": 4.000000\n'
        "}"
    )

    def _sign(self) -> Sign:
        return Sign(
            text="Must be a\nSign!!",
            font_name="Times Roman",
            font_size=40,
            font_style=FontStyle.BOLD,
            alignment=TextAlign.CENTER,
            base_height=1.0,
            base_margin=2.0,
            letter_height=3.0,
            bevel_height=4.0,
        )

    def test_to_json_literal(self) -> None:
        """Test the exact project file layout."""
        assert self._sign().to_json() == self.EXPECTED_JSON

    def test_from_json_literal(self) -> None:
        """Test that the literal parses back to an equal sign."""
        assert Sign.from_json(self.EXPECTED_JSON) == self._sign()

    def test_round_trip(self) -> None:
        """Test serialize then parse for a default sign."""
        sign = Sign()
        assert Sign.from_json(sign.to_json()) == sign

    def test_non_ascii_written_verbatim(self) -> None:
        """Test that accented text and font names are not escaped."""
        sign = Sign(text="Café\nStraße", font_name="Hélvética")
        data = sign.to_json()
        assert '"text": "Café\\nStraße"' in data
        assert '"fontName": "Hélvética"' in data
        assert "\\u" not in data
        assert Sign.from_json(data) == sign

    def test_defaults(self) -> None:
        """Test default project values."""
        sign = Sign()
        assert sign.text == "HELLO\nWORLD"
        assert sign.font_name == "Arial"
        assert sign.font_size == 36
        assert sign.font_style == FontStyle.BOLD
        assert sign.alignment == TextAlign.LEFT

    def test_invalid_dimensions_replaced(self) -> None:
        """Zero, negative, missing and non-numeric values fall back to defaults."""
        data = (
            '{"text": "HI", "fontName": "Arial", "fontSize": "big", '
            '"baseHeight": 0, "baseMargin": -1, "bevelHeight": true, '
            '"alignment": "diagonal", "fontStyle": 9}'
        )
        sign = Sign.from_json(data)
        assert sign.font_size == 36
        assert sign.base_height == 2.0
        assert sign.base_margin == 5.0
        assert sign.letter_height == 5.0
        assert sign.bevel_height == 0.5
        assert sign.alignment == TextAlign.LEFT
        assert sign.font_style == FontStyle.BOLD

    def test_lowercase_alignment_accepted(self) -> None:
        """Alignment names are case-insensitive."""
        sign = Sign.from_json('{"text": "HI", "fontName": "Arial", "alignment": "right"}')
        assert sign.alignment == TextAlign.RIGHT

    def test_malformed_json(self) -> None:
        """Test that malformed JSON is a hard failure."""
        with pytest.raises(InvalidProjectFileError, match="malformed JSON"):
            Sign.from_json("{not json", source="broken.json")

    def test_missing_text(self) -> None:
        """Test that a missing text field is a hard failure."""
        with pytest.raises(InvalidProjectFileError, match="'text'"):
            Sign.from_json('{"fontName": "Arial"}')

    def test_non_object_document(self) -> None:
        """Test that a JSON array is rejected."""
        with pytest.raises(InvalidProjectFileError, match="JSON object"):
            Sign.from_json("[1, 2]")

    def test_dimensions_validated(self) -> None:
        """A bevel taller than the letters is rejected when generating."""
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            self._sign().dimensions()

    def test_font_descriptor(self) -> None:
        """Test the font handle derived from a sign."""
        font = self._sign().font()
        assert font.name == "Times Roman"
        assert font.size == 40
        assert font.style == FontStyle.BOLD
