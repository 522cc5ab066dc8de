"""Unit tests for the file I/O layer.

Tests for StlWriter, ThreeMFWriter, project files and atomic output.
"""

import os
import re
import zipfile
from pathlib import Path
from xml.etree import ElementTree

import pytest

from signcraft.config import ExportConfig, GeometryConfig, TextAlign
from signcraft.domain import Mesh, MeshPart, Point3, Sign, Triangle
from signcraft.exceptions import FileWriteError, InvalidProjectFileError
from signcraft.io import StlWriter, ThreeMFWriter, load_project, save_project
from signcraft.io.threemf_writer import CORE_NAMESPACE, MATERIAL_NAMESPACE, MODEL_PATH

NUM = r"-?\d+\.\d{6}"
STL_GRAMMAR = re.compile(
    rf"solid (\S+)\n"
    rf"(  facet normal {NUM} {NUM} {NUM}\n"
    rf"    outer loop\n"
    rf"(      vertex {NUM} {NUM} {NUM}\n){{3}}"
    rf"    endloop\n"
    rf"  endfacet\n)*"
    rf"endsolid \1\n"
)

CORE = f"{{{CORE_NAMESPACE}}}"
MAT = f"{{{MATERIAL_NAMESPACE}}}"


def _tetrahedron() -> list[Triangle]:
    a = Point3(0, 0, 0)
    b = Point3(1, 0, 0)
    c = Point3(0, 1, 0)
    d = Point3(0, 0, 1)
    return [
        Triangle.from_points(a, c, b),
        Triangle.from_points(a, b, d),
        Triangle.from_points(a, d, c),
        Triangle.from_points(b, c, d),
    ]


def _shifted(triangles: list[Triangle], dz: float) -> list[Triangle]:
    offset = Point3(0.0, 0.0, dz)
    return [
        Triangle(t.p1 + offset, t.p2 + offset, t.p3 + offset, t.normal) for t in triangles
    ]


def _parts() -> list[Mesh]:
    return [
        Mesh(MeshPart.BASE.value, _tetrahedron()),
        Mesh(MeshPart.BODY.value, _shifted(_tetrahedron(), 2.0)),
        Mesh(MeshPart.FRONT.value, _shifted(_tetrahedron(), 4.0)),
    ]


def _read_model(path: Path) -> ElementTree.Element:
    with zipfile.ZipFile(path) as zf:
        return ElementTree.fromstring(zf.read(MODEL_PATH))


class TestStlWriter:
    """Tests for StlWriter."""

    def test_grammar(self):
        """Rendered STL matches the ASCII grammar exactly."""
        text = StlWriter("sign").render(_tetrahedron())
        assert STL_GRAMMAR.fullmatch(text)
        assert text.count("facet normal") == 4

    def test_empty_mesh(self):
        """An empty mesh is just header and trailer."""
        assert StlWriter("sign").render([]) == "solid sign\nendsolid sign\n"

    def test_six_decimals(self):
        """Coordinates use six decimals and no negative zero."""
        tri = Triangle(
            Point3(-0.0, 1.5, 2.0), Point3(1.0, 0.0, 0.0), Point3(0.0, 1.0, 0.0),
            Point3(0.0, 0.0, -1.0),
        )
        text = StlWriter().render([tri])
        assert "      vertex 0.000000 1.500000 2.000000\n" in text
        assert "  facet normal 0.000000 0.000000 -1.000000\n" in text
        assert "-0.000000" not in text

    def test_solid_name_sanitized(self):
        """Whitespace in the solid name is replaced."""
        writer = StlWriter("my sign")
        assert writer.render([]).startswith("solid my_sign\n")
        assert StlWriter("   ").solid_name == "sign"

    def test_write_file(self, tmp_path):
        """The written file equals the rendered text."""
        path = tmp_path / "out.stl"
        mesh = Mesh("sign", _tetrahedron())
        StlWriter().write(mesh, path)
        assert path.read_text(encoding="utf-8") == StlWriter().render(mesh.triangles)


class TestThreeMFWriter:
    """Tests for ThreeMFWriter."""

    def test_package_entries(self, tmp_path):
        """The package holds exactly the three required parts."""
        path = tmp_path / "sign.3mf"
        ThreeMFWriter().write(_parts(), path)
        with zipfile.ZipFile(path) as zf:
            assert sorted(zf.namelist()) == sorted(
                ["[Content_Types].xml", "_rels/.rels", "3D/3dmodel.model"]
            )
            assert zf.testzip() is None
            for name in zf.namelist():
                ElementTree.fromstring(zf.read(name))

    def test_relationship_target(self, tmp_path):
        """The root relationship points at the model part."""
        path = tmp_path / "sign.3mf"
        ThreeMFWriter().write(_parts(), path)
        with zipfile.ZipFile(path) as zf:
            rels = ElementTree.fromstring(zf.read("_rels/.rels"))
        targets = [el.get("Target") for el in rels]
        assert targets == ["/3D/3dmodel.model"]

    def test_single_object(self, tmp_path):
        """By default all parts become one welded object."""
        path = tmp_path / "sign.3mf"
        ThreeMFWriter().write(_parts(), path)
        model = _read_model(path)

        assert model.tag == f"{CORE}model"
        assert model.get("unit") == "millimeter"
        objects = model.findall(f"{CORE}resources/{CORE}object")
        assert len(objects) == 1
        assert objects[0].get("id") == "2"
        assert len(objects[0].findall(f".//{CORE}vertex")) == 12
        assert len(objects[0].findall(f".//{CORE}triangle")) == 12
        items = model.findall(f"{CORE}build/{CORE}item")
        assert [item.get("objectid") for item in items] == ["2"]

    def test_shared_vertices_welded(self):
        """Touching parts share vertices in single-object mode."""
        parts = [
            Mesh(MeshPart.BASE.value, _tetrahedron()),
            Mesh(MeshPart.BODY.value, _shifted(_tetrahedron(), 1.0)),
        ]
        model = ElementTree.fromstring(ThreeMFWriter().build_model(parts))
        # The apex of the first tetrahedron is the origin corner of the second
        assert len(model.findall(f".//{CORE}vertex")) == 7

    def test_triangle_indices_in_range(self, tmp_path):
        """Every triangle references existing vertices."""
        model = ElementTree.fromstring(ThreeMFWriter().build_model(_parts()))
        count = len(model.findall(f".//{CORE}vertex"))
        for tri in model.findall(f".//{CORE}triangle"):
            for key in ("v1", "v2", "v3"):
                assert 0 <= int(tri.get(key)) < count

    def test_multi_part(self):
        """Multi-part mode writes one object per part."""
        model = ElementTree.fromstring(ThreeMFWriter(multi_part=True).build_model(_parts()))
        objects = model.findall(f"{CORE}resources/{CORE}object")
        assert [o.get("name") for o in objects] == ["Base", "Body", "Front"]
        assert [o.get("id") for o in objects] == ["2", "3", "4"]
        for obj in objects:
            assert len(obj.findall(f".//{CORE}vertex")) == 4
        items = model.findall(f"{CORE}build/{CORE}item")
        assert [item.get("objectid") for item in items] == ["2", "3", "4"]

    def test_colored_single_object(self):
        """Colored mode adds base materials and per-triangle references."""
        writer = ThreeMFWriter(colored=True)
        model = ElementTree.fromstring(writer.build_model(_parts()))

        materials = model.find(f"{CORE}resources/{MAT}basematerials")
        assert materials is not None
        assert materials.get("id") == "1"
        bases = materials.findall(f"{MAT}base")
        assert [b.get("name") for b in bases] == ["Base", "Body", "Front"]
        assert [b.get("displaycolor") for b in bases] == ["#FFFFFF", "#1E3A8A", "#F5C518"]

        triangles = model.findall(f".//{CORE}triangle")
        assert {t.get("pid") for t in triangles} == {"1"}
        assert [t.get("p1") for t in triangles] == ["0"] * 4 + ["1"] * 4 + ["2"] * 4

    def test_colored_multi_part(self):
        """Colored multi-part objects reference their material by pindex."""
        writer = ThreeMFWriter(multi_part=True, colored=True)
        model = ElementTree.fromstring(writer.build_model(_parts()))
        objects = model.findall(f"{CORE}resources/{CORE}object")
        assert [o.get("pindex") for o in objects] == ["0", "1", "2"]
        assert {o.get("pid") for o in objects} == {"1"}

    def test_uncolored_has_no_materials(self):
        """Plain output carries no material references."""
        xml = ThreeMFWriter().build_model(_parts())
        assert "basematerials" not in xml
        assert "pid=" not in xml

    def test_empty_parts_skipped(self):
        """Empty parts produce no object."""
        parts = [Mesh(MeshPart.BASE.value, _tetrahedron()), Mesh(MeshPart.FRONT.value)]
        model = ElementTree.fromstring(ThreeMFWriter(multi_part=True).build_model(parts))
        assert len(model.findall(f"{CORE}resources/{CORE}object")) == 1

    def test_all_empty_raises(self):
        """Nothing to export is an error."""
        with pytest.raises(ValueError, match="No mesh data"):
            ThreeMFWriter().build_model([Mesh("Base")])

    def test_from_config(self):
        """Writer options come from the export settings."""
        export = ExportConfig(multi_part=True, colored=True, front_color="#FF0000")
        writer = ThreeMFWriter.from_config(export, GeometryConfig(weld_epsilon=1e-5))
        assert writer.multi_part
        assert writer.colored
        assert writer.weld_epsilon == 1e-5
        assert writer.colors[MeshPart.FRONT.value] == "#FF0000"


class TestAtomicOutput:
    """Tests for write failure handling."""

    def test_missing_directory(self, tmp_path):
        """Writing into a missing directory raises FileWriteError."""
        path = tmp_path / "missing" / "sign.stl"
        with pytest.raises(FileWriteError) as exc_info:
            StlWriter().write(Mesh("sign", _tetrahedron()), path)
        assert exc_info.value.path == str(path)
        assert not path.exists()

    def test_failed_rename_keeps_old_file(self, tmp_path, monkeypatch):
        """A failure before the rename leaves the previous file intact."""
        path = tmp_path / "sign.stl"
        path.write_text("previous", encoding="utf-8")

        def fail_replace(src, dst):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", fail_replace)
        with pytest.raises(FileWriteError, match="No space left"):
            StlWriter().write(Mesh("sign", _tetrahedron()), path)

        assert path.read_text(encoding="utf-8") == "previous"
        assert [p.name for p in tmp_path.iterdir()] == ["sign.stl"]

    def test_error_inside_block_cleans_up(self, tmp_path):
        """An exception while writing removes the temporary file."""
        from signcraft.io._atomic import atomic_output

        path = tmp_path / "out.txt"
        with pytest.raises(RuntimeError):
            with atomic_output(path) as handle:
                handle.write("partial")
                raise RuntimeError("boom")
        assert list(tmp_path.iterdir()) == []

    def test_file_permissions(self, tmp_path):
        """Written files are readable by everyone."""
        path = tmp_path / "sign.stl"
        StlWriter().write(Mesh("sign", _tetrahedron()), path)
        assert path.stat().st_mode & 0o777 == 0o644


class TestProjectFiles:
    """Tests for load_project and save_project."""

    def test_save_and_load(self, tmp_path):
        """A saved project loads back equal."""
        sign = Sign(text="OPEN\nLATE", font_name="Arial", alignment=TextAlign.RIGHT)
        path = tmp_path / "sign.json"
        save_project(sign, path)
        assert load_project(path) == sign

    def test_saved_text_is_exact(self, tmp_path):
        """The file holds exactly the JSON layout without a trailing newline."""
        sign = Sign()
        path = tmp_path / "sign.json"
        save_project(sign, path)
        assert path.read_text(encoding="utf-8") == sign.to_json()

    def test_non_ascii_saved_verbatim(self, tmp_path):
        """Accented text is stored as UTF-8 characters and loads back equal."""
        sign = Sign(text="Café", font_name="Hélvética")
        path = tmp_path / "sign.json"
        save_project(sign, path)
        saved = path.read_text(encoding="utf-8")
        assert '"text": "Café"' in saved
        assert '"fontName": "Hélvética"' in saved
        assert load_project(path) == sign

    def test_missing_file(self, tmp_path):
        """A missing project raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_project(tmp_path / "nope.json")

    def test_malformed_file(self, tmp_path):
        """Malformed JSON raises InvalidProjectFileError with the path."""
        path = tmp_path / "bad.json"
        path.write_text('{"text": ', encoding="utf-8")
        with pytest.raises(InvalidProjectFileError) as exc_info:
            load_project(path)
        assert exc_info.value.path == str(path)

    def test_zero_dimension_replaced(self, tmp_path):
        """Zero dimensions load as defaults instead of failing."""
        path = tmp_path / "zero.json"
        path.write_text(
            '{"text": "HI", "fontName": "Arial", "letterHeight": 0, "bevelHeight": 0}',
            encoding="utf-8",
        )
        sign = load_project(path)
        assert sign.letter_height == 5.0
        assert sign.bevel_height == 0.5
