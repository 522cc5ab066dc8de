"""ASCII STL output."""

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from signcraft.domain import Mesh, Point3, Triangle
from signcraft.io._atomic import atomic_output

logger = structlog.get_logger(__name__)


def _fmt(value: float) -> str:
    # Adding 0.0 turns -0.0 into 0.0
    return f"{value + 0.0:.6f}"


def _fmt3(p: Point3) -> str:
    return f"{_fmt(p.x)} {_fmt(p.y)} {_fmt(p.z)}"


class StlWriter:
    """Writes triangle meshes as ASCII STL.

    Every facet carries its stored normal and its three vertices inline;
    STL has no vertex sharing.

    Example:
        writer = StlWriter(solid_name="sign")
        writer.write(mesh, Path("sign.stl"))
    """

    def __init__(self, solid_name: str = "sign") -> None:
        self.solid_name = re.sub(r"\s+", "_", solid_name.strip()) or "sign"

    def iter_lines(self, triangles: Iterable[Triangle]) -> Iterator[str]:
        """Yield the STL document line by line (without newlines)."""
        yield f"solid {self.solid_name}"
        for tri in triangles:
            yield f"  facet normal {_fmt3(tri.normal)}"
            yield "    outer loop"
            for vertex in tri.vertices:
                yield f"      vertex {_fmt3(vertex)}"
            yield "    endloop"
            yield "  endfacet"
        yield f"endsolid {self.solid_name}"

    def render(self, triangles: Iterable[Triangle]) -> str:
        """Render the STL document as a string."""
        return "".join(f"{line}\n" for line in self.iter_lines(triangles))

    def write(self, mesh: Mesh, path: Path) -> Path:
        """Write a mesh to an STL file.

        Args:
            mesh: Mesh to write
            path: Destination path

        Returns:
            The written path

        Raises:
            FileWriteError: If the file cannot be written
        """
        with atomic_output(path) as handle:
            for line in self.iter_lines(mesh.triangles):
                handle.write(line)
                handle.write("\n")

        logger.debug("STL written", path=str(path), facets=len(mesh))
        return path
