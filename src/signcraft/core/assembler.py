"""Mesh assembly and vertex welding.

This module collects triangles per part and builds indexed vertex tables
for index-based formats:
- MeshAssembler: Accumulates triangles under part names
- VertexTable: Welds points within an epsilon to stable indices
- find_open_edges: Reports edges without a matching opposite edge
"""

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from signcraft.domain import Mesh, MeshPart, Point3, Triangle

IndexedTriangle = tuple[int, int, int]


class VertexTable:
    """Welded vertex table backed by a spatial hash.

    Points closer than ``epsilon`` on every axis share one index. The
    hash cell size equals ``epsilon``, so only the 27 cells around a
    point need to be searched.

    Example:
        table = VertexTable(1e-6)
        i = table.add(Point3(0.0, 0.0, 0.0))
        j = table.add(Point3(0.0, 0.0, 1e-9))
        assert i == j
    """

    def __init__(self, epsilon: float = 1e-6) -> None:
        if epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        self.epsilon = epsilon
        self._vertices: list[Point3] = []
        self._cells: dict[tuple[int, int, int], list[int]] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    @property
    def vertices(self) -> list[Point3]:
        """Vertices in index order."""
        return list(self._vertices)

    @classmethod
    def from_points(cls, points: Iterable[Point3], epsilon: float = 1e-6) -> "VertexTable":
        """Build a table by adding points in order."""
        table = cls(epsilon)
        for p in points:
            table.add(p)
        return table

    def _cell(self, p: Point3) -> tuple[int, int, int]:
        return (
            math.floor(p.x / self.epsilon),
            math.floor(p.y / self.epsilon),
            math.floor(p.z / self.epsilon),
        )

    def find(self, p: Point3) -> int | None:
        """Index of a stored vertex within epsilon of ``p``, if any."""
        cx, cy, cz = self._cell(p)
        eps = self.epsilon
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for dz in (-1, 0, 1):
                    for idx in self._cells.get((cx + dx, cy + dy, cz + dz), ()):
                        v = self._vertices[idx]
                        if abs(v.x - p.x) < eps and abs(v.y - p.y) < eps and abs(v.z - p.z) < eps:
                            return idx
        return None

    def add(self, p: Point3) -> int:
        """Get the index of ``p``, adding it if no stored vertex is within epsilon."""
        found = self.find(p)
        if found is not None:
            return found
        idx = len(self._vertices)
        self._vertices.append(p)
        self._cells.setdefault(self._cell(p), []).append(idx)
        return idx

    def index_triangles(self, triangles: Iterable[Triangle]) -> list[IndexedTriangle]:
        """Weld triangle vertices and return index triples.

        Triangles that collapse to fewer than three distinct indices are dropped.

        Args:
            triangles: Triangles to index

        Returns:
            Index triples in input order
        """
        result: list[IndexedTriangle] = []
        for tri in triangles:
            a = self.add(tri.p1)
            b = self.add(tri.p2)
            c = self.add(tri.p3)
            if a == b or b == c or a == c:
                continue
            result.append((a, b, c))
        return result


def find_open_edges(triangles: Sequence[IndexedTriangle]) -> list[tuple[int, int]]:
    """Find directed edges whose reverse edge is not used by another triangle.

    A closed, consistently wound mesh uses every edge once in each direction,
    so the result is empty for a watertight mesh.

    Args:
        triangles: Indexed triangles

    Returns:
        Unmatched directed edges
    """
    edges: Counter[tuple[int, int]] = Counter()
    for a, b, c in triangles:
        edges[(a, b)] += 1
        edges[(b, c)] += 1
        edges[(c, a)] += 1

    open_edges: list[tuple[int, int]] = []
    for (a, b), count in edges.items():
        missing = count - edges.get((b, a), 0)
        if missing > 0:
            open_edges.extend([(a, b)] * missing)
    return open_edges


class MeshAssembler:
    """Collects triangles under part names.

    Parts keep their insertion order: Base, Body, Front.

    Example:
        assembler = MeshAssembler()
        assembler.add(MeshPart.BASE, plate_triangles)
        mesh = assembler.combined("sign")
    """

    def __init__(self) -> None:
        self._parts: dict[str, Mesh] = {
            part.value: Mesh(name=part.value) for part in MeshPart
        }

    def add(self, part: MeshPart | str, triangles: Iterable[Triangle]) -> None:
        """Append triangles to a part, creating it if needed."""
        name = part.value if isinstance(part, MeshPart) else part
        if name not in self._parts:
            self._parts[name] = Mesh(name=name)
        self._parts[name].extend(triangles)

    def parts(self, include_empty: bool = False) -> list[Mesh]:
        """Get part meshes in insertion order."""
        return [m for m in self._parts.values() if include_empty or not m.is_empty()]

    def combined(self, name: str = "sign") -> Mesh:
        """Union of all parts as one mesh."""
        mesh = Mesh(name=name)
        for part in self._parts.values():
            mesh.extend(part.triangles)
        return mesh

    @property
    def triangle_count(self) -> int:
        return sum(len(m) for m in self._parts.values())
