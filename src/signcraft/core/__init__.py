"""Core processing algorithms for signcraft.

This module contains the 2D-to-3D sign geometry engine:

- Geometry operations (orientation, point-in-polygon, ring cleaning)
- Contour extraction from flattened outline paths
- Contour classification and hole nesting
- Constrained Delaunay triangulation with a fan fallback
- Beveled letter extrusion and the base plate
- Mesh assembly and vertex welding

Every stage is stateless per call; the generator creates fresh stage
objects for each sign.

Key functions:
- shoelace_sum: Orientation sum used to tell outers from holes
- signed_area: Polygon area using shoelace formula
- point_in_polygon: Test if point is inside polygon
- bezier_flatten: Convert Bezier curves to line segments
- clean_ring: Remove near-duplicate points with an index map
- miter_offset / radial_offset: Bevel ring offsets

Key classes:
- ContourExtractor: Path commands to closed contours
- ContourClassifier: Outer/hole classification and nesting
- PolygonTriangulator: Polygon-with-holes triangulation
- LetterExtruder: Beveled letter solids
- BasePlateBuilder: Plate under the text
- MeshAssembler / VertexTable: Part collection and welding
- TextLayout: Line stacking and alignment
- SignGenerator: End-to-end orchestration
"""

from signcraft.core.assembler import MeshAssembler, VertexTable, find_open_edges
from signcraft.core.bevel import miter_offset, radial_offset
from signcraft.core.classifier import ContourClassification, ContourClassifier
from signcraft.core.extractor import ContourExtractor
from signcraft.core.extrusion import LetterExtruder, LetterSolid
from signcraft.core.generator import SignGenerator, SignModel
from signcraft.core.geometry import (
    bezier_flatten,
    clean_ring,
    point_in_polygon,
    remove_near_duplicates,
    shoelace_sum,
    signed_area,
)
from signcraft.core.layout import LaidOutLine, OutlineProvider, TextLayout
from signcraft.core.plate import BasePlateBuilder
from signcraft.core.triangulator import PolygonTriangulator, Triangulation

__all__ = [
    # Assembly
    "MeshAssembler",
    "VertexTable",
    "find_open_edges",
    # Classification
    "ContourClassification",
    "ContourClassifier",
    "ContourExtractor",
    # Solids
    "BasePlateBuilder",
    "LetterExtruder",
    "LetterSolid",
    "PolygonTriangulator",
    "Triangulation",
    # Layout and orchestration
    "LaidOutLine",
    "OutlineProvider",
    "SignGenerator",
    "SignModel",
    "TextLayout",
    # Geometry functions
    "bezier_flatten",
    "clean_ring",
    "miter_offset",
    "point_in_polygon",
    "radial_offset",
    "remove_near_duplicates",
    "shoelace_sum",
    "signed_area",
]
