"""File I/O layer for signcraft.

This module handles everything that touches files: reading glyph
outlines from fonts with fontTools, writing meshes and reading/writing
project files.

Key responsibilities:
- Resolve fonts and flatten glyph outlines
- Write ASCII STL
- Write 3MF packages (single object, per part, colored)
- Load and save sign projects
- Atomic output (temp file + rename)

Key classes:
- FontToolsOutlineProvider: Outline provider for TTF/OTF fonts
- StlWriter: ASCII STL writer
- ThreeMFWriter: 3MF package writer
"""

from signcraft.io.outline import FlatteningPen, FontToolsOutlineProvider
from signcraft.io.project import load_project, save_project
from signcraft.io.stl_writer import StlWriter
from signcraft.io.threemf_writer import ThreeMFWriter

__all__ = [
    "FlatteningPen",
    "FontToolsOutlineProvider",
    "StlWriter",
    "ThreeMFWriter",
    "load_project",
    "save_project",
]
