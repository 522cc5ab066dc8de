"""Domain models for signcraft.

This module contains the domain models shared by the outline and mesh
stages. All geometric models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Independent of fontTools and shapely implementation details

Key classes:
- Point / Contour: 2D outline geometry
- PathCommand: Flattened outline commands from an outline provider
- GlyphRegion: An outer contour with its holes
- Point3 / Triangle / Mesh: 3D output geometry
- FontDescriptor: Font identity resolved by outline providers
- Sign: Saved sign project
"""

from signcraft.domain.contour import Contour, Point, WindingDirection
from signcraft.domain.font import FontDescriptor, FontStyle
from signcraft.domain.mesh import DOWN, UP, Mesh, MeshPart, Point3, Triangle
from signcraft.domain.path import (
    PathCommand,
    PathCommandType,
    commands_bounds,
    translate_commands,
)
from signcraft.domain.region import GlyphRegion
from signcraft.domain.sign import Sign

__all__: list[str] = [
    "DOWN",
    "UP",
    # Enums
    "WindingDirection",
    "PathCommandType",
    "FontStyle",
    "MeshPart",
    # Core types
    "Point",
    "Contour",
    "PathCommand",
    "GlyphRegion",
    "Point3",
    "Triangle",
    "Mesh",
    "FontDescriptor",
    "Sign",
    # Helpers
    "commands_bounds",
    "translate_commands",
]
