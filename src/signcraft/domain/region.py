"""Glyph region: one outer shell with the holes it owns."""

from dataclasses import dataclass, field

from signcraft.domain.contour import Contour


@dataclass
class GlyphRegion:
    """An outer contour plus the hole contours nested inside it.

    Holes are a single level deep; a hole never contains another hole.

    Attributes:
        outer: Outer shell contour
        holes: Hole contours assigned to this shell
    """

    outer: Contour
    holes: list[Contour] = field(default_factory=list)

    @property
    def contours(self) -> list[Contour]:
        """All contours of the region, outer first."""
        return [self.outer, *self.holes]

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Bounding box of the outer shell."""
        return self.outer.bounding_box()

    def has_holes(self) -> bool:
        return bool(self.holes)
