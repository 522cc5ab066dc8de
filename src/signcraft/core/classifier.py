"""Contour classification and hole nesting.

This module separates outer shells from holes and groups every hole under
the shell that contains it:
- Outer shells have a positive shoelace sum (outline-space convention)
- Holes have a zero or negative sum
- A hole belongs to the smallest-area outer containing its first vertex

Holes that no outer contains are reported rather than silently dropped.
"""

from dataclasses import dataclass, field

import structlog

from signcraft.core.geometry import point_in_polygon
from signcraft.domain import Contour, GlyphRegion

logger = structlog.get_logger(__name__)


@dataclass
class ContourClassification:
    """Classification of a set of contours.

    Attributes:
        outer_contours: Indices of outer shell contours
        hole_contours: Indices of hole contours
        owners: Maps hole index to the index of its owning outer contour
        orphan_holes: Indices of holes contained by no outer contour
    """

    outer_contours: list[int]
    hole_contours: list[int]
    owners: dict[int, int] = field(default_factory=dict)
    orphan_holes: list[int] = field(default_factory=list)

    def holes_of(self, outer_idx: int) -> list[int]:
        """Get hole indices owned by an outer contour, in input order."""
        return [h for h in self.hole_contours if self.owners.get(h) == outer_idx]

    def has_orphans(self) -> bool:
        return len(self.orphan_holes) > 0


class ContourClassifier:
    """Classifies contours by winding and nests holes under outer shells.

    The classifier is stateless and safe to reuse.
    """

    def classify(self, contours: list[Contour]) -> ContourClassification:
        """Classify contours and assign hole owners.

        Args:
            contours: Contours in outline space

        Returns:
            ContourClassification with owners and orphans
        """
        outers: list[int] = []
        holes: list[int] = []

        for idx, contour in enumerate(contours):
            if contour.is_outer:
                outers.append(idx)
            else:
                holes.append(idx)

        result = ContourClassification(outer_contours=outers, hole_contours=holes)

        for hole_idx in holes:
            owner = self._find_owner(contours[hole_idx], contours, outers)
            if owner is None:
                result.orphan_holes.append(hole_idx)
                logger.warning(
                    "Hole contour has no containing outer contour",
                    hole=hole_idx,
                    points=len(contours[hole_idx]),
                    bbox=contours[hole_idx].bounding_box(),
                )
            else:
                result.owners[hole_idx] = owner

        logger.debug(
            "Contour classification",
            total=len(contours),
            outer=len(outers),
            holes=len(holes),
            orphans=len(result.orphan_holes),
        )
        return result

    def group(self, contours: list[Contour]) -> tuple[list[GlyphRegion], ContourClassification]:
        """Group contours into glyph regions.

        Args:
            contours: Contours in outline space

        Returns:
            Tuple of (regions in outer contour order, classification)
        """
        classification = self.classify(contours)
        regions = [
            GlyphRegion(
                outer=contours[outer_idx],
                holes=[contours[h] for h in classification.holes_of(outer_idx)],
            )
            for outer_idx in classification.outer_contours
        ]
        return regions, classification

    def _find_owner(
        self,
        hole: Contour,
        all_contours: list[Contour],
        outer_indices: list[int],
    ) -> int | None:
        """Find the outer contour that owns a hole.

        Tests the first point of the hole against each outer contour and
        picks the containing outer with the smallest area.

        Args:
            hole: The hole contour to place
            all_contours: All contours
            outer_indices: Indices of outer contours to test against

        Returns:
            Index of owning outer contour, or None if not contained
        """
        if not hole.points:
            return None

        test_point = hole.points[0]
        best: int | None = None
        best_area = 0.0

        for outer_idx in outer_indices:
            outer = all_contours[outer_idx]
            if not point_in_polygon(test_point, outer.points):
                continue
            area = outer.area()
            if best is None or area < best_area:
                best = outer_idx
                best_area = area

        return best
