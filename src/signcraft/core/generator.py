"""Sign generation orchestration.

This module coordinates the full text-to-mesh workflow:

1. Lay out the text lines (outline provider + alignment)
2. Extract contours per line
3. Classify contours and nest holes under their outers
4. Extrude every region into a beveled letter solid
5. Build the base plate under the union of all line bounds
6. Assemble Base/Body/Front parts and check watertightness
7. Write STL or 3MF

Every call works on fresh local state; a generator instance can be
reused for any number of signs.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from signcraft.config import OutputFormat, SignSettings, TextAlign
from signcraft.core.assembler import MeshAssembler, VertexTable, find_open_edges
from signcraft.core.classifier import ContourClassifier
from signcraft.core.extractor import ContourExtractor
from signcraft.core.extrusion import LetterExtruder
from signcraft.core.geometry import Bounds, union_bounds
from signcraft.core.layout import OutlineProvider, TextLayout
from signcraft.core.plate import BasePlateBuilder
from signcraft.core.triangulator import PolygonTriangulator
from signcraft.domain import FontDescriptor, Mesh, MeshPart, Sign
from signcraft.exceptions import EmptyInputError
from signcraft.io.stl_writer import StlWriter
from signcraft.io.threemf_writer import ThreeMFWriter
from signcraft.utils import GenerationLogger, GenerationStats


@dataclass
class SignModel:
    """Generated sign geometry.

    Attributes:
        parts: Part meshes in Base, Body, Front order (empty parts omitted)
        text_bounds: Model-space bounds of all text (mm)
        stats: Statistics gathered while building
    """

    parts: list[Mesh]
    text_bounds: Bounds
    stats: GenerationStats = field(default_factory=GenerationStats)

    def combined(self, name: str = "sign") -> Mesh:
        """All parts as a single mesh."""
        mesh = Mesh(name=name)
        for part in self.parts:
            mesh.extend(part.triangles)
        return mesh

    def part(self, part: MeshPart) -> Mesh | None:
        for mesh in self.parts:
            if mesh.name == part.value:
                return mesh
        return None


class SignGenerator:
    """Turns text into a printable sign model.

    Example:
        settings = SignSettings()
        with FontToolsOutlineProvider() as provider:
            generator = SignGenerator(settings, provider)
            stats = generator.generate(
                "HELLO\\nWORLD",
                FontDescriptor("Arial.ttf", 36),
                Path("hello.3mf"),
            )
    """

    def __init__(self, settings: SignSettings, outline_provider: OutlineProvider) -> None:
        """Initialize generator.

        Args:
            settings: Dimensions, geometry, export and logging settings
            outline_provider: Resolves text lines to outline commands
        """
        self.settings = settings
        self.outline_provider = outline_provider
        self.logger = structlog.get_logger("signcraft")

    def build(
        self,
        text: str,
        font: FontDescriptor,
        align: TextAlign | None = None,
        separate_parts: bool = False,
    ) -> SignModel:
        """Build the sign geometry without writing it.

        Args:
            text: Text with lines separated by newlines
            font: Font to render with
            align: Line alignment (settings default if None)
            separate_parts: Close every part on its own, for one object per part

        Returns:
            SignModel with parts and statistics

        Raises:
            EmptyInputError: If the text has no renderable line
        """
        if not text or not text.strip():
            raise EmptyInputError()

        settings = self.settings
        geometry = settings.geometry
        align = align if align is not None else settings.alignment

        gen_logger = GenerationLogger(self.logger)
        gen_logger.stats.start_time = time.time()

        layout = TextLayout(self.outline_provider, line_gap=geometry.line_gap)
        extractor = ContourExtractor(epsilon=geometry.point_epsilon)
        classifier = ContourClassifier()
        triangulator = PolygonTriangulator(tolerance=geometry.model_tolerance())
        extruder = LetterExtruder(
            settings.dimensions, geometry, triangulator, separate_parts=separate_parts
        )
        assembler = MeshAssembler()

        line_boxes: list[Bounds] = []
        for line in layout.layout(text, font, align):
            contours = extractor.extract(line.commands)
            gen_logger.log_line(line.text, len(contours))
            if not contours:
                continue

            line_boxes.extend(c.bounding_box() for c in contours)

            regions, classification = classifier.group(contours)
            gen_logger.log_classification(
                outers=len(classification.outer_contours),
                holes=len(classification.hole_contours),
                orphans=len(classification.orphan_holes),
            )

            for region in regions:
                solid = extruder.extrude(region)
                assembler.add(MeshPart.BODY, solid.body)
                assembler.add(MeshPart.FRONT, solid.front)
                gen_logger.log_region(
                    triangles=len(solid.body) + len(solid.front),
                    fallbacks=solid.fallbacks,
                    bevel_collapsed=solid.bevel_collapsed,
                )

        outline_bounds = union_bounds(line_boxes)
        if outline_bounds is None:
            raise EmptyInputError()

        text_bounds = self._to_model_bounds(outline_bounds)
        plate = BasePlateBuilder(settings.dimensions)
        assembler.add(MeshPart.BASE, plate.build(text_bounds))

        # Weld each mesh the way it will be written
        meshes = assembler.parts() if separate_parts else [assembler.combined()]
        vertices = open_edges = 0
        for mesh in meshes:
            table = VertexTable(geometry.weld_epsilon)
            open_edges += len(find_open_edges(table.index_triangles(mesh.triangles)))
            vertices += len(table)
        gen_logger.log_mesh(
            triangles=sum(len(mesh) for mesh in meshes),
            vertices=vertices,
            open_edges=open_edges,
        )

        gen_logger.stats.end_time = time.time()
        return SignModel(
            parts=assembler.parts(),
            text_bounds=text_bounds,
            stats=gen_logger.stats,
        )

    def generate(
        self,
        text: str,
        font: FontDescriptor,
        output_path: Path,
        output_format: OutputFormat | None = None,
        align: TextAlign | None = None,
    ) -> GenerationStats:
        """Build a sign and write it to a file.

        The format is taken from ``output_format``, else from the path
        suffix, else from the export settings.

        Args:
            text: Text with lines separated by newlines
            font: Font to render with
            output_path: Destination file
            output_format: STL or 3MF
            align: Line alignment (settings default if None)

        Returns:
            GenerationStats for the run

        Raises:
            EmptyInputError: If the text has no renderable line
            FontError: If the outline provider cannot resolve the font
            FileWriteError: If the output cannot be written
        """
        output_path = Path(output_path)
        fmt = (
            output_format
            or OutputFormat.from_path(output_path)
            or self.settings.export.output_format
        )

        separate = fmt == OutputFormat.THREEMF and self.settings.export.multi_part
        model = self.build(text, font, align, separate_parts=separate)
        self.export(model, output_path, fmt)

        stats = model.stats
        stats.end_time = time.time()
        stats.output_path = output_path
        self.logger.info(
            "Sign written",
            path=str(output_path),
            format=fmt.value,
            triangles=stats.triangle_count,
            vertices=stats.vertex_count,
            fallbacks=stats.fallback_count,
            duration_s=round(stats.duration_seconds, 3),
        )
        return stats

    def generate_sign(
        self,
        sign: Sign,
        output_path: Path,
        output_format: OutputFormat | None = None,
        font: FontDescriptor | None = None,
    ) -> GenerationStats:
        """Generate from a saved project.

        The project's dimensions and alignment override the settings.

        Args:
            sign: Sign project
            output_path: Destination file
            output_format: STL or 3MF
            font: Font override (the project's font name is used if None)

        Returns:
            GenerationStats for the run
        """
        settings = self.settings.model_copy(update={"dimensions": sign.dimensions()})
        generator = SignGenerator(settings, self.outline_provider)
        return generator.generate(
            sign.text,
            font or sign.font(),
            output_path,
            output_format=output_format,
            align=sign.alignment,
        )

    def export(self, model: SignModel, output_path: Path, output_format: OutputFormat) -> Path:
        """Write a built model.

        Args:
            model: Built sign model
            output_path: Destination file
            output_format: STL or 3MF

        Returns:
            The written path
        """
        export = self.settings.export
        if output_format == OutputFormat.THREEMF:
            writer = ThreeMFWriter.from_config(export, self.settings.geometry)
            return writer.write(model.parts, output_path)
        return StlWriter(export.solid_name).write(model.combined(export.solid_name), output_path)

    def _to_model_bounds(self, bounds: Bounds) -> Bounds:
        s = self.settings.geometry.scale_factor
        min_x, min_y, max_x, max_y = bounds
        # y flips, so the outline's max y becomes the model's min y
        return (min_x * s, -max_y * s, max_x * s, -min_y * s)
