"""3MF package output.

A 3MF file is a ZIP archive with three parts:
- ``[Content_Types].xml``: OPC content types for .rels and .model parts
- ``_rels/.rels``: relationship pointing at the model part
- ``3D/3dmodel.model``: the model XML with indexed meshes

Meshes are written either as one object (all parts unioned) or as one
object per part. Optionally the parts are colored through a base
materials group, one material per height band.
"""

import zipfile
from collections.abc import Sequence
from pathlib import Path
from xml.sax.saxutils import quoteattr

import structlog

from signcraft.config import ExportConfig, GeometryConfig
from signcraft.core.assembler import IndexedTriangle, VertexTable
from signcraft.domain import Mesh, MeshPart, Point3
from signcraft.io._atomic import atomic_output

logger = structlog.get_logger(__name__)

MODEL_PATH = "3D/3dmodel.model"
CORE_NAMESPACE = "http://schemas.microsoft.com/3dmanufacturing/core/2015/02"
MATERIAL_NAMESPACE = "http://schemas.microsoft.com/3dmanufacturing/material/2015/02"
MATERIALS_ID = 1

CONTENT_TYPES_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="model" ContentType="application/vnd.ms-package.3dmanufacturing-3dmodel+xml"/>
</Types>"""

RELS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Target="/3D/3dmodel.model" Id="rel0" Type="http://schemas.microsoft.com/3dmanufacturing/2013/01/3dmodel"/>
</Relationships>"""


def _fmt(value: float) -> str:
    return f"{value + 0.0:.6f}"


class ThreeMFWriter:
    """Writes sign parts as a 3MF package.

    Example:
        writer = ThreeMFWriter(multi_part=True, colored=True)
        writer.write(parts, Path("sign.3mf"))
    """

    def __init__(
        self,
        weld_epsilon: float = 1e-6,
        multi_part: bool = False,
        colored: bool = False,
        colors: dict[str, str] | None = None,
        object_name: str = "Sign",
    ) -> None:
        """Initialize writer.

        Args:
            weld_epsilon: Vertex welding distance in mm
            multi_part: Write one object per part
            colored: Emit base materials and material references
            colors: Display color per part name (``#RRGGBB``)
            object_name: Name of the object in single-object mode
        """
        self.weld_epsilon = weld_epsilon
        self.multi_part = multi_part
        self.colored = colored
        self.colors = colors or {
            MeshPart.BASE.value: "#FFFFFF",
            MeshPart.BODY.value: "#1E3A8A",
            MeshPart.FRONT.value: "#F5C518",
        }
        self.object_name = object_name

    @classmethod
    def from_config(cls, export: ExportConfig, geometry: GeometryConfig) -> "ThreeMFWriter":
        """Create a writer from settings."""
        return cls(
            weld_epsilon=geometry.weld_epsilon,
            multi_part=export.multi_part,
            colored=export.colored,
            colors={
                MeshPart.BASE.value: export.base_color,
                MeshPart.BODY.value: export.body_color,
                MeshPart.FRONT.value: export.front_color,
            },
        )

    def write(self, parts: Sequence[Mesh], path: Path) -> Path:
        """Write parts to a 3MF file.

        Args:
            parts: Part meshes; empty parts are skipped
            path: Destination path

        Returns:
            The written path

        Raises:
            ValueError: If every part is empty
            FileWriteError: If the file cannot be written
        """
        model_xml = self.build_model(parts)

        with atomic_output(path, binary=True) as handle:
            with zipfile.ZipFile(handle, "w", zipfile.ZIP_DEFLATED) as zf:
                zf.writestr("[Content_Types].xml", CONTENT_TYPES_XML)
                zf.writestr("_rels/.rels", RELS_XML)
                zf.writestr(MODEL_PATH, model_xml)

        logger.debug(
            "3MF written",
            path=str(path),
            objects=len(parts) if self.multi_part else 1,
            colored=self.colored,
        )
        return path

    def build_model(self, parts: Sequence[Mesh]) -> str:
        """Build the 3D model XML.

        Args:
            parts: Part meshes

        Returns:
            Model XML document
        """
        parts = [p for p in parts if not p.is_empty()]
        if not parts:
            raise ValueError("No mesh data to export")

        materials = {part.name: idx for idx, part in enumerate(parts)}

        xml_parts = ['<?xml version="1.0" encoding="UTF-8"?>']
        if self.colored:
            xml_parts.append(
                f'<model unit="millimeter" xml:lang="en-US" xmlns="{CORE_NAMESPACE}" '
                f'xmlns:m="{MATERIAL_NAMESPACE}">'
            )
        else:
            xml_parts.append(f'<model unit="millimeter" xml:lang="en-US" xmlns="{CORE_NAMESPACE}">')
        xml_parts.append("  <resources>")

        if self.colored:
            xml_parts.append(f'    <m:basematerials id="{MATERIALS_ID}">')
            for part in parts:
                color = self.colors.get(part.name, "#808080")
                xml_parts.append(
                    f"      <m:base name={quoteattr(part.name)} displaycolor={quoteattr(color)}/>"
                )
            xml_parts.append("    </m:basematerials>")

        object_ids: list[int] = []
        next_id = MATERIALS_ID + 1

        if self.multi_part:
            for part in parts:
                table = VertexTable(self.weld_epsilon)
                part_faces = table.index_triangles(part.triangles)
                material = f' pid="{MATERIALS_ID}" pindex="{materials[part.name]}"' if self.colored else ""
                self._append_object(
                    xml_parts, next_id, part.name, material, table.vertices, part_faces, None
                )
                object_ids.append(next_id)
                next_id += 1
        else:
            table = VertexTable(self.weld_epsilon)
            faces: list[IndexedTriangle] = []
            face_materials: list[int] = []
            for part in parts:
                indexed = table.index_triangles(part.triangles)
                faces.extend(indexed)
                face_materials.extend([materials[part.name]] * len(indexed))
            material = f' pid="{MATERIALS_ID}" pindex="0"' if self.colored else ""
            self._append_object(
                xml_parts,
                next_id,
                self.object_name,
                material,
                table.vertices,
                faces,
                face_materials if self.colored else None,
            )
            object_ids.append(next_id)

        xml_parts.append("  </resources>")

        # Build section - place all objects
        xml_parts.append("  <build>")
        for obj_id in object_ids:
            xml_parts.append(f'    <item objectid="{obj_id}"/>')
        xml_parts.append("  </build>")

        xml_parts.append("</model>")

        return "\n".join(xml_parts)

    def _append_object(
        self,
        xml_parts: list[str],
        obj_id: int,
        name: str,
        material: str,
        vertices: list[Point3],
        faces: list[IndexedTriangle],
        face_materials: list[int] | None,
    ) -> None:
        xml_parts.append(f'    <object id="{obj_id}" name={quoteattr(name)}{material} type="model">')
        xml_parts.append("      <mesh>")

        xml_parts.append("        <vertices>")
        for v in vertices:
            xml_parts.append(f'          <vertex x="{_fmt(v.x)}" y="{_fmt(v.y)}" z="{_fmt(v.z)}"/>')
        xml_parts.append("        </vertices>")

        xml_parts.append("        <triangles>")
        for idx, (a, b, c) in enumerate(faces):
            if face_materials is not None:
                xml_parts.append(
                    f'          <triangle v1="{a}" v2="{b}" v3="{c}" '
                    f'pid="{MATERIALS_ID}" p1="{face_materials[idx]}"/>'
                )
            else:
                xml_parts.append(f'          <triangle v1="{a}" v2="{b}" v3="{c}"/>')
        xml_parts.append("        </triangles>")

        xml_parts.append("      </mesh>")
        xml_parts.append("    </object>")
