"""Configuration settings for Signcraft."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class TextAlign(str, Enum):
    """Horizontal alignment of stacked text lines."""

    LEFT = "LEFT"
    CENTER = "CENTER"
    RIGHT = "RIGHT"


class OutputFormat(str, Enum):
    """Supported mesh output formats."""

    STL = "stl"
    THREEMF = "3mf"

    @property
    def extension(self) -> str:
        """File extension including the leading dot."""
        return f".{self.value}"

    @classmethod
    def from_path(cls, path: Path) -> "OutputFormat | None":
        """Guess the output format from a file suffix.

        Args:
            path: Output file path

        Returns:
            Matching format, or None if the suffix is not recognized
        """
        suffix = path.suffix.lower().lstrip(".")
        for fmt in cls:
            if fmt.value == suffix:
                return fmt
        return None


class BevelStyle(str, Enum):
    """How the bevel ring is offset from the letter outline."""

    MITER = "miter"
    RADIAL = "radial"


class SignDimensions(BaseModel):
    """Physical dimensions of the sign in millimeters."""

    base_height: float = Field(
        default=2.0,
        gt=0.0,
        description="Thickness of the base plate",
    )
    base_margin: float = Field(
        default=5.0,
        gt=0.0,
        description="Plate margin around the text bounds",
    )
    letter_height: float = Field(
        default=5.0,
        gt=0.0,
        description="Height of the letters above the plate",
    )
    bevel_height: float = Field(
        default=0.5,
        ge=0.0,
        description="Height of the chamfered band at the top of each letter",
    )

    @model_validator(mode="after")
    def _check_bevel_fits(self) -> "SignDimensions":
        if self.bevel_height >= self.letter_height:
            raise ValueError(
                f"bevel_height ({self.bevel_height}) must be smaller than "
                f"letter_height ({self.letter_height})"
            )
        return self

    @property
    def z_base(self) -> float:
        """Z of the letters' bottom face (plate top)."""
        return self.base_height

    @property
    def z_top(self) -> float:
        """Z where the straight wall ends and the bevel starts."""
        return self.base_height + self.letter_height - self.bevel_height

    @property
    def z_bevel(self) -> float:
        """Z of the letters' top face."""
        return self.base_height + self.letter_height


class GeometryConfig(BaseModel):
    """Tolerances and constants for the outline-to-mesh pipeline.

    Values marked as outline units apply to the flattened glyph outlines
    before the scale factor converts them to millimeters.
    """

    scale_factor: float = Field(
        default=0.5,
        gt=0.0,
        description="Millimeters per outline unit",
    )
    flatten_tolerance: float = Field(
        default=0.5,
        gt=0.0,
        le=10.0,
        description="Bezier flattening tolerance (outline units)",
    )
    point_epsilon: float = Field(
        default=0.001,
        gt=0.0,
        description="Minimum distance between consecutive extracted points (outline units)",
    )
    dedup_tolerance: float = Field(
        default=0.01,
        gt=0.0,
        description="Near-duplicate tolerance for ring cleaning (outline units)",
    )
    weld_epsilon: float = Field(
        default=1e-6,
        gt=0.0,
        le=1e-3,
        description="Vertex welding distance for indexed output (mm)",
    )
    bevel_inset_ratio: float = Field(
        default=0.7,
        ge=0.0,
        le=5.0,
        description="Bevel inset as a multiple of bevel height",
    )
    bevel_style: BevelStyle = Field(
        default=BevelStyle.MITER,
        description="Bevel offset technique",
    )
    miter_limit: float = Field(
        default=4.0,
        ge=1.0,
        description="Maximum miter length as a multiple of the inset",
    )
    degenerate_epsilon: float = Field(
        default=0.001,
        gt=0.0,
        description="Distance below which an offset direction is undefined (mm)",
    )
    line_gap: float = Field(
        default=10.0,
        ge=0.0,
        description="Vertical gap between stacked text lines (outline units)",
    )

    def model_tolerance(self) -> float:
        """Get the ring cleaning tolerance in millimeters."""
        return self.dedup_tolerance * self.scale_factor

    def bevel_inset(self, dimensions: SignDimensions) -> float:
        """Get the horizontal bevel inset for the given dimensions (mm)."""
        return dimensions.bevel_height * self.bevel_inset_ratio


class ExportConfig(BaseModel):
    """Configuration for mesh export."""

    output_format: OutputFormat = Field(
        default=OutputFormat.STL,
        description="Output format when the path suffix does not decide",
    )
    solid_name: str = Field(
        default="sign",
        min_length=1,
        description="Solid name written to STL files",
    )
    multi_part: bool = Field(
        default=False,
        description="Write one 3MF object per part instead of a single union",
    )
    colored: bool = Field(
        default=False,
        description="Assign 3MF base materials by height band",
    )
    base_color: str = Field(
        default="#FFFFFF",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Display color of the base plate",
    )
    body_color: str = Field(
        default="#1E3A8A",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Display color of the letter bodies",
    )
    front_color: str = Field(
        default="#F5C518",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Display color of the beveled letter faces",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SignSettings(BaseModel):
    """Main application settings."""

    dimensions: SignDimensions = Field(default_factory=SignDimensions)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    alignment: TextAlign = Field(
        default=TextAlign.LEFT,
        description="Default line alignment",
    )


def get_default_settings() -> SignSettings:
    """Get default application settings."""
    return SignSettings()
