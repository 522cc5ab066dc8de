"""Font identity handed to outline providers."""

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path


class FontStyle(IntEnum):
    """Font style flags as stored in project files."""

    PLAIN = 0
    BOLD = 1
    ITALIC = 2
    BOLD_ITALIC = 3


@dataclass(frozen=True, slots=True)
class FontDescriptor:
    """Opaque font handle resolved by an outline provider.

    Attributes:
        name: Font name, or a path to a font file
        size: Font size in outline units per em
        style: Style flags (informational; no synthetic styling)
        path: Explicit font file, takes precedence over name
    """

    name: str
    size: float = 36.0
    style: int = FontStyle.PLAIN
    path: Path | None = None

    def resolve_path(self) -> Path:
        """Font file this descriptor points to.

        Returns:
            The explicit path, or the name interpreted as a path
        """
        if self.path is not None:
            return self.path
        return Path(self.name)
