"""Exception hierarchy for Signcraft."""


class SignError(Exception):
    """Base exception for all Signcraft errors."""

    pass


class EmptyInputError(SignError):
    """Text is blank or no line produced any outline."""

    def __init__(self, reason: str = "No valid text to generate") -> None:
        self.reason = reason
        super().__init__(reason)


class FontError(SignError):
    """Errors related to resolving fonts and glyph outlines."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested character has no glyph in the font."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"No glyph for character {char!r}")


class GeometryError(SignError):
    """Errors in geometric calculations."""

    pass


class TriangulationError(GeometryError):
    """Constrained triangulation could not handle a polygon."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Triangulation failed: {reason}")


class ExportError(SignError):
    """Errors related to writing output files."""

    pass


class FileWriteError(ExportError):
    """Error writing an output file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write '{path}': {reason}")


class ProjectFileError(SignError):
    """Errors related to sign project files."""

    pass


class InvalidProjectFileError(ProjectFileError):
    """Project file is malformed or misses required fields."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid project file '{path}': {reason}")
