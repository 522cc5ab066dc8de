"""Sign project model and its JSON representation.

A Sign captures everything needed to regenerate a model: the text, the
font identity, the alignment and the four dimensions. The JSON layout is
fixed so project files stay byte-for-byte stable across save/load cycles::

    {
        "text": "HELLO\\nWORLD",
        "fontName": "Arial",
        "fontSize": 36,
        "fontStyle": 1,
        "alignment": "LEFT",
        "baseHeight": 2.000000,
        "baseMargin": 5.000000,
        "letterHeight": 5.000000,
        "bevelHeight": 0.500000
    }
"""

import json
from dataclasses import dataclass
from typing import Any

import structlog

from signcraft.config.settings import SignDimensions, TextAlign
from signcraft.domain.font import FontDescriptor, FontStyle
from signcraft.exceptions import InvalidProjectFileError

logger = structlog.get_logger(__name__)

DEFAULT_TEXT = "HELLO\nWORLD"
DEFAULT_FONT_NAME = "Arial"
DEFAULT_FONT_SIZE = 36
DEFAULT_FONT_STYLE = FontStyle.BOLD


@dataclass(frozen=True)
class Sign:
    """A saved sign project.

    Dimensions are not cross-checked here; a project may be stored with a
    bevel taller than its letters and is only rejected when turned into
    SignDimensions for generation.

    Attributes:
        text: Sign text, lines separated by newlines
        font_name: Font name or font file path
        font_size: Font size
        font_style: Style flags (see FontStyle)
        alignment: Line alignment
        base_height: Plate thickness in mm
        base_margin: Plate margin in mm
        letter_height: Letter height above the plate in mm
        bevel_height: Bevel band height in mm
    """

    text: str = DEFAULT_TEXT
    font_name: str = DEFAULT_FONT_NAME
    font_size: int = DEFAULT_FONT_SIZE
    font_style: int = DEFAULT_FONT_STYLE
    alignment: TextAlign = TextAlign.LEFT
    base_height: float = 2.0
    base_margin: float = 5.0
    letter_height: float = 5.0
    bevel_height: float = 0.5

    def to_json(self) -> str:
        """Serialize to the project file layout.

        Returns:
            JSON text without a trailing newline
        """
        fields = [
            f'"text": {json.dumps(self.text, ensure_ascii=False)}',
            f'"fontName": {json.dumps(self.font_name, ensure_ascii=False)}',
            f'"fontSize": {int(self.font_size)}',
            f'"fontStyle": {int(self.font_style)}',
            f'"alignment": {json.dumps(self.alignment.value)}',
            f'"baseHeight": {self.base_height:.6f}',
            f'"baseMargin": {self.base_margin:.6f}',
            f'"letterHeight": {self.letter_height:.6f}',
            f'"bevelHeight": {self.bevel_height:.6f}',
        ]
        body = ",\n".join(f"    {entry}" for entry in fields)
        return "{\n" + body + "\n}"

    @classmethod
    def from_json(cls, data: str, source: str = "<string>") -> "Sign":
        """Parse a project document.

        Zero, negative, missing or non-numeric sizes and dimensions are
        replaced with defaults and a warning is logged.

        Args:
            data: JSON text
            source: Name of the document for error messages

        Returns:
            Sign instance

        Raises:
            InvalidProjectFileError: If the JSON is malformed or lacks text/fontName
        """
        try:
            raw = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidProjectFileError(source, f"malformed JSON ({e.msg})") from e

        if not isinstance(raw, dict):
            raise InvalidProjectFileError(source, "expected a JSON object")

        for key in ("text", "fontName"):
            if not isinstance(raw.get(key), str):
                raise InvalidProjectFileError(source, f"missing or invalid '{key}'")

        defaults = cls()
        return cls(
            text=raw["text"],
            font_name=raw["fontName"],
            font_size=int(_positive(raw, "fontSize", defaults.font_size, source)),
            font_style=_style(raw, source),
            alignment=_alignment(raw, source),
            base_height=_positive(raw, "baseHeight", defaults.base_height, source),
            base_margin=_positive(raw, "baseMargin", defaults.base_margin, source),
            letter_height=_positive(raw, "letterHeight", defaults.letter_height, source),
            bevel_height=_positive(raw, "bevelHeight", defaults.bevel_height, source),
        )

    def dimensions(self) -> SignDimensions:
        """Validated dimensions for generation.

        Raises:
            pydantic.ValidationError: If the bevel does not fit the letters
        """
        return SignDimensions(
            base_height=self.base_height,
            base_margin=self.base_margin,
            letter_height=self.letter_height,
            bevel_height=self.bevel_height,
        )

    def font(self) -> FontDescriptor:
        return FontDescriptor(name=self.font_name, size=self.font_size, style=self.font_style)


def _positive(raw: dict[str, Any], key: str, default: float, source: str) -> float:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        logger.warning(
            "Invalid project value replaced with default",
            source=source,
            field=key,
            value=value,
            default=default,
        )
        return default
    return float(value)


def _style(raw: dict[str, Any], source: str) -> int:
    value = raw.get("fontStyle", DEFAULT_FONT_STYLE)
    if isinstance(value, bool) or not isinstance(value, int) or value not in FontStyle._value2member_map_:
        logger.warning(
            "Invalid project value replaced with default",
            source=source,
            field="fontStyle",
            value=value,
            default=int(DEFAULT_FONT_STYLE),
        )
        return int(DEFAULT_FONT_STYLE)
    return value


def _alignment(raw: dict[str, Any], source: str) -> TextAlign:
    value = raw.get("alignment", TextAlign.LEFT.value)
    try:
        return TextAlign(str(value).upper())
    except ValueError:
        logger.warning(
            "Invalid project value replaced with default",
            source=source,
            field="alignment",
            value=value,
            default=TextAlign.LEFT.value,
        )
        return TextAlign.LEFT
