"""Sign project file load/save."""

from pathlib import Path

import structlog

from signcraft.domain import Sign
from signcraft.exceptions import InvalidProjectFileError
from signcraft.io._atomic import atomic_output

logger = structlog.get_logger(__name__)


def load_project(path: Path) -> Sign:
    """Load a sign project.

    Args:
        path: Project file

    Returns:
        Sign with invalid dimensions replaced by defaults

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidProjectFileError: If the file cannot be read or parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Project file not found: {path}")

    try:
        data = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidProjectFileError(str(path), str(e)) from e

    sign = Sign.from_json(data, source=str(path))
    logger.debug("Project loaded", path=str(path), font=sign.font_name)
    return sign


def save_project(sign: Sign, path: Path) -> Path:
    """Save a sign project.

    Args:
        sign: Project to save
        path: Destination file

    Returns:
        The written path

    Raises:
        FileWriteError: If the file cannot be written
    """
    path = Path(path)
    with atomic_output(path) as handle:
        handle.write(sign.to_json())
    logger.debug("Project saved", path=str(path))
    return path
