"""Atomic file output.

Output goes to a temporary file next to the destination and is renamed
over it only after everything was written, so a failed write never
leaves a truncated file behind.
"""

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any

from signcraft.exceptions import FileWriteError


@contextmanager
def atomic_output(path: Path, binary: bool = False) -> Iterator[IO[Any]]:
    """Open a temporary file that replaces ``path`` on successful exit.

    Args:
        path: Destination file
        binary: Open in binary mode instead of UTF-8 text mode

    Yields:
        Writable file object

    Raises:
        FileWriteError: If the temporary file cannot be created, written or renamed
    """
    path = Path(path)
    directory = path.parent

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    except OSError as e:
        raise FileWriteError(str(path), e.strerror or str(e)) from e

    tmp_path = Path(tmp_name)
    try:
        if binary:
            handle = os.fdopen(fd, "wb")
        else:
            handle = os.fdopen(fd, "w", encoding="utf-8", newline="\n")
        with handle:
            yield handle
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise FileWriteError(str(path), e.strerror or str(e)) from e
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
