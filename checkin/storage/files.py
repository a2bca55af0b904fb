from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..errors import WorkbookReadError, WorkbookWriteError

"""File read / save collaborators used by the check-in session.

``save_file`` writes to a temporary file in the destination directory and
moves it into place, so readers of the destination never see a partial file.
"""

__all__ = [
    "read_file",
    "save_file",
]


def read_file(path: Path) -> bytes:
    """Return the raw bytes of ``path``.

    Raises:
        WorkbookReadError: If the file does not exist or cannot be read
    """
    if not path.exists():
        raise WorkbookReadError(f"file not found: {path}")
    if not path.is_file():
        raise WorkbookReadError(f"path is not a file: {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise WorkbookReadError(f"failed to read file {path}: {e}") from e


def save_file(path: Path, data: bytes) -> Path:
    """Atomically replace ``path`` with ``data``.

    Raises:
        WorkbookWriteError: If the directory is missing or the write fails
    """
    directory = path.parent
    if not directory.is_dir():
        raise WorkbookWriteError(f"directory not found: {directory}")
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise WorkbookWriteError(f"failed to save {path}: {e}") from e
    return path
