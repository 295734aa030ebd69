"""Filesystem helpers."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> Path:
    """Create a directory if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)
    return path


def sorted_entries(root: Path) -> list[Path]:
    """Return the entries of a directory in a stable, name-sorted order."""

    return sorted(root.iterdir(), key=lambda p: p.name)


def frame_name(parts: list[str], remove_extension: bool) -> str:
    """Join name components with '/' and optionally drop the file extension."""

    name = "/".join(part for part in parts if part)
    if remove_extension:
        head, sep, tail = name.rpartition("/")
        stem = Path(tail).stem
        name = f"{head}{sep}{stem}"
    return name


def atomic_write_bytes(path: Path, data: bytes) -> Path:
    """Write bytes to a sibling temp file, then rename it over ``path``."""

    ensure_directory(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path
