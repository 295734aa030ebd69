"""Disk cache for generated atlas artifacts, keyed by frame fingerprint."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Callable, Optional

from ..utils import file_tools

logger = logging.getLogger(__name__)

_PROCESS_CACHE_DIR: Optional[Path] = None


def process_cache_dir() -> Path:
    """Temporary directory shared by every cache in this process, created once."""

    global _PROCESS_CACHE_DIR
    if _PROCESS_CACHE_DIR is None:
        _PROCESS_CACHE_DIR = Path(tempfile.mkdtemp(prefix="atlaspacker-"))
        logger.debug("Created artifact cache at %s", _PROCESS_CACHE_DIR)
    return _PROCESS_CACHE_DIR


class CacheStore:
    """Check-then-generate-then-persist store for metadata and texture artifacts.

    There is no locking: two callers missing on the same key both generate and
    both write. That is only correct while generation for a key is idempotent.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = file_tools.ensure_directory(Path(root)) if root is not None else process_cache_dir()

    def metadata_path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def texture_path(self, key: str, index: int) -> Path:
        return self.root / f"{key}-{index}.png"

    def get_or_generate(self, path: Path, generator: Callable[[], bytes]) -> bytes:
        """Return the bytes stored at ``path``, generating and persisting them on a miss."""

        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.debug("Cache miss for %s (%s)", path.name, exc.__class__.__name__)
        else:
            logger.debug("Cache hit for %s", path.name)
            return data

        data = generator()
        file_tools.atomic_write_bytes(path, data)
        logger.info("Wrote %s", path)
        return data

    def clear(self) -> int:
        """Delete every stored artifact and return how many were removed."""

        removed = 0
        for path in self.root.iterdir():
            if path.is_file() and path.suffix in (".json", ".png"):
                path.unlink()
                removed += 1
        return removed
