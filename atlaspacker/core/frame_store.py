"""Asset discovery and pixel-level deduplication of frames."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from . import AssetSource, Frame, PackerSettings
from .pixel_buffer import PixelBuffer
from ..utils import file_tools, validators

logger = logging.getLogger(__name__)

FramePredicate = Callable[[str, Frame], bool]


class FrameStore:
    """Owns every loaded Frame, in load order.

    Frames whose pixels are byte-identical to an earlier frame share that
    frame's buffer and point at it through ``Frame.original``.
    """

    def __init__(self, settings: Optional[PackerSettings] = None):
        self.settings = settings or PackerSettings()
        self.frames: list[Frame] = []
        self._canonical: list[Frame] = []

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self):
        return iter(self.frames)

    def add_source(self, source: AssetSource) -> list[Frame]:
        """Load every frame under an asset source and return the new frames."""

        path = validators.validate_asset_path(Path(source.path))
        start = len(self.frames)
        prefix = source.name_prefix if path.is_dir() else source.prefix
        self.add_frames(path, prefix)
        added = self.frames[start:]
        logger.info("Loaded %s frame(s) from %s", len(added), path)
        return added

    def add_sources(self, sources: Iterable[AssetSource]) -> list[Frame]:
        added: list[Frame] = []
        for source in sources:
            added.extend(self.add_source(source))
        return added

    def add_frames(self, path: Path, name_prefix: Optional[str] = None) -> None:
        """Add frames from an image file or, recursively, from a folder."""

        path = Path(path)
        if path.is_dir():
            self._add_folder(path, name_prefix, set())
        elif validators.is_supported_image(path):
            self.add_frame(self._name_for(name_prefix, path.name), path)
        elif not path.exists():
            raise FileNotFoundError(path)
        else:
            logger.warning("%s not supported, skipping", path)

    def _add_folder(self, folder: Path, name_prefix: Optional[str], ancestors: set[Path]) -> None:
        real = folder.resolve()
        if real in ancestors:
            logger.warning("%s links back to %s, skipping", folder, real)
            return
        ancestors.add(real)
        for entry in file_tools.sorted_entries(folder):
            if entry.is_dir():
                self._add_folder(entry, _join(name_prefix, entry.name), ancestors)
            elif validators.is_supported_image(entry):
                self.add_frame(self._name_for(name_prefix, entry.name), entry)
            else:
                logger.warning("%s not supported, skipping", entry)
        ancestors.discard(real)

    def add_frame(self, name: str, path: Path) -> Frame:
        """Decode one image and store it, reusing the pixels of an identical frame."""

        pixels = PixelBuffer.open(Path(path))
        original = self.find_original(pixels)
        if original is not None:
            # Keep only the canonical buffer; the freshly decoded one is dropped.
            frame = Frame.from_pixels(name, original.pixels, index=len(self.frames), original=original.index)
            logger.debug("Frame %s duplicates %s", name, original.name)
        else:
            frame = Frame.from_pixels(name, pixels, index=len(self.frames))
            self._canonical.append(frame)
        self.frames.append(frame)
        return frame

    def find_original(self, pixels: PixelBuffer) -> Optional[Frame]:
        """Return the first canonical frame with byte-identical pixels, if any."""

        for candidate in self._canonical:
            if candidate.pixels == pixels:
                return candidate
        return None

    def canonical_frames(self) -> list[Frame]:
        return list(self._canonical)

    def duplicate_frames(self) -> list[Frame]:
        return [frame for frame in self.frames if frame.is_duplicate]

    def filter_frames(self, predicate: FramePredicate) -> list[Frame]:
        """Select frames for which ``predicate(name, frame)`` is true."""

        return [frame for frame in self.frames if predicate(frame.name, frame)]

    def _name_for(self, prefix: Optional[str], filename: str) -> str:
        parts = [prefix or "", filename] if self.settings.prepend_folder_name else [filename]
        return file_tools.frame_name(parts, self.settings.remove_file_extension)


def _join(prefix: Optional[str], name: str) -> str:
    return f"{prefix}/{name}" if prefix else name
