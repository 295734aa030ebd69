"""Frame loading, packing and cached artifact generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from . import AssetSource, Bin, Frame, PackerSettings, PackResult
from . import hasher, manifest_writer, packing, texture_renderer, trimmer
from .cache_store import CacheStore, process_cache_dir
from .errors import ProcessingError
from .frame_store import FramePredicate, FrameStore

logger = logging.getLogger(__name__)


class TexturePacker:
    """Builds atlases for subsets of a fixed set of frames.

    ``init()`` loads and trims every frame once. Each ``pack()`` call is
    memoised in memory by the fingerprint of its frame subset, and generated
    artifacts are memoised on disk under the same fingerprint. Without an
    explicit ``cache`` the store lives in a folder named after the settings
    fingerprint, so packers with different options never read each other's
    artifacts.
    """

    def __init__(
        self,
        sources: Iterable[AssetSource],
        settings: Optional[PackerSettings] = None,
        cache: Optional[CacheStore] = None,
    ):
        self.sources = list(sources)
        self.settings = settings or PackerSettings()
        self.cache = cache or self._default_cache()
        self.store = FrameStore(self.settings)
        self._bins: dict[str, list[Bin]] = {}
        self._initialized = False

    def _default_cache(self) -> CacheStore:
        base = Path(self.settings.cache_dir) if self.settings.cache_dir is not None else process_cache_dir()
        return CacheStore(base / hasher.hash_settings(self.settings))

    @property
    def frames(self) -> list[Frame]:
        return self.store.frames

    def init(self) -> "TexturePacker":
        """Load every asset source and pre-trim the frames. Call once."""

        if self._initialized:
            raise ProcessingError("TexturePacker.init() must only be called once")
        self._initialized = True

        self.store.add_sources(self.sources)
        if self.settings.allow_trim:
            trimmer.trim(self.store.frames, self.settings.alpha_threshold, self.settings.empty_frame_policy)

        logger.info(
            "Loaded %s frame(s), %s unique",
            len(self.store.frames),
            len(self.store.canonical_frames()),
        )
        return self

    def filter_frames(self, predicate: FramePredicate) -> list[Frame]:
        return self.store.filter_frames(predicate)

    def get_bins_by_hash(self, key: str) -> Optional[list[Bin]]:
        return self._bins.get(key)

    def fingerprint(self, frames: Iterable[Frame]) -> str:
        return hasher.hash_frames(frames, include_content=self.settings.hash_includes_content)

    def pack(self, frames: Sequence[Frame]) -> PackResult:
        """Pack a frame subset, reusing bins already computed for the same subset."""

        key = self.fingerprint(frames)
        cached = self._bins.get(key)
        if cached is not None:
            logger.debug("Reusing packed bins for %s", key)
            return PackResult(hash=key, bins=cached)

        groups = packing.group_identical(frames)
        bins = packing.pack_bins(
            groups,
            max_width=self.settings.max_bin_width,
            max_height=self.settings.max_bin_height,
            padding=self.settings.padding,
        )
        self._bins[key] = bins
        return PackResult(hash=key, bins=bins)

    def _json_artifact(self, frames: Sequence[Frame]) -> tuple[Path, bytes]:
        result = self.pack(frames)
        path = self.cache.metadata_path(result.hash)
        data = self.cache.get_or_generate(
            path,
            lambda: manifest_writer.render_manifest(self.settings, result.bins).encode("utf-8"),
        )
        return path, data

    def _texture_artifact(self, frames: Sequence[Frame], texture_index: int) -> tuple[Path, bytes]:
        result = self.pack(frames)
        packed_bin = packing.select_bin(result.bins, texture_index)
        path = self.cache.texture_path(result.hash, texture_index)
        data = self.cache.get_or_generate(path, lambda: texture_renderer.encode_texture(packed_bin))
        return path, data

    def read_json(self, frames: Sequence[Frame]) -> bytes:
        """Metadata document bytes for a frame subset, served from cache when present."""

        return self._json_artifact(frames)[1]

    def read_texture(self, frames: Sequence[Frame], texture_index: int = 0) -> bytes:
        """PNG bytes of one bin for a frame subset, served from cache when present."""

        return self._texture_artifact(frames, texture_index)[1]

    def generate_json(self, frames: Sequence[Frame]) -> Path:
        """Path of the cached metadata document for a frame subset."""

        return self._json_artifact(frames)[0]

    def generate_texture(self, frames: Sequence[Frame], texture_index: int = 0) -> Path:
        """Path of the cached texture for one bin; raises BinIndexError for unknown bins."""

        return self._texture_artifact(frames, texture_index)[0]

    def texture_count(self, frames: Sequence[Frame]) -> int:
        return len(self.pack(frames).bins)
