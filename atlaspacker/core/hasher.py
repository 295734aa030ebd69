"""Order-independent fingerprints over frame sets, used as cache keys."""

from __future__ import annotations

from typing import Iterable

import xxhash

from . import EmptyFramePolicy, Frame, PackerSettings, TrimMode

HASH_SEED = 123
SEPARATOR = ","


def hash_frames(frames: Iterable[Frame], include_content: bool = False) -> str:
    """Fingerprint a set of frames by name.

    The result does not depend on input order and is stable across processes.
    Only names are hashed unless ``include_content`` is set, so an image edited
    in place keeps its old fingerprint and any cached artifact for it.
    """

    ordered = sorted(frames, key=lambda frame: frame.name)
    if include_content:
        parts = [f"{frame.name}:{_pixel_digest(frame)}" for frame in ordered]
    else:
        parts = [frame.name for frame in ordered]
    return xxhash.xxh64(SEPARATOR.join(parts).encode("utf-8"), seed=HASH_SEED).hexdigest()


def _pixel_digest(frame: Frame) -> str:
    pixels = frame.pixels
    digest = xxhash.xxh64(seed=HASH_SEED)
    digest.update(f"{pixels.width}x{pixels.height}".encode("ascii"))
    digest.update(pixels.tobytes())
    return digest.hexdigest()


def hash_settings(settings: PackerSettings) -> str:
    """Fingerprint the options that change generated artifacts.

    ``cache_dir`` is left out since it only says where artifacts live.
    """

    parts = [
        f"padding={settings.padding}",
        f"allow_trim={settings.allow_trim}",
        f"trim_mode={TrimMode(settings.trim_mode).value}",
        f"alpha_threshold={settings.alpha_threshold}",
        f"remove_file_extension={settings.remove_file_extension}",
        f"prepend_folder_name={settings.prepend_folder_name}",
        f"max_bin={settings.max_bin_width}x{settings.max_bin_height}",
        f"empty_frame_policy={EmptyFramePolicy(settings.empty_frame_policy).value}",
        f"hash_includes_content={settings.hash_includes_content}",
    ]
    return xxhash.xxh64(SEPARATOR.join(parts).encode("utf-8"), seed=HASH_SEED).hexdigest()
