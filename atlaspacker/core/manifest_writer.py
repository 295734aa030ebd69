"""Atlas metadata document rendering."""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from . import Bin, Frame, PackerSettings, TrimMode

logger = logging.getLogger(__name__)

TEXTURE_FORMAT = "RGBA8888"


def texture_image_name(index: int) -> str:
    return f"{index}.png"


def _frame_entry(frame: Frame, x: int, y: int, trim_mode: TrimMode) -> dict[str, Any]:
    packed = {"x": x, "y": y, "w": frame.frame.w, "h": frame.frame.h}
    if frame.trimmed and trim_mode is TrimMode.CROP:
        sprite = frame.sprite_source_size
        return {
            "filename": frame.name,
            "rotated": False,
            "trimmed": False,
            "sourceSize": {"w": sprite.w, "h": sprite.h},
            "spriteSourceSize": {"x": 0, "y": 0, "w": sprite.w, "h": sprite.h},
            "frame": packed,
        }
    return {
        "filename": frame.name,
        "rotated": False,
        "trimmed": frame.trimmed,
        "sourceSize": frame.source_size.to_dict(),
        "spriteSourceSize": frame.sprite_source_size.to_dict(),
        "frame": packed,
    }


def build_manifest(settings: PackerSettings, bins: Sequence[Bin]) -> dict[str, Any]:
    """Describe where every packed frame sits, one texture entry per bin."""

    trim_mode = TrimMode(settings.trim_mode)
    textures = []
    for index, packed_bin in enumerate(bins):
        frames_payload = [
            _frame_entry(frame, rect.x, rect.y, trim_mode)
            for rect in packed_bin.rects
            for frame in rect.frames
        ]
        textures.append(
            {
                "image": texture_image_name(index),
                "format": TEXTURE_FORMAT,
                "size": {"w": packed_bin.width, "h": packed_bin.height},
                "scale": 1,
                "frames": frames_payload,
            }
        )
    return {"textures": textures}


def render_manifest(settings: PackerSettings, bins: Sequence[Bin]) -> str:
    manifest = build_manifest(settings, bins)
    logger.debug("Rendered manifest for %s texture(s)", len(bins))
    return json.dumps(manifest, indent=2)
