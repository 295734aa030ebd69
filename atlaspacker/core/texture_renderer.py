"""Texture composition using Pillow."""

from __future__ import annotations

import logging

from . import Bin
from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def render_texture(packed_bin: Bin) -> PixelBuffer:
    """Blit every frame's visible region into a blank canvas at its placed position."""

    canvas = PixelBuffer.blank(packed_bin.width, packed_bin.height)
    for rect in packed_bin.rects:
        for frame in rect.frames:
            box = frame.sprite_source_size
            frame.pixels.blit(canvas, box.x, box.y, box.w, box.h, rect.x, rect.y)
    logger.debug("Rendered %sx%s texture with %s rect(s)", packed_bin.width, packed_bin.height, len(packed_bin.rects))
    return canvas


def encode_texture(packed_bin: Bin) -> bytes:
    """Render a bin and encode it as PNG bytes."""

    return render_texture(packed_bin).encode("PNG")
