"""Transparent border trimming."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from . import EmptyFramePolicy, Frame, Rect
from .pixel_buffer import PixelBuffer
from ..utils import validators

logger = logging.getLogger(__name__)


def content_bounds(pixels: PixelBuffer, alpha_threshold: int = 0) -> Optional[Rect]:
    """Smallest box holding every sample with alpha above the threshold.

    Returns ``None`` for a fully transparent buffer.
    """

    mask = pixels.alpha() > alpha_threshold
    rows = np.flatnonzero(mask.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(mask.any(axis=0))
    x0, x1 = int(cols[0]), int(cols[-1]) + 1
    y0, y1 = int(rows[0]), int(rows[-1]) + 1
    return Rect(x0, y0, x1 - x0, y1 - y0)


def trim(
    frames: Iterable[Frame],
    alpha_threshold: int = 0,
    empty_policy: EmptyFramePolicy = EmptyFramePolicy.UNTRIMMED,
) -> None:
    """Shrink each frame's packed box to its visible content, in place."""

    threshold = validators.clamp_alpha_threshold(alpha_threshold)
    empty_policy = EmptyFramePolicy(empty_policy)
    bounds_by_buffer: dict[int, Optional[Rect]] = {}
    trimmed = 0

    for frame in frames:
        key = id(frame.pixels)
        if key not in bounds_by_buffer:
            bounds_by_buffer[key] = content_bounds(frame.pixels, threshold)
        box = bounds_by_buffer[key]

        if box is None:
            if empty_policy is EmptyFramePolicy.EXCLUDE:
                frame.empty = True
                logger.debug("Frame %s is fully transparent, excluding", frame.name)
            continue

        if box.w == frame.source_size.w and box.h == frame.source_size.h:
            continue

        frame.trimmed = True
        frame.sprite_source_size = Rect(box.x, box.y, box.w, box.h)
        frame.frame = Rect(frame.frame.x, frame.frame.y, box.w, box.h)
        trimmed += 1

    logger.debug("Trimmed %s frame(s) at alpha threshold %s", trimmed, threshold)
