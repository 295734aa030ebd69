"""Bin layout via rectpack's MaxRects packer."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from rectpack import SORT_AREA, MaxRectsBssf, PackingBin, PackingMode, newPacker

from . import Bin, Frame, PlacedRect
from .errors import BinIndexError, PackingError
from ..utils import validators

logger = logging.getLogger(__name__)


def group_identical(frames: Iterable[Frame], skip_empty: bool = True) -> list[list[Frame]]:
    """Group frames sharing pixels, ordered by name so layouts are reproducible."""

    groups: dict[int, list[Frame]] = {}
    for frame in sorted(frames, key=lambda f: f.name):
        if skip_empty and frame.empty:
            continue
        groups.setdefault(frame.canonical_index, []).append(frame)
    return list(groups.values())


def pack_bins(
    groups: Sequence[list[Frame]],
    max_width: int = 2048,
    max_height: int = 2048,
    padding: int = 0,
) -> list[Bin]:
    """Place one rectangle per frame group into as many bins as needed.

    Every item and the bin capacity are grown by ``padding`` so neighbouring
    rectangles end up at least ``padding`` pixels apart. Reported bin sizes are
    the extent actually used.
    """

    validators.validate_bin_size(max_width, max_height)
    pad = max(0, padding)

    packer = newPacker(
        mode=PackingMode.Offline,
        bin_algo=PackingBin.BFF,
        pack_algo=MaxRectsBssf,
        sort_algo=SORT_AREA,
        rotation=False,
    )
    for rid, group in enumerate(groups):
        box = group[0].frame
        if box.w > max_width or box.h > max_height:
            raise PackingError(
                f"Frame {group[0].name} ({box.w}x{box.h}) does not fit a {max_width}x{max_height} bin"
            )
        packer.add_rect(box.w + pad, box.h + pad, rid=rid)
    packer.add_bin(max_width + pad, max_height + pad, count=float("inf"))
    packer.pack()

    bins: list[Bin] = []
    placed = 0
    for packed_bin in packer:
        rects = [
            PlacedRect(x=x, y=y, width=w - pad, height=h - pad, frames=groups[rid])
            for x, y, w, h, rid in packed_bin.rect_list()
        ]
        if not rects:
            continue
        placed += len(rects)
        width = max(rect.x + rect.width for rect in rects)
        height = max(rect.y + rect.height for rect in rects)
        bins.append(Bin(width=width, height=height, rects=rects))

    if placed != len(groups):
        raise PackingError(f"Only {placed} of {len(groups)} frame group(s) could be packed")

    logger.info("Packed %s frame group(s) into %s bin(s)", len(groups), len(bins))
    return bins


def select_bin(bins: Sequence[Bin], index: int) -> Bin:
    """Return ``bins[index]`` or raise BinIndexError."""

    if index < 0 or index >= len(bins):
        raise BinIndexError(index, len(bins))
    return bins[index]
