from pathlib import Path

import pytest
from PIL import Image

from atlaspacker.core import Frame
from atlaspacker.core.cache_store import CacheStore
from atlaspacker.core.pixel_buffer import PixelBuffer

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def write_png(path: Path, size=(16, 16), color=RED, box=None) -> Path:
    """Write an RGBA PNG, filled with ``color`` or transparent except inside ``box``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new("RGBA", size, (0, 0, 0, 0) if box else color)
    if box:
        image.paste(color, box)
    image.save(path)
    return path


def make_frame(name: str, size=(8, 8), index: int = 0) -> Frame:
    return Frame.from_pixels(name, PixelBuffer.blank(*size), index=index)


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    root = tmp_path / "sprites"
    write_png(root / "hero.png", (16, 16), RED)
    write_png(root / "hero_copy.png", (16, 16), RED)
    write_png(root / "enemies" / "slime.png", (24, 12), BLUE)
    (root / "readme.txt").write_text("not an image", encoding="utf-8")
    return root


@pytest.fixture
def cache(tmp_path: Path) -> CacheStore:
    return CacheStore(tmp_path / "cache")
