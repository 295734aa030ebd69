"""RGBA pixel buffers backed by Pillow."""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ImageDecodeError


class PixelBuffer:
    """Decoded RGBA samples for one image.

    Buffers are treated as immutable once created: frames that share a buffer
    rely on it never changing.
    """

    __slots__ = ("_image", "_data")

    def __init__(self, image: Image.Image):
        self._image = image if image.mode == "RGBA" else image.convert("RGBA")
        self._data: bytes | None = None

    @classmethod
    def open(cls, path: Path) -> "PixelBuffer":
        """Decode an image file into an RGBA buffer."""

        try:
            with Image.open(path) as image:
                image.load()
                return cls(image.convert("RGBA"))
        except (FileNotFoundError, PermissionError, IsADirectoryError):
            raise
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as exc:
            raise ImageDecodeError(path, reason=str(exc)) from exc

    @classmethod
    def blank(cls, width: int, height: int) -> "PixelBuffer":
        return cls(Image.new("RGBA", (width, height), (0, 0, 0, 0)))

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Image.Image:
        return self._image

    def tobytes(self) -> bytes:
        if self._data is None:
            self._data = self._image.tobytes()
        return self._data

    def alpha(self) -> np.ndarray:
        """Alpha channel as a (height, width) uint8 array."""

        return np.asarray(self._image.getchannel("A"), dtype=np.uint8)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        if self is other:
            return True
        return self.size == other.size and self.tobytes() == other.tobytes()

    __hash__ = object.__hash__

    def blit(self, target: "PixelBuffer", sx: int, sy: int, sw: int, sh: int, dx: int, dy: int) -> None:
        """Copy the (sx, sy, sw, sh) region of this buffer into ``target`` at (dx, dy).

        Samples are copied verbatim, not alpha-composited.
        """

        region = self._image.crop((sx, sy, sx + sw, sy + sh))
        target._image.paste(region, (dx, dy))
        target._data = None

    def encode(self, format: str = "PNG") -> bytes:
        buffer = io.BytesIO()
        self._image.save(buffer, format=format)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
