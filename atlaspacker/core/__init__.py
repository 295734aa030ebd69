"""Core data model for texture atlas packing."""

__all__ = [
    "TrimMode",
    "EmptyFramePolicy",
    "PackerSettings",
    "AssetSource",
    "Size",
    "Rect",
    "Frame",
    "PlacedRect",
    "Bin",
    "PackResult",
]

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .pixel_buffer import PixelBuffer


class TrimMode(str, Enum):
    """How trimmed frames are described in the exported metadata.

    TRIM keeps the original canvas size: a 64x64 sprite trimmed to 32x28 is
    exported with a 32x28 frame and a 64x64 source size. CROP discards the
    original canvas so the source size becomes 32x28 as well.
    """

    TRIM = "trim"
    CROP = "crop"


class EmptyFramePolicy(str, Enum):
    """What to do with images that have no pixel above the alpha threshold."""

    UNTRIMMED = "untrimmed"
    EXCLUDE = "exclude"


@dataclass
class PackerSettings:
    """User-configurable settings used for atlas generation."""

    padding: int = 0
    allow_trim: bool = True
    trim_mode: TrimMode = TrimMode.TRIM
    alpha_threshold: int = 0
    remove_file_extension: bool = False
    prepend_folder_name: bool = True
    max_bin_width: int = 2048
    max_bin_height: int = 2048
    empty_frame_policy: EmptyFramePolicy = EmptyFramePolicy.UNTRIMMED
    hash_includes_content: bool = False
    cache_dir: Optional[Path] = None


@dataclass
class AssetSource:
    """A folder (or single image) to load frames from."""

    path: Path
    prefix: Optional[str] = None

    @property
    def name_prefix(self) -> str:
        return self.prefix if self.prefix is not None else Path(self.path).name


@dataclass
class Size:
    w: int
    h: int

    def to_dict(self) -> dict[str, int]:
        return {"w": self.w, "h": self.h}


@dataclass
class Rect:
    x: int
    y: int
    w: int
    h: int

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(eq=False)
class Frame:
    """One named image destined for the atlas.

    ``original`` is the store index of the canonical frame holding the same
    pixels, or ``None`` when this frame is itself canonical. Duplicates share
    the canonical frame's ``pixels`` object.
    """

    name: str
    pixels: "PixelBuffer"
    index: int
    original: Optional[int] = None
    trimmed: bool = False
    empty: bool = False
    source_size: Size = field(default_factory=lambda: Size(0, 0))
    sprite_source_size: Rect = field(default_factory=lambda: Rect(0, 0, 0, 0))
    frame: Rect = field(default_factory=lambda: Rect(0, 0, 0, 0))

    @classmethod
    def from_pixels(cls, name: str, pixels: "PixelBuffer", index: int, original: Optional[int] = None) -> "Frame":
        w, h = pixels.width, pixels.height
        return cls(
            name=name,
            pixels=pixels,
            index=index,
            original=original,
            source_size=Size(w, h),
            sprite_source_size=Rect(0, 0, w, h),
            frame=Rect(0, 0, w, h),
        )

    @property
    def is_duplicate(self) -> bool:
        return self.original is not None

    @property
    def canonical_index(self) -> int:
        return self.original if self.original is not None else self.index


@dataclass
class PlacedRect:
    """A rectangle placed in a bin, shared by a group of identical frames."""

    x: int
    y: int
    width: int
    height: int
    frames: list[Frame]


@dataclass
class Bin:
    """One packed texture sheet."""

    width: int
    height: int
    rects: list[PlacedRect] = field(default_factory=list)


@dataclass
class PackResult:
    """Fingerprint and bins produced by a pack run."""

    hash: str
    bins: list[Bin]
