"""Validation helpers for user inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..core import TrimMode
from ..core.errors import ValidationError


ALLOWED_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg"}


def is_supported_image(path: Path) -> bool:
    """Whether the file extension is one the packer can decode."""

    return path.suffix.lower() in ALLOWED_IMAGE_EXTENSIONS


def validate_asset_path(path: Path) -> Path:
    """Ensure an asset source exists before walking it."""

    if not path:
        raise ValidationError("No asset path provided")
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def parse_trim_mode(value: str | TrimMode | None) -> TrimMode:
    """Parse 'trim' or 'crop' (any case) into a TrimMode."""

    if value is None or value == "":
        return TrimMode.TRIM
    if isinstance(value, TrimMode):
        return value
    try:
        return TrimMode(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError("Trim mode must be 'trim' or 'crop'") from exc


def clamp_alpha_threshold(value: Optional[int]) -> int:
    """Clamp an alpha threshold into the 0..255 range."""

    if value is None:
        return 0
    return max(0, min(int(value), 255))


def validate_bin_size(width: int, height: int) -> None:
    """Ensure the maximum bin dimensions are positive."""

    if width <= 0 or height <= 0:
        raise ValidationError("Bin width and height must be greater than zero")
