"""Domain-specific exceptions for the atlas packer."""

from pathlib import Path


class ImageDecodeError(ValueError):
    """Raised when an image file is missing, malformed or unreadable."""

    def __init__(self, path: Path, reason: str | None = None):
        message = f"Invalid image file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path
        self.reason = reason


class ValidationError(ValueError):
    """Raised when user-provided settings fail validation."""


class BinIndexError(IndexError):
    """Raised when a texture is requested for a bin that was never packed."""

    def __init__(self, index: int, bin_count: int):
        super().__init__(f"Texture index {index} is out of range ({bin_count} bin(s) packed)")
        self.index = index
        self.bin_count = bin_count


class PackingError(RuntimeError):
    """Raised when frames cannot be laid out in the configured bin size."""


class ProcessingError(RuntimeError):
    """Raised when the pipeline is used out of order."""
