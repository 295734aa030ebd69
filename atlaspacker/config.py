"""Configuration loading and validation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator
from pydantic.alias_generators import to_camel

from .core import EmptyFramePolicy, PackerSettings, TrimMode
from .core.errors import ValidationError
from .utils import validators

logger = logging.getLogger(__name__)


class PackerConfig(BaseModel):
    """Packer options as written in a config file; camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    padding: int = Field(0, ge=0)
    allow_trim: bool = True
    trim_mode: TrimMode = TrimMode.TRIM
    alpha_threshold: int = 0
    remove_file_extension: bool = False
    prepend_folder_name: bool = True
    max_bin_width: int = Field(2048, ge=1)
    max_bin_height: int = Field(2048, ge=1)
    empty_frame_policy: EmptyFramePolicy = EmptyFramePolicy.UNTRIMMED
    hash_includes_content: bool = False
    cache_dir: Optional[Path] = None

    @field_validator("trim_mode", mode="before")
    @classmethod
    def _parse_trim_mode(cls, value):
        return validators.parse_trim_mode(value)

    @field_validator("empty_frame_policy", mode="before")
    @classmethod
    def _parse_empty_policy(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("alpha_threshold", mode="after")
    @classmethod
    def _clamp_alpha(cls, value):
        return validators.clamp_alpha_threshold(value)

    def to_settings(self) -> PackerSettings:
        return PackerSettings(**self.model_dump())


def parse_config(data: dict[str, Any]) -> PackerConfig:
    """Validate a raw options mapping."""

    try:
        return PackerConfig.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid packer configuration: {exc}") from exc


def load_config(path: Path) -> PackerConfig:
    """Read packer options from a JSON file."""

    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError(f"Config file {path} must contain a JSON object")
    config = parse_config(data)
    logger.debug("Loaded config from %s", path)
    return config
