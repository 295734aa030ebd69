"""Command-line entry point for building texture atlases."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import PackerConfig, load_config, parse_config
from .core import AssetSource, TrimMode
from .core.errors import BinIndexError, ImageDecodeError, PackingError, ProcessingError, ValidationError
from .core.texture_packer import TexturePacker
from .utils import file_tools

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="atlaspacker",
        description="Pack a folder tree of images into texture atlases and a JSON descriptor.",
    )
    parser.add_argument("assets", type=Path, nargs="+", help="Image folders (or single images) to pack")
    parser.add_argument("-o", "--output", type=Path, default=Path("atlas"), help="Output folder (default: ./atlas)")
    parser.add_argument("--config", type=Path, help="JSON file with packer options")
    parser.add_argument("--padding", type=int, help="Pixels between packed frames")
    parser.add_argument("--no-trim", action="store_true", help="Pack frames at their full size")
    parser.add_argument(
        "--trim-mode",
        choices=[mode.value for mode in TrimMode],
        help="Keep the original canvas size (trim) or drop it (crop)",
    )
    parser.add_argument("--alpha-threshold", type=int, help="Alpha at or below which pixels are trimmed")
    parser.add_argument("--remove-extension", action="store_true", help="Strip file extensions from frame names")
    parser.add_argument("--no-folder-prefix", action="store_true", help="Do not prefix frame names with folders")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load and pack frames, report the layout, write nothing",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> PackerConfig:
    """Merge command-line overrides on top of the optional config file."""

    config = load_config(args.config) if args.config else PackerConfig()
    overrides: dict[str, object] = {}
    if args.padding is not None:
        overrides["padding"] = args.padding
    if args.no_trim:
        overrides["allow_trim"] = False
    if args.trim_mode:
        overrides["trim_mode"] = args.trim_mode
    if args.alpha_threshold is not None:
        overrides["alpha_threshold"] = args.alpha_threshold
    if args.remove_extension:
        overrides["remove_file_extension"] = True
    if args.no_folder_prefix:
        overrides["prepend_folder_name"] = False
    if not overrides:
        return config
    merged = config.model_dump()
    merged.update(overrides)
    return parse_config(merged)


def run(args: argparse.Namespace) -> int:
    settings = resolve_config(args).to_settings()
    packer = TexturePacker([AssetSource(path) for path in args.assets], settings).init()
    frames = packer.frames
    result = packer.pack(frames)
    count = packer.texture_count(frames)

    for index, packed_bin in enumerate(result.bins):
        logger.info(
            "Texture %s: %sx%s, %s frame(s)",
            index,
            packed_bin.width,
            packed_bin.height,
            sum(len(rect.frames) for rect in packed_bin.rects),
        )
    if args.dry_run:
        return 0

    output_dir = file_tools.ensure_directory(args.output)
    (output_dir / "atlas.json").write_bytes(packer.read_json(frames))
    for index in range(count):
        (output_dir / f"{index}.png").write_bytes(packer.read_texture(frames, index))
    logger.info("Wrote %s texture(s) to %s", count, output_dir)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return run(args)
    except (ImageDecodeError, ValidationError, PackingError, BinIndexError, ProcessingError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
