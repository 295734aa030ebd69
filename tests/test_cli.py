import json
import logging

from atlaspacker import cli
from atlaspacker.core import TrimMode


def test_build_parser_creates_arguments(tmp_path):
    parser = cli.build_parser()
    args = parser.parse_args(["assets", "more", "-o", "out", "--padding", "3", "--trim-mode", "crop", "--dry-run"])
    assert [p.name for p in args.assets] == ["assets", "more"]
    assert args.output.name == "out"
    assert args.padding == 3
    assert args.trim_mode == "crop"
    assert args.dry_run is True


def test_resolve_config_applies_overrides(tmp_path):
    config_path = tmp_path / "packer.json"
    config_path.write_text(json.dumps({"padding": 1, "alphaThreshold": 5}), encoding="utf-8")
    args = cli.build_parser().parse_args(
        ["assets", "--config", str(config_path), "--padding", "4", "--trim-mode", "crop", "--no-folder-prefix"]
    )
    config = cli.resolve_config(args)
    assert config.padding == 4
    assert config.alpha_threshold == 5
    assert config.trim_mode is TrimMode.CROP
    assert config.prepend_folder_name is False


def test_main_dry_run_writes_nothing(asset_dir, tmp_path):
    out = tmp_path / "out"
    assert cli.main([str(asset_dir), "-o", str(out), "--dry-run"]) == 0
    assert not out.exists()


def test_main_writes_atlas(asset_dir, tmp_path):
    out = tmp_path / "out"
    assert cli.main([str(asset_dir), "-o", str(out), "--remove-extension"]) == 0
    manifest = json.loads((out / "atlas.json").read_text(encoding="utf-8"))
    names = {entry["filename"] for entry in manifest["textures"][0]["frames"]}
    assert names == {"sprites/enemies/slime", "sprites/hero", "sprites/hero_copy"}
    assert (out / manifest["textures"][0]["image"]).is_file()


def test_main_reports_missing_folder(tmp_path):
    assert cli.main([str(tmp_path / "missing"), "-o", str(tmp_path / "out")]) == 1


def test_main_reports_invalid_override(asset_dir, tmp_path, caplog):
    out = tmp_path / "out"
    with caplog.at_level(logging.ERROR):
        assert cli.main([str(asset_dir), "-o", str(out), "--padding", "-1"]) == 1
    assert any("padding" in message for message in caplog.messages)
    assert not out.exists()
