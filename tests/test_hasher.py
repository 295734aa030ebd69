import itertools

import xxhash

from atlaspacker.core import Frame, PackerSettings, TrimMode
from atlaspacker.core.hasher import hash_frames, hash_settings
from atlaspacker.core.pixel_buffer import PixelBuffer

from conftest import make_frame


def test_hash_is_order_independent():
    frames = [make_frame(name, index=i) for i, name in enumerate(["b", "a", "c/d", "c"])]
    digests = {hash_frames(list(perm)) for perm in itertools.permutations(frames)}
    assert len(digests) == 1


def test_hash_is_fixed_width_hex_of_sorted_names():
    frames = [make_frame("walk/2"), make_frame("walk/1"), make_frame("idle")]
    digest = hash_frames(frames)
    assert digest == xxhash.xxh64(b"idle,walk/1,walk/2", seed=123).hexdigest()
    assert len(digest) == 16
    assert int(digest, 16) >= 0


def test_hash_does_not_reorder_callers_list():
    frames = [make_frame("z"), make_frame("a")]
    hash_frames(frames)
    assert [frame.name for frame in frames] == ["z", "a"]


def test_hash_changes_with_name_set():
    assert hash_frames([make_frame("a")]) != hash_frames([make_frame("a"), make_frame("b")])


def test_name_only_hash_ignores_pixel_changes():
    small = make_frame("hero", size=(8, 8))
    large = make_frame("hero", size=(9, 9))
    assert hash_frames([small]) == hash_frames([large])


def test_content_hash_detects_pixel_changes():
    small = make_frame("hero", size=(8, 8))
    large = make_frame("hero", size=(9, 9))
    same = Frame.from_pixels("hero", PixelBuffer.blank(8, 8), index=3)
    assert hash_frames([small], include_content=True) != hash_frames([large], include_content=True)
    assert hash_frames([small], include_content=True) == hash_frames([same], include_content=True)


def test_settings_hash_tracks_output_options(tmp_path):
    base = hash_settings(PackerSettings())
    assert base == hash_settings(PackerSettings())
    assert base == hash_settings(PackerSettings(cache_dir=tmp_path))
    assert base != hash_settings(PackerSettings(trim_mode=TrimMode.CROP))
    assert base != hash_settings(PackerSettings(padding=2))
    assert base != hash_settings(PackerSettings(alpha_threshold=10))
    assert base != hash_settings(PackerSettings(allow_trim=False))
