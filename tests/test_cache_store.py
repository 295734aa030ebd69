import pytest

from atlaspacker.core.cache_store import CacheStore, process_cache_dir


def test_paths_are_derived_from_key(cache):
    assert cache.metadata_path("abc").name == "abc.json"
    assert cache.texture_path("abc", 2).name == "abc-2.png"
    assert cache.metadata_path("abc").parent == cache.root


def test_miss_generates_and_persists_then_hit_reuses(cache):
    calls = []

    def generator():
        calls.append(1)
        return b"payload"

    path = cache.metadata_path("k")
    assert cache.get_or_generate(path, generator) == b"payload"
    assert path.read_bytes() == b"payload"
    assert cache.get_or_generate(path, generator) == b"payload"
    assert len(calls) == 1


def test_hit_returns_stored_bytes_unchanged(cache):
    path = cache.texture_path("k", 0)
    path.write_bytes(b"stored")
    assert cache.get_or_generate(path, lambda: b"fresh") == b"stored"


def test_write_failure_propagates_and_leaves_no_temp_file(cache):
    path = cache.metadata_path("k")
    path.mkdir()
    calls = []

    def generator():
        calls.append(1)
        return b"x"

    with pytest.raises(OSError):
        cache.get_or_generate(path, generator)
    assert calls == [1]
    assert not list(cache.root.glob(".k.json.*"))


def test_clear_removes_artifacts(cache):
    cache.get_or_generate(cache.metadata_path("a"), lambda: b"{}")
    cache.get_or_generate(cache.texture_path("a", 0), lambda: b"png")
    assert cache.clear() == 2
    assert not cache.metadata_path("a").exists()


def test_default_root_is_one_process_temp_dir():
    first = CacheStore()
    second = CacheStore()
    assert first.root == second.root == process_cache_dir()
    assert first.root.is_dir()
