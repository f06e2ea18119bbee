"""Tests for the bounded image status cache."""

from volleylive.cache.image_status import ImageStatusCache
from volleylive.models.enums import ImageStatus


def test_unknown_url_is_loading_and_empty_is_none():
    cache = ImageStatusCache(max_entries=2)
    assert cache.status("https://x/a.png") == ImageStatus.LOADING
    assert cache.status(None) == ImageStatus.NONE
    assert cache.status("") == ImageStatus.NONE


def test_records_outcomes():
    cache = ImageStatusCache(max_entries=4)
    cache.record("a", ok=True)
    cache.record("b", ok=False)
    assert cache.status("a") == ImageStatus.OK
    assert cache.status("b") == ImageStatus.FAIL


def test_evicts_least_recently_used():
    cache = ImageStatusCache(max_entries=2)
    cache.record("a", ok=True)
    cache.record("b", ok=True)
    cache.status("a")  # "b" is now the oldest
    cache.record("c", ok=False)
    assert len(cache) == 2
    assert cache.status("b") == ImageStatus.LOADING
    assert cache.status("a") == ImageStatus.OK
    assert cache.get_stats()["evictions"] == 1


def test_empty_url_is_not_recorded():
    cache = ImageStatusCache(max_entries=2)
    cache.record(None, ok=True)
    assert len(cache) == 0


def test_default_bound_comes_from_settings():
    assert ImageStatusCache().max_entries > 0
