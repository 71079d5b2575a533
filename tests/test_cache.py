"""Tests for the in-memory list cache."""

from __future__ import annotations

from malstream.cache import ListCache
from malstream.models import ListEntry

_ENTRY = ListEntry(id=1, title="A", coverImage="https://x/a.jpg", status="READING", media="manga")
_KEY = ("alice", "READING", "manga")


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_disabled_by_default() -> None:
    cache = ListCache()
    cache.put(_KEY, [_ENTRY])
    assert cache.get(_KEY) is None
    assert len(cache) == 0


def test_hit_within_ttl() -> None:
    clock = _Clock()
    cache = ListCache(ttl=30, clock=clock)
    cache.put(_KEY, [_ENTRY])
    clock.now = 29
    assert cache.get(_KEY) == [_ENTRY]


def test_expires_after_ttl() -> None:
    clock = _Clock()
    cache = ListCache(ttl=30, clock=clock)
    cache.put(_KEY, [_ENTRY])
    clock.now = 31
    assert cache.get(_KEY) is None
    assert len(cache) == 0


def test_returned_list_is_a_copy() -> None:
    cache = ListCache(ttl=30)
    cache.put(_KEY, [_ENTRY])
    cache.get(_KEY).clear()  # type: ignore[union-attr]
    assert cache.get(_KEY) == [_ENTRY]
