"""Tests for the in-memory access token blacklist."""

import pytest

from app.core.blacklist import InMemoryTokenBlacklist


def test_membership():
    blacklist = InMemoryTokenBlacklist()
    blacklist.add("token-a")

    assert blacklist.contains("token-a")
    assert "token-a" in blacklist
    assert not blacklist.contains("token-b")


def test_adding_twice_keeps_one_entry():
    blacklist = InMemoryTokenBlacklist()
    blacklist.add("token-a")
    blacklist.add("token-a")
    assert len(blacklist) == 1


def test_eviction_keeps_most_recent_entries():
    blacklist = InMemoryTokenBlacklist(max_size=10, keep=5)
    for i in range(11):
        blacklist.add(f"token-{i}")

    assert len(blacklist) == 5
    for i in range(6):
        assert not blacklist.contains(f"token-{i}")
    for i in range(6, 11):
        assert blacklist.contains(f"token-{i}")


def test_no_eviction_at_exact_limit():
    blacklist = InMemoryTokenBlacklist(max_size=10, keep=5)
    for i in range(10):
        blacklist.add(f"token-{i}")
    assert len(blacklist) == 10


def test_keep_cannot_exceed_max_size():
    with pytest.raises(ValueError):
        InMemoryTokenBlacklist(max_size=5, keep=10)
