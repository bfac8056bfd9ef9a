#!/usr/bin/env python3
"""Nikobus - Test the checksum cache."""

import logging

import pytest

from nikobus_tx import ChecksumCache, Command
from nikobus_tx.exceptions import ChecksumUnavailable


def test_cache_get_put() -> None:
    cache = ChecksumCache.from_dict({"$10126C946CE5": "A0"})

    assert len(cache) == 1
    assert "$10126C946CE5" in cache
    assert list(cache) == ["$10126C946CE5"]

    assert cache.get("$10126C946CE5") == "A0"
    assert cache.get("$10176C948715") is None  # a miss is not an exception

    cache.put("$10176C948715", "BB")
    assert cache.get("$10176C948715") == "BB"
    assert len(cache) == 2

    with pytest.raises(ValueError):
        cache.put("$1E156C94000000FF0000FF60E1", "")


def test_cache_put_changed(caplog: pytest.LogCaptureFixture) -> None:
    cache = ChecksumCache.from_dict({"$10126C946CE5": "A0"})

    with caplog.at_level(logging.WARNING):
        cache.put("$10126C946CE5", "A0")
        assert not caplog.records

        cache.put("$10126C946CE5", "A1")
        assert len(caplog.records) == 1

    assert cache.get("$10126C946CE5") == "A1"


def test_cache_complete() -> None:
    cache = ChecksumCache.from_dict({"$10126C946CE5": "A0"})

    cmd = cache.complete(Command.get_switch_status("6C94", 1))
    assert cmd.frame == "$10126C946CE5A0"

    cmd = Command.get_switch_status("6C94", 2)
    with pytest.raises(ChecksumUnavailable) as err:
        cache.complete(cmd)

    assert "analyzer" in str(err.value)  # the hint
    assert not cmd.has_checksum
