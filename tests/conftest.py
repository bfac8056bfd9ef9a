#!/usr/bin/env python3
"""Nikobus - fixtures for testing."""

from __future__ import annotations

import pytest
from common import CHECKSUMS, ITEMS, MockEventBus, MockTransport

from nikobus import Gateway


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def event_bus() -> MockEventBus:
    return MockEventBus()


@pytest.fixture
def gwy(transport: MockTransport, event_bus: MockEventBus) -> Gateway:
    """Return a gateway with one (large) switch module, and all checksums known."""
    return Gateway(
        transport,
        event_bus,
        checksums=CHECKSUMS,
        items=ITEMS,
        config={"disable_polling": True},
    )


@pytest.fixture
def gwy_no_checksums(transport: MockTransport, event_bus: MockEventBus) -> Gateway:
    """Return a gateway with one (large) switch module, but an empty checksum cache."""
    return Gateway(transport, event_bus, items=ITEMS)
