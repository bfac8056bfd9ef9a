#!/usr/bin/env python3
"""Nikobus - Common constants & mocks for testing."""

from __future__ import annotations

from typing import Any, Final

from nikobus_tx import Command, OnOff
from nikobus_tx.exceptions import TransportError

ADDR: Final = "6C94"

# The learned checksums of the captured frames (as sent by a Nikobus PC-Logic)
CHECKSUMS: Final[dict[str, str]] = {
    "$10126C946CE5": "A0",  # request status, group 1
    "$10176C948715": "BB",  # request status, group 2
    "$1E156C94000000FF0000FF60E1": "49",  # update status, group 1
    "$1E166C940000000000FFFF9972": "95",  # update status, group 2
}

ITEMS: Final[list[dict[str, Any]]] = [
    {"name": "kitchen", "address": ADDR, "channel": 1},
    {"name": "hall", "address": ADDR, "channel": 2},
    {"name": "garage", "address": ADDR, "channel": 4},
    {"name": "porch", "address": ADDR, "channel": 9},
    {"name": "garden", "address": ADDR, "channel": 12},
]


class MockTransport:
    """A transport that records the commands sent, instead of sending them."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[Command] = []

    def send_command(self, cmd: Command) -> None:
        if self.fail:
            raise TransportError("Serial port is closed")
        self.sent.append(cmd)


class MockEventBus:
    """An event bus that records the updates posted to it."""

    def __init__(self) -> None:
        self.updates: list[tuple[str, OnOff]] = []

    def post_update(self, name: str, state: OnOff) -> None:
        self.updates.append((name, state))
