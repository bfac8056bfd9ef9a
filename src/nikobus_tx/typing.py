#!/usr/bin/env python3
"""Nikobus - Typing for the Transport & the EventBus (external collaborators)."""

from __future__ import annotations

from typing import Protocol

from .command import Command
from .const import OnOff


class NikobusTransportT(Protocol):
    """A typing.Protocol (i.e. a structural type) of the serial transport.

    The transport delivers complete frames, one at a time. If the command has an
    expected response, it waits up to the command's timeout for a matching frame.
    """

    def send_command(self, cmd: Command) -> None:
        """Put the command on the bus (may raise an exception)."""
        ...


class NikobusEventBusT(Protocol):
    """A typing.Protocol (i.e. a structural type) of the home-automation event bus."""

    def post_update(self, name: str, state: OnOff) -> None:
        """Post the (new) state of the named item."""
        ...
