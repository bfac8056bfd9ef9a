#!/usr/bin/env python3
"""Nikobus - the capabilities of a module, as used by the dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nikobus_tx import Command, OnOff


class StateChange(NamedTuple):
    """A (changed) state of an item, as posted to the event bus."""

    name: str
    state: OnOff


@runtime_checkable
class NikobusModule(Protocol):
    """A typing.Protocol (i.e. a structural type) of any module on the bus.

    All modules receive all frames: each decides which frames are relevant to it.
    """

    @property
    def address(self) -> str: ...

    @property
    def name(self) -> str: ...

    def get_status_request_command(self) -> Command | None:
        """Return the command to request the module's status, if one can be built."""
        ...

    def process_frame(self, frame: str) -> list[StateChange]:
        """Process an inbound frame, and return any changes of state."""
        ...
