#!/usr/bin/env python3
"""Nikobus - a single (switched) output of a switch module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .const import CHANNELS_PER_GROUP, OnOff

if TYPE_CHECKING:
    from nikobus_tx import SendResult

    from .channel_group import SwitchModuleChannelGroup


class SwitchModuleChannel:
    """A channel of a switch module, bound to an item of the event bus."""

    def __init__(self, name: str, group: SwitchModuleChannelGroup, idx: int) -> None:
        self.name = name
        self.idx = idx  # the slot within its group, 1-6

        self._group = group
        self.state: OnOff = OnOff.OFF

    def __str__(self) -> str:
        return f"{self.name} ({self._group.name}/{self.channel_num}): {self.state}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, {self._group!r}, {self.idx})"

    @property
    def address(self) -> str:
        return self._group.address

    @property
    def group(self) -> SwitchModuleChannelGroup:
        return self._group

    @property
    def channel_num(self) -> int:
        """Return the channel number of the module, 1-12."""
        return self.idx + CHANNELS_PER_GROUP * (self._group.group - 1)

    def set_state(self, state: OnOff) -> SendResult:
        """Set the state of the channel, and push the group's state to the bus."""

        self.state = OnOff(state)
        return self._group.publish_state(self)
