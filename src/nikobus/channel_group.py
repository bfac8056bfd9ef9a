#!/usr/bin/env python3
"""Nikobus - a group of 6 channels of a switch module.

This can be used to represent either channels 1-4 of the compact switch module
(05-002-02), or channels 1-6 or 7-12 of the large switch module (05-000-02).

Example frames, for a module with address 6C94:

  Request status of 1st channel group:
    CMD:   $10126C946CE5A0
    ACK:   $0512
    REPLY: $1C6C9400000000FF0000557CF8

  Request status of 2nd channel group:
    CMD:   $10176C948715BB
    ACK:   $0517
    REPLY: $1C6C94000000FF0000FFCF4CC3

  Update status of 1st channel group:
    CMD:   $1E156C94000000FF0000FF60E149
    ACK:   $0515
    REPLY: $0EFF6C94009A

  Update status of 2nd channel group:
    CMD:   $1E166C940000000000FFFF997295
    ACK:   $0516
    REPLY: $0EFF6C94009A
"""

from __future__ import annotations

import logging
from datetime import datetime as dt
from typing import TYPE_CHECKING

from nikobus_tx import Command
from nikobus_tx.helpers import hex_to_state, is_valid_address

from . import exceptions as exc
from .channel import SwitchModuleChannel
from .const import (
    CHANNELS_PER_GROUP,
    STATUS_REQUEST_ACK,
    STATUS_REQUEST_GROUPS,
    STATUS_RESPONSE,
    STATUS_RESPONSE_OFFSET,
    OnOff,
    ResponseState,
    SendResult,
)
from .module import StateChange

if TYPE_CHECKING:
    from .gateway import Gateway


_LOGGER = logging.getLogger(__name__)


class SwitchModuleChannelGroup:
    """The channel group class (1-6, or 7-12) of a switch module.

    A status request is acknowledged before the module responds with its state, and
    the bus is shared by all modules, so a status response is processed only if the
    ACK that preceded it was for this group.
    """

    def __init__(self, gwy: Gateway, address: str, group: int = 1) -> None:
        if not is_valid_address(address):
            raise exc.ConfigError(f"Invalid module address: {address}")
        if group not in STATUS_REQUEST_GROUPS:
            raise exc.ConfigError(f"Invalid channel group: {group} (not 1 or 2)")

        self._gwy = gwy
        self._address = address
        self.group = group

        self._channels: list[SwitchModuleChannel | None] = [None] * CHANNELS_PER_GROUP

        self._ack_prefix = f"{STATUS_REQUEST_ACK}{STATUS_REQUEST_GROUPS[group]}"
        self._rsp_prefix = f"{STATUS_RESPONSE}{address}"

        self._response_state = ResponseState.IDLE
        self._last_updated: dt | None = None

    def __str__(self) -> str:
        states = "".join(
            "-" if c is None else ("1" if c.state == OnOff.ON else "0")
            for c in self._channels
        )
        return f"{self.name} ({states})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._address!r}, {self.group})"

    @property
    def address(self) -> str:
        return self._address

    @property
    def name(self) -> str:
        return f"{self._address}-{self.group}"

    @property
    def channels(self) -> tuple[SwitchModuleChannel | None, ...]:
        """Return the channels, by slot (an unbound slot is None)."""
        return tuple(self._channels)

    @property
    def response_state(self) -> ResponseState:
        return self._response_state

    @property
    def last_updated(self) -> dt | None:
        """Return the time of the last status response from the module."""
        return self._last_updated

    def add_channel(self, name: str, channel_num: int) -> SwitchModuleChannel | None:
        """Bind an item to a channel (1-12) of the module.

        Channels 7-12 are folded onto slots 1-6. Return None if the channel number is
        invalid (and don't bind the item).
        """

        _LOGGER.debug("%s: Adding channel %s (%s)", self.name, channel_num, name)

        if channel_num > CHANNELS_PER_GROUP:
            channel_num -= CHANNELS_PER_GROUP
        if not 1 <= channel_num <= CHANNELS_PER_GROUP:
            return None

        self._channels[channel_num - 1] = SwitchModuleChannel(name, self, channel_num)
        return self._channels[channel_num - 1]

    def _add_checksum(self, cmd: Command) -> Command | None:
        """Complete the command with its checksum from the cache.

        Return None if the checksum is not available: the command must not be sent.
        """

        _LOGGER.debug("Looking up checksum for command from cache: %s", cmd.base)

        try:
            return self._gwy.cache.complete(cmd)
        except exc.ChecksumUnavailable as err:
            _LOGGER.error("%s: %s", self.name, err)
            return None

    def get_status_request_command(self) -> Command | None:
        """Return the (complete) command to request the state of the channels."""

        return self._add_checksum(Command.get_switch_status(self._address, self.group))

    def get_status_update_command(self) -> Command | None:
        """Return the (complete) command to push the state of the channels."""

        return self._add_checksum(
            Command.set_switch_status(
                self._address,
                self.group,
                (c.state if c else None for c in self._channels),
            )
        )

    def publish_state(self, channel: SwitchModuleChannel) -> SendResult:
        """Push the state of all channels to the bus, after a channel has changed.

        The channel's new state is posted to the event bus straight away, without
        waiting for the module to confirm it.
        """

        _LOGGER.debug("%s: Publishing status to event bus and to the bus", self.name)

        self._gwy.post_update(channel.name, channel.state)

        if (cmd := self.get_status_update_command()) is None:
            return SendResult.SKIPPED
        return self._gwy.send_command(cmd)

    def process_frame(self, frame: str) -> list[StateChange]:
        """Process an inbound frame, and return the changes of state (if any).

        The group can only process status responses. These are sent by the module
        in response to a status request and contain the ON/OFF state of its channels.
        """

        if frame.startswith(STATUS_REQUEST_ACK):  # an ACK for *some* status request
            self._response_state = (
                ResponseState.AWAITING_SELF
                if frame.startswith(self._ack_prefix)
                else ResponseState.AWAITING_OTHER
            )
            return []

        if not frame.startswith(STATUS_RESPONSE):
            return []

        response_state, self._response_state = self._response_state, ResponseState.IDLE

        if (
            response_state != ResponseState.AWAITING_SELF
            or not frame.startswith(self._rsp_prefix)
        ):
            return []

        if len(frame) < STATUS_RESPONSE_OFFSET + CHANNELS_PER_GROUP * 2:
            _LOGGER.warning("%s: Status response is too short: %s", self.name, frame)
            return []

        _LOGGER.debug("%s: Processing status response: %s", self.name, frame)
        self._last_updated = dt.now()

        changes: list[StateChange] = []

        for i, channel in enumerate(self._channels):
            if channel is None:
                continue

            idx = STATUS_RESPONSE_OFFSET + i * 2
            state = hex_to_state(frame[idx : idx + 2])
            if state == channel.state:
                continue

            channel.state = state
            self._gwy.post_update(channel.name, state)
            changes.append(StateChange(channel.name, state))

        return changes
