#!/usr/bin/env python3
"""Nikobus - the gateway (i.e. the PC-Link / PC-Logic serial interface)."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

from nikobus_tx import FRAME_LOGGER, ChecksumCache, set_frame_logging

from . import exceptions as exc
from .channel_group import SwitchModuleChannelGroup
from .const import (
    CHANNELS_PER_GROUP,
    MAX_CHANNELS,
    SZ_CONFIG,
    SZ_DISABLE_POLLING,
    SZ_ITEMS,
    OnOff,
    SendResult,
)
from .dispatcher import process_frame
from .schemas import SCH_GLOBAL_CONFIG, SZ_CHECKSUMS, SZ_FRAME_LOG, load_items

if TYPE_CHECKING:
    from nikobus_tx import Command, NikobusEventBusT, NikobusTransportT

    from .channel import SwitchModuleChannel
    from .module import NikobusModule, StateChange

_LOGGER = logging.getLogger(__name__)


class Gateway:
    """The gateway class.

    Owns the checksum cache and the modules, and links them to the (external) serial
    transport and home-automation event bus.
    """

    def __init__(
        self,
        transport: NikobusTransportT,
        event_bus: NikobusEventBusT,
        loop: asyncio.AbstractEventLoop | None = None,
        **kwargs: Any,
    ) -> None:
        if kwargs.pop("debug_mode", None):
            _LOGGER.setLevel(logging.DEBUG)

        config: dict[str, Any] = SCH_GLOBAL_CONFIG(kwargs)

        self._transport = transport
        self._event_bus = event_bus
        self._loop = loop

        self.config = SimpleNamespace(**config[SZ_CONFIG])
        self.cache = ChecksumCache.from_dict(config[SZ_CHECKSUMS])

        self.modules: list[NikobusModule] = []
        self.module_by_name: dict[str, NikobusModule] = {}
        self._channel_by_name: dict[str, SwitchModuleChannel] = {}

        self._poller: asyncio.Task[None] | None = None

        if config[SZ_FRAME_LOG]:
            set_frame_logging(FRAME_LOGGER, **config[SZ_FRAME_LOG])

        load_items(self, config[SZ_ITEMS])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(modules={len(self.modules)})"

    async def start(self) -> None:
        """Start polling the modules for their status (unless disabled)."""

        if self.config.disable_polling:
            _LOGGER.warning(f"{SZ_DISABLE_POLLING}=True: the modules won't be polled")
            return

        loop = self._loop or asyncio.get_running_loop()
        self._poller = loop.create_task(self._poll_modules())

    async def stop(self) -> None:
        """Stop polling the modules."""

        if (task := self._poller) and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._poller = None

    async def _poll_modules(self) -> None:
        """Request the status of each module, every refresh_interval seconds.

        The transport is responsible for having only one request in flight at a time.
        """

        _LOGGER.debug(
            "Polling %s modules every %s secs",
            len(self.modules),
            self.config.refresh_interval,
        )

        while True:
            for module in list(self.modules):
                try:
                    self.request_status(module)
                except Exception as err:  # a faulty module must not stop the poller
                    _LOGGER.exception(
                        "%s: Error requesting status: %s", module.name, err
                    )
            await asyncio.sleep(self.config.refresh_interval)

    def add_module(self, module: NikobusModule) -> NikobusModule:
        """Register a module, so that it receives all inbound frames."""

        if module.name in self.module_by_name:
            raise exc.ConfigError(f"Module is already registered: {module.name}")

        self.modules.append(module)
        self.module_by_name[module.name] = module
        return module

    def get_module(self, name: str) -> NikobusModule:
        """Return the module with that name (e.g. 6C94-1)."""

        try:
            return self.module_by_name[name]
        except KeyError:
            raise exc.ModuleNotFound(f"There is no module: {name}") from None

    def get_channel_group(self, address: str, group: int) -> SwitchModuleChannelGroup:
        """Return the channel group of a switch module, creating it if required."""

        module = self.module_by_name.get(f"{address}-{group}")
        if module is None:
            module = self.add_module(SwitchModuleChannelGroup(self, address, group))

        if not isinstance(module, SwitchModuleChannelGroup):
            raise exc.ConfigError(f"Module is not a switch module: {module.name}")
        return module

    def add_item(
        self, name: str, address: str, channel_num: int
    ) -> SwitchModuleChannel | None:
        """Bind an item to a channel (1-12) of a switch module.

        Return None if the channel number is invalid (and don't bind the item). Raise a
        ConfigError if either the item or the channel is already bound.
        """

        if name in self._channel_by_name:
            raise exc.ConfigError(f"Item is already bound to a channel: {name}")

        if not 1 <= channel_num <= MAX_CHANNELS:
            _LOGGER.warning(
                "Item %s not bound: invalid channel for %s: %s",
                name,
                address,
                channel_num,
            )
            return None

        group, slot = divmod(channel_num - 1, CHANNELS_PER_GROUP)
        grp = self.get_channel_group(address, group + 1)

        if bound := grp.channels[slot]:
            raise exc.ConfigError(
                f"Channel {channel_num} of {address} is already bound to: {bound.name}"
            )

        channel = grp.add_channel(name, channel_num)

        if channel is not None:
            self._channel_by_name[name] = channel
        return channel

    def get_channel(self, name: str) -> SwitchModuleChannel:
        """Return the channel that is bound to the named item."""

        try:
            return self._channel_by_name[name]
        except KeyError:
            raise exc.ChannelNotFound(f"There is no item: {name}") from None

    def handle_item_command(self, name: str, state: OnOff | str) -> SendResult:
        """Set the state of an item's channel, as commanded via the event bus."""

        return self.get_channel(name).set_state(OnOff(state))

    def request_status(self, module: NikobusModule) -> SendResult:
        """Request the status of a module.

        The response (if any) will arrive via process_frame().
        """

        if (cmd := module.get_status_request_command()) is None:
            return SendResult.SKIPPED
        return self.send_command(cmd)

    def send_command(self, cmd: Command) -> SendResult:
        """Send a command via the transport.

        Errors are logged, and not raised: a failed send must not crash the caller.
        """

        FRAME_LOGGER.info(cmd.frame, extra={"comment": "Tx"})

        try:
            self._transport.send_command(cmd)
        except Exception as err:  # the transport is external
            _LOGGER.error("%r < Error sending command: %s", cmd, err, exc_info=err)
            return SendResult.FAILED
        return SendResult.SENT

    def post_update(self, name: str, state: OnOff) -> None:
        """Post the state of an item to the event bus."""

        _LOGGER.debug("Posting update to event bus: %s = %s", name, state)

        try:
            self._event_bus.post_update(name, state)
        except Exception as err:  # the event bus is external
            _LOGGER.error("Error posting update for %s: %s", name, err, exc_info=err)

    def process_frame(self, frame: str) -> list[StateChange]:
        """Process an inbound frame (from the transport)."""

        return process_frame(self, frame)
