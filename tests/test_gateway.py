#!/usr/bin/env python3
"""Nikobus - Test the gateway (modules, items, dispatch & polling)."""

from __future__ import annotations

import asyncio
import logging

import pytest
from common import CHECKSUMS, ITEMS, MockEventBus, MockTransport

from nikobus import (
    Gateway,
    NikobusModule,
    OnOff,
    SendResult,
    StateChange,
    SwitchModuleChannelGroup,
)
from nikobus import exceptions as exc

ON, OFF = OnOff.ON, OnOff.OFF


class FaultyModule:
    """A module that fails to process any frame."""

    address = "FFFF"
    name = "FFFF-1"

    def get_status_request_command(self) -> None:
        return None

    def process_frame(self, frame: str) -> list[StateChange]:
        raise ValueError(f"Unable to process: {frame}")


class UnpollableModule(FaultyModule):
    """A module that fails to build its status request."""

    name = "FFFF-2"

    def get_status_request_command(self) -> None:
        raise RuntimeError("Unable to build a status request")


class FaultyEventBus:
    def post_update(self, name: str, state: OnOff) -> None:
        raise RuntimeError("Event bus is unavailable")


def test_gateway_items(gwy: Gateway) -> None:
    assert [m.name for m in gwy.modules] == ["6C94-1", "6C94-2"]
    assert all(isinstance(m, NikobusModule) for m in gwy.modules)
    assert len(gwy.cache) == len(CHECKSUMS)

    for item in ITEMS:
        channel = gwy.get_channel(item["name"])
        assert channel.address == item["address"]
        assert channel.channel_num == item["channel"]
        assert channel.state == OFF

    assert gwy.get_channel("porch").group is gwy.get_module("6C94-2")


def test_gateway_lookups(gwy: Gateway) -> None:
    with pytest.raises(exc.ModuleNotFound):
        gwy.get_module("4A12-1")

    with pytest.raises(exc.ChannelNotFound) as err:
        gwy.get_channel("attic")
    assert isinstance(err.value, LookupError)

    with pytest.raises(exc.ChannelNotFound):
        gwy.handle_item_command("attic", ON)


def test_gateway_add_item(gwy: Gateway, caplog: pytest.LogCaptureFixture) -> None:
    channel = gwy.add_item("cellar", "4A12", 7)

    assert channel is not None
    assert channel.idx == 1
    assert channel.group.name == "4A12-2"
    assert [m.name for m in gwy.modules] == ["6C94-1", "6C94-2", "4A12-2"]

    with pytest.raises(exc.ConfigError):
        gwy.add_item("cellar", "4A12", 8)  # the name is already bound

    with caplog.at_level(logging.WARNING):
        assert gwy.add_item("attic", "4A12", 13) is None
    assert len(caplog.records) == 1

    with pytest.raises(exc.ChannelNotFound):
        gwy.get_channel("attic")


def test_gateway_add_module(gwy: Gateway) -> None:
    with pytest.raises(exc.ConfigError):
        gwy.add_module(SwitchModuleChannelGroup(gwy, "6C94", 1))

    with pytest.raises(exc.ConfigError):
        SwitchModuleChannelGroup(gwy, "6C9", 1)

    with pytest.raises(exc.ConfigError):
        SwitchModuleChannelGroup(gwy, "6C94", 3)


def test_gateway_handle_item_command(gwy: Gateway, transport, event_bus) -> None:
    assert gwy.handle_item_command("garden", "ON") == SendResult.SENT
    assert gwy.handle_item_command("porch", "ON") == SendResult.SKIPPED  # no checksum

    assert event_bus.updates == [("garden", ON), ("porch", ON)]
    assert [c.frame for c in transport.sent] == ["$1E166C940000000000FFFF997295"]

    with pytest.raises(ValueError):
        gwy.handle_item_command("garden", "DIM")


def test_gateway_request_status(gwy: Gateway, transport) -> None:
    for module in gwy.modules:
        assert gwy.request_status(module) == SendResult.SENT

    assert [repr(c) for c in transport.sent] == [
        "$10126C946CE5A0 (expects: $1C6C94, timeout: 2000)",
        "$10176C948715BB (expects: $1C6C94, timeout: 2000)",
    ]


def test_gateway_dispatch(gwy: Gateway, event_bus) -> None:
    """Check each module only processes the frames that are relevant to it."""

    gwy.add_item("cellar", "4A12", 1)

    gwy.process_frame("$0512")  # both 6C94-1 & 4A12-1 are awaiting a response...
    changes = gwy.process_frame("$1C4A1200FF0000000000557CF8")  # but only 4A12 replies

    assert changes == [StateChange("cellar", ON)]
    assert event_bus.updates == [("cellar", ON)]
    assert gwy.get_channel("kitchen").state == OFF


def test_gateway_dispatch_faulty_module(
    gwy: Gateway, caplog: pytest.LogCaptureFixture
) -> None:
    gwy.add_module(FaultyModule())

    with caplog.at_level(logging.ERROR):
        gwy.process_frame("$0512")
        changes = gwy.process_frame("$1C6C9400000000FF0000557CF8")

    assert changes == [StateChange("garage", ON)]
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 2

    assert gwy.request_status(gwy.get_module("FFFF-1")) == SendResult.SKIPPED


@pytest.mark.parametrize("frame", ["", "0512", "$051", "$05 12", "$05ZZ", "$"])
def test_gateway_invalid_frame(gwy: Gateway, event_bus, frame: str) -> None:
    assert gwy.process_frame(frame) == []
    assert event_bus.updates == []


def test_gateway_frame_whitespace(gwy: Gateway) -> None:
    gwy.process_frame(" $0512\r\n")
    assert gwy.process_frame("$1C6C9400000000FF0000557CF8\r") == [
        StateChange("garage", ON)
    ]


def test_gateway_event_bus_error(
    transport: MockTransport, caplog: pytest.LogCaptureFixture
) -> None:
    gwy = Gateway(transport, FaultyEventBus(), checksums=CHECKSUMS, items=ITEMS)

    with caplog.at_level(logging.ERROR):
        assert gwy.handle_item_command("garage", ON) == SendResult.SENT

        gwy.process_frame("$0512")
        changes = gwy.process_frame("$1C6C9400FF0000FF0000557CF8")

    assert changes == [StateChange("kitchen", ON)]  # the garage was already ON
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 2


async def test_gateway_polling(
    transport: MockTransport, event_bus: MockEventBus
) -> None:
    gwy = Gateway(
        transport,
        event_bus,
        checksums=CHECKSUMS,
        items=ITEMS,
        config={"refresh_interval": 1},
    )
    assert gwy.config.refresh_interval == 1.0
    assert gwy.config.disable_polling is False

    await gwy.start()
    await asyncio.sleep(0.01)

    assert [c.frame for c in transport.sent] == ["$10126C946CE5A0", "$10176C948715BB"]

    await gwy.stop()
    assert gwy._poller is None

    await gwy.stop()  # is idempotent


async def test_gateway_polling_disabled(
    gwy: Gateway, transport: MockTransport, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        await gwy.start()
    assert len(caplog.records) == 1

    await asyncio.sleep(0.01)

    assert transport.sent == []
    assert gwy._poller is None

    await gwy.stop()


def test_gateway_add_item_channel_bound(gwy: Gateway, event_bus) -> None:
    garage = gwy.get_channel("garage")

    with pytest.raises(exc.ConfigError):
        gwy.add_item("carport", "6C94", 4)  # the channel is already bound to garage

    with pytest.raises(exc.ChannelNotFound):
        gwy.get_channel("carport")

    assert gwy.get_channel_group("6C94", 1).channels[3] is garage

    gwy.process_frame("$0512")
    assert gwy.process_frame("$1C6C9400000000FF0000557CF8") == [
        StateChange("garage", ON)
    ]
    assert event_bus.updates == [("garage", ON)]


async def test_gateway_polling_faulty_module(
    transport: MockTransport, event_bus: MockEventBus, caplog: pytest.LogCaptureFixture
) -> None:
    gwy = Gateway(
        transport,
        event_bus,
        checksums=CHECKSUMS,
        items=ITEMS,
        config={"refresh_interval": 1},
    )
    gwy.modules.insert(0, UnpollableModule())  # polled before the switch modules

    with caplog.at_level(logging.ERROR):
        await gwy.start()
        await asyncio.sleep(0.01)

    assert [c.frame for c in transport.sent] == ["$10126C946CE5A0", "$10176C948715BB"]
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 1

    assert gwy._poller is not None and not gwy._poller.done()  # is still polling

    await gwy.stop()
    assert gwy._poller is None
