#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus.

Schema processor for upper layer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from nikobus_tx.schemas import (  # noqa: F401
    SCH_ADDRESS,
    SCH_CHANNEL,
    SCH_CHECKSUMS_DICT,
    SZ_CHECKSUMS,
    SZ_FILE_NAME,
    SZ_FRAME_LOG,
    SZ_ROTATE_BACKUPS,
    SZ_ROTATE_BYTES,
    sch_frame_log_dict_factory,
)

from .const import (
    DEFAULT_REFRESH_INTERVAL,
    MIN_REFRESH_INTERVAL,
    SZ_ADDRESS,
    SZ_CHANNEL,
    SZ_CONFIG,
    SZ_DISABLE_POLLING,
    SZ_ITEMS,
    SZ_NAME,
    SZ_REFRESH_INTERVAL,
)

if TYPE_CHECKING:
    from .gateway import Gateway


_LOGGER = logging.getLogger(__name__)


#
# 1/3: Items (each bound to a channel of a switch module)
SCH_ITEM = vol.Schema(
    {
        vol.Required(SZ_NAME): vol.All(str, vol.Length(min=1)),
        vol.Required(SZ_ADDRESS): SCH_ADDRESS,
        vol.Required(SZ_CHANNEL): SCH_CHANNEL,
    },
    extra=vol.PREVENT_EXTRA,
)


def _unique_items(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Check that no item name, and no module channel, is bound twice."""

    names = [i[SZ_NAME] for i in items]
    if dupes := sorted({n for n in names if names.count(n) > 1}):
        raise vol.Invalid(f"duplicate item name(s): {', '.join(dupes)}")

    channels = [(i[SZ_ADDRESS], i[SZ_CHANNEL]) for i in items]
    if dupes := sorted({f"{a}/{c}" for a, c in channels if channels.count((a, c)) > 1}):
        raise vol.Invalid(f"channel(s) bound more than once: {', '.join(dupes)}")

    return items


SCH_ITEMS = vol.All([SCH_ITEM], _unique_items)


#
# 2/3: Gateway configuration
SCH_GATEWAY_DICT = {
    vol.Optional(SZ_REFRESH_INTERVAL, default=DEFAULT_REFRESH_INTERVAL): vol.All(
        vol.Coerce(float), vol.Range(min=MIN_REFRESH_INTERVAL)
    ),
    vol.Optional(SZ_DISABLE_POLLING, default=False): bool,
}
SCH_GATEWAY_CONFIG = vol.Schema(SCH_GATEWAY_DICT, extra=vol.PREVENT_EXTRA)


#
# 3/3: Global configuration
SCH_GLOBAL_CONFIG = vol.Schema(
    {
        vol.Optional(SZ_CONFIG, default={}): SCH_GATEWAY_CONFIG,
        vol.Optional(SZ_ITEMS, default=[]): SCH_ITEMS,
    }
    | SCH_CHECKSUMS_DICT
    | sch_frame_log_dict_factory(default_backups=7),
    extra=vol.PREVENT_EXTRA,
)


def load_items(gwy: Gateway, items: list[dict[str, Any]]) -> None:
    """Bind the (validated) items to the channels of the gateway's switch modules."""

    for item in items:
        gwy.add_item(item[SZ_NAME], item[SZ_ADDRESS], item[SZ_CHANNEL])
