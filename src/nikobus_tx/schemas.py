#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus.

Schema processor for protocol (lower) layer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Final, TypedDict

import voluptuous as vol

from .const import ADDRESS_REGEX, FRAME_REGEX, MAX_CHANNELS, SZ_CHECKSUMS

_LOGGER = logging.getLogger(__name__)


#
# 1/3: Addresses, channels
def _normalise_hex(value: Any) -> str:
    if not isinstance(value, str):
        raise vol.Invalid(f"expected a hex string, got: {value!r}")
    return value.strip().upper()


SCH_ADDRESS = vol.All(
    _normalise_hex,
    vol.Match(ADDRESS_REGEX, msg="expected a module address (4 hex chars)"),
)
SCH_CHANNEL = vol.All(int, vol.Range(min=1, max=MAX_CHANNELS))


#
# 2/3: Learned checksums (by base command)
SCH_BASE_COMMAND = vol.All(
    _normalise_hex, vol.Match(FRAME_REGEX, msg="expected a frame, e.g. $10126C946CE5")
)
SCH_CHECKSUM = vol.All(
    _normalise_hex, vol.Match(r"^(?:[0-9A-F]{2})+$", msg="expected a hex checksum")
)

SCH_CHECKSUMS_DICT = {
    vol.Optional(SZ_CHECKSUMS, default={}): vol.Schema(
        {SCH_BASE_COMMAND: SCH_CHECKSUM}
    )
}


#
# 3/3: Frame log configuration
SZ_FILE_NAME: Final = "file_name"
SZ_FRAME_LOG: Final = "frame_log"
SZ_ROTATE_BACKUPS: Final = "rotate_backups"
SZ_ROTATE_BYTES: Final = "rotate_bytes"


class FrameLogConfigT(TypedDict):
    file_name: str
    rotate_backups: int
    rotate_bytes: int | None


def sch_frame_log_dict_factory(
    default_backups: int = 0,
) -> dict[vol.Required, vol.Any]:
    """Return a frame log dict with a configurable default rotation policy.

    usage:

    SCH_FRAME_LOG_7 = vol.Schema(
        sch_frame_log_dict_factory(default_backups=7), extra=vol.PREVENT_EXTRA
    )
    """

    SCH_FRAME_LOG_CONFIG = vol.Schema(
        {
            vol.Optional(SZ_ROTATE_BACKUPS, default=default_backups): vol.Any(
                None, int
            ),
            vol.Optional(SZ_ROTATE_BYTES): vol.Any(None, int),
        },
        extra=vol.PREVENT_EXTRA,
    )

    SCH_FRAME_LOG_NAME = str

    def NormaliseFrameLog(rotate_backups: int = 0) -> Callable[..., Any]:
        def normalise_frame_log(node_value: str | FrameLogConfigT) -> FrameLogConfigT:
            if isinstance(node_value, str):
                return {
                    SZ_FILE_NAME: node_value,
                    SZ_ROTATE_BACKUPS: rotate_backups,
                    SZ_ROTATE_BYTES: None,
                }
            return node_value

        return normalise_frame_log

    return {  # SCH_FRAME_LOG_DICT
        vol.Required(SZ_FRAME_LOG, default=None): vol.Any(
            None,
            vol.All(
                SCH_FRAME_LOG_NAME,
                NormaliseFrameLog(rotate_backups=default_backups),
            ),
            SCH_FRAME_LOG_CONFIG.extend(
                {vol.Required(SZ_FILE_NAME): SCH_FRAME_LOG_NAME}
            ),
        )
    }


SCH_FRAME_LOG = vol.Schema(
    sch_frame_log_dict_factory(default_backups=7), extra=vol.PREVENT_EXTRA
)
