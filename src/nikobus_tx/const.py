#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Final


# All frames are ASCII, start with a '$', and are followed by uppercase hex
FRAME_PREFIX: Final = "$"
FRAME_REGEX: Final = re.compile(r"^\$(?:[0-9A-F]{2})+$")
ADDRESS_REGEX: Final = re.compile(r"^[0-9A-F]{4}$")

# Switch module status request, e.g.: $10126C946CE5A0
STATUS_REQUEST_CMD: Final = "$10"
STATUS_REQUEST_ACK: Final = "$05"
STATUS_REQUEST_GROUP_1: Final = "12"
STATUS_REQUEST_GROUP_2: Final = "17"

# Switch module status response, e.g.: $1C6C9400000000FF0000557CF8
STATUS_RESPONSE: Final = "$1C"

# Switch module status change, e.g.: $1E156C94000000FF0000FF60E149
STATUS_CHANGE_CMD: Final = "$1E"
STATUS_CHANGE_ACK: Final = "$05"
STATUS_CHANGE_GROUP_1: Final = "15"
STATUS_CHANGE_GROUP_2: Final = "16"

STATUS_REQUEST_GROUPS: Final[dict[int, str]] = {
    1: STATUS_REQUEST_GROUP_1,
    2: STATUS_REQUEST_GROUP_2,
}
STATUS_CHANGE_GROUPS: Final[dict[int, str]] = {
    1: STATUS_CHANGE_GROUP_1,
    2: STATUS_CHANGE_GROUP_2,
}

HIGH_BYTE: Final = "FF"
LOW_BYTE: Final = "00"

# offset of the 1st channel's state field in a status response (6 x 2-char fields)
STATUS_RESPONSE_OFFSET: Final[int] = 9

CHANNELS_PER_GROUP: Final[int] = 6
MAX_CHANNELS: Final[int] = CHANNELS_PER_GROUP * 2

DEFAULT_STATUS_TIMEOUT: Final[int] = 2000  # ms, waiting for a status response

DEFAULT_REFRESH_INTERVAL: Final[float] = 600.0  # seconds, between status polls
MIN_REFRESH_INTERVAL: Final[float] = 1.0

CRC_INITIAL: Final[int] = 0xFFFF
CRC_POLYNOMIAL: Final[int] = 0x1021

SZ_ADDRESS: Final = "address"
SZ_CHANNEL: Final = "channel"
SZ_CHECKSUMS: Final = "checksums"
SZ_NAME: Final = "name"


class OnOff(StrEnum):
    """The state of a switched output."""

    ON = "ON"
    OFF = "OFF"


class SendResult(StrEnum):
    """The outcome of an attempt to put a command on the bus."""

    SENT = "sent"
    SKIPPED = "skipped"  # no command, e.g. its checksum is not in the cache
    FAILED = "failed"  # the transport raised an exception
