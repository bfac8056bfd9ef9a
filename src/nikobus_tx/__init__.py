#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus (frames, commands, checksums)."""

from __future__ import annotations

from .cache import ChecksumCache
from .command import Command
from .const import (
    HIGH_BYTE,
    LOW_BYTE,
    STATUS_CHANGE_CMD,
    STATUS_REQUEST_ACK,
    STATUS_REQUEST_CMD,
    STATUS_RESPONSE,
    OnOff,
    SendResult,
)
from .helpers import append_crc, crc16, is_valid_address
from .logger import FRAME_LOGGER, set_frame_logging
from .typing import NikobusEventBusT, NikobusTransportT
from .version import VERSION

__all__ = [
    "VERSION",
    #
    "HIGH_BYTE",
    "LOW_BYTE",
    "STATUS_CHANGE_CMD",
    "STATUS_REQUEST_ACK",
    "STATUS_REQUEST_CMD",
    "STATUS_RESPONSE",
    #
    "ChecksumCache",
    "Command",
    "OnOff",
    "SendResult",
    #
    "NikobusEventBusT",
    "NikobusTransportT",
    #
    "FRAME_LOGGER",
    "set_frame_logging",
    #
    "append_crc",
    "crc16",
    "is_valid_address",
]
