#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus."""

from __future__ import annotations

from enum import StrEnum
from typing import Final

from nikobus_tx.const import (  # noqa: F401
    CHANNELS_PER_GROUP,
    DEFAULT_REFRESH_INTERVAL,
    MAX_CHANNELS,
    MIN_REFRESH_INTERVAL,
    STATUS_REQUEST_ACK,
    STATUS_REQUEST_GROUPS,
    STATUS_RESPONSE,
    STATUS_RESPONSE_OFFSET,
    SZ_ADDRESS,
    SZ_CHANNEL,
    SZ_NAME,
    OnOff,
    SendResult,
)


SZ_CONFIG: Final = "config"
SZ_DISABLE_POLLING: Final = "disable_polling"
SZ_ITEMS: Final = "items"
SZ_REFRESH_INTERVAL: Final = "refresh_interval"


class ResponseState(StrEnum):
    """Who the next status response is for, as announced by the preceding ACK.

    Only one request is in flight on the bus at a time, so each group tracks whether
    the most recent ACK was for itself or for some other module/group.
    """

    IDLE = "idle"  # no ACK seen, or the response has been processed/discarded
    AWAITING_SELF = "awaiting_self"
    AWAITING_OTHER = "awaiting_other"
