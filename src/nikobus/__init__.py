#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus.

Works with (amongst others):
- switch module, large (05-000-02), channels 1-12
- switch module, compact (05-002-02), channels 1-4
"""

from __future__ import annotations

import logging

from nikobus_tx import ChecksumCache, Command, OnOff, SendResult  # noqa: F401
from nikobus_tx.version import VERSION  # noqa: F401

from .channel import SwitchModuleChannel  # noqa: F401
from .channel_group import SwitchModuleChannelGroup  # noqa: F401
from .const import ResponseState  # noqa: F401
from .gateway import Gateway  # noqa: F401
from .module import NikobusModule, StateChange  # noqa: F401

_LOGGER = logging.getLogger(__name__)
