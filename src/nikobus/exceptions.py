#!/usr/bin/env python3
"""Nikobus - exceptions above the frame/command/transport layer."""

from __future__ import annotations

from nikobus_tx.exceptions import (  # noqa: F401
    ChecksumUnavailable as ChecksumUnavailable,
    CommandInvalid as CommandInvalid,
    FrameInvalid as FrameInvalid,
    NikobusException as NikobusException,
    ProtocolError as ProtocolError,
    TransportError as TransportError,
)


class _NikobusUpperError(NikobusException):
    """A failure in the upper layer (configuration, modules, channels)."""


########################################################################################
# Errors above the frame/command layer, incl. configuration & lookups


class ConfigError(_NikobusUpperError):
    """The configuration is invalid (e.g. a bad module address or group)."""


class ModuleNotFound(_NikobusUpperError, LookupError):
    """There is no module with that name."""


class ChannelNotFound(_NikobusUpperError, LookupError):
    """There is no channel bound to an item with that name."""

    HINT = "items are bound to channels via the configuration"
