#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus.

Construct a command (frame that is to be sent).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from . import exceptions as exc
from .const import (
    CHANNELS_PER_GROUP,
    DEFAULT_STATUS_TIMEOUT,
    FRAME_PREFIX,
    FRAME_REGEX,
    HIGH_BYTE,
    STATUS_CHANGE_CMD,
    STATUS_CHANGE_GROUPS,
    STATUS_REQUEST_CMD,
    STATUS_REQUEST_GROUPS,
    STATUS_RESPONSE,
    OnOff,
)
from .helpers import append_crc, hex_from_state, is_valid_address

DEV_MODE = False

_LOGGER = logging.getLogger(__name__)
if DEV_MODE:
    _LOGGER.setLevel(logging.DEBUG)


def _check_address(address: str) -> str:
    if not is_valid_address(address):
        raise exc.CommandInvalid(f"Invalid value for address: {address}")
    return address


def _check_group(group: int) -> int:
    if group not in STATUS_REQUEST_GROUPS:
        raise exc.CommandInvalid(f"Invalid value for group: {group} (not 1 or 2)")
    return group


class Command:
    """The Command class (frames to be transmitted).

    A command may have an expected response (the prefix of the frame that the
    transport is to wait for), and a timeout (in ms) for that response.

    Commands that switch modules understand are completed by a learned checksum,
    which is appended (only once) just before they are sent.
    """

    def __init__(
        self,
        frame: str,
        response_prefix: str | None = None,
        timeout: int | None = None,
    ) -> None:
        """Create a command from a string (and its meta-attrs)."""

        if not isinstance(frame, str) or not FRAME_REGEX.fullmatch(frame):
            raise exc.CommandInvalid(f"Command is not a valid frame: '{frame}'")

        if response_prefix is not None and not response_prefix.startswith(
            FRAME_PREFIX
        ):
            raise exc.CommandInvalid(
                f"Response prefix is not a valid frame prefix: '{response_prefix}'"
            )
        if timeout is not None and timeout <= 0:
            raise exc.CommandInvalid(f"Invalid value for timeout: {timeout}")

        self._base = frame
        self._checksum: str | None = None

        self.response_prefix = response_prefix
        self.timeout = timeout

    @classmethod  # generic constructor
    def _from_attrs(cls, prefix: str, body: str, **kwargs: int | str | None) -> Command:
        """Create a command from its prefix and (CRC-less) body."""

        return cls(f"{prefix}{append_crc(body)}", **kwargs)  # type: ignore[arg-type]

    @classmethod  # constructor for $10 (status request)
    def get_switch_status(cls, address: str, group: int) -> Command:
        """Constructor to get the state of a group of channels of a switch module.

        The module will first acknowledge (e.g. $0512), and then respond with its
        state (e.g. $1C6C9400000000FF0000557CF8).
        """

        body = f"{STATUS_REQUEST_GROUPS[_check_group(group)]}{_check_address(address)}"
        return cls._from_attrs(
            STATUS_REQUEST_CMD,
            body,
            response_prefix=f"{STATUS_RESPONSE}{address}",
            timeout=DEFAULT_STATUS_TIMEOUT,
        )

    @classmethod  # constructor for $1E (status change)
    def set_switch_status(
        cls, address: str, group: int, states: Iterable[OnOff | None]
    ) -> Command:
        """Constructor to set the state of a group of channels of a switch module.

        States are by channel slot (1-6), an empty slot (None) is sent as OFF.
        """

        states = tuple(states)
        if len(states) != CHANNELS_PER_GROUP:
            raise exc.CommandInvalid(
                f"Invalid value for states: {states} (not {CHANNELS_PER_GROUP} values)"
            )

        body = (
            f"{STATUS_CHANGE_GROUPS[_check_group(group)]}{_check_address(address)}"
            + "".join(hex_from_state(s) for s in states)
            + HIGH_BYTE
        )
        return cls._from_attrs(STATUS_CHANGE_CMD, body)

    def __repr__(self) -> str:
        """Return an unambiguous string representation of this object."""
        # e.g.: $10126C946CE5A0 (expects: $1C6C94, timeout: 2000)
        if self.response_prefix:
            return f"{self} (expects: {self.response_prefix}, timeout: {self.timeout})"
        return str(self)

    def __str__(self) -> str:
        """Return the frame, as would be sent."""
        return self.frame

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return (self.frame, self.response_prefix, self.timeout) == (
            other.frame,
            other.response_prefix,
            other.timeout,
        )

    def __hash__(self) -> int:
        return hash((self.frame, self.response_prefix, self.timeout))

    @property
    def base(self) -> str:
        """Return the frame without any learned checksum (i.e. the cache key)."""
        return self._base

    @property
    def checksum(self) -> str | None:
        """Return the learned checksum, if one has been added."""
        return self._checksum

    @property
    def frame(self) -> str:
        """Return the complete frame, including any learned checksum."""
        return f"{self._base}{self._checksum or ''}"

    @property
    def has_checksum(self) -> bool:
        return self._checksum is not None

    def add_checksum(self, checksum: str) -> None:
        """Complete the command with its learned checksum (can be done only once)."""

        if self._checksum is not None:
            raise exc.CommandInvalid(f"{self} < Command already has a checksum")
        if not checksum or not FRAME_REGEX.fullmatch(f"${checksum}"):
            raise exc.CommandInvalid(f"{self} < Invalid checksum: '{checksum}'")

        self._checksum = checksum
