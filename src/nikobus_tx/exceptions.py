#!/usr/bin/env python3
"""Nikobus - exceptions within the frame/command/transport layer."""

from __future__ import annotations


class _NikobusBaseException(Exception):
    """Base class for all nikobus_tx exceptions."""

    pass


class NikobusException(_NikobusBaseException):
    """Base class for all nikobus_tx exceptions."""

    HINT: None | str = None

    def __init__(self, *args: object):
        super().__init__(*args)
        self.message: str | None = args[0] if args else None  # type: ignore[assignment]

    def __str__(self) -> str:
        if self.message and self.HINT:
            return f"{self.message} (hint: {self.HINT})"
        if self.message:
            return self.message
        if self.HINT:
            return f"Hint: {self.HINT}"
        return ""


class _NikobusLowerError(NikobusException):
    """A failure in the lower layer (frames, commands, transport)."""


########################################################################################
# Errors at/below the protocol/transport layer


class ProtocolError(_NikobusLowerError):
    """An error occurred when sending, receiving or exchanging frames."""


class TransportError(ProtocolError):
    """An error when sending or receiving frames (bytes)."""


########################################################################################
# Errors when building or decoding frames


class FrameInvalid(_NikobusLowerError):
    """The frame is corrupt/not internally consistent."""


class CommandInvalid(FrameInvalid):
    """The command is corrupt/not internally consistent."""


class ChecksumUnavailable(_NikobusLowerError):
    """The learned checksum for a command is not in the cache."""

    HINT = "run the analyzer first"
