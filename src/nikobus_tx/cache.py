#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus.

A cache of the learned checksums, by command.

The checksums cannot be calculated, and are learned by (an external) analyzer which
listens to the bus while the commands are sent by other controllers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from . import exceptions as exc
from .command import Command

_LOGGER = logging.getLogger(__name__)


class ChecksumCache:
    """The checksum cache: base command (incl. its CRC) -> learned checksum."""

    def __init__(self) -> None:
        self._checksums: dict[str, str] = {}

    @classmethod
    def from_dict(cls, checksums: Mapping[str, str]) -> ChecksumCache:
        """Create a cache from a (previously trained) table of checksums."""

        cache = cls()
        for command, checksum in checksums.items():
            cache.put(command, checksum)
        return cache

    def __contains__(self, command: object) -> bool:
        return command in self._checksums

    def __iter__(self) -> Iterator[str]:
        return iter(self._checksums)

    def __len__(self) -> int:
        return len(self._checksums)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self)})"

    def get(self, command: str) -> str | None:
        """Return the checksum for a base command, or None if it is not known."""
        return self._checksums.get(command) or None

    def put(self, command: str, checksum: str) -> None:
        """Add a learned checksum to the cache."""

        if not checksum:
            raise ValueError(f"Invalid checksum for {command}: '{checksum}'")

        if (old := self._checksums.get(command)) and old != checksum:
            _LOGGER.warning(
                "Checksum for %s changed from %s to %s", command, old, checksum
            )
        self._checksums[command] = checksum

    def complete(self, cmd: Command) -> Command:
        """Complete the command with its learned checksum.

        Raise ChecksumUnavailable if the checksum is not in the cache.
        """

        if (checksum := self.get(cmd.base)) is None:
            raise exc.ChecksumUnavailable(
                f"Cannot find checksum value in cache for command {cmd.base}"
            )
        cmd.add_checksum(checksum)
        return cmd
