#!/usr/bin/env python3
"""Nikobus - Protocol/Transport layer - Helper functions."""

from __future__ import annotations

from typing import TypeAlias

from .const import (
    ADDRESS_REGEX,
    CRC_INITIAL,
    CRC_POLYNOMIAL,
    HIGH_BYTE,
    LOW_BYTE,
    OnOff,
)

HexStr2: TypeAlias = str  # two characters, one byte
HexStr4: TypeAlias = str


def crc16(value: str) -> int:
    """Return the CRC16 (CCITT, init 0xFFFF) of an even-length hex string."""

    if not isinstance(value, str) or len(value) % 2:
        raise ValueError(f"Invalid value: {value}, is not an even-length hex string")

    crc = CRC_INITIAL
    for i in range(0, len(value), 2):
        crc ^= int(value[i : i + 2], 16) << 8
        for _ in range(8):
            crc = (crc << 1) ^ CRC_POLYNOMIAL if crc & 0x8000 else crc << 1
        crc &= 0xFFFF
    return crc


def append_crc(value: str) -> str:
    """Return the hex string with its CRC16 appended (as 4 uppercase hex chars).

    For example: 126C94 -> 126C946CE5
    """
    return f"{value}{crc16(value):04X}".upper()


def hex_to_state(value: HexStr2) -> OnOff:
    """Convert a 2-char hex state field into ON/OFF (anything but 00 is ON)."""
    if not isinstance(value, str) or len(value) != 2:
        raise ValueError(f"Invalid value: {value}, is not a 2-char hex string")
    return OnOff.OFF if value == LOW_BYTE else OnOff.ON


def hex_from_state(value: OnOff | None) -> HexStr2:
    """Convert a state into a 2-char hex string (an empty slot is OFF)."""
    if value is None:
        return LOW_BYTE
    if not isinstance(value, OnOff):
        raise ValueError(f"Invalid value: {value}, is not ON/OFF")
    return HIGH_BYTE if value is OnOff.ON else LOW_BYTE


def is_valid_address(value: HexStr4) -> bool:
    """Return True if the value is a module address (4 uppercase hex chars)."""
    return isinstance(value, str) and bool(ADDRESS_REGEX.fullmatch(value))
