#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus (commands, frames, checksums)."""

__version__ = "0.3.1"
VERSION = __version__
