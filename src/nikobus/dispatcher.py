#!/usr/bin/env python3
"""Nikobus - Route an inbound frame to the modules."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from nikobus_tx import FRAME_LOGGER
from nikobus_tx.const import FRAME_REGEX

from . import exceptions as exc

if TYPE_CHECKING:
    from .gateway import Gateway
    from .module import StateChange

#
# NOTE: All debug flags should be False for deployment to end-users
_DBG_INCREASE_LOG_LEVELS: Final[bool] = (
    False  # set True for developer-friendly log spam
)

_LOGGER = logging.getLogger(__name__)


__all__ = ["process_frame"]


def process_frame(gwy: Gateway, frame: str) -> list[StateChange]:
    """Route the frame to every module, and return the changes of state (if any).

    The bus is shared by all modules, so every module is offered every frame: each
    decides for itself if the frame is relevant. A failure by one module does not
    prevent the other modules from processing the frame.
    """

    frame = frame.strip()
    if not FRAME_REGEX.fullmatch(frame):
        FRAME_LOGGER.warning(frame, extra={"error_text": "Invalid frame"})
        return []

    FRAME_LOGGER.info(frame)

    changes: list[StateChange] = []

    for module in gwy.modules:
        try:
            changes.extend(module.process_frame(frame))

        except (AssertionError, exc.NikobusException) as err:
            (_LOGGER.error if _DBG_INCREASE_LOG_LEVELS else _LOGGER.warning)(
                "%s < %s: %s(%s)", frame, module.name, err.__class__.__name__, err
            )

        except (AttributeError, LookupError, TypeError, ValueError) as err:
            _LOGGER.exception(
                "%s < %s: %s(%s)", frame, module.name, err.__class__.__name__, err
            )

    return changes
