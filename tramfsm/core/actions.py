# tramfsm/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Mapping

from tramfsm.core.events import Event
from tramfsm.core.states import TramData

logger = logging.getLogger(__name__)

PASSENGERS_ENTERED = "passengers_entered"
PASSENGERS_EXITED = "passengers_exited"


def read_count(payload: Mapping[str, Any], key: str) -> int:
    """
    Read a non-negative passenger count from a payload.

    Missing keys, ``None``, booleans, non-numeric and non-integral values and
    negative numbers all read as 0. Numeric strings such as ``"3"`` are accepted.

    :param payload: The event payload.
    :param key: The key to read.
    :return: The count, or 0 if the value is unusable.
    """
    value = payload.get(key)
    if value is None:
        return 0

    count = None
    if isinstance(value, int) and not isinstance(value, bool):
        count = value
    elif isinstance(value, Real) and not isinstance(value, bool) and float(value).is_integer():
        count = int(value)
    elif isinstance(value, str):
        try:
            count = int(value.strip())
        except ValueError:
            count = None

    if count is None:
        logger.warning("Ignoring non-numeric %s=%r, using 0", key, value)
        return 0
    if count < 0:
        logger.warning("Ignoring negative %s=%r, using 0", key, value)
        return 0
    return count


def update_passengers(event: Event, data: TramData) -> None:
    """
    Apply the boarding counts carried by a door-closing event to ``data``.

    The count is not clamped: more people leaving than are aboard drives it
    below zero.
    """
    entered = read_count(event.payload, PASSENGERS_ENTERED)
    exited = read_count(event.payload, PASSENGERS_EXITED)
    data.passengers += entered - exited
    if data.passengers < 0:
        logger.warning("Passenger count is negative (%d) after %r", data.passengers, event)
