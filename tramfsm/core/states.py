# tramfsm/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple


class TramState(Enum):
    """
    The operational states of a tram. Exactly one is current at any time.
    """

    IDLE = "idle"
    READY = "ready"
    OPEN = "open"
    MOVING = "moving"
    FINAL_STATE = "final_state"

    def __str__(self) -> str:
        return self.value


@dataclass
class TramData:
    """
    Auxiliary data carried alongside the tram state.

    ``passengers`` is only ever changed by a successful door-closing transition.
    """

    passengers: int = 0

    def copy(self) -> "TramData":
        return replace(self)


class Snapshot(NamedTuple):
    """Read-only view of a tram at one point in time."""

    state: TramState
    data: TramData
