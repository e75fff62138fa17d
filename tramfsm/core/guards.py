# tramfsm/core/guards.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from tramfsm.core.events import Event
from tramfsm.core.states import TramData


def no_passengers(event: Event, data: TramData) -> bool:
    """True when the tram is empty."""
    return data.passengers == 0


def has_passengers(event: Event, data: TramData) -> bool:
    """True when anyone is aboard (or the count has drifted below zero)."""
    return data.passengers != 0


_LABELS = {
    no_passengers: "passengers == 0",
    has_passengers: "passengers != 0",
}


def describe(guard) -> str:
    """Human-readable text for a guard, used in diagrams and logs."""
    if guard in _LABELS:
        return _LABELS[guard]
    return getattr(guard, "__name__", repr(guard))
