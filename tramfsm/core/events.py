# tramfsm/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from tramfsm.core.errors import InvalidTransition


class TransitionKind(Enum):
    """
    The transition requests a tram understands.
    """

    POWER_ON = "power_on"
    POWER_OFF = "power_off"
    MOVE = "move"
    STOP = "stop"
    OPEN_DOORS = "open_doors"
    CLOSE_DOORS = "close_doors"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union["TransitionKind", str]) -> "TransitionKind":
        """
        Resolve a member from itself, its value ("open_doors") or its name ("OPEN_DOORS").

        :raises InvalidTransition: If the value names no known transition.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidTransition(event=value)


class Event:
    """
    A transition request: the kind of transition plus an optional payload.
    """

    def __init__(self, kind: Union[TransitionKind, str], payload: Optional[Mapping[str, Any]] = None) -> None:
        """
        :param kind: The transition to request.
        :param payload: Optional key/value data. Only door closing reads it.
        :raises InvalidTransition: If ``kind`` names no known transition.
        """
        self._kind = TransitionKind.parse(kind)
        self._payload: Dict[str, Any] = dict(payload or {})

    @property
    def kind(self) -> TransitionKind:
        """The requested transition."""
        return self._kind

    @property
    def name(self) -> str:
        """The transition name, e.g. ``"power_on"``."""
        return self._kind.value

    @property
    def payload(self) -> Dict[str, Any]:
        """Additional event data."""
        return self._payload

    def __repr__(self) -> str:
        return f"Event({self.name!r}, {self._payload!r})"
