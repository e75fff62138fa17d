# tramfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Optional


class TramError(Exception):
    """
    Base exception class for errors within the tram state machine package.
    """


class InvalidTransition(TramError):
    """
    Raised when the requested event has no matching clause for the current state.

    The rejected state and event are kept for diagnostics only. Callers that need
    to know why a request failed should query the machine's state.
    """

    def __init__(self, state: Optional[Any] = None, event: Optional[Any] = None) -> None:
        self.state = state
        self.event = event
        super().__init__("invalid_transition")


class ConfigError(TramError):
    """
    Raised when a configuration file or value cannot be used.
    """


class ActorError(TramError):
    """
    Base class for errors raised at the actor boundary.
    """


class ActorNotRunningError(ActorError):
    """
    Raised when a request is sent to an actor that is not running.
    """


class ActorNameTakenError(ActorError):
    """
    Raised when registering an actor under a name that is already in use.
    """
