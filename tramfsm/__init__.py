"""tramfsm: a single tram modelled as a guarded finite state machine

Responsibilities:
    - Transition table and guard evaluation for the tram lifecycle
    - Passenger count updates on door closure
    - Serialized access to a tram through a lock or a hosting actor

Interactions:
    - Client code through TramFSM, TramActor and AsyncTramActor
    - Logging system for diagnostics
    - YAML configuration files for actor settings
"""

from tramfsm.config import TramConfig, load_config
from tramfsm.core.errors import (
    ActorError,
    ActorNameTakenError,
    ActorNotRunningError,
    ConfigError,
    InvalidTransition,
    TramError,
)
from tramfsm.core.events import Event, TransitionKind
from tramfsm.core.state_machine import Result, TramFSM
from tramfsm.core.states import Snapshot, TramData, TramState
from tramfsm.runtime.actor import TramActor, start_link, whereis
from tramfsm.runtime.async_support import AsyncTramActor

__version__ = "0.1.0"

__all__ = [
    "ActorError",
    "ActorNameTakenError",
    "ActorNotRunningError",
    "AsyncTramActor",
    "ConfigError",
    "Event",
    "InvalidTransition",
    "Result",
    "Snapshot",
    "TramActor",
    "TramConfig",
    "TramData",
    "TramError",
    "TramFSM",
    "TramState",
    "TransitionKind",
    "load_config",
    "start_link",
    "whereis",
]
