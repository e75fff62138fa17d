# tramfsm/runtime/actor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Hosts a TramFSM in its own worker thread.

Callers talk to the tram only through requests placed on a FIFO queue. The
worker takes them one at a time and answers each through a Future, so
transitions are applied strictly in the order they were submitted and each
caller gets exactly one reply. Actors can be registered under a name and
looked up later with :func:`whereis`.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from tramfsm.config import TramConfig
from tramfsm.core.errors import ActorNameTakenError, ActorNotRunningError, InvalidTransition
from tramfsm.core.events import TransitionKind
from tramfsm.core.state_machine import TramFSM
from tramfsm.core.states import Snapshot, TramState
from tramfsm.runtime.concurrency import get_lock, with_lock
from tramfsm.runtime.event_queue import EventQueue

logger = logging.getLogger(__name__)

GET_STATE = "get_state"
TRANSITION = "transition"


@dataclass
class _Request:
    op: str
    event: Union[TransitionKind, str, None] = None
    payload: Optional[Mapping[str, Any]] = None
    reply: Future = field(default_factory=Future)


_STOP = object()


class TramActor:
    """
    Owns one TramFSM and serializes every request to it through a worker thread.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        config: Optional[TramConfig] = None,
        fsm: Optional[TramFSM] = None,
        hooks: Optional[List[Any]] = None,
    ) -> None:
        """
        :param name: Name used for logging and registration. Defaults to ``config.name``.
        :param config: Actor settings. Defaults to :class:`TramConfig` defaults.
        :param fsm: The machine to host. A fresh one is created if omitted.
        :param hooks: Hooks for the fresh machine. Ignored when ``fsm`` is given.
        """
        self.config = config or TramConfig()
        self.name = name or self.config.name
        self._fsm = fsm or TramFSM(hooks=hooks)
        self._queue = EventQueue()
        self._lock = get_lock()
        self._running = False
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        with with_lock(self._lock):
            return self._running

    def start(self) -> "TramActor":
        """Start the worker thread. Starting a running actor does nothing."""
        with with_lock(self._lock):
            if self._running:
                return self
            self._running = True
            self._thread = threading.Thread(target=self._run, name=f"tram-{self.name}", daemon=True)
            self._thread.start()
        logger.info("Tram actor %r started", self.name)
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop accepting requests, let the worker finish what is already queued,
        and wait for it to exit.
        """
        with with_lock(self._lock):
            if not self._running:
                return
            self._running = False
            self._queue.enqueue(_STOP)
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout if timeout is not None else self.config.request_timeout)
        if whereis(self.name) is self:
            unregister(self.name)
        logger.info("Tram actor %r stopped", self.name)

    def get_state(self, timeout: Optional[float] = None) -> Snapshot:
        """Ask the worker for a snapshot of the tram."""
        return self._call(_Request(GET_STATE), timeout)

    def transition(
        self,
        event: Union[TransitionKind, str],
        payload: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> TramState:
        """
        Submit a transition and wait for the reply.

        :return: The new state.
        :raises InvalidTransition: If the tram rejected the transition.
        :raises ActorNotRunningError: If the actor is not running.
        :raises concurrent.futures.TimeoutError: If no reply arrived in time.
        """
        return self._call(_Request(TRANSITION, event, payload), timeout)

    def submit(self, event: Union[TransitionKind, str], payload: Optional[Mapping[str, Any]] = None) -> Future:
        """Submit a transition without waiting. The Future resolves to the new state."""
        return self._send(_Request(TRANSITION, event, payload))

    def _call(self, request: _Request, timeout: Optional[float]) -> Any:
        future = self._send(request)
        return future.result(timeout if timeout is not None else self.config.request_timeout)

    def _send(self, request: _Request) -> Future:
        with with_lock(self._lock):
            if not self._running:
                raise ActorNotRunningError(f"Tram actor {self.name!r} is not running")
            self._queue.enqueue(request)
        return request.reply

    def _run(self) -> None:
        while True:
            item = self._queue.dequeue(timeout=None)
            if item is _STOP:
                break
            if item is not None:
                self._handle(item)

    def _handle(self, request: _Request) -> None:
        if not request.reply.set_running_or_notify_cancel():
            return
        try:
            if request.op == GET_STATE:
                request.reply.set_result(self._fsm.get_state())
            else:
                request.reply.set_result(self._fsm.apply_transition(request.event, request.payload))
        except InvalidTransition as error:
            logger.warning("Tram %r rejected %s in state %s", self.name, error.event, error.state)
            request.reply.set_exception(error)
        except Exception as error:
            logger.exception("Tram %r failed handling %s", self.name, request.op)
            request.reply.set_exception(error)

    def __enter__(self) -> "TramActor":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def __repr__(self) -> str:
        return f"TramActor(name={self.name!r}, running={self.is_running})"


_registry: Dict[str, TramActor] = {}
_registry_lock = get_lock()


def register(actor: TramActor) -> None:
    """
    Make ``actor`` discoverable under its name.

    :raises ActorNameTakenError: If another actor already holds the name.
    """
    with with_lock(_registry_lock):
        existing = _registry.get(actor.name)
        if existing is not None and existing is not actor:
            raise ActorNameTakenError(f"Tram actor name {actor.name!r} is already registered")
        _registry[actor.name] = actor


def unregister(name: str) -> None:
    with with_lock(_registry_lock):
        _registry.pop(name, None)


def whereis(name: str) -> Optional[TramActor]:
    """Look up a registered actor by name."""
    with with_lock(_registry_lock):
        return _registry.get(name)


def start_link(name: Optional[str] = None, config: Optional[TramConfig] = None, **kwargs) -> TramActor:
    """
    Create, register and start an actor in one step.

    :raises ActorNameTakenError: If the name is already registered.
    """
    actor = TramActor(name=name, config=config, **kwargs)
    register(actor)
    return actor.start()


def _lookup(name: str) -> TramActor:
    actor = whereis(name)
    if actor is None:
        raise ActorNotRunningError(f"No tram actor registered as {name!r}")
    return actor


def get_state(name: str = "tram") -> Snapshot:
    """Snapshot of the tram registered under ``name``."""
    return _lookup(name).get_state()


def transition(
    event: Union[TransitionKind, str], payload: Optional[Mapping[str, Any]] = None, name: str = "tram"
) -> TramState:
    """Apply a transition to the tram registered under ``name``."""
    return _lookup(name).transition(event, payload)
