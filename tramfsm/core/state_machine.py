# tramfsm/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Union

from tramfsm.core.errors import InvalidTransition
from tramfsm.core.events import Event, TransitionKind
from tramfsm.core.hooks import HookManager
from tramfsm.core.states import Snapshot, TramData, TramState
from tramfsm.core.transitions import TRANSITION_TABLE, Transition, select_transition
from tramfsm.runtime.concurrency import get_lock, with_lock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """Outcome of a transition request that does not raise."""

    ok: bool
    state: TramState
    error: Optional[InvalidTransition] = None


class TramFSM:
    """
    A single tram's state machine.

    Holds the current state and the passenger count and applies transition
    requests one at a time. Every read and write happens under one lock, so an
    instance may be shared between threads; requests are serialized in the
    order they acquire it.
    """

    def __init__(
        self,
        hooks: Optional[List[Any]] = None,
        table: Sequence[Transition] = TRANSITION_TABLE,
    ) -> None:
        """
        :param hooks: Optional hook objects implementing on_enter, on_exit, on_error.
        :param table: Transition rows. Defaults to the standard tram table.
        """
        self._table = tuple(table)
        self._hooks = HookManager(hooks)
        self._lock = get_lock(reentrant=True)
        self._state = TramState.IDLE
        self._data = TramData()

    @property
    def current_state(self) -> TramState:
        with with_lock(self._lock):
            return self._state

    @property
    def passengers(self) -> int:
        with with_lock(self._lock):
            return self._data.passengers

    @property
    def is_terminal(self) -> bool:
        return self.current_state is TramState.FINAL_STATE

    @property
    def hooks(self) -> HookManager:
        return self._hooks

    def get_state(self) -> Snapshot:
        """
        Return the current state and a copy of the data. Never fails.
        """
        with with_lock(self._lock):
            return Snapshot(self._state, self._data.copy())

    def apply_transition(
        self,
        event: Union[Event, TransitionKind, str],
        payload: Optional[Mapping[str, Any]] = None,
    ) -> TramState:
        """
        Attempt a transition from the current state.

        The guard check, the data update and the state change happen together:
        either all of them take effect or none do.

        :param event: The transition to request, as an Event, a TransitionKind or its name.
        :param payload: Optional data. Only ``close_doors`` reads it, from the keys
            ``passengers_entered`` and ``passengers_exited``.
        :return: The new state.
        :raises InvalidTransition: If no row matches the current state and event.
        """
        with with_lock(self._lock):
            try:
                request = _as_event(event, payload)
                transition = select_transition(self._table, self._state, request, self._data)
                if transition is None:
                    raise InvalidTransition(state=self._state, event=request.kind)
            except InvalidTransition as error:
                if error.state is None:
                    error.state = self._state
                logger.debug("Rejected %s in state %s", error.event, self._state)
                self._hooks.execute_on_error(error)
                raise

            data = self._data.copy()
            transition.execute_actions(request, data)

            previous = self._state
            self._state = transition.target
            self._data = data
            logger.debug("%s -> %s via %s (passengers=%d)", previous, self._state, request.name, data.passengers)

            self._hooks.execute_on_exit(previous)
            self._hooks.execute_on_enter(self._state)
            return self._state

    def try_transition(
        self,
        event: Union[Event, TransitionKind, str],
        payload: Optional[Mapping[str, Any]] = None,
    ) -> Result:
        """
        Like :meth:`apply_transition` but reports rejection in the result instead of raising.
        """
        with with_lock(self._lock):
            try:
                return Result(ok=True, state=self.apply_transition(event, payload))
            except InvalidTransition as error:
                return Result(ok=False, state=self._state, error=error)

    def available_transitions(self) -> List[TransitionKind]:
        """
        Return the transition kinds that would currently succeed, in declaration order.
        """
        with with_lock(self._lock):
            available = []
            for kind in TransitionKind:
                probe = Event(kind)
                if select_transition(self._table, self._state, probe, self._data) is not None:
                    available.append(kind)
            return available

    def reset(self) -> None:
        """Put the tram back into ``idle`` with nobody aboard."""
        with with_lock(self._lock):
            self._state = TramState.IDLE
            self._data = TramData()

    def __repr__(self) -> str:
        snapshot = self.get_state()
        return f"TramFSM(state={snapshot.state}, passengers={snapshot.data.passengers})"


def _as_event(event: Union[Event, TransitionKind, str], payload: Optional[Mapping[str, Any]]) -> Event:
    if isinstance(event, Event):
        if payload is None:
            return event
        return Event(event.kind, {**event.payload, **payload})
    return Event(event, payload)
