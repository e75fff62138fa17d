# tramfsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from tramfsm.core.actions import update_passengers
from tramfsm.core.events import Event, TransitionKind
from tramfsm.core.guards import has_passengers, no_passengers
from tramfsm.core.states import TramData, TramState

Guard = Callable[[Event, TramData], bool]
Action = Callable[[Event, TramData], None]


class Transition:
    """
    One row of the transition table: a path from a source state to a target
    state triggered by an event kind, guarded by conditions and optionally
    updating the tram's data.
    """

    def __init__(
        self,
        source: TramState,
        trigger: TransitionKind,
        target: TramState,
        guards: Optional[List[Guard]] = None,
        actions: Optional[List[Action]] = None,
    ) -> None:
        """
        :param source: The state this row applies to.
        :param trigger: The event kind that fires it.
        :param target: The state entered when it fires.
        :param guards: Conditions that must all hold for the row to apply.
        :param actions: Data updates performed when the row fires.
        """
        self._source = source
        self._trigger = trigger
        self._target = target
        self._guards = guards if guards else []
        self._actions = actions if actions else []

    def matches(self, state: TramState, event: Event) -> bool:
        """True if this row is declared for ``(state, event.kind)``."""
        return self._source is state and self._trigger is event.kind

    def evaluate_guards(self, event: Event, data: TramData) -> bool:
        """
        :return: True if all guards pass for the event and current data.
        """
        return _GuardEvaluator().evaluate(self._guards, event, data)

    def execute_actions(self, event: Event, data: TramData) -> None:
        """
        Run the row's actions against ``data`` in declaration order.
        """
        _ActionExecutor().execute(self._actions, event, data)

    @property
    def source(self) -> TramState:
        return self._source

    @property
    def trigger(self) -> TransitionKind:
        return self._trigger

    @property
    def target(self) -> TramState:
        return self._target

    @property
    def guards(self) -> List[Guard]:
        return self._guards

    @property
    def actions(self) -> List[Action]:
        return self._actions

    def __repr__(self) -> str:
        return f"Transition({self._source} --{self._trigger}--> {self._target})"


class _GuardEvaluator:
    """
    Internal helper to evaluate a list of guard conditions.
    """

    def evaluate(self, guards: List[Guard], event: Event, data: TramData) -> bool:
        for g in guards:
            if not g(event, data):
                return False
        return True


class _ActionExecutor:
    """
    Internal helper running a transition's actions in order.
    """

    def execute(self, actions: List[Action], event: Event, data: TramData) -> None:
        for a in actions:
            a(event, data)


# Rows for the same (source, trigger) pair are tried in order.
TRANSITION_TABLE: Tuple[Transition, ...] = (
    Transition(TramState.IDLE, TransitionKind.POWER_ON, TramState.READY),
    Transition(TramState.READY, TransitionKind.POWER_OFF, TramState.FINAL_STATE, guards=[no_passengers]),
    Transition(TramState.READY, TransitionKind.POWER_OFF, TramState.READY, guards=[has_passengers]),
    Transition(TramState.READY, TransitionKind.MOVE, TramState.MOVING),
    Transition(TramState.MOVING, TransitionKind.STOP, TramState.READY),
    Transition(TramState.READY, TransitionKind.OPEN_DOORS, TramState.OPEN),
    Transition(TramState.OPEN, TransitionKind.CLOSE_DOORS, TramState.READY, actions=[update_passengers]),
)


def candidates(table: Iterable[Transition], state: TramState, event: Event) -> List[Transition]:
    """All rows declared for ``(state, event.kind)``, in table order."""
    return [t for t in table if t.matches(state, event)]


def select_transition(
    table: Sequence[Transition], state: TramState, event: Event, data: TramData
) -> Optional[Transition]:
    """
    Pick the first row for ``(state, event.kind)`` whose guards pass.

    :return: The chosen transition, or None if nothing applies.
    """
    for transition in candidates(table, state, event):
        if transition.evaluate_guards(event, data):
            return transition
    return None
