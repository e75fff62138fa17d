# tramfsm/core/diagram.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Iterable, List

from tramfsm.core.guards import describe
from tramfsm.core.states import TramState
from tramfsm.core.transitions import TRANSITION_TABLE, Transition


def to_mermaid(table: Iterable[Transition] = TRANSITION_TABLE) -> str:
    """
    Render a transition table as a Mermaid ``stateDiagram-v2``.

    Guarded rows carry their conditions in brackets after the event name, and
    the terminal state is linked to the end marker.
    """
    lines: List[str] = ["stateDiagram-v2", f"    [*] --> {TramState.IDLE}"]
    for t in table:
        label = t.trigger.value
        if t.guards:
            label += " [" + " and ".join(describe(g) for g in t.guards) + "]"
        lines.append(f"    {t.source} --> {t.target} : {label}")
    lines.append(f"    {TramState.FINAL_STATE} --> [*]")
    return "\n".join(lines) + "\n"
