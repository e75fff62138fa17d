# tramfsm/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, List, Optional

from tramfsm.core.states import TramState

logger = logging.getLogger(__name__)


class HookManager:
    """
    Manages the registration and execution of hooks that listen to tram
    lifecycle events (on_enter, on_exit, on_error). Users can attach logging,
    monitoring, or custom side effects without altering core logic.

    A hook is any object with some of ``on_enter(state)``, ``on_exit(state)``
    and ``on_error(error)``. Exceptions raised by a hook are logged and do not
    affect the transition that triggered it.
    """

    def __init__(self, hooks: Optional[List[Any]] = None) -> None:
        self._hooks: List[Any] = list(hooks or [])

    @property
    def hooks(self) -> List[Any]:
        return list(self._hooks)

    def register_hook(self, hook: Any) -> None:
        """
        Add a new hook to the manager's list of hooks.
        """
        self._hooks.append(hook)

    def execute_on_enter(self, state: TramState) -> None:
        self._invoke("on_enter", state)

    def execute_on_exit(self, state: TramState) -> None:
        self._invoke("on_exit", state)

    def execute_on_error(self, error: Exception) -> None:
        self._invoke("on_error", error)

    def _invoke(self, method: str, arg: Any) -> None:
        for hook in self._hooks:
            fn = getattr(hook, method, None)
            if fn is None:
                continue
            try:
                fn(arg)
            except Exception:
                logger.exception("Hook %r failed in %s", hook, method)


class LoggingHook:
    """Routes lifecycle notifications to a logger."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self._log = log or logger
        self._level = level

    def on_enter(self, state: TramState) -> None:
        self._log.log(self._level, "enter %s", state)

    def on_exit(self, state: TramState) -> None:
        self._log.log(self._level, "exit %s", state)

    def on_error(self, error: Exception) -> None:
        self._log.warning("rejected: %r", error)
