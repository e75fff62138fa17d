# tramfsm/runtime/async_support.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Mapping, Optional, Union

from tramfsm.config import TramConfig
from tramfsm.core.errors import ActorNotRunningError, InvalidTransition
from tramfsm.core.events import TransitionKind
from tramfsm.core.state_machine import TramFSM
from tramfsm.core.states import Snapshot, TramState

logger = logging.getLogger(__name__)

_STOP = object()


class AsyncTramActor:
    """
    Asynchronous host for a TramFSM. A single task owns the machine and
    consumes requests from an asyncio.Queue, replying to each through a future.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        config: Optional[TramConfig] = None,
        fsm: Optional[TramFSM] = None,
        hooks: Optional[List[Any]] = None,
    ) -> None:
        self.config = config or TramConfig()
        self.name = name or self.config.name
        self._fsm = fsm or TramFSM(hooks=hooks)
        self._queue: Optional[asyncio.Queue] = None
        self._task: Optional[asyncio.Task] = None
        self._accepting = False

    @property
    def is_running(self) -> bool:
        return self._accepting and self._task is not None and not self._task.done()

    async def start(self) -> "AsyncTramActor":
        """Start the owning task on the running loop."""
        if self.is_running:
            return self
        self._queue = asyncio.Queue()
        self._accepting = True
        self._task = asyncio.create_task(self._run(), name=f"tram-{self.name}")
        logger.info("Async tram actor %r started", self.name)
        return self

    async def stop(self) -> None:
        """Stop accepting requests, answer what is already queued, then stop the owning task."""
        if not self.is_running:
            return
        self._accepting = False
        await self._queue.put(_STOP)
        await self._task
        self._task = None
        logger.info("Async tram actor %r stopped", self.name)

    async def get_state(self) -> Snapshot:
        return await self._call(("get_state", None, None))

    async def transition(
        self, event: Union[TransitionKind, str], payload: Optional[Mapping[str, Any]] = None
    ) -> TramState:
        """
        Apply a transition through the owning task.

        :raises InvalidTransition: If the tram rejected the transition.
        :raises ActorNotRunningError: If the actor is not running.
        :raises asyncio.TimeoutError: If no reply arrived within ``config.request_timeout``.
        """
        return await self._call(("transition", event, payload))

    async def _call(self, request: tuple) -> Any:
        if not self.is_running:
            raise ActorNotRunningError(f"Tram actor {self.name!r} is not running")
        reply = asyncio.get_running_loop().create_future()
        await self._queue.put((request, reply))
        return await asyncio.wait_for(reply, timeout=self.config.request_timeout)

    async def _run(self) -> None:
        while True:
            item = await self._queue.get()
            if item is _STOP:
                break
            self._handle(item)
        self._reject_pending()

    def _handle(self, item: tuple) -> None:
        (op, event, payload), reply = item
        if reply.done():
            return
        try:
            if op == "get_state":
                reply.set_result(self._fsm.get_state())
            else:
                reply.set_result(self._fsm.apply_transition(event, payload))
        except InvalidTransition as error:
            logger.warning("Tram %r rejected %s in state %s", self.name, error.event, error.state)
            reply.set_exception(error)
        except Exception as error:
            logger.exception("Tram %r failed handling %s", self.name, op)
            reply.set_exception(error)

    def _reject_pending(self) -> None:
        while not self._queue.empty():
            item = self._queue.get_nowait()
            if item is _STOP:
                continue
            _, reply = item
            if not reply.done():
                reply.set_exception(ActorNotRunningError(f"Tram actor {self.name!r} is not running"))

    async def __aenter__(self) -> "AsyncTramActor":
        return await self.start()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()
