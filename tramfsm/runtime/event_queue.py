# tramfsm/runtime/event_queue.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Optional


class EventQueue:
    """
    A FIFO queue feeding requests to an actor's worker thread.

    ``dequeue`` can block until an item arrives, which lets the worker wait
    without spinning.
    """

    def __init__(self) -> None:
        self._queue: Deque[Any] = deque()
        self._not_empty = threading.Condition(threading.Lock())

    def enqueue(self, item: Any) -> None:
        """
        Add an item to the back of the queue and wake one waiting consumer.
        """
        with self._not_empty:
            self._queue.append(item)
            self._not_empty.notify()

    def dequeue(self, timeout: Optional[float] = 0.0) -> Optional[Any]:
        """
        Remove and return the next item.

        :param timeout: Seconds to wait for an item. 0 returns immediately and
            None waits indefinitely.
        :return: The next item, or None if the queue stayed empty.
        """
        with self._not_empty:
            if timeout != 0.0:
                self._not_empty.wait_for(lambda: self._queue, timeout=timeout)
            if self._queue:
                return self._queue.popleft()
            return None

    def is_empty(self) -> bool:
        with self._not_empty:
            return not self._queue

    def clear(self) -> list:
        """Remove and return every pending item."""
        with self._not_empty:
            pending = list(self._queue)
            self._queue.clear()
            return pending

    def __len__(self) -> int:
        with self._not_empty:
            return len(self._queue)
