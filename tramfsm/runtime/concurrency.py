# tramfsm/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Union

Lock = Union["threading.Lock", "threading.RLock"]


def get_lock(reentrant: bool = False) -> Lock:
    """
    Provide a new lock instance to be used for synchronization.

    :param reentrant: Return an RLock so the owning thread may re-acquire it,
        e.g. when a hook reads the machine it is being notified by.
    """
    return threading.RLock() if reentrant else threading.Lock()


@contextmanager
def with_lock(lock: Lock):
    """
    Acquire the given lock upon entry and release it upon exit.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()
