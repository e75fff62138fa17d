# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading
from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def fsm():
    """A fresh tram in the idle state."""
    from tramfsm.core.state_machine import TramFSM

    return TramFSM()


@pytest.fixture
def ready_fsm(fsm):
    """A powered-on tram with nobody aboard."""
    fsm.apply_transition("power_on")
    return fsm


@pytest.fixture
def loaded_fsm(ready_fsm):
    """A ready tram carrying five passengers."""
    ready_fsm.apply_transition("open_doors")
    ready_fsm.apply_transition("close_doors", {"passengers_entered": 5})
    return ready_fsm


@pytest.fixture
def dummy_hooks():
    """A hook mock with on_enter, on_exit and on_error."""
    hook = MagicMock()
    hook.on_enter = MagicMock()
    hook.on_exit = MagicMock()
    hook.on_error = MagicMock()
    return hook


@pytest.fixture
def config():
    """Config with a short timeout so hung tests fail fast."""
    from tramfsm.config import TramConfig

    return TramConfig(name="test-tram", request_timeout=2.0)


@pytest.fixture
def actor(config):
    """A running thread-hosted tram, stopped after the test."""
    from tramfsm.runtime.actor import TramActor

    a = TramActor(config=config).start()
    yield a
    a.stop()


@pytest.fixture(autouse=True)
def clean_registry():
    yield
    from tramfsm.runtime import actor as actor_module

    for name, registered in list(actor_module._registry.items()):
        registered.stop()
        actor_module.unregister(name)


@pytest.fixture(autouse=True)
def cleanup_threads():
    yield
    # Cleanup any remaining threads after each test
    for thread in threading.enumerate():
        if thread != threading.current_thread() and thread.is_alive() and thread.name.startswith("tram-"):
            thread.join(timeout=1.0)
