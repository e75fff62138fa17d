# tests/integration/test_tram_properties.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from tramfsm.core.errors import InvalidTransition
from tramfsm.core.events import TransitionKind
from tramfsm.core.state_machine import TramFSM
from tramfsm.core.states import TramState

counts = st.integers(min_value=0, max_value=50)
requests = st.lists(
    st.tuples(st.sampled_from(list(TransitionKind)), counts, counts),
    max_size=60,
)


@pytest.mark.property
@given(requests)
@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_passengers_change_only_on_door_close(steps):
    m = TramFSM()
    for kind, entered, exited in steps:
        before = m.get_state()
        payload = {"passengers_entered": entered, "passengers_exited": exited}
        try:
            after_state = m.apply_transition(kind, payload)
        except InvalidTransition:
            assert m.get_state() == before
            continue
        after = m.get_state()
        assert after.state is after_state
        if kind is TransitionKind.CLOSE_DOORS:
            assert before.state is TramState.OPEN
            assert after.data.passengers == before.data.passengers + entered - exited
        else:
            assert after.data.passengers == before.data.passengers


@pytest.mark.property
@given(requests)
@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_final_state_is_absorbing(steps):
    m = TramFSM()
    m.apply_transition("power_on")
    m.apply_transition("power_off")
    for kind, entered, exited in steps:
        with pytest.raises(InvalidTransition):
            m.apply_transition(kind, {"passengers_entered": entered, "passengers_exited": exited})
    assert m.current_state is TramState.FINAL_STATE
    assert m.passengers == 0


@pytest.mark.property
@given(st.integers(min_value=-100, max_value=100))
@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_power_off_is_total_over_ready(passengers):
    m = TramFSM()
    m.apply_transition("power_on")
    m.apply_transition("open_doors")
    if passengers >= 0:
        m.apply_transition("close_doors", {"passengers_entered": passengers})
    else:
        m.apply_transition("close_doors", {"passengers_exited": -passengers})
    expected = TramState.FINAL_STATE if passengers == 0 else TramState.READY
    assert m.apply_transition("power_off") is expected


@pytest.mark.property
@given(st.sampled_from([k for k in TransitionKind if k is not TransitionKind.POWER_ON]))
@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_idle_accepts_only_power_on(kind):
    m = TramFSM()
    with pytest.raises(InvalidTransition):
        m.apply_transition(kind)
    assert m.current_state is TramState.IDLE
