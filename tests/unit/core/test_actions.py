# tests/unit/core/test_actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging

import pytest

from tramfsm.core.actions import read_count, update_passengers
from tramfsm.core.events import Event
from tramfsm.core.states import TramData


@pytest.mark.parametrize(
    "value, expected",
    [
        (4, 4),
        (0, 0),
        (2.0, 2),
        ("7", 7),
        (" 3 ", 3),
        (None, 0),
        ("many", 0),
        (2.5, 0),
        (True, 0),
        ([1], 0),
        (-3, 0),
        ("-3", 0),
    ],
)
def test_read_count(value, expected):
    assert read_count({"passengers_entered": value}, "passengers_entered") == expected


def test_read_count_missing_key():
    assert read_count({}, "passengers_exited") == 0


def test_read_count_warns_on_bad_value(caplog):
    with caplog.at_level(logging.WARNING, logger="tramfsm.core.actions"):
        read_count({"passengers_exited": "lots"}, "passengers_exited")
    assert "passengers_exited" in caplog.text


def test_update_passengers():
    data = TramData(passengers=10)
    update_passengers(Event("close_doors", {"passengers_entered": 2, "passengers_exited": 5}), data)
    assert data.passengers == 7


def test_update_passengers_can_go_negative(caplog):
    data = TramData(passengers=1)
    with caplog.at_level(logging.WARNING, logger="tramfsm.core.actions"):
        update_passengers(Event("close_doors", {"passengers_exited": 3}), data)
    assert data.passengers == -2
    assert "negative" in caplog.text
