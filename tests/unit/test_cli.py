# tests/unit/test_cli.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from tramfsm.cli import main, parse_step


def test_parse_step():
    assert parse_step("power_on") == ("power_on", {})
    assert parse_step("close_doors:5") == ("close_doors", {"passengers_entered": "5"})
    assert parse_step("close_doors:5:2") == (
        "close_doors",
        {"passengers_entered": "5", "passengers_exited": "2"},
    )
    assert parse_step("close_doors::2") == ("close_doors", {"passengers_exited": "2"})


def test_run_prints_replies(capsys):
    code = main(["run", "power_on", "move", "open_doors", "stop", "open_doors", "close_doors:5:0", "power_off"])
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out == [
        "power_on: ok ready",
        "move: ok moving",
        "open_doors: error invalid_transition",
        "stop: ok ready",
        "open_doors: ok open",
        "close_doors: ok ready",
        "power_off: ok ready",
        "final: ready passengers=5",
    ]


def test_strict_mode_fails_on_rejection(capsys):
    assert main(["run", "--strict", "stop"]) == 1
    assert main(["run", "--strict", "power_on", "power_off"]) == 0


def test_diagram(capsys):
    assert main(["diagram"]) == 0
    assert capsys.readouterr().out.startswith("stateDiagram-v2\n")


def test_bad_config(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.yaml"), "diagram"]) == 2
    assert "not found" in capsys.readouterr().err


def test_bad_log_level_override(capsys):
    assert main(["--log-level", "loud", "diagram"]) == 2
    err = capsys.readouterr().err
    assert "Unknown log level" in err
    assert "Traceback" not in err


def test_log_level_override_is_case_insensitive(capsys):
    assert main(["--log-level", "debug", "diagram"]) == 0
