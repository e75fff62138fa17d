# tramfsm/cli.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Command line entry point.

    tramfsm run power_on open_doors close_doors:5:0 power_off
    tramfsm diagram
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from tramfsm.config import load_config
from tramfsm.core.actions import PASSENGERS_ENTERED, PASSENGERS_EXITED
from tramfsm.core.diagram import to_mermaid
from tramfsm.core.errors import ConfigError, InvalidTransition
from tramfsm.runtime.actor import TramActor


def parse_step(step: str) -> Tuple[str, Dict[str, Any]]:
    """
    Split ``event[:entered[:exited]]`` into an event name and a payload.

    Counts are passed through as strings; the tram decides how to read them.
    """
    name, *counts = step.split(":")
    payload: Dict[str, Any] = {}
    if len(counts) > 0 and counts[0] != "":
        payload[PASSENGERS_ENTERED] = counts[0]
    if len(counts) > 1 and counts[1] != "":
        payload[PASSENGERS_EXITED] = counts[1]
    return name, payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tramfsm", description="Drive a tram state machine.")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--log-level", help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Apply transitions in order and print each reply")
    run.add_argument("steps", nargs="+", metavar="EVENT[:ENTERED[:EXITED]]")
    run.add_argument("--strict", action="store_true", help="Exit with status 1 if any transition is rejected")

    sub.add_parser("diagram", help="Print the transition table as a Mermaid diagram")
    return parser


def run_steps(actor: TramActor, steps: List[str], out=None) -> int:
    """Apply each step through ``actor``; return the number of rejections."""
    out = out or sys.stdout
    rejected = 0
    for step in steps:
        name, payload = parse_step(step)
        try:
            state = actor.transition(name, payload)
            print(f"{name}: ok {state}", file=out)
        except InvalidTransition:
            rejected += 1
            print(f"{name}: error invalid_transition", file=out)
    state, data = actor.get_state()
    print(f"final: {state} passengers={data.passengers}", file=out)
    return rejected


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        if args.log_level:
            config = replace(config, log_level=args.log_level)
    except ConfigError as e:
        print(f"tramfsm: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "diagram":
        sys.stdout.write(to_mermaid())
        return 0

    with TramActor(config=config) as actor:
        rejected = run_steps(actor, args.steps)
    return 1 if args.strict and rejected else 0


if __name__ == "__main__":
    sys.exit(main())
