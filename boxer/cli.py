"""Command line entry point for Boxer."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config_loader import load_config
from .log import configure_logging
from .services.boxer_service import BoxerService
from .services.scheduler import ConfigurationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="boxer", description="Time-boxing effects for the desktop")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Tick forever, firing effects on their schedule")
    _add_common_arguments(run)

    check = sub.add_parser("check", help="Validate the configuration and list commands")
    _add_common_arguments(check)

    fire = sub.add_parser("fire", help="Invoke a single command's effect once")
    _add_common_arguments(fire)
    fire.add_argument("name", help="Command name, e.g. wallpaper or menubar")
    fire.add_argument(
        "--index",
        type=int,
        default=0,
        help="Position within the interval to fire at (default: 0)",
    )

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the YAML configuration file (default: ~/boxer.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=argparse.SUPPRESS,
        help="Logging level (default: INFO)",
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_config(args.config)
        service = BoxerService(config)
    except (ConfigurationError, OSError) as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2

    with service:
        if args.command == "run":
            return _command_run(service)
        if args.command == "check":
            return _command_check(service)
        if args.command == "fire":
            return _command_fire(service, args.name, args.index)

    parser.error("unknown command")
    return 1


def _command_run(service: BoxerService) -> int:
    try:
        service.run_forever()
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        print("Interrupted, exiting...", file=sys.stderr)
    return 0


def _command_check(service: BoxerService) -> int:
    output = [
        {
            "name": command.name,
            "step_seconds": command.step.total_seconds(),
            "interval_seconds": command.interval.total_seconds(),
            "steps_per_interval": command.steps_per_interval,
        }
        for command in service.ticker.commands
    ]
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def _command_fire(service: BoxerService, name: str, index: int) -> int:
    for command in service.ticker.commands:
        if command.name != name:
            continue
        steps = command.steps_per_interval
        if not 0 <= index < steps:
            print(f"index must be between 0 and {steps - 1}", file=sys.stderr)
            return 2
        try:
            command.effect(index, steps)
        except Exception as exc:  # noqa: BLE001 - reported to the user
            print(f"{name} failed: {exc}", file=sys.stderr)
            return 1
        return 0

    print(f"no enabled command named {name!r}", file=sys.stderr)
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
