"""CLI entry point for earnmove."""

import argparse
import asyncio
import sys

from earnmove.agent import run_once, run_scheduled
from earnmove.config import Settings, get_settings
from earnmove.core.logging import setup_logging


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return parsed


def _non_negative_float(value: str) -> float:
    parsed = float(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="earnmove",
        description="Cache average earnings moves and next earnings dates",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Process the symbol universe once")
    run.add_argument("--symbols", help="Comma-separated symbols instead of the exchange list")
    run.add_argument("--batch-size", type=_positive_int, help="Symbols per concurrent group")
    run.add_argument(
        "--cooldown", type=_non_negative_float, help="Seconds to wait between groups"
    )

    schedule = subparsers.add_parser("schedule", help="Run on a cron schedule until stopped")
    schedule.add_argument("--cron", help="Crontab expression (UTC)")

    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of ``settings`` with CLI flags applied."""
    update: dict[str, object] = {}
    if getattr(args, "symbols", None):
        update["symbols"] = Settings.parse_symbols(args.symbols)
    if getattr(args, "batch_size", None) is not None:
        update["batch_size"] = args.batch_size
    if getattr(args, "cooldown", None) is not None:
        update["batch_cooldown_seconds"] = args.cooldown
    if getattr(args, "cron", None):
        update["schedule_cron"] = args.cron
    return settings.model_copy(update=update) if update else settings


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)
    setup_logging(settings)

    if args.command == "run":
        sys.exit(asyncio.run(run_once(settings)))

    try:
        asyncio.run(run_scheduled(settings))
    except KeyboardInterrupt:
        pass
