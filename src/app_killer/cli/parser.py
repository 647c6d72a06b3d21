"""
CLI Parser - Argument parser for the app-killer command.

Defines all subcommands and their arguments.
"""

import argparse

from ..model import Endpoint

__all__ = ["create_parser"]


def _positive_float(value: str) -> float:
    """argparse type for timeouts that must be greater than zero."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero: {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="app-killer",
        description="Shut applications down for locale change, restore and factory reset",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # run
    run_parser = subparsers.add_parser("run", help="Run the coordinator on the session bus")
    run_parser.add_argument(
        "--log-level",
        default=None,
        help="Override APP_KILLER_LOG_LEVEL",
    )
    run_parser.add_argument(
        "--save-timeout",
        type=_positive_float,
        default=None,
        help="Seconds to wait for the save-state reply",
    )
    run_parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to stderr only",
    )

    # request
    request_parser = subparsers.add_parser("request", help="Send a request to a running coordinator")
    request_parser.add_argument(
        "endpoint",
        choices=[endpoint.value for endpoint in Endpoint],
        help="Endpoint to invoke",
    )
    request_parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=120.0,
        help="Seconds to wait for the reply (default: 120)",
    )

    # config
    subparsers.add_parser("config", help="Show effective configuration")

    return parser
