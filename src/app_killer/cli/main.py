"""
CLI Main - Entry point for the `app-killer` command.

Usage:
    app-killer run [--log-level L] [--save-timeout S] [--no-log-file]
    app-killer request {locale,restore,rfs} [--timeout S]
    app-killer config
"""

import dataclasses
import sys

from ..config import KillerConfig
from ..model import Endpoint
from .client import print_error, send_request
from .daemon import run_daemon
from .parser import create_parser

__all__ = ["main", "show_config"]


def show_config(config: KillerConfig) -> int:
    """Print effective configuration, one field per line."""
    for field in dataclasses.fields(config):
        print(f"{field.name} = {getattr(config, field.name)}")
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the app-killer CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()
    parsed = parser.parse_args(args)

    config = KillerConfig()

    if parsed.command is None:
        parser.print_help()
        return 0

    try:
        if parsed.command == "run":
            overrides = {}
            if parsed.log_level:
                overrides["log_level"] = parsed.log_level
            if parsed.save_timeout is not None:
                overrides["save_timeout"] = parsed.save_timeout
            if overrides:
                config = dataclasses.replace(config, **overrides)

            return run_daemon(config, log_to_file=not parsed.no_log_file)

        if parsed.command == "request":
            return send_request(config, Endpoint(parsed.endpoint), timeout=parsed.timeout)

        if parsed.command == "config":
            return show_config(config)
    except KeyboardInterrupt:
        return 130

    print_error(f"Unknown command: {parsed.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
