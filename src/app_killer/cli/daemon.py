"""
CLI Daemon - Run the coordinator in the foreground.

The coordinator is started on demand by D-Bus activation, so there is no
forking or PID file: the bus name guarantees a single instance.

Exit codes:
    0  Intentional termination (flow finished, signal, loop returned)
    1  Startup, registration or bus disconnect failure
"""

import signal

import structlog

from ..config import KillerConfig
from ..coordinator import start_coordinator
from ..errors import RegistrationError, StartupError
from ..lifecycle import Supervisor
from ..logs import configure_logging

__all__ = ["run_daemon"]

logger = structlog.get_logger(__name__)


def run_daemon(config: KillerConfig, log_to_file: bool = True) -> int:
    """Connect, register and serve until a flow or the watchdog terminates.

    Args:
        config: Coordinator configuration
        log_to_file: Also write the rotating JSON log

    Returns:
        Exit code for the process
    """
    configure_logging(config, log_to_file=log_to_file)

    # dbus-python and GLib are only needed once the daemon actually starts
    from gi.repository import GLib

    from ..bus import connect_buses

    try:
        context = connect_buses(config)
    except StartupError as e:
        logger.critical("startup_failed", error=str(e))
        return 1

    supervisor = Supervisor(GLib.MainLoop())

    try:
        start_coordinator(context, config, supervisor)
        context.session.claim_name(config.service_name)
    except RegistrationError as e:
        logger.critical("registration_failed", target=e.target, error=e.reason)
        return 1

    for sig in (signal.SIGTERM, signal.SIGINT):
        GLib.unix_signal_add(GLib.PRIORITY_HIGH, sig, supervisor.handle_signal, sig)

    logger.info("app_killer_started", service=config.service_name)
    exit_code = supervisor.run()
    logger.info("app_killer_exiting", exit_code=exit_code, reason=supervisor.reason)
    return exit_code
