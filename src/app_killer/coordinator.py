"""
Coordinator - Wire primitives, flows, dispatcher and watchdog to a context.

Uses the factory pattern for testability: each call builds a fresh set of
components around the given context and supervisor. Order matters: the
watchdog filters go in before any endpoint exists, so a disconnect can never
be routed to a flow.
"""

from dataclasses import dataclass

import structlog

from .config import KillerConfig
from .context import BusContext
from .contracts import ScriptRunnerProtocol
from .dispatcher import Dispatcher
from .flows import build_flows
from .lifecycle.supervisor import Supervisor
from .operations import Operations
from .scripts import ScriptRunner
from .watchdog import DisconnectWatchdog

__all__ = ["Coordinator", "start_coordinator"]

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Coordinator:
    """Components built by start_coordinator."""

    context: BusContext
    operations: Operations
    dispatcher: Dispatcher
    watchdog: DisconnectWatchdog
    supervisor: Supervisor


def start_coordinator(
    context: BusContext,
    config: KillerConfig,
    supervisor: Supervisor,
    scripts: ScriptRunnerProtocol | None = None,
) -> Coordinator:
    """Install the watchdog and register all endpoints.

    Args:
        context: Connections owned by the process
        config: Coordinator configuration
        supervisor: Receives terminating outcomes
        scripts: Script runner (defaults to a subprocess runner)

    Raises:
        RegistrationError: If a filter or endpoint cannot be registered
    """
    if scripts is None:
        scripts = ScriptRunner(timeout=config.script_timeout)

    operations = Operations(context, config, scripts)

    watchdog = DisconnectWatchdog(supervisor)
    watchdog.attach(context)

    dispatcher = Dispatcher(build_flows(operations), supervisor)
    dispatcher.register(context.session, config.endpoint_paths)

    logger.info(
        "coordinator_ready",
        endpoints={endpoint.value: path for endpoint, path in config.endpoint_paths.items()},
    )
    return Coordinator(
        context=context,
        operations=operations,
        dispatcher=dispatcher,
        watchdog=watchdog,
        supervisor=supervisor,
    )
