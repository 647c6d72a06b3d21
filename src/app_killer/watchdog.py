"""
Disconnect Watchdog - Exit when either bus connection is lost.

Installed as a message filter on both connections, so it sees every
inbound message before endpoint routing. A bus-local Disconnected signal is
fatal regardless of which connection reports it. The log severity differs
by scope (session: debug, system: critical); both terminate with exit 1.
"""

import structlog

from .context import BusContext
from .lifecycle.supervisor import Supervisor
from .model import InboundEvent, Termination

__all__ = ["DisconnectWatchdog"]

logger = structlog.get_logger(__name__)


class DisconnectWatchdog:
    """Pre-dispatch guard against losing the bus."""

    def __init__(self, supervisor: Supervisor) -> None:
        self._supervisor = supervisor

    def attach(self, context: BusContext) -> None:
        """Install the filter on both connections.

        Raises:
            RegistrationError: If a filter cannot be installed
        """
        for transport in context.transports:
            transport.add_filter(self._filter_for(transport.scope))
            logger.debug("watchdog_attached", scope=transport.scope)

    def _filter_for(self, scope: str):
        def event_filter(event: InboundEvent) -> bool:
            return self.inspect(scope, event).terminates

        return event_filter

    def inspect(self, scope: str, event: InboundEvent) -> Termination:
        """Check one inbound event from the connection labelled scope."""
        if not event.is_disconnect:
            return Termination.CONTINUE

        if scope == "system":
            logger.critical("bus_disconnected", scope=scope)
        else:
            logger.debug("bus_disconnected", scope=scope)

        self._supervisor.terminate(Termination.TERMINATE_FATALLY, f"{scope} bus disconnected")
        return Termination.TERMINATE_FATALLY
