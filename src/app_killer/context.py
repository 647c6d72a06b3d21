"""
Bus Context - The two connections the coordinator owns.

Built once at startup and handed to every component that needs the bus.
Nothing downstream creates, replaces or closes a connection.
"""

from dataclasses import dataclass

from .contracts import BusTransport
from .errors import StartupError

__all__ = ["BusContext"]


@dataclass(frozen=True)
class BusContext:
    """Session-scope and system-scope connections.

    Raises:
        StartupError: If either connection is missing
    """

    session: BusTransport
    system: BusTransport

    def __post_init__(self) -> None:
        if self.session is None:
            raise StartupError("session bus connection is not available")
        if self.system is None:
            raise StartupError("system bus connection is not available")

    @property
    def transports(self) -> tuple[BusTransport, BusTransport]:
        """Both connections, session first."""
        return (self.session, self.system)
