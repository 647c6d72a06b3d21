"""
Transport Protocol - Contract for one long-lived bus connection.

The coordinator holds two of these (session scope and system scope) for its
whole lifetime. Everything the flows and the watchdog need from the bus goes
through this interface, so tests can substitute a recording fake and the
production adapter can stay a thin wrapper over dbus-python.

Failure reporting:
- send_* methods raise TransportError when the message cannot be queued
- call_blocking raises CallTimeoutError when no reply arrives in time and
  TransportError for any other failure (including an error reply)
- register_endpoint / add_filter raise RegistrationError
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from ..model import InboundEvent

__all__ = ["BusTransport", "EndpointHandler", "EventFilter"]

# Receives (reply_handle, member, sender) for each message on a registered
# path; reply_handle is None when the caller expects no reply
EndpointHandler = Callable[[Any, str | None, str | None], None]

# Receives every inbound event; returns True when the event was consumed
EventFilter = Callable[[InboundEvent], bool]


@runtime_checkable
class BusTransport(Protocol):
    """Operations available on a single bus connection.

    Example:
        transport.send_signal("/com/example", "com.example", "exit")
        transport.call_blocking(
            "com.example.nav", "/com/example/nav", "com.example.nav",
            "save", timeout=5.0,
        )
    """

    @property
    def scope(self) -> str:
        """Connection scope label: 'session' or 'system'."""
        ...

    def send_signal(self, path: str, interface: str, member: str) -> None:
        """Queue a signal without payload. Fire-and-forget."""
        ...

    def call_blocking(
        self,
        service: str,
        path: str,
        interface: str,
        method: str,
        timeout: float,
    ) -> None:
        """Issue a method call and block until the reply or the timeout."""
        ...

    def send_reply(self, reply_handle: Any) -> None:
        """Queue an empty method return for the request behind reply_handle."""
        ...

    def send_error(self, reply_handle: Any, error_name: str, message: str | None = None) -> None:
        """Queue a named error reply for the request behind reply_handle."""
        ...

    def register_endpoint(self, path: str, handler: EndpointHandler) -> None:
        """Route every message addressed to path into handler."""
        ...

    def add_filter(self, event_filter: EventFilter) -> None:
        """Run event_filter against every inbound message before routing."""
        ...
