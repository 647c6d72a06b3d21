"""
Bus - dbus-python implementation of the transport contract.

Imported only by the CLI at runtime; the rest of the package talks to
contracts.BusTransport.
"""

from .dbus_transport import NO_REPLY_ERROR, DBusTransport, connect_buses

__all__ = ["DBusTransport", "NO_REPLY_ERROR", "connect_buses"]
