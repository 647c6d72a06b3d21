"""
D-Bus Transport - BusTransport over dbus-python's low-level message API.

Messages are built with dbus.lowlevel so no introspection or proxy objects
are involved: signals and replies are queued with send_message, the save
call uses send_message_with_reply_and_block, endpoints are raw object-path
handlers and the watchdog is a message filter.

Connections are told not to exit the process on disconnect; the watchdog
filter is the single owner of that decision.
"""

from typing import Any

import dbus
import dbus.bus
import dbus.lowlevel
import dbus.mainloop.glib
import structlog
from dbus.exceptions import DBusException

from ..config import KillerConfig, session_bus_address
from ..context import BusContext
from ..contracts import EndpointHandler, EventFilter
from ..errors import CallTimeoutError, RegistrationError, StartupError, TransportError
from ..model import InboundEvent

__all__ = ["DBusTransport", "connect_buses", "NO_REPLY_ERROR"]

logger = structlog.get_logger(__name__)

NO_REPLY_ERROR = "org.freedesktop.DBus.Error.NoReply"


def _expects_reply(message: Any) -> bool:
    return (
        message.get_type() == dbus.lowlevel.MESSAGE_TYPE_METHOD_CALL
        and not message.get_no_reply()
    )


def _to_event(message: Any) -> InboundEvent:
    return InboundEvent(
        is_signal=message.get_type() == dbus.lowlevel.MESSAGE_TYPE_SIGNAL,
        interface=message.get_interface(),
        member=message.get_member(),
        path=message.get_path(),
    )


class DBusTransport:
    """One dbus-python connection exposed as a BusTransport.

    Args:
        connection: dbus.bus.BusConnection (SessionBus or SystemBus)
        scope: "session" or "system"
    """

    def __init__(self, connection: Any, scope: str) -> None:
        self._conn = connection
        self._scope = scope

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def connection(self) -> Any:
        return self._conn

    # ─────────────────────────────────────────────────────────────────
    # Outbound
    # ─────────────────────────────────────────────────────────────────

    def send_signal(self, path: str, interface: str, member: str) -> None:
        message = dbus.lowlevel.SignalMessage(path, interface, member)
        self._send(message, f"{interface}.{member}")

    def call_blocking(
        self,
        service: str,
        path: str,
        interface: str,
        method: str,
        timeout: float,
    ) -> None:
        message = dbus.lowlevel.MethodCallMessage(service, path, interface, method)
        try:
            self._conn.send_message_with_reply_and_block(message, timeout)
        except DBusException as e:
            if e.get_dbus_name() == NO_REPLY_ERROR:
                raise CallTimeoutError(f"{interface}.{method}", timeout) from e
            raise TransportError(f"Call to {interface}.{method} failed: {e}") from e

    def send_reply(self, reply_handle: Any) -> None:
        self._send(dbus.lowlevel.MethodReturnMessage(reply_handle), "method return")

    def send_error(self, reply_handle: Any, error_name: str, message: str | None = None) -> None:
        self._send(dbus.lowlevel.ErrorMessage(reply_handle, error_name, message), error_name)

    def _send(self, message: Any, what: str) -> None:
        # send_message reports a message that could not be queued as MemoryError
        try:
            self._conn.send_message(message)
        except (DBusException, MemoryError) as e:
            raise TransportError(f"Could not send {what} on {self._scope} bus: {e}") from e

    # ─────────────────────────────────────────────────────────────────
    # Inbound
    # ─────────────────────────────────────────────────────────────────

    def register_endpoint(self, path: str, handler: EndpointHandler) -> None:
        def on_message(connection: Any, message: Any) -> None:
            reply_handle = message if _expects_reply(message) else None
            handler(reply_handle, message.get_member(), message.get_sender())

        try:
            self._conn._register_object_path(path, on_message, None)
        except (KeyError, MemoryError) as e:
            raise RegistrationError(path, str(e)) from e

    def add_filter(self, event_filter: EventFilter) -> None:
        def on_message(connection: Any, message: Any) -> int:
            if event_filter(_to_event(message)):
                return dbus.lowlevel.HANDLER_RESULT_HANDLED
            return dbus.lowlevel.HANDLER_RESULT_NOT_YET_HANDLED

        try:
            self._conn.add_message_filter(on_message)
        except MemoryError as e:
            raise RegistrationError(f"{self._scope} bus filter", str(e)) from e

    def claim_name(self, name: str) -> None:
        """Become primary owner of a well-known name.

        Raises:
            RegistrationError: If the name is owned elsewhere or the call fails
        """
        try:
            result = self._conn.request_name(name, dbus.bus.NAME_FLAG_DO_NOT_QUEUE)
        except DBusException as e:
            raise RegistrationError(name, str(e)) from e

        if result not in (
            dbus.bus.REQUEST_NAME_REPLY_PRIMARY_OWNER,
            dbus.bus.REQUEST_NAME_REPLY_ALREADY_OWNER,
        ):
            raise RegistrationError(name, f"name request answered with code {result}")
        logger.info("bus_name_acquired", name=name, scope=self._scope)


def _open(factory: Any, scope: str) -> DBusTransport:
    try:
        connection = factory()
    except DBusException as e:
        raise StartupError(f"Could not connect to the {scope} bus: {e}") from e
    connection.set_exit_on_disconnect(False)
    logger.debug("bus_connected", scope=scope)
    return DBusTransport(connection, scope)


def connect_buses(config: KillerConfig) -> BusContext:
    """Open both connections with GLib main loop integration.

    Raises:
        StartupError: If the session bus address is missing or a bus is unreachable
    """
    if session_bus_address() is None:
        raise StartupError("DBUS_SESSION_BUS_ADDRESS is not defined")

    dbus.mainloop.glib.DBusGMainLoop(set_as_default=True)
    session = _open(dbus.SessionBus, "session")
    system = _open(dbus.SystemBus, "system")
    return BusContext(session=session, system=system)
