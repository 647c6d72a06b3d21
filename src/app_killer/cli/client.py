"""
CLI Client - Issue an administrative request to the coordinator.

Sends one method call to an endpoint and waits for the reply. Locale change
and RFS shutdown normally end with the coordinator exiting, so "no reply"
or "disconnected" errors are expected there.
"""

import sys
from typing import Any

import structlog

from ..config import KillerConfig
from ..model import Endpoint

__all__ = ["print_error", "send_request"]

logger = structlog.get_logger(__name__)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


def send_request(
    config: KillerConfig,
    endpoint: Endpoint,
    timeout: float = 120.0,
    bus: Any = None,
) -> int:
    """Call endpoint on the coordinator and report the reply.

    Args:
        config: Supplies service name, interface and endpoint paths
        endpoint: Endpoint to invoke
        timeout: Seconds to wait for the reply
        bus: Session bus connection (opened on demand if None)

    Returns:
        0 on a success reply, 1 on an error reply or transport failure
    """
    import dbus
    import dbus.lowlevel
    from dbus.exceptions import DBusException

    if bus is None:
        try:
            bus = dbus.SessionBus()
        except DBusException as e:
            print_error(f"Cannot connect to the session bus: {e}")
            return 1

    path = config.endpoint_paths[endpoint]
    message = dbus.lowlevel.MethodCallMessage(
        config.service_name, path, config.request_interface, endpoint.value
    )
    logger.debug("request_sending", endpoint=endpoint.value, path=path, timeout=timeout)

    try:
        bus.send_message_with_reply_and_block(message, timeout)
    except DBusException as e:
        print_error(f"{endpoint.value} failed: {e.get_dbus_name()}")
        return 1

    print(f"{endpoint.value}: done")
    return 0
