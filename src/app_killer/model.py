"""
Model - Value types shared by the coordinator.

Nothing here talks to the bus. Requests and inbound events are built by the
transport adapter; outcomes and terminations are produced by the primitives,
flows and watchdog and consumed by their callers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "Endpoint",
    "ErrorKind",
    "InboundEvent",
    "OperationOutcome",
    "Request",
    "ScriptId",
    "Termination",
    "LOCAL_INTERFACE",
    "DISCONNECTED_MEMBER",
]

# Bus-local interface on which the transport reports its own disconnection
LOCAL_INTERFACE = "org.freedesktop.DBus.Local"
DISCONNECTED_MEMBER = "Disconnected"


class Endpoint(str, Enum):
    """Administrative endpoints, one per flow."""

    LOCALE_CHANGE = "locale"
    RESTORE = "restore"
    RFS_SHUTDOWN = "rfs"


class ScriptId(str, Enum):
    """External recovery scripts."""

    LOCALE = "locale"
    RESTORE = "restore"
    RFS = "rfs"


class ErrorKind(str, Enum):
    """Selects the error name attached to an error reply."""

    LOCALE_ERROR = "locale"
    RESTORE_ERROR = "restore"
    RFS_SHUTDOWN_ERROR = "rfs_shutdown"


class OperationOutcome(str, Enum):
    """Result of one orchestration primitive."""

    SUCCESS = "success"
    TRANSPORT_FAILURE = "transport_failure"
    TIMEOUT = "timeout"
    SCRIPT_FAILURE = "script_failure"

    @property
    def ok(self) -> bool:
        return self is OperationOutcome.SUCCESS


class Termination(str, Enum):
    """What the supervising loop should do after a flow or filter returns."""

    CONTINUE = "continue"
    TERMINATE_GRACEFULLY = "terminate_gracefully"
    TERMINATE_FATALLY = "terminate_fatally"

    @property
    def exit_code(self) -> int | None:
        """Process exit code, or None when the process keeps serving."""
        if self is Termination.TERMINATE_GRACEFULLY:
            return 0
        if self is Termination.TERMINATE_FATALLY:
            return 1
        return None

    @property
    def terminates(self) -> bool:
        return self is not Termination.CONTINUE


@dataclass(slots=True, frozen=True)
class Request:
    """One inbound invocation of an endpoint.

    Attributes:
        endpoint: Which flow to run
        reply_handle: Opaque transport handle used to address replies;
            None when the caller sent a signal or asked for no reply
        member: Invoked method or signal name (diagnostics only)
        sender: Unique bus name of the caller (diagnostics only)
    """

    endpoint: Endpoint
    reply_handle: Any = None
    member: str | None = None
    sender: str | None = None

    @property
    def expects_reply(self) -> bool:
        return self.reply_handle is not None


@dataclass(slots=True, frozen=True)
class InboundEvent:
    """Transport-neutral view of any message arriving on a connection."""

    is_signal: bool
    interface: str | None = None
    member: str | None = None
    path: str | None = None

    @property
    def is_disconnect(self) -> bool:
        """True when the connection reports that it lost the bus."""
        return (
            self.is_signal
            and self.interface == LOCAL_INTERFACE
            and self.member == DISCONNECTED_MEMBER
        )
