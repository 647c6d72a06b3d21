"""
Flows - One fixed-order state machine per administrative endpoint.

Every flow implements handle(request) -> Termination. Flows decide; they do
not exit the process. The supervisor acts on the returned Termination.

    locale change:  save state -> broadcast exit -> locale script   (always terminates)
    restore:        broadcast exit -> restore script -> reply       (never terminates)
    RFS shutdown:   broadcast exit -> RFS script                    (always terminates)
"""

from typing import Protocol, runtime_checkable

import structlog

from .model import Endpoint, ErrorKind, Request, ScriptId, Termination
from .operations import Operations

__all__ = [
    "Flow",
    "LocaleChangeFlow",
    "RestoreFlow",
    "RfsShutdownFlow",
    "build_flows",
]

logger = structlog.get_logger(__name__)


@runtime_checkable
class Flow(Protocol):
    """Uniform handler contract for an endpoint."""

    endpoint: Endpoint

    def handle(self, request: Request) -> Termination:
        ...


class LocaleChangeFlow:
    """Save window state, ask applications to exit, run the locale script.

    The process always exits afterwards and is restarted on demand by bus
    activation. A failed script gets no reply: nobody is left to receive it.
    """

    endpoint = Endpoint.LOCALE_CHANGE

    def __init__(self, ops: Operations) -> None:
        self._ops = ops

    def handle(self, request: Request) -> Termination:
        log = logger.bind(endpoint=self.endpoint.value, member=request.member)
        log.debug("flow_entered")

        if not self._ops.request_save_state().ok:
            log.error("save_state_not_confirmed")
            self._ops.reply_error(request, ErrorKind.LOCALE_ERROR, "save state")
            return Termination.TERMINATE_GRACEFULLY

        if not self._ops.broadcast_exit().ok:
            log.error("exit_signal_not_sent")
            self._ops.reply_error(request, ErrorKind.LOCALE_ERROR, "exit signal")
            return Termination.TERMINATE_GRACEFULLY

        if not self._ops.run_script(ScriptId.LOCALE).ok:
            log.error("locale_change_failed")
            return Termination.TERMINATE_GRACEFULLY

        log.info("locale_change_done")
        return Termination.TERMINATE_GRACEFULLY


class RestoreFlow:
    """Ask applications to exit and run the restore script, then reply.

    The caller always gets exactly one reply and the process keeps serving.
    """

    endpoint = Endpoint.RESTORE

    def __init__(self, ops: Operations) -> None:
        self._ops = ops

    def handle(self, request: Request) -> Termination:
        log = logger.bind(endpoint=self.endpoint.value, member=request.member)
        log.debug("flow_entered")

        if not self._ops.broadcast_exit().ok:
            log.error("exit_signal_not_sent")
            self._ops.reply_error(request, ErrorKind.RESTORE_ERROR, "exit signal")
            return Termination.CONTINUE

        if not self._ops.run_script(ScriptId.RESTORE).ok:
            log.error("restore_shutdown_failed")
            self._ops.reply_error(request, ErrorKind.RESTORE_ERROR, "restore script")
            return Termination.CONTINUE

        if not self._ops.reply_success(request).ok:
            log.error("success_reply_not_sent")
            # Most likely fails the same way; result is only logged
            self._ops.reply_error(request, ErrorKind.RESTORE_ERROR, "reply")
            return Termination.CONTINUE

        log.info("restore_shutdown_done")
        return Termination.CONTINUE


class RfsShutdownFlow:
    """Ask applications to exit and run the factory reset script.

    The process always exits afterwards. Success sends no reply; failures
    send the RFS error naming the step that failed.
    """

    endpoint = Endpoint.RFS_SHUTDOWN

    def __init__(self, ops: Operations) -> None:
        self._ops = ops

    def handle(self, request: Request) -> Termination:
        log = logger.bind(endpoint=self.endpoint.value, member=request.member)
        log.debug("flow_entered")

        if not self._ops.broadcast_exit().ok:
            log.error("exit_signal_not_sent")
            self._ops.reply_error(request, ErrorKind.RFS_SHUTDOWN_ERROR, "exit signal")
            return Termination.TERMINATE_GRACEFULLY

        if not self._ops.run_script(ScriptId.RFS).ok:
            log.error("rfs_shutdown_failed")
            self._ops.reply_error(request, ErrorKind.RFS_SHUTDOWN_ERROR, "rfs script")
            return Termination.TERMINATE_GRACEFULLY

        log.info("rfs_shutdown_done")
        return Termination.TERMINATE_GRACEFULLY


def build_flows(ops: Operations) -> dict[Endpoint, Flow]:
    """One flow instance per endpoint, sharing the same primitives."""
    flows: list[Flow] = [LocaleChangeFlow(ops), RestoreFlow(ops), RfsShutdownFlow(ops)]
    return {flow.endpoint: flow for flow in flows}
