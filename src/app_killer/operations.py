"""
Orchestration Primitives - The steps flows are built from.

Each primitive performs exactly one bus or process action and converts
whatever went wrong into an OperationOutcome. Flows branch on outcomes and
never see transport exceptions.

Primitives:
- broadcast_exit: "applications should exit" signal on the session bus
- request_save_state: blocking save call to the task navigator
- run_script: execute one of the recovery scripts
- reply_success / reply_error: answer the request that started the flow
"""

import structlog

from .config import KillerConfig
from .context import BusContext
from .contracts import ScriptRunnerProtocol
from .errors import CallTimeoutError, TransportError
from .model import ErrorKind, OperationOutcome, Request, ScriptId

__all__ = ["Operations"]

logger = structlog.get_logger(__name__)


class Operations:
    """Orchestration primitives bound to one context and configuration.

    Example:
        ops = Operations(context, config, ScriptRunner())
        if ops.broadcast_exit().ok:
            ops.run_script(ScriptId.RESTORE)
    """

    def __init__(
        self,
        context: BusContext,
        config: KillerConfig,
        scripts: ScriptRunnerProtocol,
    ) -> None:
        self._context = context
        self._config = config
        self._scripts = scripts

    def broadcast_exit(self) -> OperationOutcome:
        """Ask cooperating applications to exit. No reply is expected."""
        logger.debug("broadcast_exit_sending", path=self._config.broadcast_path)
        try:
            self._context.session.send_signal(
                self._config.broadcast_path,
                self._config.broadcast_interface,
                self._config.broadcast_member,
            )
        except TransportError as e:
            logger.error("broadcast_exit_failed", error=str(e))
            return OperationOutcome.TRANSPORT_FAILURE
        logger.debug("broadcast_exit_sent")
        return OperationOutcome.SUCCESS

    def request_save_state(self) -> OperationOutcome:
        """Ask the task navigator to save window state, blocking for the reply.

        The wait is bounded by config.save_timeout. Both failure shapes are
        logged separately but callers act on them the same way.
        """
        try:
            self._context.session.call_blocking(
                self._config.save_service,
                self._config.save_path,
                self._config.save_interface,
                self._config.save_method,
                timeout=self._config.save_timeout,
            )
        except CallTimeoutError:
            logger.error(
                "save_state_no_reply",
                service=self._config.save_service,
                timeout=self._config.save_timeout,
            )
            return OperationOutcome.TIMEOUT
        except TransportError as e:
            logger.error("save_state_failed", service=self._config.save_service, error=str(e))
            return OperationOutcome.TRANSPORT_FAILURE
        return OperationOutcome.SUCCESS

    def run_script(self, script: ScriptId) -> OperationOutcome:
        """Run the script configured for the given identifier."""
        path = self._config.script_paths[script]
        if self._scripts.run(path):
            return OperationOutcome.SUCCESS
        return OperationOutcome.SCRIPT_FAILURE

    def reply_success(self, request: Request) -> OperationOutcome:
        """Send an empty method return to the caller."""
        if not request.expects_reply:
            logger.debug("reply_skipped", endpoint=request.endpoint.value)
            return OperationOutcome.SUCCESS
        try:
            self._context.session.send_reply(request.reply_handle)
        except TransportError as e:
            logger.error("reply_failed", endpoint=request.endpoint.value, error=str(e))
            return OperationOutcome.TRANSPORT_FAILURE
        return OperationOutcome.SUCCESS

    def reply_error(
        self,
        request: Request,
        kind: ErrorKind,
        detail: str | None = None,
    ) -> OperationOutcome:
        """Send the named error for kind to the caller.

        Args:
            request: Request being answered
            kind: Selects the error name
            detail: Optional human-readable text (which step failed)
        """
        if not request.expects_reply:
            logger.debug("error_reply_skipped", endpoint=request.endpoint.value, kind=kind.value)
            return OperationOutcome.SUCCESS
        error_name = self._config.error_names[kind]
        try:
            self._context.session.send_error(request.reply_handle, error_name, detail)
        except TransportError as e:
            logger.error("error_reply_failed", error_name=error_name, error=str(e))
            return OperationOutcome.TRANSPORT_FAILURE
        logger.debug("error_reply_sent", error_name=error_name)
        return OperationOutcome.SUCCESS
