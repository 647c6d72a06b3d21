"""
Supervisor - The only place the process decides to exit.

Flows and the disconnect watchdog return a Termination; whoever invoked
them hands it to the supervisor. The supervisor records the first
terminating request, stops the main loop, and run() returns the exit code
for the CLI to pass to sys.exit.

Also handles SIGTERM/SIGINT for a graceful stop.
"""

import signal
from typing import Protocol

import structlog

from ..model import Termination

__all__ = ["MainLoopProtocol", "Supervisor"]

logger = structlog.get_logger(__name__)


class MainLoopProtocol(Protocol):
    """The subset of GLib.MainLoop the supervisor drives."""

    def run(self) -> None: ...

    def quit(self) -> None: ...


class Supervisor:
    """Owns the main loop and the process exit code.

    Example:
        supervisor = Supervisor(GLib.MainLoop())
        dispatcher = Dispatcher(flows, supervisor)
        ...
        sys.exit(supervisor.run())
    """

    def __init__(self, loop: MainLoopProtocol | None = None) -> None:
        self._loop = loop
        self._termination: Termination | None = None
        self._reason: str | None = None
        self._signal_count = 0

    @property
    def termination(self) -> Termination | None:
        """Recorded terminating outcome, if any."""
        return self._termination

    @property
    def stopping(self) -> bool:
        """True once a terminating outcome has been recorded."""
        return self._termination is not None

    @property
    def reason(self) -> str | None:
        return self._reason

    def terminate(self, termination: Termination, reason: str) -> None:
        """Record a terminating outcome and stop the main loop.

        CONTINUE is ignored. The first request wins, except that a fatal
        termination overrides an earlier graceful one.
        """
        if not termination.terminates:
            return

        if self._termination is not None:
            if (
                termination is Termination.TERMINATE_FATALLY
                and self._termination is Termination.TERMINATE_GRACEFULLY
            ):
                logger.warning("termination_escalated", reason=reason, previous=self._reason)
                self._termination = termination
                self._reason = reason
            return

        self._termination = termination
        self._reason = reason
        logger.info(
            "termination_requested",
            outcome=termination.value,
            exit_code=termination.exit_code,
            reason=reason,
        )
        if self._loop is not None:
            self._loop.quit()

    def handle_signal(self, sig: signal.Signals) -> bool:
        """Translate SIGTERM/SIGINT into a graceful stop.

        Returns True so a GLib signal source stays installed.
        """
        self._signal_count += 1
        logger.info("signal_received", signal=sig.name, count=self._signal_count)
        self.terminate(Termination.TERMINATE_GRACEFULLY, f"signal {sig.name}")
        return True

    def run(self) -> int:
        """Run the main loop until something terminates it.

        Returns:
            Exit code for the process
        """
        if self._loop is None:
            raise RuntimeError("Supervisor has no main loop attached")

        if self._termination is None:
            logger.debug("main_loop_entering")
            self._loop.run()
            logger.debug("main_loop_returned")

        if self._termination is None:
            logger.warning("main_loop_returned_unexpectedly")
            return 0

        exit_code = self._termination.exit_code
        return 0 if exit_code is None else exit_code
