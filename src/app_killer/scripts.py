"""
Script Runner - Execute the external recovery scripts.

Scripts are opaque: the only thing the coordinator learns from them is the
exit status. They inherit the daemon's stdout/stderr.
"""

import subprocess

import structlog

__all__ = ["ScriptRunner"]

logger = structlog.get_logger(__name__)


class ScriptRunner:
    """Runs a script synchronously and reports success.

    Args:
        timeout: Seconds the script may run; None or 0 means unbounded
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout or None

    def run(self, path: str) -> bool:
        """Run path with itself as argv[0] and no further arguments.

        Returns:
            True if the script exited with status 0
        """
        logger.debug("script_starting", script=path)
        try:
            completed = subprocess.run([path], check=False, timeout=self._timeout)
        except subprocess.TimeoutExpired:
            logger.error("script_timeout", script=path, timeout=self._timeout)
            return False
        except OSError as e:
            logger.error("script_not_started", script=path, error=str(e))
            return False

        if completed.returncode != 0:
            logger.error("script_failed", script=path, returncode=completed.returncode)
            return False

        logger.debug("script_finished", script=path)
        return True
