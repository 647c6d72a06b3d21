"""
Lifecycle - Process termination management.

Handles:
- Recording the terminating outcome of flows and the watchdog
- Stopping the main loop and producing the exit code
- Graceful stop on SIGTERM/SIGINT

Example:
    from app_killer.lifecycle import Supervisor

    supervisor = Supervisor(GLib.MainLoop())
    ...
    sys.exit(supervisor.run())
"""

from .supervisor import MainLoopProtocol, Supervisor

__all__ = ["MainLoopProtocol", "Supervisor"]
