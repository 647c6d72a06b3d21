"""
Contracts - Interfaces between the coordinator and its collaborators.

The coordinator depends only on these protocols. The dbus-python adapter
and the subprocess script runner implement them in production; tests use
recording fakes.
"""

from .scripts import ScriptRunnerProtocol
from .transport import BusTransport, EndpointHandler, EventFilter

__all__ = [
    "BusTransport",
    "EndpointHandler",
    "EventFilter",
    "ScriptRunnerProtocol",
]
