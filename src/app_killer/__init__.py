"""
app-killer - Session coordinator for disruptive lifecycle events.

Listens on the session bus for locale change, backup restore and factory
reset (RFS) requests, asks running applications to exit, runs the matching
recovery script, then replies or exits so bus activation can restart it.
"""

__version__ = "1.0.0"

from .config import KillerConfig, config

__all__ = [
    "__version__",
    "KillerConfig",
    "config",
]
