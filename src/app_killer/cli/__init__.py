"""
CLI - Command-line interface for app-killer.

Commands:
    app-killer run           Run the coordinator (exec line of the bus activation file)
    app-killer request X     Invoke endpoint X (locale, restore, rfs) and print the reply
    app-killer config        Show effective configuration

Example:
    $ app-killer request restore
    restore: done

    $ app-killer request locale
    Error: locale failed: org.freedesktop.DBus.Error.NoReply
"""

from .main import main

__all__ = ["main"]
