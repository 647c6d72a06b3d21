"""Script runner contract: run an opaque executable, report success."""

from typing import Protocol, runtime_checkable

__all__ = ["ScriptRunnerProtocol"]


@runtime_checkable
class ScriptRunnerProtocol(Protocol):
    def run(self, path: str) -> bool:
        """Run path with itself as its only argument; True on exit status 0."""
        ...
