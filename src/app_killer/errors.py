"""Exception types raised by the transport and during startup."""

__all__ = [
    "AppKillerError",
    "CallTimeoutError",
    "RegistrationError",
    "StartupError",
    "TransportError",
]


class AppKillerError(Exception):
    """Base exception for app-killer."""


class TransportError(AppKillerError):
    """A message could not be delivered to the bus."""


class CallTimeoutError(TransportError):
    """A blocking call got no reply within its bound."""

    def __init__(self, method: str, timeout: float):
        self.method = method
        self.timeout = timeout
        super().__init__(f"No reply to '{method}' within {timeout}s")


class StartupError(AppKillerError):
    """A startup precondition is not met (missing bus address, no connection)."""


class RegistrationError(StartupError):
    """An endpoint, filter or bus name could not be registered."""

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Could not register '{target}': {reason}")
