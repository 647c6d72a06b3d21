"""Shared test fixtures."""

import tempfile
from pathlib import Path

import pytest

from app_killer.config import KillerConfig
from app_killer.context import BusContext
from app_killer.errors import RegistrationError
from app_killer.lifecycle import Supervisor
from app_killer.model import InboundEvent
from app_killer.operations import Operations


class FakeTransport:
    """Recording BusTransport.

    Every outbound action is appended to the shared journal as a tuple so
    tests can assert on ordering across transports and scripts. Setting one
    of the *_error attributes makes the matching method raise it.
    """

    def __init__(self, scope: str, journal: list):
        self._scope = scope
        self.journal = journal
        self.endpoints: dict = {}
        self.filters: list = []
        self.signal_error: Exception | None = None
        self.call_error: Exception | None = None
        self.reply_error: Exception | None = None
        self.error_reply_error: Exception | None = None
        self.register_errors: dict[str, Exception] = {}

    @property
    def scope(self) -> str:
        return self._scope

    def send_signal(self, path, interface, member):
        if self.signal_error is not None:
            raise self.signal_error
        self.journal.append(("signal", self._scope, path, interface, member))

    def call_blocking(self, service, path, interface, method, timeout):
        self.journal.append(("call", self._scope, service, method, timeout))
        if self.call_error is not None:
            raise self.call_error

    def send_reply(self, reply_handle):
        if self.reply_error is not None:
            raise self.reply_error
        self.journal.append(("reply", reply_handle))

    def send_error(self, reply_handle, error_name, message=None):
        self.journal.append(("error_attempt", reply_handle, error_name))
        if self.error_reply_error is not None:
            raise self.error_reply_error
        self.journal.append(("error", reply_handle, error_name, message))

    def register_endpoint(self, path, handler):
        if path in self.register_errors:
            raise self.register_errors[path]
        if path in self.endpoints:
            raise RegistrationError(path, "already registered")
        self.endpoints[path] = handler
        self.journal.append(("register", self._scope, path))

    def add_filter(self, event_filter):
        self.filters.append(event_filter)
        self.journal.append(("filter", self._scope))

    # Test helpers

    def deliver(self, path, reply_handle=None, member="call", sender=":1.42"):
        """Simulate an inbound message: filters first, then the endpoint."""
        event = InboundEvent(is_signal=False, member=member, path=path)
        for event_filter in self.filters:
            if event_filter(event):
                return
        self.endpoints[path](reply_handle, member, sender)

    def emit(self, event: InboundEvent) -> list[bool]:
        """Run every filter against event."""
        return [event_filter(event) for event_filter in self.filters]


class FakeScriptRunner:
    """Records script runs; results default to success."""

    def __init__(self, journal: list):
        self.journal = journal
        self.results: dict[str, bool] = {}

    def run(self, path: str) -> bool:
        self.journal.append(("script", path))
        return self.results.get(path, True)


class FakeLoop:
    """Stands in for GLib.MainLoop."""

    def __init__(self):
        self.ran = False
        self.quit_calls = 0

    def run(self):
        self.ran = True

    def quit(self):
        self.quit_calls += 1


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def config(temp_dir):
    """Create a test configuration with temp directory."""
    return KillerConfig(
        log_level="DEBUG",
        runtime_dir=temp_dir,
        save_timeout=0.5,
        locale_script="/test/locale.sh",
        restore_script="/test/restore.sh",
        rfs_script="/test/rfs.sh",
        script_timeout=0.0,
    )


@pytest.fixture
def journal():
    return []


@pytest.fixture
def session(journal):
    return FakeTransport("session", journal)


@pytest.fixture
def system(journal):
    return FakeTransport("system", journal)


@pytest.fixture
def context(session, system):
    return BusContext(session=session, system=system)


@pytest.fixture
def scripts(journal):
    return FakeScriptRunner(journal)


@pytest.fixture
def loop():
    return FakeLoop()


@pytest.fixture
def supervisor(loop):
    return Supervisor(loop)


@pytest.fixture
def ops(context, config, scripts):
    return Operations(context, config, scripts)


@pytest.fixture
def handle():
    """Opaque reply handle standing in for a method call message."""
    return object()
