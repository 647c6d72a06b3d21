"""Tests for endpoint routing."""

import pytest

from app_killer.dispatcher import Dispatcher
from app_killer.errors import RegistrationError
from app_killer.flows import build_flows
from app_killer.model import Endpoint, Request, Termination


class RecordingFlow:
    """Flow returning a fixed termination."""

    def __init__(self, endpoint, result):
        self.endpoint = endpoint
        self.result = result
        self.requests = []

    def handle(self, request):
        self.requests.append(request)
        return self.result


@pytest.fixture
def flows():
    return {
        Endpoint.LOCALE_CHANGE: RecordingFlow(Endpoint.LOCALE_CHANGE, Termination.TERMINATE_GRACEFULLY),
        Endpoint.RESTORE: RecordingFlow(Endpoint.RESTORE, Termination.CONTINUE),
        Endpoint.RFS_SHUTDOWN: RecordingFlow(Endpoint.RFS_SHUTDOWN, Termination.TERMINATE_GRACEFULLY),
    }


@pytest.fixture
def dispatcher(flows, supervisor):
    return Dispatcher(flows, supervisor)


class TestConstruction:
    """Test flow table validation."""

    def test_rejects_missing_flow(self, flows, supervisor):
        del flows[Endpoint.RESTORE]

        with pytest.raises(ValueError, match="restore"):
            Dispatcher(flows, supervisor)


class TestRegister:
    """Test endpoint registration."""

    def test_registers_every_path(self, dispatcher, session, config):
        dispatcher.register(session, config.endpoint_paths)

        assert set(session.endpoints) == set(config.endpoint_paths.values())

    def test_missing_path(self, dispatcher, session, config):
        paths = dict(config.endpoint_paths)
        paths[Endpoint.RFS_SHUTDOWN] = ""

        with pytest.raises(RegistrationError, match="rfs"):
            dispatcher.register(session, paths)

    def test_transport_refusal_propagates(self, dispatcher, session, config):
        path = config.endpoint_paths[Endpoint.RESTORE]
        session.register_errors[path] = RegistrationError(path, "out of memory")

        with pytest.raises(RegistrationError):
            dispatcher.register(session, config.endpoint_paths)

    def test_handler_builds_request(self, dispatcher, flows, session, config, handle):
        dispatcher.register(session, config.endpoint_paths)

        session.deliver(
            config.endpoint_paths[Endpoint.RESTORE], reply_handle=handle, member="restore"
        )

        request = flows[Endpoint.RESTORE].requests[0]
        assert request.endpoint is Endpoint.RESTORE
        assert request.reply_handle is handle
        assert request.member == "restore"
        assert request.sender == ":1.42"


class TestDispatch:
    """Test routing and termination handoff."""

    def test_routes_to_matching_flow(self, dispatcher, flows):
        dispatcher.dispatch(Request(Endpoint.RESTORE))

        assert len(flows[Endpoint.RESTORE].requests) == 1
        assert flows[Endpoint.LOCALE_CHANGE].requests == []
        assert flows[Endpoint.RFS_SHUTDOWN].requests == []

    def test_continue_keeps_loop_running(self, dispatcher, supervisor, loop):
        result = dispatcher.dispatch(Request(Endpoint.RESTORE))

        assert result is Termination.CONTINUE
        assert supervisor.stopping is False
        assert loop.quit_calls == 0

    def test_termination_reaches_supervisor(self, dispatcher, supervisor, loop):
        result = dispatcher.dispatch(Request(Endpoint.RFS_SHUTDOWN))

        assert result is Termination.TERMINATE_GRACEFULLY
        assert supervisor.termination is Termination.TERMINATE_GRACEFULLY
        assert supervisor.reason == "rfs flow finished"
        assert loop.quit_calls == 1

    def test_no_dispatch_after_termination(self, dispatcher, flows, supervisor):
        dispatcher.dispatch(Request(Endpoint.LOCALE_CHANGE))

        result = dispatcher.dispatch(Request(Endpoint.RESTORE))

        assert result is Termination.TERMINATE_GRACEFULLY
        assert flows[Endpoint.RESTORE].requests == []

    def test_requests_run_sequentially_with_real_flows(self, ops, supervisor, journal):
        dispatcher = Dispatcher(build_flows(ops), supervisor)

        dispatcher.dispatch(Request(Endpoint.RESTORE, reply_handle="first"))
        dispatcher.dispatch(Request(Endpoint.RESTORE, reply_handle="second"))

        replies = [entry for entry in journal if entry[0] == "reply"]
        assert replies == [("reply", "first"), ("reply", "second")]
