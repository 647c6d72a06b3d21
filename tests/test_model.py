"""Tests for shared value types."""

from app_killer.model import (
    DISCONNECTED_MEMBER,
    LOCAL_INTERFACE,
    Endpoint,
    InboundEvent,
    OperationOutcome,
    Request,
    Termination,
)


class TestTermination:
    """Test termination exit codes."""

    def test_continue_has_no_exit_code(self):
        assert Termination.CONTINUE.exit_code is None
        assert Termination.CONTINUE.terminates is False

    def test_graceful_exits_zero(self):
        assert Termination.TERMINATE_GRACEFULLY.exit_code == 0
        assert Termination.TERMINATE_GRACEFULLY.terminates is True

    def test_fatal_exits_one(self):
        assert Termination.TERMINATE_FATALLY.exit_code == 1
        assert Termination.TERMINATE_FATALLY.terminates is True


class TestOperationOutcome:
    """Test outcome success flag."""

    def test_only_success_is_ok(self):
        assert OperationOutcome.SUCCESS.ok is True
        assert OperationOutcome.TRANSPORT_FAILURE.ok is False
        assert OperationOutcome.TIMEOUT.ok is False
        assert OperationOutcome.SCRIPT_FAILURE.ok is False


class TestRequest:
    """Test request reply handling."""

    def test_method_call_expects_reply(self):
        request = Request(Endpoint.RESTORE, reply_handle=object())

        assert request.expects_reply is True

    def test_signal_does_not_expect_reply(self):
        request = Request(Endpoint.RESTORE)

        assert request.expects_reply is False


class TestInboundEvent:
    """Test disconnect detection."""

    def test_local_disconnected_signal(self):
        event = InboundEvent(
            is_signal=True, interface=LOCAL_INTERFACE, member=DISCONNECTED_MEMBER
        )

        assert event.is_disconnect is True

    def test_method_call_with_same_names_is_not_disconnect(self):
        event = InboundEvent(
            is_signal=False, interface=LOCAL_INTERFACE, member=DISCONNECTED_MEMBER
        )

        assert event.is_disconnect is False

    def test_other_interface_is_not_disconnect(self):
        event = InboundEvent(
            is_signal=True, interface="org.freedesktop.DBus", member=DISCONNECTED_MEMBER
        )

        assert event.is_disconnect is False

    def test_other_member_is_not_disconnect(self):
        event = InboundEvent(is_signal=True, interface=LOCAL_INTERFACE, member="NameAcquired")

        assert event.is_disconnect is False
