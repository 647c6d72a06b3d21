"""
Dispatcher - Route endpoint requests to their flow.

Registers one object path per endpoint on the session connection. Each
request runs its flow synchronously to completion; the flow's Termination
goes to the supervisor. Once the supervisor is stopping, later requests are
dropped unanswered.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from .contracts import BusTransport
from .errors import RegistrationError
from .flows import Flow
from .lifecycle.supervisor import Supervisor
from .model import Endpoint, Request, Termination

__all__ = ["Dispatcher"]

logger = structlog.get_logger(__name__)


class Dispatcher:
    """Maps endpoint identity to flow.

    Example:
        dispatcher = Dispatcher(build_flows(ops), supervisor)
        dispatcher.register(context.session, config.endpoint_paths)
    """

    def __init__(self, flows: Mapping[Endpoint, Flow], supervisor: Supervisor) -> None:
        missing = set(Endpoint) - set(flows)
        if missing:
            raise ValueError(f"No flow for endpoints: {sorted(e.value for e in missing)}")
        self._flows = dict(flows)
        self._supervisor = supervisor

    def register(self, transport: BusTransport, paths: Mapping[Endpoint, str]) -> None:
        """Register every endpoint path on transport.

        Raises:
            RegistrationError: If any path cannot be registered
        """
        for endpoint in Endpoint:
            path = paths.get(endpoint)
            if not path:
                raise RegistrationError(endpoint.value, "no object path configured")
            transport.register_endpoint(path, self._handler_for(endpoint))
            logger.debug("endpoint_registered", endpoint=endpoint.value, path=path)

    def _handler_for(self, endpoint: Endpoint):
        def on_message(reply_handle: Any, member: str | None, sender: str | None) -> None:
            self.dispatch(
                Request(endpoint=endpoint, reply_handle=reply_handle, member=member, sender=sender)
            )

        return on_message

    def dispatch(self, request: Request) -> Termination:
        """Run the flow for request and pass its outcome to the supervisor."""
        if self._supervisor.stopping:
            logger.warning(
                "request_dropped",
                endpoint=request.endpoint.value,
                reason=self._supervisor.reason,
            )
            return self._supervisor.termination or Termination.CONTINUE

        logger.info(
            "request_received",
            endpoint=request.endpoint.value,
            member=request.member,
            sender=request.sender,
        )
        termination = self._flows[request.endpoint].handle(request)
        self._supervisor.terminate(termination, f"{request.endpoint.value} flow finished")
        return termination
