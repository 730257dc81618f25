"""Transport protocol and a handler-backed transport.

The transport re-executes a dependent request. It is responsible for
recording the response it produces; the orchestrator only uses the returned
value. Network errors are reported on the response (StoredResponse.error),
not raised.

Examples:
    Wrapping an async handler::

        async def send(request, extra_info):
            return StoredResponse(
                request_id=request.id,
                status_code=200,
                headers=[Header(name="Set-Cookie", value="session=abc123")],
            )

        transport = HandlerTransport(send, response_store, environment_id="env_dev")
        response = await transport.execute(request, [])
"""

import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from response_cookie.models import ExtraInfo, Request, StoredResponse
from response_cookie.observability.logging import get_logger
from response_cookie.storage.memory import MemoryResponseStore

logger = get_logger(__name__)

RequestHandler = Callable[[Request, list[ExtraInfo]], Awaitable[StoredResponse | None]]


@runtime_checkable
class Transport(Protocol):
    """Executes requests on behalf of the orchestrator."""

    async def execute(
        self,
        request: Request,
        extra_info: list[ExtraInfo],
    ) -> StoredResponse | None:
        """Send a request and return the recorded response.

        Args:
            request: The request to send.
            extra_info: Metadata to expose to renders nested inside this
                request, such as the evaluation chain.

        Returns:
            The recorded response, or None if the request was not sent.
        """
        ...


class HandlerTransport(Transport):
    """Transport that delegates sending to an async handler.

    The handler's response is stamped with the request id, environment and
    creation time, then recorded in the response store. If the handler
    raises, an error response is recorded and returned instead.

    Attributes:
        handler: Async callable taking (request, extra_info).
        response_store: Store that receives every recorded response.
        environment_id: Environment stamped on recorded responses.
        calls: Requests executed so far, in order.
    """

    def __init__(
        self,
        handler: RequestHandler,
        response_store: MemoryResponseStore,
        environment_id: str | None = None,
    ) -> None:
        self.handler = handler
        self.response_store = response_store
        self.environment_id = environment_id
        self.calls: list[tuple[Request, list[ExtraInfo]]] = []

    async def execute(
        self,
        request: Request,
        extra_info: list[ExtraInfo],
    ) -> StoredResponse | None:
        self.calls.append((request, extra_info))
        start_time = time.time()

        try:
            response = await self.handler(request, extra_info)
        except Exception as e:
            logger.warning("transport.request.failed", request_id=request.id, error=str(e))
            response = StoredResponse(request_id=request.id, error=str(e) or type(e).__name__)

        if response is None:
            return None

        recorded = response.model_copy(
            update={
                "request_id": request.id,
                "environment_id": self.environment_id,
                "created_at": datetime.now(UTC),
            }
        )
        await self.response_store.add(recorded)

        logger.debug(
            "transport.request.recorded",
            request_id=request.id,
            status_code=recorded.status_code,
            elapsed_ms=int((time.time() - start_time) * 1000),
        )
        return recorded
