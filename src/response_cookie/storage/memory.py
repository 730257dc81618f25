"""In-memory request and response stores.

These stores are suitable for tests, demos and hosts that keep their request
history in process. They implement the RequestStore and ResponseStore
protocols from storage.base and add the write methods a transport needs to
record new responses.

Examples:
    Basic usage::

        from response_cookie.models import Request, StoredResponse
        from response_cookie.storage.memory import MemoryRequestStore, MemoryResponseStore

        requests = MemoryRequestStore()
        await requests.add(Request(id="req_login", name="Login"))

        responses = MemoryResponseStore()
        await responses.add(StoredResponse(request_id="req_login", status_code=200))

        latest = await responses.get_latest_for_request("req_login", None)
"""

import asyncio

from response_cookie.models import Request, StoredResponse
from response_cookie.storage.base import RequestStore, ResponseStore


class MemoryRequestStore(RequestStore):
    """In-memory request store keyed by request id."""

    def __init__(self, requests: list[Request] | None = None) -> None:
        self._requests: dict[str, Request] = {}
        for request in requests or []:
            self._requests[request.id] = request

    async def add(self, request: Request) -> None:
        """Add or replace a request definition."""
        self._requests[request.id] = request

    async def get_by_id(self, request_id: str) -> Request | None:
        return self._requests.get(request_id)


class MemoryResponseStore(ResponseStore):
    """In-memory response store.

    Responses are kept per request id in insertion order. Lookups pick the
    response with the latest created_at within the requested environment.

    Attributes:
        _responses: Dictionary mapping request ids to recorded responses.
        _lock: Lock protecting writes to _responses.
    """

    def __init__(self) -> None:
        self._responses: dict[str, list[StoredResponse]] = {}
        self._lock = asyncio.Lock()

    async def add(self, response: StoredResponse) -> None:
        """Record a response for its request.

        Args:
            response: The response to record.
        """
        async with self._lock:
            self._responses.setdefault(response.request_id, []).append(response)

    async def get_latest_for_request(
        self,
        request_id: str,
        environment_id: str | None,
    ) -> StoredResponse | None:
        candidates = [
            response
            for response in self._responses.get(request_id, [])
            if response.environment_id == environment_id
        ]
        if not candidates:
            return None
        # max() keeps the first of equal timestamps, so prefer the later insert
        return max(reversed(candidates), key=lambda r: r.created_at)

    async def list_for_request(self, request_id: str) -> list[StoredResponse]:
        """Return every response recorded for a request, oldest insert first."""
        return list(self._responses.get(request_id, []))

    async def clear(self) -> None:
        """Remove all recorded responses."""
        async with self._lock:
            self._responses.clear()
