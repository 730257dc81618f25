"""Store protocols consumed by response cookie resolution.

Requests and responses are owned by the host application. This package only
reads them, through the two protocols defined here. Re-executing a request is
the transport's job, and so is persisting the response it produces.

Examples:
    Implementing a request store on top of a host model layer::

        from response_cookie.models import Request

        class HostRequestStore:
            def __init__(self, models):
                self.models = models

            async def get_by_id(self, request_id: str) -> Request | None:
                doc = await self.models.request.get_by_id(request_id)
                if doc is None:
                    return None
                return Request(id=doc["_id"], name=doc["name"])

Error Handling:
    Stores signal "not found" by returning None. Backend failures should be
    raised as-is; they are not caught by the orchestrator.
"""

from typing import Protocol, runtime_checkable

from response_cookie.models import Request, StoredResponse


@runtime_checkable
class RequestStore(Protocol):
    """Looks up request definitions by id."""

    async def get_by_id(self, request_id: str) -> Request | None:
        """Retrieve a request by id.

        Args:
            request_id: The request id to look up.

        Returns:
            The request if found, None otherwise.
        """
        ...


@runtime_checkable
class ResponseStore(Protocol):
    """Looks up recorded responses for requests."""

    async def get_latest_for_request(
        self,
        request_id: str,
        environment_id: str | None,
    ) -> StoredResponse | None:
        """Retrieve the most recent response for a request.

        Args:
            request_id: Id of the request whose responses to search.
            environment_id: Only responses recorded in this environment are
                considered.

        Returns:
            The response with the latest created_at, or None if the request
            has no responses in that environment.
        """
        ...
