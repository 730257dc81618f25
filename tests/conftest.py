"""
Pytest configuration and shared fixtures for response_cookie tests.
"""

from datetime import UTC, datetime, timedelta

import pytest

from response_cookie.context import RenderContext
from response_cookie.models import ExtraInfo, Header, Request, StoredResponse
from response_cookie.storage.memory import MemoryRequestStore, MemoryResponseStore

ENVIRONMENT_ID = "env_test"
NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


class FakeTransport:
    """Transport that returns queued responses and records every call."""

    def __init__(self, responses: list[StoredResponse | None] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[tuple[Request, list[ExtraInfo]]] = []

    async def execute(self, request: Request, extra_info: list[ExtraInfo]) -> StoredResponse | None:
        self.calls.append((request, extra_info))
        if not self.responses:
            return None
        return self.responses.pop(0)


def make_response(
    request_id: str = "req_login",
    age_seconds: float = 0,
    status_code: int | None = 200,
    error: str | None = None,
    cookies: list[str] | None = None,
    headers: list[tuple[str, str]] | None = None,
    environment_id: str | None = ENVIRONMENT_ID,
) -> StoredResponse:
    """Build a stored response created age_seconds before NOW."""
    all_headers = [Header(name=name, value=value) for name, value in headers or []]
    all_headers += [Header(name="Set-Cookie", value=cookie) for cookie in cookies or []]
    return StoredResponse(
        request_id=request_id,
        environment_id=environment_id,
        created_at=NOW - timedelta(seconds=age_seconds),
        status_code=status_code,
        error=error,
        headers=all_headers,
    )


@pytest.fixture
def now() -> datetime:
    """Fixed current time for expiry checks."""
    return NOW


@pytest.fixture
def login_request() -> Request:
    """The dependent request used by most tests."""
    return Request(id="req_login", name="Login", method="POST", url="https://api.example.com/login")


@pytest.fixture
def request_store(login_request: Request) -> MemoryRequestStore:
    """Request store holding the login request."""
    return MemoryRequestStore([login_request])


@pytest.fixture
def response_store() -> MemoryResponseStore:
    """Empty response store."""
    return MemoryResponseStore()


@pytest.fixture
def transport() -> FakeTransport:
    """Transport with nothing queued."""
    return FakeTransport()


@pytest.fixture
def context(
    request_store: MemoryRequestStore,
    response_store: MemoryResponseStore,
    transport: FakeTransport,
) -> RenderContext:
    """A send render in the test environment."""
    return RenderContext(
        request_store=request_store,
        response_store=response_store,
        transport=transport,
        environment_id=ENVIRONMENT_ID,
        render_purpose="send",
    )


@pytest.fixture
def preview_context(context: RenderContext) -> RenderContext:
    """A preview render in the test environment."""
    return RenderContext(
        request_store=context.request_store,
        response_store=context.response_store,
        transport=context.transport,
        environment_id=ENVIRONMENT_ID,
        render_purpose="preview",
    )


@pytest.fixture
def response_factory():
    """Factory for stored responses, see make_response()."""
    return make_response


@pytest.fixture
def transport_factory():
    """Factory for FakeTransport instances with queued responses."""
    return FakeTransport
