"""Demo of the responseCookie tag with in-memory stores.

This script demonstrates chained requests: a "Profile" request reads the
session cookie set by a "Login" request, re-sending Login when its last
response has expired. A second pair of requests that reference each other
shows the cycle guard stopping the recursion.

Run with: python demo_app.py
"""

import asyncio
from datetime import UTC, datetime, timedelta
from itertools import count

from response_cookie.config import ResponseCookieSettings
from response_cookie.context import RenderContext
from response_cookie.exceptions import ResponseCookieError
from response_cookie.models import ExtraInfo, Header, Request, StoredResponse
from response_cookie.observability.logging import configure_logging
from response_cookie.storage.memory import MemoryRequestStore, MemoryResponseStore
from response_cookie.tag import ResponseCookieTag
from response_cookie.transport import HandlerTransport

ENVIRONMENT_ID = "env_demo"

settings = ResponseCookieSettings(log_level="INFO", json_logs=False)
tag = ResponseCookieTag(settings=settings)

requests = MemoryRequestStore(
    [
        Request(id="req_login", name="Login", method="POST", url="https://api.example.com/login"),
        Request(id="req_ping", name="Ping", url="https://api.example.com/ping"),
        Request(id="req_pong", name="Pong", url="https://api.example.com/pong"),
    ]
)
responses = MemoryResponseStore()
session_ids = count(1)


async def send(request: Request, extra_info: list[ExtraInfo]) -> StoredResponse | None:
    """Pretend to send a request, rendering its templated cookie header first."""
    nested = context.nested(extra_info)

    if request.id == "req_login":
        session = f"sess-{next(session_ids):04d}"
        return StoredResponse(
            request_id=request.id,
            status_code=200,
            headers=[
                Header(name="Content-Type", value="application/json"),
                Header(name="Set-Cookie", value=f"session={session}; Path=/; HttpOnly"),
            ],
        )

    # Ping and Pong each carry a cookie taken from the other one
    other = "req_pong" if request.id == "req_ping" else "req_ping"
    try:
        token = await tag.run(nested, other, "token", "always")
    except ResponseCookieError as e:
        token = f"<{e.message}>"
    return StoredResponse(
        request_id=request.id,
        status_code=200,
        headers=[Header(name="Set-Cookie", value=f"token={request.id}:{token}")],
    )


transport = HandlerTransport(send, responses, environment_id=ENVIRONMENT_ID)
context = RenderContext(
    request_store=requests,
    response_store=responses,
    transport=transport,
    environment_id=ENVIRONMENT_ID,
)


async def main() -> None:
    # A login response recorded two minutes ago
    await responses.add(
        StoredResponse(
            request_id="req_login",
            environment_id=ENVIRONMENT_ID,
            created_at=datetime.now(UTC) - timedelta(minutes=2),
            status_code=200,
            headers=[Header(name="Set-Cookie", value="session=sess-stale; Path=/")],
        )
    )

    preview = RenderContext(
        request_store=requests,
        response_store=responses,
        transport=transport,
        environment_id=ENVIRONMENT_ID,
        render_purpose="preview",
    )
    print("Preview (no resend): ", await tag.run(preview, "req_login", "session", "when-expired", 60))
    print("Send (expired):      ", await tag.run(context, "req_login", "session", "when-expired", 60))
    print("Send (fresh):        ", await tag.run(context, "req_login", "session", "when-expired", 60))
    print("Ping/Pong:           ", await tag.run(context, "req_ping", "token", "always"))
    print("Transport calls:     ", [request.id for request, _ in transport.calls])


if __name__ == "__main__":
    print("=" * 60)
    print("responseCookie Demo")
    print("=" * 60)
    configure_logging(level=settings.log_level, json_output=settings.json_logs)
    asyncio.run(main())
