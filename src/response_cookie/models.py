"""Core type definitions for response cookie resolution.

This module provides the data structures shared by the policy evaluator,
the orchestrator and the storage/transport collaborators: trigger behaviors,
render purposes, requests, stored responses and parsed cookies.

Examples:
    Building a stored response::

        from datetime import UTC, datetime
        from response_cookie.models import Header, StoredResponse

        response = StoredResponse(
            request_id="req_login",
            environment_id="env_dev",
            created_at=datetime.now(UTC),
            status_code=200,
            headers=[Header(name="Set-Cookie", value="session=abc123; Path=/")],
        )
"""

from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def epoch_millis(moment: datetime) -> int:
    """Return whole milliseconds since the Unix epoch, dropping microseconds.

    Naive datetimes are treated as UTC.

    Examples:
        >>> epoch_millis(datetime(1970, 1, 1, 0, 0, 1, 999, tzinfo=UTC))
        1000
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - EPOCH) // timedelta(milliseconds=1)


class TriggerBehavior(str, Enum):
    """When the dependent request should be sent again.

    Attributes:
        NEVER: Never resend, always use the stored response.
        NO_HISTORY: Resend only when there is no stored response.
        WHEN_EXPIRED: Resend when the stored response is older than max age.
        ALWAYS: Resend on every render that allows side effects.
    """

    NEVER = "never"
    NO_HISTORY = "no-history"
    WHEN_EXPIRED = "when-expired"
    ALWAYS = "always"


DEFAULT_TRIGGER_BEHAVIOR = TriggerBehavior.NEVER


class RenderPurpose(str, Enum):
    """Why a template is being rendered.

    Only SEND renders may cause network traffic.
    """

    SEND = "send"
    PREVIEW = "preview"
    GENERAL = "general"


class Header(BaseModel):
    """A single HTTP header. Responses keep headers as an ordered list."""

    name: str
    value: str


class ExtraInfo(BaseModel):
    """Named metadata forwarded to the transport alongside a request."""

    name: str
    value: Any


class Request(BaseModel):
    """A request defined in the host application.

    Only the id is used here; the rest is carried through to the transport.
    """

    id: str = Field(..., min_length=1, description="Unique request id")
    name: str = Field(default="", description="Display name")
    method: str = Field(default="GET")
    url: str = Field(default="")


class StoredResponse(BaseModel):
    """A response recorded for a request in a given environment.

    Attributes:
        request_id: Id of the request that produced this response.
        environment_id: Environment the request was sent in.
        created_at: When the response was recorded (timezone aware).
        status_code: HTTP status code, None if the request never completed.
        error: Transport-level error message, None on success.
        headers: Response headers in the order they were received.
    """

    request_id: str
    environment_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    status_code: int | None = None
    error: str | None = None
    headers: list[Header] = Field(default_factory=list)

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @field_validator("error")
    @classmethod
    def validate_error(cls, v: str | None) -> str | None:
        # Empty error strings mean no error
        return v or None

    def age_seconds(self, now: datetime | None = None) -> float:
        """Return the age of the response in seconds.

        Both timestamps are truncated to millisecond precision before the
        difference is taken.

        Examples:
            >>> from datetime import timedelta
            >>> now = datetime.now(UTC)
            >>> r = StoredResponse(request_id="r", created_at=now - timedelta(seconds=90))
            >>> r.age_seconds(now)
            90.0
        """
        if now is None:
            now = datetime.now(UTC)
        return (epoch_millis(now) - epoch_millis(self.created_at)) / 1000


class Cookie(BaseModel):
    """A cookie parsed from a Set-Cookie header. Attributes are discarded."""

    key: str
    value: str
