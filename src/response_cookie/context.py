"""Evaluation context for template renders.

The host renders templated values with a context that tells the tag which
environment is active, whether the render is a real send or a preview, and
which extra info was forwarded from an enclosing render. It also gives access
to the host's stores and transport.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Protocol, runtime_checkable

from response_cookie.models import ExtraInfo, RenderPurpose
from response_cookie.storage.base import RequestStore, ResponseStore
from response_cookie.transport import Transport


@runtime_checkable
class EvaluationContext(Protocol):
    """What a render exposes to the responseCookie tag."""

    @property
    def environment_id(self) -> str | None: ...

    @property
    def render_purpose(self) -> str: ...

    @property
    def request_store(self) -> RequestStore: ...

    @property
    def response_store(self) -> ResponseStore: ...

    @property
    def transport(self) -> Transport: ...

    def get_extra_info(self, name: str) -> Any:
        """Return forwarded metadata by name, or None."""
        ...


@dataclass(frozen=True)
class RenderContext:
    """Concrete evaluation context for one render.

    Attributes:
        request_store: Store for request definitions.
        response_store: Store for recorded responses.
        transport: Transport used to re-execute requests.
        environment_id: Active environment.
        render_purpose: "send" for real sends, anything else for previews.
        extra_info: Metadata forwarded from an enclosing render.
    """

    request_store: RequestStore
    response_store: ResponseStore
    transport: Transport
    environment_id: str | None = None
    render_purpose: str = RenderPurpose.SEND.value
    extra_info: dict[str, Any] = field(default_factory=dict)

    def get_extra_info(self, name: str) -> Any:
        return self.extra_info.get(name)

    @property
    def is_send(self) -> bool:
        return is_send_render(self.render_purpose)

    def nested(self, extra_info: list[ExtraInfo]) -> "RenderContext":
        """Build the context for rendering a request sent from this render.

        The nested render is always a send and sees only the forwarded extra
        info, not this render's.
        """
        return replace(
            self,
            render_purpose=RenderPurpose.SEND.value,
            extra_info={info.name: info.value for info in extra_info},
        )


def is_send_render(render_purpose: Any) -> bool:
    """Return True if the render purpose allows network side effects.

    Examples:
        >>> is_send_render("send")
        True
        >>> is_send_render(RenderPurpose.PREVIEW)
        False
    """
    if isinstance(render_purpose, RenderPurpose):
        return render_purpose is RenderPurpose.SEND
    return render_purpose == RenderPurpose.SEND.value
