"""The responseCookie template tag.

Hosts register ResponseCookieTag and call run() with the render context and
the tag's positional arguments:

    request          id of the dependent request
    cookieName       cookie to read from its response
    triggerBehavior  never | no-history | when-expired | always
    maxAgeSeconds    only shown and used for when-expired

Examples:
    Rendering a tag::

        tag = ResponseCookieTag()
        session = await tag.run(context, "req_login", "session", "when-expired", 300)
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from response_cookie.config import (
    DEFAULT_MAX_AGE_SECONDS,
    CookiePolicy,
    ResponseCookieSettings,
    normalize_trigger_behavior,
)
from response_cookie.context import EvaluationContext
from response_cookie.core.orchestrator import resolve_cookie
from response_cookie.models import DEFAULT_TRIGGER_BEHAVIOR, TriggerBehavior


class TagOption(BaseModel):
    """One choice of an enum argument."""

    display_name: str
    description: str
    value: str


class TagArgument(BaseModel):
    """Descriptor of one tag argument, as shown by the host's editor.

    Attributes:
        name: Argument name.
        display_name: Label shown to users.
        type: One of "model", "string", "enum", "number".
        model: Model name for "model" arguments.
        help: Help text.
        default_value: Value used when the argument is left empty.
        options: Choices for "enum" arguments.
        hide: Predicate over the current argument values; the argument is
            hidden when it returns True.
    """

    name: str
    display_name: str
    type: str
    model: str | None = None
    help: str | None = None
    default_value: Any = None
    options: list[TagOption] = []
    hide: Callable[[list[Any]], bool] | None = None

    def is_hidden(self, values: list[Any]) -> bool:
        if self.hide is None:
            return False
        return self.hide(values)


def hide_max_age(values: list[Any]) -> bool:
    """Max age only matters for when-expired.

    Examples:
        >>> hide_max_age(["req_1", "sid", "when-expired", 60])
        False
        >>> hide_max_age(["req_1", "sid", "always"])
        True
    """
    trigger_behavior = values[2] if len(values) > 2 else None
    return normalize_trigger_behavior(trigger_behavior) != TriggerBehavior.WHEN_EXPIRED.value


TRIGGER_BEHAVIOR_OPTIONS = [
    TagOption(
        display_name="Never",
        description="never resend request",
        value=TriggerBehavior.NEVER.value,
    ),
    TagOption(
        display_name="No History",
        description="resend when no responses present",
        value=TriggerBehavior.NO_HISTORY.value,
    ),
    TagOption(
        display_name="When Expired",
        description="resend when existing response has expired",
        value=TriggerBehavior.WHEN_EXPIRED.value,
    ),
    TagOption(
        display_name="Always",
        description="resend request when needed",
        value=TriggerBehavior.ALWAYS.value,
    ),
]


class ResponseCookieTag:
    """Template tag that reads a cookie from a chained request's response.

    Attributes:
        settings: Host settings supplying defaults and the chain key.
        logger: Optional structured logger passed to the orchestrator.
    """

    name = "responseCookie"
    display_name = "Response Cookie"
    description = "Cookie from response of chained request."

    args = [
        TagArgument(name="request", display_name="Request", type="model", model="Request"),
        TagArgument(name="cookieName", display_name="Cookie Name", type="string"),
        TagArgument(
            name="triggerBehavior",
            display_name="Trigger Behavior",
            type="enum",
            help="Configure when to resend the dependent request",
            default_value=DEFAULT_TRIGGER_BEHAVIOR.value,
            options=TRIGGER_BEHAVIOR_OPTIONS,
        ),
        TagArgument(
            name="maxAgeSeconds",
            display_name="Max age (seconds)",
            type="number",
            help="The maximum age of a response to use before it expires",
            default_value=DEFAULT_MAX_AGE_SECONDS,
            hide=hide_max_age,
        ),
    ]

    def __init__(
        self,
        settings: ResponseCookieSettings | None = None,
        logger: Any = None,
    ) -> None:
        self.settings = settings or ResponseCookieSettings()
        self.logger = logger

    def visible_args(self, values: list[Any]) -> list[TagArgument]:
        """Return the arguments to show for the current values."""
        return [arg for arg in self.args if not arg.is_hidden(values)]

    async def run(self, context: EvaluationContext, *args: Any) -> str:
        """Render the tag.

        Args:
            context: The current evaluation context.
            *args: Positional tag arguments (request, cookieName,
                triggerBehavior, maxAgeSeconds).

        Returns:
            The cookie value.

        Raises:
            ResponseCookieError: On any resolution failure.
        """
        request_id, policy = CookiePolicy.from_args(args, self.settings)
        return await resolve_cookie(
            context,
            request_id,
            policy,
            logger=self.logger,
            chain_key=self.settings.request_chain_key,
        )
