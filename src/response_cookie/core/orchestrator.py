"""Dependent request orchestration for the responseCookie tag.

This module resolves a cookie value from the response of a dependent request:

    1. Validate the request id and cookie name
    2. Look up the request and its latest response in the active environment
    3. Ask the policy whether the request must be sent again
    4. On a real send, re-execute it unless it is already in the evaluation
       chain (which would recurse forever)
    5. Validate the response and pick the cookie

The states a resolution goes through are:

    NO_PRIOR_RESPONSE / FRESH_PRIOR_RESPONSE / STALE_PRIOR_RESPONSE
        -> RESENDING | RESEND_SKIPPED_CYCLE (only when resending)
        -> RESPONSE_AVAILABLE | NO_RESPONSE

Examples:
    Resolving a session cookie::

        from response_cookie.config import CookiePolicy
        from response_cookie.core.orchestrator import resolve_cookie

        policy = CookiePolicy(cookie_name="session", trigger_behavior="no-history")
        value = await resolve_cookie(context, "req_login", policy)
"""

import time
from datetime import datetime
from enum import Enum
from typing import Any

from response_cookie.config import REQUEST_CHAIN_KEY, CookiePolicy
from response_cookie.context import EvaluationContext, is_send_render
from response_cookie.core.chain import (
    RequestChain,
    chain_extra_info,
    extend_chain,
    is_in_chain,
    to_chain,
)
from response_cookie.core.cookies import extract_cookie, validate_response
from response_cookie.core.policy import should_resend
from response_cookie.exceptions import (
    InvalidArgumentError,
    MissingArgumentError,
    RequestNotFoundError,
    ResponseCookieError,
)
from response_cookie.models import Request, StoredResponse, TriggerBehavior
from response_cookie.observability.logging import get_logger
from response_cookie.observability.metrics import (
    record_resend,
    record_resend_duration,
    record_resolution,
)

default_logger = get_logger(__name__)


class ResolutionState(str, Enum):
    """States of a response lookup."""

    NO_PRIOR_RESPONSE = "NO_PRIOR_RESPONSE"
    FRESH_PRIOR_RESPONSE = "FRESH_PRIOR_RESPONSE"
    STALE_PRIOR_RESPONSE = "STALE_PRIOR_RESPONSE"
    RESENDING = "RESENDING"
    RESEND_SKIPPED_CYCLE = "RESEND_SKIPPED_CYCLE"
    RESPONSE_AVAILABLE = "RESPONSE_AVAILABLE"
    NO_RESPONSE = "NO_RESPONSE"


class ResponseOutcome:
    """Result of settling on a response for the dependent request.

    Attributes:
        response: The response to read cookies from, or None.
        states: States visited, in order. The last one is terminal.
        was_resent: True if the transport was asked to execute the request.
    """

    def __init__(
        self,
        response: StoredResponse | None,
        states: list[ResolutionState],
        was_resent: bool,
    ) -> None:
        self.response = response
        self.states = states
        self.was_resent = was_resent

    @property
    def final_state(self) -> ResolutionState:
        return self.states[-1]


def initial_state(response: StoredResponse | None, resend: bool) -> ResolutionState:
    """Classify the stored response before any resend."""
    if response is None:
        return ResolutionState.NO_PRIOR_RESPONSE
    if resend:
        return ResolutionState.STALE_PRIOR_RESPONSE
    return ResolutionState.FRESH_PRIOR_RESPONSE


async def resend_request(
    context: EvaluationContext,
    request: Request,
    chain: RequestChain,
    logger: Any,
    chain_key: str = REQUEST_CHAIN_KEY,
) -> StoredResponse | None:
    """Re-execute the dependent request with the chain extended by its id.

    Callers check the chain first; a request already in it must not be sent.

    Args:
        context: The current evaluation context.
        request: The dependent request.
        chain: Ids of requests already being re-executed in this render.
        logger: Bound structured logger.
        chain_key: Extra-info name used to forward the chain.

    Returns:
        The transport's response, or None if the transport produced nothing.
    """
    next_chain = extend_chain(chain, request.id)
    logger.info("cookie.resend.started", chain=list(next_chain))

    start_time = time.time()
    try:
        response = await context.transport.execute(
            request, chain_extra_info(next_chain, chain_key)
        )
    finally:
        record_resend_duration(time.time() - start_time)

    if response is None:
        logger.info("cookie.resend.empty")
        record_resend("empty")
    else:
        record_resend("sent")
    return response


async def obtain_response(
    context: EvaluationContext,
    request: Request,
    policy: CookiePolicy,
    logger: Any,
    chain: RequestChain,
    now: datetime | None = None,
    chain_key: str = REQUEST_CHAIN_KEY,
) -> ResponseOutcome:
    """Settle on the response to read cookies from.

    The latest stored response is used unless the policy asks for a resend
    and the render is a real send. A response from the transport replaces
    the stored one; if the transport returns nothing, the stored one stays.
    """
    response = await context.response_store.get_latest_for_request(
        request.id, context.environment_id
    )

    resend = should_resend(response, policy, now)
    states = [initial_state(response, resend)]
    was_resent = False

    if resend:
        if not is_send_render(context.render_purpose):
            logger.debug("cookie.resend.skipped_preview", render_purpose=context.render_purpose)
            record_resend("skipped_preview")
        elif is_in_chain(chain, request.id):
            states.append(ResolutionState.RESEND_SKIPPED_CYCLE)
            logger.info("cookie.resend.skipped_cycle", chain=list(chain))
            record_resend("skipped_cycle")
        else:
            states.append(ResolutionState.RESENDING)
            was_resent = True
            response = await resend_request(context, request, chain, logger, chain_key) or response

    states.append(
        ResolutionState.NO_RESPONSE if response is None else ResolutionState.RESPONSE_AVAILABLE
    )
    return ResponseOutcome(response=response, states=states, was_resent=was_resent)


async def resolve_cookie(
    context: EvaluationContext,
    request_id: str | None,
    policy: CookiePolicy,
    *,
    logger: Any = None,
    chain: RequestChain | None = None,
    now: datetime | None = None,
    chain_key: str = REQUEST_CHAIN_KEY,
) -> str:
    """Resolve a cookie value from a dependent request's response.

    Args:
        context: The current evaluation context.
        request_id: Id of the dependent request.
        policy: Cookie name and resend policy.
        logger: Structured logger. Defaults to the package logger.
        chain: Evaluation chain. Defaults to the chain forwarded in the
            context's extra info under chain_key.
        now: Current time, for the expiry check.
        chain_key: Extra-info name carrying the chain.

    Returns:
        The cookie value.

    Raises:
        MissingArgumentError: If the request id or cookie name is empty.
        InvalidArgumentError: If a when-expired policy has no usable max age.
        RequestNotFoundError: If the request does not exist.
        NoResponseError: If no response is available.
        DependencyFailedError: If the response carries an error.
        NoSuccessfulResponseError: If the response has no status code.
        NoCookiesError: If the response sets no cookies.
        CookieNotFoundError: If no cookie has the requested name.
    """
    log = (logger or default_logger).bind(request_id=request_id, cookie_name=policy.cookie_name)

    try:
        value = await _resolve(context, request_id, policy, log, chain, now, chain_key)
    except ResponseCookieError as e:
        log.warning("cookie.resolve.failed", error_type=type(e).__name__, error=e.message)
        record_resolution(type(e).__name__)
        raise

    record_resolution("ok")
    return value


async def _resolve(
    context: EvaluationContext,
    request_id: str | None,
    policy: CookiePolicy,
    log: Any,
    chain: RequestChain | None,
    now: datetime | None,
    chain_key: str,
) -> str:
    if not request_id:
        raise MissingArgumentError("No request specified", argument="request")

    if not policy.cookie_name:
        raise MissingArgumentError("No cookie specified", argument="cookieName")

    if policy.behavior is TriggerBehavior.WHEN_EXPIRED and policy.max_age_seconds is None:
        raise InvalidArgumentError("Max age must be a number", argument="maxAgeSeconds")

    if policy.behavior is None:
        log.warning("cookie.policy.unknown_trigger_behavior", trigger_behavior=policy.trigger_behavior)

    request = await context.request_store.get_by_id(request_id)
    if request is None:
        raise RequestNotFoundError(f"Could not find request {request_id}", request_id=request_id)

    if chain is None:
        chain = to_chain(context.get_extra_info(chain_key))

    outcome = await obtain_response(context, request, policy, log, chain, now, chain_key)
    log.debug("cookie.response.settled", states=[state.value for state in outcome.states])

    response = validate_response(outcome.response, request.id)
    return extract_cookie(response, policy.cookie_name, request.id)
