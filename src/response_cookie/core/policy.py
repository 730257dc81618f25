"""Resend decision for dependent requests.

should_resend() decides, from the stored response and the cookie policy,
whether the dependent request has to be sent again before its cookies are
read. It has no side effects; the current time can be injected for tests.

    never         -> never resend
    no-history    -> resend only when there is no stored response
    when-expired  -> resend when there is no stored response, or it is older
                     than max_age_seconds (strictly greater)
    always        -> always resend
    anything else -> never resend
"""

from datetime import datetime

from response_cookie.config import CookiePolicy
from response_cookie.models import StoredResponse, TriggerBehavior


def is_expired(
    response: StoredResponse,
    max_age_seconds: float,
    now: datetime | None = None,
) -> bool:
    """Return True if the response is strictly older than max_age_seconds.

    Examples:
        >>> from datetime import UTC, timedelta
        >>> now = datetime.now(UTC)
        >>> r = StoredResponse(request_id="r", created_at=now - timedelta(seconds=60))
        >>> is_expired(r, 60, now)
        False
        >>> is_expired(r, 59.999, now)
        True
    """
    return response.age_seconds(now) > max_age_seconds


def should_resend(
    response: StoredResponse | None,
    policy: CookiePolicy,
    now: datetime | None = None,
) -> bool:
    """Decide whether the dependent request must be sent again.

    Args:
        response: The latest stored response, or None if there is none.
        policy: The cookie policy holding the trigger behavior and max age.
            A when-expired policy must have a max age; resolve_cookie
            rejects one without it before calling this.
        now: Current time. Defaults to datetime.now(UTC).

    Returns:
        True if the request should be re-executed before reading cookies.
    """
    behavior = policy.behavior

    if behavior is TriggerBehavior.ALWAYS:
        return True

    if behavior is TriggerBehavior.NO_HISTORY:
        return response is None

    if behavior is TriggerBehavior.WHEN_EXPIRED:
        if response is None:
            return True
        return is_expired(response, policy.max_age_seconds, now)

    return False
