"""Response validation and cookie selection.

Once the orchestrator has settled on a response, it must be a completed,
error-free response that sets at least one cookie, and one of those cookies
must carry the requested name. The first matching cookie in header order
wins, so a response setting the same cookie twice yields the first value.
"""

from response_cookie.exceptions import (
    CookieNotFoundError,
    DependencyFailedError,
    NoCookiesError,
    NoResponseError,
    NoSuccessfulResponseError,
)
from response_cookie.models import Cookie, StoredResponse
from response_cookie.utils.headers import get_cookies


def validate_response(response: StoredResponse | None, request_id: str) -> StoredResponse:
    """Check that a response can be used for cookie extraction.

    Args:
        response: The response to check, or None.
        request_id: Id of the dependent request, for error messages.

    Returns:
        The response, unchanged.

    Raises:
        NoResponseError: If there is no response.
        DependencyFailedError: If the response carries a transport error.
        NoSuccessfulResponseError: If the response has no status code.
    """
    if response is None:
        raise NoResponseError(
            message=f"No responses for request {request_id}",
            request_id=request_id,
        )

    if response.error:
        raise DependencyFailedError(
            message=f"Failed to send dependent request {request_id}: {response.error}",
            request_id=request_id,
            error=response.error,
        )

    if not response.status_code:
        raise NoSuccessfulResponseError(
            message=f"No successful responses for request {request_id}",
            request_id=request_id,
        )

    return response


def select_cookie(cookies: list[Cookie], cookie_name: str) -> Cookie:
    """Return the first cookie whose key equals cookie_name (case-sensitive).

    Raises:
        CookieNotFoundError: If no cookie matches. The message lists the
            available names in order.
    """
    for cookie in cookies:
        if cookie.key == cookie_name:
            return cookie

    names = [cookie.key for cookie in cookies]
    raise CookieNotFoundError(
        message=f"No {cookie_name} cookie for response. Choices are {', '.join(names)}.",
        cookie_name=cookie_name,
        available_cookies=names,
    )


def extract_cookie(response: StoredResponse, cookie_name: str, request_id: str) -> str:
    """Return the value of the named cookie set by the response.

    Raises:
        NoCookiesError: If the response sets no cookies.
        CookieNotFoundError: If none of the cookies has the requested name.
    """
    cookies = get_cookies(response.headers)
    if not cookies:
        raise NoCookiesError(
            message=f"No cookies set for response to request {request_id}",
            request_id=request_id,
        )

    return select_cookie(cookies, cookie_name).value
