"""Custom exceptions for response cookie resolution.

Every failure while resolving a cookie from a dependent request is terminal
for the current render: nothing is retried and no default value is
substituted. Each condition has its own exception type so that hosts can
report it precisely, and each carries the identifiers needed to diagnose it.

Examples:
    Handling a missing cookie::

        from response_cookie.exceptions import CookieNotFoundError

        try:
            value = await resolve_cookie(context, request_id, policy)
        except CookieNotFoundError as e:
            logger.warning("cookie.missing", choices=e.available_cookies)
            raise

    Catching every resolution failure::

        from response_cookie.exceptions import ResponseCookieError

        try:
            value = await tag.run(context, request_id, "session")
        except ResponseCookieError as e:
            render_error(str(e))
"""


class ResponseCookieError(Exception):
    """Base exception for all response cookie errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class MissingArgumentError(ResponseCookieError):
    """A required tag argument was not supplied.

    Raised before any store lookup when the dependent request id or the
    cookie name is absent or empty.

    Attributes:
        message: Human-readable error description.
        argument: Name of the missing argument.
    """

    def __init__(self, message: str, argument: str) -> None:
        super().__init__(message)
        self.argument = argument


class InvalidArgumentError(MissingArgumentError):
    """A tag argument was supplied but cannot be used.

    Raised for a non-numeric max age when the trigger behavior needs one.
    Hosts that only handle MissingArgumentError still catch it.
    """


class RequestNotFoundError(ResponseCookieError):
    """The dependent request does not exist in the request store.

    Attributes:
        message: Human-readable error description.
        request_id: The id that could not be resolved.
    """

    def __init__(self, message: str, request_id: str) -> None:
        super().__init__(message)
        self.request_id = request_id


class NoResponseError(ResponseCookieError):
    """No response is available for the dependent request.

    This happens when there is no stored response and the request was not
    re-executed, either because the policy did not ask for it, the render is
    a preview, or the cycle guard skipped it.

    Attributes:
        message: Human-readable error description.
        request_id: The dependent request id.
    """

    def __init__(self, message: str, request_id: str) -> None:
        super().__init__(message)
        self.request_id = request_id


class DependencyFailedError(ResponseCookieError):
    """The dependent request's response carries a transport error.

    Attributes:
        message: Human-readable error description.
        request_id: The dependent request id.
        error: The error recorded on the response.
    """

    def __init__(self, message: str, request_id: str, error: str) -> None:
        super().__init__(message)
        self.request_id = request_id
        self.error = error


class NoSuccessfulResponseError(ResponseCookieError):
    """The dependent request's response has no status code.

    Attributes:
        message: Human-readable error description.
        request_id: The dependent request id.
    """

    def __init__(self, message: str, request_id: str) -> None:
        super().__init__(message)
        self.request_id = request_id


class NoCookiesError(ResponseCookieError):
    """The response does not set any cookies.

    Attributes:
        message: Human-readable error description.
        request_id: The dependent request id.
    """

    def __init__(self, message: str, request_id: str) -> None:
        super().__init__(message)
        self.request_id = request_id


class CookieNotFoundError(ResponseCookieError):
    """None of the response's cookies has the requested name.

    Attributes:
        message: Human-readable error description, including the choices.
        cookie_name: The requested cookie name.
        available_cookies: Names of the cookies the response did set, in
            header order.
    """

    def __init__(self, message: str, cookie_name: str, available_cookies: list[str]) -> None:
        super().__init__(message)
        self.cookie_name = cookie_name
        self.available_cookies = available_cookies
