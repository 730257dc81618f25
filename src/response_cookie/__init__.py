"""
Cookie values from chained HTTP requests.

This package resolves a cookie from the latest response of a dependent
request, re-sending that request when its stored response is missing or
stale, without recursing forever when requests depend on each other.
"""

__version__ = "0.1.0"

from response_cookie.config import CookiePolicy, ResponseCookieSettings
from response_cookie.core.orchestrator import resolve_cookie
from response_cookie.tag import ResponseCookieTag

__all__ = [
    "__version__",
    "CookiePolicy",
    "ResponseCookieSettings",
    "ResponseCookieTag",
    "resolve_cookie",
]
