"""Utility modules for response cookie resolution."""

from .headers import (
    SET_COOKIE_HEADER,
    get_cookies,
    get_header_values,
    parse_set_cookie,
)

__all__ = [
    "get_header_values",
    "parse_set_cookie",
    "get_cookies",
    "SET_COOKIE_HEADER",
]
