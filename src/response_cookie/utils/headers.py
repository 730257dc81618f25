"""Header lookup and Set-Cookie parsing utilities.

This module provides functions for:
- Finding header values case-insensitively in an ordered header list
- Parsing a single Set-Cookie value into a cookie name and value
- Collecting every cookie a response sets, in header order
"""

import re

from response_cookie.models import Cookie, Header

SET_COOKIE_HEADER = "set-cookie"

# Anything after a line terminator is not part of the cookie
_TERMINATORS = re.compile(r"[\n\r\x00]")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f]")


def get_header_values(headers: list[Header], name: str) -> list[str]:
    """Return the values of every header with the given name.

    Matching is case-insensitive and the response's header order is kept.

    Args:
        headers: Ordered response headers
        name: Header name to look for

    Returns:
        List of matching header values, possibly empty

    Example:
        >>> headers = [
        ...     Header(name="Set-Cookie", value="a=1"),
        ...     Header(name="Content-Type", value="text/plain"),
        ...     Header(name="set-cookie", value="b=2"),
        ... ]
        >>> get_header_values(headers, "SET-COOKIE")
        ['a=1', 'b=2']
    """
    wanted = name.lower()
    return [header.value for header in headers if header.name.lower() == wanted]


def parse_set_cookie(value: str) -> Cookie | None:
    """Parse one Set-Cookie header value.

    Only the leading ``name=value`` pair is kept; attributes such as Path,
    Domain or Expires are discarded. Whitespace around the name and value is
    stripped. Values are returned verbatim otherwise (quotes are kept).

    Args:
        value: Raw Set-Cookie header value

    Returns:
        The parsed cookie, or None if the value has no ``name=value`` pair,
        an empty name, or control characters in the pair

    Example:
        >>> parse_set_cookie("session=abc123; Path=/; HttpOnly")
        Cookie(key='session', value='abc123')
        >>> parse_set_cookie("garbage") is None
        True
    """
    raw = _TERMINATORS.split(value.strip(), maxsplit=1)[0]
    pair = raw.split(";", 1)[0]

    name, sep, cookie_value = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        return None

    cookie_value = cookie_value.strip()
    if _CONTROL_CHARS.search(name) or _CONTROL_CHARS.search(cookie_value):
        return None

    return Cookie(key=name, value=cookie_value)


def get_cookies(headers: list[Header]) -> list[Cookie]:
    """Parse every Set-Cookie header into cookies, in header order.

    Unparseable Set-Cookie values are skipped.

    Args:
        headers: Ordered response headers

    Returns:
        Cookies in the order their headers appear

    Example:
        >>> headers = [
        ...     Header(name="Set-Cookie", value="a=1"),
        ...     Header(name="Set-Cookie", value="a=2"),
        ... ]
        >>> [c.value for c in get_cookies(headers)]
        ['1', '2']
    """
    cookies = []
    for raw in get_header_values(headers, SET_COOKIE_HEADER):
        cookie = parse_set_cookie(raw)
        if cookie is not None:
            cookies.append(cookie)
    return cookies
