"""Unit tests for header utilities.

Tests case-insensitive header lookup and Set-Cookie parsing.
"""

import string

import pytest
from hypothesis import given
from hypothesis import strategies as st

from response_cookie.models import Header
from response_cookie.utils.headers import get_cookies, get_header_values, parse_set_cookie

# Cookie names and values made of token characters only
token_strategy = st.text(
    alphabet=string.ascii_letters + string.digits,
    min_size=1,
    max_size=20,
)


class TestGetHeaderValues:
    """Tests for get_header_values()."""

    def test_case_insensitive(self) -> None:
        headers = [
            Header(name="Set-Cookie", value="a=1"),
            Header(name="SET-COOKIE", value="b=2"),
            Header(name="set-cookie", value="c=3"),
        ]
        assert get_header_values(headers, "set-cookie") == ["a=1", "b=2", "c=3"]

    def test_other_headers_ignored(self) -> None:
        headers = [
            Header(name="Content-Type", value="text/html"),
            Header(name="Set-Cookie2", value="x=1"),
        ]
        assert get_header_values(headers, "Set-Cookie") == []

    def test_empty_headers(self) -> None:
        assert get_header_values([], "Set-Cookie") == []


class TestParseSetCookie:
    """Tests for parse_set_cookie()."""

    def test_simple_pair(self) -> None:
        cookie = parse_set_cookie("session=abc123")
        assert cookie is not None
        assert (cookie.key, cookie.value) == ("session", "abc123")

    def test_attributes_discarded(self) -> None:
        cookie = parse_set_cookie(
            "session=abc123; Path=/; Domain=example.com; Expires=Wed, 21 Oct 2030 07:28:00 GMT; "
            "HttpOnly; Secure"
        )
        assert cookie is not None
        assert (cookie.key, cookie.value) == ("session", "abc123")

    def test_whitespace_stripped(self) -> None:
        cookie = parse_set_cookie("  session = abc123 ; Path=/")
        assert cookie is not None
        assert (cookie.key, cookie.value) == ("session", "abc123")

    def test_value_with_equals_sign(self) -> None:
        cookie = parse_set_cookie("token=YWJj==; Path=/")
        assert cookie is not None
        assert cookie.value == "YWJj=="

    def test_empty_value(self) -> None:
        cookie = parse_set_cookie("session=; Max-Age=0")
        assert cookie is not None
        assert cookie.value == ""

    def test_quoted_value_kept(self) -> None:
        cookie = parse_set_cookie('pref="dark mode"')
        assert cookie is not None
        assert cookie.value == '"dark mode"'

    def test_stops_at_line_break(self) -> None:
        cookie = parse_set_cookie("a=1\r\nb=2")
        assert cookie is not None
        assert (cookie.key, cookie.value) == ("a", "1")

    @pytest.mark.parametrize("raw", ["", "   ", "no-equals-sign", "=value", "; Path=/", "a=b\x01c"])
    def test_invalid_values(self, raw: str) -> None:
        assert parse_set_cookie(raw) is None

    @given(name=token_strategy, value=token_strategy)
    def test_parses_any_token_pair(self, name: str, value: str) -> None:
        cookie = parse_set_cookie(f"{name}={value}; Path=/; HttpOnly")
        assert cookie is not None
        assert cookie.key == name
        assert cookie.value == value


class TestGetCookies:
    """Tests for get_cookies()."""

    def test_header_order_preserved(self) -> None:
        headers = [
            Header(name="Set-Cookie", value="b=2"),
            Header(name="Content-Type", value="application/json"),
            Header(name="set-cookie", value="a=1"),
            Header(name="Set-Cookie", value="b=3"),
        ]
        cookies = get_cookies(headers)
        assert [(c.key, c.value) for c in cookies] == [("b", "2"), ("a", "1"), ("b", "3")]

    def test_unparseable_values_skipped(self) -> None:
        headers = [
            Header(name="Set-Cookie", value="garbage"),
            Header(name="Set-Cookie", value="a=1"),
        ]
        assert [c.key for c in get_cookies(headers)] == ["a"]

    def test_no_set_cookie_headers(self) -> None:
        assert get_cookies([Header(name="Content-Type", value="text/plain")]) == []

    @given(names=st.lists(token_strategy, min_size=0, max_size=10))
    def test_one_cookie_per_header(self, names: list[str]) -> None:
        headers = [Header(name="Set-Cookie", value=f"{name}=v{i}") for i, name in enumerate(names)]
        cookies = get_cookies(headers)
        assert [c.key for c in cookies] == names
        assert [c.value for c in cookies] == [f"v{i}" for i in range(len(names))]
