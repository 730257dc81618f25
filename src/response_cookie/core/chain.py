"""Evaluation chain handling for recursion-safe re-execution.

A dependent request may itself contain a responseCookie tag pointing back at
the request that triggered it. To keep such graphs finite, every render that
re-executes a request forwards the ids already in flight. The chain is an
immutable tuple: each level extends a copy and passes it on, so sibling
renders never see each other's entries.
"""

from collections.abc import Iterable
from typing import Any

from response_cookie.config import REQUEST_CHAIN_KEY
from response_cookie.models import ExtraInfo

RequestChain = tuple[str, ...]

EMPTY_CHAIN: RequestChain = ()


def to_chain(value: Any) -> RequestChain:
    """Coerce a side-channel value into a chain.

    None becomes the empty chain. A lone string is one id, not a sequence of
    characters.

    Examples:
        >>> to_chain(None)
        ()
        >>> to_chain(["a", "b"])
        ('a', 'b')
    """
    if value is None:
        return EMPTY_CHAIN
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value)
    raise TypeError(f"Request chain must be a sequence of ids, got {type(value).__name__}")


def is_in_chain(chain: RequestChain, request_id: str) -> bool:
    """Return True if the request is already being re-executed in this render.

    Examples:
        >>> is_in_chain(("a", "b"), "b")
        True
        >>> is_in_chain((), "a")
        False
    """
    return request_id in chain


def extend_chain(chain: RequestChain, request_id: str) -> RequestChain:
    """Return a new chain with request_id appended.

    Examples:
        >>> chain = ("a",)
        >>> extend_chain(chain, "b")
        ('a', 'b')
        >>> chain
        ('a',)
    """
    return (*chain, request_id)


def chain_extra_info(chain: RequestChain, key: str = REQUEST_CHAIN_KEY) -> list[ExtraInfo]:
    """Build the transport metadata that carries the chain into nested renders."""
    return [ExtraInfo(name=key, value=list(chain))]
