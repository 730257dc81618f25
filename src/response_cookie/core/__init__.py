"""Core logic for response cookie resolution.

This package contains:
- Policy: the resend decision per trigger behavior
- Chain: the evaluation chain that stops recursive re-execution
- Cookies: response validation and cookie selection
- Orchestrator: the end-to-end resolution
"""

from response_cookie.core.chain import extend_chain, is_in_chain
from response_cookie.core.cookies import extract_cookie, validate_response
from response_cookie.core.orchestrator import ResolutionState, resolve_cookie
from response_cookie.core.policy import should_resend

__all__ = [
    "should_resend",
    "is_in_chain",
    "extend_chain",
    "validate_response",
    "extract_cookie",
    "resolve_cookie",
    "ResolutionState",
]
