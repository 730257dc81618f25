"""Prometheus metrics for response cookie resolution.

Metrics include:

- Resolution counter by result (ok, or the name of the error raised)
- Resend counter by outcome (sent, empty, skipped_cycle, skipped_preview)
- Resend duration histogram

Examples:
    Recording a successful resolution::

        from response_cookie.observability.metrics import record_resolution

        record_resolution(result="ok")
"""

from prometheus_client import Counter, Histogram

# Labels: result (ok, MissingArgumentError, NoResponseError, ...)
resolutions_total = Counter(
    "response_cookie_resolutions_total",
    "Total number of cookie resolutions by result",
    ["result"],
)

# Labels: outcome (sent, empty, skipped_cycle, skipped_preview)
resends_total = Counter(
    "response_cookie_resends_total",
    "Total number of dependent request resend decisions that asked for a resend",
    ["outcome"],
)

resend_duration_seconds = Histogram(
    "response_cookie_resend_duration_seconds",
    "Time spent re-executing dependent requests",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
)


def record_resolution(result: str) -> None:
    """Record the result of one cookie resolution.

    Examples:
        >>> record_resolution("ok")
        >>> record_resolution("CookieNotFoundError")
    """
    resolutions_total.labels(result=result).inc()


def record_resend(outcome: str) -> None:
    """Record what happened to a resend the policy asked for.

    Examples:
        >>> record_resend("skipped_cycle")
    """
    resends_total.labels(outcome=outcome).inc()


def record_resend_duration(duration_seconds: float) -> None:
    """Record how long a dependent request took to re-execute."""
    resend_duration_seconds.observe(duration_seconds)
