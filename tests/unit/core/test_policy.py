"""Unit and property-based tests for the resend decision."""

from datetime import UTC, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from response_cookie.config import CookiePolicy
from response_cookie.core.policy import is_expired, should_resend
from response_cookie.models import StoredResponse

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)

# Ages in whole milliseconds, up to a week
age_ms_strategy = st.integers(min_value=0, max_value=7 * 24 * 3600 * 1000)

# Max ages in whole seconds
max_age_strategy = st.integers(min_value=0, max_value=7 * 24 * 3600)

behavior_strategy = st.sampled_from(["never", "no-history", "when-expired", "always"])

unknown_behavior_strategy = st.text(min_size=1, max_size=20).filter(
    lambda s: s.strip().lower() not in {"never", "no-history", "when-expired", "always"}
)


def response_aged(age: timedelta) -> StoredResponse:
    return StoredResponse(request_id="req_1", created_at=NOW - age, status_code=200)


def policy_for(behavior: str, max_age_seconds: float = 60) -> CookiePolicy:
    return CookiePolicy(cookie_name="sid", trigger_behavior=behavior, max_age_seconds=max_age_seconds)


class TestDecisionTable:
    """One test per row of the decision table."""

    @pytest.mark.parametrize(
        "behavior,absent,present",
        [
            ("never", False, False),
            ("no-history", True, False),
            ("always", True, True),
            ("bogus", False, False),
        ],
    )
    def test_row(self, behavior: str, absent: bool, present: bool) -> None:
        policy = policy_for(behavior)
        assert should_resend(None, policy, NOW) is absent
        assert should_resend(response_aged(timedelta(seconds=1)), policy, NOW) is present

    def test_when_expired_without_response(self) -> None:
        assert should_resend(None, policy_for("when-expired"), NOW) is True

    def test_when_expired_fresh_response(self) -> None:
        response = response_aged(timedelta(seconds=30))
        assert should_resend(response, policy_for("when-expired", 60), NOW) is False

    def test_when_expired_stale_response(self) -> None:
        response = response_aged(timedelta(seconds=120))
        assert should_resend(response, policy_for("when-expired", 60), NOW) is True

    def test_when_expired_age_equal_to_max_is_not_expired(self) -> None:
        response = response_aged(timedelta(seconds=60))
        assert should_resend(response, policy_for("when-expired", 60), NOW) is False

    def test_when_expired_one_millisecond_over(self) -> None:
        response = response_aged(timedelta(seconds=60, milliseconds=1))
        assert should_resend(response, policy_for("when-expired", 60), NOW) is True

    def test_max_age_ignored_for_other_behaviors(self) -> None:
        response = response_aged(timedelta(days=30))
        assert should_resend(response, policy_for("no-history", 0), NOW) is False

    def test_uppercase_behavior(self) -> None:
        assert should_resend(None, policy_for("ALWAYS"), NOW) is True

    def test_is_expired_fractional_max_age(self) -> None:
        response = response_aged(timedelta(seconds=10))
        assert is_expired(response, 9.5, NOW) is True
        assert is_expired(response, 10.5, NOW) is False


class TestDecisionProperties:
    """Property-based tests over ages and behaviors."""

    @given(age_ms=age_ms_strategy, max_age=max_age_strategy)
    def test_never_never_resends(self, age_ms: int, max_age: int) -> None:
        policy = policy_for("never", max_age)
        assert should_resend(None, policy, NOW) is False
        assert should_resend(response_aged(timedelta(milliseconds=age_ms)), policy, NOW) is False

    @given(age_ms=age_ms_strategy)
    def test_no_history_depends_only_on_presence(self, age_ms: int) -> None:
        policy = policy_for("no-history")
        assert should_resend(None, policy, NOW) is True
        assert should_resend(response_aged(timedelta(milliseconds=age_ms)), policy, NOW) is False

    @given(age_ms=age_ms_strategy, max_age=max_age_strategy)
    def test_always_resends(self, age_ms: int, max_age: int) -> None:
        policy = policy_for("always", max_age)
        assert should_resend(None, policy, NOW) is True
        assert should_resend(response_aged(timedelta(milliseconds=age_ms)), policy, NOW) is True

    @given(max_age=max_age_strategy, epsilon_ms=st.integers(min_value=1, max_value=10_000_000))
    def test_when_expired_boundary(self, max_age: int, epsilon_ms: int) -> None:
        policy = policy_for("when-expired", max_age)

        at_limit = response_aged(timedelta(seconds=max_age))
        over_limit = response_aged(timedelta(seconds=max_age, milliseconds=epsilon_ms))

        assert should_resend(at_limit, policy, NOW) is False
        assert should_resend(over_limit, policy, NOW) is True

    @given(age_ms=age_ms_strategy, max_age=max_age_strategy)
    def test_when_expired_matches_age_comparison(self, age_ms: int, max_age: int) -> None:
        policy = policy_for("when-expired", max_age)
        response = response_aged(timedelta(milliseconds=age_ms))
        assert should_resend(response, policy, NOW) is (age_ms / 1000 > max_age)

    @given(behavior=unknown_behavior_strategy, age_ms=age_ms_strategy)
    def test_unknown_behaviors_never_resend(self, behavior: str, age_ms: int) -> None:
        policy = policy_for(behavior)
        assert should_resend(None, policy, NOW) is False
        assert should_resend(response_aged(timedelta(milliseconds=age_ms)), policy, NOW) is False

    @given(behavior=behavior_strategy)
    def test_missing_response_resends_unless_never(self, behavior: str) -> None:
        assert should_resend(None, policy_for(behavior), NOW) is (behavior != "never")
