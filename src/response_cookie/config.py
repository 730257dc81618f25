"""Configuration module for response cookie resolution.

This module provides two configuration records:

- CookiePolicy: the per-tag options (which cookie, when to resend, max age),
  built once from the tag's arguments at the entry boundary.
- ResponseCookieSettings: host-level defaults and logging settings.

Example:
    Building a policy from tag arguments:

        >>> request_id, policy = CookiePolicy.from_args(
        ...     ["req_login", "session", "When-Expired", 120]
        ... )
        >>> policy.trigger_behavior
        'when-expired'
        >>> policy.max_age_seconds
        120.0

    Loading settings from environment:

        >>> import os
        >>> os.environ['RESPONSE_COOKIE_LOG_LEVEL'] = 'DEBUG'
        >>> settings = ResponseCookieSettings.from_env()
        >>> settings.log_level
        'DEBUG'
"""

import math
import os
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field, field_validator

from response_cookie.models import DEFAULT_TRIGGER_BEHAVIOR, TriggerBehavior

DEFAULT_MAX_AGE_SECONDS = 60.0
REQUEST_CHAIN_KEY = "requestChain"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def normalize_trigger_behavior(v: Any) -> str:
    """Lower-case a trigger behavior, falling back to the default when empty.

    Unknown values are kept as-is (lower-cased) rather than rejected.

    Example:
        >>> normalize_trigger_behavior("NO-HISTORY")
        'no-history'
        >>> normalize_trigger_behavior(None)
        'never'
    """
    if isinstance(v, TriggerBehavior):
        return v.value
    if v is None or v == "":
        return DEFAULT_TRIGGER_BEHAVIOR.value
    return str(v).strip().lower()


class CookiePolicy(BaseModel):
    """Which cookie to extract and when the dependent request is resent.

    Attributes:
        cookie_name: Name of the cookie to extract. Matching is case-sensitive.
        trigger_behavior: One of "never", "no-history", "when-expired",
            "always" (case-insensitive). Unknown values behave like "never".
        max_age_seconds: Maximum age of a stored response before it counts as
            expired. Only used with "when-expired". Default is 60. None when
            the given value is not a number; resolving a "when-expired"
            policy then fails with InvalidArgumentError.

    Note:
        This class is immutable (frozen=True).
    """

    cookie_name: str = Field(default="", description="Name of the cookie to extract")
    trigger_behavior: str = Field(
        default=DEFAULT_TRIGGER_BEHAVIOR.value,
        description="When to resend the dependent request",
    )
    max_age_seconds: float | None = Field(
        default=DEFAULT_MAX_AGE_SECONDS,
        description="Maximum age of a response before it expires (when-expired only)",
    )

    model_config = {"frozen": True}

    @field_validator("cookie_name", mode="before")
    @classmethod
    def validate_cookie_name(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("trigger_behavior", mode="before")
    @classmethod
    def validate_trigger_behavior(cls, v: Any) -> str:
        """Normalize the trigger behavior to lower case.

        Example:
            >>> CookiePolicy(trigger_behavior="ALWAYS").trigger_behavior
            'always'
        """
        return normalize_trigger_behavior(v)

    @field_validator("max_age_seconds", mode="before")
    @classmethod
    def validate_max_age_seconds(cls, v: Any) -> float | None:
        """Parse the max age, leaving it unset when it is not a number.

        Hosts pass None for hidden arguments, which means the default.

        Example:
            >>> CookiePolicy(max_age_seconds="30").max_age_seconds
            30.0
            >>> CookiePolicy(max_age_seconds="soon").max_age_seconds is None
            True
        """
        if v is None or v == "":
            return DEFAULT_MAX_AGE_SECONDS
        try:
            seconds = float(v)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(seconds) else seconds

    @property
    def behavior(self) -> TriggerBehavior | None:
        """The trigger behavior as an enum member, or None if unrecognized."""
        try:
            return TriggerBehavior(self.trigger_behavior)
        except ValueError:
            return None

    @classmethod
    def from_args(
        cls,
        args: Sequence[Any],
        settings: "ResponseCookieSettings | None" = None,
    ) -> tuple[str, "CookiePolicy"]:
        """Build a policy from positional tag arguments.

        Arguments are read in tag order: request id, cookie name, trigger
        behavior, max age. Missing trailing arguments take their defaults.

        Args:
            args: Positional tag arguments as supplied by the host.
            settings: Optional host settings providing defaults.

        Returns:
            Tuple of (request id, policy). The request id is "" when absent.

        Example:
            >>> request_id, policy = CookiePolicy.from_args(["req_1", "sid"])
            >>> request_id, policy.cookie_name, policy.trigger_behavior
            ('req_1', 'sid', 'never')
        """
        padded = list(args) + [None] * (4 - len(args))
        request_id, cookie_name, trigger_behavior, max_age_seconds = padded[:4]

        if settings is not None:
            if trigger_behavior is None or trigger_behavior == "":
                trigger_behavior = settings.default_trigger_behavior
            if max_age_seconds is None or max_age_seconds == "":
                max_age_seconds = settings.default_max_age_seconds

        policy = cls(
            cookie_name=cookie_name,
            trigger_behavior=trigger_behavior,
            max_age_seconds=max_age_seconds,
        )
        return ("" if request_id is None else str(request_id)), policy

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "CookiePolicy":
        """Create a policy from a dictionary.

        Raises:
            ValidationError: If the dictionary contains invalid values.
        """
        return cls(**config_dict)


class ResponseCookieSettings(BaseModel):
    """Host-level settings for response cookie resolution.

    Attributes:
        log_level: Log level for configure_logging. Default is "INFO".
        json_logs: Emit JSON logs instead of console output. Default is True.
        default_trigger_behavior: Trigger behavior used when a tag leaves it
            empty. Default is "never".
        default_max_age_seconds: Max age used when a tag leaves it empty.
            Default is 60.
        request_chain_key: Name of the extra-info entry that carries the
            evaluation chain between nested renders. Default is "requestChain".
    """

    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=True, description="Emit JSON formatted logs")
    default_trigger_behavior: str = Field(
        default=DEFAULT_TRIGGER_BEHAVIOR.value,
        description="Trigger behavior used when none is given",
    )
    default_max_age_seconds: float = Field(
        default=DEFAULT_MAX_AGE_SECONDS,
        description="Max age used when none is given",
    )
    request_chain_key: str = Field(
        default=REQUEST_CHAIN_KEY,
        min_length=1,
        description="Extra-info key carrying the evaluation chain",
    )

    model_config = {"frozen": True}

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Validate and upper-case the log level.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Valid levels are: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return level

    @field_validator("default_trigger_behavior", mode="before")
    @classmethod
    def validate_default_trigger_behavior(cls, v: Any) -> str:
        """Normalize and validate the default trigger behavior.

        Unlike per-tag values, the host default must be a known behavior.
        """
        normalized = normalize_trigger_behavior(v)
        valid = {behavior.value for behavior in TriggerBehavior}
        if normalized not in valid:
            raise ValueError(
                f"Invalid trigger behavior: {v}. Valid behaviors are: {', '.join(sorted(valid))}"
            )
        return normalized

    @field_validator("default_max_age_seconds")
    @classmethod
    def validate_default_max_age_seconds(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"default_max_age_seconds must be >= 0, got {v}")
        return v

    @classmethod
    def from_env(cls, prefix: str = "RESPONSE_COOKIE_") -> "ResponseCookieSettings":
        """Create settings from environment variables.

        Variable names are upper-case field names with the prefix, e.g.
        RESPONSE_COOKIE_DEFAULT_MAX_AGE_SECONDS. Missing variables use the
        defaults.

        Args:
            prefix: Prefix for environment variable names.

        Returns:
            ResponseCookieSettings populated from the environment.
        """
        config_dict: dict[str, Any] = {}

        field_types = {
            "log_level": str,
            "json_logs": bool,
            "default_trigger_behavior": str,
            "default_max_age_seconds": float,
            "request_chain_key": str,
        }

        for field_name, field_type in field_types.items():
            env_var = f"{prefix}{field_name.upper()}"
            env_value = os.environ.get(env_var)

            if env_value is not None:
                if field_type is float:
                    config_dict[field_name] = float(env_value)
                elif field_type is bool:
                    config_dict[field_name] = env_value.strip().lower() in ("1", "true", "yes", "on")
                else:
                    config_dict[field_name] = env_value

        return cls(**config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ResponseCookieSettings":
        """Create settings from a dictionary.

        Raises:
            ValidationError: If the dictionary contains invalid values.
        """
        return cls(**config_dict)
