"""Runtime configuration model for keysnap.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_REDIS_DB, DEFAULT_REDIS_HOST, DEFAULT_REDIS_PORT
from core.errors import KeysnapConfigError


@dataclass(frozen=True)
class KeysnapConfig:
    """Validated runtime configuration.

    Attributes:
        redis_host: Host of the Redis server.
        redis_port: TCP port of the Redis server.
        redis_password: Optional password sent on connection.
        redis_db: Database index selected after connecting.
        s3_region: Optional default AWS region for snapshot uploads.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    redis_host: str
    redis_port: int
    redis_password: str | None
    redis_db: int
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "KeysnapConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            KeysnapConfigError: If environment values are invalid.
        """
        return cls(
            redis_host=os.getenv("KEYSNAP_REDIS_HOST", DEFAULT_REDIS_HOST),
            redis_port=_parse_non_negative_int(
                "KEYSNAP_REDIS_PORT", os.getenv("KEYSNAP_REDIS_PORT", str(DEFAULT_REDIS_PORT))
            ),
            redis_password=os.getenv("KEYSNAP_REDIS_PASSWORD") or None,
            redis_db=_parse_non_negative_int(
                "KEYSNAP_REDIS_DB", os.getenv("KEYSNAP_REDIS_DB", str(DEFAULT_REDIS_DB))
            ),
            s3_region=os.getenv("KEYSNAP_S3_REGION"),
            s3_profile=os.getenv("KEYSNAP_S3_PROFILE"),
        )


def _parse_non_negative_int(variable_name: str, raw_value: str) -> int:
    """Parse an integer environment value that must not be negative.

    Args:
        variable_name: Environment variable name, used in error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        KeysnapConfigError: If value is not a non-negative integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise KeysnapConfigError(
            f"Invalid {variable_name} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {variable_name} to a numeric value."
        ) from error
    if value < 0:
        raise KeysnapConfigError(
            f"Invalid {variable_name} value: expected value >= 0, got {value}."
        )
    return value
