"""Redis connection setup.

This module turns runtime configuration into a live, authenticated
redis-py client with the selected database.
"""

from __future__ import annotations

from typing import Any

from core.config import KeysnapConfig
from core.constants import REDIS_CLIENT_NAME
from core.errors import KeysnapConnectionError, KeysnapDependencyError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def open_connection(config: KeysnapConfig) -> Any:
    """Connect to Redis and verify the connection with ``PING``.

    Args:
        config: Runtime config with host, port, password, and database.

    Returns:
        Connected redis-py client returning ``str`` responses. Bytes that
        are not UTF-8 decode to surrogate escapes instead of raising.

    Raises:
        KeysnapDependencyError: If redis-py is missing.
        KeysnapConnectionError: If the server cannot be reached or rejects auth.
    """
    try:
        import redis
    except ImportError as error:
        raise KeysnapDependencyError(
            "keysnap requires the redis package, but it is not installed. "
            "Install redis to export or import snapshots."
        ) from error
    client = redis.Redis(
        host=config.redis_host,
        port=config.redis_port,
        db=config.redis_db,
        password=config.redis_password,
        client_name=REDIS_CLIENT_NAME,
        decode_responses=True,
        encoding_errors="surrogateescape",
    )
    try:
        client.ping()
    except redis.RedisError as error:
        raise KeysnapConnectionError(
            f"Failed to connect to Redis at {config.redis_host}:{config.redis_port} "
            f"(db {config.redis_db}): {error}. "
            "Check host, port, and password settings."
        ) from error
    _LOGGER.info(
        "redis_connected",
        host=config.redis_host,
        port=config.redis_port,
        db=config.redis_db,
    )
    return client
