"""Core constants used across keysnap modules.

This module centralizes connection defaults and document format values.
Keeping values here avoids magic literals in pipeline logic.
"""

from __future__ import annotations

DEFAULT_REDIS_HOST = "localhost"
DEFAULT_REDIS_PORT = 6379
DEFAULT_REDIS_DB = 0
DEFAULT_DATA_FILE_NAME = "data.json"
DATA_FILE_EXTENSION = ".json"
KEY_SCAN_PATTERN = "*"
KEY_SCAN_COUNT = 1000
REDIS_CLIENT_NAME = "redis-exporter"
DOCUMENT_JSON_INDENT = 2
DOCUMENT_TYPE_FIELD = "type"
DOCUMENT_TTL_FIELD = "ttl"
DOCUMENT_DATA_FIELD = "data"
SUPPORTED_KEY_TYPES = ("string", "list", "set", "zset", "hash")
