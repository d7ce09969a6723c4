"""Conversion between typed entries and snapshot document members.

A document member has the shape ``{"type": tag, "ttl": seconds, "data": ...}``
where ``data`` is the JSON fragment produced by the tag's codec.
"""

from __future__ import annotations

from typing import Any

from core.constants import DOCUMENT_DATA_FIELD, DOCUMENT_TTL_FIELD, DOCUMENT_TYPE_FIELD
from core.errors import KeysnapCodecError
from core.types import Entry
from codec.registry import lookup_codec


def entry_to_document(entry: Entry) -> dict[str, Any]:
    """Serialize one entry into its document member form.

    Raises:
        KeysnapUnsupportedTypeError: If the entry's type has no codec.
    """
    codec = lookup_codec(entry.key_type)
    return {
        DOCUMENT_TYPE_FIELD: entry.key_type,
        DOCUMENT_TTL_FIELD: entry.ttl,
        DOCUMENT_DATA_FIELD: codec.to_json(entry.payload),
    }


def read_entry_type(key: str, member: Any) -> str:
    """Return the type tag of a document member.

    Args:
        key: Store key the member belongs to.
        member: Raw JSON value stored under the key.

    Returns:
        Type tag string.

    Raises:
        KeysnapCodecError: If the member is not an object or lacks a string tag.
    """
    if not isinstance(member, dict):
        raise KeysnapCodecError(
            f"Invalid entry for key '{key}': expected a JSON object, got {type(member).__name__}."
        )
    key_type = member.get(DOCUMENT_TYPE_FIELD)
    if not isinstance(key_type, str):
        raise KeysnapCodecError(
            f"Invalid entry for key '{key}': '{DOCUMENT_TYPE_FIELD}' must be a string."
        )
    return key_type


def entry_from_document(key: str, member: Any) -> Entry:
    """Materialize one document member into a typed entry.

    Args:
        key: Store key the member belongs to.
        member: Raw JSON value stored under the key.

    Returns:
        Typed entry with a decoded payload.

    Raises:
        KeysnapUnsupportedTypeError: If the member's type has no codec.
        KeysnapCodecError: If the member or its data has the wrong shape.
    """
    key_type = read_entry_type(key, member)
    codec = lookup_codec(key_type)
    ttl = member.get(DOCUMENT_TTL_FIELD)
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise KeysnapCodecError(
            f"Invalid entry for key '{key}': '{DOCUMENT_TTL_FIELD}' must be an integer."
        )
    if DOCUMENT_DATA_FIELD not in member:
        raise KeysnapCodecError(
            f"Invalid entry for key '{key}': missing '{DOCUMENT_DATA_FIELD}' field."
        )
    payload = codec.from_json(member[DOCUMENT_DATA_FIELD])
    return Entry(key_type=key_type, ttl=ttl, payload=payload)
