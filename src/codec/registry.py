"""Process-wide type registry.

The registry is a read-only mapping from the type tag reported by
``TYPE`` to its codec, built once at import time.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from core.constants import SUPPORTED_KEY_TYPES
from core.errors import KeysnapUnsupportedTypeError
from codec.value_codecs import (
    FieldMapCodec,
    OrderedListCodec,
    ScalarCodec,
    ScoredSetCodec,
    UnorderedSetCodec,
    ValueCodec,
)

TYPE_REGISTRY: Mapping[str, ValueCodec] = MappingProxyType(
    {
        "string": ScalarCodec(),
        "list": OrderedListCodec(),
        "set": UnorderedSetCodec(),
        "zset": ScoredSetCodec(),
        "hash": FieldMapCodec(),
    }
)


def lookup_codec(key_type: str) -> ValueCodec:
    """Resolve the codec registered for a type tag.

    Args:
        key_type: Type tag such as ``hash`` or ``zset``.

    Returns:
        Stateless codec for the tag.

    Raises:
        KeysnapUnsupportedTypeError: If no codec handles the tag.
    """
    codec = TYPE_REGISTRY.get(key_type)
    if codec is None:
        supported = ", ".join(SUPPORTED_KEY_TYPES)
        raise KeysnapUnsupportedTypeError(
            f"Unsupported key type '{key_type}'. Supported types: {supported}."
        )
    return codec


def supported_key_types() -> tuple[str, ...]:
    """Return supported type tags in registry order."""
    return tuple(TYPE_REGISTRY)
