"""Unit tests for the codec type registry."""

from __future__ import annotations

import pytest

from codec.registry import TYPE_REGISTRY, lookup_codec, supported_key_types
from core.errors import KeysnapUnsupportedTypeError


def test_supported_key_types_lists_every_native_shape() -> None:
    """Registry should cover the five Redis value shapes."""
    assert supported_key_types() == ("string", "list", "set", "zset", "hash")


def test_lookup_codec_returns_codec_for_tag() -> None:
    """Each registered codec should report the tag it is registered under."""
    for key_type in supported_key_types():
        assert lookup_codec(key_type).key_type == key_type


def test_lookup_codec_raises_for_unknown_tag() -> None:
    """Unknown tags should raise a recoverable unsupported-type error."""
    with pytest.raises(KeysnapUnsupportedTypeError, match="stream"):
        lookup_codec("stream")


def test_registry_is_read_only() -> None:
    """Registry mapping should reject mutation after import."""
    with pytest.raises(TypeError):
        TYPE_REGISTRY["stream"] = lookup_codec("string")  # type: ignore[index]
