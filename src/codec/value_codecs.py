"""Value codecs for the native Redis value shapes.

Each codec is stateless and converts one key between three forms:
the store value (read with ``decode``, written with ``encode``), the
typed payload, and the JSON fragment stored under ``data`` in a
snapshot document.
"""

from __future__ import annotations

import math
from typing import Any, Protocol

from core.errors import KeysnapCodecError
from core.types import (
    FieldMapPayload,
    KeyType,
    ListPayload,
    Payload,
    ScalarPayload,
    ScoredSetPayload,
    SetPayload,
)
from codec.store_protocols import StoreBatch, StoreReader

_INFINITE_SCORES = {"inf": math.inf, "+inf": math.inf, "-inf": -math.inf}


class ValueCodec(Protocol):
    """Conversion contract shared by every codec variant."""

    key_type: KeyType

    def decode(self, reader: StoreReader, key: str) -> Payload: ...

    def encode(self, payload: Payload, batch: StoreBatch, key: str) -> None: ...

    def to_json(self, payload: Payload) -> Any: ...

    def from_json(self, fragment: Any) -> Payload: ...


class ScalarCodec:
    """Codec for ``string`` keys, serialized as a one-element array."""

    key_type: KeyType = "string"

    def decode(self, reader: StoreReader, key: str) -> ScalarPayload:
        return ScalarPayload(value=reader.get(key))

    def encode(self, payload: Payload, batch: StoreBatch, key: str) -> None:
        scalar = _expect_payload(payload, ScalarPayload, self.key_type)
        if scalar.value is None:
            return
        batch.set(key, scalar.value)

    def to_json(self, payload: Payload) -> list[str | None]:
        scalar = _expect_payload(payload, ScalarPayload, self.key_type)
        return [scalar.value]

    def from_json(self, fragment: Any) -> ScalarPayload:
        values = _require_array(fragment, self.key_type)
        if len(values) != 1:
            raise KeysnapCodecError(
                f"Invalid '{self.key_type}' data: expected an array with exactly one "
                f"element, got {len(values)}."
            )
        value = values[0]
        if value is not None and not isinstance(value, str):
            raise KeysnapCodecError(
                f"Invalid '{self.key_type}' data: expected a string or null, "
                f"got {type(value).__name__}."
            )
        return ScalarPayload(value=value)


class OrderedListCodec:
    """Codec for ``list`` keys.

    Elements are written back with a tail push so that the imported list
    reads in the same order it was exported.
    """

    key_type: KeyType = "list"

    def decode(self, reader: StoreReader, key: str) -> ListPayload:
        length = reader.llen(key)
        if length <= 0:
            return ListPayload()
        return ListPayload(items=tuple(reader.lrange(key, 0, length - 1)))

    def encode(self, payload: Payload, batch: StoreBatch, key: str) -> None:
        items = _expect_payload(payload, ListPayload, self.key_type).items
        if items:
            batch.rpush(key, *items)

    def to_json(self, payload: Payload) -> list[str]:
        return list(_expect_payload(payload, ListPayload, self.key_type).items)

    def from_json(self, fragment: Any) -> ListPayload:
        values = _require_array(fragment, self.key_type)
        return ListPayload(items=tuple(_require_strings(values, self.key_type)))


class UnorderedSetCodec:
    """Codec for ``set`` keys. Members are serialized sorted for stable output."""

    key_type: KeyType = "set"

    def decode(self, reader: StoreReader, key: str) -> SetPayload:
        return SetPayload(members=frozenset(reader.smembers(key)))

    def encode(self, payload: Payload, batch: StoreBatch, key: str) -> None:
        members = _expect_payload(payload, SetPayload, self.key_type).members
        if members:
            batch.sadd(key, *sorted(members))

    def to_json(self, payload: Payload) -> list[str]:
        return sorted(_expect_payload(payload, SetPayload, self.key_type).members)

    def from_json(self, fragment: Any) -> SetPayload:
        values = _require_array(fragment, self.key_type)
        return SetPayload(members=frozenset(_require_strings(values, self.key_type)))


class ScoredSetCodec:
    """Codec for ``zset`` keys, serialized as a member to score object.

    Infinite scores are written as the strings ``"inf"`` and ``"-inf"``, the
    form Redis itself uses, because JSON has no infinity literal.
    """

    key_type: KeyType = "zset"

    def decode(self, reader: StoreReader, key: str) -> ScoredSetPayload:
        pairs = reader.zrangebyscore(key, "-inf", "+inf", withscores=True)
        return ScoredSetPayload(scores={member: float(score) for member, score in pairs})

    def encode(self, payload: Payload, batch: StoreBatch, key: str) -> None:
        scores = _expect_payload(payload, ScoredSetPayload, self.key_type).scores
        if scores:
            batch.zadd(key, dict(scores))

    def to_json(self, payload: Payload) -> dict[str, float | str]:
        scores = _expect_payload(payload, ScoredSetPayload, self.key_type).scores
        return {member: _score_to_json(score) for member, score in scores.items()}

    def from_json(self, fragment: Any) -> ScoredSetPayload:
        members = _require_object(fragment, self.key_type)
        scores: dict[str, float] = {}
        for member, score in members.items():
            if isinstance(score, str):
                scores[member] = _infinite_score_from_json(member, score)
                continue
            # bool is an int subclass and must not pass as a score
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                raise KeysnapCodecError(
                    f"Invalid '{self.key_type}' data: score for member '{member}' "
                    f"must be a number, got {type(score).__name__}."
                )
            if math.isnan(score):
                raise KeysnapCodecError(
                    f"Invalid '{self.key_type}' data: score for member '{member}' is NaN."
                )
            scores[member] = float(score)
        return ScoredSetPayload(scores=scores)


class FieldMapCodec:
    """Codec for ``hash`` keys, serialized as a field to value object."""

    key_type: KeyType = "hash"

    def decode(self, reader: StoreReader, key: str) -> FieldMapPayload:
        return FieldMapPayload(fields=dict(reader.hgetall(key)))

    def encode(self, payload: Payload, batch: StoreBatch, key: str) -> None:
        fields = _expect_payload(payload, FieldMapPayload, self.key_type).fields
        if fields:
            batch.hset(key, mapping=dict(fields))

    def to_json(self, payload: Payload) -> dict[str, str]:
        return dict(_expect_payload(payload, FieldMapPayload, self.key_type).fields)

    def from_json(self, fragment: Any) -> FieldMapPayload:
        fields = _require_object(fragment, self.key_type)
        for field_name, value in fields.items():
            if not isinstance(value, str):
                raise KeysnapCodecError(
                    f"Invalid '{self.key_type}' data: value of field '{field_name}' "
                    f"must be a string, got {type(value).__name__}."
                )
        return FieldMapPayload(fields=dict(fields))


def _expect_payload(payload: Payload, payload_class: type[Any], key_type: str) -> Any:
    """Return payload when it matches the codec's payload class."""
    if not isinstance(payload, payload_class):
        raise KeysnapCodecError(
            f"Codec '{key_type}' cannot handle {type(payload).__name__}; "
            f"expected {payload_class.__name__}."
        )
    return payload


def _require_array(fragment: Any, key_type: str) -> list[Any]:
    if not isinstance(fragment, list):
        raise KeysnapCodecError(
            f"Invalid '{key_type}' data: expected a JSON array, got {type(fragment).__name__}."
        )
    return fragment


def _require_object(fragment: Any, key_type: str) -> dict[str, Any]:
    if not isinstance(fragment, dict):
        raise KeysnapCodecError(
            f"Invalid '{key_type}' data: expected a JSON object, got {type(fragment).__name__}."
        )
    return fragment


def _require_strings(values: list[Any], key_type: str) -> list[str]:
    for index, value in enumerate(values):
        if not isinstance(value, str):
            raise KeysnapCodecError(
                f"Invalid '{key_type}' data: element {index} must be a string, "
                f"got {type(value).__name__}."
            )
    return values


def _score_to_json(score: float) -> float | str:
    if math.isinf(score):
        return "inf" if score > 0 else "-inf"
    return score


def _infinite_score_from_json(member: str, score: str) -> float:
    value = _INFINITE_SCORES.get(score.strip().lower())
    if value is None:
        raise KeysnapCodecError(
            f"Invalid 'zset' data: score for member '{member}' must be a number "
            f"or one of 'inf', '+inf', '-inf', got '{score}'."
        )
    return value
