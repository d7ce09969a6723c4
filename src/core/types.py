"""Shared typed models.

This module defines immutable data models used by the codec, store,
and pipeline layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping, Union

KeyType = Literal["string", "list", "set", "zset", "hash"]
EntryStatus = Literal["succeeded", "skipped", "failed"]
RunOperation = Literal["export", "import"]


@dataclass(frozen=True)
class ScalarPayload:
    """Value of a ``string`` key; ``None`` when the key held no value."""

    value: str | None


@dataclass(frozen=True)
class ListPayload:
    """Elements of a ``list`` key in store order. Duplicates allowed."""

    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class SetPayload:
    """Members of a ``set`` key."""

    members: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ScoredSetPayload:
    """Members of a ``zset`` key mapped to their double-precision scores."""

    scores: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldMapPayload:
    """Fields of a ``hash`` key mapped to their string values."""

    fields: Mapping[str, str] = field(default_factory=dict)


Payload = Union[ScalarPayload, ListPayload, SetPayload, ScoredSetPayload, FieldMapPayload]


@dataclass(frozen=True)
class Entry:
    """One key's exported record.

    Attributes:
        key_type: Type tag naming the codec that owns the payload.
        ttl: Seconds until expiry; non-positive means no expiry.
        payload: Decoded key value.
    """

    key_type: str
    ttl: int
    payload: Payload


Dataset = dict[str, Entry]


@dataclass(frozen=True)
class EntryOutcome:
    """Per-key result row for one pipeline run.

    Attributes:
        key: Store key name.
        key_type: Type tag reported by the store or read from the file.
        status: ``succeeded``, ``skipped`` (unsupported type) or ``failed``.
        reason: Failure description for non-succeeded rows.
    """

    key: str
    key_type: str | None
    status: EntryStatus
    reason: str | None = None


@dataclass(frozen=True)
class RunSummary:
    """Aggregate result of an export or import run.

    Attributes:
        operation: Pipeline that produced the summary.
        outcomes: Ordered per-key outcomes.
        elapsed_seconds: Wall-clock duration of the run.
        output_path: Written document path, export only.
        flushed_key_count: Keys removed before import, when flushing.
    """

    operation: RunOperation
    outcomes: tuple[EntryOutcome, ...]
    elapsed_seconds: float
    output_path: str | None = None
    flushed_key_count: int | None = None

    @property
    def total_count(self) -> int:
        """Count keys seen by the run."""
        return len(self.outcomes)

    @property
    def succeeded_count(self) -> int:
        """Count keys processed without error."""
        return sum(1 for outcome in self.outcomes if outcome.status == "succeeded")

    @property
    def skipped_count(self) -> int:
        """Count keys skipped because their type is unsupported."""
        return sum(1 for outcome in self.outcomes if outcome.status == "skipped")

    @property
    def failed_count(self) -> int:
        """Count keys that were skipped or failed."""
        return self.total_count - self.succeeded_count


@dataclass(frozen=True)
class ExportOptions:
    """Export command options.

    Attributes:
        output_path: Local JSON document path to create.
        output_uri: Optional ``s3://bucket/key`` upload destination.
    """

    output_path: str
    output_uri: str | None = None


@dataclass(frozen=True)
class ImportOptions:
    """Import command options.

    Attributes:
        input_path: Local JSON document path to load.
        flush: Clear the selected database before writing.
    """

    input_path: str
    flush: bool = False
