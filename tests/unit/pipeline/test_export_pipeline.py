"""Unit tests for the export pipeline."""

from __future__ import annotations

import json

import pytest

from core.errors import KeysnapConnectionError
from core.types import ExportOptions
from pipeline.export_pipeline import export_snapshot
from tests.fake_redis import FakeRedis


def _seeded_store() -> FakeRedis:
    store = FakeRedis()
    store.put("greeting", "string", "hello", ttl=120)
    store.put("queue", "list", ["x", "y", "z"])
    store.put("tags", "set", {"b", "a"})
    store.put("board", "zset", {"a": 1.5, "b": -2.0})
    store.put("user:1", "hash", {"name": "Ada"})
    return store


def test_export_snapshot_writes_every_supported_type(tmp_path) -> None:
    """Export should write one document member per key in the schema shape."""
    output_path = tmp_path / "data.json"

    summary = export_snapshot(_seeded_store(), ExportOptions(output_path=str(output_path)))
    document = json.loads(output_path.read_text(encoding="utf-8"))

    assert summary.succeeded_count == 5 and summary.failed_count == 0
    assert document == {
        "greeting": {"type": "string", "ttl": 120, "data": ["hello"]},
        "queue": {"type": "list", "ttl": -1, "data": ["x", "y", "z"]},
        "tags": {"type": "set", "ttl": -1, "data": ["a", "b"]},
        "board": {"type": "zset", "ttl": -1, "data": {"b": -2.0, "a": 1.5}},
        "user:1": {"type": "hash", "ttl": -1, "data": {"name": "Ada"}},
    }


def test_export_snapshot_skips_file_for_empty_store(tmp_path) -> None:
    """An empty database should produce no file and no failures."""
    output_path = tmp_path / "data.json"

    summary = export_snapshot(FakeRedis(), ExportOptions(output_path=str(output_path)))

    assert not output_path.exists()
    assert summary.total_count == 0 and summary.failed_count == 0
    assert summary.output_path is None


def test_export_snapshot_isolates_unsupported_types(tmp_path) -> None:
    """Unsupported keys should be counted as failed without aborting the run."""
    store = FakeRedis()
    store.put("events", "stream", [("1-0", {"a": "b"})])
    store.put("greeting", "string", "hello")
    store.put("tags", "set", {"a"})
    output_path = tmp_path / "data.json"

    summary = export_snapshot(store, ExportOptions(output_path=str(output_path)))
    document = json.loads(output_path.read_text(encoding="utf-8"))

    assert (summary.succeeded_count, summary.failed_count, summary.total_count) == (2, 1, 3)
    assert summary.outcomes[0].status == "skipped"
    assert sorted(document) == ["greeting", "tags"]


class _BrokenHashRedis(FakeRedis):
    def hgetall(self, name: str) -> dict[str, str]:
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


def test_export_snapshot_records_decode_failures(tmp_path) -> None:
    """A key that fails to decode should be recorded with its reason."""
    store = _BrokenHashRedis()
    store.put("binary", "hash", {"f": "v"})
    store.put("greeting", "string", "hello")

    summary = export_snapshot(store, ExportOptions(output_path=str(tmp_path / "data.json")))

    failed = [outcome for outcome in summary.outcomes if outcome.status == "failed"]
    assert [outcome.key for outcome in failed] == ["binary"]
    assert failed[0].reason is not None and "UnicodeDecodeError" in failed[0].reason
    assert summary.succeeded_count == 1


class _DisconnectedRedis(FakeRedis):
    def scan_iter(self, match=None, count=None):
        raise ConnectionError("connection reset by peer")


def test_export_snapshot_raises_when_enumeration_fails(tmp_path) -> None:
    """Losing the connection while listing keys should be fatal and write nothing."""
    output_path = tmp_path / "data.json"

    with pytest.raises(KeysnapConnectionError):
        export_snapshot(_DisconnectedRedis(), ExportOptions(output_path=str(output_path)))

    assert not output_path.exists()


def test_export_snapshot_uploads_when_uri_given(tmp_path, monkeypatch) -> None:
    """An output URI should upload the written document."""
    uploads: list[tuple[str, str]] = []
    monkeypatch.setattr("pipeline.export_pipeline.create_s3_client", lambda config: object())
    monkeypatch.setattr(
        "pipeline.export_pipeline.upload_document",
        lambda client, path, uri: uploads.append((str(path), uri)),
    )
    output_path = tmp_path / "data.json"
    options = ExportOptions(output_path=str(output_path), output_uri="s3://backups/data.json")

    export_snapshot(_seeded_store(), options)

    assert uploads == [(str(output_path), "s3://backups/data.json")]


def _decoded_name(raw: bytes) -> str:
    return raw.decode("utf-8", "surrogateescape")


class _RawKeyRedis(FakeRedis):
    """Store whose scan decodes raw key bytes the way the live client does."""

    def __init__(self, raw_keys: list[bytes]) -> None:
        super().__init__()
        self._raw_keys = raw_keys

    def scan_iter(self, match=None, count=None):
        for raw in self._raw_keys:
            yield _decoded_name(raw)


def test_export_snapshot_fails_only_keys_with_non_utf8_names(tmp_path) -> None:
    """A binary key name should fail that key while the rest export."""
    raw_keys = [b"good", b"\xff\xfebin", b"other"]
    store = _RawKeyRedis(raw_keys)
    for raw in raw_keys:
        store.put(_decoded_name(raw), "string", "v")
    output_path = tmp_path / "data.json"

    summary = export_snapshot(store, ExportOptions(output_path=str(output_path)))
    document = json.loads(output_path.read_text(encoding="utf-8"))

    assert (summary.succeeded_count, summary.failed_count, summary.total_count) == (2, 1, 3)
    failed = [outcome for outcome in summary.outcomes if outcome.status == "failed"]
    assert [outcome.key for outcome in failed] == ["\\xff\\xfebin"]
    assert failed[0].reason is not None and "not valid UTF-8" in failed[0].reason
    assert sorted(document) == ["good", "other"]


def test_export_snapshot_fails_only_keys_with_non_utf8_values(tmp_path) -> None:
    """A binary value decoded with surrogate escapes should fail only its key."""
    store = FakeRedis()
    store.put("blob", "string", _decoded_name(b"\x89PNG\xff"))
    store.put("greeting", "string", "hello")
    output_path = tmp_path / "data.json"

    summary = export_snapshot(store, ExportOptions(output_path=str(output_path)))
    document = json.loads(output_path.read_text(encoding="utf-8"))

    failed = [outcome for outcome in summary.outcomes if outcome.status == "failed"]
    assert [(outcome.key, outcome.key_type) for outcome in failed] == [("blob", "string")]
    assert list(document) == ["greeting"]


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant {name}")


def test_export_snapshot_writes_infinite_scores_as_standard_json(tmp_path) -> None:
    """Infinite zset scores should be written as strings a strict parser accepts."""
    store = FakeRedis()
    store.put("bounds", "zset", {"floor": float("-inf"), "mid": 0.5, "ceiling": float("inf")})
    output_path = tmp_path / "data.json"

    summary = export_snapshot(store, ExportOptions(output_path=str(output_path)))
    text = output_path.read_text(encoding="utf-8")
    document = json.loads(text, parse_constant=_reject_constant)

    assert summary.succeeded_count == 1
    assert "Infinity" not in text
    assert document["bounds"]["data"] == {"floor": "-inf", "mid": 0.5, "ceiling": "inf"}
