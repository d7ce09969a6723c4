"""End-to-end tests for export followed by import through the SDK client."""

from __future__ import annotations

import json

from core.config import KeysnapConfig
from core.types import ExportOptions, ImportOptions
from pipeline.snapshot_client import SnapshotClient
from tests.fake_redis import FakeRedis


def _client(store: FakeRedis) -> SnapshotClient:
    return SnapshotClient(KeysnapConfig.from_env(), connection=store)


def test_list_order_survives_export_and_import(tmp_path) -> None:
    """A list should read back in its original order after a round trip."""
    source = FakeRedis()
    source.put("queue", "list", ["x", "y", "z"])
    target = FakeRedis()
    path = str(tmp_path / "data.json")

    _client(source).export_snapshot(ExportOptions(output_path=path))
    _client(target).import_snapshot(ImportOptions(input_path=path))

    assert target.lrange("queue", 0, -1) == ["x", "y", "z"]


def test_ttl_survives_export_and_import(tmp_path) -> None:
    """Expiring keys keep a positive TTL and persistent keys keep none."""
    source = FakeRedis()
    source.put("session", "hash", {"user": "ada"}, ttl=120)
    source.put("config", "string", "on")
    target = FakeRedis()
    path = str(tmp_path / "data.json")

    _client(source).export_snapshot(ExportOptions(output_path=path))
    _client(target).import_snapshot(ImportOptions(input_path=path))

    assert 0 < target.ttl("session") <= 120
    assert target.ttl("config") == -1


def test_scored_set_import_then_export_reproduces_scores(tmp_path) -> None:
    """Imported scores should export as the same member to score pairs."""
    store = FakeRedis()
    input_path = tmp_path / "in.json"
    input_path.write_text(
        json.dumps({"board": {"type": "zset", "ttl": -1, "data": {"b": 2.0, "a": 1.5}}}),
        encoding="utf-8",
    )
    output_path = tmp_path / "out.json"

    _client(store).import_snapshot(ImportOptions(input_path=str(input_path)))
    _client(store).export_snapshot(ExportOptions(output_path=str(output_path)))
    document = json.loads(output_path.read_text(encoding="utf-8"))

    assert document["board"]["data"] == {"a": 1.5, "b": 2.0}


def test_client_opens_connection_once(monkeypatch, tmp_path) -> None:
    """Client should open its connection lazily and reuse it."""
    opened: list[FakeRedis] = []

    def _open(config: KeysnapConfig) -> FakeRedis:
        opened.append(FakeRedis())
        return opened[-1]

    monkeypatch.setattr("pipeline.snapshot_client.open_connection", _open)
    client = SnapshotClient(KeysnapConfig.from_env())

    client.export_snapshot(ExportOptions(output_path=str(tmp_path / "a.json")))
    client.export_snapshot(ExportOptions(output_path=str(tmp_path / "b.json")))

    assert len(opened) == 1
