"""Export pipeline: Redis keyspace to snapshot document.

Keys are enumerated once, each key is decoded by the codec for its
type, and the assembled document is written in a single file write.
A failure on one key is recorded in the run summary and never aborts
the run; only enumeration and file output failures are fatal.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

from core.config import KeysnapConfig
from core.constants import KEY_SCAN_COUNT, KEY_SCAN_PATTERN
from core.errors import (
    KeysnapCodecError,
    KeysnapConnectionError,
    KeysnapUnsupportedTypeError,
)
from core.logging_config import get_logger
from core.types import Dataset, Entry, EntryOutcome, ExportOptions, RunSummary
from codec.entry_document import entry_to_document
from codec.registry import lookup_codec
from codec.store_protocols import StoreConnection, StoreReader
from pipeline.run_summary import log_run_completion
from store.document_io import write_document
from store.s3_upload import create_s3_client, upload_document

_LOGGER = get_logger(__name__)


def export_snapshot(
    connection: StoreConnection,
    options: ExportOptions,
    config: KeysnapConfig | None = None,
) -> RunSummary:
    """Export every key of the selected database into a JSON document.

    Args:
        connection: Live store connection.
        options: Export options with the output path.
        config: Runtime config used for the optional S3 upload.

    Returns:
        Run summary. No file is written when the database is empty.

    Raises:
        KeysnapConnectionError: If key enumeration fails.
        KeysnapFileError: If the document cannot be written.
        KeysnapStoreError: If the requested S3 upload fails.
    """
    started_at = time.monotonic()
    keys = enumerate_keys(connection)
    if not keys:
        _LOGGER.info("export_skipped", reason="no keys found in database")
        summary = RunSummary(
            operation="export",
            outcomes=(),
            elapsed_seconds=time.monotonic() - started_at,
        )
        log_run_completion(summary)
        return summary
    _LOGGER.info("export_started", key_count=len(keys))
    dataset, outcomes = read_dataset(connection, keys)
    output_path = write_document(options.output_path, build_document(dataset))
    if options.output_uri:
        _upload_snapshot(output_path, options.output_uri, config)
    summary = RunSummary(
        operation="export",
        outcomes=tuple(outcomes),
        elapsed_seconds=time.monotonic() - started_at,
        output_path=str(output_path),
    )
    log_run_completion(summary)
    return summary


def enumerate_keys(connection: StoreConnection) -> list[str]:
    """List every key in the selected database in scan order.

    ``SCAN`` may return a key more than once; duplicates are dropped and
    first-seen order is kept.

    Raises:
        KeysnapConnectionError: If the scan fails.
    """
    try:
        scanned = connection.scan_iter(match=KEY_SCAN_PATTERN, count=KEY_SCAN_COUNT)
        return list(dict.fromkeys(scanned))
    except Exception as error:
        raise KeysnapConnectionError(
            f"Failed to enumerate keys: {error}. Check the Redis connection and retry."
        ) from error


def read_dataset(
    reader: StoreReader,
    keys: list[str],
) -> tuple[Dataset, list[EntryOutcome]]:
    """Decode keys into a dataset, recording one outcome per key.

    Args:
        reader: Store handle used for per-key reads.
        keys: Keys to decode, in output order.

    Returns:
        Pair of decoded dataset and ordered outcomes.
    """
    dataset: Dataset = {}
    outcomes: list[EntryOutcome] = []
    for key in keys:
        outcome, entry = _read_entry(reader, key)
        outcomes.append(outcome)
        if entry is not None:
            dataset[key] = entry
    return dataset, outcomes


def build_document(dataset: Dataset) -> dict[str, Any]:
    """Convert a dataset into the JSON-ready snapshot document."""
    return {key: entry_to_document(entry) for key, entry in dataset.items()}


def _read_entry(reader: StoreReader, key: str) -> tuple[EntryOutcome, Entry | None]:
    key_type: str | None = None
    try:
        _require_utf8_key(key)
        key_type = reader.type(key)
        codec = lookup_codec(key_type)
        payload = codec.decode(reader, key)
        ttl = int(reader.ttl(key))
        entry = Entry(key_type=key_type, ttl=ttl, payload=payload)
        _require_document_text(entry)
    except KeysnapUnsupportedTypeError as error:
        _LOGGER.warning("key_export_skipped", key=key, key_type=key_type, reason=str(error))
        return EntryOutcome(key=key, key_type=key_type, status="skipped", reason=str(error)), None
    except Exception as error:
        reason = f"{type(error).__name__}: {error}"
        display_key = _printable_key(key)
        _LOGGER.error("key_export_failed", key=display_key, key_type=key_type, reason=reason)
        outcome = EntryOutcome(key=display_key, key_type=key_type, status="failed", reason=reason)
        return outcome, None
    _LOGGER.info("key_exported", key=key, key_type=key_type, ttl=ttl)
    return EntryOutcome(key=key, key_type=key_type, status="succeeded"), entry


def _require_utf8_key(key: str) -> None:
    try:
        key.encode("utf-8")
    except UnicodeEncodeError as error:
        raise KeysnapCodecError(
            f"Key name {_printable_key(key)} is not valid UTF-8 and cannot be "
            "stored in a snapshot document."
        ) from error


def _require_document_text(entry: Entry) -> None:
    """Fail the entry when its document member is not UTF-8 JSON text."""
    try:
        json.dumps(entry_to_document(entry), ensure_ascii=False, allow_nan=False).encode("utf-8")
    except ValueError as error:
        raise KeysnapCodecError(
            f"Invalid '{entry.key_type}' data: value is not valid UTF-8 JSON text ({error})."
        ) from error


def _printable_key(key: str) -> str:
    return key.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def _upload_snapshot(
    output_path: Path,
    output_uri: str,
    config: KeysnapConfig | None,
) -> None:
    s3_client = create_s3_client(config or KeysnapConfig.from_env())
    upload_document(s3_client, output_path, output_uri)
