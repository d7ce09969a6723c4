"""Import pipeline: snapshot document to Redis keyspace.

The whole document is parsed before the store is touched. Every entry
is then staged into one non-transactional pipeline and sent with a
single ``execute`` call. An entry that cannot be staged is recorded
and skipped; a failing ``execute`` is fatal and leaves any commands
the server already applied in place.
"""

from __future__ import annotations

import time
from typing import Any

from core.errors import KeysnapConnectionError, KeysnapUnsupportedTypeError
from core.logging_config import get_logger
from core.types import Entry, EntryOutcome, ImportOptions, RunSummary
from codec.entry_document import entry_from_document, read_entry_type
from codec.registry import lookup_codec
from codec.store_protocols import StoreBatch, StoreConnection
from pipeline.run_summary import log_run_completion
from store.document_io import read_document

_LOGGER = get_logger(__name__)


def import_snapshot(connection: StoreConnection, options: ImportOptions) -> RunSummary:
    """Load a snapshot document into the selected database.

    Args:
        connection: Live store connection.
        options: Import options with the input path and flush flag.

    Returns:
        Run summary with one outcome per document entry.

    Raises:
        KeysnapFileError: If the document cannot be read.
        KeysnapDocumentError: If the document is not a JSON object.
        KeysnapConnectionError: If flushing or batch execution fails.
    """
    started_at = time.monotonic()
    document = read_document(options.input_path)
    flushed_key_count = flush_database(connection) if options.flush else None
    batch = connection.pipeline(transaction=False)
    outcomes = [_stage_member(batch, key, member) for key, member in document.items()]
    _execute_batch(batch, sum(1 for outcome in outcomes if outcome.status == "succeeded"))
    summary = RunSummary(
        operation="import",
        outcomes=tuple(outcomes),
        elapsed_seconds=time.monotonic() - started_at,
        flushed_key_count=flushed_key_count,
    )
    log_run_completion(summary)
    return summary


def flush_database(connection: StoreConnection) -> int:
    """Remove every key from the selected database.

    Returns:
        Number of keys present before the flush.

    Raises:
        KeysnapConnectionError: If the size query or flush fails.
    """
    try:
        key_count = int(connection.dbsize())
        connection.flushdb()
    except Exception as error:
        raise KeysnapConnectionError(
            f"Failed to flush database before import: {error}."
        ) from error
    _LOGGER.info("database_flushed", key_count=key_count)
    return key_count


def stage_entry(batch: StoreBatch, key: str, entry: Entry) -> None:
    """Stage the writes that recreate one entry.

    The key is deleted first so that the import replaces any existing
    value instead of merging into it. Expiry is staged only for a
    positive TTL.
    """
    codec = lookup_codec(entry.key_type)
    batch.delete(key)
    codec.encode(entry.payload, batch, key)
    if entry.ttl > 0:
        batch.expire(key, entry.ttl)


def _stage_member(batch: StoreBatch, key: str, member: Any) -> EntryOutcome:
    key_type: str | None = None
    try:
        key_type = read_entry_type(key, member)
        entry = entry_from_document(key, member)
        stage_entry(batch, key, entry)
    except KeysnapUnsupportedTypeError as error:
        _LOGGER.warning("key_import_skipped", key=key, key_type=key_type, reason=str(error))
        return EntryOutcome(key=key, key_type=key_type, status="skipped", reason=str(error))
    except Exception as error:
        reason = f"{type(error).__name__}: {error}"
        _LOGGER.error("key_import_failed", key=key, key_type=key_type, reason=reason)
        return EntryOutcome(key=key, key_type=key_type, status="failed", reason=reason)
    _LOGGER.info("key_import_staged", key=key, key_type=key_type)
    return EntryOutcome(key=key, key_type=key_type, status="succeeded")


def _execute_batch(batch: StoreBatch, staged_entry_count: int) -> None:
    try:
        batch.execute()
    except Exception as error:
        raise KeysnapConnectionError(
            f"Failed to apply {staged_entry_count} staged entries: {error}. "
            "The database may be partially imported; re-run with --flush to start clean."
        ) from error
