"""Python SDK for snapshot operations.

This module exposes high-level export and import calls that own the
Redis connection lifecycle for callers.
"""

from __future__ import annotations

from typing import Any

from core.config import KeysnapConfig
from core.types import ExportOptions, ImportOptions, RunSummary
from pipeline.export_pipeline import export_snapshot
from pipeline.import_pipeline import import_snapshot
from store.redis_connection import open_connection


class SnapshotClient:
    """Primary SDK entry point for export and import workflows."""

    def __init__(self, config: KeysnapConfig | None = None, connection: Any = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            connection: Optional already-open store connection.
        """
        self._config = config or KeysnapConfig.from_env()
        self._connection = connection

    @property
    def config(self) -> KeysnapConfig:
        return self._config

    def export_snapshot(self, options: ExportOptions) -> RunSummary:
        """Export the selected database into a snapshot document.

        Args:
            options: Export options.

        Returns:
            Export run summary.

        Raises:
            KeysnapConnectionError: If connecting or key enumeration fails.
            KeysnapFileError: If the document cannot be written.
        """
        return export_snapshot(self._connect(), options, self._config)

    def import_snapshot(self, options: ImportOptions) -> RunSummary:
        """Import a snapshot document into the selected database.

        Args:
            options: Import options.

        Returns:
            Import run summary.

        Raises:
            KeysnapConnectionError: If connecting, flushing, or the batch fails.
            KeysnapFileError: If the document cannot be read or parsed.
        """
        return import_snapshot(self._connect(), options)

    def _connect(self) -> Any:
        if self._connection is None:
            self._connection = open_connection(self._config)
        return self._connection
