"""Public SDK surface for keysnap.

This module provides a stable import path for library users.
It re-exports the client, typed options, and the codec registry.
"""

from __future__ import annotations

from codec.registry import lookup_codec, supported_key_types
from core.config import KeysnapConfig
from core.types import (
    Entry,
    EntryOutcome,
    ExportOptions,
    ImportOptions,
    RunSummary,
)
from pipeline.export_pipeline import export_snapshot
from pipeline.import_pipeline import import_snapshot
from pipeline.run_summary import render_run_summary
from pipeline.snapshot_client import SnapshotClient

__all__ = [
    "Entry",
    "EntryOutcome",
    "ExportOptions",
    "ImportOptions",
    "KeysnapConfig",
    "RunSummary",
    "SnapshotClient",
    "export_snapshot",
    "import_snapshot",
    "lookup_codec",
    "render_run_summary",
    "supported_key_types",
]
