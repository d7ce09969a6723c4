"""Import command wiring for keysnap CLI."""

from __future__ import annotations

import argparse
import sys
from typing import Any

from core.constants import DEFAULT_DATA_FILE_NAME
from core.types import ImportOptions
from pipeline.run_summary import render_run_summary
from pipeline.snapshot_client import SnapshotClient
from store.document_io import validate_import_path


def add_import_command(subparsers: Any) -> None:
    """Register import subcommand."""
    parser = subparsers.add_parser("import", help="Import a JSON file into the database")
    parser.add_argument("--file", default=DEFAULT_DATA_FILE_NAME, help="Data file to import")
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Confirm that existing keys may be overwritten",
    )
    parser.add_argument(
        "--flush",
        action="store_true",
        help="Remove every key in the database before importing",
    )


def run_import_command(client: SnapshotClient, args: argparse.Namespace) -> int:
    """Validate the source, require confirmation, import, and print the summary."""
    input_path = validate_import_path(args.file)
    if not args.confirm:
        print(
            "WARNING: importing will overwrite existing keys in the database. "
            "Re-run the command with --confirm to continue.",
            file=sys.stderr,
        )
        return 1
    options = ImportOptions(input_path=str(input_path), flush=args.flush)
    summary = client.import_snapshot(options)
    print(render_run_summary(summary))
    return 0
