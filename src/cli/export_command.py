"""Export command wiring for keysnap CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.constants import DEFAULT_DATA_FILE_NAME
from core.types import ExportOptions
from pipeline.run_summary import render_run_summary
from pipeline.snapshot_client import SnapshotClient
from store.document_io import validate_export_path


def add_export_command(subparsers: Any) -> None:
    """Register export subcommand."""
    parser = subparsers.add_parser("export", help="Export the database to a JSON file")
    parser.add_argument(
        "--file",
        default=DEFAULT_DATA_FILE_NAME,
        help="Data file to create; must not exist yet",
    )
    parser.add_argument("--output-uri", help="Optional s3://bucket/key upload destination")


def run_export_command(client: SnapshotClient, args: argparse.Namespace) -> int:
    """Validate the destination, export, and print the run summary."""
    output_path = validate_export_path(args.file)
    options = ExportOptions(output_path=str(output_path), output_uri=args.output_uri)
    summary = client.export_snapshot(options)
    print(render_run_summary(summary))
    return 0
