"""Keysnap CLI entry points.
This module exposes the export and import commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from cli.export_command import add_export_command, run_export_command
from cli.import_command import add_import_command, run_import_command
from core.config import KeysnapConfig
from core.errors import KeysnapError
from pipeline.snapshot_client import SnapshotClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="keysnap",
        description="Export a Redis database to JSON or import it back",
    )
    parser.add_argument("--host", help="Redis host (default: KEYSNAP_REDIS_HOST or localhost)")
    parser.add_argument("--port", type=int, help="Redis port (default: 6379)")
    parser.add_argument("--password", help="Password used during connection")
    parser.add_argument("--index", type=int, help="Database index to select (default: 0)")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_export_command(subparsers)
    add_import_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the keysnap CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args)
        if args.command == "export":
            return run_export_command(client, args)
        if args.command == "import":
            return run_import_command(client, args)
    except KeysnapError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(args: argparse.Namespace) -> SnapshotClient:
    """Build SDK client with connection flags applied over env config.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured SDK client.
    """
    config = KeysnapConfig.from_env()
    overrides: dict[str, object] = {}
    if args.host:
        overrides["redis_host"] = args.host
    if args.port is not None:
        overrides["redis_port"] = args.port
    if args.password:
        overrides["redis_password"] = args.password
    if args.index is not None:
        overrides["redis_db"] = args.index
    if overrides:
        config = replace(config, **overrides)
    return SnapshotClient(config)
