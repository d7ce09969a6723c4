"""Snapshot document persistence.

This module validates data file paths and moves whole snapshot
documents between disk and memory in a single read or write.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.constants import DATA_FILE_EXTENSION, DOCUMENT_JSON_INDENT
from core.errors import KeysnapDocumentError, KeysnapFileError


def validate_export_path(path: str) -> Path:
    """Validate a destination path for a new snapshot document.

    Args:
        path: Requested output file path.

    Returns:
        Resolved output path.

    Raises:
        KeysnapFileError: If the path is a directory, exists, or is not ``.json``.
    """
    output_path = Path(path).expanduser().resolve()
    _require_not_directory(output_path)
    if output_path.exists():
        raise KeysnapFileError(
            f"Data file {output_path} already exists. "
            "Delete it or choose another --file before exporting."
        )
    _require_json_extension(output_path)
    return output_path


def validate_import_path(path: str) -> Path:
    """Validate a source path for an existing snapshot document.

    Args:
        path: Requested input file path.

    Returns:
        Resolved input path.

    Raises:
        KeysnapFileError: If the path is a directory, missing, or is not ``.json``.
    """
    input_path = Path(path).expanduser().resolve()
    _require_not_directory(input_path)
    if not input_path.exists():
        raise KeysnapFileError(
            f"Data file {input_path} does not exist. Point --file at an exported snapshot."
        )
    _require_json_extension(input_path)
    return input_path


def write_document(path: str | Path, document: dict[str, Any]) -> Path:
    """Serialize and write a snapshot document in one write.

    Args:
        path: Output file path.
        document: Mapping of key name to document member.

    Returns:
        Written file path.

    Raises:
        KeysnapFileError: If the file cannot be written.
        KeysnapDocumentError: If a value has no standard JSON form.
    """
    output_path = Path(path)
    try:
        serialized = json.dumps(
            document,
            indent=DOCUMENT_JSON_INDENT,
            ensure_ascii=False,
            allow_nan=False,
        )
    except ValueError as error:
        raise KeysnapDocumentError(
            f"Failed to serialize snapshot document for {output_path}: {error}. "
            "Document values must be standard JSON."
        ) from error
    try:
        output_path.write_text(serialized + "\n", encoding="utf-8")
    except OSError as error:
        raise KeysnapFileError(
            f"Failed to write snapshot document to {output_path}: {error}. "
            "Check the directory exists and is writable."
        ) from error
    return output_path


def read_document(path: str | Path) -> dict[str, Any]:
    """Read and parse a snapshot document.

    Args:
        path: Input file path.

    Returns:
        Mapping of key name to raw document member, in file order.

    Raises:
        KeysnapFileError: If the file cannot be read.
        KeysnapDocumentError: If the file is not JSON or not a JSON object.
    """
    input_path = Path(path)
    try:
        raw_text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise KeysnapFileError(
            f"Failed to read snapshot document {input_path}: {error}."
        ) from error
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise KeysnapDocumentError(
            f"Failed to parse snapshot document {input_path}: {error.msg} "
            f"(line {error.lineno}, column {error.colno}). "
            "Re-export the snapshot or fix the JSON."
        ) from error
    if not isinstance(payload, dict):
        raise KeysnapDocumentError(
            f"Failed to parse snapshot document {input_path}: "
            "expected JSON object at top level."
        )
    return payload


def _require_not_directory(path: Path) -> None:
    if path.is_dir():
        raise KeysnapFileError(f"Data file {path} is a directory. Provide a file path.")


def _require_json_extension(path: Path) -> None:
    if path.suffix.lower() != DATA_FILE_EXTENSION:
        raise KeysnapFileError(
            f"Data file {path} must have a {DATA_FILE_EXTENSION} extension."
        )
