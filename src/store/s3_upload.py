"""S3 upload helpers for exported snapshot documents.

This module encapsulates boto3 client creation and single-object upload.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.config import KeysnapConfig
from core.errors import KeysnapDependencyError, KeysnapStoreError
from core.logging_config import get_logger
from core.s3_uri import parse_s3_uri

_LOGGER = get_logger(__name__)


def create_s3_client(config: KeysnapConfig) -> Any:
    """Create boto3 S3 client for snapshot uploads.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.

    Raises:
        KeysnapDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise KeysnapDependencyError(
            "S3 upload requires boto3, but it is not installed. "
            "Install boto3 to upload snapshots to s3:// destinations."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def upload_document(s3_client: Any, document_path: Path, output_uri: str) -> None:
    """Upload one snapshot document to an S3 object URI.

    Args:
        s3_client: Boto3 S3 client.
        document_path: Local document written by the export.
        output_uri: Destination ``s3://bucket/key``.

    Raises:
        KeysnapStoreError: If the URI is invalid or the upload fails.
    """
    location = parse_s3_uri(output_uri)
    try:
        s3_client.upload_file(str(document_path), location.bucket, location.object_key)
    except Exception as error:
        raise KeysnapStoreError(
            f"Failed to upload snapshot {document_path} to {output_uri}: {error}. "
            "Check AWS credentials and retry the upload."
        ) from error
    _LOGGER.info("snapshot_uploaded", document_path=str(document_path), output_uri=output_uri)
