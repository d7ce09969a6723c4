"""S3 URI parsing helpers.

This module validates snapshot upload destinations before any
network call is made.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import KeysnapStoreError


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 object location."""

    bucket: str
    object_key: str


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 object URI.

    Args:
        uri: URI in format ``s3://bucket/path/to/object.json``.

    Returns:
        Parsed bucket and object key pair.

    Raises:
        KeysnapStoreError: If the URI has no scheme, bucket, or key.
    """
    if not uri.startswith("s3://"):
        _raise_uri_error(uri)
    stripped_uri = uri.removeprefix("s3://")
    if "/" not in stripped_uri:
        _raise_uri_error(uri)
    bucket, object_key = stripped_uri.split("/", 1)
    if not bucket or not object_key or object_key.endswith("/"):
        _raise_uri_error(uri)
    return S3Location(bucket=bucket, object_key=object_key)


def _raise_uri_error(uri: str) -> None:
    raise KeysnapStoreError(
        f"Invalid S3 URI '{uri}': expected s3://bucket/key. "
        "Provide both a bucket and an object key."
    )
