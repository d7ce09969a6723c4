"""Unit tests for S3 URI parsing."""

from __future__ import annotations

import pytest

from core.errors import KeysnapStoreError
from core.s3_uri import parse_s3_uri


def test_parse_s3_uri_splits_bucket_and_key() -> None:
    """Parser should split bucket from the nested object key."""
    location = parse_s3_uri("s3://backups/redis/2026/data.json")

    assert (location.bucket, location.object_key) == ("backups", "redis/2026/data.json")


@pytest.mark.parametrize(
    "uri",
    ["backups/data.json", "s3://backups", "s3:///data.json", "s3://backups/folder/"],
)
def test_parse_s3_uri_rejects_incomplete_uris(uri: str) -> None:
    """Parser should reject URIs without scheme, bucket, or object key."""
    with pytest.raises(KeysnapStoreError):
        parse_s3_uri(uri)
