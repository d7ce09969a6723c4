"""Keysnap exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Fatal errors abort a run; per-entry errors are recorded and skipped.
"""

from __future__ import annotations


class KeysnapError(Exception):
    """Base exception for all keysnap failures."""


class KeysnapConfigError(KeysnapError):
    """Raised for invalid runtime configuration."""


class KeysnapDependencyError(KeysnapError):
    """Raised when an optional runtime dependency is missing."""


class KeysnapConnectionError(KeysnapError):
    """Raised when the store connection fails during a run."""


class KeysnapFileError(KeysnapError):
    """Raised when the data file cannot be validated, read, or written."""


class KeysnapDocumentError(KeysnapFileError):
    """Raised when the data file is not a valid snapshot document."""


class KeysnapStoreError(KeysnapError):
    """Raised for object-store upload failures."""


class KeysnapUnsupportedTypeError(KeysnapError):
    """Raised when a type tag has no registered codec."""


class KeysnapCodecError(KeysnapError):
    """Raised when one entry cannot be converted to or from JSON."""
