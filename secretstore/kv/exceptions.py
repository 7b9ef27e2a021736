"""
KV Store Exceptions.

Error kinds raised by the versioned secret store. Each carries a
machine-readable error code that request handlers map to wire responses.

Author: SecretStore Team
Date: 2026-10-19
"""

from typing import Optional


class KVStoreError(Exception):
    """Base exception for KV store errors."""

    def __init__(self, message: str, error_code: str = "internal_error"):
        """Initialize KV store error.

        Args:
            message: Error message
            error_code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class EntityNotFoundError(KVStoreError):
    """Raised when a path does not exist in the store."""

    def __init__(self, path: str):
        """Initialize entity not found error.

        Args:
            path: Path that was looked up
        """
        super().__init__(f"Entity '{path}' not found", error_code="entity_not_found")
        self.path = path


class StoreItemSoftDeletedError(KVStoreError):
    """Raised when a requested version is unavailable.

    Covers both a version that is no longer (or never was) present and one
    that is present but soft-deleted. The message is the same in both cases.
    """

    def __init__(self, path: str, version: Optional[int] = None):
        """Initialize soft-deleted error.

        Args:
            path: Path that was looked up
            version: Resolved version number (optional)
        """
        if version is not None:
            message = f"Item '{path}' version {version} is marked as deleted"
        else:
            message = f"Item '{path}' is marked as deleted"
        super().__init__(message, error_code="store_item_soft_deleted")
        self.path = path
        self.version = version
