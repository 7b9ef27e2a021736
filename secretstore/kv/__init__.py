"""
Versioned KV Store.

In-memory secret store with bounded version history, soft-delete,
undelete and permanent destruction.

Author: SecretStore Team
Date: 2026-10-19
"""

from .store import KVStore
from .models import (
    Version,
    Metadata,
    Entry,
    SecretVersionInfo,
    SecretMetadata,
)
from .exceptions import (
    KVStoreError,
    EntityNotFoundError,
    StoreItemSoftDeletedError,
)
from .selectors import (
    CURRENT,
    Current,
    Specific,
    VersionSelector,
    to_selector,
)

__all__ = [
    # Store
    "KVStore",
    # Models
    "Version",
    "Metadata",
    "Entry",
    "SecretVersionInfo",
    "SecretMetadata",
    # Exceptions
    "KVStoreError",
    "EntityNotFoundError",
    "StoreItemSoftDeletedError",
    # Selectors
    "CURRENT",
    "Current",
    "Specific",
    "VersionSelector",
    "to_selector",
]
