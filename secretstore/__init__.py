"""
SecretStore: versioned in-memory secret store

Runtime cache of live secret values with bounded version history,
soft-delete, undelete and permanent destruction.
"""

__version__ = "0.1.0"

from .kv import KVStore, EntityNotFoundError, StoreItemSoftDeletedError

__all__ = ["KVStore", "EntityNotFoundError", "StoreItemSoftDeletedError", "__version__"]
