"""
Versioned KV Store.

In-memory store of secret values keyed by path. Every write creates a new
version; the store keeps a bounded window of recent versions per path and
supports soft-delete, undelete and permanent destruction.

Author: SecretStore Team
Date: 2026-10-19
"""

import logging
import threading
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .models import Entry, Metadata, SecretMetadata, Version
from .exceptions import EntityNotFoundError, StoreItemSoftDeletedError
from .selectors import CURRENT, VersionLike, VersionSelector, to_selector, to_selectors

logger = logging.getLogger(__name__)


class KVStore:
    """
    Versioned in-memory secret store.

    Storage structure:
        {path: Entry(versions={number: Version}, metadata=Metadata)}

    Features:
    - Sequential version numbers per path, starting at 1
    - Bounded history: versions older than the window are pruned on write
    - Soft-delete and undelete of individual versions
    - Permanent destruction of a path and its history
    - Deep-copying import/export for hydration and persistence

    All public operations hold a single store-wide lock.

    Attributes:
        _data: Dictionary mapping paths to entries
        _max_versions: Retention window applied to every path
        _lock: Re-entrant lock guarding _data
    """

    def __init__(self, max_versions: int = 10):
        """Initialize the store.

        Args:
            max_versions: Number of versions to retain per path. Values
                below 1 are accepted; they cause every version to be pruned
                on write.
        """
        if max_versions < 1:
            logger.warning(
                f"KV store created with non-positive max_versions={max_versions}; "
                "writes will retain no versions"
            )
        self._max_versions = max_versions
        self._data: Dict[str, Entry] = {}
        self._lock = threading.RLock()

    @property
    def max_versions(self) -> int:
        return self._max_versions

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._data

    def _get_entry(self, path: str) -> Entry:
        """Look up an entry.

        Raises:
            EntityNotFoundError: If path does not exist
        """
        entry = self._data.get(path)
        if entry is None:
            raise EntityNotFoundError(path)
        return entry

    def put(self, path: str, values: Mapping[str, str]) -> Version:
        """Store values as a new version at path.

        Creates the entry on first write. After inserting, prunes every
        version that falls outside the retention window and recomputes the
        oldest version.

        Args:
            path: Secret path
            values: Secret field values (copied)

        Returns:
            Copy of the version that was written
        """
        with self._lock:
            now = datetime.now(timezone.utc)

            entry = self._data.get(path)
            if entry is None:
                entry = Entry(
                    versions={},
                    metadata=Metadata(
                        # Versions start at 1 so that 0 can mean "current"
                        current_version=1,
                        oldest_version=1,
                        created_time=now,
                        updated_time=now,
                        max_versions=self._max_versions,
                    ),
                )
                self._data[path] = entry
            else:
                entry.metadata.current_version += 1

            metadata = entry.metadata
            new_version = metadata.current_version

            version = Version(
                data=dict(values),
                created_time=now,
                version=new_version,
            )
            entry.versions[new_version] = version
            metadata.updated_time = now

            pruned = [
                number for number in entry.versions
                if new_version - number >= metadata.max_versions
            ]
            for number in pruned:
                del entry.versions[number]

            if pruned:
                metadata.oldest_version = min(entry.versions, default=new_version)
                logger.debug(
                    "Pruned versions", extra={"secret_path": path, "versions": sorted(pruned)}
                )

            logger.debug(
                f"Stored version {new_version}",
                extra={"secret_path": path, "versions": [new_version]},
            )
            return version.clone()

    def get(self, path: str, version: VersionLike = 0) -> Mapping[str, str]:
        """Get the values of one version.

        Args:
            path: Secret path
            version: Version number, or 0/CURRENT for the current version

        Returns:
            Read-only view of the version's values

        Raises:
            EntityNotFoundError: If path does not exist
            StoreItemSoftDeletedError: If the version is absent or soft-deleted
        """
        selector = to_selector(version)
        with self._lock:
            entry = self._get_entry(path)
            number = selector.resolve(entry.metadata.current_version)

            found = entry.versions.get(number)
            if found is None or found.is_deleted:
                raise StoreItemSoftDeletedError(path, number)

            return MappingProxyType(found.data)

    def get_raw_secret(self, path: str) -> Entry:
        """Get a copy of the full entry for path, including soft-deleted versions.

        Raises:
            EntityNotFoundError: If path does not exist
        """
        with self._lock:
            return self._get_entry(path).clone()

    def get_metadata(self, path: str) -> SecretMetadata:
        """Get version info and metadata for path, without secret values.

        Args:
            path: Secret path

        Returns:
            Metadata view covering every present version

        Raises:
            EntityNotFoundError: If path does not exist
        """
        with self._lock:
            return SecretMetadata.from_entry(self._get_entry(path))

    def _set_deleted(
        self,
        path: str,
        versions: Optional[Iterable[VersionLike]],
        deleted: bool,
    ) -> List[int]:
        """Flip the deleted marker of the selected versions.

        Versions that do not exist or are already in the target state are
        skipped.

        Returns:
            Version numbers that changed state, in processing order
        """
        selectors: List[VersionSelector] = to_selectors(versions)
        with self._lock:
            entry = self._get_entry(path)
            now = datetime.now(timezone.utc)

            if not selectors:
                selectors = [CURRENT]

            modified: List[int] = []
            for selector in selectors:
                number = selector.resolve(entry.metadata.current_version)
                version = entry.versions.get(number)
                if version is None or version.is_deleted == deleted:
                    continue

                version.deleted_time = now if deleted else None
                modified.append(number)

            return modified

    def delete(
        self, path: str, versions: Optional[Iterable[VersionLike]] = None
    ) -> List[int]:
        """Soft-delete versions of a secret.

        Args:
            path: Secret path
            versions: Versions to delete; empty or None means the current
                version. 0/CURRENT inside the list means the current version.

        Returns:
            Version numbers that were active and are now deleted

        Raises:
            EntityNotFoundError: If path does not exist
        """
        modified = self._set_deleted(path, versions, deleted=True)
        logger.debug("Soft-deleted versions", extra={"secret_path": path, "versions": modified})
        return modified

    def undelete(
        self, path: str, versions: Optional[Iterable[VersionLike]] = None
    ) -> List[int]:
        """Restore soft-deleted versions of a secret.

        Args:
            path: Secret path
            versions: Versions to restore; empty or None means the current
                version. 0/CURRENT inside the list means the current version.

        Returns:
            Version numbers that were deleted and are now active

        Raises:
            EntityNotFoundError: If path does not exist
        """
        modified = self._set_deleted(path, versions, deleted=False)
        logger.debug("Restored versions", extra={"secret_path": path, "versions": modified})
        return modified

    def destroy(self, path: str) -> None:
        """Permanently remove path and all of its versions.

        Raises:
            EntityNotFoundError: If path does not exist
        """
        with self._lock:
            self._get_entry(path)
            del self._data[path]
        logger.info("Destroyed secret", extra={"secret_path": path})

    def list(self) -> List[str]:
        """List every path in the store, including fully soft-deleted ones."""
        with self._lock:
            return list(self._data.keys())

    def import_secrets(self, entries: Mapping[str, Union[Entry, Dict[str, Any]]]) -> None:
        """Load entries into the store.

        Every entry is deep-copied and takes this store's max_versions.
        Existing paths are overwritten. No pruning is applied.

        Args:
            entries: Mapping of path to Entry, or to a dict in the persisted
                JSON shape

        Raises:
            pydantic.ValidationError: If a dict entry is not a valid Entry
        """
        # Validate everything before touching the store
        validated: Dict[str, Entry] = {}
        for path, entry in entries.items():
            if not isinstance(entry, Entry):
                entry = Entry.model_validate(entry)
            validated[path] = entry

        with self._lock:
            for path, entry in validated.items():
                self._data[path] = entry.clone(max_versions=self._max_versions)

        logger.info(f"Imported {len(validated)} entries")

    def export_secrets(self) -> Dict[str, Entry]:
        """Deep copy of every entry, keyed by path."""
        with self._lock:
            return {path: entry.clone() for path, entry in self._data.items()}
