"""
Unit tests for KV store soft-delete and undelete.

Tests the returned modified lists, current-version resolution and
idempotence of repeated calls.

Author: SecretStore Team
Date: 2026-10-19
"""

import pytest

from secretstore.kv import (
    CURRENT,
    EntityNotFoundError,
    KVStore,
    Specific,
    StoreItemSoftDeletedError,
)


@pytest.fixture
def store():
    """Create a store holding three versions of one path."""
    store = KVStore(max_versions=10)
    for i in range(1, 4):
        store.put("test/path", {"key": f"v{i}"})
    return store


def _deleted(store, path="test/path"):
    entry = store.get_raw_secret(path)
    return sorted(n for n, v in entry.versions.items() if v.deleted_time is not None)


class TestDelete:
    """Test soft-deleting versions."""

    def test_delete_without_versions_marks_current(self, store):
        """Test that an empty list deletes only the current version."""
        modified = store.delete("test/path", [])

        assert modified == [3]
        assert _deleted(store) == [3]
        with pytest.raises(StoreItemSoftDeletedError):
            store.get("test/path", 0)
        assert dict(store.get("test/path", 2)) == {"key": "v2"}

    def test_delete_none_marks_current(self, store):
        """Test that omitting versions deletes the current version."""
        assert store.delete("test/path") == [3]

    def test_delete_multiple_versions(self, store):
        """Test deleting several versions at once."""
        assert store.delete("test/path", [1, 2, 3]) == [1, 2, 3]
        assert _deleted(store) == [1, 2, 3]

    def test_delete_is_idempotent(self, store):
        """Test that a repeated delete reports nothing changed."""
        assert store.delete("test/path", [2]) == [2]
        assert store.delete("test/path", [2]) == []

    def test_delete_skips_missing_versions(self, store):
        """Test that unknown versions are skipped silently."""
        assert store.delete("test/path", [1, 99, -1, 3]) == [1, 3]

    def test_delete_zero_means_current(self, store):
        """Test that 0 inside the list resolves to the current version."""
        assert store.delete("test/path", [0, 1]) == [3, 1]

    def test_delete_current_selector(self, store):
        """Test the explicit CURRENT selector."""
        assert store.delete("test/path", [CURRENT, Specific(2)]) == [3, 2]

    def test_delete_duplicates_reported_once(self, store):
        """Test that the same version twice in one call changes once."""
        assert store.delete("test/path", [2, 2, 0, 3]) == [2, 3]

    def test_delete_does_not_remove_versions(self, store):
        """Test that soft-delete keeps versions and metadata."""
        store.delete("test/path", [1, 2, 3])

        entry = store.get_raw_secret("test/path")
        assert sorted(entry.versions) == [1, 2, 3]
        assert entry.metadata.current_version == 3
        assert entry.metadata.oldest_version == 1
        assert "test/path" in store.list()

    def test_delete_unknown_path(self, store):
        """Test deleting from a path that doesn't exist."""
        with pytest.raises(EntityNotFoundError):
            store.delete("missing", [1])

    def test_delete_current_already_deleted(self, store):
        """Test that an empty list on a deleted head changes nothing."""
        store.delete("test/path")

        assert store.delete("test/path") == []

    def test_delete_sets_timestamp(self, store):
        """Test that deleted_time is set after the version was created."""
        store.delete("test/path", [1])

        version = store.get_raw_secret("test/path").versions[1]
        assert version.deleted_time >= version.created_time


class TestUndelete:
    """Test restoring soft-deleted versions."""

    def test_undelete_without_versions_restores_current(self, store):
        """Test that an empty list restores only the current version."""
        store.delete("test/path", [2, 3])

        assert store.undelete("test/path", []) == [3]
        assert _deleted(store) == [2]
        assert dict(store.get("test/path")) == {"key": "v3"}

    def test_undelete_active_versions_reports_nothing(self, store):
        """Test that already-active versions are skipped."""
        assert store.undelete("test/path", [1, 2, 3]) == []
        assert store.undelete("test/path") == []

    def test_undelete_is_idempotent(self, store):
        """Test that a repeated undelete reports nothing changed."""
        store.delete("test/path", [1])

        assert store.undelete("test/path", [1]) == [1]
        assert store.undelete("test/path", [1]) == []

    def test_undelete_mixed_states(self, store):
        """Test that only deleted, present versions are reported."""
        store.delete("test/path", [1, 3])

        assert store.undelete("test/path", [1, 2, 3, 42]) == [1, 3]
        assert _deleted(store) == []

    def test_undelete_zero_means_current(self, store):
        """Test that 0 inside the list resolves to the current version."""
        store.delete("test/path", [3])

        assert store.undelete("test/path", [0]) == [3]

    def test_undelete_unknown_path(self, store):
        """Test undeleting on a path that doesn't exist."""
        with pytest.raises(EntityNotFoundError):
            store.undelete("missing")

    def test_delete_undelete_round_trip(self, store):
        """Test that undelete restores the pre-delete read."""
        before = dict(store.get("test/path", 2))

        store.delete("test/path", [2])
        store.undelete("test/path", [2])

        assert dict(store.get("test/path", 2)) == before
        assert store.get_raw_secret("test/path").versions[2].deleted_time is None

    def test_undelete_pruned_version(self):
        """Test that pruned versions can't be brought back."""
        store = KVStore(max_versions=1)
        store.put("x", {"k": "1"})
        store.delete("x")
        store.put("x", {"k": "2"})

        assert store.undelete("x", [1]) == []
        with pytest.raises(StoreItemSoftDeletedError):
            store.get("x", 1)
