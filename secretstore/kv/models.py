"""
KV Store Models.

Pydantic models for versioned secret entries, matching the JSON shape
that secret entries take when persisted or served as metadata.

Author: SecretStore Team
Date: 2026-10-19
"""

from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class Version(BaseModel):
    """One snapshot of a path's secret values.

    Attributes:
        data: Secret field values
        created_time: When this version was written
        version: Version number, unique within its entry
        deleted_time: When this version was soft-deleted (None if active)
    """

    data: Dict[str, str] = Field(default_factory=dict)
    created_time: datetime = Field(alias="createdTime")
    version: int
    deleted_time: Optional[datetime] = Field(default=None, alias="deletedTime")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_time is not None

    def clone(self) -> "Version":
        """Copy this version, including a fresh data mapping."""
        data_copy: Dict[str, str] = {}
        for key, value in self.data.items():
            data_copy[key] = value

        # datetimes are immutable, so copying the reference copies the value
        return Version(
            data=data_copy,
            created_time=self.created_time,
            version=self.version,
            deleted_time=self.deleted_time,
        )


class Metadata(BaseModel):
    """Control block for a path's version history.

    Attributes:
        current_version: Newest version number
        oldest_version: Lowest version number still present
        created_time: When the path was first written
        updated_time: When the path was last written
        max_versions: Retention window size
    """

    current_version: int = Field(alias="currentVersion")
    oldest_version: int = Field(alias="oldestVersion")
    created_time: datetime = Field(alias="createdTime")
    updated_time: datetime = Field(alias="updatedTime")
    max_versions: int = Field(default=0, alias="maxVersions")

    model_config = ConfigDict(populate_by_name=True)

    def clone(self, max_versions: Optional[int] = None) -> "Metadata":
        """Copy this metadata, optionally overriding the retention window."""
        return Metadata(
            current_version=self.current_version,
            oldest_version=self.oldest_version,
            created_time=self.created_time,
            updated_time=self.updated_time,
            max_versions=self.max_versions if max_versions is None else max_versions,
        )


class Entry(BaseModel):
    """Everything stored under one path.

    Attributes:
        versions: Mapping of version number to Version
        metadata: Path metadata
    """

    versions: Dict[int, Version] = Field(default_factory=dict)
    metadata: Metadata

    model_config = ConfigDict(populate_by_name=True)

    def clone(self, max_versions: Optional[int] = None) -> "Entry":
        """Deep copy this entry.

        Allocates a new version mapping and clones every version into it.
        Each copied version takes the number it is keyed under.
        """
        versions: Dict[int, Version] = {}
        for number, version in self.versions.items():
            version_copy = version.clone()
            version_copy.version = number
            versions[number] = version_copy

        return Entry(
            versions=versions,
            metadata=self.metadata.clone(max_versions=max_versions),
        )


class SecretVersionInfo(BaseModel):
    """Value-free description of one version.

    Attributes:
        created_time: When the version was written
        version: Version number
        deleted_time: When the version was soft-deleted (None if active)
    """

    created_time: datetime = Field(alias="createdTime")
    version: int
    deleted_time: Optional[datetime] = Field(default=None, alias="deletedTime")

    model_config = ConfigDict(populate_by_name=True)


class SecretMetadata(BaseModel):
    """Version listing and metadata for a path, without secret values.

    Attributes:
        versions: Mapping of version number to version info
        metadata: Path metadata
    """

    versions: Dict[int, SecretVersionInfo] = Field(default_factory=dict)
    metadata: Metadata

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entry(cls, entry: Entry) -> "SecretMetadata":
        return cls(
            versions={
                number: SecretVersionInfo(
                    created_time=version.created_time,
                    version=number,
                    deleted_time=version.deleted_time,
                )
                for number, version in entry.versions.items()
            },
            metadata=entry.metadata.clone(),
        )
