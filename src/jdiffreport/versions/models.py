"""Serializable data models for version resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Maven artifact coordinates."""

    group_id: str
    artifact_id: str
    packaging: str = "jar"

    @property
    def group_path(self) -> str:
        return self.group_id.replace(".", "/")

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.packaging}"


class VersionSource(StrEnum):
    """How a version was obtained."""

    CURRENT = "current"  # the project being built
    PINNED = "pinned"  # the constraint names a single version
    MATCHED = "matched"  # highest published version inside the range
    UNRESOLVED = "unresolved"  # nothing published matches


@dataclass(frozen=True, slots=True)
class ResolvedVersion:
    """A concrete version chosen for one side of the comparison."""

    version: str | None
    coordinates: Coordinates
    source: VersionSource
    constraint: str

    @property
    def is_resolved(self) -> bool:
        return self.version is not None

    @property
    def is_current(self) -> bool:
        return self.source is VersionSource.CURRENT

    def to_dict(self) -> dict[str, str | None]:
        return {
            "version": self.version,
            "coordinates": str(self.coordinates),
            "source": self.source.value,
            "constraint": self.constraint,
        }
