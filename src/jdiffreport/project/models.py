"""Project model: the parts of a pom.xml the report needs."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from jdiffreport.versions.models import Coordinates

DEFAULT_SOURCE_DIRECTORY = "src/main/java"
DEFAULT_BUILD_DIRECTORY = "target"
DEFAULT_OUTPUT_DIRECTORY = "target/classes"


@dataclass(frozen=True, slots=True)
class ScmInfo:
    """The <scm> section of a POM."""

    connection: str | None = None
    developer_connection: str | None = None
    tag: str | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class ProjectModel:
    """A Maven project, local (with a base directory) or read from a repository."""

    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"
    name: str | None = None
    scm: ScmInfo = field(default_factory=ScmInfo)
    basedir: Path | None = None
    source_directory: str = DEFAULT_SOURCE_DIRECTORY
    build_directory: str = DEFAULT_BUILD_DIRECTORY
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.group_id, self.artifact_id, self.packaging)

    @property
    def display_id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def display_name(self) -> str:
        return self.name or self.artifact_id

    def _path(self, value: str) -> Path:
        path = Path(value)
        if path.is_absolute() or self.basedir is None:
            return path
        return self.basedir / path

    @property
    def source_dir(self) -> Path:
        return self._path(self.source_directory)

    @property
    def build_dir(self) -> Path:
        return self._path(self.build_directory)

    @property
    def build_output_dir(self) -> Path:
        return self._path(self.output_directory)

    @property
    def source_roots(self) -> list[Path]:
        """Existing compile source roots; none for ``pom`` packaging."""
        if self.packaging.lower() == "pom" or self.basedir is None:
            return []
        return [root for root in (self.source_dir,) if root.is_dir()]


class PackageSet:
    """Package names, iterated in sorted order."""

    def __init__(self, packages: Iterable[str] = ()) -> None:
        self._packages: set[str] = set(packages)

    def add_all(self, packages: Iterable[str]) -> None:
        self._packages.update(packages)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._packages))

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, name: object) -> bool:
        return name in self._packages

    def __repr__(self) -> str:
        return f"PackageSet({sorted(self._packages)!r})"
