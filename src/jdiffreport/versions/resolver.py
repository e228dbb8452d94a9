"""Select the concrete version to compare against."""

from __future__ import annotations

import structlog

from jdiffreport.versions.metadata import VersionMetadataSource
from jdiffreport.versions.models import Coordinates, ResolvedVersion, VersionSource
from jdiffreport.versions.range import VersionRange
from jdiffreport.versions.version import ArtifactVersion

log = structlog.get_logger(__name__)


def filter_snapshots(versions: list[ArtifactVersion]) -> list[ArtifactVersion]:
    """Drop versions whose qualifier is SNAPSHOT."""
    return [v for v in versions if not v.is_snapshot]


class VersionResolver:
    """Resolves version constraints against published versions."""

    def __init__(self, metadata: VersionMetadataSource) -> None:
        self._metadata = metadata

    def resolve(
        self,
        spec: str,
        coordinates: Coordinates,
        current_version: str | None = None,
    ) -> ResolvedVersion:
        """Resolve ``spec`` to a single version.

        A spec equal to the current project version resolves to the project
        itself without touching any repository. A spec that parses but matches
        no published version yields an unresolved ResolvedVersion.

        Raises:
            InvalidVersionConstraintError: If ``spec`` is malformed.
            MetadataRetrievalError: If published versions cannot be listed.
        """
        if current_version is not None and spec == current_version:
            log.debug("version_is_current", version=spec)
            return ResolvedVersion(spec, coordinates, VersionSource.CURRENT, spec)

        version_range = VersionRange.parse(spec)

        selected = version_range.selected_version
        if selected is not None:
            log.debug("version_pinned", version=str(selected))
            return ResolvedVersion(str(selected), coordinates, VersionSource.PINNED, spec)

        log.debug("version_search", coordinates=str(coordinates), range=str(version_range))
        candidates = filter_snapshots(
            [ArtifactVersion(v) for v in self._metadata.available_versions(coordinates)]
        )
        matched = version_range.match(candidates)

        if matched is None:
            log.info(
                "previous_version_not_found",
                coordinates=str(coordinates),
                range=spec,
            )
            return ResolvedVersion(None, coordinates, VersionSource.UNRESOLVED, spec)

        log.debug("version_resolved", version=str(matched), range=spec)
        return ResolvedVersion(str(matched), coordinates, VersionSource.MATCHED, spec)
