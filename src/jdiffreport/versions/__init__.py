"""Version parsing, ranges, and resolution against Maven repositories."""

from jdiffreport.versions.metadata import MavenMetadataSource, VersionMetadataSource
from jdiffreport.versions.models import Coordinates, ResolvedVersion, VersionSource
from jdiffreport.versions.range import Restriction, VersionRange
from jdiffreport.versions.resolver import VersionResolver, filter_snapshots
from jdiffreport.versions.version import ArtifactVersion

__all__ = [
    "ArtifactVersion",
    "Coordinates",
    "MavenMetadataSource",
    "ResolvedVersion",
    "Restriction",
    "VersionMetadataSource",
    "VersionRange",
    "VersionResolver",
    "VersionSource",
    "filter_snapshots",
]
