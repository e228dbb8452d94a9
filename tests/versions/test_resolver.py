"""Tests for the version resolver."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from jdiffreport.core.errors import InvalidVersionConstraintError, MetadataRetrievalError
from jdiffreport.versions.models import Coordinates, VersionSource
from jdiffreport.versions.resolver import VersionResolver, filter_snapshots
from jdiffreport.versions.version import ArtifactVersion

COORDS = Coordinates("com.example", "widgets")


class FakeMetadata:
    """In-memory version listing that counts lookups."""

    def __init__(self, versions: list[str] | None = None, error: Exception | None = None) -> None:
        self.versions = versions or []
        self.error = error
        self.lookups = 0

    def available_versions(self, coordinates: Coordinates) -> list[str]:
        self.lookups += 1
        if self.error is not None:
            raise self.error
        return list(self.versions)

    def fetch_pom(self, coordinates: Coordinates, version: str) -> str:
        raise AssertionError("not used")


def test_filter_snapshots() -> None:
    result = filter_snapshots([ArtifactVersion(v) for v in ("1.0", "1.1-SNAPSHOT", "1.2")])

    assert [str(v) for v in result] == ["1.0", "1.2"]


class TestResolve:
    """VersionResolver.resolve() tests."""

    def test_given_current_version_when_resolved_then_no_lookup(self) -> None:
        # Given
        metadata = FakeMetadata(["1.0"])

        # When
        resolved = VersionResolver(metadata).resolve("2.0", COORDS, current_version="2.0")

        # Then
        assert resolved.version == "2.0"
        assert resolved.source is VersionSource.CURRENT
        assert resolved.is_current
        assert metadata.lookups == 0

    @pytest.mark.parametrize("spec", ["1.0", "[1.0]"])
    def test_given_pinned_version_when_resolved_then_no_lookup(self, spec: str) -> None:
        metadata = FakeMetadata()

        resolved = VersionResolver(metadata).resolve(spec, COORDS, current_version="2.0")

        assert resolved.version == "1.0"
        assert resolved.source is VersionSource.PINNED
        assert metadata.lookups == 0

    def test_given_range_when_resolved_then_highest_non_snapshot(self) -> None:
        # Given
        metadata = FakeMetadata(["0.9", "1.0", "1.1-SNAPSHOT", "2.0"])

        # When
        resolved = VersionResolver(metadata).resolve("(,2.0)", COORDS, current_version="2.0")

        # Then
        assert resolved.version == "1.0"
        assert resolved.source is VersionSource.MATCHED
        assert resolved.constraint == "(,2.0)"
        assert metadata.lookups == 1

    def test_given_only_snapshots_when_resolved_then_unresolved_and_logged(self) -> None:
        metadata = FakeMetadata(["1.1-SNAPSHOT"])

        with capture_logs() as logs:
            resolved = VersionResolver(metadata).resolve("(,2.0)", COORDS)

        assert resolved.version is None
        assert not resolved.is_resolved
        assert resolved.source is VersionSource.UNRESOLVED
        assert [e["log_level"] for e in logs if e["event"] == "previous_version_not_found"] == [
            "info"
        ]

    def test_given_malformed_spec_when_resolved_then_raises_without_lookup(self) -> None:
        metadata = FakeMetadata(["1.0"])

        with pytest.raises(InvalidVersionConstraintError):
            VersionResolver(metadata).resolve("(,2.0", COORDS, current_version="2.0")

        assert metadata.lookups == 0

    def test_given_lookup_failure_when_resolved_then_propagates(self) -> None:
        metadata = FakeMetadata(error=MetadataRetrievalError.lookup_failed(str(COORDS), "down"))

        with pytest.raises(MetadataRetrievalError):
            VersionResolver(metadata).resolve("(,2.0)", COORDS)

    def test_resolved_version_to_dict(self) -> None:
        resolved = VersionResolver(FakeMetadata()).resolve("[1.0]", COORDS)

        assert resolved.to_dict() == {
            "version": "1.0",
            "coordinates": "com.example:widgets:jar",
            "source": "pinned",
            "constraint": "[1.0]",
        }
