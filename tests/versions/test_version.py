"""Tests for Maven version parsing and ordering."""

from __future__ import annotations

import pytest

from jdiffreport.versions.version import ArtifactVersion


class TestComponents:
    """major.minor.incremental-qualifier|buildNumber parsing."""

    def test_full_release(self) -> None:
        version = ArtifactVersion("1.2.3")

        assert (version.major, version.minor, version.incremental) == (1, 2, 3)
        assert version.qualifier is None
        assert version.build_number is None

    def test_build_number(self) -> None:
        version = ArtifactVersion("1.2.3-4")

        assert version.build_number == 4
        assert version.qualifier is None

    def test_qualifier(self) -> None:
        version = ArtifactVersion("2.0-beta-1")

        assert (version.major, version.minor) == (2, 0)
        assert version.qualifier == "beta-1"

    def test_snapshot(self) -> None:
        assert ArtifactVersion("1.1-SNAPSHOT").is_snapshot
        assert not ArtifactVersion("1.1").is_snapshot
        assert not ArtifactVersion("1.1-snapshot-2").is_snapshot

    @pytest.mark.parametrize("raw", ["1.2.3.4", "1..2", "01.2", "RELEASE"])
    def test_unparseable_components_fall_back_to_qualifier(self, raw: str) -> None:
        version = ArtifactVersion(raw)

        assert version.qualifier == raw
        assert version.major is None

    def test_str_is_original_text(self) -> None:
        assert str(ArtifactVersion("1.0-GA")) == "1.0-GA"


class TestOrdering:
    """Maven comparable-version ordering."""

    @pytest.mark.parametrize(
        ("lower", "higher"),
        [
            ("1.0", "1.1"),
            ("1.9", "1.10"),
            ("1.0-alpha1", "1.0-beta1"),
            ("1.0-beta1", "1.0-milestone1"),
            ("1.0-milestone1", "1.0-rc1"),
            ("1.0-rc1", "1.0-SNAPSHOT"),
            ("1.0-SNAPSHOT", "1.0"),
            ("1.0", "1.0-sp1"),
            ("1.0-sp1", "1.0-foo"),
            ("1.0-alpha-1", "1.0-alpha-2"),
            ("1.0", "1.0.1"),
            ("1.0-cr1", "1.0"),
        ],
    )
    def test_given_pair_when_compared_then_ordered(self, lower: str, higher: str) -> None:
        assert ArtifactVersion(lower) < ArtifactVersion(higher)
        assert ArtifactVersion(higher) > ArtifactVersion(lower)

    @pytest.mark.parametrize(
        ("left", "right"),
        [
            ("1", "1.0.0"),
            ("1.0-ga", "1.0"),
            ("1.0-final", "1.0"),
            ("1.0-a1", "1.0-alpha-1"),
            ("1.0-cr1", "1.0-rc-1"),
            ("1.0-RC1", "1.0-rc1"),
        ],
    )
    def test_given_aliases_when_compared_then_equal(self, left: str, right: str) -> None:
        assert ArtifactVersion(left) == ArtifactVersion(right)
        assert hash(ArtifactVersion(left)) == hash(ArtifactVersion(right))

    def test_sorting(self) -> None:
        versions = ["1.1", "1.0-SNAPSHOT", "1.0", "1.0-rc1", "0.9"]

        ordered = sorted(ArtifactVersion(v) for v in versions)

        assert [str(v) for v in ordered] == ["0.9", "1.0-rc1", "1.0-SNAPSHOT", "1.0", "1.1"]
