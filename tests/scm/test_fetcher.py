"""Tests for the source fetcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from jdiffreport.core.errors import ErrorCode, FetchError, MissingScmConnectionError
from jdiffreport.project.models import ProjectModel, ScmInfo
from jdiffreport.scm.connection import ScmConnection, project_connection
from jdiffreport.scm.fetcher import FetchAction, SourceFetcher, release_tag


@dataclass
class RecordingClient:
    """SCM client double that records calls and drops a marker file."""

    calls: list[tuple[str, str, Path, str | None]] = field(default_factory=list)

    def checkout(self, connection: ScmConnection, directory: Path, tag: str | None = None) -> None:
        assert directory.is_dir()
        self.calls.append(("checkout", connection.url, directory, tag))
        (directory / "checked-out").write_text("1")

    def update(self, connection: ScmConnection, directory: Path, tag: str | None = None) -> None:
        self.calls.append(("update", connection.url, directory, tag))


@dataclass
class FailingCheckoutClient(RecordingClient):
    """Checkout writes a partial tree, then fails while ``fail`` is set."""

    fail: bool = True

    def checkout(self, connection: ScmConnection, directory: Path, tag: str | None = None) -> None:
        super().checkout(connection, directory, tag)
        if self.fail:
            raise FetchError.checkout_failed(connection.url, str(directory), "connection reset")


def project(
    connection: str | None = "scm:git:https://git.example.com/widgets.git",
    developer_connection: str | None = None,
    tag: str | None = None,
) -> ProjectModel:
    return ProjectModel(
        "com.example",
        "widgets",
        "1.0",
        scm=ScmInfo(connection=connection, developer_connection=developer_connection, tag=tag),
    )


class TestScmConnection:
    def test_parse_git_connection(self) -> None:
        connection = ScmConnection.parse("scm:git:https://git.example.com/widgets.git")

        assert connection.provider == "git"
        assert connection.url == "https://git.example.com/widgets.git"

    def test_parse_ssh_url_keeps_colons(self) -> None:
        connection = ScmConnection.parse("scm:git:git@git.example.com:org/widgets.git")

        assert connection.url == "git@git.example.com:org/widgets.git"

    def test_parse_pipe_delimiter(self) -> None:
        connection = ScmConnection.parse("scm|svn|https://svn.example.com/trunk")

        assert (connection.provider, connection.url) == ("svn", "https://svn.example.com/trunk")

    @pytest.mark.parametrize("raw", ["https://git.example.com/x.git", "scm:git", "scm;git;x"])
    def test_parse_rejects_non_scm_strings(self, raw: str) -> None:
        with pytest.raises(FetchError):
            ScmConnection.parse(raw)

    def test_developer_connection_fallback(self) -> None:
        model = project(connection=None, developer_connection="scm:git:git@host:w.git")

        assert project_connection(model) == "scm:git:git@host:w.git"

    @pytest.mark.parametrize(("tag", "expected"), [(None, None), ("HEAD", None), ("v1", "v1")])
    def test_release_tag(self, tag: str | None, expected: str | None) -> None:
        assert release_tag(project(tag=tag)) == expected


class TestSourceFetcher:
    """SourceFetcher.fetch() tests."""

    def test_given_absent_dir_when_fetched_then_created_and_checked_out(
        self, tmp_path: Path
    ) -> None:
        # Given
        client = RecordingClient()
        checkout_dir = tmp_path / "jdiff" / "1.0"

        # When
        action = SourceFetcher(client).fetch(checkout_dir, project(tag="widgets-1.0"))

        # Then
        assert action is FetchAction.CHECKOUT
        assert checkout_dir.is_dir()
        assert client.calls == [
            ("checkout", "https://git.example.com/widgets.git", checkout_dir, "widgets-1.0")
        ]

    def test_given_second_fetch_when_fetched_then_updated_in_place(self, tmp_path: Path) -> None:
        client = RecordingClient()
        fetcher = SourceFetcher(client)
        checkout_dir = tmp_path / "1.0"

        fetcher.fetch(checkout_dir, project())
        action = fetcher.fetch(checkout_dir, project())

        assert action is FetchAction.UPDATE
        assert [call[0] for call in client.calls] == ["checkout", "update"]
        assert (checkout_dir / "checked-out").exists()

    def test_given_force_checkout_when_fetched_then_directory_recreated(
        self, tmp_path: Path
    ) -> None:
        # Given
        checkout_dir = tmp_path / "1.0"
        checkout_dir.mkdir()
        (checkout_dir / "stale.txt").write_text("old")
        client = RecordingClient()

        # When
        action = SourceFetcher(client, force_checkout=True).fetch(checkout_dir, project())

        # Then
        assert action is FetchAction.CHECKOUT
        assert not (checkout_dir / "stale.txt").exists()
        assert [call[0] for call in client.calls] == ["checkout"]

    def test_given_no_connection_when_fetched_then_no_directory_created(
        self, tmp_path: Path
    ) -> None:
        client = RecordingClient()
        checkout_dir = tmp_path / "1.0"

        with pytest.raises(MissingScmConnectionError):
            SourceFetcher(client).fetch(checkout_dir, project(connection=None))

        assert not checkout_dir.exists()
        assert client.calls == []

    def test_given_forced_and_no_connection_then_existing_checkout_kept(
        self, tmp_path: Path
    ) -> None:
        checkout_dir = tmp_path / "1.0"
        checkout_dir.mkdir()
        (checkout_dir / "keep.txt").write_text("keep")

        with pytest.raises(MissingScmConnectionError):
            SourceFetcher(RecordingClient(), force_checkout=True).fetch(
                checkout_dir, project(connection=None)
            )

        assert (checkout_dir / "keep.txt").exists()

    def test_given_failed_checkout_when_fetched_again_then_checked_out_afresh(
        self, tmp_path: Path
    ) -> None:
        # Given
        client = FailingCheckoutClient()
        fetcher = SourceFetcher(client)
        checkout_dir = tmp_path / "1.0"

        # When
        with pytest.raises(FetchError):
            fetcher.fetch(checkout_dir, project())

        # Then
        assert not checkout_dir.exists()
        client.fail = False
        assert fetcher.fetch(checkout_dir, project()) is FetchAction.CHECKOUT
        assert [call[0] for call in client.calls] == ["checkout", "checkout"]

    def test_given_checkout_path_is_a_file_when_fetched_then_fetch_error(
        self, tmp_path: Path
    ) -> None:
        (tmp_path / "jdiff").write_text("not a directory")

        with pytest.raises(FetchError) as exc_info:
            SourceFetcher(RecordingClient()).fetch(tmp_path / "jdiff" / "1.0", project())

        assert exc_info.value.code == ErrorCode.SCM_CHECKOUT_FAILED
        assert isinstance(exc_info.value.cause, OSError)
