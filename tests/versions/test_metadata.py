"""Tests for repository version and POM lookup."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from jdiffreport.core.errors import ErrorCode, MetadataRetrievalError
from jdiffreport.versions.metadata import (
    MavenMetadataSource,
    parse_metadata_versions,
    pom_path,
)
from jdiffreport.versions.models import Coordinates

REMOTE = "https://repo.example.com/maven2"
COORDS = Coordinates("com.example", "widgets")
ARTIFACT_URL = f"{REMOTE}/com/example/widgets"

METADATA = """<?xml version="1.0" encoding="UTF-8"?>
<metadata>
  <groupId>com.example</groupId>
  <artifactId>widgets</artifactId>
  <versioning>
    <latest>1.1-SNAPSHOT</latest>
    <versions>
      <version>1.0</version>
      <version>1.1-SNAPSHOT</version>
    </versions>
  </versioning>
</metadata>
"""


def remote_source(routes: dict[str, httpx.Response]) -> MavenMetadataSource:
    def handler(request: httpx.Request) -> httpx.Response:
        return routes.get(str(request.url), httpx.Response(404))

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return MavenMetadataSource(None, [REMOTE + "/"], client=client)


def test_parse_metadata_versions() -> None:
    assert parse_metadata_versions(METADATA) == ["1.0", "1.1-SNAPSHOT"]


def test_parse_single_version_metadata() -> None:
    content = "<metadata><version>0.5</version></metadata>"

    assert parse_metadata_versions(content) == ["0.5"]


def test_pom_path() -> None:
    assert pom_path(COORDS, "1.0") == "com/example/widgets/1.0/widgets-1.0.pom"


class TestRemoteRepository:
    """HTTP lookups via httpx."""

    def test_given_metadata_when_listed_then_versions_returned(self) -> None:
        source = remote_source(
            {f"{ARTIFACT_URL}/maven-metadata.xml": httpx.Response(200, text=METADATA)}
        )

        assert source.available_versions(COORDS) == ["1.0", "1.1-SNAPSHOT"]

    def test_given_404_when_listed_then_no_versions(self) -> None:
        assert remote_source({}).available_versions(COORDS) == []

    def test_given_server_error_when_listed_then_retrieval_error(self) -> None:
        source = remote_source({f"{ARTIFACT_URL}/maven-metadata.xml": httpx.Response(503)})

        with pytest.raises(MetadataRetrievalError) as exc_info:
            source.available_versions(COORDS)

        assert exc_info.value.code == ErrorCode.VERSION_METADATA_RETRIEVAL
        assert "503" in exc_info.value.message

    def test_given_garbage_metadata_when_listed_then_retrieval_error(self) -> None:
        source = remote_source(
            {f"{ARTIFACT_URL}/maven-metadata.xml": httpx.Response(200, text="<not-xml")}
        )

        with pytest.raises(MetadataRetrievalError):
            source.available_versions(COORDS)

    def test_given_connection_error_when_listed_then_retrieval_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with MavenMetadataSource(None, [REMOTE], client=client) as source:
            with pytest.raises(MetadataRetrievalError) as exc_info:
                source.available_versions(COORDS)

        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_given_remote_pom_when_fetched_then_text_returned(self) -> None:
        source = remote_source(
            {f"{ARTIFACT_URL}/1.0/widgets-1.0.pom": httpx.Response(200, text="<project/>")}
        )

        assert source.fetch_pom(COORDS, "1.0") == "<project/>"

    def test_given_missing_pom_when_fetched_then_pom_not_found(self) -> None:
        with pytest.raises(MetadataRetrievalError) as exc_info:
            remote_source({}).fetch_pom(COORDS, "1.0")

        assert exc_info.value.code == ErrorCode.VERSION_POM_NOT_FOUND


class TestLocalRepository:
    """Reads from a ~/.m2/repository layout."""

    @pytest.fixture
    def local_repo(self, tmp_path: Path) -> Path:
        repo = tmp_path / "m2"
        artifact_dir = repo / "com" / "example" / "widgets"
        artifact_dir.mkdir(parents=True)
        (artifact_dir / "maven-metadata-local.xml").write_text(METADATA)
        installed = artifact_dir / "0.9"
        installed.mkdir()
        (installed / "widgets-0.9.pom").write_text("<project>local</project>")
        return repo

    def test_given_local_metadata_and_dirs_when_listed_then_unioned(
        self, local_repo: Path
    ) -> None:
        source = MavenMetadataSource(local_repo)

        assert source.available_versions(COORDS) == ["1.0", "1.1-SNAPSHOT", "0.9"]

    def test_given_local_and_remote_when_listed_then_deduplicated(
        self, local_repo: Path
    ) -> None:
        remote_metadata = METADATA.replace("<version>1.0</version>", "<version>1.2</version>")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text=remote_metadata)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        source = MavenMetadataSource(local_repo, [REMOTE], client=client)

        assert source.available_versions(COORDS) == ["1.0", "1.1-SNAPSHOT", "0.9", "1.2"]

    def test_given_local_pom_when_fetched_then_remote_not_queried(
        self, local_repo: Path
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError(f"unexpected request {request.url}")

        client = httpx.Client(transport=httpx.MockTransport(handler))
        source = MavenMetadataSource(local_repo, [REMOTE], client=client)

        assert source.fetch_pom(COORDS, "0.9") == "<project>local</project>"

    def test_given_unknown_artifact_when_listed_then_empty(self, tmp_path: Path) -> None:
        assert MavenMetadataSource(tmp_path).available_versions(COORDS) == []
