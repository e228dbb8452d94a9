"""Published-version and POM lookup in Maven repositories.

The local repository (``~/.m2/repository``) is read from disk; remote
repositories are read over HTTP. Versions from every repository are unioned.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import httpx
import structlog

from jdiffreport.core.errors import MetadataRetrievalError
from jdiffreport.versions.models import Coordinates

log = structlog.get_logger(__name__)

METADATA_FILE = "maven-metadata.xml"


class VersionMetadataSource(Protocol):
    """Lookup of published versions and project descriptors."""

    def available_versions(self, coordinates: Coordinates) -> list[str]: ...

    def fetch_pom(self, coordinates: Coordinates, version: str) -> str: ...


def parse_metadata_versions(content: str | bytes) -> list[str]:
    """Versions listed in a maven-metadata.xml document."""
    root = ET.fromstring(content)
    versions = [v.text.strip() for v in root.iterfind("versioning/versions/version") if v.text]
    # Single-version metadata written by older deploy plugins
    if not versions:
        single = root.findtext("version")
        if single:
            versions.append(single.strip())
    return versions


def pom_path(coordinates: Coordinates, version: str) -> str:
    return (
        f"{coordinates.group_path}/{coordinates.artifact_id}/{version}/"
        f"{coordinates.artifact_id}-{version}.pom"
    )


class MavenMetadataSource:
    """Reads versions and POMs from a local repository and remote repositories."""

    def __init__(
        self,
        local_repository: Path | None = None,
        remotes: Sequence[str] = (),
        *,
        client: httpx.Client | None = None,
        timeout_sec: float = 30.0,
    ) -> None:
        self._local = local_repository
        self._remotes = [r.rstrip("/") for r in remotes]
        self._client = client or httpx.Client(timeout=timeout_sec, follow_redirects=True)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> MavenMetadataSource:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def available_versions(self, coordinates: Coordinates) -> list[str]:
        """Union of versions published for ``coordinates``, in discovery order.

        Raises:
            MetadataRetrievalError: If a repository answers with an error or
                unreadable metadata. A missing artifact (404) is not an error.
        """
        found: dict[str, None] = {}
        for version in self._local_versions(coordinates):
            found.setdefault(version)
        for remote in self._remotes:
            for version in self._remote_versions(remote, coordinates):
                found.setdefault(version)
        log.debug("versions_available", coordinates=str(coordinates), versions=list(found))
        return list(found)

    def fetch_pom(self, coordinates: Coordinates, version: str) -> str:
        """Text of the POM of ``coordinates`` at ``version``.

        Raises:
            MetadataRetrievalError: If no repository has the POM.
        """
        relative = pom_path(coordinates, version)
        if self._local is not None:
            local_pom = self._local / relative
            if local_pom.is_file():
                return local_pom.read_text(encoding="utf-8")

        for remote in self._remotes:
            response = self._get(f"{remote}/{relative}", coordinates)
            if response is not None:
                return response.text

        raise MetadataRetrievalError.pom_not_found(str(coordinates), version)

    def _local_versions(self, coordinates: Coordinates) -> list[str]:
        if self._local is None:
            return []
        artifact_dir = self._local / coordinates.group_path / coordinates.artifact_id
        if not artifact_dir.is_dir():
            return []

        versions: list[str] = []
        for metadata in sorted(artifact_dir.glob("maven-metadata*.xml")):
            try:
                versions.extend(parse_metadata_versions(metadata.read_bytes()))
            except ET.ParseError as e:
                log.warning("metadata_unreadable", path=str(metadata), error=str(e))

        # Installed but never listed (e.g. copied in by hand)
        for child in sorted(artifact_dir.iterdir()):
            pom = child / f"{coordinates.artifact_id}-{child.name}.pom"
            if child.is_dir() and pom.is_file():
                versions.append(child.name)
        return versions

    def _remote_versions(self, remote: str, coordinates: Coordinates) -> list[str]:
        url = f"{remote}/{coordinates.group_path}/{coordinates.artifact_id}/{METADATA_FILE}"
        response = self._get(url, coordinates)
        if response is None:
            return []
        try:
            return parse_metadata_versions(response.content)
        except ET.ParseError as e:
            raise MetadataRetrievalError.lookup_failed(
                str(coordinates), f"unreadable metadata at {url}: {e}"
            ) from e

    def _get(self, url: str, coordinates: Coordinates) -> httpx.Response | None:
        """GET ``url``; None on 404."""
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise MetadataRetrievalError.lookup_failed(str(coordinates), f"{url}: {e}") from e
        if response.status_code == 404:
            log.debug("metadata_not_found", url=url)
            return None
        if response.is_error:
            raise MetadataRetrievalError.lookup_failed(
                str(coordinates), f"{url}: HTTP {response.status_code}"
            )
        return response
