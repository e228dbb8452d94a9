"""Keep a working checkout of a project's sources up to date."""

from __future__ import annotations

import shutil
from enum import StrEnum
from pathlib import Path
from typing import Protocol

import structlog

from jdiffreport.core.errors import FetchError, JDiffError
from jdiffreport.project.models import ProjectModel
from jdiffreport.scm.connection import ScmConnection, project_connection

log = structlog.get_logger(__name__)


class ScmClient(Protocol):
    """Checkout/update capability of a source-control client."""

    def checkout(
        self, connection: ScmConnection, directory: Path, tag: str | None = None
    ) -> None: ...

    def update(
        self, connection: ScmConnection, directory: Path, tag: str | None = None
    ) -> None: ...


class FetchAction(StrEnum):
    CHECKOUT = "checkout"
    UPDATE = "update"


def release_tag(project: ProjectModel) -> str | None:
    """The <scm><tag> of a released POM; ``HEAD`` means no tag."""
    tag = project.scm.tag
    if not tag or tag == "HEAD":
        return None
    return tag


class SourceFetcher:
    """Checks out a project into a directory, or updates an earlier checkout."""

    def __init__(self, client: ScmClient, *, force_checkout: bool = False) -> None:
        self._client = client
        self._force_checkout = force_checkout

    def fetch(self, checkout_dir: Path, project: ProjectModel) -> FetchAction:
        """Make ``checkout_dir`` hold the latest sources of ``project``.

        The connection is resolved before the directory is touched, so a
        project without one leaves no directory behind.

        Raises:
            MissingScmConnectionError: If the project declares no connection.
            FetchError: If checkout or update fails. A failed checkout leaves
                no directory behind.
        """
        connection = ScmConnection.parse(project_connection(project))
        tag = release_tag(project)

        if self._force_checkout and checkout_dir.exists():
            log.info("checkout_removed", directory=str(checkout_dir))
            try:
                shutil.rmtree(checkout_dir)
            except OSError as e:
                raise FetchError.checkout_failed(connection.url, str(checkout_dir), str(e)) from e

        if not checkout_dir.exists():
            try:
                checkout_dir.mkdir(parents=True)
            except OSError as e:
                raise FetchError.checkout_failed(connection.url, str(checkout_dir), str(e)) from e
            log.info("checkout_started", directory=str(checkout_dir), project=project.display_id)
            try:
                self._client.checkout(connection, checkout_dir, tag)
            except JDiffError:
                # No partial checkout left behind
                shutil.rmtree(checkout_dir, ignore_errors=True)
                raise
            return FetchAction.CHECKOUT

        log.info("update_started", directory=str(checkout_dir), project=project.display_id)
        self._client.update(connection, checkout_dir, tag)
        return FetchAction.UPDATE
