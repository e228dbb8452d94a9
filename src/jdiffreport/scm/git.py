"""Git checkout and update via pygit2."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import pygit2
import structlog

from jdiffreport.core.errors import FetchError
from jdiffreport.scm.connection import ScmConnection

if TYPE_CHECKING:
    from pygit2.enums import CredentialType

log = structlog.get_logger(__name__)

REMOTE = "origin"


class CredentialCallbacks(pygit2.RemoteCallbacks):
    """SSH through the agent, HTTPS through ``git credential fill``."""

    def credentials(  # type: ignore[override]
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: CredentialType,
    ) -> pygit2.Username | pygit2.UserPass | pygit2.Keypair | None:
        if allowed_types & pygit2.enums.CredentialType.SSH_KEY:
            return pygit2.KeypairFromAgent(username_from_url or "git")

        if allowed_types & pygit2.enums.CredentialType.USERPASS_PLAINTEXT:
            creds = _credential_fill(url)
            if creds:
                return pygit2.UserPass(creds["username"], creds["password"])

        return None


def _credential_fill(url: str) -> dict[str, str] | None:
    """Ask the configured git credential helper for ``url``."""
    parsed = urlparse(url)
    lines = [f"protocol={parsed.scheme}", f"host={parsed.hostname or parsed.netloc}"]
    if parsed.path:
        lines.append(f"path={parsed.path.lstrip('/')}")
    lines.append("")

    try:
        result = subprocess.run(
            ["git", "credential", "fill"],
            input="\n".join(lines),
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
        )
    except (subprocess.TimeoutExpired, OSError):
        return None
    if result.returncode != 0:
        return None

    creds = dict(line.split("=", 1) for line in result.stdout.splitlines() if "=" in line)
    if "username" in creds and "password" in creds:
        return creds
    return None


def _require_git(connection: ScmConnection) -> None:
    if connection.provider != "git":
        raise FetchError.unsupported_provider(connection.raw, connection.provider)


def _checkout_tag(repo: pygit2.Repository, tag: str) -> None:
    """Detach HEAD at ``tag``."""
    commit = repo.revparse_single(f"refs/tags/{tag}").peel(pygit2.Commit)
    repo.checkout_tree(commit, strategy=pygit2.enums.CheckoutStrategy.FORCE)
    repo.set_head(commit.id)


def _upstream_target(repo: pygit2.Repository) -> pygit2.Oid:
    """Commit the working copy should move to after a fetch."""
    if not repo.head_is_detached:
        ref = repo.references.get(f"refs/remotes/{REMOTE}/{repo.head.shorthand}")
        if ref is not None:
            return ref.resolve().target
    ref = repo.references.get(f"refs/remotes/{REMOTE}/HEAD")
    if ref is not None:
        return ref.resolve().target
    return repo.head.target


class GitScmClient:
    """SCM client for ``scm:git:`` connections."""

    def __init__(self, callbacks: pygit2.RemoteCallbacks | None = None) -> None:
        self._callbacks = callbacks or CredentialCallbacks()

    def checkout(self, connection: ScmConnection, directory: Path, tag: str | None = None) -> None:
        """Clone ``connection`` into the (empty) ``directory``.

        Raises:
            FetchError: On unsupported provider or any git failure.
        """
        _require_git(connection)
        log.info("scm_checkout", url=connection.url, directory=str(directory), tag=tag)
        try:
            repo = pygit2.clone_repository(
                connection.url, str(directory), callbacks=self._callbacks
            )
            if tag:
                _checkout_tag(repo, tag)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise FetchError.checkout_failed(connection.url, str(directory), str(e)) from e

    def update(self, connection: ScmConnection, directory: Path, tag: str | None = None) -> None:
        """Fetch into an existing clone and move it to ``tag`` or its upstream.

        Raises:
            FetchError: On unsupported provider or any git failure.
        """
        _require_git(connection)
        log.info("scm_update", url=connection.url, directory=str(directory), tag=tag)
        try:
            repo = pygit2.Repository(str(directory))
            repo.remotes[REMOTE].fetch(callbacks=self._callbacks)
            if tag:
                _checkout_tag(repo, tag)
            else:
                repo.reset(_upstream_target(repo), pygit2.enums.ResetMode.HARD)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise FetchError.update_failed(connection.url, str(directory), str(e)) from e
