"""Maven SCM connection strings (``scm:<provider>:<url>``)."""

from __future__ import annotations

from dataclasses import dataclass

from jdiffreport.core.errors import FetchError, MissingScmConnectionError
from jdiffreport.project.models import ProjectModel


@dataclass(frozen=True, slots=True)
class ScmConnection:
    """A parsed connection: provider name and provider-specific URL."""

    raw: str
    provider: str
    url: str

    @classmethod
    def parse(cls, raw: str) -> ScmConnection:
        """Parse ``scm:git:https://host/repo.git`` (``|`` may replace ``:``).

        Raises:
            FetchError: If the string is not an SCM connection.
        """
        value = raw.strip()
        if not value.startswith("scm") or len(value) < 5:
            raise FetchError.unsupported_provider(raw, "<none>")
        delimiter = value[3]
        if delimiter not in (":", "|"):
            raise FetchError.unsupported_provider(raw, "<none>")
        provider, sep, url = value[4:].partition(delimiter)
        if not sep or not provider or not url:
            raise FetchError.unsupported_provider(raw, provider or "<none>")
        return cls(raw, provider.lower(), url)

    def __str__(self) -> str:
        return self.raw


def project_connection(project: ProjectModel) -> str:
    """The project's connection, falling back to the developer connection.

    Raises:
        MissingScmConnectionError: If neither is declared.
    """
    if project.scm.connection:
        return project.scm.connection
    if project.scm.developer_connection:
        return project.scm.developer_connection
    raise MissingScmConnectionError.for_project(project.display_id)
