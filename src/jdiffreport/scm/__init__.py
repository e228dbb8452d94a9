"""Source-control access for historical project versions."""

from jdiffreport.scm.connection import ScmConnection, project_connection
from jdiffreport.scm.fetcher import FetchAction, ScmClient, SourceFetcher, release_tag
from jdiffreport.scm.git import CredentialCallbacks, GitScmClient

__all__ = [
    "CredentialCallbacks",
    "FetchAction",
    "GitScmClient",
    "ScmClient",
    "ScmConnection",
    "SourceFetcher",
    "project_connection",
    "release_tag",
]
