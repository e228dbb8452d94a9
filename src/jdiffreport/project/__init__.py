"""Maven project model, POM reading, and package discovery."""

from jdiffreport.project.models import PackageSet, ProjectModel, ScmInfo
from jdiffreport.project.packages import discover_packages, select_packages
from jdiffreport.project.pom import parse_pom, read_pom

__all__ = [
    "PackageSet",
    "ProjectModel",
    "ScmInfo",
    "discover_packages",
    "parse_pom",
    "read_pom",
    "select_packages",
]
