"""JDiff API descriptor generation (one javadoc run per project version)."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import structlog

from jdiffreport.config.models import JavadocConfig
from jdiffreport.core.errors import ProcessExecutionError
from jdiffreport.javadoc.executor import JavadocExecutor, quote_and_escape
from jdiffreport.project.models import PackageSet, ProjectModel
from jdiffreport.project.packages import select_packages

log = structlog.get_logger(__name__)


def join_path(entries: Iterable[str | Path]) -> str:
    """Platform path list, quoted for a javadoc argument file."""
    return quote_and_escape(os.pathsep.join(str(e) for e in entries))


def project_classpath(project: ProjectModel, extra: Iterable[str] = ()) -> str:
    return join_path([project.build_output_dir, *extra])


def project_sourcepath(project: ProjectModel) -> str:
    return join_path(project.source_roots)


def add_doclet_arguments(executor: JavadocExecutor, javadoc: JavadocConfig) -> None:
    executor.add_argument_pair("-doclet", javadoc.doclet)
    if javadoc.doclet_path:
        executor.add_argument_pair("-docletpath", join_path(javadoc.doclet_path))


@dataclass(frozen=True, slots=True)
class Descriptor:
    """An API descriptor written by the doclet."""

    apiname: str
    path: Path
    packages: tuple[str, ...]


class DescriptorGenerator:
    """Runs javadoc with the JDiff doclet to write ``<apidir>/<apiname>.xml``.

    Packages documented by every run are collected into ``packages`` so the
    diff run can reuse them.
    """

    def __init__(
        self,
        executable: str | Path,
        working_dir: Path,
        javadoc: JavadocConfig,
        *,
        include_packages: list[str] | None = None,
        packages: PackageSet | None = None,
    ) -> None:
        self.executable = executable
        self.working_dir = working_dir
        self.javadoc = javadoc
        self.include_packages = include_packages
        self.packages = packages if packages is not None else PackageSet()

    def build_executor(
        self, project: ProjectModel, apiname: str, packages: Iterable[str]
    ) -> JavadocExecutor:
        executor = JavadocExecutor(self.executable)
        add_doclet_arguments(executor, self.javadoc)
        executor.add_argument_pair("-apiname", quote_and_escape(apiname))
        executor.add_argument_pair("-apidir", quote_and_escape(str(self.working_dir)))
        executor.add_argument_pair(
            "-classpath", project_classpath(project, self.javadoc.extra_classpath)
        )
        executor.add_argument_pair("-sourcepath", project_sourcepath(project))
        executor.add_arguments(packages)
        return executor

    def generate(self, project: ProjectModel, apiname: str | None = None) -> Descriptor:
        """Write the descriptor of ``project``.

        ``apiname`` defaults to ``<name>-<version>``.

        Raises:
            ProcessExecutionError: If javadoc fails.
        """
        apiname = apiname or f"{project.display_name}-{project.version}"
        packages = sorted(select_packages(project.source_roots, self.include_packages))
        self.packages.add_all(packages)

        try:
            self.working_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProcessExecutionError.launch_failed(
                str(self.executable), f"cannot create {self.working_dir}: {e}"
            ) from e
        log.info(
            "descriptor_started",
            apiname=apiname,
            project=project.display_id,
            packages=len(packages),
        )
        self.build_executor(project, apiname, packages).execute(self.working_dir)

        path = self.working_dir / f"{apiname}.xml"
        log.info("descriptor_generated", apiname=apiname, path=str(path))
        return Descriptor(apiname, path, tuple(packages))
