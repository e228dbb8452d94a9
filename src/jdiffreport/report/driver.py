"""Report driver: resolve versions, fetch sources, run the doclet twice, diff.

States::

    START -> VERSIONS_RESOLVED -> DESCRIPTORS_GENERATED -> DIFF_GENERATED -> DONE
      \\______________________________________________________________/
                                      |
                                    FAILED

A comparison version that resolves to nothing ends in DONE with the run
marked skipped.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from importlib import resources
from pathlib import Path
from typing import Any

import structlog

from jdiffreport.config.models import JDiffConfig
from jdiffreport.core.errors import InternalError, ProcessExecutionError
from jdiffreport.core.logging import get_run_id
from jdiffreport.javadoc.executor import JavadocExecutor, quote_and_escape
from jdiffreport.javadoc.locator import locate_javadoc
from jdiffreport.project.models import PackageSet, ProjectModel
from jdiffreport.project.pom import parse_pom, read_pom
from jdiffreport.report.descriptor import (
    DescriptorGenerator,
    add_doclet_arguments,
    project_classpath,
    project_sourcepath,
)
from jdiffreport.scm.fetcher import SourceFetcher
from jdiffreport.versions.metadata import VersionMetadataSource
from jdiffreport.versions.models import ResolvedVersion
from jdiffreport.versions.resolver import VersionResolver

log = structlog.get_logger(__name__)

BLACK_GIF = "black.gif"
DEFAULT_WORKING_DIRECTORY = "target/jdiff"
DEFAULT_SITE_DIRECTORY = "target/site"

PREVIOUS_VERSION_NOT_FOUND = "Unable to find a previous version of the project in the repository"


class ReportState(StrEnum):
    START = "start"
    VERSIONS_RESOLVED = "versions_resolved"
    DESCRIPTORS_GENERATED = "descriptors_generated"
    DIFF_GENERATED = "diff_generated"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ReportResult:
    """Outcome of one report run."""

    name: str
    description: str
    output_name: str
    state: ReportState
    comparison: ResolvedVersion | None = None
    base: ResolvedVersion | None = None
    packages: list[str] = field(default_factory=list)
    report_dir: Path | None = None
    skipped_reason: str | None = None
    run_id: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "output_name": self.output_name,
            "state": self.state.value,
            "skipped": self.skipped,
            "skipped_reason": self.skipped_reason,
            "comparison": self.comparison.to_dict() if self.comparison else None,
            "base": self.base.to_dict() if self.base else None,
            "packages": self.packages,
            "report_dir": str(self.report_dir) if self.report_dir else None,
            "run_id": self.run_id,
        }


def can_generate_report(project: ProjectModel) -> bool:
    """Aggregator (``pom``) projects and projects without sources have no API."""
    return project.packaging.lower() != "pom" and bool(project.source_roots)


def copy_black_gif(report_dir: Path) -> bool:
    """Copy the image the doclet's HTML refers to. Failure is only logged."""
    target = report_dir / BLACK_GIF
    try:
        source = resources.files("jdiffreport.report.resources").joinpath(BLACK_GIF)
        target.write_bytes(source.read_bytes())
    except OSError as e:
        log.warning("black_gif_copy_failed", target=str(target), error=str(e))
        return False
    return True


class ReportDriver:
    """Sequences one API difference report for a local project."""

    def __init__(
        self,
        project: ProjectModel,
        config: JDiffConfig,
        *,
        metadata: VersionMetadataSource,
        fetcher: SourceFetcher,
        resolver: VersionResolver | None = None,
        locate: Callable[..., Path] = locate_javadoc,
    ) -> None:
        if project.basedir is None:
            raise InternalError.unexpected(
                "report driver needs a project read from disk", project=project.display_id
            )
        self.project = project
        self.config = config
        self._metadata = metadata
        self._fetcher = fetcher
        self._resolver = resolver or VersionResolver(metadata)
        self._locate = locate
        self._projects: dict[str, ProjectModel] = {}
        self.state = ReportState.START

    @property
    def basedir(self) -> Path:
        assert self.project.basedir is not None
        return self.project.basedir

    @property
    def working_dir(self) -> Path:
        configured = self.config.report.working_directory
        return Path(configured) if configured else self.basedir / DEFAULT_WORKING_DIRECTORY

    @property
    def output_name(self) -> str:
        return f"{self.config.report.dest_dir}/changes"

    @property
    def comparison_spec(self) -> str:
        return self.config.report.comparison_version or f"(,{self.project.version})"

    @property
    def base_spec(self) -> str:
        return self.config.report.base_version or self.project.version

    def report_dir(self, output_dir: Path | None = None) -> Path:
        if output_dir is not None:
            return output_dir
        configured = self.config.report.output_directory
        if configured:
            return Path(configured)
        return self.basedir / DEFAULT_SITE_DIRECTORY / self.config.report.dest_dir

    def _result(self, **kwargs: Any) -> ReportResult:
        return ReportResult(
            name=self.config.report.name,
            description=self.config.report.description,
            output_name=self.output_name,
            state=self.state,
            run_id=get_run_id(),
            **kwargs,
        )

    def generate(self, output_dir: Path | None = None) -> ReportResult:
        """Generate the report into ``output_dir`` (or the configured directory).

        Raises:
            JDiffError: Any failure before the image copy. The driver is left
                in state FAILED, as it is for any other exception.
        """
        if not can_generate_report(self.project):
            self.state = ReportState.DONE
            log.info("report_skipped", project=self.project.display_id, reason="no_sources")
            return self._result(skipped_reason="project has no Java sources")

        try:
            return self._generate(self.report_dir(output_dir))
        except Exception:
            self.state = ReportState.FAILED
            raise

    def _generate(self, report_dir: Path) -> ReportResult:
        comparison = self.resolve(self.comparison_spec)
        if not comparison.is_resolved:
            self.state = ReportState.DONE
            return self._result(
                comparison=comparison,
                skipped_reason=PREVIOUS_VERSION_NOT_FOUND,
            )
        base = self.resolve(self.base_spec)
        if not base.is_resolved:
            self.state = ReportState.DONE
            return self._result(
                comparison=comparison,
                base=base,
                skipped_reason=f"No published version matches {self.base_spec}",
            )
        self.state = ReportState.VERSIONS_RESOLVED
        log.info("versions_resolved", comparison=comparison.version, base=base.version)

        javadoc = self.config.javadoc
        executable = self._locate(
            javadoc.executable,
            toolchain_path=javadoc.toolchain_path,
            java_home=javadoc.java_home,
            java_home_env=javadoc.java_home_env,
        )

        assert comparison.version is not None and base.version is not None
        comparison_project = self.project_for(comparison)
        base_project = self.project_for(base)

        packages = PackageSet()
        generator = DescriptorGenerator(
            executable,
            self.working_dir,
            javadoc,
            include_packages=self.config.report.include_packages,
            packages=packages,
        )
        generator.generate(comparison_project, comparison.version)
        generator.generate(base_project, base.version)
        self.state = ReportState.DESCRIPTORS_GENERATED

        self.run_diff(
            executable, report_dir, base_project, comparison.version, base.version, packages
        )
        self.state = ReportState.DIFF_GENERATED

        copy_black_gif(report_dir)
        self.state = ReportState.DONE
        log.info("report_generated", report_dir=str(report_dir), packages=len(packages))
        return self._result(
            comparison=comparison,
            base=base,
            packages=list(packages),
            report_dir=report_dir,
        )

    def resolve(self, spec: str) -> ResolvedVersion:
        resolved = self._resolver.resolve(spec, self.project.coordinates, self.project.version)
        log.info("version_resolved", spec=spec, **resolved.to_dict())
        return resolved

    def project_for(self, resolved: ResolvedVersion) -> ProjectModel:
        """Local project for the current version, otherwise a fetched checkout.

        Each version is fetched at most once per driver.
        """
        if resolved.is_current:
            return self.project
        assert resolved.version is not None
        version = resolved.version
        if version in self._projects:
            return self._projects[version]

        pom = self._metadata.fetch_pom(self.project.coordinates, version)
        published = parse_pom(pom, source=f"{self.project.coordinates}:{version}")

        checkout_dir = self.working_dir / version
        self._fetcher.fetch(checkout_dir, published)
        project = read_pom(checkout_dir / self.module_path())
        self._projects[version] = project
        return project

    def module_path(self) -> Path:
        """Location of this module inside a checkout of the whole repository."""
        root = self.config.report.execution_root
        if not root:
            return Path()
        try:
            return self.basedir.relative_to(Path(root).resolve())
        except ValueError:
            log.warning("module_outside_execution_root", basedir=str(self.basedir), root=root)
            return Path()

    def run_diff(
        self,
        executable: str | Path,
        report_dir: Path,
        base_project: ProjectModel,
        comparison_version: str,
        base_version: str,
        packages: PackageSet,
    ) -> None:
        """Render the HTML difference of the two descriptors into ``report_dir``."""
        try:
            report_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProcessExecutionError.launch_failed(
                str(executable), f"cannot create report directory {report_dir}: {e}"
            ) from e
        executor = JavadocExecutor(executable)
        executor.add_argument("-private")
        executor.add_argument_pair("-d", quote_and_escape(str(report_dir)))
        executor.add_argument_pair("-sourcepath", project_sourcepath(base_project))
        executor.add_argument_pair(
            "-classpath", project_classpath(base_project, self.config.javadoc.extra_classpath)
        )
        add_doclet_arguments(executor, self.config.javadoc)
        executor.add_argument_pair("-oldapi", quote_and_escape(comparison_version))
        executor.add_argument_pair("-newapi", quote_and_escape(base_version))
        executor.add_argument("-stats")
        executor.add_arguments(packages)

        log.info("diff_started", oldapi=comparison_version, newapi=base_version)
        executor.execute(self.working_dir)
