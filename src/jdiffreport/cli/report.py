"""jdiff-report report command - compare two versions of a project."""

import json
from pathlib import Path

import click

from jdiffreport.cli.utils import load_project
from jdiffreport.core.errors import JDiffError
from jdiffreport.core.logging import set_run_id
from jdiffreport.core.progress import pluralize, status, task
from jdiffreport.report.driver import ReportDriver, ReportResult
from jdiffreport.scm.fetcher import SourceFetcher
from jdiffreport.scm.git import GitScmClient
from jdiffreport.versions.metadata import MavenMetadataSource


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--comparison-version", help="Version range to compare against. Default: (,<version>)"
)
@click.option("--base-version", help="Version compared. Default: the project version")
@click.option(
    "--force-checkout",
    is_flag=True,
    default=None,
    help="Delete and re-checkout sources of the comparison version",
)
@click.option("--javadoc-executable", help="javadoc executable or JDK bin directory")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Report directory. Default: target/site/apidocs",
)
@click.option("--include-packages", help="Space separated packages to document")
@click.option("--java-home-env", help="Environment variable naming the JDK root")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def report_command(
    ctx: click.Context,
    path: Path,
    comparison_version: str | None,
    base_version: str | None,
    force_checkout: bool | None,
    javadoc_executable: str | None,
    output_dir: Path | None,
    include_packages: str | None,
    java_home_env: str | None,
    as_json: bool,
) -> None:
    """Generate an API difference report between two versions of a Maven project.

    PATH is the project directory (default: current directory).
    """
    try:
        project, config = load_project(
            ctx,
            path,
            javadoc={"executable": javadoc_executable, "java_home_env": java_home_env},
            report={
                "comparison_version": comparison_version,
                "base_version": base_version,
                "force_checkout": force_checkout,
                "output_directory": str(output_dir) if output_dir else None,
                "include_packages": include_packages,
            },
        )
        set_run_id()

        repository = config.repository
        with MavenMetadataSource(
            Path(repository.local).expanduser(),
            repository.remotes,
            timeout_sec=repository.timeout_sec,
        ) as metadata:
            driver = ReportDriver(
                project,
                config,
                metadata=metadata,
                fetcher=SourceFetcher(
                    GitScmClient(), force_checkout=config.report.force_checkout
                ),
            )
            with task(f"Generating {config.report.name} report for {project.display_id}"):
                result = driver.generate()
    except JDiffError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_dict()))
    else:
        _print_result(result)


def _print_result(result: ReportResult) -> None:
    if result.skipped:
        status(f"Skipped: {result.skipped_reason}", style="warning")
        return
    assert result.comparison is not None and result.base is not None
    click.echo(f"Compared: {result.comparison.version} -> {result.base.version}")
    click.echo(f"Packages: {pluralize(len(result.packages), 'package')}")
    click.echo(f"Report: {result.report_dir}/changes.html")
