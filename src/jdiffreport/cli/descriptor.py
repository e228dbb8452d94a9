"""jdiff-report descriptor command - write the API descriptor of the current project."""

import json
from pathlib import Path

import click

from jdiffreport.cli.utils import load_project
from jdiffreport.core.errors import JDiffError
from jdiffreport.core.logging import set_run_id
from jdiffreport.core.progress import spinner, status
from jdiffreport.javadoc.locator import locate_javadoc
from jdiffreport.report.descriptor import DescriptorGenerator
from jdiffreport.report.driver import DEFAULT_WORKING_DIRECTORY


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("--apiname", help="Descriptor name. Default: <name>-<version>")
@click.option("--javadoc-executable", help="javadoc executable or JDK bin directory")
@click.option("--include-packages", help="Space separated packages to document")
@click.option("--java-home-env", help="Environment variable naming the JDK root")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def descriptor_command(
    ctx: click.Context,
    path: Path,
    apiname: str | None,
    javadoc_executable: str | None,
    include_packages: str | None,
    java_home_env: str | None,
    as_json: bool,
) -> None:
    """Generate the JDiff API descriptor of a Maven project.

    PATH is the project directory (default: current directory).
    """
    try:
        project, config = load_project(
            ctx,
            path,
            javadoc={"executable": javadoc_executable, "java_home_env": java_home_env},
            report={"include_packages": include_packages},
        )
        run_id = set_run_id()

        javadoc = config.javadoc
        executable = locate_javadoc(
            javadoc.executable,
            toolchain_path=javadoc.toolchain_path,
            java_home=javadoc.java_home,
            java_home_env=javadoc.java_home_env,
        )
        assert project.basedir is not None
        working_dir = Path(
            config.report.working_directory or project.basedir / DEFAULT_WORKING_DIRECTORY
        )
        generator = DescriptorGenerator(
            executable,
            working_dir,
            javadoc,
            include_packages=config.report.include_packages,
        )
        with spinner(f"Running javadoc for {project.display_id}"):
            descriptor = generator.generate(project, apiname)
        status(f"API descriptor {descriptor.apiname} generated", style="success")
    except JDiffError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(
            json.dumps(
                {
                    "apiname": descriptor.apiname,
                    "path": str(descriptor.path),
                    "packages": list(descriptor.packages),
                    "run_id": run_id,
                }
            )
        )
    else:
        click.echo(f"Descriptor: {descriptor.path}")
