"""CLI utilities."""

from pathlib import Path
from typing import Any

import click

from jdiffreport.config.loader import load_config
from jdiffreport.config.models import JDiffConfig
from jdiffreport.core.logging import configure_logging
from jdiffreport.project.models import ProjectModel
from jdiffreport.project.pom import POM_FILE, read_pom


def find_project_root(start_path: Path | None = None) -> Path:
    """Find the Maven project directory from the given path.

    Walks up the directory tree looking for a pom.xml.
    If start_path is None, uses the current working directory.

    Raises:
        click.ClickException: If no pom.xml is found
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()
    while True:
        if (current / POM_FILE).is_file():
            return current
        if current == current.parent:
            break
        current = current.parent

    raise click.ClickException(
        f"No {POM_FILE} found in {start_path} or any parent directory.\n"
        "jdiff-report must be run from a Maven project, or pass a path."
    )


def sections(**values: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Keep only the CLI options that were actually given."""
    result = {}
    for name, options in values.items():
        given = {key: value for key, value in options.items() if value is not None}
        if given:
            result[name] = given
    return result


def load_project(
    ctx: click.Context, path: Path, **overrides: dict[str, Any]
) -> tuple[ProjectModel, JDiffConfig]:
    """Read the project POM and its configuration, then apply logging settings.

    Raises:
        JDiffError: On invalid configuration or POM.
    """
    project_root = find_project_root(path)
    config = load_config(project_root, **sections(**overrides))

    logging_config = config.logging
    if ctx.obj and ctx.obj.get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    return read_pom(project_root), config
