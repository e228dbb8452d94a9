"""jdiff-report CLI - API difference reports for Maven projects."""

import click

from jdiffreport import __version__
from jdiffreport.cli.descriptor import descriptor_command
from jdiffreport.cli.report import report_command
from jdiffreport.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="jdiff-report")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """jdiff-report - Compare the public API of two versions of a Maven project."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(report_command, name="report")
cli.add_command(descriptor_command, name="descriptor")


if __name__ == "__main__":
    cli()
