"""classindex CLI - classindex command."""

import click

from classindex.cli.build import build_command
from classindex.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="classindex")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """classindex - compile-time index of annotated types and subclasses."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(build_command, name="build")


if __name__ == "__main__":
    cli()
