"""bakesh CLI main entry point with global options."""

import logging

import click

from ..context import BakeshContext


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Preset file (overrides $BAKESH_CONFIG)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log spawn and exit details")
@click.pass_context
def cli(ctx, config_path, verbose):
    """bakesh - bake commands, then run them."""
    ctx.ensure_object(BakeshContext)
    ctx.obj.config_path = config_path
    ctx.obj.verbose = verbose
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("bakesh").setLevel(logging.DEBUG if verbose else logging.WARNING)


# Register commands at module level so tests can import cli with commands attached
from .commands.preset import preset
from .commands.run import run

cli.add_command(run)
cli.add_command(preset)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
