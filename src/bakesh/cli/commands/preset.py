"""Preset CLI commands - presentation layer only."""

import json
import shlex
import sys

import click

from ...config import get_preset, load_presets
from ...context import pass_context
from ...exceptions import PresetError
from ..helpers import execute


@click.group(invoke_without_command=True)
@click.pass_context
def preset(ctx):
    """Inspect and run command presets.

    If no subcommand is provided, defaults to 'list'.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_cmd)


@preset.command(name="list")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@pass_context
def list_cmd(ctx, output_format):
    """List all presets."""
    try:
        presets = load_presets(ctx.config_path)
    except PresetError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not presets.presets:
        click.echo("No presets found")
        return

    if output_format == "json":
        output = {p.name: p.argv() for p in presets.presets}
        click.echo(json.dumps(output, indent=2))
    else:
        width = max(len(name) for name in presets.names())
        for p in presets.presets:
            click.echo(f"{p.name:<{width}}  {shlex.join(p.argv())}")


@preset.command(name="run", context_settings=dict(ignore_unknown_options=True))
@click.option("--capture", is_flag=True, help="Collect stdout and print it after exit")
@click.option("--combined", is_flag=True, help="Collect stdout and stderr together")
@click.argument("name")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@pass_context
def run_cmd(ctx, capture, combined, name, args):
    """Run preset NAME, appending ARGS."""
    try:
        cmd = get_preset(name, ctx.config_path).to_command()
    except PresetError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if args:
        cmd = cmd.bake_args(*args)
    execute(cmd, capture=capture, combined=combined)
