"""CLI helper utilities shared across commands."""

import sys

import click

from ..command import Command
from ..exceptions import BakeshError, UnacceptableExitCode
from ..models import Opts


def execute(cmd: Command, capture: bool = False, combined: bool = False) -> None:
    """Run ``cmd`` for the CLI, mapping failures to exit codes.

    Uncaptured output is streamed to the CLI's own stdout/stderr.

    Raises:
        SystemExit: the child's exit code on an unacceptable exit, 127 when
            the program cannot be found, 1 for any other bakesh error.
    """
    try:
        if combined:
            click.echo(cmd.combined_output(), nl=False)
        elif capture:
            click.echo(cmd.output(), nl=False)
        else:
            cmd(Opts(stdout=sys.stdout, stderr=sys.stderr))()
    except UnacceptableExitCode as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.code if 0 < e.code < 256 else 1)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(127)
    except BakeshError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
