"""Run command - build a command from flags and run it."""

import click

from ...command import sh
from ...config import parse_key_value_pairs
from ...models import CLEAR_ENV, Env, Opts
from ..helpers import execute


@click.command(context_settings=dict(ignore_unknown_options=True))
@click.option("--env", "env_items", multiple=True, help="Set KEY=VALUE (empty value unsets)")
@click.option("--clear-env", is_flag=True, help="Start from an empty environment")
@click.option("--cwd", type=click.Path(file_okay=False), help="Working directory")
@click.option("--ok-exit", type=int, multiple=True, help="Accepted exit code (repeatable)")
@click.option("--capture", is_flag=True, help="Collect stdout and print it after exit")
@click.option("--combined", is_flag=True, help="Collect stdout and stderr together")
@click.argument("program")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def run(env_items, clear_env, cwd, ok_exit, capture, combined, program, args):
    """Run PROGRAM with ARGS.

    Example:
        bakesh run echo hello              # prints hello
        bakesh run --ok-exit 3 -- sh -c 'exit 3'
        bakesh run --env LANG=C --capture date
    """
    try:
        env = parse_key_value_pairs(list(env_items))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--env")

    modifiers = []
    if clear_env:
        modifiers.append(CLEAR_ENV)
    if env:
        modifiers.append(Env(env))
    modifiers.extend(args)
    opts = {}
    if cwd:
        opts["cwd"] = cwd
    if ok_exit:
        opts["ok_exit"] = ok_exit
    modifiers.append(Opts(**opts))

    execute(sh(program)(*modifiers), capture=capture, combined=combined)
