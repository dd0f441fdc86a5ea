"""Command: a callable, copy-on-derive builder for process invocations.

    echo = sh("echo")("hello")
    echo("world")()                   # runs `echo hello world`
    out = echo.output()               # "hello\\n"
    sh("sh")("-c", "exit 3")(Opts(ok_exit={3}))()

Calling a Command with modifiers returns a new Command; the original is
never changed, so partially baked commands can be shared and branched.
Calling it with no arguments runs it.
"""

from __future__ import annotations

import logging
import os
import shlex
from typing import Any, Callable, Mapping, Optional

from .exceptions import IncomprehensibleModifier, UnacceptableExitCode
from .models.options import Opts
from .modifiers import (
    ArgumentModifier,
    ClearEnvironmentModifier,
    DebugModifier,
    EnvironmentModifier,
    Modifier,
    OptionsModifier,
    to_modifier,
    to_modifiers,
)
from .running import RunningCommand
from .template import CommandTemplate

logger = logging.getLogger(__name__)

DebugListener = Callable[[CommandTemplate], None]


def sh(program: str | os.PathLike[str]) -> "Command":
    """Create a Command for ``program`` with the current environment and ok_exit {0}."""
    if isinstance(program, os.PathLike):
        program = os.fspath(program)
    if not isinstance(program, str):
        raise TypeError("program must be a string or os.PathLike")
    return Command(CommandTemplate(program=program))


class Command:
    """An immutable, callable command description."""

    __slots__ = ("_cmdt",)

    def __init__(self, cmdt: CommandTemplate):
        self._cmdt = cmdt

    def __repr__(self) -> str:
        return f"Command({shlex.join(self._cmdt.argv())!r})"

    def __call__(self, *args: Any) -> Optional["Command"]:
        """Derive a new Command from modifiers, or run when called bare.

        Strings become arguments, mappings/Env merge the environment,
        ClearEnv empties it, Opts override options, Debug sets a hook.
        """
        if not args:
            self.run()
            return None
        return self._derive(*to_modifiers(args))

    def _derive(self, *modifiers: Modifier) -> "Command":
        cmdt = self._cmdt.copy()
        for modifier in modifiers:
            modifier.apply(cmdt)
        return Command(cmdt)

    @property
    def template(self) -> CommandTemplate:
        """A private copy of this Command's template."""
        return self._cmdt.copy()

    def bake_args(self, *args: str) -> "Command":
        modifiers = []
        for arg in args:
            modifier = to_modifier(arg)
            if not isinstance(modifier, ArgumentModifier):
                raise IncomprehensibleModifier(arg)
            modifiers.append(modifier)
        return self._derive(*modifiers)

    def bake_env(self, env: Mapping[str, str]) -> "Command":
        modifier = to_modifier(env)
        if not isinstance(modifier, EnvironmentModifier):
            raise IncomprehensibleModifier(env)
        return self._derive(modifier)

    def clear_env(self) -> "Command":
        return self._derive(ClearEnvironmentModifier())

    def bake_opts(self, *opts: Opts) -> "Command":
        for opt in opts:
            if not isinstance(opt, Opts):
                raise IncomprehensibleModifier(opt)
        return self._derive(*(OptionsModifier(opt) for opt in opts))

    def on_debug(self, callback: DebugListener) -> "Command":
        """Call ``callback`` with the final template right before every spawn."""
        if not callable(callback):
            raise IncomprehensibleModifier(callback)
        return self._derive(DebugModifier(callback))

    def start(self) -> RunningCommand:
        """Start the process and return immediately."""
        return RunningCommand(self._cmdt.copy()).start()

    def run(self) -> None:
        """Start the process, wait for it, and check its exit code.

        Raises:
            UnacceptableExitCode: the exit code is not in the template's ok_exit.
        """
        cmdt = self._cmdt
        code = self.start().wait()
        if code not in cmdt.ok_exit:
            logger.debug("%s: exit %d not in %s", cmdt.program, code, sorted(cmdt.ok_exit))
            raise UnacceptableExitCode(cmdt.program, code, cmdt.ok_exit)

    def output(self) -> str:
        """Run and return stdout as text. stderr routing is left alone."""
        buf = bytearray()
        self.bake_opts(Opts(stdout=buf)).run()
        return buf.decode("utf-8", errors="replace")

    def combined_output(self) -> str:
        """Run and return stdout and stderr interleaved as text."""
        buf = bytearray()
        self.bake_opts(Opts(stdout=buf, stderr=buf)).run()
        return buf.decode("utf-8", errors="replace")
