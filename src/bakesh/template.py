"""CommandTemplate: the value a Command closes over."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional

DEFAULT_OK_EXIT: FrozenSet[int] = frozenset({0})


def get_os_env() -> Dict[str, str]:
    """Snapshot of the calling process's environment."""
    return dict(os.environ)


@dataclass
class CommandTemplate:
    """Everything needed to spawn one process.

    Templates are only ever modified while they are private to a
    derivation; ``copy`` must be taken first. Stream endpoints are shared
    by reference on purpose: the caller inspects them after the run.
    """

    program: str
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=get_os_env)
    cwd: Optional[str] = None
    stdin: Any = None
    stdout: Any = None
    stderr: Any = None
    ok_exit: FrozenSet[int] = DEFAULT_OK_EXIT
    debug: Optional[Callable[["CommandTemplate"], None]] = None

    def copy(self) -> "CommandTemplate":
        return CommandTemplate(
            program=self.program,
            args=list(self.args),
            env=dict(self.env),
            cwd=self.cwd,
            stdin=self.stdin,
            stdout=self.stdout,
            stderr=self.stderr,
            ok_exit=frozenset(self.ok_exit),
            debug=self.debug,
        )

    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def env_list(self) -> List[str]:
        """Environment as ``KEY=VALUE`` strings, sorted by key."""
        return [f"{k}={v}" for k, v in sorted(self.env.items())]

    def bake_args(self, args: Iterable[str]) -> "CommandTemplate":
        self.args.extend(args)
        return self

    def bake_env(self, env: Mapping[str, str]) -> "CommandTemplate":
        for key, value in env.items():
            if value == "":
                self.env.pop(key, None)
            else:
                self.env[key] = value
        return self

    def clear_env(self) -> "CommandTemplate":
        self.env = {}
        return self

    def bake_opts(self, *opts) -> "CommandTemplate":
        """Apply Opts bundles left to right; only explicitly set fields count."""
        for opt in opts:
            for name in ("cwd", "stdin", "stdout", "stderr", "ok_exit"):
                if name in opt.model_fields_set:
                    value = getattr(opt, name)
                    if name == "ok_exit" and value is None:
                        value = DEFAULT_OK_EXIT
                    setattr(self, name, value)
        return self

    def bake_debug(self, callback: Callable[["CommandTemplate"], None]) -> "CommandTemplate":
        self.debug = callback
        return self
