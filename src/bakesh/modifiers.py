"""Classification of Command call arguments into a closed set of modifiers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Union

from .exceptions import IncomprehensibleModifier
from .models.options import ClearEnv, Debug, Opts
from .template import CommandTemplate


@dataclass(frozen=True)
class ArgumentModifier:
    arg: str

    def apply(self, cmdt: CommandTemplate) -> None:
        cmdt.bake_args([self.arg])


@dataclass(frozen=True)
class EnvironmentModifier:
    env: Mapping

    def apply(self, cmdt: CommandTemplate) -> None:
        cmdt.bake_env(self.env)


@dataclass(frozen=True)
class ClearEnvironmentModifier:
    def apply(self, cmdt: CommandTemplate) -> None:
        cmdt.clear_env()


@dataclass(frozen=True)
class OptionsModifier:
    opts: Opts

    def apply(self, cmdt: CommandTemplate) -> None:
        cmdt.bake_opts(self.opts)


@dataclass(frozen=True)
class DebugModifier:
    callback: Callable[[CommandTemplate], None]

    def apply(self, cmdt: CommandTemplate) -> None:
        cmdt.bake_debug(self.callback)


Modifier = Union[
    ArgumentModifier,
    EnvironmentModifier,
    ClearEnvironmentModifier,
    OptionsModifier,
    DebugModifier,
]


def to_modifier(value: Any) -> Modifier:
    """Classify one Command call argument, or raise IncomprehensibleModifier."""
    if isinstance(value, str):
        return ArgumentModifier(value)
    if isinstance(value, os.PathLike):
        return ArgumentModifier(os.fspath(value))
    if value is ClearEnv or isinstance(value, ClearEnv):
        return ClearEnvironmentModifier()
    if isinstance(value, Opts):
        return OptionsModifier(value)
    if isinstance(value, Debug):
        return DebugModifier(value.callback)
    if isinstance(value, Mapping):
        for key, val in value.items():
            if not isinstance(key, str) or not isinstance(val, str):
                raise IncomprehensibleModifier(value)
        return EnvironmentModifier(dict(value))
    raise IncomprehensibleModifier(value)


def to_modifiers(values: Tuple[Any, ...]) -> Tuple[Modifier, ...]:
    return tuple(to_modifier(v) for v in values)
