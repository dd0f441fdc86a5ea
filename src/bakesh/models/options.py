"""Modifier values accepted by a Command call."""

from __future__ import annotations

import os
from typing import Any, Callable, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Env(dict):
    """Environment changes: ``{"NAME": "value"}``.

    Merged into the inherited environment. An empty-string value deletes
    the variable instead of setting it to "".
    """


class ClearEnv:
    """Marker that replaces the environment with an empty one.

    Either the class itself or ``CLEAR_ENV`` may be passed.
    """

    def __repr__(self) -> str:
        return "CLEAR_ENV"


CLEAR_ENV = ClearEnv()


class Opts(BaseModel):
    """Options bundle for working directory, stream bindings and exit codes.

    Only fields passed explicitly override the template, so several
    partial bundles compose. Passing ``None`` explicitly resets a field
    to "inherit".

    stdin accepts streams, bytearray, Channel, str or bytes.
    stdout/stderr accept streams, bytearray or Channel. Binding stderr to
    the very same object as stdout merges both into one stream.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    cwd: Optional[str] = None
    stdin: Any = None
    stdout: Any = None
    stderr: Any = None
    ok_exit: Optional[FrozenSet[int]] = None

    @field_validator("cwd", mode="before")
    @classmethod
    def _fspath(cls, value):
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value


class Debug:
    """Registers a callback that sees the final template before each spawn."""

    def __init__(self, callback: Callable[[Any], None]):
        if not callable(callback):
            raise TypeError("debug callback must be callable")
        self.callback = callback

    def __repr__(self) -> str:
        return f"Debug({self.callback!r})"


__all__ = ["CLEAR_ENV", "ClearEnv", "Debug", "Env", "Opts"]
