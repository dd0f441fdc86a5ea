"""Exception hierarchy shared by every bakesh layer.

Configuration-time problems (bad modifiers, unusable endpoints) and
run-time problems (unacceptable exit codes) share one base class so a
caller can handle both with a single ``except BakeshError``.
"""

from __future__ import annotations

from typing import Any, Iterable


def type_name(value: Any) -> str:
    """Describe the runtime type of ``value`` for error messages."""
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


class BakeshError(Exception):
    """Base class for all bakesh errors."""


class IncomprehensibleModifier(BakeshError, TypeError):
    """A Command was called with an argument of an unrecognized kind."""

    def __init__(self, value: Any):
        self.value = value
        self.type_name = type_name(value)
        super().__init__(
            f'bakesh: incomprehensible command modifier: do not want type "{self.type_name}"'
        )


class UnresolvableEndpoint(BakeshError, TypeError):
    """An I/O binding could not be turned into a stream."""

    side = "endpoint"

    def __init__(self, value: Any):
        self.value = value
        self.type_name = type_name(value)
        super().__init__(
            f'bakesh: cannot use type "{self.type_name}" as a {self.side}'
        )


class UnresolvableReader(UnresolvableEndpoint):
    """The value bound to stdin cannot be read from."""

    side = "reader"


class UnresolvableWriter(UnresolvableEndpoint):
    """The value bound to stdout or stderr cannot be written to."""

    side = "writer"


class UnsupportedPipeline(BakeshError, NotImplementedError):
    """A Command was bound as another Command's input."""

    def __init__(self, command: Any):
        self.command = command
        super().__init__(
            "bakesh: piping one command into another is not implemented"
        )


class UnacceptableExitCode(BakeshError):
    """A command exited with a status outside its accepted set."""

    def __init__(self, program: str, code: int, ok_exit: Iterable[int] = (0,)):
        self.program = program
        self.code = code
        self.ok_exit = frozenset(ok_exit)
        super().__init__(
            f'bakesh: command "{program}" exited with unexpected status {code}'
        )


class ChannelClosed(BakeshError, EOFError):
    """Receive on a channel that is closed and drained."""


class PresetError(BakeshError):
    """A command preset could not be loaded."""


__all__ = [
    "BakeshError",
    "ChannelClosed",
    "IncomprehensibleModifier",
    "PresetError",
    "UnacceptableExitCode",
    "UnresolvableEndpoint",
    "UnresolvableReader",
    "UnresolvableWriter",
    "UnsupportedPipeline",
    "type_name",
]
