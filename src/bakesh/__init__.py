"""bakesh: build commands by baking in arguments, environment and streams; run them."""

from .command import Command, sh
from .exceptions import (
    BakeshError,
    ChannelClosed,
    IncomprehensibleModifier,
    UnacceptableExitCode,
    UnresolvableEndpoint,
    UnresolvableReader,
    UnresolvableWriter,
    UnsupportedPipeline,
)
from .iox import Channel
from .models import CLEAR_ENV, ClearEnv, Debug, Env, Opts
from .running import RunningCommand
from .template import CommandTemplate

__all__ = [
    "__version__",
    "BakeshError",
    "CLEAR_ENV",
    "Channel",
    "ChannelClosed",
    "ClearEnv",
    "Command",
    "CommandTemplate",
    "Debug",
    "Env",
    "IncomprehensibleModifier",
    "Opts",
    "RunningCommand",
    "UnacceptableExitCode",
    "UnresolvableEndpoint",
    "UnresolvableReader",
    "UnresolvableWriter",
    "UnsupportedPipeline",
    "sh",
]

__version__ = "0.1.0"
