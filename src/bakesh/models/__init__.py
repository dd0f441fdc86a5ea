"""Pydantic models and modifier values."""

from .options import CLEAR_ENV, ClearEnv, Debug, Env, Opts
from .preset import Preset, PresetFile

__all__ = [
    "CLEAR_ENV",
    "ClearEnv",
    "Debug",
    "Env",
    "Opts",
    "Preset",
    "PresetFile",
]
