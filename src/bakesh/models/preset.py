"""Pydantic models for command preset files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Preset(BaseModel):
    """A named, reusable baked command."""

    model_config = ConfigDict(extra="forbid")

    name: str
    program: str = Field(min_length=1)
    args: List[str] = Field(default_factory=list)
    env: Dict[str, str] = Field(default_factory=dict)
    clear_env: bool = False
    cwd: Optional[str] = None
    ok_exit: List[int] = Field(default_factory=lambda: [0], min_length=1)

    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def to_command(self):
        """Bake this preset into a Command.

        The environment is cleared first (if requested), then merged,
        then arguments and options are applied.
        """
        from ..command import sh
        from .options import CLEAR_ENV, Env, Opts

        modifiers = []
        if self.clear_env:
            modifiers.append(CLEAR_ENV)
        if self.env:
            modifiers.append(Env(self.env))
        modifiers.extend(self.args)
        opts = {"ok_exit": self.ok_exit}
        if self.cwd is not None:
            opts["cwd"] = self.cwd
        modifiers.append(Opts(**opts))
        return sh(self.program)(*modifiers)


class PresetFile(BaseModel):
    """Top-level structure of a preset file."""

    model_config = ConfigDict(extra="forbid")

    presets: List[Preset] = Field(default_factory=list)
    config_path: Optional[Path] = Field(default=None, exclude=True)

    def names(self) -> List[str]:
        return [p.name for p in self.presets]


__all__ = ["Preset", "PresetFile"]
