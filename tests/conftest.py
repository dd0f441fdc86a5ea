"""Pytest configuration and shared fixtures."""

import json

import pytest
from click.testing import CliRunner

from bakesh.cli import cli


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch, tmp_path):
    """Keep tests away from any real preset file.

    Clears $BAKESH_CONFIG and points HOME at an empty directory so the
    default lookup finds nothing unless a test asks for it.
    """
    monkeypatch.delenv("BAKESH_CONFIG", raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["run", "echo", "hi"])  # exit_code, output, etc.
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke


@pytest.fixture
def preset_file(tmp_path):
    """Write a preset file with a couple of presets and return its path."""
    path = tmp_path / "bakesh.json"
    data = {
        "presets": [
            {"name": "greet", "program": "echo", "args": ["hello"]},
            {
                "name": "show-var",
                "program": "sh",
                "args": ["-c", 'printf %s "$BAKESH_PRESET_VAR"'],
                "env": {"BAKESH_PRESET_VAR": "from-preset"},
            },
            {
                "name": "fourteen",
                "program": "sh",
                "args": ["-c", "exit 14"],
                "ok_exit": [14],
            },
        ]
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
