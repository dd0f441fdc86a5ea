"""CLI tests through click's CliRunner."""

import json


def test_run_streams_output(invoke):
    result = invoke(["run", "echo", "hello"])

    assert result.exit_code == 0, result.output
    assert result.output == "hello\n"


def test_run_reports_unacceptable_exit(invoke):
    result = invoke(["run", "--", "sh", "-c", "exit 3"])

    assert result.exit_code == 3
    assert "unexpected status 3" in result.output


def test_run_accepts_custom_exit_codes(invoke):
    result = invoke(["run", "--ok-exit", "3", "--", "sh", "-c", "exit 3"])

    assert result.exit_code == 0, result.output


def test_run_with_env_and_capture(invoke):
    result = invoke(
        ["run", "--env", "BAKESH_CLI_VAR=hi", "--capture", "--", "sh", "-c", 'printf %s "$BAKESH_CLI_VAR"']
    )

    assert result.exit_code == 0, result.output
    assert result.output == "hi"


def test_run_with_clear_env(invoke):
    result = invoke(["run", "--clear-env", "--capture", "env"])

    assert result.exit_code == 0, result.output
    assert result.output == ""


def test_run_with_cwd(invoke, tmp_path):
    result = invoke(["run", "--cwd", str(tmp_path), "--capture", "pwd"])

    assert result.exit_code == 0, result.output
    assert str(tmp_path.resolve()) in result.output or str(tmp_path) in result.output


def test_run_combined(invoke):
    result = invoke(["run", "--combined", "--", "sh", "-c", "echo out ; echo err 1>&2"])

    assert result.exit_code == 0, result.output
    assert result.output == "out\nerr\n"


def test_run_rejects_malformed_env(invoke):
    result = invoke(["run", "--env", "oops", "echo"])

    assert result.exit_code == 2
    assert "expected key=value" in result.output


def test_run_missing_program(invoke):
    result = invoke(["run", "bakesh-no-such-program-xyz"])

    assert result.exit_code == 127
    assert "Error:" in result.output


def test_preset_list(invoke, preset_file):
    result = invoke(["--config", str(preset_file), "preset", "list"])

    assert result.exit_code == 0, result.output
    assert "greet" in result.output
    assert "echo hello" in result.output


def test_preset_list_is_default_subcommand(invoke, preset_file):
    result = invoke(["--config", str(preset_file), "preset"])

    assert result.exit_code == 0, result.output
    assert "fourteen" in result.output


def test_preset_list_json(invoke, preset_file):
    result = invoke(["--config", str(preset_file), "preset", "list", "--format", "json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["greet"] == ["echo", "hello"]


def test_preset_list_without_presets(invoke, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = invoke(["preset", "list"])

    assert result.exit_code == 0, result.output
    assert "No presets found" in result.output


def test_preset_list_missing_explicit_file(invoke, tmp_path):
    result = invoke(["--config", str(tmp_path / "absent.json"), "preset", "list"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_preset_run_appends_args(invoke, preset_file):
    result = invoke(["--config", str(preset_file), "preset", "run", "--capture", "greet", "world"])

    assert result.exit_code == 0, result.output
    assert result.output == "hello world\n"


def test_preset_run_uses_preset_env(invoke, preset_file):
    result = invoke(["--config", str(preset_file), "preset", "run", "--capture", "show-var"])

    assert result.exit_code == 0, result.output
    assert result.output == "from-preset"


def test_preset_run_uses_preset_exit_codes(invoke, preset_file):
    result = invoke(["--config", str(preset_file), "preset", "run", "fourteen"])

    assert result.exit_code == 0, result.output


def test_preset_run_unknown(invoke, preset_file):
    result = invoke(["--config", str(preset_file), "preset", "run", "missing"])

    assert result.exit_code == 1
    assert "Preset not found" in result.output


def test_preset_file_from_environment(invoke, preset_file, monkeypatch):
    monkeypatch.setenv("BAKESH_CONFIG", str(preset_file))
    result = invoke(["preset", "run", "--capture", "greet"])

    assert result.exit_code == 0, result.output
    assert result.output == "hello\n"
