"""Tests for Command derivation and modifier dispatch (no processes spawned)."""

from pathlib import Path

import pytest

from bakesh import (
    CLEAR_ENV,
    BakeshError,
    ClearEnv,
    Command,
    Debug,
    Env,
    IncomprehensibleModifier,
    Opts,
    UnresolvableReader,
    UnresolvableWriter,
    UnsupportedPipeline,
    sh,
)


def test_sh_seeds_default_template(monkeypatch):
    monkeypatch.setenv("BAKESH_SEED_VAR", "1")
    cmdt = sh("echo").template

    assert cmdt.program == "echo"
    assert cmdt.args == []
    assert cmdt.env["BAKESH_SEED_VAR"] == "1"
    assert cmdt.ok_exit == frozenset({0})


def test_environment_is_snapshotted_at_creation(monkeypatch):
    monkeypatch.setenv("BAKESH_SNAPSHOT_VAR", "before")
    cmd = sh("env")
    monkeypatch.setenv("BAKESH_SNAPSHOT_VAR", "after")

    assert cmd.template.env["BAKESH_SNAPSHOT_VAR"] == "before"


def test_strings_are_appended_as_arguments():
    cmd = sh("echo")("a")("b", "c")

    assert isinstance(cmd, Command)
    assert cmd.template.args == ["a", "b", "c"]


def test_pathlike_is_an_argument():
    cmd = sh("ls")(Path("/tmp"))

    assert cmd.template.args == ["/tmp"]


def test_deriving_does_not_mutate_parent():
    base = sh("echo")("a")
    child = base("b", Env({"BAKESH_CHILD": "1"}), Opts(cwd="/tmp"))

    assert base.template.args == ["a"]
    assert "BAKESH_CHILD" not in base.template.env
    assert base.template.cwd is None
    assert child.template.args == ["a", "b"]
    assert child.template.env["BAKESH_CHILD"] == "1"
    assert child.template.cwd == "/tmp"


def test_siblings_do_not_observe_each_other():
    base = sh("echo")(CLEAR_ENV)
    left = base("left", Env({"SIDE": "left"}))
    right = base("right", Env({"SIDE": "right"}))

    assert left.template.args == ["left"]
    assert right.template.args == ["right"]
    assert left.template.env == {"SIDE": "left"}
    assert right.template.env == {"SIDE": "right"}
    assert base.template.env == {}


def test_template_property_returns_private_copy():
    cmd = sh("echo")("a")
    cmdt = cmd.template
    cmdt.args.append("smuggled")
    cmdt.env["SMUGGLED"] = "1"

    assert cmd.template.args == ["a"]
    assert "SMUGGLED" not in cmd.template.env


def test_env_merge_and_delete_by_empty_string():
    cmd = sh("env")(CLEAR_ENV)(Env({"X": "1", "Y": "2"}))
    cmd = cmd(Env({"X": ""}))

    assert cmd.template.env == {"Y": "2"}


def test_plain_dict_is_an_environment_modifier():
    cmd = sh("env")(CLEAR_ENV)({"K": "v"})

    assert cmd.template.env == {"K": "v"}


def test_clear_env_accepts_class_and_instance():
    assert sh("env")(ClearEnv).template.env == {}
    assert sh("env")(CLEAR_ENV).template.env == {}
    assert sh("env").clear_env().template.env == {}


def test_modifiers_apply_left_to_right():
    cmd = sh("env")(Env({"K": "1"}), CLEAR_ENV, Env({"J": "2"}))

    assert cmd.template.env == {"J": "2"}


def test_partial_opts_compose_in_one_call():
    buf = bytearray()
    cmd = sh("cat")(Opts(stdout=buf), Opts(ok_exit={0, 1}), Opts(cwd="/tmp"))
    cmdt = cmd.template

    assert cmdt.stdout is buf
    assert cmdt.ok_exit == frozenset({0, 1})
    assert cmdt.cwd == "/tmp"


def test_incomprehensible_modifier_names_the_type():
    with pytest.raises(IncomprehensibleModifier) as excinfo:
        sh("echo")(42)

    assert excinfo.value.type_name == "int"
    assert excinfo.value.value == 42
    assert '"int"' in str(excinfo.value)
    assert isinstance(excinfo.value, TypeError)
    assert isinstance(excinfo.value, BakeshError)


def test_incomprehensible_modifier_for_non_string_mapping():
    with pytest.raises(IncomprehensibleModifier):
        sh("env")({"K": 1})


def test_bad_modifier_leaves_parent_usable():
    base = sh("echo")("a")
    with pytest.raises(IncomprehensibleModifier):
        base("b", object())

    assert base.template.args == ["a"]


def test_named_bake_methods_match_inline_modifiers():
    inline = sh("echo")("a", "b", Env({"K": "v"}), Opts(cwd="/tmp"))
    named = (
        sh("echo")
        .bake_args("a", "b")
        .bake_env({"K": "v"})
        .bake_opts(Opts(cwd="/tmp"))
    )

    assert named.template.args == inline.template.args
    assert named.template.env == inline.template.env
    assert named.template.cwd == inline.template.cwd


def test_bake_args_rejects_non_strings():
    with pytest.raises(IncomprehensibleModifier):
        sh("echo").bake_args(Opts())


def test_bake_env_rejects_non_mapping():
    with pytest.raises(IncomprehensibleModifier):
        sh("echo").bake_env("K=v")


def test_bake_opts_rejects_non_opts():
    with pytest.raises(IncomprehensibleModifier):
        sh("echo").bake_opts({"cwd": "/tmp"})


def test_on_debug_and_debug_modifier_store_callback():
    def listener(cmdt):
        pass

    assert sh("echo").on_debug(listener).template.debug is listener
    assert sh("echo")(Debug(listener)).template.debug is listener


def test_on_debug_rejects_non_callable():
    with pytest.raises(IncomprehensibleModifier):
        sh("echo").on_debug("not callable")


def test_piping_a_command_fails_loudly():
    producer = sh("echo")("hi")
    consumer = sh("cat")(Opts(stdin=producer))

    with pytest.raises(UnsupportedPipeline) as excinfo:
        consumer.start()

    assert excinfo.value.command is producer
    assert isinstance(excinfo.value, NotImplementedError)


def test_unresolvable_input_is_reported_as_reader():
    with pytest.raises(UnresolvableReader) as excinfo:
        sh("cat")(Opts(stdin=42)).start()

    assert excinfo.value.side == "reader"
    assert excinfo.value.type_name == "int"


def test_unresolvable_output_is_reported_as_writer():
    with pytest.raises(UnresolvableWriter) as excinfo:
        sh("echo")(Opts(stdout="not a sink")).start()

    assert excinfo.value.side == "writer"
    assert excinfo.value.type_name == "str"


def test_unresolvable_error_output_is_reported_as_writer():
    with pytest.raises(UnresolvableWriter):
        sh("echo")(Opts(stderr=3.5)).start()


def test_debug_hook_fires_before_endpoint_resolution():
    seen = []
    cmd = sh("cat")(Opts(stdin=42)).on_debug(lambda cmdt: seen.append(cmdt.program))

    with pytest.raises(UnresolvableReader):
        cmd.start()

    assert seen == ["cat"]


def test_repr_shows_argv():
    assert repr(sh("echo")("hello world")) == "Command(\"echo 'hello world'\")"
