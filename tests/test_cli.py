"""CLI tests for the bumpgate command."""

import sys

import pytest

from bumpgate import api, cli
from builders import FakeDiffEngine, added_method, removed_method


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["bumpgate"] + args)
    return cli.main()


def _args(old, new, old_version, new_version, reports, *extra):
    return [
        "--oldJarUri", str(old),
        "--oldJarVersion", old_version,
        "--newJar", str(new),
        "--newJarVersion", new_version,
        "--textReport", str(reports["text"]),
        "--htmlReport", str(reports["html"]),
        *extra,
    ]


@pytest.fixture
def engine(monkeypatch):
    """Route the CLI to a FakeDiffEngine preloaded with a removed method."""
    fake = FakeDiffEngine([removed_method()])
    monkeypatch.setattr(api, "build_default_engine", lambda settings: fake)
    return fake


def test_help_exits_zero(capsys):
    assert cli.main_exitless(["--help"]) == 0
    assert "--oldJarUri" in capsys.readouterr().out


def test_version_exits_zero(capsys):
    assert cli.main_exitless(["--version"]) == 0
    assert capsys.readouterr().out.startswith("bumpgate ")


def test_no_arguments_is_usage_error(capsys):
    assert cli.main_exitless([]) == 1
    err = capsys.readouterr().err
    assert err.startswith("ERROR: ")
    assert "INFO: Try --help for usage information" in err


def test_unknown_argument_is_usage_error(capsys, jars, reports):
    code = cli.main_exitless(_args(jars["old"], jars["new"], "1.0.0", "1.0.0", reports, "--bogus"))
    assert code == 1
    assert "Try --help" in capsys.readouterr().err


def test_abbreviated_flag_is_rejected(capsys, jars, reports):
    args = _args(jars["old"], jars["new"], "1.0.0", "1.0.0", reports, "--ignoreMiss")
    assert cli.main_exitless(args) == 1
    assert "unrecognized arguments: --ignoreMiss" in capsys.readouterr().err


def test_unparseable_version(capsys, jars, reports, engine):
    code = cli.main_exitless(_args(jars["old"], jars["new"], "x", "1.0.0", reports))
    assert code == 1
    assert "ERROR: Version x cannot be parsed as a semantic version" in capsys.readouterr().err
    assert not reports["text"].exists()


def test_identical_jar_passes(monkeypatch, capsys, jars, reports, engine):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(_args(jars["old"], jars["old"], "1.0.0", "1.0.0", reports), monkeypatch)
    assert excinfo.value.code == 0
    err = capsys.readouterr().err
    assert "INFO: Comparison skipped" in err
    assert f"INFO: Text report written to {reports['text']}" in err
    assert engine.calls == []


def test_insufficient_bump_fails_with_message(monkeypatch, capsys, jars, reports, engine):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(_args(jars["old"], jars["new"], "1.0.0", "1.0.1", reports), monkeypatch)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert (
        "ERROR: The version change between 1.0.0 and 1.0.1 is PATCH, "
        "but the changes made to the code require a MAJOR version change"
    ) in err
    assert reports["text"].is_file()
    assert reports["html"].is_file()


def test_major_bump_passes(monkeypatch, jars, reports, engine):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(_args(jars["old"], jars["new"], "1.0.0", "2.0.0", reports), monkeypatch)
    assert excinfo.value.code == 0


def test_old_jar_alias(jars, reports, engine):
    args = _args(jars["old"], jars["new"], "1.0.0", "2.0.0", reports)
    args[0] = "--oldJar"
    assert cli.main_exitless(args) == 0


def test_pre_1_0_passes_with_note(capsys, jars, reports, engine):
    assert cli.main_exitless(_args(jars["old"], jars["new"], "0.9.0", "0.10.0", reports)) == 0
    assert "no compatibility guarantee" in capsys.readouterr().err


def test_quiet_suppresses_info_not_errors(capsys, jars, reports, engine):
    code = cli.main_exitless(_args(jars["old"], jars["new"], "1.0.0", "1.1.0", reports, "--quiet"))
    assert code == 1
    err = capsys.readouterr().err
    assert "INFO:" not in err
    assert "ERROR: The version change between 1.0.0 and 1.1.0 is MINOR" in err


def test_missing_old_with_ignore_passes(capsys, tmp_path, jars, reports, engine):
    code = cli.main_exitless(
        _args(tmp_path / "nonexistent.jar", jars["new"], "1.0.0", "1.0.0", reports, "--ignoreMissingOld")
    )
    assert code == 0
    assert "INFO: Comparison skipped: old artifact does not exist" in capsys.readouterr().err


def test_missing_old_without_ignore_fails(capsys, tmp_path, jars, reports, engine):
    code = cli.main_exitless(_args(tmp_path / "nonexistent.jar", jars["new"], "1.0.0", "1.0.0", reports))
    assert code == 1
    assert "ERROR: Artifact not found" in capsys.readouterr().err


def test_exclude_list(tmp_path, jars, reports, monkeypatch):
    fake = FakeDiffEngine([removed_method("com.example.internal.Cache"), added_method()])
    monkeypatch.setattr(api, "build_default_engine", lambda settings: fake)
    excludes = tmp_path / "excludes.txt"
    excludes.write_text("com.example.internal.*\n", encoding="utf-8")

    args = _args(jars["old"], jars["new"], "7.1.0", "7.2.0", reports, "--excludeList", str(excludes))
    assert cli.main_exitless(args) == 0
    assert list(fake.calls[0][2]) == ["com.example.internal.*"]


def test_missing_japicmp_configuration(capsys, jars, reports):
    code = cli.main_exitless(_args(jars["old"], jars["new"], "1.0.0", "2.0.0", reports))
    assert code == 1
    assert "ERROR: japicmp jar not configured" in capsys.readouterr().err


def test_japicmp_flag_overrides_environment(monkeypatch, tmp_path, jars, reports):
    seen = {}

    def _build(settings):
        seen["jar"] = settings.japicmp_jar
        return FakeDiffEngine()

    monkeypatch.setenv("BUMPGATE_JAPICMP_JAR", "/from/env/japicmp.jar")
    monkeypatch.setattr(api, "build_default_engine", _build)
    flag_jar = tmp_path / "japicmp.jar"
    args = _args(jars["old"], jars["new"], "1.0.0", "1.0.1", reports, "--japicmpJar", str(flag_jar))

    assert cli.main_exitless(args) == 0
    assert seen["jar"] == flag_jar


def test_unexpected_error_prints_traceback(monkeypatch, capsys, jars, reports):
    def _boom(settings):
        raise KeyError("surprise")

    monkeypatch.setattr(api, "build_default_engine", _boom)
    assert cli.main_exitless(_args(jars["old"], jars["new"], "1.0.0", "2.0.0", reports)) == 1
    err = capsys.readouterr().err
    assert "ERROR: Unexpected error:" in err
    assert "Traceback" in err
