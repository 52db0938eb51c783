"""Tests for the gomr command line."""

import pytest
from click.testing import CliRunner

from gomr import __version__
from gomr import cli as cli_module
from gomr.cli import main
from gomr.store import RecordStore

from conftest import FakeGoMod


@pytest.fixture
def run_cli(host_module, tmp_path, monkeypatch):
    """Invoke the CLI from inside the host module with a fake go tool."""
    gomod = FakeGoMod()
    monkeypatch.setattr(cli_module, "GoMod", lambda go_binary: gomod)
    monkeypatch.setenv("GOPATH", str(tmp_path / "ws"))
    monkeypatch.chdir(host_module)

    def run(*args):
        return CliRunner().invoke(main, list(args))

    run.gomod = gomod
    return run


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_add_and_list(run_cli, host_module, local_dep):
    result = run_cli("add", "example.com/lib", str(local_dep))
    assert result.exit_code == 0, result.output
    assert f"added replace: example.com/lib => {local_dep}" in result.output
    assert "placeholder" in result.output

    result = run_cli("list")
    assert result.exit_code == 0
    assert "example.com/lib" in result.output


def test_add_missing_path_exits_non_zero(run_cli, tmp_path):
    result = run_cli("add", "pkg")

    assert result.exit_code == 1
    assert "does not exist" in result.output
    assert run_cli.gomod.calls == []


def test_add_requires_package():
    result = CliRunner().invoke(main, ["add"])
    assert result.exit_code == 2


def test_remove_not_found_succeeds(run_cli):
    result = run_cli("remove", "nothing")

    assert result.exit_code == 0
    assert "could not find stored replace for module: nothing" in result.output


def test_remove_reports_mapping(run_cli, host_module):
    (host_module / ".gomr").write_text("foo /x/foo\n")

    result = run_cli("remove", "FOO")

    assert result.exit_code == 0
    assert "deleted replace: foo => /x/foo" in result.output
    assert RecordStore(host_module).load() == []


def test_up_and_down(run_cli, host_module):
    (host_module / ".gomr").write_text("a /x/a\nb /x/b\n")

    result = run_cli("down")
    assert result.exit_code == 0
    assert "replace lines removed" in result.output

    result = run_cli("up")
    assert result.exit_code == 0
    assert "replace lines installed" in result.output
    assert run_cli.gomod.edits() == [
        ["-dropreplace=a", "-dropreplace=b"],
        ["-replace=a=/x/a", "-replace=b=/x/b"],
    ]


def test_up_with_empty_store(run_cli):
    result = run_cli("up")
    assert result.exit_code == 0
    assert "No stored replaces." in result.output


def test_tool_failure_prints_output(run_cli, host_module):
    run_cli.gomod.fail_on.add("edit")
    (host_module / ".gomr").write_text("a /x/a\n")

    result = run_cli("up")

    assert result.exit_code == 1
    assert "error:" in result.output
    assert "go: bad edit" in result.output


def test_malformed_store_exits_non_zero(run_cli, host_module):
    (host_module / ".gomr").write_text("broken\n")

    result = run_cli("list")

    assert result.exit_code == 1
    assert "expected 2 fields" in result.output


def test_outside_module(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_module, "GoMod", lambda go_binary: FakeGoMod())
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(main, ["down"])

    assert result.exit_code == 1
    assert "could not find a go.mod" in result.output
