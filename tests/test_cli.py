# tests/test_cli.py
import json
import logging
from pathlib import Path

import pytest

import pymocks.detect as detect
from pymocks import cli


@pytest.fixture(autouse=True)
def _env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("PYMOCKS_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger("pymocks")
    handlers, level = list(root.handlers), root.level
    yield
    # configure_logger() binds a handler to the captured stderr; drop it
    root.handlers[:] = handlers
    root.setLevel(level)


def test_config_prints_effective_section(capsys):
    cli.main(["config"])
    out = capsys.readouterr().out
    body = out.split("# project config:")[0]
    assert json.loads(body)["backend"] == "auto"
    assert "<none>" in out


def test_config_reports_project_file(tmp_path: Path, capsys):
    proj = tmp_path / ".pymocks" / "config.toml"
    proj.parent.mkdir()
    proj.write_text('[mock]\nbackend = "unittest"\n', encoding="utf-8")

    cli.main(["config", "--start", str(tmp_path)])

    out = capsys.readouterr().out
    assert '"backend": "unittest"' in out
    assert str(proj) in out


def test_backend_without_pytest_session(monkeypatch, capsys):
    monkeypatch.setattr(detect, "_PYTEST_CONFIG", None)
    cli.main(["backend"])
    assert capsys.readouterr().out.strip() == "unittest (auto: no pytest session)"


def test_backend_inside_pytest_session(capsys):
    cli.main(["backend"])
    assert capsys.readouterr().out.startswith("pytest-mock")


def test_bad_config_exits_with_status_1(tmp_path: Path):
    proj = tmp_path / ".pymocks" / "config.toml"
    proj.parent.mkdir()
    proj.write_text('[mock]\nbackend = "bogus"\n', encoding="utf-8")

    with pytest.raises(SystemExit) as ei:
        cli.main(["config"])
    assert ei.value.code == 1


def test_subcommand_is_required():
    with pytest.raises(SystemExit) as ei:
        cli.main([])
    assert ei.value.code == 2
