"""Tests for the mf command line."""
import sys

import pytest

from cli import mf
from conftest import CommandRecorder
from migration_factory import config as mf_config
from migration_factory.core import shell
from migration_factory.core.prompt import ScriptedPrompt


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    monkeypatch.setattr(mf_config, "USER_CONFIG_PATH", tmp_path / "no-user-config.yaml")
    monkeypatch.setattr(shell.shutil, "which", lambda b: f"/usr/bin/{b}")


def _exit_code(argv):
    with pytest.raises(SystemExit) as exc:
        mf.main(argv)
    return exc.value.code


class TestParser:
    def test_no_command_prints_help(self, capsys):
        assert _exit_code([]) == 0
        assert "react18" in capsys.readouterr().out

    def test_unknown_command(self):
        assert _exit_code(["vue3"]) == 2


class TestExitCodes:
    def test_missing_manifest_exits_1(self, tmp_path, capsys):
        assert _exit_code(["--no-color", "-C", str(tmp_path), "react18"]) == 1
        assert "package.json not found" in capsys.readouterr().err

    def test_missing_project_dir(self, tmp_path, capsys):
        assert _exit_code(["-C", str(tmp_path / "nope"), "node22"]) == 1
        assert "Project directory not found" in capsys.readouterr().err

    def test_declined_gate_exits_1(self, project, monkeypatch):
        project.write_manifest(dependencies={"react": "^17.0.2", "widget-lib": "1.0.0"})
        project.install("widget-lib", peer={"react": "^17.0.0"})
        recorder = CommandRecorder()
        monkeypatch.setattr(shell, "run_command", recorder)
        monkeypatch.setattr(mf, "OperatorPrompt", lambda: ScriptedPrompt(["n"]))
        assert _exit_code(["-C", str(project.root), "react18"]) == 1
        assert ["npm", "install"] not in recorder.calls

    def test_successful_run_returns_normally(self, project, monkeypatch):
        project.write_manifest(dependencies={"react": "^17.0.2"})
        recorder = CommandRecorder()
        monkeypatch.setattr(shell, "run_command", recorder)
        monkeypatch.setattr(mf, "OperatorPrompt", lambda: ScriptedPrompt())
        mf.main(["-C", str(project.root), "react18"])
        assert project.manifest()["dependencies"]["react"] == "^18.3.1"
        assert recorder.calls[-1] == ["npm", "install"]


class TestShortcuts:
    def test_migrate_react18_forwards_flags(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["migrate-react18", "-C", str(tmp_path)])
        with pytest.raises(SystemExit) as exc:
            mf.main_react18()
        assert exc.value.code == 1
