"""Tests for the React 17 → 18 migration sequence."""
import pytest

from conftest import CommandRecorder
from migration_factory.core import shell
from migration_factory.core.errors import CommandFailure, IncompatibilityAbort, MissingFile
from migration_factory.core.prompt import ScriptedPrompt
from migration_factory.migrations.react18 import ReactMigration

NCU = ["ncu", "/@rplan\\/.*/", "-u"]
NPM_INSTALL = ["npm", "install"]


@pytest.fixture(autouse=True)
def ncu_installed(monkeypatch):
    monkeypatch.setattr(shell.shutil, "which", lambda b: f"/usr/bin/{b}")


@pytest.fixture
def react17(project):
    project.write_manifest(
        dependencies={
            "react": "^17.0.2",
            "react-dom": "^17.0.2",
            "@rplan/ui": "2.0.0",
            "widget-lib": "^3.0.0",
        },
        devDependencies={
            "@testing-library/react": "^12.1.5",
            "react-test-renderer": "^17.0.2",
        },
        peerDependencies={"react": "^17.0.0", "@rplan/ui": "1.0.0"},
    )
    project.install("@rplan/ui", peer={"react": "^17.0.0 || ^18.0.0"})
    project.install("widget-lib", peer={"react": ">=16.8.0"})
    project.install("react-test-renderer", peer={"react": "17.0.2"})
    return project


def _migration(project, config, answers=(), runner=None):
    return ReactMigration(
        project.root, config,
        prompt=ScriptedPrompt(answers),
        runner=runner or CommandRecorder(),
        echo=lambda _s: None,
        banner=lambda _s: None,
    )


class TestFullRun:
    def test_happy_path(self, react17, config):
        recorder = CommandRecorder()
        migration = _migration(react17, config, runner=recorder)
        result = migration.run()

        data = react17.manifest()
        assert data["dependencies"]["react"] == "^18.3.1"
        assert data["dependencies"]["react-dom"] == "^18.3.1"
        assert data["devDependencies"]["@testing-library/react"] == "^14.0.0"
        assert data["devDependencies"]["react-test-renderer"] == "^18.3.1"
        assert data["peerDependencies"]["react"] == "^18.3.1"
        assert data["peerDependencies"]["@rplan/ui"] == "2.0.0"
        assert recorder.calls == [NCU, NPM_INSTALL]
        assert result.completed[-1] == "Migration Complete"
        assert migration.prompt.asked == []

    def test_missing_manifest_halts_before_commands(self, project, config):
        recorder = CommandRecorder()
        with pytest.raises(MissingFile):
            _migration(project, config, runner=recorder).run()
        assert recorder.calls == []


class TestGates:
    def test_incompatible_third_party_abort(self, react17, config):
        react17.install("widget-lib", peer={"react": "^17.0.0"})
        recorder = CommandRecorder()
        migration = _migration(react17, config, answers=["n"], runner=recorder)
        with pytest.raises(IncompatibilityAbort):
            migration.run()
        assert NPM_INSTALL not in recorder.calls
        # Earlier edits are not rolled back
        assert react17.manifest()["dependencies"]["react"] == "^18.3.1"
        assert len(migration.prompt.asked) == 1

    def test_incompatible_third_party_forced(self, react17, config, caplog):
        react17.install("widget-lib", peer={"react": "^17.0.0"})
        recorder = CommandRecorder()
        _migration(react17, config, answers=["y"], runner=recorder).run()
        assert recorder.calls[-1] == NPM_INSTALL
        assert "Proceeding with forced install despite peer dependency issues." in caplog.text

    def test_incompatible_managed_scope_abort(self, react17, config, caplog):
        react17.install("@rplan/ui", peer={"react-dom": "^17.0.0"})
        migration = _migration(react17, config, answers=["no"])
        with pytest.raises(IncompatibilityAbort):
            migration.run()
        assert "@rplan/ui: peerDependency react-dom@^17.0.0" in caplog.text
        assert "Aborting migration due to incompatible @rplan/* peer dependencies." in caplog.text

    def test_allow_listed_renderer_exempt(self, react17, config):
        # react-test-renderer still peers on react 17.0.2 but is declared at ^18.3.1
        migration = _migration(react17, config)
        migration.run()
        assert migration.prompt.asked == []

    def test_core_packages_not_checked_as_third_party(self, react17, config):
        react17.install("@testing-library/react", peer={"react": "^17.0.0"})
        migration = _migration(react17, config)
        migration.run()
        assert migration.prompt.asked == []

    def test_prompt_mentions_target(self, react17, config):
        react17.install("widget-lib", peer={"react": "^17.0.0"})
        migration = _migration(react17, config, answers=["n"])
        with pytest.raises(IncompatibilityAbort):
            migration.run()
        assert "Continue migration? (y/N): " in migration.prompt.asked[0]
        assert "React 18.3.1" in migration.prompt.asked[0]


class TestCommands:
    def test_ncu_failure_is_not_fatal(self, react17, config, caplog):
        recorder = CommandRecorder(fail=[NCU])
        _migration(react17, config, runner=recorder).run()
        assert recorder.calls == [NCU, NPM_INSTALL]
        assert "Failed to update @rplan/* dependencies using ncu." in caplog.text

    def test_npm_install_failure_is_fatal(self, react17, config):
        recorder = CommandRecorder(fail=[NPM_INSTALL])
        with pytest.raises(CommandFailure):
            _migration(react17, config, runner=recorder).run()

    def test_ncu_installed_when_missing(self, react17, config, monkeypatch):
        monkeypatch.setattr(shell.shutil, "which", lambda b: None)
        recorder = CommandRecorder()
        _migration(react17, config, runner=recorder).run()
        assert recorder.calls[0] == ["npm", "install", "-g", "npm-check-updates"]


class TestSync:
    def test_only_existing_managed_peers_synced(self, project, config):
        project.write_manifest(
            dependencies={"@rplan/ui": "2.0.0", "@rplan/core": "3.0.0"},
            devDependencies={"@rplan/ui": "2.1.0"},
            peerDependencies={"@rplan/ui": "1.0.0"},
        )
        _migration(project, config).sync_managed_peer_deps()
        peers = project.manifest()["peerDependencies"]
        assert peers == {"@rplan/ui": "2.1.0"}

    def test_custom_scope(self, project, config):
        config.managed_scope = "@acme/"
        project.write_manifest(
            dependencies={"@acme/ui": "5.0.0", "@rplan/ui": "2.0.0"},
            peerDependencies={"@acme/ui": "4.0.0", "@rplan/ui": "1.0.0"},
        )
        _migration(project, config).sync_managed_peer_deps()
        peers = project.manifest()["peerDependencies"]
        assert peers == {"@acme/ui": "5.0.0", "@rplan/ui": "1.0.0"}
