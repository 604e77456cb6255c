"""
Shared pytest fixtures: throwaway JavaScript projects on disk.
"""
import json

import pytest

from migration_factory.config import MigrationConfig


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def read_json(path):
    return json.loads(path.read_text())


class FakeProject:
    """package.json + node_modules under a tmp directory."""

    def __init__(self, root):
        self.root = root

    @property
    def manifest_path(self):
        return self.root / "package.json"

    def write_manifest(self, **groups):
        data = {"name": "demo-app", "version": "1.0.0"}
        data.update(groups)
        return write_json(self.manifest_path, data)

    def manifest(self):
        return read_json(self.manifest_path)

    def install(self, name, peer=None, **extra):
        data = {"name": name, "version": "1.0.0"}
        if peer is not None:
            data["peerDependencies"] = peer
        data.update(extra)
        return write_json(self.root.joinpath("node_modules", *name.split("/"), "package.json"), data)

    def install_raw(self, name, text):
        path = self.root.joinpath("node_modules", *name.split("/"), "package.json")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path


class CommandRecorder:
    """Stands in for shell.run_command; fails the commands listed in `fail`."""

    def __init__(self, fail=()):
        self.calls = []
        self.fail = [tuple(f) for f in fail]

    def __call__(self, args, cwd=None):
        from migration_factory.core.errors import CommandFailure

        self.calls.append(list(args))
        if tuple(args) in self.fail:
            raise CommandFailure(args, 1)


@pytest.fixture
def project(tmp_path):
    return FakeProject(tmp_path)


@pytest.fixture
def config():
    return MigrationConfig()


@pytest.fixture
def recorder():
    return CommandRecorder()
