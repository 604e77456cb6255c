"""Tests for reading installed packages' peer requirements."""
import pytest

from migration_factory.core.inspector import PackageInspector, PeerRequirement


@pytest.fixture
def inspector(project):
    return PackageInspector(project.root / "node_modules")


class TestInspect:
    def test_peer_requirements(self, project, inspector):
        project.install("widget-lib", peer={"react": "^17.0.0", "lodash": "4"})
        reqs = inspector.inspect("widget-lib")
        assert PeerRequirement("widget-lib", "react", "^17.0.0") in reqs
        assert len(reqs) == 2

    def test_no_peer_dependencies(self, project, inspector):
        project.install("plain")
        assert inspector.inspect("plain") == []

    def test_missing_is_unknown(self, inspector):
        assert inspector.inspect("foo") is None

    def test_unparsable_is_unknown(self, project, inspector, caplog):
        project.install_raw("broken", "{ nope")
        assert inspector.inspect("broken") is None
        assert "Could not check peerDependencies for broken" in caplog.text

    def test_scoped_package(self, project, inspector):
        project.install("@rplan/ui", peer={"react-dom": "^17.0.0"})
        assert inspector.inspect("@rplan/ui") == [
            PeerRequirement("@rplan/ui", "react-dom", "^17.0.0")
        ]
