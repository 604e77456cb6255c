"""
Manifest Reader

Loads package.json files into a Manifest: name → version mappings for the
runtime, dev and peer dependency groups. Used read-only by the gate and the
inspector. Only the orchestrator calls the mutation helpers and save_manifest.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .errors import MissingFile, UnparsableManifest


class DependencyGroup(Enum):
    RUNTIME = "dependencies"
    DEV = "devDependencies"
    PEER = "peerDependencies"


INSTALLED_GROUPS = (DependencyGroup.RUNTIME, DependencyGroup.DEV)


@dataclass(frozen=True)
class DependencyRecord:
    name: str
    declared_range: str
    group: DependencyGroup


@dataclass
class Manifest:
    """
    Parsed package.json

    Usage:
        manifest = load_manifest('/path/to/project/package.json')
        manifest.dependency_names()
        # → ['@rplan/ui', 'react', 'react-dom', 'jest', ...]
    """
    path: Path
    data: Dict

    def group(self, group: DependencyGroup) -> Dict[str, str]:
        deps = self.data.get(group.value)
        return deps if isinstance(deps, dict) else {}

    def records(self) -> List[DependencyRecord]:
        return [
            DependencyRecord(name, str(version), group)
            for group in DependencyGroup
            for name, version in self.group(group).items()
        ]

    def dependency_names(self, groups: Iterable[DependencyGroup] = INSTALLED_GROUPS) -> List[str]:
        """Unique names across groups, in declaration order."""
        names = {}
        for group in groups:
            for name in self.group(group):
                names.setdefault(name, None)
        return list(names)

    def declared_range(self, name: str, groups: Iterable[DependencyGroup] = INSTALLED_GROUPS) -> Optional[str]:
        for group in groups:
            version = self.group(group).get(name)
            if version:
                return str(version)
        return None

    def set_version(self, name: str, version: str) -> List[DependencyGroup]:
        """Set `name` to `version` in every group that already declares it."""
        updated = []
        for group in DependencyGroup:
            deps = self.group(group)
            if deps.get(name):
                deps[name] = version
                updated.append(group)
        return updated

    def ensure_group(self, group: DependencyGroup) -> Dict[str, str]:
        if not isinstance(self.data.get(group.value), dict):
            self.data[group.value] = {}
        return self.data[group.value]


def load_manifest(path) -> Manifest:
    path = Path(path)
    if not path.is_file():
        raise MissingFile(path, "package.json")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise UnparsableManifest(path, str(e)) from e
    if not isinstance(data, dict):
        raise UnparsableManifest(path, "top-level value is not an object")
    return Manifest(path=path, data=data)


def save_manifest(manifest: Manifest):
    manifest.path.write_text(json.dumps(manifest.data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
