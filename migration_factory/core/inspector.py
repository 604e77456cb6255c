"""
Installed-Package Inspector

Reads node_modules/<name>/package.json and returns the peer requirements the
installed package declares. Returns None (unknown) when the manifest is
missing or unparsable: absence of information is not an error.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..log import get_logger
from .errors import MigrationError
from .manifest import DependencyGroup, load_manifest

logger = get_logger("inspector")


@dataclass(frozen=True)
class PeerRequirement:
    owner_package: str
    peer_name: str
    required_range: str


class PackageInspector:
    """
    Usage:
        inspector = PackageInspector('/path/to/project/node_modules')
        inspector.inspect('widget-lib')
        # → [PeerRequirement('widget-lib', 'react', '^17.0.0')]
        inspector.inspect('not-installed')
        # → None
    """

    def __init__(self, modules_dir):
        self.modules_dir = Path(modules_dir)

    def manifest_path(self, name: str) -> Path:
        # Scoped names (@scope/pkg) map onto nested directories
        return self.modules_dir.joinpath(*name.split("/"), "package.json")

    def inspect(self, name: str) -> Optional[List[PeerRequirement]]:
        path = self.manifest_path(name)
        if not path.is_file():
            return None
        try:
            manifest = load_manifest(path)
        except MigrationError:
            logger.warn(f"Could not check peerDependencies for {name}")
            return None
        return [
            PeerRequirement(name, peer, str(required))
            for peer, required in manifest.group(DependencyGroup.PEER).items()
        ]
