"""
File discovery for CI workflows and Dockerfiles.

Recursive walk that never descends into ignored folders (node_modules, .git,
build output). Results are sorted for stable output.
"""

import os
from pathlib import Path
from typing import Callable, List, Sequence

from .errors import MissingFile

DEFAULT_IGNORED = ("node_modules", ".git", ".cache", "dist", "build")


def find_files(root, match: Callable[[str], bool], ignored: Sequence[str] = DEFAULT_IGNORED) -> List[Path]:
    root = Path(root)
    if not root.is_dir():
        raise MissingFile(root, "directory")
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk skips them
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        for name in filenames:
            if match(name):
                found.append(Path(dirpath) / name)
    return sorted(found)


def is_yaml(name: str) -> bool:
    return name.lower().endswith((".yml", ".yaml"))


def is_dockerfile(name: str) -> bool:
    return name.lower() == "dockerfile"


def find_workflow_files(workflows_dir, ignored: Sequence[str] = DEFAULT_IGNORED) -> List[Path]:
    return find_files(workflows_dir, is_yaml, ignored)


def find_dockerfiles(root, ignored: Sequence[str] = DEFAULT_IGNORED) -> List[Path]:
    return find_files(root, is_dockerfile, ignored)
