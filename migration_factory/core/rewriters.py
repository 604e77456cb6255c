"""
In-place regex rewrites of CI workflow files and Dockerfiles.

Each rewrite_* function writes the file only when the content changed and
returns whether it did.
"""

import re
from pathlib import Path


def workflow_pattern(old_version: str) -> re.Pattern:
    return re.compile(rf"node_version:\s*\[{re.escape(old_version)}\]")


def dockerfile_patterns(old_version: str, base_image: str):
    """
    `node:20`, `node:20-bullseye` and `<base_image>:20[-variant]`.

    Registry-qualified images such as `docker.io/library/node:20` are left alone.
    """
    return [
        re.compile(rf"(?<![\w/.-])node:{re.escape(old_version)}(?!\d)(-\w*)?"),
        re.compile(rf"{re.escape(base_image)}:{re.escape(old_version)}(?!\d)(-\w*)?"),
    ]


def update_workflow_text(text: str, old_version: str, new_version: str) -> str:
    return workflow_pattern(old_version).sub(f"node_version: [{new_version}]", text)


def update_dockerfile_text(text: str, old_version: str, base_image: str, image_tag: str) -> str:
    replacement = f"{base_image}:{image_tag}"
    for pattern in dockerfile_patterns(old_version, base_image):
        text = pattern.sub(replacement, text)
    return text


def _rewrite(path: Path, transform) -> bool:
    # newline="" keeps CRLF files CRLF
    with open(path, encoding="utf-8", newline="") as f:
        original = f.read()
    updated = transform(original)
    if updated == original:
        return False
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(updated)
    return True


def rewrite_workflow(path, old_version: str, new_version: str) -> bool:
    return _rewrite(Path(path), lambda text: update_workflow_text(text, old_version, new_version))


def rewrite_dockerfile(path, old_version: str, base_image: str, image_tag: str) -> bool:
    return _rewrite(Path(path), lambda text: update_dockerfile_text(text, old_version, base_image, image_tag))
