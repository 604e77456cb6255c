"""
Migration Factory - Configuration
=======================================
Target versions, managed scope and tool binaries for both migrations.
Loads from <project>/.migration-factory.yaml or
~/.config/migration-factory/config.yaml, with env var overrides.
Defaults reproduce the historical scripts.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import dotenv_values

PROJECT_CONFIG_NAME = ".migration-factory.yaml"
USER_CONFIG_PATH = Path.home() / ".config" / "migration-factory" / "config.yaml"
ENV_PREFIX = "MF_"


@dataclass
class ReactConfig:
    """React 17 → 18."""

    old_major: str = "17"
    new_major: str = "18"
    target_versions: dict = field(
        default_factory=lambda: {
            "react": "^18.3.1",
            "react-dom": "^18.3.1",
            "@testing-library/react": "^14.0.0",
            "react-test-renderer": "^18.3.1",
        }
    )
    # Peer names checked for the managed scope
    managed_anchors: list = field(default_factory=lambda: ["react", "react-dom"])
    # Peer names checked for every other dependency (also excluded from that scan)
    core_packages: list = field(
        default_factory=lambda: ["react", "react-dom", "@testing-library/react"]
    )
    # Exempt when the project already declares them at the new major
    ignore_warnings_for: list = field(default_factory=lambda: ["react-test-renderer"])


@dataclass
class NodeConfig:
    """Node 20 → 22."""

    old_version: str = "20"
    node_version: str = "22"
    docker_image_tag: str = "22"
    base_image: str = "europe-west3-docker.pkg.dev/allex-artifacts/allex-artifacts-docker/allex-nodejs-base"
    workflows_dir: str = ".github/workflows"
    dockerfile_dir: str = "."
    ignored_folders: list = field(
        default_factory=lambda: ["node_modules", ".git", ".cache", "dist", "build"]
    )


@dataclass
class ToolsConfig:
    """External binaries."""

    npm: str = "npm"
    npx: str = "npx"
    ncu: str = "ncu"
    node: str = "node"


@dataclass
class LoggingConfig:
    log_dir: Optional[str] = None
    level: str = "INFO"


@dataclass
class MigrationConfig:
    """Root configuration object."""

    managed_scope: str = "@rplan/"
    react: ReactConfig = field(default_factory=ReactConfig)
    node: NodeConfig = field(default_factory=NodeConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _apply_section(obj, raw: dict):
    """Apply dict values to a dataclass."""
    for k, v in raw.items():
        if hasattr(obj, k):
            setattr(obj, k, v)


def config_path(project_dir: Path) -> Optional[Path]:
    """First existing config file, project before user."""
    for candidate in (Path(project_dir) / PROJECT_CONFIG_NAME, USER_CONFIG_PATH):
        if candidate.exists():
            return candidate
    return None


def _environment(project_dir: Path) -> dict:
    """MF_* keys from the project .env, under the process environment."""
    env = {
        k: v for k, v in dotenv_values(project_dir / ".env").items()
        if k.startswith(ENV_PREFIX) and v is not None
    }
    env.update(os.environ)
    return env


def load_config(project_dir=".") -> MigrationConfig:
    """Load migration config from YAML + .env + env vars."""
    project_dir = Path(project_dir)
    env = _environment(project_dir)
    cfg = MigrationConfig()

    path = config_path(project_dir)
    if path is not None:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        if "managed_scope" in raw:
            cfg.managed_scope = raw["managed_scope"]
        for section in ("node", "tools", "logging"):
            if section in raw:
                _apply_section(getattr(cfg, section), raw[section])
        if "react" in raw:
            react_raw = dict(raw["react"])
            # Merge so a partial override keeps the other targets
            if "target_versions" in react_raw:
                cfg.react.target_versions.update(react_raw.pop("target_versions"))
            _apply_section(cfg.react, react_raw)

    # Env overrides
    if v := env.get("MF_NODE_VERSION"):
        cfg.node.node_version = v
        cfg.node.docker_image_tag = v
    if s := env.get("MF_MANAGED_SCOPE"):
        cfg.managed_scope = s
    if d := env.get("MF_LOG_DIR"):
        cfg.logging.log_dir = d
    if n := env.get("MF_NPM_BIN"):
        cfg.tools.npm = n

    return cfg
