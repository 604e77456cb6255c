"""
Node 20 → 22 migration

Steps:
1. Verify the local Node.js runtime is at least the target major
2. Set engines.node in package.json
3. Update node_version in GitHub Actions workflows
4. Update @types/node when it is a devDependency
5. npm install
6. Optionally update managed-scope dependencies (operator prompt)
7. Update Node.js base images in Dockerfiles (operator confirms review)
"""

import re
from pathlib import Path
from typing import Callable, List

from ..config import MigrationConfig
from ..core import shell
from ..core.errors import CommandFailure, RuntimeTooOld
from ..core.file_scan import find_dockerfiles, find_workflow_files
from ..core.manifest import DependencyGroup, load_manifest, save_manifest
from ..core.pipeline import MigrationPipeline, PipelineResult, Step
from ..core.prompt import OperatorPrompt
from ..core.rewriters import rewrite_dockerfile, rewrite_workflow
from ..log import get_logger

_NODE_VERSION = re.compile(r"^v?(\d+)\.")


def parse_major(version: str) -> int:
    """'v22.3.0' → 22."""
    m = _NODE_VERSION.match(version.strip())
    if not m:
        raise ValueError(f"Unrecognized Node.js version: {version!r}")
    return int(m.group(1))


class NodeMigration:
    """
    Usage:
        migration = NodeMigration('/path/to/project', load_config('/path/to/project'))
        migration.run()
    """

    def __init__(
        self,
        project_dir,
        config: MigrationConfig,
        prompt: OperatorPrompt = None,
        runner: Callable = None,
        capture: Callable = None,
        echo: Callable[[str], None] = print,
        logger=None,
    ):
        self.project_dir = Path(project_dir)
        self.config = config
        self.node = config.node
        self.prompt = prompt or OperatorPrompt()
        self.runner = runner or shell.run_command
        self.capture = capture or shell.capture_command
        self.echo = echo
        self.logger = logger or get_logger("node22", self.project_dir.name)

    @property
    def manifest_path(self) -> Path:
        return self.project_dir / "package.json"

    def _run(self, args: List[str]):
        try:
            self.runner(args, cwd=str(self.project_dir))
        except CommandFailure as e:
            self.logger.error(str(e))
            raise

    # ── Steps ──

    def verify_runtime(self):
        found = self.capture([self.config.tools.node, "--version"], cwd=str(self.project_dir))
        try:
            major = parse_major(found)
        except ValueError:
            raise RuntimeTooOld(found, self.node.node_version)
        if major < int(self.node.node_version):
            raise RuntimeTooOld(found, self.node.node_version)
        self.logger.info(f"Node.js version {found} is compatible.")

    def update_engines(self):
        manifest = load_manifest(self.manifest_path)
        engines = manifest.data.get("engines")
        if not isinstance(engines, dict):
            engines = manifest.data["engines"] = {}
        engines["node"] = f">={self.node.node_version}"
        save_manifest(manifest)
        self.logger.success(f"Node.js version updated to >={self.node.node_version} in package.json")

    def update_workflows(self):
        workflow_files = find_workflow_files(self.project_dir / self.node.workflows_dir, self.node.ignored_folders)
        if not workflow_files:
            self.logger.info("No GitHub Actions YAML files found. Skipping update.")
            return
        for path in workflow_files:
            rel = path.relative_to(self.project_dir)
            self.logger.info(f"Checking workflow file: {rel}")
            if rewrite_workflow(path, self.node.old_version, self.node.node_version):
                self.logger.success(f"Node.js version updated to {self.node.node_version} in {rel}")
            else:
                self.logger.info(f"No 'node_version' change required in {rel}.")

    def update_types_node(self):
        self.logger.info("Checking @types/node installation...")
        manifest = load_manifest(self.manifest_path)
        current = manifest.group(DependencyGroup.DEV).get("@types/node")
        if not current:
            self.logger.info("@types/node is not installed. Skipping update.")
            return
        version = self.node.node_version
        self.logger.info(f"@types/node is installed. Current version: {current}")
        self.logger.info(f"Updating @types/node to version {version}...")
        self._run([self.config.tools.npm, "install", "--save-dev", f"@types/node@{version}"])
        self.logger.success(f"@types/node updated to version {version}.")

    def install_dependencies(self):
        self.logger.info("Installing dependencies...")
        self._run([self.config.tools.npm, "install"])

    def update_managed_deps(self):
        scope = self.config.managed_scope.rstrip("/")
        if not self.prompt.confirm(f"Do you want to update the {scope} dependency using ncu? (yes/no): "):
            self.logger.info(f"Skipping {scope} dependency update.")
            return
        self.logger.info(f"Updating {scope} dependency...")
        tools = self.config.tools
        self._run([tools.npx, "npm-check-updates", shell.ncu_scope_filter(self.config.managed_scope), "-u"])
        self._run([tools.npm, "install"])
        self.logger.success(f"{scope} dependency updated successfully!")

    def update_dockerfiles(self):
        dockerfiles = find_dockerfiles(self.project_dir / self.node.dockerfile_dir, self.node.ignored_folders)
        if not dockerfiles:
            self.logger.info("No Dockerfiles found in the project.")
            return
        tag = self.node.docker_image_tag
        for path in dockerfiles:
            rel = path.relative_to(self.project_dir)
            self.logger.info(f"Checking Dockerfile: {rel}")
            if rewrite_dockerfile(path, self.node.old_version, self.node.base_image, tag):
                self.logger.success(f"Updated Node.js image in {rel} to {tag}")
            else:
                self.logger.info(f"No changes needed in {rel}.")

        if self.prompt.confirm("Please check the Dockerfiles to verify the updates. Have you done that? (yes/no): "):
            self.logger.success("Dockerfiles checked and updated successfully.")
        else:
            self.logger.error("Please verify the Dockerfiles manually.")

    # ── Pipeline ──

    def steps(self) -> List[Step]:
        version = self.node.node_version
        scope = self.config.managed_scope.rstrip("/")
        return [
            Step("Verify Node.js version compatibility", self.verify_runtime),
            Step("Update Node.js version in package.json", self.update_engines),
            Step("Update Node.js version in GitHub Actions workflows", self.update_workflows),
            Step("Update @types/node", self.update_types_node),
            Step("Install dependencies (npm install)", self.install_dependencies),
            Step(f"Update {scope} dependencies", self.update_managed_deps),
            Step(f"Update Dockerfiles to Node.js {version}", self.update_dockerfiles),
        ]

    def run(self) -> PipelineResult:
        pipeline = MigrationPipeline(f"Node.js {self.node.node_version} migration", self.steps(),
                                     logger=self.logger, echo=self.echo)
        result = pipeline.run()
        self.logger.success(f"Migration to Node.js {self.node.node_version} completed successfully!")
        return result
