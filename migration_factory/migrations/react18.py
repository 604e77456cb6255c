"""
React 17 → 18 migration

Steps:
1. Check ncu (npm-check-updates)
2. Update core React dependencies in package.json
3. Update managed-scope dependencies with ncu
4. Sync managed-scope peerDependencies to the installed versions
5. Gate: managed-scope peerDependencies
6. Gate: every other dependency's peerDependencies
7. npm install
8. Success banner (no commit is made)
"""

from pathlib import Path
from typing import Callable, List

from ..config import MigrationConfig
from ..core import shell
from ..core.compat_gate import Decision, GateScope, run_gate
from ..core.errors import CommandFailure, IncompatibilityAbort
from ..core.inspector import PackageInspector
from ..core.manifest import DependencyGroup, load_manifest, save_manifest
from ..core.pipeline import MigrationPipeline, PipelineResult, Step, box
from ..core.prompt import OperatorPrompt
from ..log import get_logger

NOT_READY_NOTE = (
    "NOTE: This project is not ready for React {new} until all leaf dependencies "
    "(the lowest-level packages in your dependency tree) are updated to support React {new}. "
    "Please work on above library before.\n"
)


class ReactMigration:
    """
    Usage:
        migration = ReactMigration('/path/to/project', load_config('/path/to/project'))
        migration.run()
        # → PipelineResult(title='React 18 migration', completed=[...])
    """

    def __init__(
        self,
        project_dir,
        config: MigrationConfig,
        prompt: OperatorPrompt = None,
        runner: Callable = None,
        echo: Callable[[str], None] = print,
        banner: Callable[[str], None] = print,
        logger=None,
    ):
        self.project_dir = Path(project_dir)
        self.config = config
        self.react = config.react
        self.prompt = prompt or OperatorPrompt()
        self.runner = runner or shell.run_command
        self.echo = echo
        self.banner = banner
        self.logger = logger or get_logger("react18", self.project_dir.name)
        self.inspector = PackageInspector(self.project_dir / "node_modules")

    @property
    def manifest_path(self) -> Path:
        return self.project_dir / "package.json"

    def _is_managed(self, name: str) -> bool:
        return name.startswith(self.config.managed_scope)

    def _run(self, args: List[str]):
        self.runner(args, cwd=str(self.project_dir))

    # ── Steps ──

    def ensure_ncu(self):
        tools = self.config.tools
        shell.ensure_ncu(tools.ncu, tools.npm, cwd=str(self.project_dir), runner=self.runner)

    def update_core_deps(self):
        manifest = load_manifest(self.manifest_path)
        for name, version in self.react.target_versions.items():
            if manifest.set_version(name, version):
                self.logger.info(f"Updated {name} → {version}")
        save_manifest(manifest)
        self.logger.success("package.json updated.")

    def update_managed_deps(self):
        scope = self.config.managed_scope
        self.logger.info(f"Updating {scope}* dependencies using ncu...")
        try:
            self._run([self.config.tools.ncu, shell.ncu_scope_filter(scope), "-u"])
        except CommandFailure:
            # Not fatal
            self.logger.error(f"Failed to update {scope}* dependencies using ncu.")
            return
        self.logger.success(f"{scope}* dependencies updated to latest.")

    def sync_managed_peer_deps(self):
        manifest = load_manifest(self.manifest_path)
        peers = manifest.ensure_group(DependencyGroup.PEER)
        for name in manifest.dependency_names():
            if self._is_managed(name) and peers.get(name):
                # devDependencies win over dependencies
                version = manifest.declared_range(name, (DependencyGroup.DEV, DependencyGroup.RUNTIME))
                peers[name] = version
                self.logger.info(f"Synced peerDependency {name} → {version}")
        save_manifest(manifest)
        self.logger.success("package.json updated.")

    def managed_scope(self) -> GateScope:
        scope = self.config.managed_scope
        return GateScope(
            label=f"{scope}*",
            anchors=self.react.managed_anchors,
            dependency_filter=self._is_managed,
            old_major=self.react.old_major,
            new_major=self.react.new_major,
            issues_message=(
                f"Some {scope}* packages still require React {self.react.old_major} "
                "and may cause peer dependency issues:"
            ),
            abort_message=f"Aborting migration due to incompatible {scope}* peer dependencies.",
            proceed_message=f"Proceeding with forced install despite {scope}* peer dependency issues.",
            ok_message=f"All {scope}* packages support React {self.react.new_major} in their peerDependencies.",
            question=self._question(),
        )

    def other_scope(self) -> GateScope:
        scope = self.config.managed_scope
        core = list(self.react.core_packages)
        return GateScope(
            label=f"non-{scope.rstrip('/')}",
            anchors=core,
            dependency_filter=lambda name: not self._is_managed(name) and name not in core,
            old_major=self.react.old_major,
            new_major=self.react.new_major,
            allow_list=self.react.ignore_warnings_for,
            issues_message=(
                f"The following package(s) need to be updated to a version that supports "
                f"React {self.react.new_major}. Please upgrade them in the next step to ensure compatibility."
            ),
            abort_message="Aborting migration due to incompatible peer dependencies.",
            proceed_message="Proceeding with forced install despite peer dependency issues.",
            ok_message=(
                f"All non-{scope.rstrip('/')} dependencies support React {self.react.new_major} "
                "in their peerDependencies."
            ),
            question=self._question(),
        )

    def _question(self) -> str:
        target = self.react.target_versions.get("react", self.react.new_major).lstrip("^~")
        return (
            NOT_READY_NOTE.format(new=self.react.new_major)
            + f"Some packages may not support React {target}. Continue migration? (y/N): "
        )

    def gate(self, scope: GateScope):
        # Fresh read: earlier steps rewrote package.json
        manifest = load_manifest(self.manifest_path)
        if run_gate(manifest, self.inspector, scope, self.prompt, self.logger) is Decision.ABORT:
            raise IncompatibilityAbort(f"Migration halted at the {scope.label} peer dependency check.")

    def npm_install(self):
        self.logger.info("Running npm install...")
        try:
            self._run([self.config.tools.npm, "install"])
        except CommandFailure:
            self.logger.error("npm install failed.")
            raise

    def print_success(self):
        self.logger.success(
            f"🎉 React {self.react.new_major} migration complete. "
            "All core and checked dependencies are now compatible or force-installed."
        )
        self.banner(
            "\n" + box("No commit will be made by this script. "
                        "Please review the changes and commit them manually.")
        )

    # ── Pipeline ──

    def steps(self) -> List[Step]:
        scope = self.config.managed_scope
        old = self.react.old_major
        return [
            Step("Check ncu (npm-check-updates)", self.ensure_ncu),
            Step("Update core React dependencies", self.update_core_deps),
            Step(f"Update {scope}* dependencies", self.update_managed_deps),
            Step(f"Sync {scope}* peerDependencies to installed versions", self.sync_managed_peer_deps),
            Step(f"Check {scope}* peerDependencies for React {old}", lambda: self.gate(self.managed_scope())),
            Step(f"Check non-{scope.rstrip('/')} peerDependencies for React {old}",
                 lambda: self.gate(self.other_scope())),
            Step("Install dependencies (npm install)", self.npm_install),
            Step("Migration Complete", self.print_success),
        ]

    def run(self) -> PipelineResult:
        self.logger.info(f"🔁 Starting React {self.react.new_major} migration script...")
        # package.json must exist before ncu runs
        load_manifest(self.manifest_path)
        pipeline = MigrationPipeline(f"React {self.react.new_major} migration", self.steps(),
                                     logger=self.logger, echo=self.echo)
        return pipeline.run()