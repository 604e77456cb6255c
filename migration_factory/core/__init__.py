"""
Core - manifest access, compatibility gate and migration plumbing
"""

from .compat_gate import (
    CompatibilityVerdict, Decision, GateScope, Verdict, classify, decide, run_gate,
)
from .errors import (
    CommandFailure, IncompatibilityAbort, MigrationError, MissingFile, RuntimeTooOld,
    UnparsableManifest,
)
from .inspector import PackageInspector, PeerRequirement
from .manifest import DependencyGroup, DependencyRecord, Manifest, load_manifest, save_manifest
from .pipeline import MigrationPipeline, Step
from .prompt import OperatorPrompt, ScriptedPrompt, is_affirmative

__all__ = [
    'CompatibilityVerdict', 'Decision', 'GateScope', 'Verdict', 'classify', 'decide', 'run_gate',
    'CommandFailure', 'IncompatibilityAbort', 'MigrationError', 'MissingFile', 'RuntimeTooOld',
    'UnparsableManifest',
    'PackageInspector', 'PeerRequirement',
    'DependencyGroup', 'DependencyRecord', 'Manifest', 'load_manifest', 'save_manifest',
    'MigrationPipeline', 'Step',
    'OperatorPrompt', 'ScriptedPrompt', 'is_affirmative',
]
