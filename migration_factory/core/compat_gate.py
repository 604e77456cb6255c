"""
Compatibility Gate

Decides whether a major-version bump of one or more anchor packages (react,
react-dom, ...) may proceed, given the peer requirements the installed
dependencies declare.

Version ranges are opaque strings. A range is a conflict when it contains the
literal "<old>." and does not contain "<new>" anywhere:

    "^17.0.0"              → conflict (old only)
    "^17.0.0 || ^18.0.0"   → fine (new present)
    ">=16.8"               → fine (old absent)

This is not a semver range solver: ">=17.0.0" is a conflict for 18 even
though it admits 18.x, and "^16.0.0 || 18" passes for 17 → 18.

One gate, parameterized by a GateScope; the React migration runs it once for
the managed scope and once for everything else.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from .inspector import PackageInspector, PeerRequirement
from .manifest import INSTALLED_GROUPS, Manifest
from .prompt import OperatorPrompt

_RANGE_OPERATORS = re.compile(r"^[\s^~>=<v]+")


class Verdict(Enum):
    COMPATIBLE = "compatible"
    INCOMPATIBLE = "incompatible"
    UNKNOWN = "unknown"


class Decision(Enum):
    PROCEED = "proceed"
    ABORT = "abort"


@dataclass
class CompatibilityVerdict:
    dependency: str
    verdict: Verdict
    conflicts: List[PeerRequirement] = field(default_factory=list)


@dataclass
class GateScope:
    """
    One gate invocation: which dependencies, which anchors, what to say.

    dependency_filter gets each dependency name declared in dependencies or
    devDependencies and keeps those to check.
    """
    label: str
    anchors: Sequence[str]
    dependency_filter: Callable[[str], bool]
    old_major: str
    new_major: str
    allow_list: Sequence[str] = ()
    issues_message: str = ""
    abort_message: str = ""
    proceed_message: str = ""
    ok_message: str = ""
    question: str = "Continue migration? (y/N): "


def requires_only_old_major(required_range: str, old_major: str, new_major: str) -> bool:
    return f"{old_major}." in required_range and new_major not in required_range


def declares_new_major(declared_range: Optional[str], new_major: str) -> bool:
    if not declared_range:
        return False
    return _RANGE_OPERATORS.sub("", declared_range).startswith(f"{new_major}.")


def classify(
    dependency_names: Iterable[str],
    anchors: Sequence[str],
    old_major: str,
    new_major: str,
    inspector: PackageInspector,
    manifest: Optional[Manifest] = None,
    allow_list: Sequence[str] = (),
) -> List[CompatibilityVerdict]:
    verdicts = []
    for name in dependency_names:
        if (
            manifest is not None
            and name in allow_list
            and any(
                declares_new_major(manifest.declared_range(name, (group,)), new_major)
                for group in INSTALLED_GROUPS
            )
        ):
            verdicts.append(CompatibilityVerdict(name, Verdict.COMPATIBLE))
            continue

        requirements = inspector.inspect(name)
        if requirements is None:
            verdicts.append(CompatibilityVerdict(name, Verdict.UNKNOWN))
            continue

        conflicts = [
            req for req in requirements
            if req.peer_name in anchors
            and requires_only_old_major(req.required_range, old_major, new_major)
        ]
        verdict = Verdict.INCOMPATIBLE if conflicts else Verdict.COMPATIBLE
        verdicts.append(CompatibilityVerdict(name, verdict, conflicts))
    return verdicts


def decide(verdicts: List[CompatibilityVerdict], prompt: OperatorPrompt, scope: GateScope, logger) -> Decision:
    unknown = [v.dependency for v in verdicts if v.verdict is Verdict.UNKNOWN]
    if unknown:
        logger.warn(f"No installed manifest for {len(unknown)} {scope.label} package(s), not checked: {', '.join(unknown)}")

    incompatible = [v for v in verdicts if v.verdict is Verdict.INCOMPATIBLE]
    if not incompatible:
        logger.success(scope.ok_message or f"All {scope.label} packages support the new major in their peerDependencies.")
        return Decision.PROCEED

    logger.warn(scope.issues_message or f"Some {scope.label} packages have incompatible peerDependencies:")
    for v in incompatible:
        for req in v.conflicts:
            logger.warn(f"  {req.owner_package}: peerDependency {req.peer_name}@{req.required_range}")

    if not prompt.confirm(scope.question):
        logger.error(scope.abort_message or f"Aborting migration due to incompatible {scope.label} peer dependencies.")
        return Decision.ABORT

    logger.warn(scope.proceed_message or f"Proceeding despite {scope.label} peer dependency issues, compatibility is not guaranteed.")
    return Decision.PROCEED


def run_gate(manifest: Manifest, inspector: PackageInspector, scope: GateScope, prompt: OperatorPrompt, logger) -> Decision:
    """Classify the scope's dependencies from `manifest` and decide."""
    names = [name for name in manifest.dependency_names() if scope.dependency_filter(name)]
    verdicts = classify(
        names, scope.anchors, scope.old_major, scope.new_major, inspector,
        manifest=manifest, allow_list=scope.allow_list,
    )
    return decide(verdicts, prompt, scope, logger)
