"""
migration_factory - Dependency Migration Scripts

Specialized in major-version bumps of JavaScript projects:
- React 17→18 (package.json, npm-check-updates, peer dependency gate)
- Node 20→22 (engines, CI workflows, Dockerfiles, @types/node)

Each migration is a fixed sequence of steps. The only decision logic is the
compatibility gate (core/compat_gate.py), everything else is glue around
npm and the project files.
"""

__version__ = "1.0.0"
