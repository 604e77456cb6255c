#!/usr/bin/env python3
"""mf: Migration Factory CLI.

Runs one of the fixed migration sequences against a JavaScript project.

Usage:
    mf react18                      React 17 → 18 in the current directory
    mf node22                       Node 20 → 22 in the current directory
    mf -C ../my-app react18         Run against another project directory
    migrate-react18 / migrate-node22 are shortcuts for the above
"""

import argparse
import logging
import sys
from pathlib import Path

from cli import _output as out
from migration_factory import __version__
from migration_factory import log as mf_log
from migration_factory.config import load_config
from migration_factory.core.errors import MigrationError
from migration_factory.core.prompt import OperatorPrompt
from migration_factory.migrations import NodeMigration, ReactMigration


# ── Command handlers ──


def _prepare(args):
    project_dir = Path(args.project_dir).resolve()
    if not project_dir.is_dir():
        raise MigrationError(f"Project directory not found: {project_dir}")
    cfg = load_config(project_dir)
    mf_log.configure(log_dir=cfg.logging.log_dir, color=not out.NO_COLOR)
    return project_dir, cfg


def _console_level(args, cfg) -> int:
    if getattr(args, "verbose", False):
        return logging.DEBUG
    return logging.DEBUG if cfg.logging.level.upper() == "DEBUG" else logging.INFO


def cmd_react18(args):
    project_dir, cfg = _prepare(args)
    mf_log.set_console_level(_console_level(args, cfg))
    migration = ReactMigration(
        project_dir, cfg, prompt=OperatorPrompt(), echo=out.step, banner=out.banner,
    )
    migration.run()


def cmd_node22(args):
    project_dir, cfg = _prepare(args)
    mf_log.set_console_level(_console_level(args, cfg))
    migration = NodeMigration(project_dir, cfg, prompt=OperatorPrompt(), echo=out.step)
    migration.run()


# ── Parser ──


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mf",
        description="Migration Factory: bump React / Node.js major versions in a JavaScript project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mf react18                                   React 17 → 18
  mf node22                                    Node.js 20 → 22
  mf -C ../frontend react18                    Run in another directory
""",
    )

    # Global flags
    p.add_argument("-C", "--project-dir", dest="project_dir", default=".",
                   help="Project directory containing package.json")
    p.add_argument("--no-color", action="store_true", help="Disable colors")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = p.add_subparsers(dest="command", help="Migration")

    sub.add_parser("react18", help="Migrate React 17 → 18").set_defaults(func=cmd_react18)
    sub.add_parser("node22", help="Migrate Node.js 20 → 22").set_defaults(func=cmd_node22)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "no_color", False):
        out.NO_COLOR = True

    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        sys.exit(0)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print()
        sys.exit(130)
    except MigrationError as e:
        if getattr(args, "verbose", False):
            import traceback

            traceback.print_exc()
        else:
            out.error(str(e))
        sys.exit(e.exit_code)


def main_react18():
    main([*sys.argv[1:], "react18"])


def main_node22():
    main([*sys.argv[1:], "node22"])


if __name__ == "__main__":
    main()
