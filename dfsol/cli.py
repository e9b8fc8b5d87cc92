"""df-sol command line interface.

Usage::

    dfsol init my-app
    dfsol init my-app --template counter --test-template jest --javascript
    python -m dfsol init my-app --no-install --no-git
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from dfsol import __version__
from dfsol.config import Config
from dfsol.errors import DfSolError
from dfsol.scaffolder import InitOptions, Language, ProgramTemplate, TestTemplate, WorkspaceInitializer
from dfsol.utils import print_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dfsol",
        description="df-sol -- Anchor workspace scaffolder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  dfsol init my-app\n"
            "  dfsol init my-app -t counter --test-template jest\n"
            "  dfsol init my-app --javascript --no-install --no-git\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init", help="Initialize a workspace")
    init.add_argument("name", help="Workspace name")
    init.add_argument(
        "--javascript", "-j",
        action="store_true",
        help="Use JavaScript instead of TypeScript",
    )
    init.add_argument(
        "--no-install",
        action="store_true",
        help="Don't install JavaScript dependencies",
    )
    init.add_argument("--no-git", action="store_true", help="Don't initialize git")
    init.add_argument(
        "--template", "-t",
        choices=[t.value for t in ProgramTemplate],
        default=ProgramTemplate.BASIC.value,
        help="Rust program template to use (default: basic)",
    )
    init.add_argument(
        "--test-template",
        choices=[t.value for t in TestTemplate],
        default=TestTemplate.MOCHA.value,
        help="Test template to use (default: mocha)",
    )
    init.add_argument(
        "--force",
        action="store_true",
        help="Initialize even if the directory already exists",
    )
    init.add_argument(
        "--output", "-o",
        default=None,
        help="Directory to create the workspace in (default: current directory)",
    )
    init.add_argument(
        "--license",
        default=None,
        help="License for package.json (default: npm's init-license)",
    )
    init.add_argument(
        "--anchor-version",
        default=None,
        help="Anchor version written into manifests",
    )
    init.add_argument(
        "--probe-anchor-version",
        action="store_true",
        help="Use the version reported by the installed anchor CLI",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Layer command-line overrides on top of environment configuration."""
    config = Config.from_env()
    if args.output:
        config.output_dir = Path(args.output)
    if args.license:
        config.license = args.license
    if args.anchor_version:
        config.anchor_version = args.anchor_version
    if args.probe_anchor_version:
        config.probe_anchor_version = True
    return config


def options_from_args(args: argparse.Namespace) -> InitOptions:
    return InitOptions(
        name=args.name,
        language=Language.JAVASCRIPT if args.javascript else Language.TYPESCRIPT,
        program_template=ProgramTemplate(args.template),
        test_template=TestTemplate(args.test_template),
        no_install=args.no_install,
        no_git=args.no_git,
        force=args.force,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``dfsol`` and ``python -m dfsol``."""
    args = build_parser().parse_args(argv)

    if args.command == "init":
        initializer = WorkspaceInitializer(config_from_args(args))
        try:
            asyncio.run(initializer.init(options_from_args(args)))
        except DfSolError as exc:
            print_error(f"Error: {exc}")
            sys.exit(1)


if __name__ == "__main__":
    main()
