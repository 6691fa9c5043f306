"""Perch CLI — Vue root validation and dependency inspection.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — server-rendered Vue component pages.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch check ------------------------------------------------------
    check_parser = subparsers.add_parser(
        "check", help="Validate a Vue root: layout, inline directives, components"
    )
    check_parser.add_argument("root", help="Vue root directory (e.g. src/myapp/vue)")

    # -- perch deps -------------------------------------------------------
    deps_parser = subparsers.add_parser("deps", help="List the files a component needs")
    deps_parser.add_argument("root", help="Vue root directory")
    deps_parser.add_argument("component", help="Component id (e.g. user-profile)")
    deps_parser.add_argument(
        "--all",
        action="store_true",
        help="List every component file (unoptimized bundle)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from perch.cli._check import run_check

        run_check(args)
    elif args.command == "deps":
        from perch.cli._deps import run_deps

        run_deps(args)
