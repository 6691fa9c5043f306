"""``perch deps`` — print the component files a route component pulls in."""

import argparse
import sys

from perch.config import VueConfig
from perch.errors import ConfigurationError
from perch.vue.resolver import VueDependencyResolver
from perch.vue.runtime import walk_config_root


def run_deps(args: argparse.Namespace, config: VueConfig | None = None) -> None:
    """Print one dependency key per line, dependencies first."""
    config = config or VueConfig()
    try:
        files = walk_config_root(args.root, config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    resolver = VueDependencyResolver(files)
    if args.component not in resolver.components:
        print(f"Error: component {args.component!r} not found", file=sys.stderr)
        raise SystemExit(1)

    needed = files.component_files() if args.all else resolver.dependencies(args.component)
    for file in needed:
        print(file.key)
