"""``perch check`` — validate a Vue root before deploying it.

Walks the root, inlines the layout in both modes so every
``@inlineFile*`` directive must resolve, and lists the registered
components. Exits with code 1 on the first error.
"""

import argparse
import sys
from typing import NoReturn

from perch.config import VueConfig
from perch.errors import ConfigurationError, MalformedTemplateError
from perch.vue.inliner import inline_files
from perch.vue.resolver import VueDependencyResolver
from perch.vue.runtime import walk_config_root


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1)


def run_check(args: argparse.Namespace, config: VueConfig | None = None) -> None:
    """Validate the Vue root at ``args.root``."""
    config = config or VueConfig()
    try:
        files = walk_config_root(args.root, config)
    except ConfigurationError as exc:
        _fail(str(exc))

    layout = files.find(config.layout_file)
    if layout is None:
        _fail(f"no {config.layout_file} under {args.root}")

    template = layout.read_text()
    for is_dev in (True, False):
        try:
            inline_files(template, files.auxiliary_files(), is_dev=is_dev)
        except MalformedTemplateError as exc:
            _fail(f"{layout.key}: {exc}")

    resolver = VueDependencyResolver(files)
    print(f"{len(files)} files, {len(resolver.components)} components")
    for cid in resolver.components:
        print(f"  {cid} ({len(resolver.dependencies(cid))} files)")
    print("OK")
