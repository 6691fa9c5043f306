"""``@inlineFile`` directive expansion for the Vue layout.

The layout pulls auxiliary files into the page line by line::

    <script>@inlineFile("/vue/js/app.js")</script>
    <script>@inlineFileDev("/vue/js/vue.js")</script>
    <script>@inlineFileNotDev("/vue/js/vue.min.js")</script>

Dev-only lines render only in development, not-dev lines only in
production. When the mode is still unknown both conditional flavors
render as an empty line.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from perch.errors import MalformedTemplateError
from perch.vue.paths import AssetFile

_NEWLINE_RE = re.compile(r"\r?\n")
_MARKER = "@inlineFile"


class Directive(Enum):
    """The three flavors of inline directive."""

    UNCONDITIONAL = "inlineFile"
    DEV_ONLY = "inlineFileDev"
    NOT_DEV_ONLY = "inlineFileNotDev"

    @property
    def pattern(self) -> re.Pattern[str]:
        return _PATTERNS[self]

    @classmethod
    def classify(cls, line: str) -> Directive:
        """Flavor of the directive on *line* (which must contain one)."""
        if _PATTERNS[cls.DEV_ONLY].search(line):
            return cls.DEV_ONLY
        if _PATTERNS[cls.NOT_DEV_ONLY].search(line):
            return cls.NOT_DEV_ONLY
        return cls.UNCONDITIONAL

    def includes(self, is_dev: bool | None) -> bool:
        """Whether the file is inlined for the given mode (``None`` = unknown)."""
        if self is Directive.DEV_ONLY:
            return is_dev is True
        if self is Directive.NOT_DEV_ONLY:
            return is_dev is False
        return True


_PATTERNS: dict[Directive, re.Pattern[str]] = {
    directive: re.compile(rf'@{directive.value}\(".*"\)') for directive in Directive
}


def inline_files(
    template: str,
    files: Iterable[AssetFile],
    *,
    is_dev: bool | None,
) -> str:
    """Replace every inline directive in *template* with the referenced file.

    Args:
        template: Layout text. ``\\r\\n`` and ``\\n`` line endings are both
            accepted; the result is joined with ``\\n``.
        files: Auxiliary (non-component) files the directives may reference.
        is_dev: Current mode, ``None`` if not yet determined.

    Raises:
        MalformedTemplateError: A directive names a key not among *files*.
    """
    by_key = {f'"{f.key}"': f for f in files}
    contents: dict[str, str] = {}

    def content_of(key: str) -> str:
        if key not in contents:
            contents[key] = by_key[key].read_text()
        return contents[key]

    lines: list[str] = []
    for line in _NEWLINE_RE.split(template):
        if _MARKER not in line:
            lines.append(line)
            continue
        key = next((k for k in by_key if k in line), None)
        if key is None:
            raise MalformedTemplateError(line)
        directive = Directive.classify(line)
        if not directive.includes(is_dev):
            lines.append("")
            continue
        text = content_of(key)
        lines.append(directive.pattern.sub(lambda _m: text, line))
    return "\n".join(lines)
