"""Server state handed to the client page.

Path and query parameters travel as HTML-escaped JSON inside JavaScript
template literals and are decoded back into objects by a second script
once the page loads. The page state is emitted as a plain JSON object
literal.

The escaping is two-layered:

1. ``html_escape`` replaces the six characters that could break out of
   the surrounding markup (``< > & " ' /``). The client decodes them with
   a scratch ``<textarea>``.
2. ``escape_template_literal`` protects the text from the template
   literal it is embedded in (backslashes, backticks, ``${`` and ``@``).

Decoding both layers yields the original JSON text byte for byte.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from kida import Environment

JsonEncoder = Callable[[Any], str]

_HTML_ESCAPES = str.maketrans(
    {
        "<": "&lt;",
        ">": "&gt;",
        "&": "&amp;",
        '"': "&quot;",
        "'": "&#x27;",
        "/": "&#x2F;",
    }
)

# Values are escaped before rendering, so autoescape stays off.
_env = Environment(autoescape=False)

_STATE_TEMPLATE = _env.from_string(
    """
<script>
    {{ namespace }} = {
        pathParams: `{{ path_params }}`,
        queryParams: `{{ query_params }}`,
        state: {{ state }}
    }
</script>
"""
)

_DECODE_TEMPLATE = _env.from_string(
    """
<script>
    function ____decode(string) { // used for decoding HTML encoded params
        let textArea = document.createElement("textarea");
        textArea.innerHTML = string;
        return textArea.value;
    }
    ["queryParams", "pathParams"].forEach((key) => {
        {{ namespace }}[key] = JSON.parse(____decode({{ namespace }}[key]));
    });
</script>
"""
)


def html_escape(text: str) -> str:
    """Escape exactly ``< > & " ' /``; every other character is kept."""
    return text.translate(_HTML_ESCAPES)


def escape_template_literal(text: str) -> str:
    """Make *text* evaluate to itself inside a JavaScript template literal.

    ``@`` is emitted as ``\\@`` (still ``@`` once evaluated) so the
    payload never contains a layout placeholder that a later
    substitution could rewrite.
    """
    return (
        text.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("${", "\\${")
        .replace("@", "\\@")
    )


def escape_params(params: Mapping[str, Any], encode: JsonEncoder = json.dumps) -> str:
    """JSON-encode *params* for embedding in a template literal."""
    return escape_template_literal(html_escape(encode(params)))


def encode_state(state: Any, encode: JsonEncoder = json.dumps) -> str:
    """JSON-encode the page state as a script-level object literal.

    Two rewrites keep the same JSON value: ``</`` becomes ``<\\/`` so a
    string cannot close the surrounding script element, and ``@``
    becomes ``\\u0040`` so a string cannot contain a layout placeholder.
    """
    return encode(state).replace("</", "<\\/").replace("@", "\\u0040")


def render_state(
    path_params: Mapping[str, str],
    query_params: Mapping[str, list[str]],
    state: Any,
    *,
    namespace: str = "Vue.prototype.$perch",
    encode: JsonEncoder = json.dumps,
) -> str:
    """Both script blocks: the assignment onto *namespace*, then the decoder."""
    assignment = _STATE_TEMPLATE.render(
        namespace=namespace,
        path_params=escape_params(path_params, encode),
        query_params=escape_params(query_params, encode),
        state=encode_state(state, encode),
    )
    decoder = _DECODE_TEMPLATE.render(namespace=namespace)
    return assignment + decoder
