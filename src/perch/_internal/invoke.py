"""Call sync or async handlers uniformly.

``VueComponent`` handlers are synchronous (small file reads); routes added
with ``App.route`` may be either.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
