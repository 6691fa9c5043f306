"""Query string parameters.

Implements ``Mapping[str, str]`` over the first value of each name;
``to_dict`` keeps every value, which is the shape serialized into the
page as ``queryParams``.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Immutable multi-valued query parameters."""

    __slots__ = ("_data",)

    def __init__(self, query_string: bytes = b"") -> None:
        self._data: dict[str, list[str]] = parse_qs(
            query_string.decode("latin-1"), keep_blank_values=True
        )

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def to_dict(self) -> dict[str, list[str]]:
        """Return a fresh ``{name: [values...]}`` copy of every parameter."""
        return {key: list(values) for key, values in self._data.items()}
