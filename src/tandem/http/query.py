"""Immutable query string parameters.

Implements ``Mapping[str, str]``: each key collapses to its first value,
``get_list`` keeps the rest.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> list of values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", {k: list(v) for k, v in (data or {}).items()})

    @classmethod
    def from_string(cls, query_string: str | bytes) -> QueryParams:
        """Parse a raw query string (``a=1&b=2``)."""
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        return cls(parse_qs(query_string, keep_blank_values=True))

    @classmethod
    def from_mapping(
        cls,
        single: Mapping[str, str | None] | None = None,
        multi: Mapping[str, Sequence[str] | None] | None = None,
    ) -> QueryParams:
        """Build from gateway-style ``queryStringParameters`` dicts."""
        data: dict[str, list[str]] = {}
        for key, values in (multi or {}).items():
            if values:
                data[key] = list(values)
        for key, value in (single or {}).items():
            if key not in data:
                data[key] = ["" if value is None else value]
        return cls(data)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return value as int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default
