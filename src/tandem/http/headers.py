"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]``. Both adapters build one: the local
adapter from ASGI byte pairs, the serverless adapter from the gateway's
already-parsed header dicts.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header (e.g. repeated ``Accept``).
    Keys are reported lower-cased.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        object.__setattr__(
            self, "_pairs", tuple((name.lower(), value) for name, value in pairs)
        )

    @classmethod
    def from_asgi(cls, raw: Iterable[tuple[bytes, bytes]]) -> Headers:
        """Decode ASGI ``(name, value)`` byte pairs (latin-1, per RFC 9110)."""
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    @classmethod
    def from_mapping(
        cls,
        single: Mapping[str, str | None] | None = None,
        multi: Mapping[str, Sequence[str] | None] | None = None,
    ) -> Headers:
        """Build from gateway-style dicts.

        *multi* (``multiValueHeaders``) wins when both carry a key, because it
        holds every value where *single* only keeps the last one.
        """
        pairs: list[tuple[str, str]] = []
        seen: set[str] = set()
        for name, values in (multi or {}).items():
            if not values:
                continue
            seen.add(name.lower())
            pairs.extend((name, value) for value in values)
        for name, value in (single or {}).items():
            if value is None or name.lower() in seen:
                continue
            pairs.append((name, value))
        return cls(pairs)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._pairs:
            if name == key_lower:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name == key_lower for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._pairs:
            if name not in seen:
                seen.add(name)
                yield name

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower()
        return [value for name, value in self._pairs if name == key_lower]
