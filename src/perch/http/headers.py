"""Case-insensitive HTTP headers.

Implements ``MutableMapping[str, str]``. Keeps insertion order and the
original spelling of each name for output; lookups ignore case.
"""

from collections.abc import Iterable, Iterator, MutableMapping


class MutableHeaders(MutableMapping[str, str]):
    """Case-insensitive, ordered header mapping.

    ``__getitem__`` returns the first matching value.
    ``__setitem__`` replaces every value for the name.
    ``add`` appends another value (e.g. multiple ``Set-Cookie``).
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._items: list[tuple[str, str]] = [(str(k), str(v)) for k, v in items]

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._items:
            if name.lower() == key_lower:
                return value
        raise KeyError(key)

    def __setitem__(self, key: str, value: str) -> None:
        key_lower = key.lower()
        kept = [(n, v) for n, v in self._items if n.lower() != key_lower]
        kept.append((key, str(value)))
        self._items = kept

    def __delitem__(self, key: str) -> None:
        key_lower = key.lower()
        kept = [(n, v) for n, v in self._items if n.lower() != key_lower]
        if len(kept) == len(self._items):
            raise KeyError(key)
        self._items = kept

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name.lower() == key_lower for name, _ in self._items)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._items:
            key = name.lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"MutableHeaders({{{items}}})"

    def add(self, key: str, value: str) -> None:
        """Append a value without replacing existing ones."""
        self._items.append((key, str(value)))

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower()
        return [value for name, value in self._items if name.lower() == key_lower]

    def items_raw(self) -> list[tuple[str, str]]:
        """All ``(name, value)`` pairs in insertion order, names as given."""
        return list(self._items)
