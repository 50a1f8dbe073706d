"""Case-insensitive, multi-valued header mapping."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, MutableMapping, Union

HeaderPairs = tuple[tuple[str, str], ...]
HeadersInit = Union["Headers", Mapping[str, str], Iterable[tuple[str, str]], None]


class Headers(MutableMapping[str, str]):
    """Mutable header collection keyed by lower-cased field names.

    Values added under the same name are kept in insertion order. Item access
    joins them with ``", "`` the way HTTP folds repeated fields; use
    :meth:`get_all` to read them individually.
    """

    __slots__ = ("_items",)

    def __init__(self, init: HeadersInit = None) -> None:
        self._items: list[tuple[str, str]] = []
        if init is None:
            return
        if isinstance(init, Headers):
            self._items = list(init._items)
            return
        pairs = init.items() if isinstance(init, Mapping) else init
        for name, value in pairs:
            self.add(name, value)

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().lower()

    def add(self, name: str, value: str) -> None:
        """Append ``value`` for ``name`` without replacing existing values."""

        self._items.append((self._normalize(name), str(value)))

    def get_all(self, name: str) -> list[str]:
        key = self._normalize(name)
        return [value for item_name, value in self._items if item_name == key]

    def raw(self) -> HeaderPairs:
        """Return every ``(name, value)`` pair in insertion order."""

        return tuple(self._items)

    def copy(self) -> "Headers":
        return Headers(self)

    def __getitem__(self, name: str) -> str:
        values = self.get_all(name)
        if not values:
            raise KeyError(name)
        return ", ".join(values)

    def __setitem__(self, name: str, value: str) -> None:
        key = self._normalize(name)
        replaced = False
        items: list[tuple[str, str]] = []
        for item_name, item_value in self._items:
            if item_name != key:
                items.append((item_name, item_value))
            elif not replaced:
                items.append((key, str(value)))
                replaced = True
        if not replaced:
            items.append((key, str(value)))
        self._items = items

    def __delitem__(self, name: str) -> None:
        key = self._normalize(name)
        remaining = [item for item in self._items if item[0] != key]
        if len(remaining) == len(self._items):
            raise KeyError(name)
        self._items = remaining

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        key = self._normalize(name)
        return any(item_name == key for item_name, _ in self._items)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._items:
            if name not in seen:
                seen.add(name)
                yield name

    def __len__(self) -> int:
        return len({name for name, _ in self._items})

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return sorted(self._items) == sorted(other._items)
        if isinstance(other, Mapping):
            return dict(self.items()) == {self._normalize(k): v for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        return f"Headers({list(self._items)!r})"


__all__ = ["HeaderPairs", "Headers", "HeadersInit"]
