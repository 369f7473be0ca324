"""Output containers and the insertion policies that fill them.

The extraction loop is shared; what differs between the three container
kinds is how a (key, value) pair is inserted and what is returned at the
end. Each kind is one small accumulator class behind the
``InsertionPolicy`` protocol:

- ``ORDERED`` — ``SortedUniquePolicy``: unique keys, last write wins,
  result iterates in sorted key order.
- ``HASH`` — ``HashUniquePolicy``: unique keys, last write wins, plain
  ``dict``.
- ``MULTI`` — ``AppendAllPolicy``: every pair kept, returned as an
  immutable ``MultiDict``.
"""

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any, Protocol

from kvsplit.errors import UnsupportedType


class ContainerKind(Enum):
    """The closed set of output container kinds."""

    ORDERED = "ordered"
    HASH = "hash"
    MULTI = "multi"

    @classmethod
    def coerce(cls, value: "ContainerKind | str") -> "ContainerKind":
        """Accept a member or its string value; anything else is unsupported."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        msg = f"unsupported container kind {value!r}; expected one of {[k.value for k in cls]}"
        raise UnsupportedType(msg)


class MultiDict[T: (str, bytes)](Mapping[T, T]):
    """Immutable mapping that keeps every (key, value) pair in input order.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a key.
    Iteration, ``len()``, ``keys()``, ``values()`` and ``items()`` all
    count every pair, duplicates included.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[T, T], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: T) -> T:
        for name, value in self._raw:
            if name == key:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self._raw)

    def __iter__(self) -> Iterator[T]:
        for name, _ in self._raw:
            yield name

    def __len__(self) -> int:
        return len(self._raw)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MultiDict):
            return self._raw == other._raw
        return NotImplemented

    def __repr__(self) -> str:
        items = ", ".join(f"({k!r}, {v!r})" for k, v in self._raw)
        return f"MultiDict([{items}])"

    def get(self, key: T, default: Any = None) -> T | Any:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: T) -> list[T]:
        """Return all values for *key*, in input order."""
        return [value for name, value in self._raw if name == key]

    def keys(self) -> list[T]:  # type: ignore[override]
        return [name for name, _ in self._raw]

    def values(self) -> list[T]:  # type: ignore[override]
        return [value for _, value in self._raw]

    def items(self) -> list[tuple[T, T]]:  # type: ignore[override]
        return list(self._raw)

    def to_dict(self) -> dict[T, list[T]]:
        """Group values by key: ``{key: [value, ...]}``, keys in first-seen order."""
        grouped: dict[T, list[T]] = {}
        for name, value in self._raw:
            grouped.setdefault(name, []).append(value)
        return grouped

    @property
    def raw(self) -> tuple[tuple[T, T], ...]:
        """Access the underlying pairs."""
        return self._raw


# -- Insertion policies --


class InsertionPolicy[T: (str, bytes)](Protocol):
    """Accumulates extracted pairs for one call and produces the result."""

    def insert(self, key: T, value: T) -> None: ...
    def result(self) -> Mapping[T, T]: ...


class HashUniquePolicy[T: (str, bytes)]:
    """Unique keys, last write wins, no ordering contract."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[T, T] = {}

    def insert(self, key: T, value: T) -> None:
        self._data[key] = value

    def result(self) -> dict[T, T]:
        return self._data


class SortedUniquePolicy[T: (str, bytes)](HashUniquePolicy[T]):
    """Unique keys, last write wins, result ordered by key."""

    __slots__ = ()

    def result(self) -> dict[T, T]:
        return dict(sorted(self._data.items()))


class AppendAllPolicy[T: (str, bytes)]:
    """Every pair retained in input order."""

    __slots__ = ("_pairs",)

    def __init__(self) -> None:
        self._pairs: list[tuple[T, T]] = []

    def insert(self, key: T, value: T) -> None:
        self._pairs.append((key, value))

    def result(self) -> MultiDict[T]:
        return MultiDict(tuple(self._pairs))


_POLICIES: dict[ContainerKind, type[Any]] = {
    ContainerKind.ORDERED: SortedUniquePolicy,
    ContainerKind.HASH: HashUniquePolicy,
    ContainerKind.MULTI: AppendAllPolicy,
}


def policy_for(kind: ContainerKind | str) -> InsertionPolicy[Any]:
    """Return a fresh insertion policy for *kind*."""
    return _POLICIES[ContainerKind.coerce(kind)]()
