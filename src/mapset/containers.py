"""Helpers connecting `MapSet` to the builtin container types."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from collections.abc import Set as AbstractSet
from functools import singledispatch
from typing import Callable, Hashable, TypeVar

from .map_set import MapSet

__all__ = ["contains", "index", "from_keys", "from_values", "from_indexed"]

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


@singledispatch
def contains(container: Iterable[T], element: T) -> bool:
    """Check whether ``element`` is in ``container``.

    The check depends on what kind of container is given: sequences are scanned for an equal item,
    mappings are checked for a key equal to ``element`` and sets (builtin or `MapSet`) for the
    element itself. Other iterables are scanned like sequences.
    """
    return any(item == element for item in container)


@contains.register(Sequence)
def _(container: Sequence, element: object) -> bool:
    return index(element, container) >= 0


@contains.register(Mapping)
def _(container: Mapping, element: object) -> bool:
    return element in container


@contains.register(AbstractSet)
def _(container: AbstractSet, element: object) -> bool:
    return element in container


@contains.register(MapSet)
def _(container: MapSet, element: object) -> bool:
    return element in container


def index(target: T, sequence: Sequence[T]) -> int:
    """Return the position of the first item of ``sequence`` equal to ``target``, or -1."""
    for i, item in enumerate(sequence):
        if item == target:
            return i
    return -1


def from_keys(mapping: Mapping[K, object]) -> MapSet[K]:
    return MapSet.from_iterable(mapping.keys())


def from_values(mapping: Mapping[object, V]) -> MapSet[V]:
    """Return the set of distinct values of ``mapping``."""
    return MapSet.from_iterable(mapping.values())


def from_indexed(n: int, f: Callable[[int], T]) -> MapSet[T]:
    """Return the set of distinct results of ``f(i)`` for ``i`` in ``range(n)``."""
    return MapSet.from_iterable(f(i) for i in range(n))
