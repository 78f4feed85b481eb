from __future__ import annotations

from typing import (
    AbstractSet,
    Callable,
    Collection,
    Container,
    Iterable,
    Iterator,
    Optional,
    Sized,
    TypeVar,
)

from typing_extensions import Self

__all__ = ["MapSet"]

T = TypeVar("T")
U = TypeVar("U")

Predicate = Callable[[T], bool]

_EMPTY: dict = {}


class MapSet(Collection[T]):
    """An unordered set of unique elements, backed by a dict with ``None`` markers.

    Iteration order is unspecified. Only `str` sorts the elements, for display.

    The binary algebra operations (`union`, `intersect`, `diff`, `sym_diff` and their operator
    forms) and the transforms (`map`, `select`, `partition`) never modify their operands and always
    return a set with its own storage. Only `add`, `discard`, `pop` and the in-place operators
    change an existing set.

    A set does no internal locking. Callers mutating a set from multiple threads need to provide
    their own synchronization.
    """

    __slots__ = ("_inner",)

    _inner: dict[T, None] | None

    def __init__(self, *elements: T) -> None:
        self._inner = None
        if elements:
            self._inner = dict.fromkeys(elements)

    @staticmethod
    def _from_inner(inner: dict[T, None]) -> MapSet[T]:
        self: MapSet[T] = object.__new__(MapSet)
        self._inner = inner or None
        return self

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> MapSet[T]:
        """Build a set from the distinct items of an iterable."""
        return cls._from_inner(dict.fromkeys(iterable))

    @property
    def _items(self) -> dict[T, None]:
        # Read-only view, shared by all sets without storage.
        return self._inner if self._inner is not None else _EMPTY

    def _storage(self) -> dict[T, None]:
        if self._inner is None:
            self._inner = {}
        return self._inner

    def copy(self) -> MapSet[T]:
        return self._from_inner(self._items.copy())

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __str__(self) -> str:
        return "{" + ", ".join(str(item) for item in self._sorted()) + "}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._sorted()!r})"

    def _sorted(self) -> list[T]:
        return sorted(self._items, key=str)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (set, frozenset)):
            return set(self) == other
        if not isinstance(other, MapSet):
            return NotImplemented
        return self._items.keys() == other._items.keys()

    __hash__ = None  # type: ignore

    # Membership

    def contains(self, *elements: T) -> bool:
        """Check whether every given element is present.

        This is vacuously true when no elements are given.
        """
        return all(element in self._items for element in elements)

    def contains_any(self, *elements: T) -> bool:
        """Check whether at least one of the given elements is present.

        This is false when no elements are given.
        """
        return any(element in self._items for element in elements)

    def isdisjoint(self, other: Iterable[T]) -> bool:
        if isinstance(other, Sized) and isinstance(other, Container) and len(other) > len(self):
            return not any(value in other for value in self)

        return not any(value in self for value in other)

    def issubset(self, other: Iterable[T]) -> bool:
        if not isinstance(other, Container) or (
            isinstance(other, (list, tuple)) and len(other) * len(self) > 16
        ):
            other = set(other)
        return all(value in other for value in self)

    def issuperset(self, other: Iterable[T]) -> bool:
        return all(value in self for value in other)

    def __le__(self, other: Self) -> bool:
        if not isinstance(other, MapSet):
            return NotImplemented
        return self.issubset(other)

    def __lt__(self, other: Self) -> bool:
        if not isinstance(other, MapSet):
            return NotImplemented
        return len(self) < len(other) and self.issubset(other)

    def __ge__(self, other: Self) -> bool:
        if not isinstance(other, MapSet):
            return NotImplemented
        return self.issuperset(other)

    def __gt__(self, other: Self) -> bool:
        if not isinstance(other, MapSet):
            return NotImplemented
        return len(self) > len(other) and self.issuperset(other)

    # Algebra

    def union(self, other: Iterable[T]) -> MapSet[T]:
        """Return the elements present in this set, in ``other`` or in both."""
        inner = self._items.copy()
        inner.update(dict.fromkeys(other))
        return self._from_inner(inner)

    def __or__(self, other: Self) -> MapSet[T]:
        if not isinstance(other, MapSet):
            return NotImplemented
        return self.union(other)

    def intersect(self, other: Iterable[T]) -> MapSet[T]:
        """Return the elements present in both this set and ``other``."""
        if not isinstance(other, (MapSet, AbstractSet)):
            other = set(other)
        if len(other) < len(self):
            return self._from_inner({item: None for item in other if item in self._items})
        return self._from_inner({item: None for item in self._items if item in other})

    def __and__(self, other: Self) -> MapSet[T]:
        if not isinstance(other, MapSet):
            return NotImplemented
        return self.intersect(other)

    def diff(self, other: Iterable[T]) -> MapSet[T]:
        """Return the elements of this set that are not in ``other``."""
        if not isinstance(other, (MapSet, AbstractSet)):
            other = set(other)
        return self._from_inner({item: None for item in self._items if item not in other})

    def __sub__(self, other: Self) -> MapSet[T]:
        if not isinstance(other, MapSet):
            return NotImplemented
        return self.diff(other)

    def sym_diff(self, other: Iterable[T]) -> MapSet[T]:
        """Return the elements found in exactly one of this set and ``other``."""
        if not isinstance(other, MapSet):
            other = MapSet.from_iterable(other)
        return self.diff(other).union(other.diff(self))

    def __xor__(self, other: Self) -> MapSet[T]:
        if not isinstance(other, MapSet):
            return NotImplemented
        return self.sym_diff(other)

    # Mutation

    def add(self, *elements: T) -> None:
        """Add the given elements, ignoring those already present."""
        if not elements:
            return
        inner = self._storage()
        for element in elements:
            inner[element] = None

    def discard(self, *elements: T) -> bool:
        """Remove the given elements that are present.

        Returns whether at least one element was actually removed.
        """
        if self._inner is None:
            return False
        removed = False
        for element in elements:
            if element in self._inner:
                del self._inner[element]
                removed = True
        return removed

    def pop(self, predicate: Optional[Predicate[T]] = None) -> tuple[T | None, bool]:
        """Remove and return an element satisfying ``predicate``.

        Without a predicate an arbitrary element is removed. The second value of the result reports
        whether an element was found; when it is ``False`` the set is left unchanged and the first
        value is ``None``.
        """
        item, found = self.choose(predicate)
        if found:
            del self._storage()[item]  # type: ignore
        return item, found

    def __ior__(self, other: Self) -> MapSet[T]:
        if not isinstance(other, MapSet):
            return NotImplemented
        self.add(*other)
        return self

    def __iand__(self, other: Self) -> MapSet[T]:
        if not isinstance(other, MapSet):
            return NotImplemented
        self.discard(*[item for item in self if item not in other])
        return self

    def __isub__(self, other: Self) -> MapSet[T]:
        if not isinstance(other, MapSet):
            return NotImplemented
        self.discard(*other)
        return self

    def __ixor__(self, other: Self) -> MapSet[T]:
        if not isinstance(other, MapSet):
            return NotImplemented
        for value in list(other):
            if not self.discard(value):
                self.add(value)
        return self

    # Transforms

    def map(self, f: Callable[[T], U]) -> MapSet[U]:
        """Return the set of results of applying ``f`` to every element.

        Elements that ``f`` maps to the same value collapse into a single element.
        """
        return MapSet._from_inner({f(item): None for item in self._items})

    def select(self, predicate: Predicate[T]) -> MapSet[T]:
        """Return the subset of elements satisfying ``predicate``."""
        return self._from_inner({item: None for item in self._items if predicate(item)})

    def partition(self, predicate: Predicate[T]) -> tuple[MapSet[T], MapSet[T]]:
        """Split the set into the elements satisfying ``predicate`` and the remaining ones."""
        yes: dict[T, None] = {}
        no: dict[T, None] = {}
        for item in self._items:
            if predicate(item):
                yes[item] = None
            else:
                no[item] = None
        return self._from_inner(yes), self._from_inner(no)

    def choose(self, predicate: Optional[Predicate[T]] = None) -> tuple[T | None, bool]:
        """Return an arbitrary element satisfying ``predicate``, or any element without one.

        The second value of the result reports whether an element was found. Repeated calls are not
        guaranteed to return the same element.
        """
        for item in self._items:
            if predicate is None or predicate(item):
                return item, True
        return None, False

    def each(self, visitor: Callable[[T], object]) -> None:
        """Call ``visitor`` once for every element, in unspecified order."""
        for item in self._items:
            visitor(item)
