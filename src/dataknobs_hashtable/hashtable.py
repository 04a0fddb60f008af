"""Generic hash table with a fluent, chainable API.

This module provides Hashtable, an in-memory key-value container whose
methods cover point access, bulk access with per-item success reporting,
functional iteration, and derived-collection extraction.

Methods fall into two groups:
- Mutating methods (``add``, ``delete``, ``map``, ``merge`` and the bulk
  ``add_many``/``delete_many`` variants) change the table in place and return
  the same instance, so calls can be chained.
- Deriving methods (``filter``, ``map_break``, ``intersection``, ``copy``,
  ``keys``, ``values`` and friends) build and return a new Hashtable or
  :class:`~dataknobs_hashtable.slice.Slice`, never sharing the table's own
  storage.

Absence and refusal are never errors. They are reported through a boolean
flag, the table's zero value, or by leaving an item out of a result.
Iteration order follows the underlying dict and callers should not depend
on it.

Typical usage example:

    ```python
    from dataknobs_hashtable import Hashtable

    table = Hashtable({"apple": 5, "banana": 3}, zero=int)
    table.add("cherry", 8).add("banana", 10).delete("apple")

    table.get("banana")        # (10, True)
    table.get("durian")        # (0, False)
    table.add_ok("cherry", 1)  # False, existing value kept

    big = table.filter(lambda k, v: v > 8)
    print(big)                 # Hashtable({'banana': 10})
    print(table.length())      # 2
    ```
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from typing import Any, Dict, Generic, Tuple, TypeVar, Union

from dataknobs_hashtable.equality import deep_equal
from dataknobs_hashtable.exceptions import SerializationError
from dataknobs_hashtable.slice import Slice

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

Source = Union[Mapping[K, V], Iterable[Tuple[K, V]]]


class _Present:
    """Marker stored as the value of every key in an intersection."""

    def __repr__(self) -> str:
        return "PRESENT"


PRESENT = _Present()


def _iter_pairs(source: Any) -> Iterator[Tuple[Any, Any]]:
    """Yield (key, value) pairs from a mapping, a Hashtable or an iterable of pairs."""
    if hasattr(source, "items"):
        yield from source.items()
    else:
        for key, value in source:
            yield key, value


class Hashtable(Generic[K, V]):
    """Key-value container with chainable mutation and derived views.

    The table exclusively owns its storage dict but holds values by
    reference: a mutable value changed through another alias is changed in
    the table too.

    Attributes:
        zero: Optional factory for the value type's zero representation.
            Used by ``get`` and ``fetch`` when a key is absent. When None,
            the zero value is None.

    Example:
        ```python
        table = Hashtable({"a": 1}, [("b", 2)], zero=int)
        table.add_many({"c": 3}, {"a": 10})
        print(table)                    # Hashtable({'a': 10, 'b': 2, 'c': 3})
        table.has_many("a", "z")        # [True, False]
        table.get_many("a", "z")        # [10]
        ```
    """

    def __init__(self, *sources: Source, zero: Callable[[], V] | None = None) -> None:
        """Initialize the table, merging any number of sources.

        Args:
            *sources: Mappings or iterables of (key, value) pairs, merged left
                to right; later sources overwrite earlier ones.
            zero: Optional zero-argument callable producing the zero value
                returned for absent keys.
        """
        self._data: Dict[K, V] = {}
        self.zero = zero
        for source in sources:
            for key, value in _iter_pairs(source):
                self._data[key] = value

    def _zero_value(self) -> V | None:
        return self.zero() if self.zero is not None else None

    def _derive(self) -> "Hashtable[K, V]":
        return type(self)(zero=self.zero)

    # -- python protocol ---------------------------------------------------

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._data))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Hashtable):
            theirs = other._data
        elif isinstance(other, Mapping):
            theirs = dict(other)
        else:
            return NotImplemented
        if self._data.keys() != theirs.keys():
            return False
        return all(deep_equal(value, theirs[key]) for key, value in self._data.items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def items(self) -> Iterator[Tuple[K, V]]:
        """Iterate over a snapshot of the (key, value) pairs."""
        return iter(list(self._data.items()))

    def copy(self) -> "Hashtable[K, V]":
        """Return a shallow copy with its own storage."""
        return type(self)(self._data, zero=self.zero)

    # -- point operations --------------------------------------------------

    def add(self, key: K, value: V) -> "Hashtable[K, V]":
        """Insert or overwrite the value for ``key``.

        Args:
            key: The key to set.
            value: The value to store.

        Returns:
            This table, for chaining.

        Example:
            ```python
            table = Hashtable()
            table.add("apple", 5).add("banana", 3).add("banana", 10)
            print(table)  # Hashtable({'apple': 5, 'banana': 10})
            ```
        """
        self._data[key] = value
        return self

    def add_length(self, key: K, value: V) -> int:
        """Upsert ``key`` and return the resulting length."""
        return self.add(key, value).length()

    def add_ok(self, key: K, value: V) -> bool:
        """Insert ``key`` only if it is absent.

        Unlike ``add``, an existing value is never overwritten.

        Returns:
            True if the key was new and has been inserted, False if it already
            existed (the stored value is left untouched).

        Example:
            ```python
            table = Hashtable()
            table.add_ok("apple", 5)   # True
            table.add_ok("apple", 10)  # False, "apple" is still 5
            ```
        """
        ok = self.not_has(key)
        if ok:
            self.add(key, value)
        return ok

    def get(self, key: K) -> Tuple[V | None, bool]:
        """Look up ``key``.

        Returns:
            A ``(value, found)`` tuple. When the key is absent, ``value`` is
            the table's zero value and ``found`` is False.

        Example:
            ```python
            table = Hashtable({"apple": 5}, zero=int)
            table.get("apple")   # (5, True)
            table.get("orange")  # (0, False)
            ```
        """
        if key in self._data:
            return self._data[key], True
        return self._zero_value(), False

    def fetch(self, key: K) -> V | None:
        """Return the value for ``key``, or the zero value when absent."""
        value, _ = self.get(key)
        return value

    def has(self, key: K) -> bool:
        """Whether ``key`` is present."""
        return key in self._data

    def not_has(self, key: K) -> bool:
        """Whether ``key`` is absent."""
        return not self.has(key)

    def delete(self, key: K) -> "Hashtable[K, V]":
        """Remove ``key`` if present; absent keys are ignored.

        Returns:
            This table, for chaining.
        """
        self._data.pop(key, None)
        return self

    def delete_length(self, key: K) -> int:
        """Delete ``key`` and return the resulting length."""
        return self.delete(key).length()

    def delete_ok(self, key: K) -> bool:
        """Delete ``key`` and report whether it is now absent.

        The result describes the state after the call, not whether an entry
        was removed, so a key that was never present also yields True.

        Example:
            ```python
            table = Hashtable({"apple": 5})
            table.delete_ok("apple")  # True, removed
            table.delete_ok("grape")  # True, was never there
            ```
        """
        return not self.delete(key).has(key)

    # -- bulk operations ---------------------------------------------------

    def add_many(self, *sources: Source) -> "Hashtable[K, V]":
        """Upsert every pair from each source, left to right.

        Args:
            *sources: Mappings or iterables of (key, value) pairs. Later
                sources overwrite earlier ones on conflicting keys.

        Returns:
            This table, for chaining.

        Example:
            ```python
            table = Hashtable()
            table.add_many({"orange": 7, "grape": 4}, {"kiwi": 6, "grape": 9})
            print(table)  # Hashtable({'orange': 7, 'grape': 9, 'kiwi': 6})
            ```
        """
        for source in sources:
            for key, value in _iter_pairs(source):
                self.add(key, value)
        return self

    def add_many_ok(self, *sources: Source) -> Slice[bool]:
        """Insert-if-absent every pair from each source.

        Each pair is handled like ``add_ok``: it is written only when its key
        is absent at that moment, so a key repeated across sources keeps its
        first value.

        Returns:
            One boolean per processed pair, in processing order: True for an
            insert, False for a refused update.

        Example:
            ```python
            table = Hashtable()
            table.add_many_ok({"apple": 5, "banana": 3}, {"banana": 10, "cherry": 8})
            # [True, True, False, True]; "banana" stays 3
            ```
        """
        results: Slice[bool] = Slice()
        for source in sources:
            for key, value in _iter_pairs(source):
                results.append(self.add_ok(key, value))
        logger.debug(
            "add_many_ok inserted %d of %d pairs", sum(results), results.length()
        )
        return results

    def add_many_func(
        self,
        sources: Sequence[Source],
        fn: Callable[[int, K, V], bool],
    ) -> "Hashtable[K, V]":
        """Upsert the pairs accepted by ``fn``.

        Args:
            sources: Sequence of mappings or iterables of pairs.
            fn: Called as ``fn(index, key, value)`` where ``index`` is the
                position of the source in ``sources``; the pair is upserted
                when it returns True.

        Returns:
            This table, for chaining.

        Example:
            ```python
            table = Hashtable()
            table.add_many_func(
                [{"apple": 5, "orange": -3, "banana": 10}],
                lambda i, k, v: v > 0,
            )
            print(table)  # Hashtable({'apple': 5, 'banana': 10})
            ```
        """
        for index, source in enumerate(sources):
            for key, value in _iter_pairs(source):
                if fn(index, key, value):
                    self.add(key, value)
        return self

    def delete_many(self, *keys: K) -> "Hashtable[K, V]":
        """Delete each key if present; absent keys are skipped."""
        for key in keys:
            self.delete(key)
        return self

    def delete_many_ok(self, *keys: K) -> Slice[bool]:
        """Delete each key and report, per key and in input order, whether it is now absent."""
        results: Slice[bool] = Slice()
        for key in keys:
            results.append(self.delete_ok(key))
        return results

    def delete_many_func(self, fn: Callable[[K, V], bool]) -> "Hashtable[K, V]":
        """Delete every entry for which ``fn(key, value)`` returns True.

        The predicate sees a snapshot of the entries taken before any
        deletion, so every entry is considered exactly once.

        Example:
            ```python
            table = Hashtable({"apple": 5, "banana": 3})
            table.delete_many_func(lambda k, v: v < 4)
            print(table)  # Hashtable({'apple': 5})
            ```
        """
        removed = 0
        for key, value in self.items():
            if fn(key, value):
                self.delete(key)
                removed += 1
        logger.debug("delete_many_func removed %d entries", removed)
        return self

    def delete_many_values(self, *values: V) -> "Hashtable[K, V]":
        """Delete every entry whose value structurally equals any of ``values``.

        Values are compared with
        :func:`~dataknobs_hashtable.equality.deep_equal`, so equal lists,
        dicts, numpy arrays and pandas frames match even when they are
        distinct objects.

        Example:
            ```python
            table = Hashtable({"a": 5, "b": 3, "c": 5})
            table.delete_many_values(5, 10)
            print(table)  # Hashtable({'b': 3})
            ```
        """
        removed = 0
        for key, value in self.items():
            if any(deep_equal(candidate, value) for candidate in values):
                self.delete(key)
                removed += 1
        logger.debug("delete_many_values removed %d entries", removed)
        return self

    def has_many(self, *keys: K) -> Slice[bool]:
        """Report the presence of each key, in input order.

        Example:
            ```python
            table = Hashtable({"apple": 5, "banana": 3})
            table.has_many("apple", "orange", "banana")  # [True, False, True]
            ```
        """
        results: Slice[bool] = Slice.of_length(len(keys), False)
        for index, key in enumerate(keys):
            if self.has(key):
                results.replace(index, True)
        return results

    def get_many(self, *keys: K) -> Slice[V]:
        """Return the values of the keys that are present, in input order.

        Absent keys are skipped rather than filled with a placeholder, so the
        result may be shorter than ``keys``.

        Example:
            ```python
            table = Hashtable({"apple": 5, "banana": 3})
            table.get_many("apple", "orange", "banana")  # [5, 3]
            ```
        """
        results: Slice[V] = Slice()
        for key in keys:
            value, ok = self.get(key)
            if ok:
                results.append(value)
        return results

    # -- functional operations ---------------------------------------------

    def each(self, fn: Callable[[K, V], Any]) -> "Hashtable[K, V]":
        """Call ``fn(key, value)`` once for every entry."""

        def visit(key: K, value: V) -> bool:
            fn(key, value)
            return True

        return self.each_break(visit)

    def each_break(self, fn: Callable[[K, V], bool]) -> "Hashtable[K, V]":
        """Call ``fn(key, value)`` for entries until it returns False.

        Entries are visited over a snapshot, so ``fn`` may mutate the table.

        Example:
            ```python
            seen = []
            table = Hashtable({"a": 1, "b": 2, "c": 3})
            table.each_break(lambda k, v: seen.append(k) or len(seen) < 2)
            len(seen)  # 2
            ```
        """
        for key, value in self.items():
            if not fn(key, value):
                break
        return self

    def each_key(self, fn: Callable[[K], Any]) -> "Hashtable[K, V]":
        """Call ``fn(key)`` once for every key."""
        return self.each(lambda key, _: fn(key))

    def each_key_break(self, fn: Callable[[K], bool]) -> "Hashtable[K, V]":
        """Call ``fn(key)`` for keys until it returns False."""
        return self.each_break(lambda key, _: fn(key))

    def each_value(self, fn: Callable[[V], Any]) -> "Hashtable[K, V]":
        """Call ``fn(value)`` once for every value."""
        return self.each(lambda _, value: fn(value))

    def each_value_break(self, fn: Callable[[V], bool]) -> "Hashtable[K, V]":
        """Call ``fn(value)`` for values until it returns False."""
        return self.each_break(lambda _, value: fn(value))

    def map(self, fn: Callable[[K, V], V]) -> "Hashtable[K, V]":
        """Replace every value with ``fn(key, value)``, in place.

        Example:
            ```python
            table = Hashtable({"apple": 5, "banana": 3})
            table.map(lambda k, v: v * 2 if k == "banana" else v)
            print(table)  # Hashtable({'apple': 5, 'banana': 6})
            ```
        """
        for key, value in self.items():
            self._data[key] = fn(key, value)
        return self

    def map_break(self, fn: Callable[[K, V], Tuple[V, bool]]) -> "Hashtable[K, V]":
        """Build a new table of transformed values, stopping early on demand.

        ``fn(key, value)`` returns ``(new_value, keep_going)``. When
        ``keep_going`` is False the traversal stops and that entry is left
        out of the result. This table is never modified.

        Returns:
            A new Hashtable holding the entries transformed before the stop.

        Example:
            ```python
            table = Hashtable({"apple": 5, "banana": 3})
            result = table.map_break(
                lambda k, v: (v * 2, k != "banana")
            )
            # result holds "apple": 10 if "apple" was visited first
            ```
        """
        result = self._derive()
        for key, value in self.items():
            new_value, ok = fn(key, value)
            if not ok:
                break
            result.add(key, new_value)
        return result

    def filter(self, fn: Callable[[K, V], bool]) -> "Hashtable[K, V]":
        """Return a new table with the entries for which ``fn(key, value)`` is True.

        Example:
            ```python
            table = Hashtable({"apple": 5, "banana": 3, "cherry": 8})
            table.filter(lambda k, v: v > 4)  # Hashtable({'apple': 5, 'cherry': 8})
            ```
        """
        result = self._derive()
        for key, value in self.items():
            if fn(key, value):
                result.add(key, value)
        return result

    def intersection(
        self, other: Union["Hashtable[K, Any]", Mapping[K, Any]]
    ) -> "Hashtable[K, _Present]":
        """Return a new table keyed by the keys present in both tables.

        This is a key-set operation: every value in the result is the
        :data:`PRESENT` marker, not a value from either input.

        Example:
            ```python
            a = Hashtable({"a": 1, "b": 2})
            b = Hashtable({"b": 9, "c": 3})
            a.intersection(b).keys()  # ['b']
            ```
        """
        result: Hashtable[K, _Present] = Hashtable()
        for key in self._data:
            if key in other:
                result.add(key, PRESENT)
        return result

    def merge(self, *others: Union["Hashtable[K, V]", Mapping[K, V]]) -> "Hashtable[K, V]":
        """Upsert every entry of each other table, left to right."""
        return self.add_many(*others)

    # -- extraction --------------------------------------------------------

    def keys(self) -> Slice[K]:
        """Return all keys as a new Slice."""
        keys: Slice[K] = Slice()
        self.each_key(keys.append)
        return keys

    def keys_func(self, fn: Callable[[K], bool]) -> Slice[K]:
        """Return the keys for which ``fn(key)`` is True.

        Example:
            ```python
            table = Hashtable({"apple": 5, "banana": 3, "cherry": 8})
            table.keys_func(lambda k: len(k) > 5)  # ['banana', 'cherry']
            ```
        """
        keys: Slice[K] = Slice()
        for key in self:
            if fn(key):
                keys.append(key)
        return keys

    def values(self) -> Slice[V]:
        """Return all values as a new Slice."""
        values: Slice[V] = Slice.of_length(self.length())
        for index, value in enumerate(self._data.values()):
            values.replace(index, value)
        return values

    def values_func(self, fn: Callable[[K, V], bool]) -> Slice[V]:
        """Return the values whose entry satisfies ``fn(key, value)``."""
        values: Slice[V] = Slice()
        for key, value in self.items():
            if fn(key, value):
                values.append(value)
        return values

    def length(self) -> int:
        """Number of entries."""
        return len(self._data)

    def is_empty(self) -> bool:
        """Whether the table has no entries."""
        return self.length() == 0

    def is_populated(self) -> bool:
        """Whether the table has at least one entry."""
        return not self.is_empty()

    # -- serialization -----------------------------------------------------

    def to_dict(self) -> Dict[K, V]:
        """Return the entries as a new plain dict (values are not copied)."""
        return dict(self._data)

    @classmethod
    def from_dict(
        cls, data: Mapping[K, V], zero: Callable[[], V] | None = None
    ) -> "Hashtable[K, V]":
        """Create a table from a mapping.

        Raises:
            SerializationError: If ``data`` is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise SerializationError(
                f"Data must be a mapping, got {type(data).__name__}",
                context={"class": cls.__name__, "data_type": type(data).__name__},
            )
        return cls(data, zero=zero)
