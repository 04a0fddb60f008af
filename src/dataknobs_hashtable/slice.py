"""Ordered result sequence returned by hashtable batch operations."""

from typing import Any, List, TypeVar

T = TypeVar("T")


class Slice(List[T]):
    """A list that also answers the small sequence API the hashtable relies on.

    Batch operations (``keys``, ``values``, ``get_many``, ``has_many`` and the
    ``*_ok`` reports) hand back a Slice. It is a plain ``list`` in every other
    respect, so it can be indexed, sliced, compared and iterated as usual.

    Example:
        ```python
        s = Slice()
        s.append("a")
        s.append("b")
        s.replace(1, "c")   # True
        s.replace(5, "z")   # False, out of range
        s.length()          # 2
        list(s)             # ['a', 'c']
        ```
    """

    @classmethod
    def of_length(cls, length: int, fill: Any = None) -> "Slice":
        """Create a slice pre-sized to ``length`` items, each set to ``fill``."""
        return cls([fill] * length)

    def replace(self, index: int, item: T) -> bool:
        """Overwrite the item at ``index``.

        Args:
            index: Position to write; must satisfy ``0 <= index < length()``.
            item: The new item.

        Returns:
            True if the item was written, False if the index was out of range
            (the slice is left unchanged).
        """
        if 0 <= index < len(self):
            self[index] = item
            return True
        return False

    def length(self) -> int:
        """Number of items in the slice."""
        return len(self)
