"""Generic hash table with a fluent API for dataknobs applications.

The dataknobs-hashtable package provides Hashtable, an in-memory key-value
container whose methods chain, report per-item success for bulk work, and
produce derived collections without touching the original.

## Modules

### Hashtable - Chainable key-value container
- Point operations: add, get, has, delete, plus insert-if-absent (add_ok)
  and post-condition reporting (delete_ok)
- Bulk operations: add_many, delete_many, has_many, get_many and their
  ``*_ok``/``*_func`` variants
- Functional operations: each, each_break, map, map_break, filter
- Derived collections: keys, values, intersection

### Slice - Ordered results
A list subclass returned by batch operations, adding ``replace`` and
``length``.

### deep_equal - Structural equality
Content comparison that also understands numpy arrays and pandas objects,
used by ``delete_many_values``.

## Quick Examples

### Chaining mutations
```python
from dataknobs_hashtable import Hashtable

table = Hashtable(zero=int)
table.add("apple", 5).add("banana", 3).delete("apple")
print(table.get("banana"))  # (3, True)
print(table.get("apple"))   # (0, False)
```

### Bulk operations with per-item results
```python
table = Hashtable({"apple": 5})
print(table.add_many_ok({"apple": 9, "kiwi": 6}))  # [False, True]
print(table.has_many("apple", "pear"))             # [True, False]
print(table.get_many("apple", "pear"))             # [5]
```

### Deriving new tables
```python
prices = Hashtable({"apple": 5, "banana": 3, "cherry": 8})
expensive = prices.filter(lambda k, v: v > 4)
shared = prices.intersection({"banana": 0, "durian": 0})
print(expensive.length(), prices.length())  # 2 3
print(shared.keys())                        # ['banana']
```

## Installation

```bash
pip install dataknobs-hashtable
```
"""

from dataknobs_hashtable.equality import deep_equal
from dataknobs_hashtable.exceptions import HashtableError, SerializationError
from dataknobs_hashtable.hashtable import PRESENT, Hashtable
from dataknobs_hashtable.slice import Slice

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Hashtable",
    "HashtableError",
    "PRESENT",
    "SerializationError",
    "Slice",
    "deep_equal",
]
