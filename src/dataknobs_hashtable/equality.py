"""Structural equality for values held in a hashtable.

Python's ``==`` already compares built-in containers by content, but it does
not give a single truth value for numpy arrays or pandas objects, which
compare element-wise. ``deep_equal`` folds those cases into one boolean so
that value-based deletion works on data-processing payloads as well as on
plain Python values.

Example:
    ```python
    import numpy as np
    import pandas as pd

    deep_equal({"a": [1, 2]}, {"a": [1, 2]})             # True
    deep_equal([1, 2], (1, 2))                           # False, types differ
    deep_equal(1, 1.0)                                   # False, types differ
    deep_equal(np.array([1, 2]), np.array([1, 2]))       # True
    deep_equal(pd.DataFrame({"x": [1]}), pd.DataFrame({"x": [1]}))  # True
    ```
"""

import logging
from collections.abc import Mapping
from typing import Any, Set, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

_PANDAS_TYPES = (pd.Series, pd.DataFrame, pd.Index)


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two values by content rather than identity.

    Values of different types are unequal, so ``1``, ``1.0`` and ``True``
    do not match each other. numpy scalars are the exception and compare
    by value against Python numbers. Self-referencing lists and dicts are
    handled: a pair of containers already being compared counts as equal.

    Args:
        a: First value.
        b: Second value.

    Returns:
        True if the values are structurally equal.
    """
    return _deep_equal(a, b, set())


def _deep_equal(a: Any, b: Any, visited: Set[Tuple[int, int]]) -> bool:
    if a is b:
        return True

    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        if not (isinstance(a, np.ndarray) and isinstance(b, np.ndarray)):
            return False
        return bool(np.array_equal(a, b))

    if isinstance(a, _PANDAS_TYPES) or isinstance(b, _PANDAS_TYPES):
        if type(a) is not type(b):
            return False
        return bool(a.equals(b))

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        pair = (id(a), id(b))
        if pair in visited:
            return True
        visited.add(pair)
        return all(
            key in b and _deep_equal(value, b[key], visited) for key, value in a.items()
        )

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        pair = (id(a), id(b))
        if pair in visited:
            return True
        visited.add(pair)
        return all(_deep_equal(x, y, visited) for x, y in zip(a, b))

    if type(a) is not type(b) and not (
        isinstance(a, np.generic) or isinstance(b, np.generic)
    ):
        return False

    try:
        result = a == b
    except Exception as e:
        logger.debug(
            "Equality check between %s and %s raised %s; treating as unequal",
            type(a).__name__, type(b).__name__, e,
        )
        return False

    if isinstance(result, bool):
        return result
    # Element-wise results (e.g. numpy scalars or array-likes)
    try:
        return bool(np.all(result))
    except (TypeError, ValueError):
        return False
