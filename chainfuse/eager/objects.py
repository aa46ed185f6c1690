"""
Object Helpers
==============

Key access, cloning and structural equality used by the iteratee
adapter and by the eager collection functions.

Keys resolve against three kinds of containers, in this order:
  - mappings: ``obj[key]`` when ``key in obj``
  - sequences: ``obj[key]`` for an in-range integer index
  - anything else: ``getattr(obj, key)`` for string keys
"""

import copy
import math
from collections.abc import Mapping, Sequence, Set
from typing import Any, Hashable, List

import numpy as np

_MISSING = object()

PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes, np.generic)


def _lookup(obj: Any, key: Hashable) -> Any:
    if obj is None:
        return _MISSING
    if isinstance(obj, Mapping):
        return obj[key] if key in obj else _MISSING
    if isinstance(key, int) and not isinstance(key, bool):
        if isinstance(obj, (Sequence, np.ndarray)) and not isinstance(obj, (str, bytes)):
            if -len(obj) <= key < len(obj):
                return obj[key]
        return _MISSING
    if isinstance(key, str):
        return getattr(obj, key, _MISSING)
    return _MISSING


def _as_path(path: Any) -> tuple:
    if isinstance(path, (list, tuple)):
        return tuple(path)
    return (path,)


def has(obj: Any, path: Any) -> bool:
    """Check whether ``path`` (a key or a list of keys) resolves on ``obj``."""
    for key in _as_path(path):
        obj = _lookup(obj, key)
        if obj is _MISSING:
            return False
    return True


def get(obj: Any, path: Any, default: Any = None) -> Any:
    """Resolve ``path`` on ``obj``, returning ``default`` when any step is missing."""
    for key in _as_path(path):
        obj = _lookup(obj, key)
        if obj is _MISSING:
            return default
    return obj


def keys(obj: Any) -> List:
    if obj is None:
        return []
    if isinstance(obj, Mapping):
        return list(obj.keys())
    if isinstance(obj, (Sequence, np.ndarray)):
        return list(range(len(obj)))
    return [k for k in vars(obj) if not k.startswith('_')] if hasattr(obj, '__dict__') else []


def values(obj: Any) -> List:
    if obj is None:
        return []
    if isinstance(obj, Mapping):
        return list(obj.values())
    if isinstance(obj, (Sequence, np.ndarray)) and not isinstance(obj, (str, bytes)):
        return list(obj)
    return [getattr(obj, k) for k in keys(obj)]


def clone(value: Any) -> Any:
    """Shallow copy."""
    return copy.copy(value)


def deep_clone(value: Any) -> Any:
    """Recursive copy; numpy arrays are copied with their data."""
    return copy.deepcopy(value)


# ---- Equality ----

def _is_nan(value: Any) -> bool:
    try:
        return isinstance(value, (float, np.floating)) and math.isnan(value)
    except TypeError:
        return False


def primitive_equal(a: Any, b: Any) -> bool:
    """
    Equality used whenever one side is a primitive.

    NaN equals NaN, arrays never equal scalars, and everything else
    falls back to ``==``.
    """
    if a is b:
        return True
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return False
    if _is_nan(a) and _is_nan(b):
        return True
    return bool(a == b)


def _arrays_equal(a: np.ndarray, b: np.ndarray) -> bool:
    if a.shape != b.shape:
        return False
    try:
        return bool(np.array_equal(a, b, equal_nan=True))
    except TypeError:
        # equal_nan is undefined for object and string dtypes
        return bool(np.array_equal(a, b))


def deep_equal(a: Any, b: Any) -> bool:
    """
    Structural equality for mappings, lists, tuples, sets, numpy arrays
    and plain objects. Cyclic structures are compared by identity of the
    pair currently being visited.
    """
    return _equal(a, b, [])


def _equal(a: Any, b: Any, stack: list) -> bool:
    if a is b:
        return True
    if isinstance(a, PRIMITIVE_TYPES) or isinstance(b, PRIMITIVE_TYPES):
        return primitive_equal(a, b)
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return isinstance(a, np.ndarray) and isinstance(b, np.ndarray) and _arrays_equal(a, b)

    for seen_a, seen_b in stack:
        if seen_a is a:
            return seen_b is b

    stack.append((a, b))
    try:
        if isinstance(a, Mapping) or isinstance(b, Mapping):
            if not (isinstance(a, Mapping) and isinstance(b, Mapping)):
                return False
            if len(a) != len(b):
                return False
            return all(k in b and _equal(v, b[k], stack) for k, v in a.items())
        if isinstance(a, (list, tuple)) or isinstance(b, (list, tuple)):
            if type(a) is not type(b) and not (isinstance(a, list) and isinstance(b, list)):
                return False
            if len(a) != len(b):
                return False
            return all(_equal(x, y, stack) for x, y in zip(a, b))
        if isinstance(a, Set) or isinstance(b, Set):
            return isinstance(a, Set) and isinstance(b, Set) and a == b
        if type(a) is type(b) and type(a).__eq__ is object.__eq__ and hasattr(a, '__dict__'):
            return _equal(vars(a), vars(b), stack)
        return bool(a == b)
    finally:
        stack.pop()


def is_match(obj: Any, source: Mapping) -> bool:
    """
    Partial deep comparison: every key of ``source`` must be present on
    ``obj`` with an equal value. Nested mappings are matched partially.

    >>> is_match({'a': 1, 'b': 2}, {'a': 1})
    True
    """
    for key, expected in source.items():
        actual = _lookup(obj, key)
        if actual is _MISSING:
            return False
        if isinstance(expected, Mapping) and not isinstance(actual, PRIMITIVE_TYPES):
            if not is_match(actual, expected):
                return False
        elif not deep_equal(actual, expected):
            return False
    return True
