"""
Eager Array Operations
======================

Conventional, fully materializing implementations of the array
operations the lazy engine can fuse, plus the non-fusable ones the
chain wrapper records as deferred actions.

Every function accepts ``None`` (and any other non-sequence) as an
empty array and returns a new list, except ``pull`` and ``remove``
which modify the given list in place.
"""

import math
from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Optional

import numpy as np

from ..core.coercion import to_integer, to_size
from ..core.iteratee import create_iteratee
from .objects import deep_equal


def to_list(array: Any) -> List:
    """Copy any array-like into a list; mappings and scalars give ``[]``."""
    if array is None or isinstance(array, (Mapping, str, bytes)):
        return []
    if isinstance(array, (list, tuple, range, np.ndarray)):
        return list(array)
    if isinstance(array, Iterable):
        return list(array)
    return []


def _sequence(array: Any):
    # list and tuple are sliced directly; everything else is copied first
    if isinstance(array, (list, tuple)):
        return array
    return to_list(array)


def _clamp_index(n, length: int) -> int:
    if n == math.inf:
        return length
    if n == -math.inf:
        return 0
    return min(max(n, 0), length)


# ---- Slicing ----

def slice(array: Any, start: Any = 0, end: Any = None) -> List:
    """
    Slice with permissive numeric arguments; negative positions count
    from the end.
    """
    seq = _sequence(array)
    length = len(seq)
    start = 0 if start is None else to_integer(start)
    end = length if end is None else to_integer(end)
    if start < 0:
        start = length + start
    if end < 0:
        end = length + end
    start = _clamp_index(start, length)
    end = _clamp_index(end, length)
    return list(seq[start:end]) if start < end else []


def take(array: Any, n: Any = None) -> List:
    n = to_size(n)
    seq = _sequence(array)
    return list(seq[:_clamp_index(n, len(seq))])


def drop(array: Any, n: Any = None) -> List:
    n = to_size(n)
    seq = _sequence(array)
    return list(seq[_clamp_index(n, len(seq)):])


def take_right(array: Any, n: Any = None) -> List:
    n = to_size(n)
    seq = _sequence(array)
    return list(seq[len(seq) - _clamp_index(n, len(seq)):])


def drop_right(array: Any, n: Any = None) -> List:
    n = to_size(n)
    seq = _sequence(array)
    return list(seq[:len(seq) - _clamp_index(n, len(seq))])


def first(array: Any) -> Any:
    seq = _sequence(array)
    return seq[0] if len(seq) else None


def last(array: Any) -> Any:
    seq = _sequence(array)
    return seq[-1] if len(seq) else None


def initial(array: Any) -> List:
    return drop_right(array, 1)


def rest(array: Any) -> List:
    return drop(array, 1)


def _while(array: Any, predicate: Any, is_drop: bool, from_right: bool, this_arg: Any = None) -> List:
    seq = _sequence(array)
    predicate = create_iteratee(predicate, this_arg)
    length = len(seq)
    index = length - 1 if from_right else 0
    step = -1 if from_right else 1
    while 0 <= index < length and predicate(seq[index], index, seq):
        index += step
    if from_right:
        return list(seq[:index + 1]) if is_drop else list(seq[index + 1:])
    return list(seq[index:]) if is_drop else list(seq[:index])


def take_while(array: Any, predicate: Any = None, this_arg: Any = None) -> List:
    return _while(array, predicate, is_drop=False, from_right=False, this_arg=this_arg)


def drop_while(array: Any, predicate: Any = None, this_arg: Any = None) -> List:
    return _while(array, predicate, is_drop=True, from_right=False, this_arg=this_arg)


def take_right_while(array: Any, predicate: Any = None, this_arg: Any = None) -> List:
    return _while(array, predicate, is_drop=False, from_right=True, this_arg=this_arg)


def drop_right_while(array: Any, predicate: Any = None, this_arg: Any = None) -> List:
    return _while(array, predicate, is_drop=True, from_right=True, this_arg=this_arg)


def reverse(array: Any) -> List:
    """Reversed copy. The input is left untouched."""
    return list(reversed(_sequence(array)))


# ---- Shaping ----

def compact(array: Any) -> List:
    return [value for value in _sequence(array) if value]


def _flatten(seq, depth: float, result: List) -> List:
    for value in seq:
        if depth > 0 and isinstance(value, (list, tuple, np.ndarray)):
            _flatten(value, depth - 1, result)
        else:
            result.append(value)
    return result


def flatten(array: Any, is_deep: bool = False) -> List:
    return _flatten(_sequence(array), math.inf if is_deep else 1, [])


def flatten_deep(array: Any) -> List:
    return flatten(array, is_deep=True)


def chunk(array: Any, size: Any = 1) -> List[List]:
    size = to_size(size)
    seq = _sequence(array)
    if not size or size == math.inf:
        return [list(seq)] if size and len(seq) else []
    return [list(seq[i:i + size]) for i in range(0, len(seq), size)]


def concat(array: Any, *values: Any) -> List:
    if isinstance(array, (list, tuple, range, np.ndarray)):
        result = list(array)
    else:
        result = [] if array is None else [array]
    for value in values:
        if isinstance(value, (list, tuple, np.ndarray)):
            result.extend(value)
        else:
            result.append(value)
    return result


# ---- Set-like ----

def _index_in(values: List, target: Any) -> int:
    for i, value in enumerate(values):
        if deep_equal(value, target):
            return i
    return -1


def uniq(array: Any, iteratee: Any = None, this_arg: Any = None) -> List:
    """Unique values by deep equality of ``iteratee(value)``, first occurrence wins."""
    seq = _sequence(array)
    key_of = create_iteratee(iteratee, this_arg)
    seen: List = []
    result = []
    for index, value in enumerate(seq):
        key = key_of(value, index, seq)
        if _index_in(seen, key) < 0:
            seen.append(key)
            result.append(value)
    return result


def without(array: Any, *values: Any) -> List:
    excluded = list(values)
    return [value for value in _sequence(array) if _index_in(excluded, value) < 0]


def difference(array: Any, *others: Any) -> List:
    excluded = [value for other in others for value in _sequence(other)]
    return [value for value in _sequence(array) if _index_in(excluded, value) < 0]


def union(*arrays: Any) -> List:
    return uniq([value for array in arrays for value in _sequence(array)])


def intersection(*arrays: Any) -> List:
    if not arrays:
        return []
    rest_ = [to_list(array) for array in arrays[1:]]
    return [
        value for value in uniq(arrays[0])
        if all(_index_in(other, value) >= 0 for other in rest_)
    ]


def index_of(array: Any, value: Any, from_index: Any = 0) -> int:
    seq = _sequence(array)
    start = to_integer(from_index)
    if start < 0:
        start = max(len(seq) + start, 0)
    for i in range(_clamp_index(start, len(seq)), len(seq)):
        if deep_equal(seq[i], value):
            return i
    return -1


def join(array: Any, separator: str = ',') -> str:
    return separator.join('' if value is None else str(value) for value in _sequence(array))


# ---- Ordering ----

def sort(array: Any, key: Optional[Callable] = None, reverse: bool = False) -> List:
    """Sorted copy; ``key`` may be any iteratee shorthand."""
    key_of = None if key is None else create_iteratee(key, arg_count=1)
    return sorted(_sequence(array), key=key_of, reverse=reverse)


def splice(array: Any, start: Any, delete_count: Any = None, *items: Any) -> List:
    """
    Copy of ``array`` with ``delete_count`` elements removed at ``start``
    and ``items`` inserted there. Use ``pull``/``remove`` to edit in place.
    """
    result = to_list(array)
    length = len(result)
    start = to_integer(start)
    start = _clamp_index(length + start if start < 0 else start, length)
    count = length - start if delete_count is None else _clamp_index(to_integer(delete_count), length - start)
    result[start:start + count] = items
    return result


# ---- In-place ----

def pull(array: List, *values: Any) -> List:
    """Remove every occurrence of ``values`` from ``array`` in place and return it."""
    if not isinstance(array, list):
        return to_list(array)
    array[:] = [value for value in array if _index_in(list(values), value) < 0]
    return array


def remove(array: List, predicate: Any = None, this_arg: Any = None) -> List:
    """
    Remove the elements ``predicate`` accepts from ``array`` in place.

    Returns the removed elements.
    """
    if not isinstance(array, list):
        return []
    predicate = create_iteratee(predicate, this_arg)
    snapshot = list(array)
    removed, kept = [], []
    for index, value in enumerate(snapshot):
        (removed if predicate(value, index, snapshot) else kept).append(value)
    array[:] = kept
    return removed


__all__ = [
    'to_list', 'slice', 'take', 'drop', 'take_right', 'drop_right', 'first',
    'last', 'initial', 'rest', 'take_while', 'drop_while', 'take_right_while',
    'drop_right_while', 'reverse', 'compact', 'flatten', 'flatten_deep',
    'chunk', 'concat', 'uniq', 'without', 'difference', 'union',
    'intersection', 'index_of', 'join', 'sort', 'splice', 'pull', 'remove',
]
