"""
Eager Collection Operations
===========================

Iteratee-consuming operations over sequences and mappings. Mappings
are iterated over their values with the key passed as the index
argument; ``None`` behaves as an empty collection.

Iteratees are invoked as ``iteratee(value, index_or_key, collection)``
and trimmed to the arguments the callable accepts, so unary lambdas,
property names and match patterns all work.
"""

import functools
import operator
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Tuple

from ..core.iteratee import create_iteratee
from .objects import deep_equal

_NOTHING = object()


def _pairs(collection: Any) -> Iterator[Tuple[Any, Any]]:
    """Yield ``(value, key)`` for the elements of ``collection``."""
    if collection is None:
        return iter(())
    if isinstance(collection, Mapping):
        return ((value, key) for key, value in collection.items())
    try:
        return ((value, index) for index, value in enumerate(collection))
    except TypeError:
        return iter(())


def size(collection: Any) -> int:
    if collection is None:
        return 0
    try:
        return len(collection)
    except TypeError:
        return sum(1 for _ in _pairs(collection))


def map(collection: Any, iteratee: Any = None, this_arg: Any = None) -> List:
    func = create_iteratee(iteratee, this_arg)
    return [func(value, key, collection) for value, key in _pairs(collection)]


def filter(collection: Any, predicate: Any = None, this_arg: Any = None) -> List:
    func = create_iteratee(predicate, this_arg)
    return [value for value, key in _pairs(collection) if func(value, key, collection)]


def reject(collection: Any, predicate: Any = None, this_arg: Any = None) -> List:
    func = create_iteratee(predicate, this_arg)
    return [value for value, key in _pairs(collection) if not func(value, key, collection)]


def for_each(collection: Any, iteratee: Any = None, this_arg: Any = None) -> Any:
    """Call ``iteratee`` per element; returning ``False`` stops early."""
    func = create_iteratee(iteratee, this_arg)
    for value, key in _pairs(collection):
        if func(value, key, collection) is False:
            break
    return collection


def reduce(collection: Any, iteratee: Any = None, accumulator: Any = _NOTHING,
           this_arg: Any = None) -> Any:
    """
    Fold ``collection`` left to right with
    ``iteratee(accumulator, value, key, collection)``. Without an initial
    accumulator the first element is used.
    """
    pairs = list(_pairs(collection))
    return _fold(pairs, collection, iteratee, accumulator, this_arg)


def reduce_right(collection: Any, iteratee: Any = None, accumulator: Any = _NOTHING,
                 this_arg: Any = None) -> Any:
    pairs = list(_pairs(collection))
    pairs.reverse()
    return _fold(pairs, collection, iteratee, accumulator, this_arg)


def _fold(pairs: List, collection: Any, iteratee: Any, accumulator: Any, this_arg: Any) -> Any:
    func = create_iteratee(iteratee, this_arg, arg_count=4) if iteratee is not None else (lambda acc, *args: acc)
    if accumulator is _NOTHING:
        if not pairs:
            return None
        accumulator = pairs[0][0]
        pairs = pairs[1:]
    for value, key in pairs:
        accumulator = func(accumulator, value, key, collection)
    return accumulator


def find(collection: Any, predicate: Any = None, this_arg: Any = None) -> Any:
    func = create_iteratee(predicate, this_arg)
    for value, key in _pairs(collection):
        if func(value, key, collection):
            return value
    return None


def find_last(collection: Any, predicate: Any = None, this_arg: Any = None) -> Any:
    func = create_iteratee(predicate, this_arg)
    for value, key in reversed(list(_pairs(collection))):
        if func(value, key, collection):
            return value
    return None


def find_index(array: Any, predicate: Any = None, this_arg: Any = None) -> int:
    func = create_iteratee(predicate, this_arg)
    for value, index in _pairs(array):
        if func(value, index, array):
            return index
    return -1


def some(collection: Any, predicate: Any = None, this_arg: Any = None) -> bool:
    func = create_iteratee(predicate, this_arg)
    return any(func(value, key, collection) for value, key in _pairs(collection))


def every(collection: Any, predicate: Any = None, this_arg: Any = None) -> bool:
    func = create_iteratee(predicate, this_arg)
    return all(func(value, key, collection) for value, key in _pairs(collection))


def includes(collection: Any, target: Any) -> bool:
    if isinstance(collection, str):
        return isinstance(target, str) and target in collection
    return any(deep_equal(value, target) for value, _ in _pairs(collection))


def sum_by(collection: Any, iteratee: Any = None, this_arg: Any = None) -> Any:
    return functools.reduce(operator.add, map(collection, iteratee, this_arg), 0)


def max_by(collection: Any, iteratee: Any = None, this_arg: Any = None) -> Any:
    return _extreme(collection, iteratee, lambda computed, best: computed > best, this_arg)


def min_by(collection: Any, iteratee: Any = None, this_arg: Any = None) -> Any:
    return _extreme(collection, iteratee, lambda computed, best: computed < best, this_arg)


def _extreme(collection: Any, iteratee: Any, better, this_arg: Any = None) -> Any:
    func = create_iteratee(iteratee, this_arg)
    result, best = None, _NOTHING
    for value, key in _pairs(collection):
        computed = func(value, key, collection)
        if computed is None:
            continue
        if best is _NOTHING or better(computed, best):
            result, best = value, computed
    return result


# ---- Grouping ----

def group_by(collection: Any, iteratee: Any = None, this_arg: Any = None) -> Dict[Any, List]:
    func = create_iteratee(iteratee, this_arg)
    result: Dict[Any, List] = {}
    for value, key in _pairs(collection):
        result.setdefault(func(value, key, collection), []).append(value)
    return result


def count_by(collection: Any, iteratee: Any = None, this_arg: Any = None) -> Dict[Any, int]:
    func = create_iteratee(iteratee, this_arg)
    result: Dict[Any, int] = {}
    for value, key in _pairs(collection):
        computed = func(value, key, collection)
        result[computed] = result.get(computed, 0) + 1
    return result


def key_by(collection: Any, iteratee: Any = None, this_arg: Any = None) -> Dict[Any, Any]:
    func = create_iteratee(iteratee, this_arg)
    return {func(value, key, collection): value for value, key in _pairs(collection)}


def partition(collection: Any, predicate: Any = None, this_arg: Any = None) -> Tuple[List, List]:
    func = create_iteratee(predicate, this_arg)
    accepted, rejected = [], []
    for value, key in _pairs(collection):
        (accepted if func(value, key, collection) else rejected).append(value)
    return accepted, rejected


def sort_by(collection: Any, *iteratees: Any) -> List:
    """Stable sort by one or more iteratees, compared in order."""
    funcs = [create_iteratee(it, arg_count=1) for it in (iteratees or (None,))]
    values = [value for value, _ in _pairs(collection)]
    if len(funcs) == 1:
        return sorted(values, key=funcs[0])
    return sorted(values, key=lambda value: tuple(f(value) for f in funcs))


# ---- Shorthands ----

def pluck(collection: Any, path: Any) -> List:
    return map(collection, path)


def where(collection: Any, source: Mapping) -> List:
    return filter(collection, dict(source))
