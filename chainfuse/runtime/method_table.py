"""
Method Table
============

Static dispatch map from chain method names to their eager
implementation and, where one exists, the ``LazyPipeline`` method that
fuses the same operation. The chain wrapper looks methods up here
instead of carrying them as attributes; late additions go through
``MethodTable.register``.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional

from ..core.iteratee import require_function
from ..eager import arrays as eager_arrays
from ..eager import collection as eager_collection
from ..eager import objects as eager_objects
from ..optimization.lazy_evaluator import LazyPipeline


@dataclass(frozen=True)
class MethodSpec:
    """How a chain method executes."""
    name: str
    # eager implementation, called as func(value, *args)
    func: Callable
    # LazyPipeline method fusing the same operation
    lazy: Optional[str] = None
    # the first argument is an iteratee whose arity decides fusion
    check_iteratee: bool = False
    # returns a scalar rather than a collection
    unwrapped: bool = False


class MethodTable:
    """
    Name -> MethodSpec registry.

    Usage:
        >>> table = MethodTable()
        >>> spec = table.register('double_all', lambda values: [v * 2 for v in values])
        >>> spec.unwrapped
        False
    """

    def __init__(self):
        self._specs: Dict[str, MethodSpec] = {}

    def register(
        self,
        name: str,
        func: Callable,
        *,
        lazy: Optional[str] = None,
        check_iteratee: bool = False,
        unwrapped: bool = False,
        replace: bool = False,
    ) -> MethodSpec:
        require_function(func)
        if not name.isidentifier() or name.startswith('_'):
            raise ValueError(f"Invalid method name {name!r}")
        if lazy is not None and not callable(getattr(LazyPipeline, lazy, None)):
            raise ValueError(f"LazyPipeline has no method {lazy!r}")
        if name in self._specs and not replace:
            raise ValueError(f"Method {name!r} is already registered")
        spec = MethodSpec(name, func, lazy, check_iteratee, unwrapped)
        self._specs[name] = spec
        return spec

    def get(self, name: str) -> Optional[MethodSpec]:
        return self._specs.get(name)

    def names(self) -> Iterator[str]:
        return iter(self._specs)

    def copy(self) -> 'MethodTable':
        table = MethodTable()
        table._specs = dict(self._specs)
        return table

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)


# Methods with a fused counterpart: (name, eager function, checks iteratee arity)
_LAZY_METHODS = (
    ('map', eager_collection.map, True),
    ('filter', eager_collection.filter, True),
    ('reject', eager_collection.reject, True),
    ('take_while', eager_arrays.take_while, True),
    ('drop_while', eager_arrays.drop_while, True),
    ('take_right_while', eager_arrays.take_right_while, True),
    ('drop_right_while', eager_arrays.drop_right_while, True),
    ('take', eager_arrays.take, False),
    ('drop', eager_arrays.drop, False),
    ('take_right', eager_arrays.take_right, False),
    ('drop_right', eager_arrays.drop_right, False),
    ('initial', eager_arrays.initial, False),
    ('rest', eager_arrays.rest, False),
    ('slice', eager_arrays.slice, False),
    ('compact', eager_arrays.compact, False),
    ('pluck', eager_collection.pluck, False),
    ('where', eager_collection.where, False),
    ('to_list', eager_arrays.to_list, False),
    ('reverse', eager_arrays.reverse, False),
)

_COLLECTION_METHODS = (
    eager_arrays.chunk,
    eager_arrays.concat,
    eager_arrays.difference,
    eager_arrays.flatten,
    eager_arrays.flatten_deep,
    eager_arrays.intersection,
    eager_arrays.pull,
    eager_arrays.remove,
    eager_arrays.sort,
    eager_arrays.splice,
    eager_arrays.union,
    eager_arrays.uniq,
    eager_arrays.without,
    eager_collection.count_by,
    eager_collection.for_each,
    eager_collection.group_by,
    eager_collection.key_by,
    eager_collection.partition,
    eager_collection.sort_by,
    eager_objects.clone,
    eager_objects.deep_clone,
    eager_objects.keys,
    eager_objects.values,
)

_SCALAR_METHODS = (
    eager_arrays.index_of,
    eager_arrays.join,
    eager_collection.every,
    eager_collection.find,
    eager_collection.find_index,
    eager_collection.find_last,
    eager_collection.includes,
    eager_collection.max_by,
    eager_collection.min_by,
    eager_collection.reduce,
    eager_collection.reduce_right,
    eager_collection.size,
    eager_collection.some,
    eager_collection.sum_by,
    eager_objects.get,
    eager_objects.has,
)


def _build_default_table() -> MethodTable:
    table = MethodTable()
    for name, func, check_iteratee in _LAZY_METHODS:
        table.register(name, func, lazy=name, check_iteratee=check_iteratee)
    table.register('first', eager_arrays.first, lazy='first', unwrapped=True)
    table.register('last', eager_arrays.last, lazy='last', unwrapped=True)
    table.register('head', eager_arrays.first, lazy='first', unwrapped=True)
    table.register('tail', eager_arrays.rest, lazy='rest')
    for func in _COLLECTION_METHODS:
        table.register(func.__name__, func)
    for func in _SCALAR_METHODS:
        table.register(func.__name__, func, unwrapped=True)
    table.register('is_equal', eager_objects.deep_equal, unwrapped=True)
    table.register('is_match', eager_objects.is_match, unwrapped=True)
    return table


DEFAULT_METHODS = _build_default_table()
