"""
Lazy Evaluator
==============

Deferred array pipelines that fuse map/filter/take/drop chains into a
single pass over the source.

Eager code creates an intermediate list for every step:
    evens = [x for x in data if x % 2 == 0]   # full pass
    scaled = [x * 10 for x in evens]          # another full pass
    result = scaled[:2]

With a lazy pipeline:
    result = lazy(data).filter(lambda x: x % 2 == 0).map(lambda x: x * 10).take(2).value()
    # one pass, stopping after the second even number

A pipeline is made of:
  - views:      drop/take transforms folded into one [start, end) window
  - iteratees:  drop_while/filter/map/take_while run per element, in order
  - take_count: bound on the output length once filtering has started
  - direction:  +1 or -1; reverse() flips it instead of copying the array

Pipelines are immutable; every chainable call returns a new one. Each
public call also records its eager equivalent, which is replayed
instead of the fused pass when the source turns out not to be an array.
"""

import logging
import math
from typing import Any, Callable, Iterator, List, Tuple

import numpy as np

from ..core.coercion import to_integer, to_size
from ..core.iteratee import create_iteratee, identity
from ..eager import arrays as eager_arrays
from ..eager import collection as eager_collection
from .operations import Action, ChainNode, LazyOp, OpKind, OpState, plant_source, replay, resolve
from .view import DROP, DROP_RIGHT, TAKE, TAKE_RIGHT, ViewTransform, compute_view

logger = logging.getLogger(__name__)


def is_lazy_eligible(value: Any) -> bool:
    """Whether ``value`` is an indexable array the fused pass can walk."""
    if isinstance(value, (list, tuple, range)):
        return True
    return isinstance(value, np.ndarray) and value.ndim == 1


class _DeferredStep(ChainNode):
    """An eager call whose result feeds a lazy pipeline."""

    __slots__ = ('source', 'func', 'args')

    def __init__(self, source: Any, func: Callable, args: Tuple):
        self.source = source
        self.func = func
        self.args = args

    def value(self) -> Any:
        return self.func(resolve(self.source), *self.args)

    def plant(self, value: Any) -> '_DeferredStep':
        return _DeferredStep(plant_source(self.source, value), self.func, self.args)


class LazyPipeline(ChainNode):
    """
    Lazy array pipeline with iterator fusion.

    Usage:
        >>> pipeline = LazyPipeline([1, 2, 3, 4, 5, 6])
        >>> (pipeline
        ...     .filter(lambda x: x % 2 == 0)
        ...     .map(lambda x: x * 10)
        ...     .take(2)
        ...     .value())
        [20, 40]
    """

    def __init__(self, source: Any):
        self._source = source
        self._direction = 1
        self._filtered = False
        self._iteratees: Tuple[LazyOp, ...] = ()
        self._take_count = math.inf
        self._views: Tuple[ViewTransform, ...] = ()
        self._actions: Tuple[Action, ...] = ()

    def _clone(self) -> 'LazyPipeline':
        result = LazyPipeline.__new__(LazyPipeline)
        result._source = self._source
        result._direction = self._direction
        result._filtered = self._filtered
        result._iteratees = self._iteratees
        result._take_count = self._take_count
        result._views = self._views
        result._actions = self._actions
        return result

    def _record(self, func: Callable, *args) -> 'LazyPipeline':
        # only ever called on a pipeline created by the current call
        self._actions = self._actions + (Action(func, args),)
        return self

    @property
    def direction(self) -> int:
        return self._direction

    @property
    def filtered(self) -> bool:
        return self._filtered

    @property
    def take_count(self):
        return self._take_count

    @property
    def iteratees(self) -> Tuple[LazyOp, ...]:
        return self._iteratees

    @property
    def views(self) -> Tuple[ViewTransform, ...]:
        return self._views

    @property
    def source(self) -> Any:
        return self._source

    # ---- Queue mutation (copy-on-write) ----

    def _push(self, kind: OpKind, iteratee: Callable, limit=None) -> 'LazyPipeline':
        op = LazyOp(kind, iteratee, limit)
        base = self
        if op.is_filtering and self._take_count != math.inf:
            # a filter after a bounded take must see only the taken elements
            logger.debug("Wrapping pipeline: %s queued after take(%s)", kind.name, self._take_count)
            base = LazyPipeline(self)
        result = base._clone()
        result._iteratees = base._iteratees + (op,)
        result._filtered = base._filtered or op.is_filtering
        return result

    def _take(self, n: Any) -> 'LazyPipeline':
        n = to_size(n)
        result = self._clone()
        if result._filtered:
            result._take_count = min(result._take_count, n)
        else:
            kind = TAKE if result._direction > 0 else TAKE_RIGHT
            result._views = result._views + (ViewTransform(kind, n),)
        return result

    def _drop(self, n: Any) -> 'LazyPipeline':
        n = to_size(n)
        if self._filtered:
            return self._push(OpKind.DROP_WHILE, identity, limit=n)
        result = self._clone()
        kind = DROP if result._direction > 0 else DROP_RIGHT
        result._views = result._views + (ViewTransform(kind, n),)
        return result

    def _reverse(self) -> 'LazyPipeline':
        if self._filtered:
            logger.debug("Wrapping filtered pipeline to reverse it")
            result = LazyPipeline(self)
            result._direction = -1
            result._filtered = True
        else:
            result = self._clone()
            result._direction = -self._direction
        return result

    # ---- Chainable operations ----

    def map(self, iteratee: Any = None, this_arg: Any = None) -> 'LazyPipeline':
        func = create_iteratee(iteratee, this_arg, arg_count=1)
        return self._push(OpKind.MAP, func)._record(eager_collection.map, iteratee, this_arg)

    def filter(self, predicate: Any = None, this_arg: Any = None) -> 'LazyPipeline':
        func = create_iteratee(predicate, this_arg, arg_count=1)
        return self._push(OpKind.FILTER, func)._record(eager_collection.filter, predicate, this_arg)

    def reject(self, predicate: Any = None, this_arg: Any = None) -> 'LazyPipeline':
        func = create_iteratee(predicate, this_arg, arg_count=1)
        return self._push(OpKind.FILTER, lambda value: not func(value))._record(
            eager_collection.reject, predicate, this_arg)

    def take_while(self, predicate: Any = None, this_arg: Any = None) -> 'LazyPipeline':
        func = create_iteratee(predicate, this_arg, arg_count=1)
        return self._push(OpKind.TAKE_WHILE, func)._record(eager_arrays.take_while, predicate, this_arg)

    def drop_while(self, predicate: Any = None, this_arg: Any = None) -> 'LazyPipeline':
        func = create_iteratee(predicate, this_arg, arg_count=1)
        return self._push(OpKind.DROP_WHILE, func)._record(eager_arrays.drop_while, predicate, this_arg)

    def take_right_while(self, predicate: Any = None, this_arg: Any = None) -> 'LazyPipeline':
        func = create_iteratee(predicate, this_arg, arg_count=1)
        result = self._reverse()._push(OpKind.TAKE_WHILE, func)._reverse()
        return result._record(eager_arrays.take_right_while, predicate, this_arg)

    def drop_right_while(self, predicate: Any = None, this_arg: Any = None) -> 'LazyPipeline':
        func = create_iteratee(predicate, this_arg, arg_count=1)
        result = self._reverse()._push(OpKind.DROP_WHILE, func)._reverse()
        return result._record(eager_arrays.drop_right_while, predicate, this_arg)

    def take(self, n: Any = None) -> 'LazyPipeline':
        return self._take(n)._record(eager_arrays.take, n)

    def drop(self, n: Any = None) -> 'LazyPipeline':
        return self._drop(n)._record(eager_arrays.drop, n)

    def take_right(self, n: Any = None) -> 'LazyPipeline':
        return self._reverse()._take(n)._reverse()._record(eager_arrays.take_right, n)

    def drop_right(self, n: Any = None) -> 'LazyPipeline':
        return self._reverse()._drop(n)._reverse()._record(eager_arrays.drop_right, n)

    def initial(self) -> 'LazyPipeline':
        return self.drop_right(1)

    def rest(self) -> 'LazyPipeline':
        return self.drop(1)

    def compact(self) -> 'LazyPipeline':
        return self._push(OpKind.FILTER, bool)._record(eager_arrays.compact)

    def pluck(self, path: Any) -> 'LazyPipeline':
        return self.map(path)

    def where(self, source: dict) -> 'LazyPipeline':
        return self.filter(dict(source))

    def slice(self, start: Any = 0, end: Any = None) -> 'LazyPipeline':
        """
        Lazy slice. Negative positions count from the end; a negative
        start with a non-negative end needs the source length, so that
        combination runs as an eager step feeding a new pipeline.
        """
        begin = 0 if start is None else to_integer(start)
        stop = None if end is None else to_integer(end)
        if begin < 0 and stop is not None and stop >= 0:
            return LazyPipeline(_DeferredStep(self, eager_arrays.slice, (start, end)))

        result = self._clone()
        if begin < 0:
            result = result._reverse()._take(-begin)._reverse()
        elif begin:
            result = result._drop(begin)
        if stop is not None:
            if stop < 0:
                result = result._reverse()._drop(-stop)._reverse()
            else:
                result = result._take(stop - begin)
        return result._record(eager_arrays.slice, start, end)

    def to_list(self) -> 'LazyPipeline':
        return self._clone()._record(eager_arrays.to_list)

    def reverse(self) -> 'LazyPipeline':
        return self._reverse()._record(eager_arrays.reverse)

    def plant(self, value: Any) -> 'LazyPipeline':
        result = self._clone()
        result._source = plant_source(self._source, value)
        return result

    # ---- Terminal operations ----

    def first(self) -> Any:
        values = self.take(1).value()
        return values[0] if values else None

    def last(self) -> Any:
        values = self.take_right(1).value()
        return values[0] if values else None

    def reduce(self, iteratee: Any, *accumulator: Any) -> Any:
        return eager_collection.reduce(self.value(), iteratee, *accumulator)

    def count(self) -> int:
        return eager_collection.size(self.value())

    def value(self) -> Any:
        """Evaluate the pipeline; fused when the source is an array."""
        array = resolve(self._source)
        if not is_lazy_eligible(array):
            logger.debug(
                "Source is %s, replaying %d eager action(s)",
                type(array).__name__, len(self._actions),
            )
            return replay(array, self._actions)
        return self._evaluate(array)

    collect = value

    def __iter__(self) -> Iterator:
        return iter(self.value())

    # ---- Execution Engine ----

    def _evaluate(self, array) -> List:
        """
        Run the fused pass over ``array``.

        Ends when the window is exhausted, ``take_count`` values have
        been emitted, or a take_while predicate fails. Exceptions raised
        by iteratees propagate unchanged.
        """
        direction = self._direction
        is_right = direction < 0
        view = compute_view(len(array), self._views)
        length = view.size
        index = view.end if is_right else view.start - 1
        take_count = min(length, self._take_count)
        states = [OpState(op) for op in self._iteratees]
        result = []

        logger.debug(
            "Evaluating window [%s, %s) direction=%d ops=%d take_count=%s",
            view.start, view.end, direction, len(states), take_count,
        )

        while length and len(result) < take_count:
            length -= 1
            index += direction
            value = array[index]

            for state in states:
                op = state.op
                if op.kind is OpKind.DROP_WHILE:
                    if state.done and (index > state.index if is_right else index < state.index):
                        # revisiting earlier positions restarts the drop
                        state.count = 0
                        state.done = False
                    state.index = index
                    if not state.done:
                        if op.limit is not None:
                            state.done = state.count >= op.limit
                            state.count += 1
                        else:
                            state.done = not op.iteratee(value)
                        if not state.done:
                            break
                    continue

                computed = op.iteratee(value)
                if op.kind is OpKind.MAP:
                    value = computed
                elif not computed:
                    if op.kind is OpKind.FILTER:
                        break
                    return result
            else:
                result.append(value)

        return result

    def __repr__(self):
        return (
            f"LazyPipeline(direction={self._direction}, views={len(self._views)}, "
            f"ops={len(self._iteratees)}, take_count={self._take_count})"
        )


def lazy(sequence: Any) -> LazyPipeline:
    """
    Convenience function to create a lazy pipeline.

    Usage:
        >>> lazy(range(1000)).map(lambda x: x * x).filter(lambda x: x % 2 == 0).take(3).value()
        [0, 4, 16]
    """
    return LazyPipeline(sequence)
