"""
Chain Wrapper
=============

The user-facing fluent object. Every chainable call picks one of two
execution strategies:

  Lazy   the wrapped value is an array (or already a LazyPipeline), the
         method has a fused counterpart and its iteratee is unary: the
         call is appended to a LazyPipeline and nothing runs yet
  Eager  anything else: the call is recorded as a deferred action and
         replayed, in order, against the evaluated value

Calls that produce a scalar (first, reduce, find, ...) run immediately
and return a plain value, unless the wrapper is an explicit chain made
with ``chain()``; explicit chains stay wrapped until ``value()``.

Usage:
    >>> wrap([1, 2, 3, 4, 5, 6]).filter(lambda x: x % 2 == 0).map(lambda x: x * 10).take(2).value()
    [20, 40]
    >>> wrap([3, 1, 2]).sort().first()
    1
"""

import logging
from typing import Any, Callable, Iterator, Optional, Tuple

from ..core.iteratee import is_fusable, require_function
from ..optimization.lazy_evaluator import LazyPipeline, is_lazy_eligible
from ..optimization.operations import Action, ChainNode, plant_source, replay, resolve
from .method_table import DEFAULT_METHODS, MethodSpec, MethodTable

logger = logging.getLogger(__name__)

_ITERATEE_KEYWORDS = ('iteratee', 'predicate')


def _tap(value: Any, interceptor: Callable) -> Any:
    interceptor(value)
    return value


def _iteratee_arg(args: tuple, kwargs: dict) -> Any:
    if args:
        return args[0]
    for key in _ITERATEE_KEYWORDS:
        if key in kwargs:
            return kwargs[key]
    return None


def _this_arg(args: tuple, kwargs: dict) -> Any:
    if len(args) > 1:
        return args[1]
    return kwargs.get('this_arg')


class ChainWrapper(ChainNode):
    """
    Fluent wrapper deciding, per call, between lazy fusion and eager
    fallback.

    Class attributes act as configuration:
        USE_LAZY  -- fuse eligible calls (False forces every call eager)
        methods   -- the MethodTable consulted for chain methods
    """

    USE_LAZY = True
    methods: MethodTable = DEFAULT_METHODS

    def __init__(self, value: Any, chain_all: bool = False, actions: Tuple[Action, ...] = ()):
        self._wrapped = value
        self._chain_all = chain_all
        self._actions = tuple(actions)

    @property
    def wrapped(self) -> Any:
        return self._wrapped

    @property
    def chain_all(self) -> bool:
        return self._chain_all

    @property
    def actions(self) -> Tuple[Action, ...]:
        return self._actions

    def _with_action(self, action: Action) -> 'ChainWrapper':
        return ChainWrapper(self._wrapped, self._chain_all, self._actions + (action,))

    # ---- Chain control ----

    def chain(self) -> 'ChainWrapper':
        """Explicit chaining: every later call stays wrapped until ``value()``."""
        return ChainWrapper(self._wrapped, True, self._actions)

    def thru(self, interceptor: Callable) -> 'ChainWrapper':
        """Replace the value with ``interceptor(value)`` at evaluation time."""
        require_function(interceptor)
        return self._with_action(Action(interceptor))

    def tap(self, interceptor: Callable) -> 'ChainWrapper':
        """Call ``interceptor(value)`` at evaluation time and keep the value."""
        require_function(interceptor)
        return self._with_action(Action(_tap, (interceptor,)))

    def plant(self, value: Any) -> 'ChainWrapper':
        """Copy of this chain with ``value`` as its root source."""
        return ChainWrapper(plant_source(self._wrapped, value), self._chain_all, self._actions)

    # ---- Terminal operations ----

    def value(self) -> Any:
        """Evaluate any pipeline, then replay the deferred actions in order."""
        return replay(resolve(self._wrapped), self._actions)

    value_of = value
    to_json = value
    run = value

    def to_string(self) -> str:
        return str(self.value())

    def __str__(self):
        return self.to_string()

    def __iter__(self) -> Iterator:
        return iter(self.value())

    def __repr__(self):
        wrapped = self._wrapped
        shown = repr(wrapped) if isinstance(wrapped, ChainNode) else f"<{type(wrapped).__name__}>"
        return f"ChainWrapper({shown}, chain_all={self._chain_all}, actions={len(self._actions)})"

    # ---- Dispatch ----

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(name)
        spec = type(self).methods.get(name)
        if spec is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute {name!r}")

        def method(*args, **kwargs):
            return self._invoke(spec, args, kwargs)

        method.__name__ = name
        method.__doc__ = spec.func.__doc__
        return method

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(type(self).methods.names()))

    def _invoke(self, spec: MethodSpec, args: tuple, kwargs: dict) -> Any:
        if spec.lazy is None:
            # scalar results unwrap only in implicit chains; chain() keeps them wrapped
            if spec.unwrapped and not self._chain_all:
                return spec.func(self.value(), *args, **kwargs)
            return self._with_action(Action(spec.func, args, kwargs))

        chain_all = self._chain_all
        wrapped = self._wrapped
        is_hybrid = bool(self._actions)
        is_lazy = isinstance(wrapped, LazyPipeline)
        use_lazy = self.USE_LAZY and (is_lazy or is_lazy_eligible(wrapped))

        if use_lazy and spec.check_iteratee:
            iteratee = _iteratee_arg(args, kwargs)
            if not is_fusable(iteratee, _this_arg(args, kwargs)):
                logger.debug("Eager fallback for %s: iteratee %r is not unary", spec.name, iteratee)
                use_lazy = False

        only_lazy = use_lazy and is_lazy and not is_hybrid

        # same rule as above: explicit chains defer scalar results until value()
        if spec.unwrapped and not chain_all:
            if only_lazy:
                return getattr(wrapped, spec.lazy)(*args, **kwargs)
            return spec.func(self.value(), *args, **kwargs)

        if use_lazy and not spec.unwrapped:
            if only_lazy:
                pipeline = wrapped
            elif is_hybrid:
                # pending eager actions run first, then fusion resumes
                pipeline = LazyPipeline(self)
            else:
                pipeline = LazyPipeline(wrapped)
            return ChainWrapper(getattr(pipeline, spec.lazy)(*args, **kwargs), chain_all)

        return self._with_action(Action(spec.func, args, kwargs))


def wrap(value: Any) -> ChainWrapper:
    """
    Wrap ``value`` for implicit chaining.

    An implicit wrapper is returned as is; an explicit chain is cloned
    and stays explicit.
    """
    if isinstance(value, ChainWrapper):
        if value.chain_all:
            return ChainWrapper(value.wrapped, True, value.actions)
        return value
    return ChainWrapper(value)


def chain(value: Any) -> ChainWrapper:
    """Wrap ``value`` for explicit chaining."""
    return wrap(value).chain()


def register_method(
    name: str,
    func: Callable,
    *,
    lazy: Optional[str] = None,
    check_iteratee: bool = False,
    unwrapped: bool = False,
    replace: bool = False,
) -> MethodSpec:
    """
    Add a chain method to the table ``ChainWrapper`` dispatches through.

    ``func`` is called as ``func(value, *args)``. Names already defined
    on ``ChainWrapper`` itself cannot be registered.
    """
    if hasattr(ChainWrapper, name):
        raise ValueError(f"{name!r} is a built-in ChainWrapper method")
    return ChainWrapper.methods.register(
        name, func, lazy=lazy, check_iteratee=check_iteratee,
        unwrapped=unwrapped, replace=replace,
    )


def configure(lazy: Optional[bool] = None, enable_logging: bool = False) -> None:
    """
    Adjust global behaviour.

    ``lazy=False`` turns fusion off for every wrapper, which is useful
    to compare lazy results with eager ones. ``enable_logging`` routes
    the dispatch and evaluation debug records to the root logger.
    """
    if lazy is not None:
        ChainWrapper.USE_LAZY = lazy
    if enable_logging:
        logging.basicConfig(level=logging.DEBUG)
