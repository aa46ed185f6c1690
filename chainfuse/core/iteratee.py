"""
Iteratee Adapter
================

Normalizes the shorthands accepted wherever an iteratee is expected
into a single canonical callable:

  - callable      -> called with ``(value, index, collection)``, trimmed
                     to the number of positional arguments it accepts
  - str/int key   -> ``element[key]``; a list/tuple is a nested path
  - mapping       -> partial-match predicate
  - None          -> identity

The shorthand is classified once into an ``Iteratee`` and resolved
once into a callable; nothing is re-inspected per element.
"""

import inspect
import types
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional

from ..eager.objects import _MISSING, PRIMITIVE_TYPES, _lookup, get, is_match, primitive_equal

FUNC_ERROR_TEXT = "Expected a function"

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class IterateeKind(Enum):
    FUNCTION = auto()
    PATH = auto()
    MATCHER = auto()
    IDENTITY = auto()


def identity(value, *args):
    return value


def require_function(func: Any) -> Callable:
    """Raise ``TypeError`` unless ``func`` is callable."""
    if not callable(func):
        raise TypeError(f"{FUNC_ERROR_TEXT}, got {type(func).__name__}")
    return func


def _signature(func: Callable) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        # builtins without text signatures
        return None


def declared_arity(func: Callable) -> int:
    """
    Number of required positional parameters of ``func``.

    Functions whose signature cannot be read are assumed unary.

    >>> declared_arity(lambda x, i: x)
    2
    """
    sig = _signature(func)
    if sig is None:
        return 1
    return sum(
        1 for p in sig.parameters.values()
        if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty
    )


def accepted_arg_count(func: Callable) -> Optional[int]:
    """Maximum positional arguments ``func`` takes; ``None`` for ``*args``."""
    sig = _signature(func)
    if sig is None:
        return 1
    count = 0
    for p in sig.parameters.values():
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if p.kind in _POSITIONAL:
            count += 1
    return count


def _fit_arity(func: Callable, arg_count: int) -> Callable:
    accepted = accepted_arg_count(func)
    if accepted is None or accepted >= arg_count:
        return func
    if accepted == 1:
        return lambda value, *args: func(value)
    if accepted == 0:
        return lambda *args: func()
    return lambda *args: func(*args[:accepted])


def property_of(path: Any) -> Callable:
    """Accessor for a key, index or nested path."""
    if isinstance(path, list):
        path = tuple(path)
    return lambda value, *args: get(value, path)


def matches(source: Mapping) -> Callable:
    """
    Partial-match predicate for ``source``.

    A single key whose expected value is a primitive compares that key
    directly instead of walking the whole pattern. Keys are looked up
    as is, never as paths, so a tuple key stays one key.
    """
    source = dict(source)
    if len(source) == 1:
        (key, expected), = source.items()
        if isinstance(expected, PRIMITIVE_TYPES):
            def match_one(value, *args):
                actual = _lookup(value, key)
                return actual is not _MISSING and primitive_equal(actual, expected)
            return match_one
    return lambda value, *args: is_match(value, source)


@dataclass(frozen=True)
class Iteratee:
    """Classified iteratee shorthand."""
    kind: IterateeKind
    target: Any = None

    @property
    def is_function(self) -> bool:
        return self.kind is IterateeKind.FUNCTION

    def resolve(self, arg_count: int = 3, this_arg: Any = None) -> Callable:
        """Build the canonical callable, accepting up to ``arg_count`` arguments."""
        if self.kind is IterateeKind.FUNCTION:
            func = self.target
            if this_arg is not None:
                func = types.MethodType(func, this_arg)
            return _fit_arity(func, arg_count)
        if self.kind is IterateeKind.PATH:
            return property_of(self.target)
        if self.kind is IterateeKind.MATCHER:
            return matches(self.target)
        return identity


def classify_iteratee(value: Any) -> Iteratee:
    if isinstance(value, Iteratee):
        return value
    if value is None:
        return Iteratee(IterateeKind.IDENTITY)
    if callable(value):
        return Iteratee(IterateeKind.FUNCTION, value)
    if isinstance(value, Mapping):
        return Iteratee(IterateeKind.MATCHER, value)
    if isinstance(value, (str, int, list, tuple)) and not isinstance(value, bool):
        return Iteratee(IterateeKind.PATH, value)
    raise TypeError(
        f"{FUNC_ERROR_TEXT}, property path or match pattern; got {type(value).__name__}"
    )


def create_iteratee(value: Any, this_arg: Any = None, arg_count: int = 3) -> Callable:
    """
    Resolve any iteratee shorthand into a callable.

    >>> create_iteratee('a')({'a': 1})
    1
    >>> create_iteratee({'a': 1})({'a': 1, 'b': 2})
    True
    """
    return classify_iteratee(value).resolve(arg_count, this_arg)


def is_fusable(value: Any, this_arg: Any = None) -> bool:
    """
    Whether an iteratee can run inside a fused lazy pass, which only
    supplies the element itself. Shorthands always can; functions can
    when they declare exactly one required positional parameter, counted
    after binding ``this_arg``.
    """
    iteratee = classify_iteratee(value)
    if not iteratee.is_function:
        return True
    func = iteratee.target
    if this_arg is not None:
        func = types.MethodType(func, this_arg)
    return declared_arity(func) == 1
