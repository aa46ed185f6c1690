"""Leaf helpers shared by the eager and lazy layers."""

from chainfuse.core.coercion import to_integer, to_size
from chainfuse.core.iteratee import (
    FUNC_ERROR_TEXT,
    Iteratee,
    IterateeKind,
    classify_iteratee,
    create_iteratee,
    declared_arity,
    identity,
    is_fusable,
    require_function,
)
