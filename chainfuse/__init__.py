"""
chainfuse: Chainable Functional Utilities with Lazy Iterator Fusion
===================================================================

chainfuse wraps sequences in a fluent object whose array operations are
deferred and fused: a chain of map/filter/take/drop/while calls runs as
one pass over the source, stopping as soon as the result is complete.

Core Components:
    - core: iteratee shorthands and numeric argument coercion
    - optimization: view calculation, operation queue, fused evaluator
    - eager: conventional implementations used when fusion does not apply
    - runtime: the chain wrapper, its method table and flow composition

Usage:
    >>> import chainfuse
    >>> chainfuse.wrap([1, 2, 3, 4, 5, 6]).filter(lambda x: x % 2 == 0).map(lambda x: x * 10).take(2).value()
    [20, 40]

    >>> users = [{'name': 'ann', 'active': True}, {'name': 'bob', 'active': False}]
    >>> chainfuse.wrap(users).filter({'active': True}).pluck('name').value()
    ['ann']
"""

__version__ = "1.0.0"
__author__ = "chainfuse contributors"

from chainfuse.core.coercion import to_integer, to_size
from chainfuse.core.iteratee import (
    FUNC_ERROR_TEXT,
    Iteratee,
    IterateeKind,
    classify_iteratee,
    create_iteratee,
    identity,
)
from chainfuse.optimization.view import View, ViewTransform, compute_view
from chainfuse.optimization.operations import Action, LazyOp, OpKind
from chainfuse.optimization.lazy_evaluator import LazyPipeline, lazy
from chainfuse.runtime.method_table import MethodSpec, MethodTable
from chainfuse.runtime.wrapper import ChainWrapper, chain, configure, register_method, wrap
from chainfuse.runtime.flow import LaziableFunc, flow, flow_right, laziable
from chainfuse.eager import arrays, collection, objects
