"""
Flow Composition
================

``flow(f, g, h)(x) == h(g(f(x)))``, with shortcut fusion: functions
tagged as laziable are also replayed onto a template chain, and a call
with one large array runs that template as a single fused pipeline
instead of calling each function in turn.

A function is laziable only through an explicit capability tag:

    >>> evens = laziable('filter', lambda x: x % 2 == 0)
    >>> evens.is_laziable, evens.lazy_op_name
    (True, 'filter')
    >>> pipeline = flow(evens, laziable('map', lambda x: x * 10), laziable('take', 2))
    >>> pipeline(list(range(1000)))
    [0, 20]
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

from ..core.iteratee import require_function
from ..optimization.lazy_evaluator import is_lazy_eligible
from .wrapper import ChainWrapper

logger = logging.getLogger(__name__)

# Arrays shorter than this are cheaper to process eagerly.
LARGE_ARRAY_SIZE = 200


@dataclass(frozen=True)
class LaziableFunc:
    """
    A function reference carrying its lazy capability.

    Calling it applies ``fn(value, *args)``; when ``is_laziable`` is set,
    ``lazy_op_name`` names the chain method that performs the same step.
    """
    fn: Callable
    is_laziable: bool = False
    lazy_op_name: Optional[str] = None
    args: Tuple = field(default_factory=tuple)

    def __call__(self, value: Any) -> Any:
        return self.fn(value, *self.args)


def laziable(op_name: str, *args: Any) -> LaziableFunc:
    """
    Tag the chain method ``op_name`` with its arguments as a flow step.

    Methods without a fused counterpart are still accepted; they are
    tagged as not laziable and run eagerly.
    """
    spec = ChainWrapper.methods.get(op_name)
    if spec is None:
        raise ValueError(f"Unknown chain method {op_name!r}")
    return LaziableFunc(spec.func, spec.lazy is not None, op_name, tuple(args))


def _create_flow(funcs: Tuple[Callable, ...], lazy_threshold: int) -> Callable:
    for func in funcs:
        require_function(func)

    template = None
    if any(isinstance(f, LaziableFunc) and f.is_laziable for f in funcs):
        template = ChainWrapper([], chain_all=True)
        for func in funcs:
            if isinstance(func, LaziableFunc) and func.is_laziable:
                template = getattr(template, func.lazy_op_name)(*func.args)
            else:
                template = template.thru(func)

    def flowed(*args):
        if template is not None and len(args) == 1:
            value = args[0]
            if is_lazy_eligible(value) and len(value) >= lazy_threshold:
                logger.debug("Flow planting a %d-element array into its lazy template", len(value))
                return template.plant(value).value()
        if not funcs:
            return args[0] if args else None
        result = funcs[0](*args)
        for func in funcs[1:]:
            result = func(result)
        return result

    return flowed


def flow(*funcs: Callable, lazy_threshold: int = LARGE_ARRAY_SIZE) -> Callable:
    """Compose ``funcs`` left to right."""
    return _create_flow(funcs, lazy_threshold)


def flow_right(*funcs: Callable, lazy_threshold: int = LARGE_ARRAY_SIZE) -> Callable:
    """Compose ``funcs`` right to left."""
    return _create_flow(tuple(reversed(funcs)), lazy_threshold)
