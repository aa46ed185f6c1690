"""
Operation Queue
===============

Entries queued on a lazy pipeline and the deferred eager actions that
replay the same calls when fusion cannot apply.

Queue entries are immutable descriptions. The progress tracking the
"while" variants need (whether the condition has already flipped, how
many elements were skipped, the last index seen) lives in ``OpState``,
which the evaluator creates fresh for every run, so pipelines can be
cloned and re-evaluated without one run leaking into another.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple


class ChainNode(ABC):
    """Anything that can sit in a chain's source position and be evaluated."""

    @abstractmethod
    def value(self) -> Any:
        ...

    @abstractmethod
    def plant(self, value: Any) -> 'ChainNode':
        """Copy of this chain with ``value`` as its root source."""


def resolve(source: Any) -> Any:
    return source.value() if isinstance(source, ChainNode) else source


def plant_source(source: Any, value: Any) -> Any:
    return source.plant(value) if isinstance(source, ChainNode) else value


class OpKind(IntEnum):
    DROP_WHILE = 0
    FILTER = 1
    MAP = 2
    TAKE_WHILE = 3


@dataclass(frozen=True)
class LazyOp:
    """A fused operation: a resolved unary iteratee tagged with its kind."""
    kind: OpKind
    iteratee: Callable[[Any], Any]
    # bounded drop: skip exactly ``limit`` elements instead of testing
    limit: Optional[int] = None

    @property
    def is_filtering(self) -> bool:
        return self.kind is not OpKind.MAP


@dataclass
class OpState:
    """Per-evaluation scratch state for one queue entry."""
    op: LazyOp
    done: bool = False
    count: int = 0
    index: int = 0


@dataclass(frozen=True)
class Action:
    """A deferred eager call: ``func(value, *args, **kwargs)``."""
    func: Callable
    args: Tuple = field(default_factory=tuple)
    kwargs: Mapping[str, Any] = field(default_factory=dict)

    def apply(self, value: Any) -> Any:
        return self.func(value, *self.args, **self.kwargs)

    def __repr__(self):
        name = getattr(self.func, '__name__', repr(self.func))
        return f"Action({name}, args={len(self.args)})"


def replay(value: Any, actions: Iterable[Action]) -> Any:
    """Fold ``actions`` over ``value`` left to right."""
    for action in actions:
        value = action.apply(value)
    return value
