"""
View Calculator
===============

Folds pending drop/take transforms into a concrete ``[start, end)``
window over an array-backed source, so slicing never materializes
intermediate arrays.
"""

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Union

Size = Union[int, float]

DROP = 'drop'
DROP_RIGHT = 'drop_right'
TAKE = 'take'
TAKE_RIGHT = 'take_right'

VIEW_KINDS = (DROP, DROP_RIGHT, TAKE, TAKE_RIGHT)


@dataclass(frozen=True)
class ViewTransform:
    """A pending size-bounding transform."""
    kind: str
    size: Size

    def __post_init__(self):
        if self.kind not in VIEW_KINDS:
            raise ValueError(f"Unknown view transform {self.kind!r}, expected one of {VIEW_KINDS}")


class View(NamedTuple):
    start: Size
    end: Size

    @property
    def size(self) -> int:
        """Number of elements in the window; 0 when ``start >= end``."""
        return int(max(0, self.end - self.start))


def compute_view(length: int, transforms: Iterable[ViewTransform]) -> View:
    """
    Compute the effective window of ``transforms`` over ``[0, length)``.

    >>> compute_view(10, [ViewTransform('drop', 2), ViewTransform('take', 3)])
    View(start=2, end=5)
    """
    start, end = 0, length
    for transform in transforms:
        size = transform.size
        kind = transform.kind
        if kind == DROP:
            start += size
        elif kind == DROP_RIGHT:
            end -= size
        elif kind == TAKE:
            end = min(end, start + size)
        else:
            start = max(start, end - size)
    return View(start, end)
