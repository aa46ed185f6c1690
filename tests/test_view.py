"""
Tests for view calculation over drop/take transforms.
"""

import math

import pytest
from chainfuse.optimization.view import View, ViewTransform, compute_view


def views(*pairs):
    return [ViewTransform(kind, size) for kind, size in pairs]


class TestComputeView:
    def test_no_transforms(self):
        view = compute_view(10, [])
        assert view == View(0, 10)
        assert view.size == 10

    def test_drop_then_take(self):
        assert compute_view(10, views(('drop', 2), ('take', 3))) == View(2, 5)

    def test_take_then_drop(self):
        assert compute_view(10, views(('take', 5), ('drop', 2))) == View(2, 5)

    def test_right_variants(self):
        assert compute_view(10, views(('take_right', 3))) == View(7, 10)
        assert compute_view(10, views(('drop_right', 4))) == View(0, 6)

    def test_overlapping_bounds(self):
        view = compute_view(10, views(('drop', 3), ('take_right', 20)))
        assert view == View(3, 10)

    def test_drop_past_end_is_empty(self):
        assert compute_view(10, views(('drop', 20))).size == 0
        assert compute_view(10, views(('drop', 6), ('drop_right', 6))).size == 0

    def test_infinite_sizes(self):
        assert compute_view(10, views(('take', math.inf))) == View(0, 10)
        assert compute_view(10, views(('drop', math.inf))).size == 0
        assert compute_view(10, views(('take_right', math.inf))) == View(0, 10)

    def test_empty_source(self):
        assert compute_view(0, views(('take', 3))).size == 0

    def test_inverted_window_size(self):
        assert View(5, 3).size == 0

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            ViewTransform('skip', 1)
