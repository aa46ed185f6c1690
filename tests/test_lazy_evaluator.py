"""
Tests for the fused lazy evaluator.

Validates:
  - fused results match the eager functions step by step
  - short-circuiting on take and take_while
  - reversal, right-hand variants and slicing
  - immutability and repeatable evaluation
  - replay of recorded actions for non-array sources
"""

import logging

import numpy as np
import pytest
from chainfuse.eager import arrays as eager_arrays
from chainfuse.eager import collection as eager_collection
from chainfuse.optimization.lazy_evaluator import LazyPipeline, is_lazy_eligible, lazy
from chainfuse.optimization.view import ViewTransform


def is_even(x):
    return x % 2 == 0


def triple(x):
    return x * 3


def gt(n):
    return lambda x: x > n


def lt(n):
    return lambda x: x < n


def run_eager(source, steps):
    value = source
    for name, *args in steps:
        module = eager_collection if name in ('map', 'filter', 'reject') else eager_arrays
        value = getattr(module, name)(value, *args)
    return value


def run_lazy(source, steps):
    pipeline = lazy(source)
    for name, *args in steps:
        pipeline = getattr(pipeline, name)(*args)
    return pipeline.value()


PIPELINES = [
    [('filter', is_even), ('map', triple), ('take', 3)],
    [('map', triple), ('filter', is_even), ('drop', 2), ('take', 4)],
    [('take', 5), ('filter', is_even)],
    [('filter', is_even), ('take', 5), ('filter', gt(4))],
    [('filter', is_even), ('take', 3), ('drop', 1)],
    [('drop_while', lt(3)), ('take_while', lt(10)), ('map', triple)],
    [('reverse',), ('filter', is_even), ('take', 3), ('reverse',)],
    [('filter', is_even), ('take_right', 3), ('map', triple)],
    [('drop', 2), ('take_right', 4), ('reverse',)],
    [('reject', is_even), ('drop_right', 2), ('take', 10)],
    [('slice', 2, 8), ('filter', is_even)],
    [('slice', -6, -1)],
    [('slice', -6, 18), ('map', triple)],
    [('filter', is_even), ('slice', 1, 4)],
    [('take_right_while', gt(15)), ('drop_while', lt(17))],
    [('filter', gt(3)), ('drop_right_while', gt(12)), ('take_right', 2)],
    [('compact',), ('initial',), ('rest',)],
    [('map', triple), ('take', 8), ('filter', is_even), ('reverse',), ('take', 2)],
]


class TestFusionEquivalence:
    @pytest.mark.parametrize('steps', PIPELINES)
    def test_list_source(self, steps):
        data = list(range(20))
        assert run_lazy(data, steps) == run_eager(data, steps)

    @pytest.mark.parametrize('steps', PIPELINES)
    def test_tuple_and_range_sources(self, steps):
        expected = run_eager(list(range(20)), steps)
        assert run_lazy(tuple(range(20)), steps) == expected
        assert run_lazy(range(20), steps) == expected

    @pytest.mark.parametrize('steps', PIPELINES)
    def test_ndarray_source(self, steps):
        expected = run_eager(list(range(20)), steps)
        assert [int(v) for v in run_lazy(np.arange(20), steps)] == expected

    @pytest.mark.parametrize('steps', PIPELINES)
    def test_empty_source(self, steps):
        assert run_lazy([], steps) == []


class TestShortCircuit:
    def test_filtered_take_stops_early(self):
        calls = []

        def double(x):
            calls.append(x)
            return x * 2

        result = lazy(range(1000)).map(double).filter(gt(10)).take(2).value()
        assert result == [12, 14]
        assert calls == list(range(8))

    def test_unfiltered_take_is_a_view(self):
        calls = []
        lazy(range(1000)).map(lambda x: calls.append(x) or x).take(3).value()
        assert calls == [0, 1, 2]

    def test_take_while_stops_at_first_failure(self):
        calls = []

        def small(x):
            calls.append(x)
            return x < 3

        assert lazy(range(100)).take_while(small).value() == [0, 1, 2]
        assert calls == [0, 1, 2, 3]

    def test_nothing_runs_before_value(self):
        def boom(x):
            raise ValueError("boom")

        pipeline = lazy([1, 2]).map(boom)
        with pytest.raises(ValueError, match="boom"):
            pipeline.value()


class TestSizing:
    def test_take_drop_complement(self):
        data = list(range(20))
        evens = [x for x in data if is_even(x)]
        for n in range(0, 25):
            assert lazy(data).take(n).value() + lazy(data).drop(n).value() == data
            filtered = lazy(data).filter(is_even)
            assert filtered.take(n).value() + filtered.drop(n).value() == evens

    def test_take_bound(self):
        data = list(range(20))
        for n in range(0, 15):
            assert len(lazy(data).filter(is_even).take(n).value()) == min(n, 10)
            assert len(lazy(data).take(n).value()) == n

    def test_size_arguments_are_coerced(self):
        data = list(range(10))
        assert lazy(data).take('3').value() == [0, 1, 2]
        assert lazy(data).take(2.9).value() == [0, 1]
        assert lazy(data).take(-1).value() == []
        assert lazy(data).take().value() == [0]
        assert lazy(data).drop(float('inf')).value() == []

    def test_initial_and_rest(self):
        assert lazy([1, 2, 3]).initial().value() == [1, 2]
        assert lazy([1, 2, 3]).rest().value() == [2, 3]
        assert lazy([1]).rest().value() == []


class TestDirection:
    def test_reverse(self):
        data = list(range(10))
        assert lazy(data).reverse().value() == data[::-1]
        assert lazy(data).reverse().reverse().value() == data
        assert lazy(data).reverse().take(3).value() == [9, 8, 7]

    def test_reverse_leaves_source_untouched(self):
        data = [1, 2, 3]
        lazy(data).reverse().value()
        assert data == [1, 2, 3]

    def test_filtered_reverse(self):
        data = list(range(20))
        assert lazy(data).filter(is_even).reverse().take(2).value() == [18, 16]

    def test_right_variants(self):
        data = list(range(20))
        assert lazy(data).take_right(3).value() == [17, 18, 19]
        assert lazy(data).filter(is_even).take_right(2).value() == [16, 18]
        assert lazy(data).filter(is_even).drop_right(8).value() == [0, 2]

    def test_while_from_end(self):
        data = list(range(20))
        assert lazy(data).take_right_while(gt(16)).value() == [17, 18, 19]
        assert lazy(data).drop_right_while(gt(16)).value() == list(range(17))
        assert lazy(data).filter(is_even).take_right_while(gt(12)).value() == [14, 16, 18]

    def test_direction_property(self):
        assert lazy([1]).direction == 1
        assert lazy([1]).reverse().direction == -1


class TestSlice:
    def test_positive_bounds(self):
        assert lazy(range(10)).slice(2, 5).value() == [2, 3, 4]
        assert lazy(range(10)).slice(5, 2).value() == []

    def test_negative_bounds(self):
        assert lazy(range(10)).slice(-3).value() == [7, 8, 9]
        assert lazy(range(10)).slice(-4, -1).value() == [6, 7, 8]
        assert lazy(range(10)).slice(2, -2).value() == [2, 3, 4, 5, 6, 7]

    def test_negative_start_positive_end(self):
        assert lazy(range(10)).slice(-4, 8).value() == [6, 7]
        assert lazy(range(10)).slice(-4, 8).map(triple).value() == [18, 21]


class TestPipelineState:
    def test_immutability(self):
        base = lazy(list(range(20))).filter(is_even)
        two = base.take(2)
        four = base.take(4)
        assert base.value() == list(range(0, 20, 2))
        assert two.value() == [0, 2]
        assert four.value() == [0, 2, 4, 6]

    def test_value_is_repeatable(self):
        pipeline = lazy(list(range(20))).drop_while(lt(5)).filter(is_even).take(3)
        assert pipeline.value() == pipeline.value() == [6, 8, 10]

    def test_properties(self):
        pipeline = lazy(range(10)).filter(is_even).take(3)
        assert pipeline.filtered
        assert pipeline.take_count == 3
        assert len(pipeline.iteratees) == 1
        assert lazy(range(10)).take(3).views == (ViewTransform('take', 3),)

    def test_filter_after_take_wraps(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='chainfuse.optimization.lazy_evaluator'):
            pipeline = lazy(range(20)).filter(is_even).take(5).filter(gt(4))
        assert isinstance(pipeline.source, LazyPipeline)
        assert "Wrapping pipeline" in caplog.text
        assert pipeline.value() == [6, 8]

    def test_plant(self):
        pipeline = lazy([1, 2, 3]).map(triple)
        assert pipeline.plant([10]).value() == [30]
        assert pipeline.value() == [3, 6, 9]

    def test_plant_reaches_wrapped_source(self):
        pipeline = lazy([]).filter(is_even).take(2).filter(gt(0))
        assert pipeline.plant(list(range(10))).value() == [2]


class TestTerminals:
    def test_first_and_last(self):
        assert lazy(range(10)).filter(gt(5)).first() == 6
        assert lazy(range(10)).filter(lt(5)).last() == 4
        assert lazy([]).first() is None
        assert lazy([]).last() is None

    def test_reduce_and_count(self):
        assert lazy(range(1, 6)).reduce(lambda a, b: a * b, 1) == 120
        assert lazy(range(10)).filter(is_even).count() == 5

    def test_collect_and_iter(self):
        pipeline = lazy(range(4)).map(triple)
        assert pipeline.collect() == [0, 3, 6, 9]
        assert list(pipeline) == [0, 3, 6, 9]


class TestShorthands:
    users = [
        {'name': 'ann', 'age': 30, 'active': True},
        {'name': 'bob', 'age': 25, 'active': False},
        {'name': 'cid', 'age': 35, 'active': True},
    ]

    def test_pluck_and_where(self):
        assert lazy(self.users).where({'active': True}).pluck('name').value() == ['ann', 'cid']

    def test_matcher_and_property(self):
        assert lazy(self.users).filter({'age': 25}).map('name').value() == ['bob']
        assert lazy(self.users).reject('active').map('name').value() == ['bob']

    def test_compact(self):
        assert lazy([0, 1, None, 2, '', 3]).compact().value() == [1, 2, 3]


class TestNonArraySources:
    def test_mapping_replays_actions(self):
        source = {'a': 1, 'b': 2, 'c': 3}
        assert lazy(source).filter(gt(1)).map(lambda v: v * 10).value() == [20, 30]

    def test_mapping_with_wrapped_pipeline(self):
        source = {'a': 1, 'b': 2, 'c': 3, 'd': 4}
        assert lazy(source).filter(gt(1)).take(2).filter(gt(2)).value() == [3]

    def test_none_source(self):
        assert lazy(None).map(triple).take(2).value() == []

    def test_eligibility(self):
        assert is_lazy_eligible([1])
        assert is_lazy_eligible((1,))
        assert is_lazy_eligible(range(3))
        assert is_lazy_eligible(np.arange(3))
        assert not is_lazy_eligible(np.zeros((2, 2)))
        assert not is_lazy_eligible({'a': 1})
        assert not is_lazy_eligible('abc')
        assert not is_lazy_eligible(None)


class TestThisArg:
    @staticmethod
    def offset(self, x):
        return x + self

    def test_bound_iteratees(self):
        assert lazy(range(5)).map(self.offset, 10).take(2).value() == [10, 11]
        assert lazy(range(10)).filter(lambda lo, x: x > lo, 6).value() == [7, 8, 9]
        assert lazy(range(10)).drop_while(lambda hi, x: x < hi, 8).value() == [8, 9]

    def test_mapping_replays_bound_iteratees(self):
        assert lazy({'a': 1, 'b': 2}).map(self.offset, 100).value() == [101, 102]
