"""
Tests for key access, cloning and structural equality.
"""

import numpy as np
import pytest
from chainfuse.eager.objects import (
    clone,
    deep_clone,
    deep_equal,
    get,
    has,
    is_match,
    keys,
    primitive_equal,
    values,
)


class Point:
    def __init__(self, x, y=0):
        self.x = x
        self.y = y


class TestAccess:
    def test_get_paths(self):
        data = {'a': [{'b': 1}]}
        assert get(data, 'a') == [{'b': 1}]
        assert get(data, ['a', 0, 'b']) == 1
        assert get(data, ['a', 5, 'b'], 'missing') == 'missing'
        assert get(None, 'a') is None

    def test_negative_index(self):
        assert get([1, 2, 3], -1) == 3

    def test_attributes(self):
        assert get(Point(3), 'x') == 3
        assert has(Point(3), 'y')
        assert not has(Point(3), 'z')

    def test_has_distinguishes_none_values(self):
        assert has({'a': None}, 'a')
        assert not has({'a': None}, 'b')

    def test_strings_are_not_indexed(self):
        assert not has('abc', 0)

    def test_keys_values(self):
        assert keys({'a': 1, 'b': 2}) == ['a', 'b']
        assert values({'a': 1, 'b': 2}) == [1, 2]
        assert keys([5, 6]) == [0, 1]
        assert keys(Point(1)) == ['x', 'y']
        assert values(Point(1, 2)) == [1, 2]
        assert keys(None) == []


class TestCloning:
    def test_clone_is_shallow(self):
        data = {'a': [1]}
        copied = clone(data)
        assert copied == data and copied is not data
        assert copied['a'] is data['a']

    def test_deep_clone(self):
        data = {'a': [1], 'arr': np.arange(3)}
        copied = deep_clone(data)
        assert copied['a'] is not data['a']
        assert deep_equal(copied, data)


class TestEquality:
    def test_primitives(self):
        assert primitive_equal(float('nan'), float('nan'))
        assert primitive_equal(1, 1.0)
        assert not primitive_equal(1, '1')
        assert not primitive_equal(np.arange(2), 1)

    def test_containers(self):
        assert deep_equal({'a': [1, {'b': 2}]}, {'a': [1, {'b': 2}]})
        assert not deep_equal({'a': 1}, {'a': 1, 'b': 2})
        assert not deep_equal([1], (1,))
        assert deep_equal((1, 2), (1, 2))
        assert deep_equal({1, 2}, {2, 1})

    def test_numpy(self):
        assert deep_equal(np.array([1, 2]), np.array([1, 2]))
        assert deep_equal(np.array([np.nan]), np.array([np.nan]))
        assert not deep_equal(np.array([1, 2]), np.array([[1, 2]]))
        assert not deep_equal(np.array([1]), [1])
        assert deep_equal({'a': np.arange(3)}, {'a': np.arange(3)})

    def test_plain_objects(self):
        assert deep_equal(Point(1, 2), Point(1, 2))
        assert not deep_equal(Point(1, 2), Point(2, 1))

    def test_cycles(self):
        a, b = [], []
        a.append(a)
        b.append(b)
        assert deep_equal(a, b)


class TestIsMatch:
    def test_partial(self):
        assert is_match({'a': 1, 'b': 2}, {'a': 1})
        assert not is_match({'a': 1}, {'a': 1, 'b': 2})

    def test_nested(self):
        obj = {'user': {'name': 'ann', 'tags': ['x']}}
        assert is_match(obj, {'user': {'name': 'ann'}})
        assert is_match(obj, {'user': {'tags': ['x']}})
        assert not is_match(obj, {'user': {'tags': ['y']}})

    def test_attributes(self):
        assert is_match(Point(1, 2), {'x': 1})

    @pytest.mark.parametrize('source', [{'a': 1}, {'a': {'b': 1}}])
    def test_none_never_matches(self, source):
        assert not is_match(None, source)
