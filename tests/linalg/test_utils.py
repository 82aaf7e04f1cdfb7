from math import pi

import numpy as np
import pytest

from dotmath import linalg
from dotmath.linalg.utils import Freezable, mutator


def test_clamp():
    """Test the clamp function."""
    assert linalg.clamp(0.5, 0, 1) == 0.5, "Value already within limits"
    assert linalg.clamp(0, 0, 1) == 0, "Value equal to one limit"
    assert linalg.clamp(-0.1, 0, 1) == 0, "Value too low"
    assert linalg.clamp(1.1, 0, 1) == 1, "Value too high"


def test_machine_epsilon():
    assert linalg.MACHINE_EPSILON == np.finfo(np.float64).eps


def test_cos_sin_snaps_to_zero():
    assert linalg.cos_sin(pi / 2) == (0, 1)
    assert linalg.cos_sin(pi) == (-1, 0)
    assert linalg.cos_sin(-pi / 2) == (0, -1)
    c, s = linalg.cos_sin(0.3)
    assert c != 0 and s != 0


def test_transform():
    matrix = np.array(
        [
            [2, 0, 0, 1],
            [0, 3, 0, 2],
            [0, 0, 4, 3],
            [0, 0, 0, 1],
        ]
    )
    vectors = [[1, 1, 1], [0, 0, 0]]

    result = linalg.transform(vectors, matrix)
    assert np.array_equal(result, [[3, 5, 7], [1, 2, 3]])

    result = linalg.transform(vectors, matrix, directions=True)
    assert np.array_equal(result, [[2, 3, 4], [0, 0, 0]])

    # A single vector works too
    assert np.array_equal(linalg.transform([1, 0, 0], matrix), [3, 2, 3])


class Counter(Freezable):
    __slots__ = ("count", "_frozen")

    def __init__(self):
        self.count = 0

    @mutator
    def increment(self):
        self.count += 1
        return self


def test_freezable():
    counter = Counter().increment()
    assert counter.count == 1
    assert not counter.is_immutable()

    assert counter.make_immutable() is counter
    assert counter.is_immutable()
    with pytest.raises(TypeError, match=r"Cannot modify immutable Counter \(increment\)"):
        counter.increment()
    with pytest.raises(TypeError, match=r"Cannot modify immutable Counter \(count\)"):
        counter.count = 5
    assert counter.count == 1
