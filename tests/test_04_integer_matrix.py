"""Integer matrix tests."""
import io

import numpy as np
import pytest

from latticerational.math import IntegerMatrix, NotSquareError


def test_new_is_zero():
    m = IntegerMatrix(2, 3)
    assert m.size() == (2, 3)
    assert m.get_value_at(1, 2) == 0
    with pytest.raises(ValueError):
        IntegerMatrix(0, 3)


def test_set_get():
    m = IntegerMatrix(3, 3)
    m.set_value_at(2, 1, -7)
    assert m.get_value_at(2, 1) == -7
    assert isinstance(m.get_value_at(2, 1), int)


@pytest.mark.parametrize("rows,det", [
    ([[3, 8], [4, 6]], -14),
    ([[2, 1, 0], [1, 1, 0], [0, 0, 1]], 1),
    ([[0, 1, 0], [1, 0, 0], [0, 0, 1]], -1),
    ([[1, 2, 3], [4, 5, 6], [7, 8, 9]], 0),
    ([[5]], 5),
])
def test_determinant(rows, det):
    assert IntegerMatrix.from_rows(rows).determinant() == det


def test_determinant_not_square():
    with pytest.raises(NotSquareError):
        IntegerMatrix(2, 3).determinant()


def test_identity():
    assert IntegerMatrix.identity(3).is_identity()
    assert not IntegerMatrix.from_rows([[1, 0], [0, -1]]).is_identity()
    assert not IntegerMatrix(2, 3).is_identity()


def test_from_numpy_copies():
    array = np.array([[1, 2], [3, 4]])
    m = IntegerMatrix.from_numpy(array)
    array[0, 0] = 99
    assert m.get_value_at(0, 0) == 1
    out = m.to_numpy()
    out[1, 1] = 0
    assert m.get_value_at(1, 1) == 4
    with pytest.raises(ValueError):
        IntegerMatrix.from_numpy(np.arange(3))


def test_print():
    stream = io.StringIO()
    IntegerMatrix.from_rows([[1, -2], [0, 10]]).print(stream)
    assert stream.getvalue() == "[    1   -2 ]\n[    0   10 ]\n"


def test_equality():
    assert IntegerMatrix.from_rows([[1, 2]]) == IntegerMatrix.from_rows([[1, 2]])
    assert IntegerMatrix.from_rows([[1, 2]]) != IntegerMatrix.from_rows([[2, 1]])
