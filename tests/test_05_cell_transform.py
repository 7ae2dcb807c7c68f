"""Cell transformation tests: parsing, formatting, determinant check, axes and unimodular search."""
import logging

import numpy as np
import pytest

import latticerational as lr
from latticerational.math import Rational, RationalMatrix, IntegerMatrix, SingularMatrixError


def test_parse_cell_choice():
    """Column i holds the coefficients of new axis i."""
    m = lr.parse_cell_transformation("-a-c,b,a")
    assert m == RationalMatrix.from_rows([[-1, 0, 1], [0, 1, 0], [-1, 0, 0]])


def test_parse_fractions():
    m = lr.parse_cell_transformation("1/2a+1/2b, -1/2a+1/2b, c")
    assert m.get_value_at(0, 0) == Rational(1, 2)
    assert m.get_value_at(0, 1) == Rational(-1, 2)
    assert m.get_value_at(1, 1) == Rational(1, 2)
    assert m.get_value_at(2, 2) == Rational(1)
    assert m.determinant() == Rational(1, 2)


def test_parse_identity_and_repeats():
    assert lr.parse_cell_transformation(" a , b , c ").is_identity()
    assert lr.parse_cell_transformation("a+a,b,c").get_value_at(0, 0) == Rational(2)


@pytest.mark.parametrize("text", ["a,b", "a,b,c,a", "a,b,d", "a,,c", "a,b,c/2", "1/0a,b,c", "a+,b,c"])
def test_parse_invalid(text):
    with pytest.raises(ValueError):
        lr.parse_cell_transformation(text)


@pytest.mark.parametrize("text", ["-a-c,b,a", "c,b,-a-c", "1/2a+1/2b,-1/2a+1/2b,c", "2a-b,b,-3/4c"])
def test_format(text):
    assert lr.format_cell_transformation(lr.parse_cell_transformation(text)) == text


def test_format_needs_3x3():
    with pytest.raises(ValueError):
        lr.format_cell_transformation(RationalMatrix.identity(2))


def test_check_transformation(caplog):
    with caplog.at_level(logging.INFO):
        det = lr.check_transformation(lr.parse_cell_transformation("-a-c,b,a"))
    assert det == Rational(1)
    assert "Determinant = 1" in caplog.text


def test_check_transformation_singular():
    with pytest.raises(SingularMatrixError):
        lr.check_transformation(lr.parse_cell_transformation("a,a,c"))


def test_transform_axes():
    axes = 10.0 * np.eye(3)
    new_axes = lr.transform_axes(axes, lr.parse_cell_transformation("-a-c,b,a"))
    assert np.allclose(new_axes, [[-10, 0, -10], [0, 10, 0], [10, 0, 0]])
    with pytest.raises(ValueError):
        lr.transform_axes(np.eye(2), RationalMatrix.identity(3))


def test_cell_choices():
    choices = lr.cell_choices('b')
    assert len(choices) == 2
    for m in choices:
        assert m.determinant() == Rational(1)
    with pytest.raises(ValueError):
        lr.cell_choices('c')


@pytest.mark.timeout(120)
def test_unimodular_transforms():
    """Every matrix found has determinant +1; known members are present."""
    with lr.DisableLogger():
        found = list(lr.unimodular_transforms(1))
    assert all(m.determinant() == 1 for m in found)
    assert any(m.is_identity() for m in found)
    assert IntegerMatrix.from_rows([[0, 1, 0], [1, 0, 0], [0, 0, -1]]) in found
    assert IntegerMatrix.from_rows([[0, 1, 0], [1, 0, 0], [0, 0, 1]]) not in found


def test_unimodular_transforms_trivial():
    assert list(lr.unimodular_transforms(0)) == []
    with pytest.raises(ValueError):
        list(lr.unimodular_transforms(-1))
