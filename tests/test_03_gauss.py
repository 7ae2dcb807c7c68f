"""Linear system solving tests: identity, exact rational systems, singular systems and overflow."""
import pytest

from latticerational.math import (Gauss, Rational, RationalMatrix, RationalOverflowError, NotSquareError,
                                  SingularMatrixError, solve, ZERO)


def vec(*values):
    return [Rational(v) if isinstance(v, int) else Rational(*v) for v in values]


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_solve_identity(n):
    """Solving against the identity returns the right-hand side."""
    b = [Rational(i * i - 3, i + 1) for i in range(n)]
    assert solve(RationalMatrix.identity(n), b) == b


def test_solve_integer_system():
    m = RationalMatrix.from_rows([[2, 1, -1], [-3, -1, 2], [-2, 1, 2]])
    assert solve(m, vec(8, -11, -3)) == vec(2, 3, -1)


def test_solve_exact_rational_system():
    """A rational 3x3 system is solved bit-for-bit."""
    m = RationalMatrix.from_rows([["1/2", "1/3", 1], [2, -1, "1/4"], [0, "3/5", -2]])
    x = vec((1, 2), (-2, 3), (5, 7))
    b = m.multiply_vector(x)
    assert solve(m, b) == x


def test_solve_zero_leading_entry():
    """A zero in the first pivot position is handled by row swapping."""
    m = RationalMatrix.from_rows([[0, 1], [1, 0]])
    assert solve(m, vec(3, 4)) == vec(4, 3)


def test_solve_does_not_modify_inputs():
    m = RationalMatrix.from_rows([[1, 2], [3, 4]])
    m_copy = m.clone()
    b = vec(5, 6)
    b_copy = list(b)
    x = solve(m, b)
    assert m == m_copy
    assert b == b_copy
    assert m.multiply_vector(x) == b


def test_solve_accepts_integers():
    m = RationalMatrix.from_rows([[4, 0], [0, 2]])
    assert solve(m, [1, 1]) == vec((1, 4), (1, 2))


def test_solve_singular_consistent():
    """A singular but consistent system returns a particular solution."""
    m = RationalMatrix.from_rows([[1, 2], [2, 4]])
    b = vec(1, 2)
    x = solve(m, b)
    assert x == vec(1, 0)
    assert m.multiply_vector(x) == b


def test_solve_singular_inconsistent():
    """A singular system without solution is reported as such."""
    m = RationalMatrix.from_rows([[1, 2], [2, 4]])
    with pytest.raises(SingularMatrixError):
        solve(m, vec(1, 3))


def test_solve_all_zero():
    m = RationalMatrix(2, 2)
    assert solve(m, vec(0, 0)) == [ZERO, ZERO]
    with pytest.raises(SingularMatrixError):
        solve(m, vec(0, 1))


def test_solve_skips_zero_leading_column():
    """A zero first column advances the column cursor only; the system is still solved."""
    m = RationalMatrix.from_rows([[0, 1], [0, 2]])
    b = vec(1, 2)
    x = solve(m, b)
    assert x == vec(0, 1)
    assert m.multiply_vector(x) == b


def test_solve_pivots_right_of_diagonal():
    m = RationalMatrix.from_rows([[0, 1, 1], [0, 1, 0], [0, 0, 1]])
    b = vec(2, 1, 1)
    x = solve(m, b)
    assert x == vec(0, 1, 1)
    assert m.multiply_vector(x) == b


def test_solve_skipped_column_inconsistent():
    m = RationalMatrix.from_rows([[0, 1], [0, 2]])
    with pytest.raises(SingularMatrixError):
        solve(m, vec(1, 3))


def test_solve_rejects_floats():
    """Floats are not silently approximated."""
    with pytest.raises(TypeError):
        solve(RationalMatrix.identity(2), [0.5, 1])


def test_solve_not_square():
    with pytest.raises(NotSquareError):
        solve(RationalMatrix(2, 3), vec(1, 2))


def test_solve_overflow(raise_on_overflow):
    """Intermediate overflow during elimination is not silently wrapped."""
    m = RationalMatrix.from_rows([[2**62, 1], [1, 2**62]])
    with pytest.raises(RationalOverflowError):
        solve(m, vec(1, 1))


def test_singleton():
    assert Gauss.get_rational_instance() is Gauss.get_rational_instance()
