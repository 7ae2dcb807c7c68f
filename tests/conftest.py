import pytest
from latticerational.names import RAISE
from latticerational.math import Rational, OverflowPolicy


@pytest.fixture
def raise_on_overflow():
    """Report overflows as RationalOverflowError instead of aborting the process."""
    with OverflowPolicy(RAISE):
        yield


@pytest.fixture(params=[(1, 2), (-3, 4), (7, 1), (0, 1), (-22, 7), (355, 113)], scope="session")
def rational(request: pytest.FixtureRequest) -> Rational:
    """Provide session-level fixture for small canonical rationals."""
    return Rational(*request.param)


@pytest.fixture(params=[(2, 3), (-1, 5), (9, 1), (-13, 6)], scope="session")
def nonzero_rational(request: pytest.FixtureRequest) -> Rational:
    """Provide session-level fixture for small nonzero rationals."""
    return Rational(*request.param)
