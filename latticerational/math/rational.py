"""
Rational - exact fractions over signed 64-bit numerator/denominator pairs.

Every value is kept in canonical form: gcd(|num|, den) == 1, den > 0 and zero
is represented as 0/1. All products of numerator and denominator parts are
checked for signed 64-bit overflow. An overflow is never wrapped or promoted
to a bigger representation: it is reported and the process is aborted, unless
the RAISE policy is active, in which case RationalOverflowError is raised.

Example:
    >>> a = Rational(6, -4)
    >>> a
    Rational(-3, 2)
    >>> str(a + Rational(1, 2))
    '-1'
"""

import logging
import math
import operator
import os
import sys
from contextvars import ContextVar
from fractions import Fraction
from typing import Union

from sympy import Rational as SympyRational

from ..names import ABORT, RAISE, OVERFLOW_POLICIES, INT64_MIN, INT64_MAX

_TWO64 = 2**64

_overflow_policy = ContextVar("overflow_policy", default=ABORT)


class RationalOverflowError(ArithmeticError):
    """Signed 64-bit overflow in the rational number library (RAISE policy only)"""

    def __init__(self, result: int, a: int, b: int, op: str = '*'):
        super().__init__(f"Overflow detected in rational number library: {result} < {a} {op} {b}")
        self.result = result
        self.a = a
        self.b = b
        self.op = op


def set_overflow_policy(policy: str) -> None:
    """Select what happens on overflow: ABORT (default) or RAISE.

    The policy is context-local: it applies to the calling thread or asyncio
    task only. New threads start with ABORT.

    Args:
        policy: One of latticerational.names.OVERFLOW_POLICIES
    """
    if policy not in OVERFLOW_POLICIES:
        raise ValueError(f"Unknown overflow policy '{policy}'. Choose from {OVERFLOW_POLICIES}.")
    _overflow_policy.set(policy)


def get_overflow_policy() -> str:
    """Return the active overflow policy"""
    return _overflow_policy.get()


class OverflowPolicy():
    """Environment in which the given overflow policy is active"""

    def __init__(self, policy: str):
        if policy not in OVERFLOW_POLICIES:
            raise ValueError(f"Unknown overflow policy '{policy}'. Choose from {OVERFLOW_POLICIES}.")
        self.policy = policy
        self._token = None

    def __enter__(self):
        self._token = _overflow_policy.set(self.policy)
        return self

    def __exit__(self, exit_type, exit_value, exit_traceback):
        _overflow_policy.reset(self._token)


def _wrap(value: int) -> int:
    """Reduce an integer into the signed 64-bit range like two's complement hardware does"""
    return (value - INT64_MIN) % _TWO64 + INT64_MIN


def _overflow(c: int, a: int, b: int, op: str = '*'):
    if _overflow_policy.get() == RAISE:
        raise RationalOverflowError(c, a, b, op)
    logging.critical("Overflow detected in rational number library.")
    logging.critical(f"{c:,} < {a:,} {op} {b:,}")
    sys.stderr.flush()
    os.abort()


def _check_overflow(c: int, a: int, b: int):
    if (a == 0) or (b == 0):
        if c != 0:
            _overflow(c, a, b)
    elif (abs(c) < abs(a)) or (abs(c) < abs(b)):
        _overflow(c, a, b)


def _checked_mul(a: int, b: int) -> int:
    exact = a * b
    c = _wrap(exact)
    _check_overflow(c, a, b)
    # The magnitude test above misses some wrapped products, e.g. (2**32+1)**2
    if c != exact:
        _overflow(c, a, b)
    return c


def _checked_add(a: int, b: int) -> int:
    exact = a + b
    if not INT64_MIN <= exact <= INT64_MAX:
        _overflow(_wrap(exact), a, b, '+')
    return exact


def _as_int64(value, what: str) -> int:
    value = operator.index(value)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{what} {value} does not fit into a signed 64-bit integer")
    return value


def _squish(num: int, den: int):
    """Reduce num/den to canonical form"""
    if num == 0:
        return 0, 1
    if den == 0:
        raise ZeroDivisionError(f"Rational({num}, 0)")
    g = math.gcd(num, den)
    num //= g
    den //= g
    if den < 0:
        num = _checked_mul(num, -1)
        den = _checked_mul(den, -1)
    return num, den


class Rational:
    """
    Exact fraction num/den in canonical form.

    Rational is an immutable value type. Construct it from a numerator and a
    denominator; the pair is reduced immediately. Passing den == 0 with a
    nonzero numerator raises ZeroDivisionError, 0/0 gives zero.
    """

    __slots__ = ('_num', '_den')

    def __init__(self, num: int = 0, den: int = 1):
        num = _as_int64(num, 'numerator')
        den = _as_int64(den, 'denominator')
        self._num, self._den = _squish(num, den)

    @classmethod
    def _raw(cls, num: int, den: int) -> 'Rational':
        r = object.__new__(cls)
        r._num = num
        r._den = den
        return r

    @classmethod
    def _canonical(cls, num: int, den: int) -> 'Rational':
        return cls._raw(*_squish(num, den))

    @property
    def num(self) -> int:
        return self._num

    @property
    def den(self) -> int:
        return self._den

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    def to_double(self) -> float:
        """Convert to float. Lossy, for display only."""
        return self._num / self._den

    def add(self, other: 'Rational') -> 'Rational':
        """Return self + other"""
        other = _coerce(other)
        trt1 = _checked_mul(self._num, other._den)
        trt2 = _checked_mul(other._num, self._den)
        den = _checked_mul(self._den, other._den)
        return Rational._canonical(_checked_add(trt1, trt2), den)

    def subtract(self, other: 'Rational') -> 'Rational':
        """Return self - other"""
        return self.add(_coerce(other).negate())

    def multiply(self, other: 'Rational') -> 'Rational':
        """Return self * other"""
        other = _coerce(other)
        num = _checked_mul(self._num, other._num)
        den = _checked_mul(self._den, other._den)
        return Rational._canonical(num, den)

    def divide(self, other: 'Rational') -> 'Rational':
        """
        Divide by other, computed as multiplication by the swapped fraction.

        Dividing zero by zero gives zero, dividing anything else by zero
        raises ZeroDivisionError.
        """
        other = _coerce(other)
        return self.multiply(Rational._raw(other._den, other._num))

    def negate(self) -> 'Rational':
        """Return -self"""
        return Rational._raw(_checked_mul(self._num, -1), self._den)

    def abs(self) -> 'Rational':
        """Return the absolute value, re-reduced to canonical form"""
        num, den = _squish(self._num, self._den)
        if num < 0:
            num = _checked_mul(num, -1)
        return Rational._raw(num, den)

    def compare_to(self, other: 'Rational') -> int:
        """
        Three-way comparison: -1, 0, +1 for self < other, self == other, self > other.

        Both values are brought onto the common denominator by
        cross-multiplication. The cross products are exact integers, so they
        are not overflow checked.
        """
        other = _coerce(other)
        trt1 = self._num * other._den
        trt2 = other._num * self._den
        if trt1 > trt2:
            return +1
        if trt1 < trt2:
            return -1
        return 0

    def signum(self) -> int:
        """Return -1, 0 or +1 according to the sign"""
        return (self._num > 0) - (self._num < 0)

    def is_zero(self) -> bool:
        """True for 0/1"""
        return self._num == 0

    def is_integer(self) -> bool:
        return self._den == 1

    def format(self) -> str:
        """Render as "p" for integers and "p/q" otherwise"""
        if self._den == 1:
            return f"{self._num}"
        return f"{self._num}/{self._den}"

    def as_fraction(self) -> Fraction:
        """Convert to fractions.Fraction"""
        return Fraction(self._num, self._den)

    def to_sympy(self) -> SympyRational:
        """Convert to sympy.Rational"""
        return SympyRational(self._num, self._den)

    def __add__(self, other):
        try:
            return self.add(other)
        except TypeError:
            return NotImplemented

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        try:
            return self.subtract(other)
        except TypeError:
            return NotImplemented

    def __rsub__(self, other):
        try:
            return _coerce(other).subtract(self)
        except TypeError:
            return NotImplemented

    def __mul__(self, other):
        try:
            return self.multiply(other)
        except TypeError:
            return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        try:
            return self.divide(other)
        except TypeError:
            return NotImplemented

    def __rtruediv__(self, other):
        try:
            return _coerce(other).divide(self)
        except TypeError:
            return NotImplemented

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.abs()

    def __bool__(self):
        return self._num != 0

    def __float__(self):
        return self.to_double()

    def __eq__(self, other) -> bool:
        if isinstance(other, Rational):
            return self._num == other._num and self._den == other._den
        if isinstance(other, int):
            return self._den == 1 and self._num == other
        if isinstance(other, Fraction):
            return self._num == other.numerator and self._den == other.denominator
        return NotImplemented

    def __lt__(self, other):
        try:
            return self.compare_to(other) < 0
        except TypeError:
            return NotImplemented

    def __le__(self, other):
        try:
            return self.compare_to(other) <= 0
        except TypeError:
            return NotImplemented

    def __gt__(self, other):
        try:
            return self.compare_to(other) > 0
        except TypeError:
            return NotImplemented

    def __ge__(self, other):
        try:
            return self.compare_to(other) >= 0
        except TypeError:
            return NotImplemented

    def __hash__(self) -> int:
        # consistent with int and Fraction hashing
        return hash(Fraction(self._num, self._den))

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Rational({self._num}, {self._den})"


def _coerce(value: Union[Rational, int]) -> Rational:
    if isinstance(value, Rational):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Cannot use {value!r} as a Rational")
    try:
        return Rational(operator.index(value), 1)
    except TypeError:
        raise TypeError(f"Cannot use {type(value).__name__} as a Rational") from None


# Constants
Rational.ZERO = Rational(0, 1)
Rational.ONE = Rational(1, 1)
Rational.MINUS_ONE = Rational(-1, 1)

ZERO = Rational.ZERO
ONE = Rational.ONE
MINUS_ONE = Rational.MINUS_ONE
