"""
Operations on Rational values.

RationalOperations is the function-style entry point to the scalar library
(zero, make, add, sub, mul, div, cmp, abs, format, to_double) plus the
conversions from int, str, float, fractions.Fraction and sympy.Rational.
It is a singleton; use RationalOperations.instance() or the module-level
INSTANCE.
"""

from fractions import Fraction
from typing import Union

from sympy import Rational as SympyRational

from .rational import Rational, ZERO

Numeric = Union[Rational, int, float, str, Fraction, SympyRational]


class RationalOperations:
    """
    Factory and operations provider for Rational values.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(RationalOperations, cls).__new__(cls)
        return cls._instance

    @classmethod
    def instance(cls) -> 'RationalOperations':
        """Returns the singleton instance."""
        return cls()

    def number_class(self) -> type:
        return Rational

    # Factory methods
    def zero(self) -> Rational:
        """Return the canonical zero 0/1"""
        return ZERO

    def make(self, num: int, den: int) -> Rational:
        """
        Create a Rational from a numerator/denominator pair, reduced to canonical form.

        Args:
            num: Numerator (signed 64-bit)
            den: Denominator (signed 64-bit, nonzero unless num is zero)

        Returns:
            The canonical Rational num/den
        """
        return Rational(num, den)

    def value_of(self, value: Numeric, approximate: bool = True) -> Rational:
        """
        Convert a numeric value to a Rational.

        Strings may be "p/q" or "p". Floats are approximated with
        Fraction.limit_denominator() unless approximate is False, in which
        case they raise TypeError.

        Args:
            value: A Rational, int, str, float, Fraction or sympy.Rational
            approximate: Accept floats as approximations

        Returns:
            Rational representation of the value
        """
        if isinstance(value, Rational):
            return value
        elif isinstance(value, SympyRational):
            return Rational(int(value.p), int(value.q))
        elif isinstance(value, Fraction):
            return Rational(value.numerator, value.denominator)
        elif isinstance(value, str):
            if '/' in value:
                parts = value.split('/')
                if len(parts) != 2:
                    raise ValueError(f"Invalid fraction format: {value}")
                return Rational(int(parts[0]), int(parts[1]))
            return Rational(int(value), 1)
        elif isinstance(value, float):
            if not approximate:
                raise TypeError(f"Refusing to approximate float {value!r}, pass a str, int or Fraction")
            frac = Fraction(value).limit_denominator()
            return Rational(frac.numerator, frac.denominator)
        elif isinstance(value, bool):
            raise TypeError(f"Cannot convert {type(value)} to Rational")
        try:
            return Rational(value, 1)
        except TypeError:
            raise TypeError(f"Cannot convert {type(value)} to Rational") from None

    # Arithmetic
    def to_double(self, r: Rational) -> float:
        return r.to_double()

    def add(self, a: Rational, b: Rational) -> Rational:
        return a.add(b)

    def sub(self, a: Rational, b: Rational) -> Rational:
        return a.subtract(b)

    def mul(self, a: Rational, b: Rational) -> Rational:
        return a.multiply(b)

    def div(self, a: Rational, b: Rational) -> Rational:
        return a.divide(b)

    def negate(self, r: Rational) -> Rational:
        return r.negate()

    def abs(self, r: Rational) -> Rational:
        return r.abs()

    # Comparison
    def cmp(self, a: Rational, b: Rational) -> int:
        """-1, 0, +1 respectively for a < b, a == b, a > b"""
        return a.compare_to(b)

    def is_zero(self, r: Rational) -> bool:
        return r.is_zero()

    # Formatting and conversion
    def format(self, r: Rational) -> str:
        return r.format()

    def to_fraction(self, r: Rational) -> Fraction:
        return r.as_fraction()

    def to_sympy_rational(self, r: Rational) -> SympyRational:
        return r.to_sympy()


INSTANCE = RationalOperations.instance()
