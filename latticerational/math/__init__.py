"""
Mathematical Infrastructure Module

This module provides exact arithmetic for lattice calculations:
- Rational numbers over signed 64-bit integers with overflow detection
- Dense rational and integer matrices
- Cofactor determinants and Gaussian elimination

No operation falls back to floating point.
"""

from .rational import (Rational, RationalOverflowError, OverflowPolicy, set_overflow_policy, get_overflow_policy, ZERO,
                       ONE, MINUS_ONE)
from .rational_operations import RationalOperations
from .rational_matrix import RationalMatrix, NotSquareError, free_matrix
from .integer_matrix import IntegerMatrix
from .gauss import Gauss, SingularMatrixError, solve

__all__ = [
    'Rational',
    'RationalOverflowError',
    'OverflowPolicy',
    'set_overflow_policy',
    'get_overflow_policy',
    'ZERO',
    'ONE',
    'MINUS_ONE',
    'RationalOperations',
    'RationalMatrix',
    'NotSquareError',
    'free_matrix',
    'IntegerMatrix',
    'Gauss',
    'SingularMatrixError',
    'solve',
]
