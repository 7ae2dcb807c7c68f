#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""Unit cell transformations expressed as exact rational matrices

A cell transformation gives each new unit cell axis as a combination of the
old axes a, b and c, e.g. "-a-c,b,a" or "1/2a+1/2b,-1/2a+1/2b,c". As a
matrix, column i holds the coefficients of new axis i.
"""

import itertools
import logging
import re
from typing import Iterator, List

import numpy as np

from .names import AXES, UNIQUE_AXIS_B
from .math.rational import Rational, ZERO, ONE, MINUS_ONE
from .math.rational_matrix import RationalMatrix
from .math.integer_matrix import IntegerMatrix
from .math.gauss import SingularMatrixError

# alternative cell choices for a monoclinic C cell with unique axis b
MONOCLINIC_CELL_CHOICES = ("-a-c,b,a", "c,b,-a-c")

_AXIS_PATTERN = re.compile(r"(?:[+-]?(?:\d+(?:/\d+)?)?[abc])+")
_TERM_PATTERN = re.compile(r"([+-]?)(\d+)?(?:/(\d+))?([abc])")


def _parse_axis(text: str, matrix: RationalMatrix, col: int) -> None:
    if not _AXIS_PATTERN.fullmatch(text):
        raise ValueError(f"Invalid axis '{text}' in cell transformation")
    for sign, num, den, axis in _TERM_PATTERN.findall(text):
        if den and int(den) == 0:
            raise ValueError(f"Zero denominator in '{text}'")
        coeff = Rational(int(num) if num else 1, int(den) if den else 1)
        if sign == '-':
            coeff = coeff.negate()
        row = AXES.index(axis)
        matrix.set_value_at(row, col, matrix.get_value_at(row, col).add(coeff))


def parse_cell_transformation(text: str) -> RationalMatrix:
    """Parse a cell transformation such as "-a-c,b,a" into a 3x3 rational matrix.

    Example:
        m = parse_cell_transformation("1/2a+1/2b,-1/2a+1/2b,c")

    Args:
        text (str):
            Three comma-separated new axes. Each is a signed sum of multiples
            of a, b and c. Multiples may be integers or fractions ("1/2a").
            Whitespace is ignored.

    Returns:
        (RationalMatrix):
            3x3 matrix whose column i holds the coefficients of new axis i.
    """
    parts = "".join(text.split()).split(',')
    if len(parts) != 3:
        raise ValueError(f"Cell transformation needs three axes, got '{text}'")
    matrix = RationalMatrix(3, 3)
    for col, part in enumerate(parts):
        _parse_axis(part, matrix, col)
    return matrix


def format_cell_transformation(matrix: RationalMatrix) -> str:
    """Format a 3x3 rational matrix in the notation read by parse_cell_transformation"""
    if matrix.size() != (3, 3):
        raise ValueError(f"Cell transformation must be 3x3, got {matrix.rows}x{matrix.cols}")
    axes = []
    for col in range(3):
        terms = ""
        for row, axis in enumerate(AXES):
            coeff = matrix.get_value_at(row, col)
            if coeff.is_zero():
                continue
            if coeff == ONE:
                term = axis
            elif coeff == MINUS_ONE:
                term = "-" + axis
            else:
                term = coeff.format() + axis
            if terms and not term.startswith("-"):
                term = "+" + term
            terms += term
        axes.append(terms if terms else "0")
    return ",".join(axes)


def check_transformation(matrix: RationalMatrix) -> Rational:
    """Log a transformation with its determinant and reject singular ones

    Args:
        matrix (RationalMatrix): Square transformation matrix.

    Returns:
        (Rational): The determinant.

    Raises:
        SingularMatrixError: If the determinant is zero.
    """
    for line in matrix.format_rows():
        logging.info(line)
    det = matrix.determinant()
    logging.info(f"Determinant = {det}")
    if det.compare_to(ZERO) == 0:
        raise SingularMatrixError("Singular transformation matrix - cannot transform.")
    return det


def transform_axes(axes, matrix: RationalMatrix) -> np.ndarray:
    """Apply a cell transformation to real-space axis vectors

    Args:
        axes (array-like): 3x3, one axis (a, b, c) per row.
        matrix (RationalMatrix): Cell transformation.

    Returns:
        (numpy.ndarray): 3x3 float array with the new axes as rows.
    """
    axes = np.asarray(axes, dtype=float)
    if axes.shape != (3, 3):
        raise ValueError(f"Expected 3x3 axes, got shape {axes.shape}")
    return matrix.to_numpy(as_float=True).T @ axes


def cell_choices(unique_axis: str = UNIQUE_AXIS_B) -> List[RationalMatrix]:
    """Transformations to the alternative cell choices of a monoclinic C cell"""
    if unique_axis != UNIQUE_AXIS_B:
        raise ValueError(f"Cell choices are only supported for unique axis b, not '{unique_axis}'.")
    return [parse_cell_transformation(t) for t in MONOCLINIC_CELL_CHOICES]


def unimodular_transforms(maxorder: int = 3) -> Iterator[IntegerMatrix]:
    """Enumerate 3x3 integer matrices with determinant +1

    Every entry runs from -maxorder to +maxorder, so (2*maxorder+1)**9
    candidates are tested. These are the basis changes that keep a lattice
    the same, which is the search space for indexing ambiguities.

    Args:
        maxorder (int): Largest absolute value of any matrix entry.

    Yields:
        (IntegerMatrix): Each unimodular matrix, identity included.
    """
    if maxorder < 0:
        raise ValueError(f"maxorder must not be negative: {maxorder}")
    logging.info(f"Looking for unimodular transformations up to {maxorder}x each lattice length.")
    values = range(-maxorder, maxorder + 1)
    found = 0
    for entries in itertools.product(values, repeat=9):
        m = IntegerMatrix.from_numpy(np.array(entries, dtype=np.int64).reshape(3, 3))
        if m.determinant() != 1:
            continue
        found += 1
        yield m
    logging.info(f"{found} unimodular transformations found.")
