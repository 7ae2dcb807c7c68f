"""
IntegerMatrix - dense matrix of signed 64-bit integers.

Integer matrices express lattice basis changes. The values are held in a
numpy int64 array; the determinant is computed exactly through the rational
cofactor expansion rather than with floating point.
"""

import sys
from typing import Optional, Sequence, TextIO

import numpy as np


class IntegerMatrix:
    """Dense rows x cols integer matrix, zero on creation"""

    def __init__(self, rows: int, cols: int):
        if rows <= 0:
            raise ValueError(f"row count must be positive: {rows}")
        if cols <= 0:
            raise ValueError(f"column count must be positive: {cols}")
        self._data = np.zeros((rows, cols), dtype=np.int64)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'IntegerMatrix':
        return cls.from_numpy(np.array(rows, dtype=np.int64))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> 'IntegerMatrix':
        if array.ndim != 2:
            raise ValueError(f"expected a 2-dimensional array, got {array.ndim} dimensions")
        matrix = cls(*array.shape)
        matrix._data[:, :] = array
        return matrix

    @classmethod
    def identity(cls, n: int) -> 'IntegerMatrix':
        return cls.from_numpy(np.eye(n, dtype=np.int64))

    def size(self):
        """Return (rows, cols)"""
        return self._data.shape

    def get_value_at(self, i: int, j: int) -> int:
        return int(self._data[i, j])

    def set_value_at(self, i: int, j: int, value: int) -> None:
        self._data[i, j] = value

    def determinant(self) -> int:
        """Exact determinant of a square integer matrix"""
        from .rational_matrix import RationalMatrix
        det = RationalMatrix.from_integer_matrix(self).determinant()
        return det.num

    def is_identity(self) -> bool:
        rows, cols = self.size()
        if rows != cols:
            return False
        return bool(np.array_equal(self._data, np.eye(rows, dtype=np.int64)))

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def print(self, stream: Optional[TextIO] = None) -> None:
        if stream is None:
            stream = sys.stderr
        for row in self._data:
            stream.write("[ " + "".join(f"{int(v):4d} " for v in row) + "]\n")

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntegerMatrix):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"IntegerMatrix({self._data.tolist()})"
