"""
RationalMatrix - dense row-major matrix of exact Rational values.

The matrix owns a flat backing store of rows*cols Rational values (index
j + cols*i). Matrices never share their backing store: clone() copies it and
free() releases it. Used as a context manager, a matrix is freed when the
block is left, which is how the determinant recursion scopes its minors.

The determinant is computed by cofactor expansion along the first row. This
needs no division at all, so it stays exact and never divides by zero.
"""

import sys
from typing import List, Optional, Sequence, TextIO

import numpy as np

from .rational import Rational, ZERO, ONE, MINUS_ONE
from .rational_operations import RationalOperations


class NotSquareError(ValueError):
    """Raised when an operation needs a square matrix"""


class RationalMatrix:
    """
    Dense rows x cols matrix of Rational, all elements zero on creation.

    Element access is not bounds checked: callers must keep 0 <= i < rows
    and 0 <= j < cols.
    """

    def __init__(self, rows: int, cols: int):
        """
        Allocate a new zero matrix.

        Args:
            rows: Number of rows (> 0)
            cols: Number of columns (> 0)
        """
        if rows <= 0:
            raise ValueError(f"row count must be positive: {rows}")
        if cols <= 0:
            raise ValueError(f"column count must be positive: {cols}")
        self._rows = rows
        self._cols = cols
        self._v = [ZERO] * (rows * cols)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence]) -> 'RationalMatrix':
        """
        Create a matrix from nested row sequences.

        Args:
            rows: Row-major data; entries may be anything RationalOperations.value_of accepts except floats

        Returns:
            New RationalMatrix with the same values
        """
        ops = RationalOperations.instance()
        n_rows = len(rows)
        n_cols = len(rows[0]) if n_rows > 0 else 0
        matrix = cls(n_rows, n_cols)
        for i, row in enumerate(rows):
            if len(row) != n_cols:
                raise ValueError(f"row {i} has {len(row)} entries, expected {n_cols}")
            for j, value in enumerate(row):
                matrix.set_value_at(i, j, ops.value_of(value, approximate=False))
        return matrix

    @classmethod
    def from_integer_matrix(cls, im) -> 'RationalMatrix':
        """
        Convert an integer matrix, every entry becoming value/1.

        Args:
            im: Any object with size() -> (rows, cols) and get_value_at(i, j) -> int

        Returns:
            New RationalMatrix with the same dimensions
        """
        rows, cols = im.size()
        matrix = cls(rows, cols)
        for i in range(rows):
            for j in range(cols):
                matrix._v[j + cols * i] = Rational(im.get_value_at(i, j), 1)
        return matrix

    @classmethod
    def identity(cls, n: int) -> 'RationalMatrix':
        matrix = cls(n, n)
        for i in range(n):
            matrix.set_value_at(i, i, ONE)
        return matrix

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def get_row_count(self) -> int:
        return self._rows

    def get_column_count(self) -> int:
        return self._cols

    def size(self):
        """Return (rows, cols)"""
        return self._rows, self._cols

    def is_square(self) -> bool:
        return self._rows == self._cols

    def get_value_at(self, i: int, j: int) -> Rational:
        return self._v[j + self._cols * i]

    def set_value_at(self, i: int, j: int, value: Rational) -> None:
        self._v[j + self._cols * i] = value

    def get_row(self, i: int) -> List[Rational]:
        start = self._cols * i
        return self._v[start:start + self._cols]

    def clone(self) -> 'RationalMatrix':
        """Create a deep copy of this matrix"""
        n = RationalMatrix(self._rows, self._cols)
        # Rational is immutable, copying the store is a deep copy
        n._v = list(self._v)
        return n

    def free(self) -> None:
        """Release the backing store. Calling free() again does nothing."""
        self._v = None

    def is_freed(self) -> bool:
        return self._v is None

    def __enter__(self):
        return self

    def __exit__(self, exit_type, exit_value, exit_traceback):
        self.free()

    def is_identity(self) -> bool:
        if not self.is_square():
            return False
        for i in range(self._rows):
            for j in range(self._cols):
                expected = ONE if i == j else ZERO
                if self.get_value_at(i, j) != expected:
                    return False
        return True

    def multiply_vector(self, vec: Sequence[Rational]) -> List[Rational]:
        """
        Matrix-vector product self * vec.

        Args:
            vec: Vector of length cols

        Returns:
            Vector of length rows
        """
        ans = []
        for i in range(self._rows):
            total = ZERO
            for j in range(self._cols):
                total = total.add(self.get_value_at(i, j).multiply(vec[j]))
            ans.append(total)
        return ans

    def multiply(self, other: 'RationalMatrix') -> 'RationalMatrix':
        """
        Matrix product self * other.

        Raises:
            ValueError: If the inner dimensions do not match
        """
        if self._cols != other._rows:
            raise ValueError(f"Matrix dimensions incompatible: {self._rows}x{self._cols} * {other._rows}x{other._cols}")
        result = RationalMatrix(self._rows, other._cols)
        for i in range(self._rows):
            for j in range(other._cols):
                total = ZERO
                for k in range(self._cols):
                    total = total.add(self.get_value_at(i, k).multiply(other.get_value_at(k, j)))
                result.set_value_at(i, j, total)
        return result

    def _delete_row_and_column(self, di: int, dj: int) -> 'RationalMatrix':
        n = RationalMatrix(self._rows - 1, self._cols - 1)
        for i in range(n._rows):
            for j in range(n._cols):
                gi = i + 1 if i >= di else i
                gj = j + 1 if j >= dj else j
                n.set_value_at(i, j, self.get_value_at(gi, gj))
        return n

    def _cofactor(self, i: int, j: int) -> Rational:
        with self._delete_row_and_column(i, j) as minor:
            sign = MINUS_ONE if (i + j) & 0x1 else ONE
            return sign.multiply(minor.determinant())

    def determinant(self) -> Rational:
        """
        Exact determinant by cofactor expansion along row 0.

        Returns:
            The determinant as a Rational

        Raises:
            NotSquareError: If the matrix is not square
        """
        if not self.is_square():
            raise NotSquareError(f"Determinant needs a square matrix, got {self._rows}x{self._cols}")

        if self._rows == 1:
            return self.get_value_at(0, 0)

        if self._rows == 2:
            a = self.get_value_at(0, 0).multiply(self.get_value_at(1, 1))
            b = self.get_value_at(0, 1).multiply(self.get_value_at(1, 0))
            return a.subtract(b)

        det = ZERO
        for j in range(self._cols):
            det = det.add(self.get_value_at(0, j).multiply(self._cofactor(0, j)))
        return det

    def format_rows(self) -> List[str]:
        lines = []
        for i in range(self._rows):
            values = "".join(f"{self.get_value_at(i, j).format():>4} " for j in range(self._cols))
            lines.append(f"[ {values}]")
        return lines

    def print(self, stream: Optional[TextIO] = None) -> None:
        """
        Write the matrix row by row as "[ v1 v2 ... ]".

        Args:
            stream: Text stream to write to, sys.stderr by default
        """
        if stream is None:
            stream = sys.stderr
        for line in self.format_rows():
            stream.write(line + "\n")

    def to_numpy(self, as_float: bool = False) -> np.ndarray:
        """
        Convert to a numpy array.

        Args:
            as_float: If True, return a float array; otherwise an object array of Rational

        Returns:
            Array of shape (rows, cols)
        """
        if as_float:
            result = np.zeros((self._rows, self._cols), dtype=float)
            for i in range(self._rows):
                for j in range(self._cols):
                    result[i, j] = self.get_value_at(i, j).to_double()
        else:
            result = np.empty((self._rows, self._cols), dtype=object)
            for i in range(self._rows):
                for j in range(self._cols):
                    result[i, j] = self.get_value_at(i, j)
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, RationalMatrix):
            return NotImplemented
        return self.size() == other.size() and self._v == other._v

    __hash__ = None

    def __repr__(self) -> str:
        return f"RationalMatrix({self._rows}x{self._cols})"


def free_matrix(matrix: Optional[RationalMatrix]) -> None:
    """Free a matrix; passing None is a no-op"""
    if matrix is None:
        return
    matrix.free()
