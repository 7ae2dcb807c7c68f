"""
Gauss operations - linear system solving in exact rational arithmetic.

Gaussian elimination with partial pivoting followed by back-substitution.
The pivot choice does not change the (exact) result; picking the entry of
largest magnitude keeps the intermediate numerators and denominators small,
which lowers the risk of a 64-bit overflow.
"""

import logging
from typing import List, Sequence

from .rational import Rational, ZERO
from .rational_matrix import RationalMatrix, NotSquareError
from .rational_operations import RationalOperations


class SingularMatrixError(ArithmeticError):
    """Raised when a singular system cannot be resolved"""


class Gauss:
    """
    Matrix operations based on Gaussian elimination for exact rational arithmetic.
    """

    _rational_instance = None

    @classmethod
    def get_rational_instance(cls) -> 'Gauss':
        """Get singleton instance for exact rational operations"""
        if cls._rational_instance is None:
            cls._rational_instance = cls()
        return cls._rational_instance

    def solve(self, matrix: RationalMatrix, vec: Sequence[Rational]) -> List[Rational]:
        """
        Solve matrix * ans = vec for ans.

        The matrix must be square. vec must have one entry per row; this is
        not checked. Floats are rejected. Neither input is modified.

        A singular but consistent system yields a particular solution in which
        the free components are zero. If a row left without a pivot by the
        elimination has a nonzero right-hand side the system has no solution.

        Args:
            matrix: Square coefficient matrix
            vec: Right-hand side

        Returns:
            The solution vector

        Raises:
            NotSquareError: If the matrix is not square
            SingularMatrixError: If the system is singular and inconsistent
        """
        rows, cols = matrix.size()
        if rows != cols:
            raise NotSquareError(f"Matrix must be square to solve: {rows}x{cols}")

        # Elimination is done in place on copies
        with matrix.clone() as cm:
            ops = RationalOperations.instance()
            b = [ops.value_of(vec[i], approximate=False) for i in range(rows)]
            pivot_cols = self._eliminate(cm, b)
            return self._back_substitute(cm, b, pivot_cols)

    def _eliminate(self, cm: RationalMatrix, b: List[Rational]) -> List[int]:
        """Reduce cm to row echelon form; returns the pivot column of each pivot row"""
        rows, cols = cm.size()
        pivot_cols = []
        h = 0
        k = 0
        while h < rows and k < cols:

            # Find the row with the largest value in column k
            prow = h
            pval = ZERO
            for i in range(h, rows):
                candidate = cm.get_value_at(i, k).abs()
                if candidate.compare_to(pval) > 0:
                    pval = candidate
                    prow = i

            if pval.compare_to(ZERO) == 0:
                logging.debug(f"No pivot in column {k}, skipping it.")
                k += 1
                continue

            # Swap prow with row h
            if prow != h:
                for j in range(cols):
                    t = cm.get_value_at(h, j)
                    cm.set_value_at(h, j, cm.get_value_at(prow, j))
                    cm.set_value_at(prow, j, t)
                b[h], b[prow] = b[prow], b[h]

            # Divide and subtract rows below
            for i in range(h + 1, rows):
                dval = cm.get_value_at(i, k).divide(cm.get_value_at(h, k))
                for j in range(cols):
                    t = cm.get_value_at(i, j)
                    p = dval.multiply(cm.get_value_at(h, j))
                    cm.set_value_at(i, j, t.subtract(p))
                b[i] = b[i].subtract(dval.multiply(b[h]))

            pivot_cols.append(k)
            h += 1
            k += 1
        return pivot_cols

    def _back_substitute(self, cm: RationalMatrix, b: List[Rational], pivot_cols: List[int]) -> List[Rational]:
        rows, cols = cm.size()
        rank = len(pivot_cols)

        # Rows below the last pivot are zero
        for i in range(rank, rows):
            if not b[i].is_zero():
                raise SingularMatrixError(f"Singular matrix: row {i} has no pivot but right-hand side {b[i]}")

        ans = [ZERO] * cols
        if rank < cols:
            logging.debug(f"Singular matrix: setting {cols - rank} undetermined component(s) to zero.")
        for i in range(rank - 1, -1, -1):
            k = pivot_cols[i]
            total = ZERO
            for j in range(k + 1, cols):
                total = total.add(cm.get_value_at(i, j).multiply(ans[j]))
            ans[k] = b[i].subtract(total).divide(cm.get_value_at(i, k))
        return ans


def solve(matrix: RationalMatrix, vec: Sequence[Rational]) -> List[Rational]:
    """Solve matrix * ans = vec, see Gauss.solve"""
    return Gauss.get_rational_instance().solve(matrix, vec)
