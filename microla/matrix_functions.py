# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Minors, cofactors, determinant and inverse of square matrices.

The determinant is computed by recursive cofactor expansion and the inverse
by the adjugate method. Both are O(n!) and meant for the small orders
(2x2 to 4x4) this package targets.
"""

import logging

import numpy as np

from . import config
from .exceptions import SingularMatrixError
from .matrices import Matrix
from .utils import check_index, check_shape, check_square

logger = logging.getLogger(__name__)


def _submatrix(A: np.ndarray, i: int, j: int) -> np.ndarray:
    """A with row i and column j removed."""
    n = A.shape[0]
    return A[np.arange(n) != i][:, np.arange(n) != j]


def _deter_recur(A: np.ndarray) -> float:
    n = A.shape[0]
    if n == 0:
        return 1.0
    if n == 1:
        return float(A[0, 0])
    if n == 2:
        return float(A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0])

    # Expand along the first row
    d = 0.0
    for j in range(n):
        if A[0, j] == 0:
            continue
        sign = -1.0 if j & 1 else 1.0
        d += sign * float(A[0, j]) * _deter_recur(_submatrix(A, 0, j))
    return d


def _check_square(m: Matrix, name: str = "m") -> None:
    if config.BOUNDS_CHECKS:
        check_square(m.shape, name)


def mtx_minor(m: Matrix, i: int, j: int) -> float:
    """
    Determinant of `m` with row `i` and column `j` removed.

    The minor of a 1x1 matrix is the empty determinant, 1.0.
    """
    _check_square(m)
    if config.BOUNDS_CHECKS:
        check_index(i, m.rows, "row")
        check_index(j, m.cols, "column")
    return _deter_recur(_submatrix(m.values, i, j))


def mtx_cofactor(m: Matrix, i: int, j: int) -> float:
    """(-1)^(i+j) times the (i, j) minor."""
    minor = mtx_minor(m, i, j)
    return -minor if (i + j) & 1 else minor


def mtx_adjoint(m: Matrix, ma: Matrix) -> Matrix:
    """
    Adjugate (classical adjoint) of a square matrix: the transpose of its
    cofactor matrix, written to `ma`.
    """
    _check_square(m)
    if config.BOUNDS_CHECKS:
        check_shape(ma.shape, m.shape, "ma")

    n = m.rows
    C = np.empty((n, n), dtype=config.REAL)
    for i in range(n):
        for j in range(n):
            C[i, j] = mtx_cofactor(m, i, j)

    ma.values[...] = C.T
    return ma


def mtx_deter(m: Matrix) -> float:
    """
    Calculate the determinant of n-by-n matrix `m` by cofactor expansion
    along the first row.
    """
    _check_square(m)
    if m.rows > config.DETER_WARN_ORDER:
        logger.warning(
            f"mtx_deter(): cofactor expansion of a {m.rows}x{m.rows} matrix is O(n!)"
        )
    return _deter_recur(m.values)


def mtx_inv(m: Matrix, mi: Matrix) -> Matrix:
    """
    Invert `m` into `mi` using inverse = adjugate / determinant.

    Raises
    ------
    SingularMatrixError : if the determinant is exactly zero.
    """
    _check_square(m)
    if config.BOUNDS_CHECKS:
        check_shape(mi.shape, m.shape, "mi")

    d = mtx_deter(m)
    if d == 0:
        raise SingularMatrixError("matrix is singular (determinant is zero)", d)

    adj = Matrix.zeros(m.rows, m.cols)
    mtx_adjoint(m, adj)
    mi.values[...] = adj.values / d
    return mi
