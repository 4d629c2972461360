# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Optional, Tuple

import numpy as np

from . import config
from .exceptions import ConvergenceError
from .matrices import Matrix
from .utils import check_length, check_shape, check_square, scale_tol
from .vectors import Vector

logger = logging.getLogger(__name__)


def _max_off_diagonal(A: np.ndarray) -> Tuple[int, int, float]:
    """(p, q, |A[p, q]|) of the largest strictly-upper entry, p < q."""
    n = A.shape[0]
    upper = np.abs(np.triu(A, k=1))
    k = int(np.argmax(upper))
    p, q = divmod(k, n)
    return p, q, float(upper[p, q])


def _rotate(A: np.ndarray, V: np.ndarray, p: int, q: int) -> None:
    """
    Apply the Jacobi rotation P that zeroes A[p, q]:
    A <- P^T A P and V <- V P, in place.
    """
    apq = A[p, q]
    theta = (A[q, q] - A[p, p]) / (2.0 * apq)
    # smaller root of t^2 + 2 t theta - 1 = 0, t = tan(phi)
    t = np.sign(theta) / (abs(theta) + np.hypot(theta, 1.0)) if theta != 0 else 1.0
    c = 1.0 / np.hypot(t, 1.0)
    s = t * c

    # columns: A P
    ap = A[:, p].copy()
    aq = A[:, q].copy()
    A[:, p] = c * ap - s * aq
    A[:, q] = s * ap + c * aq

    # rows: P^T (A P)
    ap = A[p, :].copy()
    aq = A[q, :].copy()
    A[p, :] = c * ap - s * aq
    A[q, :] = s * ap + c * aq

    # roundoff would leave a tiny residue behind
    A[p, q] = A[q, p] = 0.0

    vp = V[:, p].copy()
    vq = V[:, q].copy()
    V[:, p] = c * vp - s * vq
    V[:, q] = s * vp + c * vq


def jacobi_eigen(
    A: np.ndarray,
    max_iter: Optional[int] = None,
    tol: Optional[float] = None,
) -> Tuple[np.ndarray, np.ndarray, int]:
    """
    Diagonalise a symmetric matrix by Jacobi rotations.

    Each iteration zeroes the largest off-diagonal entry with one plane
    rotation. Only the upper triangle of `A` is read.

    Parameters
    ----------
    A : (n,n) ndarray
        Real symmetric matrix.
    max_iter : int
        Maximum number of rotations; `config.EIGEN_MAX_ITER` if None.
    tol : float
        Convergence threshold on the largest off-diagonal magnitude, scaled
        to the matrix magnitude; `config.EIGEN_TOL` if None.

    Returns
    -------
    w : (n,) ndarray
        Eigenvalues, sorted by descending magnitude (ties keep diagonal order).
    V : (n,n) ndarray
        Unit eigenvectors as columns, in the same order as `w`.
    iters : int
        Number of rotations applied.

    Raises
    ------
    ConvergenceError : if more than `max_iter` rotations would be needed.
    """
    if max_iter is None:
        max_iter = config.EIGEN_MAX_ITER
    if tol is None:
        tol = config.EIGEN_TOL

    upper = np.triu(np.asarray(A, dtype=config.REAL))
    work = upper + np.triu(upper, k=1).T
    n = work.shape[0]
    V = np.eye(n, dtype=config.REAL)
    thresh = scale_tol(work, tol)

    iters = 0
    while n > 1:
        p, q, off = _max_off_diagonal(work)
        if off <= thresh:
            break
        if iters >= max_iter:
            raise ConvergenceError(
                f"Jacobi eigen solver did not converge in {max_iter} rotations "
                f"(off-diagonal {off:.3g} > {thresh:.3g})",
                iterations=iters,
                off_diagonal=off,
                threshold=thresh,
            )
        _rotate(work, V, p, q)
        iters += 1

    logger.debug(f"jacobi_eigen(): converged after {iters} rotations")

    w = np.diag(work).copy()
    order = np.argsort(-np.abs(w), kind="stable")
    return w[order], V[:, order], iters


def mtx_eigen(
    m: Matrix,
    val: Vector,
    vec: Matrix,
    max_iter: Optional[int] = None,
    tol: Optional[float] = None,
) -> Tuple[Vector, Matrix]:
    """
    Eigenvalues and eigenvectors of the symmetric matrix `m`.

    Eigenvalues are written to `val` (length n) and the matching unit
    eigenvectors to the columns of `vec` (n x n), both sorted by descending
    eigenvalue magnitude. Nothing is written if the solver fails to
    converge. See `jacobi_eigen` for the parameters.
    """
    if config.BOUNDS_CHECKS:
        check_square(m.shape, "m")
        check_length(val.sz, m.rows, "val")
        check_shape(vec.shape, m.shape, "vec")

    w, V, _iters = jacobi_eigen(m.values, max_iter=max_iter, tol=tol)

    val.values[:] = w
    vec.values[...] = V
    return val, vec
