# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense row-major matrices over caller-owned buffers.
"""

from typing import Callable, Optional, Tuple

import numpy as np

from . import config
from .exceptions import EmptyInputError, ShapeMismatchError
from .utils import borrow_buffer, check_index, check_shape
from .vectors import Vector


class Matrix:
    """
    `rows` x `cols` view over a row-major buffer of at least rows*cols slots.

    Like `Vector`, an ndarray buffer is borrowed and never copied. A
    C-contiguous 2-D array is accepted and viewed as flat; strided or
    Fortran-ordered windows are rejected.
    """

    rows: int
    cols: int
    data: np.ndarray

    def __init__(self, rows: int, cols: int, data):
        buf = borrow_buffer(data, flat=True)
        if rows < 0 or cols < 0:
            raise ShapeMismatchError(
                f"matrix shape must be non-negative, got {rows}x{cols}",
                actual=(rows, cols),
            )
        if rows * cols > buf.shape[0]:
            raise ShapeMismatchError(
                f"{rows}x{cols} matrix needs {rows * cols} slots, "
                f"buffer holds {buf.shape[0]}",
                expected=rows * cols,
                actual=buf.shape[0],
            )
        self.rows = rows
        self.cols = cols
        self.data = buf

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        """Allocate a zeroed buffer of exactly rows*cols slots and view it."""
        return cls(rows, cols, np.zeros(rows * cols, dtype=config.REAL))

    @classmethod
    def from_values(cls, values) -> "Matrix":
        """Allocate a buffer holding a copy of a 2-D array-like."""
        arr = np.array(values, dtype=config.REAL)
        if arr.ndim != 2:
            raise ShapeMismatchError(
                f"matrix values must be 2-D, got {arr.ndim}-D",
                expected=2,
                actual=arr.ndim,
            )
        rows, cols = arr.shape
        return cls(rows, cols, arr.reshape(-1))

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def values(self) -> np.ndarray:
        """Writable (rows, cols) view over the buffer."""
        return self.data[: self.rows * self.cols].reshape(self.rows, self.cols)

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        out = self.values
        if dtype is not None:
            out = out.astype(dtype, copy=False)
        return out.copy() if copy else out

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.rows}, {self.cols}, "
            f"{self.values.tolist()})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return mtx_is_equal(self, other)

    __hash__ = None  # mutable view


EntryFn = Callable[[Matrix, int, int], None]


def mtx_entry_fn_empty(m: Matrix, i: int, j: int) -> None:
    """Assign 0.0 to entry (i, j)."""
    mtx_set(m, i, j, 0.0)


def mtx_entry_fn_identity(m: Matrix, i: int, j: int) -> None:
    """Assign 1.0 on the diagonal and 0.0 elsewhere."""
    mtx_set(m, i, j, 1.0 if i == j else 0.0)


_default_rng = np.random.default_rng()


def mtx_entry_fn_random(
    m: Matrix, i: int, j: int, rng: Optional[np.random.Generator] = None
) -> None:
    """
    Assign a random value drawn uniformly from [-1, 1].

    Bind `rng` with `functools.partial` for a reproducible fill; otherwise a
    module-level generator is used.
    """
    if rng is None:
        rng = _default_rng
    mtx_set(m, i, j, float(rng.uniform(-1.0, 1.0)))


def mtx_init(m: Matrix, entry_fn: Optional[EntryFn] = None) -> None:
    """
    Populate every entry of `m` by calling `entry_fn(m, i, j)` once per
    cell, in row-major order. `None` zero-fills.
    """
    if entry_fn is None:
        entry_fn = mtx_entry_fn_empty
    for i in range(m.rows):
        for j in range(m.cols):
            entry_fn(m, i, j)


def mtx_from_arr(m: Matrix, a) -> None:
    """Copy rows*cols values, in row-major order, from `a` into `m`."""
    arr = np.asarray(a, dtype=config.REAL).reshape(-1)
    n = m.rows * m.cols
    if config.BOUNDS_CHECKS and arr.shape[0] < n:
        raise ShapeMismatchError(
            f"source holds {arr.shape[0]} values, matrix needs {n}",
            expected=n,
            actual=arr.shape[0],
        )
    m.data[:n] = arr[:n]


def _check_cell(m: Matrix, i: int, j: int) -> None:
    if config.BOUNDS_CHECKS:
        check_index(i, m.rows, "row")
        check_index(j, m.cols, "column")


def _check_holds(v: Vector, n: int, name: str) -> None:
    if config.BOUNDS_CHECKS and v.sz < n:
        raise ShapeMismatchError(
            f"{name} vector must hold at least {n} values, got {v.sz}",
            expected=n,
            actual=v.sz,
        )


def mtx_get(m: Matrix, i: int, j: int) -> float:
    _check_cell(m, i, j)
    return float(m.data[i * m.cols + j])


def mtx_set(m: Matrix, i: int, j: int, x: float) -> None:
    _check_cell(m, i, j)
    m.data[i * m.cols + j] = x


def mtx_get_row(m: Matrix, i: int, v: Vector) -> Vector:
    """Copy row `i` of `m` into the first `m.cols` slots of `v`."""
    if config.BOUNDS_CHECKS:
        check_index(i, m.rows, "row")
    _check_holds(v, m.cols, "row")
    v.data[: m.cols] = m.values[i, :]
    return v


def mtx_set_row(m: Matrix, i: int, v: Vector) -> None:
    """Overwrite row `i` of `m` with the first `m.cols` values of `v`."""
    if config.BOUNDS_CHECKS:
        check_index(i, m.rows, "row")
    _check_holds(v, m.cols, "row")
    m.values[i, :] = v.data[: m.cols]


def mtx_get_col(m: Matrix, j: int, v: Vector) -> Vector:
    """Copy column `j` of `m` into the first `m.rows` slots of `v`."""
    if config.BOUNDS_CHECKS:
        check_index(j, m.cols, "column")
    _check_holds(v, m.rows, "column")
    v.data[: m.rows] = m.values[:, j]
    return v


def mtx_set_col(m: Matrix, j: int, v: Vector) -> None:
    """Overwrite column `j` of `m` with the first `m.rows` values of `v`."""
    if config.BOUNDS_CHECKS:
        check_index(j, m.cols, "column")
    _check_holds(v, m.rows, "column")
    m.values[:, j] = v.data[: m.rows]


def _check_same_shape(ma: Matrix, mb: Matrix, name: str) -> None:
    if config.BOUNDS_CHECKS:
        check_shape(mb.shape, ma.shape, name)


def mtx_add(ma: Matrix, mb: Matrix, mc: Matrix) -> Matrix:
    """mc = ma + mb; all three must be identically shaped."""
    _check_same_shape(ma, mb, "mb")
    _check_same_shape(ma, mc, "mc")
    mc.values[...] = ma.values + mb.values
    return mc


def mtx_add_d(ma: Matrix, mb: Matrix) -> None:
    """
    ma += mb

    Warning: destructive to `ma`.
    """
    _check_same_shape(ma, mb, "mb")
    ma.values[...] += mb.values


def mtx_sub(ma: Matrix, mb: Matrix, mc: Matrix) -> Matrix:
    """mc = ma - mb; all three must be identically shaped."""
    _check_same_shape(ma, mb, "mb")
    _check_same_shape(ma, mc, "mc")
    mc.values[...] = ma.values - mb.values
    return mc


def mtx_sub_d(ma: Matrix, mb: Matrix) -> None:
    """
    ma -= mb

    Warning: destructive to `ma`.
    """
    _check_same_shape(ma, mb, "mb")
    ma.values[...] -= mb.values


def mtx_mult(ma: Matrix, mb: Matrix, mc: Matrix) -> Matrix:
    """
    mc = ma @ mb

    Parameters
    ----------
    ma : (m, n) Matrix
    mb : (n, p) Matrix
        Must have as many rows as `ma` has columns.
    mc : (m, p) Matrix
        Output; may alias either input.
    """
    if config.BOUNDS_CHECKS:
        if ma.cols != mb.rows:
            raise ShapeMismatchError(
                f"cannot multiply {ma.rows}x{ma.cols} by {mb.rows}x{mb.cols}",
                expected=ma.cols,
                actual=mb.rows,
            )
        check_shape(mc.shape, (ma.rows, mb.cols), "mc")
    mc.values[...] = ma.values @ mb.values
    return mc


def mtx_scalar_mult(m: Matrix, s: float) -> None:
    """Multiply every entry of `m` by `s` in place."""
    m.values[...] *= s


def mtx_trans(ma: Matrix, mb: Matrix) -> Matrix:
    """Write the transpose of `ma` into `mb`, which must be cols x rows."""
    if config.BOUNDS_CHECKS:
        check_shape(mb.shape, (ma.cols, ma.rows), "mb")
    mb.values[...] = ma.values.T.copy()
    return mb


def _check_not_empty(m: Matrix, op: str) -> None:
    if m.rows * m.cols == 0:
        raise EmptyInputError(f"{op} of an empty matrix")


def mtx_min(m: Matrix) -> float:
    _check_not_empty(m, "mtx_min")
    return float(np.min(m.values))


def mtx_max(m: Matrix) -> float:
    _check_not_empty(m, "mtx_max")
    return float(np.max(m.values))


def mtx_min_idx(m: Matrix) -> Tuple[int, int]:
    """(i, j) of the smallest entry; the first one in row-major order on ties."""
    _check_not_empty(m, "mtx_min_idx")
    return divmod(int(np.argmin(m.values)), m.cols)


def mtx_max_idx(m: Matrix) -> Tuple[int, int]:
    """(i, j) of the largest entry; the first one in row-major order on ties."""
    _check_not_empty(m, "mtx_max_idx")
    return divmod(int(np.argmax(m.values)), m.cols)


def mtx_is_equal(ma: Matrix, mb: Matrix, eps: float = 0.0) -> bool:
    """Same shape and every pair of entries within `eps`."""
    if ma.shape != mb.shape:
        return False
    a, b = ma.values, mb.values
    with np.errstate(invalid="ignore"):
        return bool(np.all((a == b) | (np.abs(a - b) <= eps)))


def mtx_is_notneg(m: Matrix) -> bool:
    return bool(np.all(m.values >= 0.0))
