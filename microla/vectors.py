# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Vector operations over caller-owned buffers.

A `Vector` is a view: a logical length plus a borrowed 1-D buffer. Functions
that produce a vector write into an output view supplied by the caller and
return it; functions that modify their first argument in place return None.
"""

import logging
from typing import Iterable, Iterator

import numpy as np

from . import config
from .exceptions import (
    DivisionByZeroError,
    EmptyInputError,
    ShapeMismatchError,
)
from .utils import borrow_buffer, check_length

logger = logging.getLogger(__name__)


class Vector:
    """
    Length-`sz` view over a caller-owned buffer.

    An ndarray buffer is borrowed, never copied, and must already have the
    configured real dtype; a list or tuple is converted once. `sz` may be
    smaller than the buffer (some operations shrink it) but never larger.
    """

    sz: int
    data: np.ndarray

    def __init__(self, sz: int, data):
        buf = borrow_buffer(data)
        if buf.ndim != 1:
            raise ShapeMismatchError(
                f"vector buffer must be 1-D, got {buf.ndim}-D",
                expected=1,
                actual=buf.ndim,
            )
        if not 0 <= sz <= buf.shape[0]:
            raise ShapeMismatchError(
                f"vector length {sz} exceeds buffer capacity {buf.shape[0]}",
                expected=buf.shape[0],
                actual=sz,
            )
        self.sz = sz
        self.data = buf

    @classmethod
    def zeros(cls, sz: int) -> "Vector":
        """Allocate a zeroed buffer of exactly `sz` slots and view it."""
        return cls(sz, np.zeros(sz, dtype=config.REAL))

    @classmethod
    def from_values(cls, values) -> "Vector":
        """Allocate a buffer holding a copy of `values`."""
        buf = np.array(values, dtype=config.REAL).ravel()
        return cls(buf.shape[0], buf)

    @property
    def values(self) -> np.ndarray:
        """Writable view over the first `sz` slots of the buffer."""
        return self.data[: self.sz]

    def __len__(self) -> int:
        return self.sz

    def __getitem__(self, idx):
        return self.values[idx]

    def __setitem__(self, idx, value) -> None:
        self.values[idx] = value

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self.values)

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        out = self.values
        if dtype is not None:
            out = out.astype(dtype, copy=False)
        return out.copy() if copy else out

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.sz}, {self.values.tolist()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return vec_is_equal(self, other)

    __hash__ = None  # mutable view


def _check_same(v: Vector, w: Vector, name: str = "w") -> None:
    if config.BOUNDS_CHECKS:
        check_length(w.sz, v.sz, name)


def vec_init(v: Vector) -> None:
    """Zero-fill `v` in place."""
    v.values[:] = 0.0


def vec_from_arr(v: Vector, a) -> None:
    """
    Copy `v.sz` values from array `a` into `v`.

    The vector's own length decides how much is read, so `a` must hold at
    least that many values.
    """
    arr = np.asarray(a, dtype=config.REAL).ravel()
    if config.BOUNDS_CHECKS and arr.shape[0] < v.sz:
        raise ShapeMismatchError(
            f"source holds {arr.shape[0]} values, vector needs {v.sz}",
            expected=v.sz,
            actual=arr.shape[0],
        )
    v.values[:] = arr[: v.sz]


def vec_get_subset(v: Vector, offset: int, length: int, vsub: Vector) -> Vector:
    """
    Copy `length` values of `v` starting at `offset` into `vsub`.

    With bounds checks enabled an offset past the end is rejected and a
    request running past the end is truncated. `vsub.sz` is reduced to the
    number of values copied if it was larger; it is never increased.
    """
    if config.BOUNDS_CHECKS:
        if not 0 <= offset < v.sz:
            raise ShapeMismatchError(
                f"offset {offset} out of range [0, {v.sz})",
                expected=v.sz,
                actual=offset,
            )
        if length < 0:
            raise ShapeMismatchError(
                f"subset length must be non-negative, got {length}",
                actual=length,
            )
        if offset + length >= v.sz:
            length = v.sz - offset
        if vsub.sz < length:
            raise ShapeMismatchError(
                f"subset of {length} values does not fit in vector of {vsub.sz}",
                expected=length,
                actual=vsub.sz,
            )

    if vsub.sz > length:
        vsub.sz = length

    vsub.data[:length] = v.data[offset : offset + length]
    return vsub


def vec_add(v: Vector, w: Vector, x: Vector) -> Vector:
    """x = v + w"""
    _check_same(v, w)
    _check_same(v, x, "x")
    x.values[:] = v.values + w.values
    return x


def vec_sub(v: Vector, w: Vector, x: Vector) -> Vector:
    """x = v - w"""
    _check_same(v, w)
    _check_same(v, x, "x")
    x.values[:] = v.values - w.values
    return x


def vec_neg(v: Vector) -> None:
    """Negate `v` in place."""
    np.negative(v.values, out=v.values)


def vec_sum(vs: Iterable[Vector], w: Vector) -> Vector:
    """
    Element-wise sum of several equally sized vectors.

    `w` is overwritten and its length set to the common length of the
    inputs; its buffer must be large enough to hold it.
    """
    vs = list(vs)
    if not vs:
        raise EmptyInputError("vec_sum needs at least one vector")

    sz = vs[0].sz
    if config.BOUNDS_CHECKS:
        for k, v in enumerate(vs):
            check_length(v.sz, sz, f"vs[{k}]")
        if w.data.shape[0] < sz:
            raise ShapeMismatchError(
                f"output buffer holds {w.data.shape[0]} values, sum needs {sz}",
                expected=sz,
                actual=w.data.shape[0],
            )

    acc = np.zeros(sz, dtype=config.REAL)
    for v in vs:
        acc += v.values

    w.sz = sz
    w.values[:] = acc
    return w


def vec_scalar_add(v: Vector, s: float) -> None:
    """Add `s` to every element of `v` in place."""
    v.values[:] += s


def vec_scalar_mult(v: Vector, s: float) -> None:
    """Multiply every element of `v` by `s` in place."""
    v.values[:] *= s


def vec_scalar_div(v: Vector, s: float) -> None:
    """Divide every element of `v` by `s` in place."""
    if s == 0:
        raise DivisionByZeroError("vec_scalar_div by zero")
    v.values[:] /= s


def vec_dot(v: Vector, w: Vector) -> float:
    """
    Implements the scalar (dot) product between two vectors.
    """
    _check_same(v, w)
    return float(np.dot(v.values, w.values))


def vec_sum_of_sqrs(v: Vector) -> float:
    return vec_dot(v, v)


def vec_norm(v: Vector) -> float:
    """Euclidean norm |v| = sqrt(v[0]^2 + v[1]^2 + ...)"""
    vals = v.values
    return float(np.sqrt(np.sum(vals * vals)))


def vec_magn(v: Vector) -> float:
    """Magnitude of `v`, computed from the sum of squares."""
    return float(np.sqrt(vec_sum_of_sqrs(v)))


def vec_dist(v: Vector, w: Vector) -> float:
    """
    Euclidean distance between `v` and `w`.

    Returns NaN when the two lengths differ.
    """
    if v.sz != w.sz:
        logger.debug(f"vec_dist(): length mismatch {v.sz} != {w.sz}, returning NaN")
        return float("nan")

    x = Vector.zeros(v.sz)
    vec_sub(v, w, x)
    return vec_magn(x)


def vec_to_unit(v: Vector) -> None:
    """
    Scale `v` in place to unit length.

    A zero vector has no direction; it is reset to [1, 0, ..., 0].
    """
    mag = vec_norm(v)
    if mag != 0.0:
        vec_scalar_div(v, mag)
        return

    logger.debug("vec_to_unit(): zero vector, resetting to first basis vector")
    vec_init(v)
    if v.sz:
        v.data[0] = 1.0


def vec_cross(v: Vector, w: Vector, c: Vector) -> Vector:
    """
    Implements classical cross product c = v x w in R^3
    Defines a vector orthogonal to v and w with magnitude
    equal to the parallelogram area.
    """
    if config.BOUNDS_CHECKS:
        check_length(v.sz, 3, "v")
        check_length(w.sz, 3, "w")
        check_length(c.sz, 3, "c")

    vx, vy, vz = v.values
    wx, wy, wz = w.values
    c.values[:] = (
        vy * wz - vz * wy,
        vz * wx - vx * wz,
        vx * wy - vy * wx,
    )
    return c


def vec_mean(vs: Iterable[Vector], m: Vector) -> Vector:
    """Element-wise mean of several equally sized vectors, written to `m`."""
    vs = list(vs)
    if not vs:
        raise EmptyInputError("vec_mean needs at least one vector")
    if config.BOUNDS_CHECKS:
        check_length(m.sz, vs[0].sz, "m")

    vec_sum(vs, m)
    # real-valued division in the configured precision, never integer
    vec_scalar_div(m, float(len(vs)))
    return m


def vec_ar_mean(v: Vector) -> float:
    """Arithmetic mean of the elements of `v`."""
    if v.sz < 1:
        raise EmptyInputError("arithmetic mean of an empty vector")
    return float(np.sum(v.values)) / v.sz


def vec_rev(v: Vector) -> None:
    """Reverse `v` in place."""
    vals = v.values
    vals[:] = vals[::-1].copy()


def vec_is_equal(v: Vector, w: Vector, eps: float = 0.0) -> bool:
    """True when `v` and `w` have the same length and every pair of
    elements differs by at most `eps`."""
    if v.sz != w.sz:
        return False
    a, b = v.values, w.values
    with np.errstate(invalid="ignore"):
        return bool(np.all((a == b) | (np.abs(a - b) <= eps)))


def vec_is_nonneg(v: Vector) -> bool:
    return bool(np.all(v.values >= 0.0))
