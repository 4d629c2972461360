# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Descriptive statistics on top of the vector and matrix layers.

Variance, standard deviation and covariance are sample statistics (divide by
n - 1). Percentiles interpolate linearly between order statistics.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from . import config
from .exceptions import (
    DivisionByZeroError,
    EmptyInputError,
    LinalgError,
    ShapeMismatchError,
)
from .matrices import Matrix, mtx_get_col, mtx_set
from .utils import check_length, check_shape
from .vectors import (
    Vector,
    vec_ar_mean,
    vec_dot,
    vec_scalar_add,
    vec_sum_of_sqrs,
)


@dataclass
class LinearRegression:
    """Least-squares fit y = slope * x + intercept."""

    slope: float
    intercept: float
    correlation: float


def _require(v: Vector, n: int) -> None:
    if v.sz < n:
        raise EmptyInputError(f"need at least {n} values, got {v.sz}")


def sta_mean(v: Vector) -> float:
    return vec_ar_mean(v)


def sta_demean(v: Vector, w: Vector) -> Vector:
    """w = v - mean(v)"""
    if config.BOUNDS_CHECKS:
        check_length(w.sz, v.sz, "w")
    mean = vec_ar_mean(v)
    w.values[:] = v.values
    vec_scalar_add(w, -mean)
    return w


def sta_percentile(v: Vector, p: float) -> float:
    """The `p`-th percentile of `v`, 0 <= p <= 100."""
    _require(v, 1)
    if not 0 <= p <= 100:
        raise LinalgError(f"percentile must be within [0, 100], got {p}")
    return float(np.percentile(v.values, p))


def sta_median(v: Vector) -> float:
    return sta_percentile(v, 50)


def sta_quart(v: Vector) -> Tuple[float, float, float]:
    """First, second and third quartiles of `v`."""
    return sta_percentile(v, 25), sta_percentile(v, 50), sta_percentile(v, 75)


def sta_quart_range(v: Vector) -> float:
    q1, _q2, q3 = sta_quart(v)
    return q3 - q1


def sta_mode(v: Vector, w: Vector) -> Vector:
    """
    Write every most frequent value of `v`, in ascending order, to `w`.

    `w.sz` is reduced to the number of modes found.
    """
    _require(v, 1)
    uniq, counts = np.unique(v.values, return_counts=True)
    modes = uniq[counts == counts.max()]

    if w.sz < modes.shape[0]:
        raise ShapeMismatchError(
            f"{modes.shape[0]} modes do not fit in vector of {w.sz}",
            expected=modes.shape[0],
            actual=w.sz,
        )
    w.sz = modes.shape[0]
    w.values[:] = modes
    return w


def sta_data_range(v: Vector) -> float:
    _require(v, 1)
    return float(np.max(v.values) - np.min(v.values))


def sta_var(v: Vector) -> float:
    """Sample variance of `v`."""
    _require(v, 2)
    d = sta_demean(v, Vector.zeros(v.sz))
    return vec_sum_of_sqrs(d) / (v.sz - 1)


def sta_std_dev(v: Vector) -> float:
    return math.sqrt(sta_var(v))


def sta_covar(v: Vector, w: Vector) -> float:
    """Sample covariance of `v` and `w`."""
    if config.BOUNDS_CHECKS:
        check_length(w.sz, v.sz, "w")
    _require(v, 2)
    dv = sta_demean(v, Vector.zeros(v.sz))
    dw = sta_demean(w, Vector.zeros(w.sz))
    return vec_dot(dv, dw) / (v.sz - 1)


def sta_covar_mtx(m: Matrix, mc: Matrix) -> Matrix:
    """
    Covariance matrix of the columns of `m` (one variable per column, one
    observation per row), written to the cols x cols matrix `mc`.
    """
    if config.BOUNDS_CHECKS:
        check_shape(mc.shape, (m.cols, m.cols), "mc")

    cols = [mtx_get_col(m, j, Vector.zeros(m.rows)) for j in range(m.cols)]
    for i in range(m.cols):
        for j in range(i, m.cols):
            c = sta_covar(cols[i], cols[j])
            mtx_set(mc, i, j, c)
            mtx_set(mc, j, i, c)
    return mc


def sta_linear_reg(v: Vector, w: Vector) -> LinearRegression:
    """
    Fit w = slope * v + intercept by least squares.

    `correlation` is Pearson's r; it is NaN when `w` is constant.
    """
    var_x = sta_var(v)
    if var_x == 0:
        raise DivisionByZeroError("regression on a constant predictor")
    cov = sta_covar(v, w)
    var_y = sta_var(w)

    slope = cov / var_x
    intercept = vec_ar_mean(w) - slope * vec_ar_mean(v)
    corr = cov / math.sqrt(var_x * var_y) if var_y != 0 else float("nan")
    return LinearRegression(slope=slope, intercept=intercept, correlation=corr)


def sta_abs_err(val: float, exp_val: float) -> float:
    return abs(val - exp_val)


def sta_rel_err(val: float, exp_val: float) -> float:
    """|val - exp_val| / |exp_val|"""
    if exp_val == 0:
        raise DivisionByZeroError("relative error against a zero expected value")
    return abs((val - exp_val) / exp_val)
