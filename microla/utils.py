# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Optional, Tuple

import numpy as np

from . import config
from .exceptions import ShapeMismatchError


def scale_tol(A: np.ndarray, tol: Optional[float] = None) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    if tol is None:
        tol = config.EPS
    if A.size == 0:
        return tol
    return tol * max(1.0, float(np.max(np.abs(A))))


def check_length(actual: int, expected: int, name: str) -> None:
    """Raise unless a vector length matches the one required."""
    if actual != expected:
        raise ShapeMismatchError(
            f"{name} must have length {expected}, got {actual}",
            expected=expected,
            actual=actual,
        )


def check_shape(
    actual: Tuple[int, int], expected: Tuple[int, int], name: str
) -> None:
    """Raise unless a matrix shape matches the one required."""
    if tuple(actual) != tuple(expected):
        raise ShapeMismatchError(
            f"{name} must be {expected[0]}x{expected[1]}, "
            f"got {actual[0]}x{actual[1]}",
            expected=tuple(expected),
            actual=tuple(actual),
        )


def check_square(shape: Tuple[int, int], name: str) -> None:
    rows, cols = shape
    if rows != cols:
        raise ShapeMismatchError(
            f"{name} must be square, got {rows}x{cols}",
            expected=(rows, rows),
            actual=(rows, cols),
        )


def check_index(idx: int, bound: int, name: str) -> None:
    """Raise unless 0 <= idx < bound."""
    if not 0 <= idx < bound:
        raise ShapeMismatchError(
            f"{name} index {idx} out of range [0, {bound})",
            expected=bound,
            actual=idx,
        )


def borrow_buffer(data, flat: bool = False) -> np.ndarray:
    """
    Return `data` as an array of the configured real dtype without copying.

    An ndarray is borrowed as-is and must already have the right dtype; with
    `flat` it must also be viewable as 1-D. Anything else (lists, tuples) has
    no storage to share and is converted once into a fresh buffer.
    """
    if not isinstance(data, np.ndarray):
        buf = np.asarray(data, dtype=config.REAL)
        return buf.reshape(-1) if flat else buf

    if data.dtype != config.REAL:
        raise TypeError(
            f"buffer dtype {data.dtype} does not match configured "
            f"{np.dtype(config.REAL)}; writes would not reach it"
        )
    if not flat:
        return data

    buf = data.reshape(-1)
    if data.size and not np.may_share_memory(buf, data):
        raise ShapeMismatchError(
            f"buffer of shape {data.shape} cannot be viewed as row-major; "
            "pass a C-contiguous array",
            actual=data.shape,
        )
    return buf
