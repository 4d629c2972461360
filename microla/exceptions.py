# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exception hierarchy for microla.

Everything the library raises derives from ``LinalgError``, which is a
``ValueError`` so callers that only guard against bad arguments keep working.
"""

from typing import Optional, Tuple, Union

Shape = Union[int, Tuple[int, ...]]


class LinalgError(ValueError):
    """Base exception for all microla errors."""


class ShapeMismatchError(LinalgError):
    """
    Lengths or shapes disagree, or an index is out of range.

    Attributes:
        expected: Shape (or length) the operation required, if known
        actual: Shape (or length) that was supplied, if known
    """

    def __init__(
        self,
        message: str,
        expected: Optional[Shape] = None,
        actual: Optional[Shape] = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class DivisionByZeroError(LinalgError, ZeroDivisionError):
    """An explicit scalar divisor was exactly zero."""


class SingularMatrixError(LinalgError):
    """
    The matrix has a zero determinant and cannot be inverted.

    Attributes:
        determinant: The determinant that was computed
    """

    def __init__(self, message: str, determinant: float = 0.0):
        super().__init__(message)
        self.determinant = determinant


class ConvergenceError(LinalgError):
    """
    An iterative solver hit its iteration cap.

    Attributes:
        iterations: Number of iterations completed
        off_diagonal: Largest off-diagonal magnitude left when giving up
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        off_diagonal: Optional[float] = None,
        threshold: Optional[float] = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.off_diagonal = off_diagonal
        self.threshold = threshold


class EmptyInputError(LinalgError):
    """A reduction was asked to work on zero elements."""
