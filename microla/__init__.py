# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
microla
=======

A small fixed-size linear–algebra kernel. Vectors and matrices are views over
buffers the caller owns; every operation is a stateless function that reads
its inputs and writes the outputs it was handed.

Public API
~~~~~~~~~~
- Types
    - `Vector`, `Matrix`, `LinearRegression`, `FusionDriver`
- Vector algebra
    - `vec_add`, `vec_sub`, `vec_dot`, `vec_cross`, `vec_norm`,
      `vec_to_unit`, `vec_sum`, `vec_mean`, ...
- Matrix algebra
    - `mtx_init`, `mtx_add`, `mtx_mult`, `mtx_trans`, `mtx_min_idx`, ...
- Determinant / inverse / eigen
    - `mtx_deter`, `mtx_minor`, `mtx_cofactor`, `mtx_adjoint`, `mtx_inv`,
      `mtx_eigen`
- Statistics
    - `sta_mean`, `sta_var`, `sta_covar_mtx`, `sta_linear_reg`, ...

Functions whose name ends in `_d`, and the in-place scalar/unit/reverse
helpers, overwrite their first argument and return None.

Example
-------
>>> import microla as ml
>>> A = ml.Matrix.from_values([[1.0, 2.0], [3.0, 4.0]])
>>> ml.mtx_deter(A)
-2.0
"""

from importlib.metadata import version as _pkg_version

# ---------------------------------------------------------------------
# Re-export the high-level functions users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .eigen import jacobi_eigen, mtx_eigen
from .exceptions import (
    ConvergenceError,
    DivisionByZeroError,
    EmptyInputError,
    LinalgError,
    ShapeMismatchError,
    SingularMatrixError,
)
from .fusion import FusionDriver
from .matrices import (
    Matrix,
    mtx_add,
    mtx_add_d,
    mtx_entry_fn_empty,
    mtx_entry_fn_identity,
    mtx_entry_fn_random,
    mtx_from_arr,
    mtx_get,
    mtx_get_col,
    mtx_get_row,
    mtx_init,
    mtx_is_equal,
    mtx_is_notneg,
    mtx_max,
    mtx_max_idx,
    mtx_min,
    mtx_min_idx,
    mtx_mult,
    mtx_scalar_mult,
    mtx_set,
    mtx_set_col,
    mtx_set_row,
    mtx_sub,
    mtx_sub_d,
    mtx_trans,
)
from .matrix_functions import (
    mtx_adjoint,
    mtx_cofactor,
    mtx_deter,
    mtx_inv,
    mtx_minor,
)
from .statistics import (
    LinearRegression,
    sta_abs_err,
    sta_covar,
    sta_covar_mtx,
    sta_data_range,
    sta_demean,
    sta_linear_reg,
    sta_mean,
    sta_median,
    sta_mode,
    sta_percentile,
    sta_quart,
    sta_quart_range,
    sta_rel_err,
    sta_std_dev,
    sta_var,
)
from .vectors import (
    Vector,
    vec_add,
    vec_ar_mean,
    vec_cross,
    vec_dist,
    vec_dot,
    vec_from_arr,
    vec_get_subset,
    vec_init,
    vec_is_equal,
    vec_is_nonneg,
    vec_magn,
    vec_mean,
    vec_neg,
    vec_norm,
    vec_rev,
    vec_scalar_add,
    vec_scalar_div,
    vec_scalar_mult,
    vec_sub,
    vec_sum,
    vec_sum_of_sqrs,
    vec_to_unit,
)

__all__ = [
    # types
    "Vector",
    "Matrix",
    "LinearRegression",
    "FusionDriver",
    # errors
    "LinalgError",
    "ShapeMismatchError",
    "DivisionByZeroError",
    "SingularMatrixError",
    "ConvergenceError",
    "EmptyInputError",
    # vectors
    "vec_init",
    "vec_from_arr",
    "vec_get_subset",
    "vec_add",
    "vec_sub",
    "vec_neg",
    "vec_sum",
    "vec_scalar_add",
    "vec_scalar_mult",
    "vec_scalar_div",
    "vec_dot",
    "vec_norm",
    "vec_magn",
    "vec_sum_of_sqrs",
    "vec_dist",
    "vec_to_unit",
    "vec_cross",
    "vec_mean",
    "vec_ar_mean",
    "vec_rev",
    "vec_is_equal",
    "vec_is_nonneg",
    # matrices
    "mtx_init",
    "mtx_entry_fn_empty",
    "mtx_entry_fn_identity",
    "mtx_entry_fn_random",
    "mtx_from_arr",
    "mtx_get",
    "mtx_set",
    "mtx_get_row",
    "mtx_set_row",
    "mtx_get_col",
    "mtx_set_col",
    "mtx_add",
    "mtx_add_d",
    "mtx_sub",
    "mtx_sub_d",
    "mtx_mult",
    "mtx_scalar_mult",
    "mtx_trans",
    "mtx_min",
    "mtx_max",
    "mtx_min_idx",
    "mtx_max_idx",
    "mtx_is_equal",
    "mtx_is_notneg",
    "mtx_minor",
    "mtx_cofactor",
    "mtx_adjoint",
    "mtx_deter",
    "mtx_inv",
    "mtx_eigen",
    "jacobi_eigen",
    # statistics
    "sta_mean",
    "sta_demean",
    "sta_percentile",
    "sta_median",
    "sta_quart",
    "sta_quart_range",
    "sta_mode",
    "sta_data_range",
    "sta_var",
    "sta_std_dev",
    "sta_covar",
    "sta_covar_mtx",
    "sta_linear_reg",
    "sta_abs_err",
    "sta_rel_err",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show microla”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
