# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Import-time configuration.

The values below are read once from the environment when the package is
first imported and are treated as constants afterwards:

``MICROLA_SINGLE_PRECISION``
    Use ``float32`` as the real scalar type instead of ``float64``.
``MICROLA_BOUNDS_CHECKS``
    Validate shapes and indices (on by default). When disabled, shape
    agreement becomes a caller precondition.
``MICROLA_EIGEN_MAX_ITER``
    Rotation cap of the Jacobi eigen solver.
``MICROLA_EIGEN_TOL``
    Off-diagonal convergence threshold of the Jacobi eigen solver.
"""

import os

import numpy as np

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


SINGLE_PRECISION: bool = _env_flag("MICROLA_SINGLE_PRECISION", False)
BOUNDS_CHECKS: bool = _env_flag("MICROLA_BOUNDS_CHECKS", True)

REAL = np.float32 if SINGLE_PRECISION else np.float64

# Tolerance floor for the selected precision
EPS: float = 1e-6 if SINGLE_PRECISION else 1e-12

EIGEN_MAX_ITER: int = int(os.environ.get("MICROLA_EIGEN_MAX_ITER", "500"))
EIGEN_TOL: float = float(os.environ.get("MICROLA_EIGEN_TOL", str(EPS)))

# Cofactor expansion is O(n!); above this order mtx_deter logs a warning
DETER_WARN_ORDER: int = 8
