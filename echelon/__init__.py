# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
echelon
=======

Determinants by cofactor expansion and Gauss-Jordan reduction of
augmented systems, with an optional step-by-step trace of every row
operation.

Public API
~~~~~~~~~~
- Matrix buffer
    - `Matrix`
- Determinants
    - `det_cofactor`, `delete_row_col`, `CofactorStats`
    - `det_elimination` (reference)
- Row reduction
    - `row_reduce`, `ReductionResult`
    - `repair_pivots`, `forward_eliminate`, `back_eliminate`
- Tracing
    - `OperationTrace`, `OperationRecord`, `OpKind`, `Verbosity`,
      `resolve_verbosity`, `format_matrix`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import echelon as ech
>>> result = ech.row_reduce([[2, 1, 5], [1, -1, 1]], verbosity=1)
>>> result.solution.tolist()
[2.0, 1.0]
>>> result.trace[0]
'R1 <- R1 / 2.0'
"""

from importlib.metadata import version as _pkg_version

from .determinant import (
    CofactorStats,
    delete_row_col,
    det_cofactor,
    det_elimination,
)
from .elimination import (
    ReductionResult,
    back_eliminate,
    forward_eliminate,
    repair_pivots,
    row_reduce,
)
from .errors import (
    EchelonError,
    InvalidConfiguration,
    InvalidDimensionError,
    NumericAnomaly,
    SingularOrUnrepairable,
)
from .matrix import Matrix
from .trace import (
    COLUMN_WIDTH,
    OperationRecord,
    OperationTrace,
    OpKind,
    Verbosity,
    format_matrix,
    resolve_verbosity,
)

__all__ = [
    "Matrix",
    "det_cofactor",
    "det_elimination",
    "delete_row_col",
    "CofactorStats",
    "row_reduce",
    "ReductionResult",
    "repair_pivots",
    "forward_eliminate",
    "back_eliminate",
    "OperationTrace",
    "OperationRecord",
    "OpKind",
    "Verbosity",
    "resolve_verbosity",
    "format_matrix",
    "COLUMN_WIDTH",
    "EchelonError",
    "InvalidDimensionError",
    "SingularOrUnrepairable",
    "InvalidConfiguration",
    "NumericAnomaly",
]

# ---------------------------------------------------------------------
# Version string, read from the installed distribution metadata
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library code only logs; the CLI decides where records go.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
