# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import InvalidDimensionError
from .matrix import Matrix
from .utils import scale_tol

logger = logging.getLogger(__name__)

# Past this order cofactor expansion takes noticeably long (10! = 3.6M terms).
FACTORIAL_WARN_ORDER = 10


@dataclass
class CofactorStats:
    """Counters threaded through one cofactor expansion."""

    calls: int = 0
    minors: int = 0


def delete_row_col(matrix, row: int, col: int) -> Matrix:
    """Minor of `matrix` with row `row` and column `col` removed."""
    M = matrix if isinstance(matrix, Matrix) else Matrix(matrix)
    return M.minor(row, col)


def det_cofactor(
    matrix,
    order: Optional[int] = None,
    stats: Optional[CofactorStats] = None,
) -> float:
    """
    Determinant by Laplace (cofactor) expansion along the first row.

    det(A) = sum_j (-1)^j * A[0, j] * det(minor(A, 0, j))

    Every recursive call builds a fresh minor, the input is never
    written to. Cost is O(order!) so this is only practical for small
    matrices; `det_elimination` is the O(n^3) alternative.

    Parameters
    ----------
    matrix : (n, n) array_like or Matrix
        Square input.
    order : int | None
        Side of the matrix. Defaults to the matrix shape; if given it
        must agree with it.
    stats : CofactorStats | None
        Optional counters, incremented once per call and once per
        minor extracted.

    Returns
    -------
    float
        The determinant. A 1 by 1 matrix returns its only entry.

    Raises
    ------
    InvalidDimensionError : non-square input, or `order` disagrees
        with the shape.
    """
    M = matrix if isinstance(matrix, Matrix) else Matrix(matrix)
    M.require_square()
    if order is None:
        order = M.rows
    elif order != M.rows:
        raise InvalidDimensionError(
            f"order {order} does not match a {M.rows}x{M.cols} matrix"
        )
    if order > FACTORIAL_WARN_ORDER:
        logger.warning(
            "det_cofactor(): order %d means %d! terms, this will be slow",
            order,
            order,
        )
    if stats is None:
        stats = CofactorStats()
    return _expand(M, order, stats)


def _expand(M: Matrix, order: int, stats: CofactorStats) -> float:
    stats.calls += 1
    if order == 1:
        return M[0, 0]
    if order == 2:
        return M[0, 0] * M[1, 1] - M[1, 0] * M[0, 1]

    total = 0.0
    for j in range(order):
        minor = M.minor(0, j)
        stats.minors += 1
        sign = 1.0 if j % 2 == 0 else -1.0
        total += sign * M[0, j] * _expand(minor, order - 1, stats)
    return total


def det_elimination(matrix) -> float:
    """
    Calculate the determinant of an n-by-n matrix using elimination
    with partial pivoting. Used as an independent reference for
    `det_cofactor`.
    """
    M = matrix if isinstance(matrix, Matrix) else Matrix(matrix)
    M.require_square()
    U = M.to_array()
    n = U.shape[0]
    tol = scale_tol(U)

    sign = 1.0
    for col in range(n):
        # largest magnitude at or below the diagonal
        pivot_row = col + int(np.abs(U[col:, col]).argmax())
        if abs(U[pivot_row, col]) <= tol:
            logger.debug("det_elimination(): column %d is numerically zero", col)
            return 0.0
        if pivot_row != col:
            U[[col, pivot_row]] = U[[pivot_row, col]]
            sign = -sign
        factors = U[col + 1 :, col] / U[col, col]
        U[col + 1 :, col:] -= factors[:, None] * U[col, col:]

    return sign * float(np.prod(np.diag(U)))
