# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from .errors import NumericAnomaly, SingularOrUnrepairable
from .matrix import Matrix
from .trace import (
    OperationRecord,
    OperationTrace,
    OpKind,
    Verbosity,
    invalid_verbosity_message,
    resolve_verbosity,
)

logger = logging.getLogger(__name__)


@dataclass
class ReductionResult:
    """
    Outcome of `row_reduce`. Unpacks as ``ref, rref, trace``.

    rank_deficient is set when a diagonal entry could not be made
    nonzero (by pivot repair or by the end of elimination).
    numeric_anomaly is set when a row picked up an inf/NaN; the run
    stops there and the matrices hold the state at that point.
    """

    ref: Matrix
    rref: Matrix
    trace: List[str]
    records: List[OperationRecord] = field(default_factory=list)
    rank_deficient: bool = False
    unrepairable_columns: List[int] = field(default_factory=list)
    numeric_anomaly: bool = False
    warnings: List[str] = field(default_factory=list)
    verbosity: Verbosity = Verbosity.SILENT

    def __iter__(self):
        return iter((self.ref, self.rref, self.trace))

    @property
    def solution(self) -> np.ndarray:
        """Last column of the RREF."""
        return self.rref[:, -1]


def _check_finite(M: Matrix, row: int, record: OperationRecord) -> None:
    if not M.row_is_finite(row):
        raise NumericAnomaly(
            f"non-finite value in R{row + 1} after {record.describe()}"
        )


def repair_pivots(M: Matrix, trace: Optional[OperationTrace] = None) -> List[int]:
    """
    Put a nonzero entry on every diagonal position, one swap per pivot.

    For a zero at (c, c) the rows below are searched first and the first
    one with a nonzero in column c is swapped in. Failing that, a row r
    above is used if the swap leaves both (r, r) and (c, c) nonzero.

    Returns
    -------
    unrepairable : list[int]
        Columns for which no such row exists.
    """
    trace = trace if trace is not None else OperationTrace()
    n = M.rows
    unrepairable: List[int] = []

    for c in range(n):
        if M[c, c] != 0:
            continue

        partner = next((r for r in range(c + 1, n) if M[r, c] != 0), None)
        if partner is None:
            partner = next(
                (r for r in range(c) if M[r, c] != 0 and M[c, r] != 0), None
            )
        if partner is None:
            logger.warning("repair_pivots(): no row can supply a pivot for column %d", c + 1)
            unrepairable.append(c)
            continue

        M.swap_rows(c, partner)
        trace.emit(OperationRecord(OpKind.SWAP, c, other=partner), M)

    return unrepairable


def _pivot_by_magnitude(M: Matrix, c: int, trace: OperationTrace) -> None:
    # The computation we perform will be more stable if we
    # pick the largest possible number for the pivot column.
    col = np.abs(M[c:, c])
    pivot_row = c + int(col.argmax())
    if pivot_row != c and col.max() > 0:
        M.swap_rows(c, pivot_row)
        trace.emit(OperationRecord(OpKind.SWAP, c, other=pivot_row), M)


def normalize_diagonal(M: Matrix, trace: OperationTrace) -> None:
    """Divide every row by its own diagonal entry, skipping exact zeros."""
    for i in range(M.rows):
        divisor = M[i, i]
        if divisor == 0:
            continue
        M.scale_row(i, divisor)
        record = OperationRecord(OpKind.DIVIDE, i, value=divisor)
        if divisor != 1:
            trace.emit(record, M)
        _check_finite(M, i, record)


def _combine(M: Matrix, target: int, source: int, trace: OperationTrace) -> None:
    multiplier = M[target, source]
    M.combine_rows(target, source, multiplier)
    record = OperationRecord(OpKind.COMBINE, target, other=source, value=multiplier)
    trace.emit(record, M)
    _check_finite(M, target, record)


def forward_eliminate(
    M: Matrix,
    trace: Optional[OperationTrace] = None,
    partial_pivoting: bool = False,
) -> Matrix:
    """
    Row-echelon reduction of an n by (n+1) augmented matrix, in place.

    For every pivot column c all diagonals are first scaled to 1, then
    the entries below (c, c) are cleared from the bottom row upwards.
    A last normalisation pass leaves every nonzero diagonal equal to 1.

    Parameters
    ----------
    M : Matrix
        Augmented matrix, modified in place.
    trace : OperationTrace | None
        Receives one record per row operation.
    partial_pivoting : bool
        If True, swap the largest entry of column c (at or below the
        diagonal) into the pivot position before each column.

    Returns
    -------
    M : Matrix
        The same object, now in REF.
    """
    trace = trace if trace is not None else OperationTrace()
    n = M.rows
    for c in range(n - 1):
        if partial_pivoting:
            _pivot_by_magnitude(M, c, trace)
        normalize_diagonal(M, trace)
        # Eliminate entries below the pivot
        for i in range(n - 1, c, -1):
            _combine(M, i, c, trace)

    normalize_diagonal(M, trace)
    return M


def back_eliminate(M: Matrix, trace: Optional[OperationTrace] = None) -> Matrix:
    """
    Mirror of `forward_eliminate`: walk pivot columns from the right and
    clear the entries above each pivot, turning REF into RREF in place.
    """
    trace = trace if trace is not None else OperationTrace()
    n = M.rows
    for c in range(n - 1, 0, -1):
        normalize_diagonal(M, trace)
        # zero out entries above the pivot
        for i in range(c):
            _combine(M, i, c, trace)

    normalize_diagonal(M, trace)
    return M


def row_reduce(
    matrix,
    verbosity=Verbosity.SILENT,
    *,
    partial_pivoting: bool = False,
    strict: bool = False,
    sink: Optional[Callable[[str], None]] = None,
) -> ReductionResult:
    """
    Gauss-Jordan reduction of an augmented system to REF and RREF.

    Parameters
    ----------
    matrix : (n, n+1) array_like or Matrix
        Augmented matrix [A | b]. It is copied, never modified.
    verbosity : Verbosity | int
        0 silent, 1 one line per operation, 2 lines plus matrix dumps.
        Any other value is treated as 0 with a warning.
    partial_pivoting : bool
        Opt in to magnitude pivoting. Off by default, in which case only
        exact zero pivots are repaired by row swaps.
    strict : bool
        Raise SingularOrUnrepairable / NumericAnomaly instead of
        flagging the result.
    sink : callable | None
        Called with every rendered trace entry as it is produced.

    Returns
    -------
    ReductionResult

    Raises
    ------
    InvalidDimensionError : if `matrix` is not n by (n+1).
    """
    M = Matrix(matrix)
    M.require_augmented()

    level = resolve_verbosity(verbosity)
    trace = OperationTrace(level, sink=sink)
    messages: List[str] = []
    if level != verbosity:
        messages.append(invalid_verbosity_message(verbosity))

    unrepairable = repair_pivots(M, trace)
    for c in unrepairable:
        messages.append(f"no nonzero pivot available for column {c + 1}")

    ref: Optional[Matrix] = None
    anomaly = False
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        try:
            forward_eliminate(M, trace, partial_pivoting=partial_pivoting)
            ref = M.copy()
            logger.debug("REF:\n%s", M.to_array())
            back_eliminate(M, trace)
            logger.debug("RREF:\n%s", M.to_array())
        except NumericAnomaly as e:
            if strict:
                raise
            logger.warning("row_reduce(): %s; stopping early", e)
            anomaly = True
            messages.append(str(e))

    rref = M.copy()
    if ref is None:
        ref = M.copy()

    missing = sorted(set(unrepairable) | set(np.flatnonzero(rref.diagonal() == 0).tolist()))
    rank_deficient = bool(missing)
    if rank_deficient:
        logger.debug("row_reduce(): result is rank deficient, columns %s", missing)
        if strict:
            raise SingularOrUnrepairable(
                "matrix is rank deficient; pivots missing in columns "
                + ", ".join(str(c + 1) for c in missing)
            )

    return ReductionResult(
        ref=ref,
        rref=rref,
        trace=trace.lines,
        records=trace.records,
        rank_deficient=rank_deficient,
        unrepairable_columns=unrepairable,
        numeric_anomaly=anomaly,
        warnings=messages,
        verbosity=level,
    )
