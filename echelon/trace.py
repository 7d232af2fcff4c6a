# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Operation trace
===============

Records the elementary row operations performed by the reducer and
renders them as text. What gets kept depends on the verbosity:

- SILENT          nothing
- VERBOSE         one line per operation, e.g. ``R2 <- R2 / 3.5``
- EXTRA_VERBOSE   the same line followed by a fixed-width dump of the
                  matrix right after the operation
"""

import enum
import logging
import warnings
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional

import numpy as np

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)

COLUMN_WIDTH = 12


class Verbosity(enum.IntEnum):
    SILENT = 0
    VERBOSE = 1
    EXTRA_VERBOSE = 2


class OpKind(enum.Enum):
    DIVIDE = "divide"
    COMBINE = "combine"
    SWAP = "swap"


@dataclass(frozen=True)
class OperationRecord:
    """
    One elementary row operation. Rows are 0-based here and shown
    1-based when rendered.

    DIVIDE  : R[row] <- R[row] / value
    COMBINE : R[row] <- R[row] - (R[other] * value)
    SWAP    : R[row] <-> R[other]
    """

    kind: OpKind
    row: int
    other: Optional[int] = None
    value: float = 0.0
    snapshot: Optional[np.ndarray] = field(default=None, compare=False)

    def describe(self) -> str:
        r = self.row + 1
        if self.kind is OpKind.DIVIDE:
            return f"R{r} <- R{r} / {float(self.value)!r}"
        if self.kind is OpKind.COMBINE:
            return f"R{r} <- R{r} - (R{self.other + 1} * {float(self.value)!r})"
        return f"R{r} <-> R{self.other + 1}"


def format_matrix(matrix, width: int = COLUMN_WIDTH) -> str:
    """Right-align every entry in a `width` wide field, one row per line."""
    A = np.asarray(matrix, dtype=float)
    return "\n".join("".join(f"{v:>{width}g}" for v in row) for row in A)


def invalid_verbosity_message(value) -> str:
    return f"verbosity {value!r} is not one of 0, 1, 2; using SILENT"


def resolve_verbosity(value) -> Verbosity:
    """
    Map 0/1/2 (or a Verbosity) to a Verbosity. Anything else falls back
    to SILENT with an InvalidConfiguration warning, it never fails.
    """
    try:
        return Verbosity(value)
    except (TypeError, ValueError):
        msg = invalid_verbosity_message(value)
        logger.warning(msg)
        warnings.warn(msg, InvalidConfiguration, stacklevel=2)
        return Verbosity.SILENT


class OperationTrace:
    """
    Sink for OperationRecords.

    Every rendered entry is appended to `lines` and, if given, passed to
    `sink` (for instance `print`). A matrix dump is a single entry that
    ends with a newline, so consecutive dumps are separated by a blank
    line once printed.
    """

    def __init__(
        self,
        verbosity=Verbosity.SILENT,
        sink: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.verbosity = resolve_verbosity(verbosity)
        self.sink = sink
        self.records: List[OperationRecord] = []
        self.lines: List[str] = []

    def __len__(self) -> int:
        return len(self.records)

    def emit(self, record: OperationRecord, matrix=None) -> None:
        if self.verbosity is Verbosity.SILENT:
            return
        if record.kind is OpKind.DIVIDE and record.value == 1.0:
            return
        if self.verbosity is Verbosity.EXTRA_VERBOSE and matrix is not None:
            record = replace(record, snapshot=np.array(matrix, dtype=float))

        self.records.append(record)
        self._write(record.describe())
        if record.snapshot is not None:
            self._write(format_matrix(record.snapshot) + "\n")

    def _write(self, entry: str) -> None:
        self.lines.append(entry)
        if self.sink is not None:
            self.sink(entry)

    def render(self) -> str:
        return "\n".join(self.lines)
