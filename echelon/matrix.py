# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Matrix buffer
=============

An owned, mutable 2-D float64 container. The shape is validated once at
construction and never changes afterwards; only the entries can be
written, either directly or through the elementary row operations used
by the reducer.
"""

from typing import Iterator, List, Tuple

import numpy as np

from .errors import InvalidDimensionError


class Matrix:
    """
    Dense real matrix with a fixed shape.

    Parameters
    ----------
    rows : sequence of sequences, ndarray or Matrix
        Row data. It is always copied, so the new buffer owns its
        storage and later writes never reach the caller's object.

    Raises
    ------
    InvalidDimensionError
        If the data is empty, ragged, not two dimensional, or holds
        entries that are not finite real numbers.
    """

    __slots__ = ("_data",)

    def __init__(self, rows) -> None:
        if isinstance(rows, Matrix):
            rows = rows._data
        try:
            data = np.array(rows, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidDimensionError(
                f"matrix rows must be equal-length sequences of real numbers ({e})"
            ) from e
        if data.ndim != 2:
            raise InvalidDimensionError(
                f"expected a 2-D matrix, got {data.ndim} dimension(s)"
            )
        if data.size == 0:
            raise InvalidDimensionError("matrix must have at least one row and column")
        if not np.all(np.isfinite(data)):
            raise InvalidDimensionError("matrix entries must be finite")
        self._data = data

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        if n < 1:
            raise InvalidDimensionError(f"order must be positive, got {n}")
        return cls(np.eye(n))

    # ------------------------------------------------------------------
    # shape
    # ------------------------------------------------------------------
    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def is_augmented(self) -> bool:
        """True for the n by (n+1) shape of an augmented system."""
        return self.cols == self.rows + 1

    def require_square(self) -> None:
        if not self.is_square:
            raise InvalidDimensionError(
                f"a square matrix is required, got {self.rows}x{self.cols}"
            )

    def require_augmented(self) -> None:
        if not self.is_augmented:
            raise InvalidDimensionError(
                f"an n x (n+1) augmented matrix is required, got {self.rows}x{self.cols}"
            )

    # ------------------------------------------------------------------
    # element access
    # ------------------------------------------------------------------
    def __getitem__(self, key):
        value = self._data[key]
        if isinstance(value, np.ndarray):
            return value.copy()
        return float(value)

    def __setitem__(self, key, value) -> None:
        self._data[key] = value

    def __len__(self) -> int:
        return self.rows

    def __iter__(self) -> Iterator[Tuple[float, ...]]:
        for row in self._data:
            yield tuple(float(v) for v in row)

    def __array__(self, dtype=None, copy=None):
        return np.array(self._data, dtype=dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix({self.tolist()!r})"

    def diagonal(self) -> np.ndarray:
        return np.diag(self._data).copy()

    def row_is_finite(self, i: int) -> bool:
        return bool(np.all(np.isfinite(self._data[i])))

    # ------------------------------------------------------------------
    # copies and derived matrices
    # ------------------------------------------------------------------
    @classmethod
    def _from_array(cls, data: np.ndarray) -> "Matrix":
        # internal copies keep whatever the buffer holds, inf/NaN included
        M = object.__new__(cls)
        M._data = np.array(data, dtype=float)
        return M

    def copy(self) -> "Matrix":
        return Matrix._from_array(self._data)

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def tolist(self) -> List[List[float]]:
        return self._data.tolist()

    def transpose(self) -> "Matrix":
        return Matrix(self._data.T)

    def minor(self, row: int, col: int) -> "Matrix":
        """
        Copy every row except `row` and every column except `col`,
        keeping the relative order of what remains.
        """
        if self.rows < 2 or self.cols < 2:
            raise InvalidDimensionError("a 1-wide matrix has no minors")
        keep_rows = np.arange(self.rows) != row
        keep_cols = np.arange(self.cols) != col
        return Matrix(self._data[keep_rows][:, keep_cols])

    # ------------------------------------------------------------------
    # elementary row operations (in place)
    # ------------------------------------------------------------------
    def swap_rows(self, a: int, b: int) -> None:
        self._data[[a, b]] = self._data[[b, a]]

    def scale_row(self, i: int, divisor: float) -> None:
        """R_i <- R_i / divisor"""
        self._data[i] /= divisor

    def combine_rows(self, target: int, source: int, multiplier: float) -> None:
        """R_target <- R_target - (R_source * multiplier)"""
        self._data[target] -= self._data[source] * multiplier
