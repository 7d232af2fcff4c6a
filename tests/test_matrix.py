# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from echelon.errors import InvalidDimensionError
from echelon.matrix import Matrix


@pytest.mark.parametrize(
    "rows",
    [
        [],
        [[]],
        [[1, 2], [3]],
        [1, 2, 3],
        np.zeros((2, 2, 2)),
        [[1, float("nan")]],
        [[float("inf"), 1]],
        [["a", "b"]],
    ],
)
def test_invalid_data_is_rejected(rows):
    with pytest.raises(InvalidDimensionError):
        Matrix(rows)


def test_shape_properties():
    M = Matrix([[1, 2, 3], [4, 5, 6]])
    assert M.shape == (2, 3)
    assert (M.rows, M.cols) == (2, 3)
    assert M.is_augmented and not M.is_square
    assert Matrix.identity(3).is_square
    with pytest.raises(InvalidDimensionError):
        M.require_square()
    with pytest.raises(InvalidDimensionError):
        Matrix.identity(0)


def test_copy_keeps_non_finite_values():
    M = Matrix([[1e-310, 1.0], [0.0, 1.0]])
    with np.errstate(over="ignore"):
        M.scale_row(0, 1e-310)
    C = M.copy()
    assert np.isinf(C[0, 1])
    assert C == M
    C[1, 1] = 5.0
    assert M[1, 1] == 1.0


def test_owns_its_storage():
    A = np.array([[1.0, 2.0], [3.0, 4.0]])
    M = Matrix(A)
    M[0, 0] = 10.0
    assert A[0, 0] == 1.0

    C = M.copy()
    C.swap_rows(0, 1)
    assert M.tolist() == [[10.0, 2.0], [3.0, 4.0]]

    row = M[1]
    row[:] = 0
    assert M[1, 1] == 4.0


def test_row_operations():
    M = Matrix([[2, 4, 6], [1, 1, 1]])
    M.scale_row(0, 2)
    assert M.tolist() == [[1.0, 2.0, 3.0], [1.0, 1.0, 1.0]]
    M.combine_rows(1, 0, 1.0)
    assert M.tolist() == [[1.0, 2.0, 3.0], [0.0, -1.0, -2.0]]
    M.swap_rows(0, 1)
    assert M.tolist() == [[0.0, -1.0, -2.0], [1.0, 2.0, 3.0]]
    assert np.array_equal(M.diagonal(), [0.0, 2.0])


def test_minor_and_transpose():
    M = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 10]])
    assert M.minor(1, 0).tolist() == [[2.0, 3.0], [8.0, 10.0]]
    assert M.transpose().tolist() == [[1, 4, 7], [2, 5, 8], [3, 6, 10]]
    with pytest.raises(InvalidDimensionError):
        Matrix([[5]]).minor(0, 0)


def test_equality_and_array_protocol():
    M = Matrix([[1, 2], [3, 4]])
    assert M == Matrix(np.array([[1.0, 2.0], [3.0, 4.0]]))
    assert M != Matrix([[1, 2], [3, 5]])
    assert np.array_equal(np.asarray(M), [[1, 2], [3, 4]])
    assert list(M) == [(1.0, 2.0), (3.0, 4.0)]
    assert len(M) == 2
