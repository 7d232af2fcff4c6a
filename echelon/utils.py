# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

EPS: float = 1e-12


def scale_tol(A: np.ndarray) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    return EPS * max(1.0, np.linalg.norm(A, ord=np.inf))


def random_nonsingular(n, low=-10, high=10, seed=None) -> np.ndarray:
    """
    Build an n by n matrix with random entries that is strictly
    diagonally dominant, so it is nonsingular and never needs a
    row swap during elimination.

    Returns
    -------
    Matrix with float64 dtype
    """
    rng = np.random.default_rng(seed)
    A = rng.uniform(low, high, size=(n, n))
    # push each diagonal past the sum of the rest of its row
    off = np.abs(A).sum(axis=1) - np.abs(np.diag(A))
    sign = np.where(np.diag(A) < 0, -1.0, 1.0)
    A[np.diag_indices(n)] = sign * (off + rng.uniform(1, high, size=n))
    return np.asarray(A)


def random_augmented(n, seed=None):
    """
    Return (M, x) where M = [A | A @ x] is an n by (n+1) augmented
    matrix with a known solution x.
    """
    rng = np.random.default_rng(seed)
    A = random_nonsingular(n, seed=rng.integers(1 << 31))
    x = rng.uniform(-5, 5, size=n)
    return np.column_stack([A, A @ x]), x
