# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exception and warning types raised by the engine.

Dimension problems fail fast. Rank deficiency and numeric anomalies are
reported on the reduction result and only raised in strict mode.
"""


class EchelonError(Exception):
    """Base class for every error raised by echelon."""


class InvalidDimensionError(EchelonError, ValueError):
    """Matrix shape (or order) does not fit the requested operation."""


class SingularOrUnrepairable(EchelonError):
    """Pivot repair could not put a nonzero entry on the diagonal."""


class InvalidConfiguration(EchelonError, UserWarning):
    """Unrecognised setting; the engine falls back to a default."""


class NumericAnomaly(EchelonError, ArithmeticError):
    """A row operation produced an infinite or NaN value."""
