# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Command-line front end.

    echelon det  matrix.txt [--stats]
    echelon rref system.txt [-V 2] [--partial-pivoting] [--strict]

Matrices are read one row per line, entries separated by whitespace or
commas. Blank lines and anything after ``#`` are ignored. With no file
(or ``-``) the matrix is read from stdin.
"""

import argparse
import logging
import sys

from .determinant import CofactorStats, det_cofactor
from .elimination import row_reduce
from .errors import EchelonError, InvalidDimensionError
from .matrix import Matrix
from .trace import format_matrix

logger = logging.getLogger(__name__)


def parse_matrix(lines) -> Matrix:
    rows = []
    for lineno, line in enumerate(lines, start=1):
        line = line.split("#", 1)[0].replace(",", " ").strip()
        if not line:
            continue
        try:
            rows.append([float(tok) for tok in line.split()])
        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from e
    if not rows:
        raise InvalidDimensionError("no matrix rows found")
    return Matrix(rows)


def load_matrix(path) -> Matrix:
    if path is None or path == "-":
        return parse_matrix(sys.stdin)
    with open(path, "r") as f:
        return parse_matrix(f)


def cmd_det(matrix: Matrix, args) -> int:
    stats = CofactorStats()
    value = det_cofactor(matrix, stats=stats)
    print(value)
    if args.stats:
        print(f"calls: {stats.calls}  minors: {stats.minors}")
    return 0


def cmd_rref(matrix: Matrix, args) -> int:
    result = row_reduce(
        matrix,
        args.verbosity,
        partial_pivoting=args.partial_pivoting,
        strict=args.strict,
        sink=print,
    )
    print("REF Form:")
    print(format_matrix(result.ref))
    print()
    print("RREF Form:")
    print(format_matrix(result.rref))
    if result.rank_deficient:
        print("note: matrix is rank deficient, the result is approximate")
    if result.numeric_anomaly:
        print("note: stopped early on a non-finite value")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="echelon",
        description="Cofactor determinants and Gauss-Jordan reduction.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_det = sub.add_parser("det", help="determinant of a square matrix")
    p_det.add_argument("file", nargs="?", default=None)
    p_det.add_argument(
        "--stats", action="store_true", help="print recursion counters"
    )
    p_det.set_defaults(func=cmd_det)

    p_rref = sub.add_parser("rref", help="REF and RREF of an n x (n+1) system")
    p_rref.add_argument("file", nargs="?", default=None)
    p_rref.add_argument(
        "-V",
        "--verbosity",
        type=int,
        default=0,
        help="0 silent, 1 show row operations, 2 also show the matrix",
    )
    p_rref.add_argument("--partial-pivoting", action="store_true")
    p_rref.add_argument(
        "--strict", action="store_true", help="fail on rank deficiency"
    )
    p_rref.set_defaults(func=cmd_rref)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        matrix = load_matrix(args.file)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    try:
        return args.func(matrix, args)
    except InvalidDimensionError as e:
        parser.error(str(e))
    except EchelonError as e:
        logger.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
