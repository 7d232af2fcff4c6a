#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Cofactor expansion vs elimination: wall time, call counts and the
relative disagreement between the two determinants.

    python -m echelon.benchmark --orders 3 4 5 6 7 8 --csv bench.csv
"""

import argparse
import time

import numpy as np
import pandas as pd

from .determinant import CofactorStats, det_cofactor, det_elimination
from .utils import EPS

REPEATS = 5  # min of 5 runs leads to stable numbers
ORDERS = (3, 4, 5, 6, 7, 8)
COLUMNS = [
    "order",
    "calls",
    "minors",
    "cofactor_sec",
    "elimination_sec",
    "sec/elimination",
    "rel_err",
]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def run_benchmark(orders=ORDERS, repeats: int = REPEATS, seed: int = 0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    records = []
    for n in orders:
        A = rng.standard_normal((n, n))

        stats = CofactorStats()
        d_cof = det_cofactor(A, stats=stats)
        d_ref = det_elimination(A)

        t_cof = min(wall(det_cofactor, A) for _ in range(repeats))
        t_elim = min(wall(det_elimination, A) for _ in range(repeats))
        rel = abs(d_cof - d_ref) / max(abs(d_ref), EPS)
        records.append(
            (n, stats.calls, stats.minors, t_cof, t_elim, t_cof / t_elim, rel)
        )

    return pd.DataFrame(records, columns=COLUMNS)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Time cofactor expansion against elimination."
    )
    parser.add_argument("--orders", type=int, nargs="+", default=list(ORDERS))
    parser.add_argument("--repeats", type=int, default=REPEATS)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--csv", type=str, default=None, help="also write a CSV")
    args = parser.parse_args(argv)

    df = run_benchmark(args.orders, repeats=args.repeats, seed=args.seed)
    print(df.to_string(index=False))
    if args.csv:
        df.to_csv(args.csv, index=False)
    return 0


if __name__ == "__main__":
    main()
