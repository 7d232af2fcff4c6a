# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import pandas as pd

from echelon.benchmark import COLUMNS, main, run_benchmark


def test_run_benchmark_table():
    df = run_benchmark(orders=(2, 3, 4), repeats=1, seed=1)
    assert list(df.columns) == COLUMNS
    assert df["order"].tolist() == [2, 3, 4]
    # calls(n) = 1 + n * calls(n-1), one minor per recursive call
    assert df["calls"].tolist() == [1, 4, 17]
    assert df["minors"].tolist() == [0, 3, 16]
    assert (df["rel_err"] < 1e-9).all()


def test_main_writes_csv(tmp_path, capsys):
    path = tmp_path / "bench.csv"
    assert main(["--orders", "3", "--repeats", "1", "--csv", str(path)]) == 0
    assert "order" in capsys.readouterr().out
    df = pd.read_csv(path)
    assert df["calls"].tolist() == [4]
