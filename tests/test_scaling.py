import json
import math

import numpy as np
import pandas as pd
import pytest

from numorder.scaling import fit_summary, make_data, read_jsonl, run_sweep, summarize, time_once


def test_make_data_shapes():
    rng = np.random.default_rng(0)

    assert make_data(4, "sorted", rng) == [0.0, 1.0, 2.0, 3.0]
    assert make_data(4, "reversed", rng) == [4.0, 3.0, 2.0, 1.0]
    rand = make_data(100, "random", rng)
    assert len(rand) == 100
    assert all(0.0 <= v < 1.0 for v in rand)
    with pytest.raises(ValueError):
        make_data(4, "zigzag", rng)


def test_time_once_record():
    rec = time_once(1000, "random", np.random.default_rng(1))

    assert rec["n"] == 1000
    assert rec["shape"] == "random"
    assert rec["ok"] is True
    assert rec["wall_ms"] >= 0
    assert rec["rss_mb"] > 0
    assert set(rec) == {"ts", "n", "shape", "sort_ms", "reverse_ms", "wall_ms", "rss_mb", "ok"}


def test_run_sweep_writes_jsonl(tmp_path):
    out = tmp_path / "runs" / "runs.jsonl"

    records = run_sweep([100, 200], ["random", "sorted"], repeats=2, seed=3, warmups=0, out_path=out)

    assert len(records) == 8
    assert all(r["ok"] for r in records)
    assert read_jsonl(out) == records


def test_run_sweep_rejects_unknown_shape():
    with pytest.raises(ValueError):
        run_sweep([10], ["spiral"])


def test_read_jsonl_skips_bad_lines(tmp_path):
    path = tmp_path / "runs.jsonl"
    path.write_text(json.dumps({"n": 1}) + "\n{broken\n" + json.dumps({"n": 2}) + "\n")

    assert read_jsonl(path) == [{"n": 1}, {"n": 2}]


def test_summarize_groups_by_shape_and_size():
    records = [
        {"shape": "random", "n": 10, "wall_ms": w, "sort_ms": w, "reverse_ms": 0.0, "rss_mb": 50.0, "ok": True}
        for w in (1.0, 2.0, 3.0)
    ] + [
        {"shape": "random", "n": 20, "wall_ms": 5.0, "sort_ms": 4.0, "reverse_ms": 1.0, "rss_mb": 51.0, "ok": False}
    ]

    summary = summarize(records)

    assert list(summary["n"]) == [10, 20]
    first = summary.iloc[0]
    assert first["wall_ms_median"] == 2.0
    assert first["count"] == 3
    assert first["wall_ms_p10"] == pytest.approx(1.2)
    assert bool(first["ok"]) is True
    assert bool(summary.iloc[1]["ok"]) is False


def test_summarize_empty():
    assert summarize([]).empty


def test_fit_summary_flags_quadratic_shapes():
    sizes = [1_000, 10_000, 100_000, 1_000_000]
    summary = pd.DataFrame(
        [{"shape": "random", "n": n, "wall_ms_median": 1e-5 * n * math.log(n)} for n in sizes]
        + [{"shape": "bad", "n": n, "wall_ms_median": 1e-9 * n * n} for n in sizes]
    )

    fits = fit_summary(summary).set_index("shape")

    assert bool(fits.loc["random", "subquadratic"]) is True
    assert bool(fits.loc["bad", "subquadratic"]) is False
