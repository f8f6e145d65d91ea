"""Timed sort+reverse sweeps over input sizes and shapes."""
from __future__ import annotations

import json
import logging
import random
import time
from datetime import datetime, timezone
from itertools import product
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd
import psutil

from .complexity import fit_models, is_subquadratic
from .ordering import NumberSequence, ascending_sort, is_descending, reverse_in_place

logger = logging.getLogger(__name__)

SHAPES = ("random", "sorted", "reversed")


def make_data(n: int, shape: str, rng: np.random.Generator) -> NumberSequence:
    if shape == "random":
        return NumberSequence.random(n, rng)
    if shape == "sorted":
        return NumberSequence(np.arange(n, dtype=np.float64))
    if shape == "reversed":
        return NumberSequence(np.arange(n, 0, -1, dtype=np.float64))
    raise ValueError(f"unknown shape {shape!r}; expected one of {', '.join(SHAPES)}")


def time_once(n: int, shape: str, rng: np.random.Generator) -> Dict:
    seq = make_data(n, shape, rng)
    ts = datetime.now(timezone.utc).isoformat()
    start = time.perf_counter()
    ascending_sort(seq)
    mid = time.perf_counter()
    reverse_in_place(seq)
    end = time.perf_counter()
    rss = psutil.Process().memory_info().rss
    return {
        "ts": ts,
        "n": n,
        "shape": shape,
        "sort_ms": round((mid - start) * 1000.0, 4),
        "reverse_ms": round((end - mid) * 1000.0, 4),
        "wall_ms": round((end - start) * 1000.0, 4),
        "rss_mb": round(rss / (1024**2), 3),
        "ok": is_descending(seq),
    }


def run_sweep(
    sizes: Sequence[int],
    shapes: Sequence[str] = ("random",),
    repeats: int = 3,
    seed: int = 42,
    warmups: int = 1,
    out_path: Optional[Path] = None,
) -> List[Dict]:
    """Time every (shape, n) point ``repeats`` times in shuffled order."""
    for shape in shapes:
        if shape not in SHAPES:
            raise ValueError(f"unknown shape {shape!r}; expected one of {', '.join(SHAPES)}")
    points = list(product(shapes, sizes))
    random.Random(seed).shuffle(points)
    rng = np.random.default_rng(seed)

    records = []
    out = None
    if out_path is not None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out = out_path.open("a")
    try:
        for shape, n in points:
            for _ in range(max(0, warmups)):
                time_once(n, shape, rng)
            for _ in range(max(1, repeats)):
                rec = time_once(n, shape, rng)
                logger.debug("%s n=%d: %.3f ms", shape, n, rec["wall_ms"])
                records.append(rec)
                if out is not None:
                    out.write(json.dumps(rec) + "\n")
                    out.flush()
    finally:
        if out is not None:
            out.close()
    return records


def read_jsonl(path: Path) -> List[dict]:
    rows = []
    with Path(path).open() as f:
        for line in f:
            try:
                rows.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return rows


def summarize(records: Iterable[Dict]) -> pd.DataFrame:
    """Median/mean/p10/p90 of wall time per (shape, n)."""
    df = pd.DataFrame(list(records))
    if df.empty:
        return df
    g = df.groupby(["shape", "n"], dropna=False).agg(
        wall_ms_median=("wall_ms", "median"),
        wall_ms_mean=("wall_ms", "mean"),
        wall_ms_p10=("wall_ms", lambda s: s.quantile(0.1)),
        wall_ms_p90=("wall_ms", lambda s: s.quantile(0.9)),
        sort_ms_median=("sort_ms", "median"),
        reverse_ms_median=("reverse_ms", "median"),
        rss_mb_median=("rss_mb", "median"),
        count=("wall_ms", "count"),
        ok=("ok", "all"),
    )
    return g.reset_index().sort_values(["shape", "n"]).reset_index(drop=True)


def fit_summary(summary: pd.DataFrame, y_col: str = "wall_ms_median") -> pd.DataFrame:
    """Best Big-O model per shape, with a ``subquadratic`` flag."""
    fits = fit_models(summary, x_col="n", y_col=y_col, by=["shape"])
    fits["subquadratic"] = [is_subquadratic(m) for m in fits["model"]]
    return fits
