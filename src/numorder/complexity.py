"""Pick the Big-O model that best explains measured timings.

Each candidate ``f`` is fitted as ``y = exp(a) * f(n)``, i.e.
``log y = a + log f(n)`` with only the scale ``a`` free, and ranked by AIC;
the lowest AIC wins for each group. The free log-log slope is reported
alongside as ``slope`` for reference.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import pandas as pd

# ordered from cheapest to most expensive
MODELS: Dict[str, Callable[[float], float]] = {
    "O(1)": lambda n: 1.0,
    "O(log n)": lambda n: math.log(max(n, 2)),
    "O(n)": lambda n: float(n),
    "O(n log n)": lambda n: float(n) * math.log(max(n, 2)),
    "O(n^2)": lambda n: float(n) ** 2,
    "O(n^3)": lambda n: float(n) ** 3,
}


def is_subquadratic(model: str) -> bool:
    order = list(MODELS)
    if model not in MODELS:
        raise ValueError(f"unknown model {model!r}")
    return order.index(model) < order.index("O(n^2)")


@dataclass
class FitResult:
    model: str
    a: float  # log of the scale factor
    aic: float
    nobs: int

    def predict(self, n: float) -> float:
        return math.exp(self.a) * MODELS[self.model](n)


def _log_points(x: Iterable[float], y: Iterable[float], basis: Callable[[float], float]) -> List[Tuple[float, float]]:
    pts = []
    for n, val in zip(x, y):
        fv = basis(n)
        if fv <= 0 or val <= 0:
            continue
        pts.append((math.log(fv), math.log(val)))
    return pts


def fit_single(x: List[float], y: List[float], model: str) -> Optional[FitResult]:
    pts = _log_points(x, y, MODELS[model])
    if len(pts) < 2:
        return None
    n = len(pts)
    residuals = [ly - lf for lf, ly in pts]
    a = sum(residuals) / n
    rss = sum((r - a) ** 2 for r in residuals)
    k = 1
    # Gaussian AIC up to an additive constant
    aic = n * math.log(rss / n) + 2 * k if rss > 0 else -float("inf")
    return FitResult(model=model, a=a, aic=aic, nobs=n)


def loglog_slope(x: List[float], y: List[float]) -> Optional[float]:
    pts = _log_points(x, y, MODELS["O(n)"])
    if len(pts) < 2:
        return None
    mean_x = sum(p[0] for p in pts) / len(pts)
    mean_y = sum(p[1] for p in pts) / len(pts)
    sxx = sum((px - mean_x) ** 2 for px, _ in pts)
    if sxx == 0:
        return None
    sxy = sum((px - mean_x) * (py - mean_y) for px, py in pts)
    return sxy / sxx


def best_fit(x: List[float], y: List[float]) -> Optional[FitResult]:
    best = None
    for name in MODELS:
        fit = fit_single(x, y, name)
        if fit is None:
            continue
        if best is None or fit.aic < best.aic:
            best = fit
    return best


def fit_models(df: pd.DataFrame, x_col: str, y_col: str, by: List[str]) -> pd.DataFrame:
    """Fit candidate complexity models per group.

    Returns a DataFrame with columns: by..., model, a, slope, aic, nobs
    """
    results = []
    for keys, group in df.groupby(by, dropna=False):
        x = group[x_col].tolist()
        y = group[y_col].tolist()
        fit = best_fit(x, y)
        if fit is None:
            continue
        if not isinstance(keys, tuple):
            keys = (keys,)
        rec = dict(zip(by, keys))
        rec.update({"model": fit.model, "a": fit.a, "slope": loglog_slope(x, y), "aic": fit.aic, "nobs": fit.nobs})
        results.append(rec)
    return pd.DataFrame(results, columns=list(by) + ["model", "a", "slope", "aic", "nobs"])


def predict_series(df: pd.DataFrame, fits: pd.DataFrame, x_col: str, by: List[str]) -> pd.DataFrame:
    """Evaluate each group's fitted model at the x values observed for it."""
    preds = []
    for _, row in fits.iterrows():
        key = {k: row[k] for k in by}
        fit = FitResult(model=row["model"], a=row["a"], aic=row["aic"], nobs=row["nobs"])
        sub = df
        for k, v in key.items():
            sub = sub[sub[k] == v]
        for xv in sorted(pd.unique(sub[x_col].values)):
            preds.append({**key, x_col: xv, "yhat": fit.predict(xv), "model": fit.model})
    return pd.DataFrame(preds)
