import math

import pandas as pd
import pytest

from numorder.complexity import MODELS, best_fit, fit_models, is_subquadratic, loglog_slope, predict_series

SIZES = [1_000, 3_000, 10_000, 30_000, 100_000, 300_000, 1_000_000]


@pytest.mark.parametrize("model", list(MODELS))
def test_exact_data_recovers_its_model(model):
    fn = MODELS[model]
    y = [0.002 * fn(n) for n in SIZES]

    fit = best_fit(SIZES, y)

    assert fit.model == model
    assert fit.predict(10_000) == pytest.approx(0.002 * fn(10_000))


def test_noisy_n_log_n_is_subquadratic():
    noise = [1.05, 0.97, 1.02, 0.95, 1.04, 0.99, 1.01]
    y = [1e-5 * n * math.log(n) * k for n, k in zip(SIZES, noise)]

    fit = best_fit(SIZES, y)

    assert is_subquadratic(fit.model)


def test_too_few_points():
    assert best_fit([10], [1.0]) is None


def test_is_subquadratic():
    assert is_subquadratic("O(n log n)")
    assert is_subquadratic("O(1)")
    assert not is_subquadratic("O(n^2)")
    assert not is_subquadratic("O(n^3)")
    with pytest.raises(ValueError):
        is_subquadratic("O(2^n)")


def test_loglog_slope():
    assert loglog_slope(SIZES, [n ** 2 for n in SIZES]) == pytest.approx(2.0)
    assert loglog_slope([5, 5], [1.0, 2.0]) is None


def test_fit_models_per_group():
    rows = []
    for n in SIZES:
        rows.append({"shape": "random", "n": n, "ms": 1e-4 * n * math.log(n)})
        rows.append({"shape": "quadratic", "n": n, "ms": 1e-7 * n * n})
    df = pd.DataFrame(rows)

    fits = fit_models(df, x_col="n", y_col="ms", by=["shape"]).set_index("shape")

    assert fits.loc["random", "model"] == "O(n log n)"
    assert fits.loc["quadratic", "model"] == "O(n^2)"
    assert fits.loc["quadratic", "slope"] == pytest.approx(2.0)
    assert (fits["nobs"] == len(SIZES)).all()


def test_predict_series_follows_fit():
    df = pd.DataFrame({"shape": "random", "n": SIZES, "ms": [2e-3 * n for n in SIZES]})
    fits = fit_models(df, x_col="n", y_col="ms", by=["shape"])

    preds = predict_series(df, fits, x_col="n", by=["shape"])

    assert list(preds["n"]) == SIZES
    assert preds["yhat"].tolist() == pytest.approx(df["ms"].tolist())
