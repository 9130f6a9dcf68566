"""
One-predictor least squares baseline and "value over expectation" residuals.

The idea: some of a receiver's separation is explained by how much cushion the
defender gives at the snap. Fit separation ~ cushion across the league, then
each player's residual (observed - expected) is the part the cushion does not explain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np
import pandas as pd
from scipy import stats

from .errors import DegenerateFitError, EmptyInputError, UpstreamDataError

ArrayLike = Union[float, int, np.ndarray, pd.Series, list, tuple]


@dataclass(frozen=True)
class FittedBaseline:
    """Coefficients of outcome ≈ intercept + slope * predictor."""

    intercept: float
    slope: float
    predictor: str = "x"
    outcome: str = "y"
    r_squared: float = float("nan")
    n: int = 0

    def predict(self, x: ArrayLike):
        """Expected outcome for one predictor value or a column of them."""
        if isinstance(x, (list, tuple)):
            x = np.asarray(x, dtype=float)
        return self.intercept + self.slope * x

    @property
    def expected_col(self) -> str:
        return f"expected_{self.outcome}"

    @property
    def residual_col(self) -> str:
        return f"{self.outcome}_oe"

    def describe(self) -> str:
        return (
            f"{self.outcome} = {self.intercept:.4f} + {self.slope:.4f} * {self.predictor} "
            f"(n={self.n:,}, R²={self.r_squared:.3f})"
        )


def fit_ols(x: ArrayLike, y: ArrayLike) -> tuple[float, float]:
    """
    Closed-form ordinary least squares for a single predictor.

    slope = cov(x, y) / var(x), intercept = mean(y) - slope * mean(x)

    Returns:
        (intercept, slope)
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"x and y must have the same length (got {len(x)} and {len(y)})")
    if len(x) == 0:
        raise EmptyInputError("Cannot fit a baseline on zero rows.")
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise UpstreamDataError("Cannot fit a baseline on NaN or infinite values; drop those rows first.")

    x_mean = x.mean()
    y_mean = y.mean()
    dx = x - x_mean
    sxx = float(np.sum(dx * dx))
    # All predictor values identical (this includes a single row): no line can be estimated
    if np.all(x == x[0]) or sxx == 0.0:
        raise DegenerateFitError(
            f"Predictor has zero variance across {len(x)} row(s); regression line is undefined."
        )

    slope = float(np.sum(dx * (y - y_mean)) / sxx)
    intercept = float(y_mean - slope * x_mean)
    return intercept, slope


def fit_baseline(df: pd.DataFrame, predictor: str, outcome: str) -> FittedBaseline:
    """
    Fit outcome ~ predictor on the rows of df.

    Rows where either value is missing or infinite are skipped.

    Raises:
        EmptyInputError: no usable rows
        DegenerateFitError: predictor is constant
    """
    missing = [c for c in (predictor, outcome) if c not in df.columns]
    if missing:
        raise UpstreamDataError(f"Cannot fit baseline, missing columns: {missing}")

    x = pd.to_numeric(df[predictor], errors="coerce").to_numpy(dtype=float)
    y = pd.to_numeric(df[outcome], errors="coerce").to_numpy(dtype=float)
    m = np.isfinite(x) & np.isfinite(y)
    x, y = x[m], y[m]

    intercept, slope = fit_ols(x, y)
    # linregress only supplies the goodness-of-fit here; the coefficients come from fit_ols
    r_squared = float(stats.linregress(x, y).rvalue ** 2)

    return FittedBaseline(
        intercept=intercept,
        slope=slope,
        predictor=predictor,
        outcome=outcome,
        r_squared=r_squared,
        n=int(len(x)),
    )


def add_value_over_expectation(df: pd.DataFrame, baseline: FittedBaseline) -> pd.DataFrame:
    """
    Add expected_<outcome> and <outcome>_oe (observed - expected) columns.

    Returns:
        Copy of df with the two new columns
    """
    missing = [c for c in (baseline.predictor, baseline.outcome) if c not in df.columns]
    if missing:
        raise UpstreamDataError(f"Cannot score players, missing columns: {missing}")

    out = df.copy()
    out[baseline.expected_col] = baseline.predict(pd.to_numeric(out[baseline.predictor], errors="coerce"))
    out[baseline.residual_col] = pd.to_numeric(out[baseline.outcome], errors="coerce") - out[baseline.expected_col]
    return out
