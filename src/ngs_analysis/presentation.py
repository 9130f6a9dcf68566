"""
Tables and charts for the walkthrough.

These are thin wrappers: the numbers are computed elsewhere, this module only
ranks, rounds and draws them.
"""

from __future__ import annotations

from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from .baseline_model import FittedBaseline
from .config import COUNT_COL, MIN_WEEKS_THRESHOLD, PLAYER_COL


def ranked_table(
    df: pd.DataFrame,
    sort_col: str,
    columns: Optional[List[str]] = None,
    digits: int = 2,
    limit: Optional[int] = 10,
    ascending: bool = False,
    title: Optional[str] = None,
) -> pd.DataFrame:
    """
    Sort players by one column and keep the top rows for display.

    Args:
        df: Player-level table
        sort_col: Column to rank by
        columns: Columns to show (default: all); sort_col is added if absent
        digits: Decimal places for float columns
        limit: Number of rows to keep (None keeps all)
        ascending: Rank smallest first when True
        title: Caption stored in DataFrame.attrs["title"]

    Returns:
        New DataFrame with a 1-based "rank" column first
    """
    if sort_col not in df.columns:
        raise ValueError(f"sort column '{sort_col}' not in table")

    cols = list(columns) if columns is not None else list(df.columns)
    if sort_col not in cols:
        cols.append(sort_col)
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"table is missing display columns: {missing}")

    # kind="mergesort" is stable, so tied players keep their incoming order
    out = df.sort_values(sort_col, ascending=ascending, kind="mergesort")[cols]
    if limit is not None:
        out = out.head(limit)
    out = out.reset_index(drop=True)

    float_cols = out.select_dtypes(include="float").columns
    if len(float_cols):
        out[float_cols] = out[float_cols].round(digits)
    out.insert(0, "rank", np.arange(1, len(out) + 1))
    if title:
        out.attrs["title"] = title
    return out


def format_table(table: pd.DataFrame) -> str:
    """Plain-text rendering with the title (if any) on top."""
    body = table.to_string(index=False)
    title = table.attrs.get("title")
    if title:
        return f"{title}\n{'-' * len(title)}\n{body}"
    return body


def plot_metric_scatter(
    df: pd.DataFrame,
    x: str,
    y: str,
    baseline: Optional[FittedBaseline] = None,
    label_col: str = PLAYER_COL,
    label_top: int = 5,
    label_by: Optional[str] = None,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """
    Scatter one metric against another, optionally with the fitted baseline.

    Args:
        df: Player-level table
        x, y: Columns for the axes
        baseline: If given, the regression line is drawn across the x range
        label_col: Column used for point labels
        label_top: Label this many players with the largest |label_by|
        label_by: Column ranking which players get a label (default: y)
        title: Figure title
        save_path: Optional path to save figure

    Returns:
        matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=(10, 7))
    sns.scatterplot(data=df, x=x, y=y, ax=ax, alpha=0.7, edgecolor=None)

    if baseline is not None and len(df) > 0:
        xs = np.linspace(df[x].min(), df[x].max(), 100)
        ax.plot(xs, baseline.predict(xs), color="red", linestyle="--", linewidth=2,
                label=f"Expected: {baseline.intercept:.2f} + {baseline.slope:.2f}·x")
        ax.legend()

    if label_top and label_col in df.columns and len(df) > 0:
        rank_col = label_by or y
        top = df.loc[df[rank_col].abs().sort_values(ascending=False).index[:label_top]]
        for _, row in top.iterrows():
            ax.annotate(str(row[label_col]), (row[x], row[y]), fontsize=8,
                        xytext=(4, 4), textcoords="offset points")

    ax.set_xlabel(x, fontsize=11)
    ax.set_ylabel(y, fontsize=11)
    ax.set_title(title or f"{y} vs {x}", fontsize=12, fontweight="bold")
    ax.grid(True, alpha=0.3)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches="tight")

    return fig


def plot_weeks_distribution(
    summary: pd.DataFrame,
    min_weeks: int = MIN_WEEKS_THRESHOLD,
    count_col: str = COUNT_COL,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Histogram of weeks observed per player with the sample-size cutoff marked."""
    fig, ax = plt.subplots(figsize=(10, 5))
    counts = summary[count_col]
    bins = np.arange(0.5, max(int(counts.max()) if len(counts) else 1, min_weeks + 1) + 1.5)
    ax.hist(counts, bins=bins, alpha=0.7)
    ax.axvline(min_weeks + 0.5, linestyle="--", color="red", label=f"Keep > {min_weeks} weeks")

    kept = int((counts > min_weeks).sum())
    ax.set_xlabel("Weeks observed", fontsize=11)
    ax.set_ylabel("Players", fontsize=11)
    ax.set_title(f"Weeks Observed per Player (kept {kept:,}/{len(counts):,})",
                 fontsize=12, fontweight="bold")
    ax.legend()
    ax.grid(True, alpha=0.3)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches="tight")

    return fig
