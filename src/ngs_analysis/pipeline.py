"""
Weekly-to-player reduction steps for Next Gen Stats tables.

Each function takes a DataFrame and returns a NEW DataFrame, so the notebook can
chain them (clean -> summarize -> filter) without any shared global table.
"""

from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from .config import COUNT_COL, MIN_WEEKS_THRESHOLD, PLAYER_COL, SEASON_AGGREGATE_WEEK, WEEK_COL
from .errors import EmptyInputError, UpstreamDataError


def _require_columns(df: pd.DataFrame, columns: Iterable[str], what: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise UpstreamDataError(f"{what} is missing columns: {missing}")


def drop_season_aggregates(
    df: pd.DataFrame,
    week_col: str = WEEK_COL,
    aggregate_week: int = SEASON_AGGREGATE_WEEK,
) -> pd.DataFrame:
    """
    Remove the season-rollup rows so only true weekly observations remain.

    Args:
        df: Weekly NGS table (one row per player-week)
        week_col: Column holding the week number
        aggregate_week: Sentinel week value used for the full-season rollup

    Returns:
        Copy of df without the sentinel rows, original row order preserved
    """
    _require_columns(df, [week_col], "weekly table")
    # Boolean mask keeps every row whose week is not the sentinel.
    # .copy() so later column assignments never touch the caller's frame.
    kept = df[df[week_col] != aggregate_week].copy()
    return kept.reset_index(drop=True)


def summarize_players(
    df: pd.DataFrame,
    metrics: Iterable[str],
    group_col: str = PLAYER_COL,
    count_col: str = COUNT_COL,
) -> pd.DataFrame:
    """
    Reduce weekly rows to one row per player: median of each metric plus a week count.

    Players are keyed by display name only. Two players sharing a name are merged,
    which is a known limitation of the source data.

    Args:
        df: Cleaned weekly table
        metrics: Numeric columns to reduce with the median
        group_col: Player identity column
        count_col: Name of the output column holding the number of weekly rows

    Returns:
        DataFrame with columns [group_col, *metrics, count_col], sorted by group_col
    """
    metrics = list(metrics)
    if len(df) == 0:
        raise EmptyInputError("Cannot summarize players from an empty weekly table.")

    _require_columns(df, [group_col, *metrics], "weekly table")
    non_numeric = [m for m in metrics if not pd.api.types.is_numeric_dtype(df[m])]
    if non_numeric:
        raise UpstreamDataError(f"Metric columns are not numeric: {non_numeric}")

    # groupby() sorts keys by default, which makes the output order repeatable.
    # dropna=False keeps rows with a missing name so week counts still add up.
    grouped = df.groupby(group_col, sort=True, dropna=False)
    summary = grouped[metrics].median()
    # .size() counts rows per player (unlike .count(), it does not skip NaN metrics)
    summary[count_col] = grouped.size()
    summary = summary.reset_index()
    summary[count_col] = summary[count_col].astype(int)
    return summary[[group_col, *metrics, count_col]]


def filter_min_weeks(
    summary: pd.DataFrame,
    min_weeks: int = MIN_WEEKS_THRESHOLD,
    count_col: str = COUNT_COL,
) -> pd.DataFrame:
    """Keep players with strictly more than min_weeks weekly rows."""
    _require_columns(summary, [count_col], "player summary")
    return summary[summary[count_col] > min_weeks].reset_index(drop=True)


def weekly_to_filtered_summary(
    df: pd.DataFrame,
    metrics: List[str],
    min_weeks: int = MIN_WEEKS_THRESHOLD,
    group_col: str = PLAYER_COL,
    week_col: str = WEEK_COL,
    count_col: str = COUNT_COL,
) -> pd.DataFrame:
    """Clean, summarize and filter in one call."""
    cleaned = drop_season_aggregates(df, week_col=week_col)
    summary = summarize_players(cleaned, metrics, group_col=group_col, count_col=count_col)
    return filter_min_weeks(summary, min_weeks=min_weeks, count_col=count_col)
