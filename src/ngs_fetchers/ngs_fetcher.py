"""
Next Gen Stats loader.

Pulls weekly player tracking stats through nfl_data_py and checks that the
columns the analysis needs are actually there before anything else runs.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ngs_analysis.config import PLAYER_COL, STAT_TYPES, WEEK_COL, stat_type_metrics
from ngs_analysis.errors import UpstreamDataError


def _import_ngs_data(stat_type: str, years: List[int]) -> pd.DataFrame:
    """Network call to the nflverse NGS release (one parquet file per stat type)."""
    import nfl_data_py as nfl

    return nfl.import_ngs_data(stat_type, years)


def cache_path(cache_dir: Path | str, season: int, stat_type: str) -> Path:
    return Path(cache_dir) / f"ngs_{stat_type}_{season}.csv"


def validate_ngs_frame(df: pd.DataFrame, stat_type: str) -> pd.DataFrame:
    """
    Check the provider output and coerce metric columns to numbers.

    Raises:
        UpstreamDataError: empty table or required columns missing
    """
    if df is None or len(df) == 0:
        raise UpstreamDataError(f"No {stat_type} rows returned by the data provider.")

    metrics = stat_type_metrics(stat_type)
    required = [PLAYER_COL, WEEK_COL, *metrics]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise UpstreamDataError(f"NGS {stat_type} data is missing columns: {missing}")

    out = df.copy()
    # errors="coerce" turns stray strings into NaN instead of failing the whole load;
    # the median step skips NaN values
    for col in [WEEK_COL, *metrics]:
        out[col] = pd.to_numeric(out[col], errors="coerce")
    if out[WEEK_COL].isna().any():
        raise UpstreamDataError(f"NGS {stat_type} data has rows without a week number.")
    out[WEEK_COL] = out[WEEK_COL].astype(int)
    return out


def load_ngs_weekly(
    season: int,
    stat_type: str = "receiving",
    cache_dir: Optional[Path | str] = None,
    verbose: bool = False,
) -> pd.DataFrame:
    """
    Load one season of weekly Next Gen Stats.

    Args:
        season: NFL season (e.g. 2022)
        stat_type: One of "passing", "rushing", "receiving"
        cache_dir: Optional directory; if set, a CSV copy is read from / written to it
        verbose: If True, print progress messages

    Returns:
        Validated DataFrame, one row per player-week (week 0 = season rollup)
    """
    if stat_type not in STAT_TYPES:
        raise ValueError(f"stat_type must be one of: {', '.join(STAT_TYPES)} (got {stat_type!r})")

    path = cache_path(cache_dir, season, stat_type) if cache_dir is not None else None
    if path is not None and path.exists():
        if verbose:
            print(f"  ✓ Using cached {path}")
        return validate_ngs_frame(pd.read_csv(path), stat_type)

    if verbose:
        print(f"  Downloading NGS {stat_type} data for {season}...")
    # Network errors from the provider propagate unchanged: no retry here
    df = _import_ngs_data(stat_type, [season])
    df = validate_ngs_frame(df, stat_type)

    if verbose:
        print(f"  ✓ Loaded {len(df):,} {stat_type} rows for {season}")

    if path is not None:
        os.makedirs(path.parent, exist_ok=True)
        df.to_csv(path, index=False)
        if verbose:
            print(f"  [saved] {path}")
    return df
