"""
Value Over Expectation Analysis Module

This module walks through a full "stat over expectation" analysis on Next Gen
Stats data: load weekly rows, drop season rollups, reduce to per-player medians,
drop small samples, fit a one-variable baseline and score every player against it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

import matplotlib.pyplot as plt
import pandas as pd

from .baseline_model import FittedBaseline, add_value_over_expectation, fit_baseline
from .config import (
    COUNT_COL,
    DEFAULT_SEASON,
    MIN_WEEKS_THRESHOLD,
    PLAYER_COL,
    SEASON_AGGREGATE_WEEK,
    STAT_TYPE_DEFAULTS,
    STAT_TYPES,
    WEEK_COL,
)
from .pipeline import drop_season_aggregates, filter_min_weeks, summarize_players
from .presentation import plot_metric_scatter, plot_weeks_distribution, ranked_table


class ValueOverExpectationAnalyzer:
    """
    Main class for the value-over-expectation walkthrough.

    Every step takes its input table as an argument and returns a new one, so the
    steps can also be called on hand-built DataFrames. The latest result of each
    step is kept on the instance for convenience.
    """

    def __init__(
        self,
        season: int = DEFAULT_SEASON,
        stat_type: str = "receiving",
        metrics: Optional[List[str]] = None,
        predictor: Optional[str] = None,
        outcome: Optional[str] = None,
        min_weeks: int = MIN_WEEKS_THRESHOLD,
        player_col: str = PLAYER_COL,
        loader: Optional[Callable[..., pd.DataFrame]] = None,
        cache_dir: Optional[Path | str] = None,
        out_dir: Optional[Path | str] = None,
        verbose: bool = True,
    ):
        """
        Initialize the analyzer.

        Args:
            season: NFL season to analyze
            stat_type: "passing", "rushing" or "receiving"
            metrics: Columns reduced to medians (default: per stat type)
            predictor: Baseline model input column (default: per stat type)
            outcome: Baseline model target column (default: per stat type)
            min_weeks: Keep players with MORE than this many weeks
            player_col: Player identity column (display name in NGS data)
            loader: Callable(season, stat_type, cache_dir=..., verbose=...) returning weekly rows
            cache_dir: Optional CSV cache for downloaded data
            out_dir: Optional directory for CSV outputs of run_full_pipeline
            verbose: If True, print progress messages
        """
        if stat_type not in STAT_TYPES:
            raise ValueError(f"stat_type must be one of: {', '.join(STAT_TYPES)} (got {stat_type!r})")

        defaults = STAT_TYPE_DEFAULTS[stat_type]
        self.season = season
        self.stat_type = stat_type
        self.predictor = predictor or defaults["predictor"]
        self.outcome = outcome or defaults["outcome"]
        self.metrics = list(metrics) if metrics is not None else list(defaults["metrics"])
        # The model columns must be summarized too, otherwise there is nothing to fit
        for col in (self.outcome, self.predictor):
            if col not in self.metrics:
                self.metrics.append(col)

        self.min_weeks = min_weeks
        self.player_col = player_col
        if loader is None:
            # Imported here: ngs_fetchers itself imports this package for config and errors
            from ngs_fetchers import load_ngs_weekly
            loader = load_ngs_weekly
        self.loader = loader
        self.cache_dir = cache_dir
        self.out_dir = Path(out_dir) if out_dir is not None else None
        self.verbose = verbose

        # Data storage
        self.weekly_raw = None
        self.weekly_clean = None
        self.player_summary = None
        self.player_filtered = None
        self.baseline = None
        self.player_scored = None

    # ==================== DATA LOADING ====================

    def load_weekly(self) -> pd.DataFrame:
        """Fetch the weekly table from the data provider."""
        if self.verbose:
            print(f"\n=== Loading NGS {self.stat_type} data ({self.season}) ===")
        df = self.loader(self.season, self.stat_type, cache_dir=self.cache_dir, verbose=self.verbose)
        self.weekly_raw = df
        if self.verbose:
            print(f"Loaded {len(df):,} rows")
        return df

    # ==================== CLEANING & AGGREGATION ====================

    def clean(self, weekly: pd.DataFrame) -> pd.DataFrame:
        """Drop season-aggregate rows (week 0)."""
        cleaned = drop_season_aggregates(weekly, week_col=WEEK_COL, aggregate_week=SEASON_AGGREGATE_WEEK)
        self.weekly_clean = cleaned
        if self.verbose:
            print("\n=== Dropping Season Aggregates ===")
            print(f"Dropped {len(weekly) - len(cleaned):,} week-{SEASON_AGGREGATE_WEEK} rows "
                  f"({len(weekly):,} → {len(cleaned):,})")
        return cleaned

    def summarize(self, weekly_clean: pd.DataFrame) -> pd.DataFrame:
        """Reduce weekly rows to per-player medians and a week count."""
        summary = summarize_players(weekly_clean, self.metrics, group_col=self.player_col, count_col=COUNT_COL)
        self.player_summary = summary
        if self.verbose:
            print("\n=== Summarizing Players ===")
            print(f"{len(summary):,} players from {len(weekly_clean):,} weekly rows")
        return summary

    def filter_sample(self, summary: pd.DataFrame) -> pd.DataFrame:
        """Drop players with too few weeks for a stable median."""
        kept = filter_min_weeks(summary, min_weeks=self.min_weeks, count_col=COUNT_COL)
        self.player_filtered = kept
        if self.verbose:
            total = len(summary)
            print(f"\n=== Filtering Players (> {self.min_weeks} weeks) ===")
            if total:
                print(f"Keeping {len(kept):,}/{total:,} players ({len(kept)/total:.1%})")
        return kept

    # ==================== BASELINE MODEL ====================

    def fit(self, players: pd.DataFrame) -> FittedBaseline:
        """Fit outcome ~ predictor across the filtered population."""
        baseline = fit_baseline(players, self.predictor, self.outcome)
        self.baseline = baseline
        if self.verbose:
            print("\n=== Fitting Baseline ===")
            print(baseline.describe())
        return baseline

    def score(self, players: pd.DataFrame, baseline: FittedBaseline) -> pd.DataFrame:
        """Add expected value and value-over-expectation columns."""
        scored = add_value_over_expectation(players, baseline)
        scored = scored.sort_values(baseline.residual_col, ascending=False).reset_index(drop=True)
        self.player_scored = scored
        if self.verbose:
            print("\n=== Scoring Players ===")
            print(f"Scored {len(scored):,} players "
                  f"(residual sum {scored[baseline.residual_col].sum():+.2e})")
        return scored

    # ==================== FULL PIPELINE ====================

    def run_full_pipeline(self, weekly: Optional[pd.DataFrame] = None) -> pd.DataFrame:
        """
        Run every step in order and return the scored player table.

        Args:
            weekly: Optional pre-loaded weekly table; loaded from the provider if None
        """
        if self.verbose:
            print("=" * 70)
            print(f"VALUE OVER EXPECTATION: {self.outcome} ~ {self.predictor}")
            print("=" * 70)

        if weekly is None:
            weekly = self.load_weekly()
        else:
            self.weekly_raw = weekly

        cleaned = self.clean(weekly)
        summary = self.summarize(cleaned)
        players = self.filter_sample(summary)
        baseline = self.fit(players)
        scored = self.score(players, baseline)

        if self.out_dir is not None:
            self.out_dir.mkdir(parents=True, exist_ok=True)
            path = self.out_dir / f"{self.stat_type}_{self.season}_{baseline.residual_col}.csv"
            scored.to_csv(path, index=False)
            if self.verbose:
                print(f"\n[saved] {path} ({len(scored):,} rows)")

        return scored

    # ==================== TABLES ====================

    def top_players(
        self,
        scored: Optional[pd.DataFrame] = None,
        n: int = 10,
        ascending: bool = False,
        digits: int = 2,
    ) -> pd.DataFrame:
        """Best (or worst, with ascending=True) players by value over expectation."""
        if scored is None:
            scored = self.player_scored
        if scored is None or self.baseline is None:
            raise ValueError("No scored players. Run run_full_pipeline() first.")

        b = self.baseline
        direction = "Lowest" if ascending else "Highest"
        return ranked_table(
            scored,
            sort_col=b.residual_col,
            columns=[self.player_col, b.outcome, b.predictor, b.expected_col, b.residual_col, COUNT_COL],
            digits=digits,
            limit=n,
            ascending=ascending,
            title=f"{direction} {b.outcome} over expectation, {self.season}",
        )

    def top_by_metric(self, metric: str, n: int = 10, digits: int = 2) -> pd.DataFrame:
        """Rank the filtered players by a raw median metric (no baseline)."""
        if self.player_filtered is None:
            raise ValueError("No filtered players. Run filter_sample() first.")
        return ranked_table(
            self.player_filtered,
            sort_col=metric,
            columns=[self.player_col, metric, COUNT_COL],
            digits=digits,
            limit=n,
            title=f"Median {metric}, {self.season} (> {self.min_weeks} weeks)",
        )

    # ==================== PLOTS ====================

    def plot_raw_relationship(self, save_path: Optional[str] = None) -> plt.Figure:
        """Scatter of outcome vs predictor with the fitted line."""
        if self.player_filtered is None or self.baseline is None:
            raise ValueError("No fitted baseline. Run run_full_pipeline() first.")
        return plot_metric_scatter(
            self.player_filtered,
            x=self.predictor,
            y=self.outcome,
            baseline=self.baseline,
            label_col=self.player_col,
            title=f"{self.outcome} vs {self.predictor} ({self.season})",
            save_path=save_path,
        )

    def plot_value_over_expectation(self, save_path: Optional[str] = None) -> plt.Figure:
        """Scatter of residual vs predictor; labels the largest residuals."""
        if self.player_scored is None or self.baseline is None:
            raise ValueError("No scored players. Run run_full_pipeline() first.")
        b = self.baseline
        fig = plot_metric_scatter(
            self.player_scored,
            x=b.predictor,
            y=b.residual_col,
            label_col=self.player_col,
            title=f"{b.outcome} over expectation vs {b.predictor} ({self.season})",
            save_path=None,
        )
        fig.axes[0].axhline(0, linestyle="--", color="gray", alpha=0.6)
        if save_path:
            fig.savefig(save_path, dpi=300, bbox_inches="tight")
        return fig

    def plot_weeks_observed(self, save_path: Optional[str] = None) -> plt.Figure:
        """Histogram of weeks per player, before filtering."""
        if self.player_summary is None:
            raise ValueError("No player summary. Run summarize() first.")
        return plot_weeks_distribution(self.player_summary, min_weeks=self.min_weeks, save_path=save_path)
