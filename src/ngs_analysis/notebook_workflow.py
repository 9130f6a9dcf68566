"""
Notebook-friendly orchestration layer for the value-over-expectation walkthrough.

Goal:
- Make each notebook block callable with one line.
- Keep the actual logic in ValueOverExpectationAnalyzer.
- Maintain intermediate tables between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pandas as pd

from .baseline_model import FittedBaseline
from .separation_analyzer import ValueOverExpectationAnalyzer


@dataclass
class WorkflowState:
    """Container for intermediate dataframes/results produced by block methods."""

    weekly_raw: Optional[pd.DataFrame] = None
    weekly_clean: Optional[pd.DataFrame] = None
    player_summary: Optional[pd.DataFrame] = None
    player_filtered: Optional[pd.DataFrame] = None
    baseline: Optional[FittedBaseline] = None
    player_scored: Optional[pd.DataFrame] = None
    extras: Dict[str, Any] = field(default_factory=dict)


class NotebookWorkflow:
    """
    One-line-call orchestration object for notebook usage.

    Example:
        wf = NotebookWorkflow(season=2022, stat_type="receiving")
        wf.block_full_pipeline()
        wf.table_top(10)
        wf.plot_raw_relationship()
    """

    def __init__(self, weekly: Optional[pd.DataFrame] = None, **analyzer_kwargs: Any) -> None:
        self.analyzer = ValueOverExpectationAnalyzer(**analyzer_kwargs)
        self.state = WorkflowState(weekly_raw=weekly)

    # ==================== DATA BLOCKS ====================

    def block_load_data(self) -> pd.DataFrame:
        """Notebook block: pull weekly rows from the data provider."""
        self.state.weekly_raw = self.analyzer.load_weekly()
        return self.state.weekly_raw

    def block_clean(self) -> pd.DataFrame:
        """Notebook block: drop season-aggregate rows."""
        if self.state.weekly_raw is None:
            self.block_load_data()
        self.state.weekly_clean = self.analyzer.clean(self.state.weekly_raw)
        return self.state.weekly_clean

    def block_summarize(self) -> pd.DataFrame:
        """Notebook block: per-player medians and week counts."""
        if self.state.weekly_clean is None:
            self.block_clean()
        self.state.player_summary = self.analyzer.summarize(self.state.weekly_clean)
        return self.state.player_summary

    def block_filter(self) -> pd.DataFrame:
        """Notebook block: drop players below the week threshold."""
        if self.state.player_summary is None:
            self.block_summarize()
        self.state.player_filtered = self.analyzer.filter_sample(self.state.player_summary)
        return self.state.player_filtered

    # ==================== MODEL BLOCKS ====================

    def block_fit(self) -> FittedBaseline:
        """Notebook block: fit the one-variable baseline."""
        if self.state.player_filtered is None:
            self.block_filter()
        self.state.baseline = self.analyzer.fit(self.state.player_filtered)
        return self.state.baseline

    def block_score(self) -> pd.DataFrame:
        """Notebook block: add expected values and residuals."""
        if self.state.baseline is None:
            self.block_fit()
        self.state.player_scored = self.analyzer.score(self.state.player_filtered, self.state.baseline)
        return self.state.player_scored

    def block_full_pipeline(self) -> pd.DataFrame:
        """
        One-line pipeline.

        Equivalent to running every block in sequence.
        """
        if self.state.weekly_raw is None:
            self.block_load_data()
        self.block_clean()
        self.block_summarize()
        self.block_filter()
        self.block_fit()
        return self.block_score()

    # ==================== TABLES (ONE-LINE) ====================

    def table_top(self, n: int = 10, *, ascending: bool = False) -> pd.DataFrame:
        if self.state.player_scored is None:
            self.block_score()
        return self.analyzer.top_players(self.state.player_scored, n=n, ascending=ascending)

    def table_metric(self, metric: str, n: int = 10) -> pd.DataFrame:
        if self.state.player_filtered is None:
            self.block_filter()
        return self.analyzer.top_by_metric(metric, n=n)

    # ==================== PLOT WRAPPERS (ONE-LINE) ====================

    def plot_weeks_observed(self):
        if self.state.player_summary is None:
            self.block_summarize()
        return self.analyzer.plot_weeks_observed()

    def plot_raw_relationship(self):
        if self.state.baseline is None:
            self.block_fit()
        return self.analyzer.plot_raw_relationship()

    def plot_value_over_expectation(self):
        if self.state.player_scored is None:
            self.block_score()
        return self.analyzer.plot_value_over_expectation()
