"""Analysis package exports."""

from .baseline_model import FittedBaseline, add_value_over_expectation, fit_baseline, fit_ols
from .errors import DegenerateFitError, EmptyInputError, UpstreamDataError
from .notebook_workflow import NotebookWorkflow, WorkflowState
from .pipeline import drop_season_aggregates, filter_min_weeks, summarize_players, weekly_to_filtered_summary
from .separation_analyzer import ValueOverExpectationAnalyzer

__all__ = [
    "DegenerateFitError",
    "EmptyInputError",
    "FittedBaseline",
    "NotebookWorkflow",
    "UpstreamDataError",
    "ValueOverExpectationAnalyzer",
    "WorkflowState",
    "add_value_over_expectation",
    "drop_season_aggregates",
    "filter_min_weeks",
    "fit_baseline",
    "fit_ols",
    "summarize_players",
    "weekly_to_filtered_summary",
]
