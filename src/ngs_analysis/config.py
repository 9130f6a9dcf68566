# config.py: policy constants for the value-over-expectation walkthrough
# Every module should import from here so thresholds and column names stay consistent.

from typing import Dict, List

DEFAULT_SEASON = 2022

# Next Gen Stats stores a full-season rollup for each player as "week 0".
SEASON_AGGREGATE_WEEK = 0

# Players need MORE than this many weekly rows to be kept (strict: 10 weeks is dropped).
MIN_WEEKS_THRESHOLD = 10

PLAYER_COL = "player_display_name"
WEEK_COL = "week"
COUNT_COL = "weeks"

STAT_TYPES = ("passing", "rushing", "receiving")

# Per stat type: metrics reduced to medians, plus the (predictor, outcome) pair
# the baseline model uses by default.
STAT_TYPE_DEFAULTS: Dict[str, Dict[str, object]] = {
    "receiving": {
        "metrics": ["avg_separation", "avg_cushion"],
        "predictor": "avg_cushion",
        "outcome": "avg_separation",
    },
    "passing": {
        "metrics": ["avg_intended_air_yards", "avg_time_to_throw"],
        "predictor": "avg_time_to_throw",
        "outcome": "avg_intended_air_yards",
    },
    "rushing": {
        "metrics": ["avg_rush_yards", "percent_attempts_gte_eight_defenders"],
        "predictor": "percent_attempts_gte_eight_defenders",
        "outcome": "avg_rush_yards",
    },
}


def stat_type_metrics(stat_type: str) -> List[str]:
    """Return the tracked metric columns for a stat type."""
    if stat_type not in STAT_TYPE_DEFAULTS:
        raise ValueError(f"stat_type must be one of: {', '.join(STAT_TYPES)} (got {stat_type!r})")
    return list(STAT_TYPE_DEFAULTS[stat_type]["metrics"])
