"""
Exceptions raised by the value-over-expectation pipeline.

They all subclass ValueError so callers that already catch bad-data errors
from pandas-style code keep working.
"""


class UpstreamDataError(ValueError):
    """The data provider returned a table we cannot use (missing or non-numeric columns, no rows)."""


class EmptyInputError(ValueError):
    """A stage that needs at least one row received none."""


class DegenerateFitError(ValueError):
    """The predictor has zero variance, so a regression line is undefined."""
