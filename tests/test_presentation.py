import matplotlib.pyplot as plt
import pandas as pd
import pytest

from ngs_analysis.baseline_model import FittedBaseline
from ngs_analysis.presentation import format_table, plot_metric_scatter, plot_weeks_distribution, ranked_table


def _players() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "player_display_name": ["A", "B", "C", "D"],
            "avg_cushion": [5.0, 6.0, 7.0, 8.0],
            "avg_separation": [3.14159, 2.71828, 1.41421, 2.0],
            "weeks": [11, 15, 12, 17],
        }
    )


def test_ranked_table_sorts_rounds_and_limits():
    table = ranked_table(_players(), "avg_separation", columns=["player_display_name", "weeks"], digits=1, limit=2)

    assert table.columns.tolist() == ["rank", "player_display_name", "weeks", "avg_separation"]
    assert table["player_display_name"].tolist() == ["A", "B"]
    assert table["avg_separation"].tolist() == [3.1, 2.7]
    assert table["rank"].tolist() == [1, 2]


def test_ranked_table_ascending_and_no_limit():
    table = ranked_table(_players(), "avg_separation", ascending=True, limit=None)

    assert table["player_display_name"].tolist() == ["C", "D", "B", "A"]


def test_ranked_table_unknown_column():
    with pytest.raises(ValueError):
        ranked_table(_players(), "avg_yac")


def test_format_table_includes_title():
    table = ranked_table(_players(), "weeks", title="Most weeks")
    text = format_table(table)

    assert text.splitlines()[0] == "Most weeks"
    assert "D" in text


def test_plot_metric_scatter_draws_baseline(tmp_path):
    baseline = FittedBaseline(intercept=6.0, slope=-0.5, predictor="avg_cushion", outcome="avg_separation")
    path = tmp_path / "scatter.png"

    fig = plot_metric_scatter(_players(), "avg_cushion", "avg_separation", baseline=baseline, save_path=str(path))

    ax = fig.axes[0]
    assert len(ax.lines) == 1
    assert len(ax.texts) == 4
    assert path.exists()


def test_plot_weeks_distribution_returns_figure():
    fig = plot_weeks_distribution(_players(), min_weeks=12)

    assert isinstance(fig, plt.Figure)
    assert "kept 2/4" in fig.axes[0].get_title()
