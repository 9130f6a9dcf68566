import matplotlib.pyplot as plt
import pytest

from ngs_analysis.errors import DegenerateFitError
from ngs_analysis.separation_analyzer import ValueOverExpectationAnalyzer


def _analyzer(weekly, **kwargs):
    calls = []

    def loader(season, stat_type, cache_dir=None, verbose=False):
        calls.append((season, stat_type))
        return weekly

    analyzer = ValueOverExpectationAnalyzer(loader=loader, verbose=False, **kwargs)
    return analyzer, calls


def test_run_full_pipeline_scores_receivers(league_weekly):
    analyzer, calls = _analyzer(league_weekly, season=2022)

    scored = analyzer.run_full_pipeline()

    assert calls == [(2022, "receiving")]
    assert analyzer.baseline.slope == pytest.approx(0.46)
    assert analyzer.baseline.intercept == pytest.approx(1.1)
    assert analyzer.baseline.n == 4
    assert scored["player_display_name"].tolist() == ["Rec Four", "Rec One", "Rec Two", "Rec Three"]
    assert scored["avg_separation_oe"].tolist() == pytest.approx([0.16, 0.14, -0.12, -0.18])
    assert scored["avg_separation_oe"].sum() == pytest.approx(0.0, abs=1e-9)


def test_run_full_pipeline_with_preloaded_table_skips_loader(league_weekly):
    analyzer, calls = _analyzer(league_weekly)

    analyzer.run_full_pipeline(weekly=league_weekly)

    assert calls == []
    assert analyzer.weekly_raw is league_weekly


def test_pipeline_stages_are_kept_on_instance(league_weekly):
    analyzer, _ = _analyzer(league_weekly)
    analyzer.run_full_pipeline()

    assert len(analyzer.weekly_clean) == len(league_weekly) - 4
    assert len(analyzer.player_summary) == 5
    assert len(analyzer.player_filtered) == 4


def test_min_weeks_override(league_weekly):
    analyzer, _ = _analyzer(league_weekly, min_weeks=3)
    analyzer.run_full_pipeline()

    assert "Short Sample" in analyzer.player_filtered["player_display_name"].tolist()


def test_degenerate_population_surfaces_error(league_weekly):
    flat = league_weekly.copy()
    flat["avg_cushion"] = 6.0
    analyzer, _ = _analyzer(flat)

    with pytest.raises(DegenerateFitError):
        analyzer.run_full_pipeline()


def test_unknown_stat_type():
    with pytest.raises(ValueError, match="stat_type"):
        ValueOverExpectationAnalyzer(stat_type="kicking", loader=lambda *a, **k: None)


def test_model_columns_are_always_summarized():
    analyzer = ValueOverExpectationAnalyzer(
        stat_type="passing", metrics=["completion_percentage"], loader=lambda *a, **k: None, verbose=False
    )

    assert analyzer.predictor == "avg_time_to_throw"
    assert analyzer.outcome == "avg_intended_air_yards"
    assert analyzer.metrics == ["completion_percentage", "avg_intended_air_yards", "avg_time_to_throw"]


def test_writes_scored_csv(league_weekly, tmp_path):
    analyzer, _ = _analyzer(league_weekly, season=2021, out_dir=tmp_path / "out")
    analyzer.run_full_pipeline()

    path = tmp_path / "out" / "receiving_2021_avg_separation_oe.csv"
    assert path.exists()


def test_top_players_table(league_weekly):
    analyzer, _ = _analyzer(league_weekly, season=2022)
    analyzer.run_full_pipeline()

    top = analyzer.top_players(n=2)
    bottom = analyzer.top_players(n=1, ascending=True)

    assert top["player_display_name"].tolist() == ["Rec Four", "Rec One"]
    assert top["rank"].tolist() == [1, 2]
    assert top.attrs["title"] == "Highest avg_separation over expectation, 2022"
    assert bottom["player_display_name"].tolist() == ["Rec Three"]


def test_top_players_requires_pipeline():
    analyzer = ValueOverExpectationAnalyzer(loader=lambda *a, **k: None, verbose=False)
    with pytest.raises(ValueError, match="run_full_pipeline"):
        analyzer.top_players()


def test_top_by_metric(league_weekly):
    analyzer, _ = _analyzer(league_weekly)
    analyzer.run_full_pipeline()

    table = analyzer.top_by_metric("avg_cushion", n=1)

    assert table["player_display_name"].tolist() == ["Rec Four"]


def test_plots_return_figures(league_weekly):
    analyzer, _ = _analyzer(league_weekly)
    analyzer.run_full_pipeline()

    assert isinstance(analyzer.plot_raw_relationship(), plt.Figure)
    assert isinstance(analyzer.plot_value_over_expectation(), plt.Figure)
    assert isinstance(analyzer.plot_weeks_observed(), plt.Figure)


def test_verbose_progress_output(league_weekly, capsys):
    analyzer = ValueOverExpectationAnalyzer(loader=lambda *a, **k: league_weekly, verbose=True)
    analyzer.run_full_pipeline()

    out = capsys.readouterr().out
    assert "=== Dropping Season Aggregates ===" in out
    assert "Keeping 4/5 players" in out
