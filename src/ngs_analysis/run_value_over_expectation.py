"""
Simple script to run the whole value-over-expectation walkthrough.

Usage:
    python -m ngs_analysis.run_value_over_expectation --season 2022 --stat-type receiving
"""

import argparse

from ngs_analysis.config import DEFAULT_SEASON, MIN_WEEKS_THRESHOLD, STAT_TYPES
from ngs_analysis.presentation import format_table
from ngs_analysis.separation_analyzer import ValueOverExpectationAnalyzer


def run_value_over_expectation(
    season=DEFAULT_SEASON,
    stat_type="receiving",
    min_weeks=MIN_WEEKS_THRESHOLD,
    top_n=10,
    cache_dir=None,
    out_dir=None,
    loader=None,
    verbose=True,
):
    """
    Run every step and print the ranked tables.

    Args:
        season: NFL season
        stat_type: "passing", "rushing" or "receiving"
        min_weeks: Keep players with more than this many weeks
        top_n: Rows per printed table
        cache_dir: Optional CSV cache directory for downloads
        out_dir: Optional directory for the scored CSV
        loader: Optional replacement for the NGS download (same signature)
        verbose: If True, print progress and results

    Returns:
        dict with the analyzer, baseline and tables
    """
    analyzer = ValueOverExpectationAnalyzer(
        season=season,
        stat_type=stat_type,
        min_weeks=min_weeks,
        cache_dir=cache_dir,
        out_dir=out_dir,
        loader=loader,
        verbose=verbose,
    )
    scored = analyzer.run_full_pipeline()

    results = {
        "analyzer": analyzer,
        "baseline": analyzer.baseline,
        "scored": scored,
        "top": analyzer.top_players(n=top_n),
        "bottom": analyzer.top_players(n=top_n, ascending=True),
    }

    if verbose:
        print()
        print(format_table(results["top"]))
        print()
        print(format_table(results["bottom"]))
        print("\n" + "=" * 70)
        print("Value over expectation complete!")
        print("=" * 70)

    return results


def main(argv=None):
    """Main function for command-line usage."""
    parser = argparse.ArgumentParser(description="Next Gen Stats value over expectation")
    parser.add_argument("--season", type=int, default=DEFAULT_SEASON)
    parser.add_argument("--stat-type", choices=STAT_TYPES, default="receiving")
    parser.add_argument("--min-weeks", type=int, default=MIN_WEEKS_THRESHOLD)
    parser.add_argument("--top", type=int, default=10)
    parser.add_argument("--cache-dir", default=None)
    parser.add_argument("--out-dir", default=None)
    args = parser.parse_args(argv)

    run_value_over_expectation(
        season=args.season,
        stat_type=args.stat_type,
        min_weeks=args.min_weeks,
        top_n=args.top,
        cache_dir=args.cache_dir,
        out_dir=args.out_dir,
        verbose=True,
    )


if __name__ == "__main__":
    main()
