import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402


def weekly_rows(player, seps, cushes, start_week=1):
    return [
        {"player_display_name": player, "week": start_week + i, "avg_separation": s, "avg_cushion": c}
        for i, (s, c) in enumerate(zip(seps, cushes))
    ]


@pytest.fixture
def league_weekly() -> pd.DataFrame:
    """Four receivers with 12 weeks each plus a season rollup row, and one short-sample player."""
    offsets = {"Rec One": 0.2, "Rec Two": -0.1, "Rec Three": -0.2, "Rec Four": 0.1}
    rows = []
    for i, (name, offset) in enumerate(offsets.items(), start=1):
        rows.append({"player_display_name": name, "week": 0, "avg_separation": 99.0, "avg_cushion": 99.0})
        sep = 1.0 + 0.5 * i + offset
        rows.extend(weekly_rows(name, [sep] * 12, [float(i)] * 12))
    rows.extend(weekly_rows("Short Sample", [9.0] * 4, [1.0] * 4))
    return pd.DataFrame(rows)


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")
