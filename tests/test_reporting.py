import pathlib, sys
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import json

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from brdsim.batch.runner import run_batch
from brdsim.cli import main, parse_args
from brdsim.dynamics.outcome import GameOutcome, Status
from brdsim.reporting.summary import format_summary, outcomes_to_frame, summarize_outcomes
from brdsim.reporting.visualization import plot_outcome_histograms, save_figure


def _mixed_outcomes():
    return [
        GameOutcome(Status.EQUILIBRIUM_NOT_FOUND, 5, 4),
        GameOutcome(Status.EQUILIBRIUM_FOUND, 2, 0, equilibrium=0),
        GameOutcome(Status.EQUILIBRIUM_FOUND, 9, 5, restarts=1, equilibrium=4),
        GameOutcome(Status.EQUILIBRIUM_FOUND, 3, 1, equilibrium=1),
    ]


def test_frame_is_sorted_by_status():
    df = outcomes_to_frame(_mixed_outcomes())
    assert list(df.columns) == ["status", "iterations", "movements", "restarts", "equilibrium"]
    assert list(df["status"]) == ["Equilibrium found"] * 3 + ["Equilibrium not found"]
    # game order is kept within a status
    assert list(df["iterations"]) == [2, 9, 3, 5]
    assert df["equilibrium"].isna().sum() == 1


def test_summary_counts_and_percentages():
    summary = summarize_outcomes(_mixed_outcomes())
    assert summary.loc["Equilibrium found", "games"] == 3
    assert summary.loc["Equilibrium not found", "games"] == 1
    assert summary["pct"].tolist() == [75.0, 25.0]
    assert summary.loc["Equilibrium found", "max_iterations"] == 9
    assert summary.loc["Equilibrium found", "median_movements"] == 1


def test_summary_of_batch_adds_up():
    outcomes = run_batch(50, 4, seed=8)
    summary = summarize_outcomes(outcomes)
    assert summary["games"].sum() == 50
    assert summary["pct"].sum() == pytest.approx(100.0, abs=0.2)


def test_format_summary():
    text = format_summary(summarize_outcomes(_mixed_outcomes()), n_players=2)
    assert text.startswith("Number of players: 2")
    assert "Equilibrium not found" in text


def test_plot_has_one_panel_per_status(tmp_path):
    fig = plot_outcome_histograms(_mixed_outcomes(), n_players=3)
    axes = fig.get_axes()
    assert len(axes) == 2
    assert axes[0].get_title() == "Equilibrium found (n=3, 75.0%)"
    assert fig._suptitle.get_text() == "Number of players: 3"

    path = save_figure(fig, str(tmp_path / "out" / "fig.png"))
    assert pathlib.Path(path).stat().st_size > 0
    assert not plt.fignum_exists(fig.number)


def test_plot_single_status():
    outcomes = [GameOutcome(Status.EQUILIBRIUM_FOUND, 2, 0, equilibrium=0)] * 4
    fig = plot_outcome_histograms(outcomes, n_players=2)
    assert len(fig.get_axes()) == 1
    plt.close(fig)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def test_parse_args_defaults():
    args = parse_args([])
    assert args.players == [2, 4, 6, 8, 10]
    assert args.games == 100_000
    assert args.seed == 1804
    assert args.output_dir == "plots"


def test_cli_writes_plots_summary_and_args(tmp_path):
    out = tmp_path / "plots"
    main(["--players", "2", "3", "--games", "20", "--seed", "7", "--output_dir", str(out)])

    assert (out / "game_results_2_players.png").exists()
    assert (out / "game_results_3_players.png").exists()
    assert json.loads((out / "args.json").read_text())["seed"] == 7

    summary = pd.read_csv(out / "summary.csv")
    assert set(summary["n_players"]) == {2, 3}
    assert summary.groupby("n_players")["games"].sum().tolist() == [20, 20]


def test_cli_without_plots(tmp_path):
    out = tmp_path / "run"
    main(["--players", "2", "--games", "5", "--output_dir", str(out), "--no_plots"])
    assert not list(out.glob("*.png"))
    assert (out / "summary.csv").exists()
