"""
Tabular summaries of batch outcomes.
"""
from typing import Sequence

import pandas as pd
from tabulate import tabulate

from brdsim.dynamics.outcome import GameOutcome

OUTCOME_COLUMNS = ["status", "iterations", "movements", "restarts", "equilibrium"]


def outcomes_to_frame(outcomes: Sequence[GameOutcome]) -> pd.DataFrame:
    """
    One row per game, ordered by status (alphabetically), game order kept
    within a status.
    """
    df = pd.DataFrame([o.to_dict() for o in outcomes], columns=OUTCOME_COLUMNS)
    df["iterations"] = df["iterations"].astype(int)
    df["movements"] = df["movements"].astype(int)
    df["restarts"] = df["restarts"].astype(int)
    df["equilibrium"] = df["equilibrium"].astype("Int64")
    return df.sort_values("status", kind="stable").reset_index(drop=True)


def summarize_outcomes(outcomes: Sequence[GameOutcome]) -> pd.DataFrame:
    """
    Per-status statistics.

    Returns:
        DataFrame indexed by status with columns games, pct, and the mean,
        median and max of iterations and movements
    """
    df = outcomes_to_frame(outcomes)
    grouped = df.groupby("status", sort=True)
    summary = pd.DataFrame({
        "games": grouped.size(),
        "mean_iterations": grouped["iterations"].mean(),
        "median_iterations": grouped["iterations"].median(),
        "max_iterations": grouped["iterations"].max(),
        "mean_movements": grouped["movements"].mean(),
        "median_movements": grouped["movements"].median(),
        "max_movements": grouped["movements"].max(),
        "mean_restarts": grouped["restarts"].mean(),
    })
    summary.insert(1, "pct", (summary["games"] / summary["games"].sum() * 100).round(1))
    return summary


def format_summary(summary: pd.DataFrame, n_players: int) -> str:
    """Render a summary as a pipe table headed by the player count."""
    table = tabulate(summary.reset_index(), headers="keys", tablefmt="pipe",
                     showindex=False, floatfmt=".2f")
    return f"Number of players: {n_players}\n{table}"
