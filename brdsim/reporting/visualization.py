"""
Plots of batch outcomes.
Every function builds and returns its own figure; nothing is shown and no
global pyplot configuration is changed.
"""
import os
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from brdsim.dynamics.outcome import GameOutcome
from brdsim.reporting.summary import outcomes_to_frame

STATUS_COLORS = ["steelblue", "green"]
MOVEMENT_COLOR = "tomato"


def _integer_counts(values: np.ndarray, support: np.ndarray) -> np.ndarray:
    counts = np.bincount(values, minlength=support.max() + 1)
    return counts[support]


def plot_outcome_histograms(outcomes: Sequence[GameOutcome], n_players: int):
    """
    Overlaid bar charts of iteration and movement counts, one panel per status.

    Args:
        outcomes: GameOutcome records of one batch
        n_players: Player count, only used for the figure title

    Returns:
        matplotlib Figure
    """
    df = outcomes_to_frame(outcomes)
    statuses = list(df["status"].unique())
    fig, axes = plt.subplots(1, max(1, len(statuses)), figsize=(10, 6), squeeze=False)
    total = len(df)

    for i, status in enumerate(statuses):
        ax = axes[0, i]
        sub = df[df["status"] == status]
        its = sub["iterations"].to_numpy(dtype=np.int64)
        mov = sub["movements"].to_numpy(dtype=np.int64)
        support = np.union1d(its, mov)

        color = STATUS_COLORS[i % len(STATUS_COLORS)]
        x = np.arange(len(support))
        ax.bar(x, _integer_counts(its, support), width=1.0, color=color, alpha=0.8,
               label="Iterations")
        ax.bar(x, _integer_counts(mov, support), width=1.0, color=MOVEMENT_COLOR, alpha=0.8,
               label="Movements")

        # label at most ~10 evenly spaced integer ticks
        step = max(1, int(np.ceil(len(support) / 10)))
        ax.set_xticks(x[::step])
        ax.set_xticklabels([str(v) for v in support[::step]])

        pct = 100 * len(sub) / total
        ax.set_title(f"{status} (n={len(sub)}, {pct:.1f}%)")
        ax.set_xlabel("Value")
        ax.set_ylabel("Frequency")
        ax.legend(loc="upper right", frameon=False)

    fig.suptitle(f"Number of players: {n_players}", fontsize=16)
    fig.tight_layout()
    return fig


def save_figure(fig, path: str, dpi: int = 300) -> str:
    """Write `fig` as an image and release it."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    return path
