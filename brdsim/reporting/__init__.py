"""
Summaries and plots of batch outcomes.
"""
from .summary import (
    outcomes_to_frame,
    summarize_outcomes,
    format_summary,
)
from .visualization import (
    plot_outcome_histograms,
    save_figure,
)

__all__ = [
    'outcomes_to_frame',
    'summarize_outcomes',
    'format_summary',
    'plot_outcome_histograms',
    'save_figure',
]
