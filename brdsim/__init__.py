"""
Best-response dynamics on random n-player binary games.
This package estimates how often one-player-at-a-time best responses reach a
pure-strategy Nash equilibrium, and how many steps that takes.

Heavy submodules (torch, pandas, matplotlib) are imported lazily the first
time one of the public symbols is accessed.
"""

from importlib import import_module
from types import ModuleType
from typing import Any

__all__ = [
    # Games
    "RandomBinaryGame", "create_game",

    # Dynamics
    "DynamicsEngine", "GameOutcome", "Status", "run_single_game",

    # Batches
    "BatchRunner", "run_batch",

    # Errors
    "InvalidArgument", "ResourceLimitError",
]


def __getattr__(name: str) -> Any:  # noqa: D401 (simple signature is fine)
    """Dynamically import sub-symbols on first access."""

    if name in {"RandomBinaryGame", "create_game"}:
        mod: ModuleType = import_module("brdsim.game.binary_game")
        return getattr(mod, name)

    if name in {"DynamicsEngine", "run_single_game"}:
        mod = import_module("brdsim.dynamics.engine")
        return getattr(mod, name)

    if name in {"GameOutcome", "Status"}:
        mod = import_module("brdsim.dynamics.outcome")
        return getattr(mod, name)

    if name in {"BatchRunner", "run_batch"}:
        mod = import_module("brdsim.batch.runner")
        return getattr(mod, name)

    if name in {"InvalidArgument", "ResourceLimitError"}:
        mod = import_module("brdsim.errors")
        return getattr(mod, name)

    raise AttributeError(f"module 'brdsim' has no attribute '{name}'")
