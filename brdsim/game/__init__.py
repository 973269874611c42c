"""
Game representation module.
This module provides the binary-strategy normal-form games the dynamics run on.
"""

from brdsim.game.abstract_game import (
    AbstractGame, MAXIMUM_PAYOFF, MINIMUM_PAYOFF, MAX_PLAYERS, MAX_TABLE_BYTES,
    STRATEGIES_PER_PLAYER,
)
from brdsim.game.binary_game import RandomBinaryGame, create_game
