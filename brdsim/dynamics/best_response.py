"""
Single-player best response for binary games.
"""
from dataclasses import dataclass

from brdsim.custom_math.profile_codec import flip
from brdsim.game.abstract_game import AbstractGame


@dataclass(frozen=True)
class Decision:
    """What one player does when asked: keep the profile or move to `profile_code`."""
    switch: bool
    profile_code: int


def evaluate(game: AbstractGame, profile_code: int, player: int) -> Decision:
    """
    Decide whether `player` strictly gains by switching strategy.

    With two strategies the best response reduces to comparing the payoff at
    the current profile with the payoff after flipping the player's bit. Ties
    keep the current strategy.

    Args:
        game: Game providing payoff(player, code)
        profile_code: Current joint profile
        player: Index of the player being asked

    Returns:
        Decision(switch=True, flipped code) or Decision(switch=False, current code)
    """
    flipped = flip(profile_code, player)
    u_current = game.payoff(player, profile_code)
    u_flipped = game.payoff(player, flipped)
    if u_flipped > u_current:
        return Decision(True, flipped)
    return Decision(False, profile_code)
