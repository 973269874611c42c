import logging
from typing import Callable, List, Optional

import numpy as np
import torch
from tabulate import tabulate

from brdsim.custom_math.profile_codec import all_profiles, decode, num_profiles
from brdsim.errors import InvalidArgument, ResourceLimitError
from brdsim.game.abstract_game import (
    AbstractGame, MAXIMUM_PAYOFF, MAX_PLAYERS, MAX_TABLE_BYTES, MINIMUM_PAYOFF,
    STRATEGIES_PER_PLAYER,
)

logger = logging.getLogger(__name__)


def validate_num_players(num_players):
    if not isinstance(num_players, int) or isinstance(num_players, bool):
        raise InvalidArgument(f"number of players must be an int, got {num_players!r}")
    if num_players < 1:
        raise InvalidArgument(f"number of players must be at least 1, got {num_players}")
    if num_players > MAX_PLAYERS:
        raise ResourceLimitError(
            f"a payoff table for {num_players} players exceeds the "
            f"{MAX_TABLE_BYTES >> 20} MiB limit; at most {MAX_PLAYERS} players are supported"
        )


class RandomBinaryGame(AbstractGame):
    """
    normal-form game with n players and two strategies each.
    payoff_table[player, code] is the payoff of player at the profile with the
    given integer code (see brdsim.custom_math.profile_codec).
    the game is read-only once built.
    """
    def __init__(self, payoff_table, device="cpu"):
        """
        inputs:
            payoff_table: (num_players x 2^num_players) payoffs, tensor or nested list
            device: PyTorch device for the stored table
        """
        table = torch.as_tensor(payoff_table, dtype=torch.float64).to(device)
        if table.dim() != 2:
            raise InvalidArgument(f"payoff table must be 2-dimensional, got shape {tuple(table.shape)}")
        num_players = table.shape[0]
        validate_num_players(num_players)
        if table.shape[1] != num_profiles(num_players):
            raise InvalidArgument(
                f"payoff table for {num_players} players needs {num_profiles(num_players)} "
                f"columns, got {table.shape[1]}"
            )
        if not torch.isfinite(table).all():
            raise InvalidArgument("payoff table contains non-finite values")

        self.num_players = num_players
        self.num_strategies = STRATEGIES_PER_PLAYER
        self.device = device
        self.payoff_table = table
        # numpy view for scalar lookups, shares memory with a cpu table
        self._payoffs: np.ndarray = table.cpu().numpy()

    @classmethod
    def generate(cls, num_players: int, generator: Optional[torch.Generator] = None,
                 device="cpu", lb=MINIMUM_PAYOFF, ub=MAXIMUM_PAYOFF):
        """
        draws every (player, profile) payoff i.i.d. uniform on [lb, ub)
        input:
            num_players: number of players
            generator: seeded torch.Generator, the global torch RNG when None
            device: PyTorch device
            lb, ub: bounds of the uniform distribution
        returns:
            RandomBinaryGame instance
        """
        validate_num_players(num_players)
        draws = torch.rand(
            (num_players, num_profiles(num_players)),
            generator=generator,
            dtype=torch.float64,
        )
        # scale in place so the draw is the only full-size buffer
        draws.mul_(ub - lb).add_(lb)
        return cls(draws, device=device)

    @classmethod
    def from_payoff_function(cls, num_players: int, payoff_function: Callable[[int, List[int]], float],
                             device="cpu"):
        """
        creates a game from a payoff function
        input:
            num_players: number of players
            payoff_function: takes (player, bits) where bits[i] is the strategy of
                player i, returns that player's payoff
            device: PyTorch device
        returns:
            RandomBinaryGame instance
        """
        validate_num_players(num_players)
        table = [
            [float(payoff_function(player, decode(code, num_players)))
             for code in range(num_profiles(num_players))]
            for player in range(num_players)
        ]
        return cls(table, device=device)

    def payoff(self, player: int, profile_code: int) -> float:
        return float(self._payoffs[player, profile_code])

    def describe(self, max_profiles: int = 64) -> str:
        """
        payoff table as a pipe-formatted table, one row per profile
        """
        profiles = all_profiles(self.num_players)
        headers = ["Code", "Profile"] + [f"u{p}" for p in range(self.num_players)] + ["PSNE"]
        rows = []
        for code in range(min(self.num_profiles, max_profiles)):
            row = [code, "(" + ",".join(str(b) for b in profiles[code].tolist()) + ")"]
            row.extend(f"{self.payoff(p, code):.4f}" for p in range(self.num_players))
            row.append("yes" if self.is_pure_nash(code) else "")
            rows.append(row)
        table = tabulate(rows, headers=headers, tablefmt="pipe")
        if self.num_profiles > max_profiles:
            table += f"\n... {self.num_profiles - max_profiles} more profiles"
        return table

    def __repr__(self):
        return f"RandomBinaryGame(num_players={self.num_players}, device={self.device!r})"


def create_game(n_players: int, strategies: int = STRATEGIES_PER_PLAYER,
                generator: Optional[torch.Generator] = None, device="cpu") -> RandomBinaryGame:
    """
    Sample a random game with uniform payoffs.

    Args:
        n_players: Number of players (at least 1)
        strategies: Strategies per player, only 2 is supported
        generator: Seeded torch.Generator to draw from
        device: PyTorch device

    Returns:
        A fresh RandomBinaryGame
    """
    if strategies != STRATEGIES_PER_PLAYER:
        raise InvalidArgument(
            f"only {STRATEGIES_PER_PLAYER} strategies per player are supported, got {strategies}"
        )
    game = RandomBinaryGame.generate(n_players, generator=generator, device=device)
    logger.debug(f"sampled {game!r} with {game.num_profiles} profiles")
    return game
