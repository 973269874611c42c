import torch
from abc import ABC, abstractmethod
from typing import List

from brdsim.custom_math.profile_codec import flip, num_profiles

# payoffs are drawn uniformly from [MINIMUM_PAYOFF, MAXIMUM_PAYOFF)
MINIMUM_PAYOFF = 0.0
MAXIMUM_PAYOFF = 1.0
# the payoff table is the only full-size allocation a game makes.
# 20 players x 2^20 profiles of float64 is 160 MiB, 21 players would be 336 MiB
MAX_TABLE_BYTES = 256 * 2 ** 20
MAX_PLAYERS = 20
STRATEGIES_PER_PLAYER = 2


class AbstractGame(ABC):
    """
    abstract base class for n-player games where every player picks one of two
    strategies. profiles are addressed by their integer code.
    """

    num_players: int

    @abstractmethod
    def payoff(self, player: int, profile_code: int) -> float:
        '''
        payoff of player when the joint profile is profile_code
        '''
        pass

    @property
    def num_profiles(self) -> int:
        return num_profiles(self.num_players)

    def deviation_gain(self, player: int, profile_code: int) -> float:
        """
        gain player gets by unilaterally switching strategy
        args:
            player: index of the deviating player
            profile_code: current joint profile
        returns:
            payoff after the switch minus the current payoff (negative when
            the current strategy is strictly better)
        """
        return self.payoff(player, flip(profile_code, player)) - self.payoff(player, profile_code)

    def is_pure_nash(self, profile_code: int) -> bool:
        """
        true when no player strictly gains by switching alone
        """
        return all(
            self.deviation_gain(player, profile_code) <= 0
            for player in range(self.num_players)
        )

    def pure_nash_equilibria(self) -> List[int]:
        """
        brute force over all 2^n profiles; only meant for small games
        """
        return [code for code in range(self.num_profiles) if self.is_pure_nash(code)]

    def regret(self, profile_code: int) -> float:
        """
        largest gain any single player can get by deviating (0 at a PSNE)
        """
        gains = torch.tensor(
            [self.deviation_gain(p, profile_code) for p in range(self.num_players)],
            dtype=torch.float64,
        )
        return torch.clamp(gains, min=0).max().item()
