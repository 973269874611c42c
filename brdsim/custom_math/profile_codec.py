import torch
from typing import List, Optional, Sequence, Set

from brdsim.errors import InvalidArgument

'''
Pure-strategy profiles of binary games are stored as integer codes:
the strategy of player i is bit i of the code (player 0 is the least
significant bit). Payoff tables, the visited set and the segment trajectory
all key on these codes.
'''


def num_profiles(num_players: int) -> int:
    '''
    number of distinct pure profiles when every player has two strategies
    '''
    return 1 << num_players


def _check_player(player: int, num_players: Optional[int] = None):
    if player < 0 or (num_players is not None and player >= num_players):
        raise InvalidArgument(
            f"player index {player} outside [0, {num_players})"
            if num_players is not None else f"player index {player} is negative"
        )


def encode(bits: Sequence[int]) -> int:
    '''
    turns a profile into its integer code

    Parameters:
    bits : sequence of 0/1 (or bool)
        strategy of each player, player 0 first
    Returns:
    int : code in [0, 2^len(bits))
    '''
    code = 0
    for player, bit in enumerate(bits):
        bit = int(bit)
        if bit not in (0, 1):
            raise InvalidArgument(f"strategy of player {player} must be 0 or 1, got {bit}")
        code |= bit << player
    return code


def decode(code: int, num_players: int) -> List[int]:
    '''
    inverse of encode, returns the strategy of every player (player 0 first)
    '''
    if num_players < 1:
        raise InvalidArgument(f"num_players must be positive, got {num_players}")
    if code < 0 or code >= num_profiles(num_players):
        raise InvalidArgument(
            f"profile code {code} outside [0, {num_profiles(num_players)})"
        )
    return [(code >> player) & 1 for player in range(num_players)]


def flip(code: int, player: int) -> int:
    '''
    toggles the strategy of exactly one player
    '''
    _check_player(player)
    return code ^ (1 << player)


def all_profiles(num_players: int, device="cpu") -> torch.Tensor:
    '''
    Cartesian product of {0,1} repeated num_players times

    Returns:
    torch.Tensor : (2^num_players, num_players) int64 tensor, row c is decode(c)
    '''
    if num_players < 1:
        raise InvalidArgument(f"num_players must be positive, got {num_players}")
    codes = torch.arange(num_profiles(num_players), dtype=torch.int64, device=device)
    shifts = torch.arange(num_players, dtype=torch.int64, device=device)
    return (codes.unsqueeze(1) >> shifts) & 1


def smallest_missing(visited: Set[int], num_players: int, start: int = 0) -> Optional[int]:
    '''
    smallest code in [start, 2^num_players) that is not in visited, or None
    when there is none. callers that know every code below start is visited
    pass it to skip the scan over them
    '''
    total = num_profiles(num_players)
    if len(visited) >= total:
        return None
    for code in range(start, total):
        if code not in visited:
            return code
    return None


def format_profile(code: int, num_players: int) -> str:
    # player 0 printed first, e.g. code 6 with 3 players -> "(0,1,1)"
    return "(" + ",".join(str(b) for b in decode(code, num_players)) + ")"
