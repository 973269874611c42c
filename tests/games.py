"""Hand-built games with known best-response paths, shared by the tests."""
import pathlib, sys
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from brdsim.game.binary_game import RandomBinaryGame


def create_dominant_zero_game():
    """2 players, both strictly prefer strategy 0 whatever the other does."""
    return RandomBinaryGame.from_payoff_function(
        2, lambda p, bits: 1.0 if bits[p] == 0 else 0.0
    )


def _matching_pennies(p, bits):
    # player 0 wants to match player 1, player 1 wants to mismatch
    matched = bits[0] == bits[1]
    if p == 0:
        return 1.0 if matched else 0.0
    return 0.0 if matched else 1.0


def create_matching_pennies_game():
    """2 players, no pure Nash equilibrium."""
    return RandomBinaryGame.from_payoff_function(2, _matching_pennies)


def create_escape_game():
    """
    3 players. With player 2 on 0, players 0 and 1 play matching pennies.
    Player 2 strictly prefers 1; once it is there players 0 and 1 prefer 0.
    Unique pure equilibrium: (0,0,1), code 4.
    """
    def payoff(p, bits):
        if p == 2:
            return 1.0 if bits[2] == 1 else 0.0
        if bits[2] == 0:
            return _matching_pennies(p, bits)
        return 1.0 if bits[p] == 0 else 0.0
    return RandomBinaryGame.from_payoff_function(3, payoff)


def create_double_pennies_game():
    """
    3 players, player 2 prefers 0, players 0 and 1 play matching pennies
    whatever player 2 does. Player 2 is never asked, no pure equilibrium.
    """
    def payoff(p, bits):
        if p == 2:
            return 1.0 if bits[2] == 0 else 0.0
        return _matching_pennies(p, bits)
    return RandomBinaryGame.from_payoff_function(3, payoff)


def create_funnel_game():
    """
    3 players, no pure equilibrium. With player 2 on 1, players 0 and 1 prefer
    0 and player 2 then prefers 0, which drops play back onto the matching
    pennies cycle of the player-2-on-0 half.
    """
    def payoff(p, bits):
        if p == 2:
            return 1.0 if bits[2] == 0 else 0.0
        if bits[2] == 0:
            return _matching_pennies(p, bits)
        return 1.0 if bits[p] == 0 else 0.0
    return RandomBinaryGame.from_payoff_function(3, payoff)
