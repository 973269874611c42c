"""Property tests for the dynamics engine on randomly generated games.

These check that the core invariants hold for random payoffs of every small
size, not only on the hand-built scenarios.
"""

# ---------------------------------------------------------------------------
# Boilerplate – ensure import path includes project root
# ---------------------------------------------------------------------------
import pathlib, sys
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# ---------------------------------------------------------------------------
# Std / 3rd-party imports
# ---------------------------------------------------------------------------
import pytest
import torch
from hypothesis import given, settings, strategies as st

from brdsim.dynamics.engine import DynamicsEngine, EngineState
from brdsim.dynamics.outcome import Status
from brdsim.game.binary_game import create_game


def _random_game(n_players, seed):
    return create_game(n_players, generator=torch.Generator().manual_seed(seed))


# ---------------------------------------------------------------------------
# 1. Visited set is monotone and bounded, run ends in a terminal state
# ---------------------------------------------------------------------------

@given(n_players=st.integers(1, 6), seed=st.integers(0, 2**16 - 1))
@settings(max_examples=60, deadline=None)
def test_visited_set_grows_monotonically_and_stays_bounded(n_players, seed):
    engine = DynamicsEngine(_random_game(n_players, seed))
    sizes = [engine.registry.num_visited]
    while not engine.finished:
        engine.step()
        sizes.append(engine.registry.num_visited)
        assert set(engine.registry.segment_trajectory) <= engine.registry.global_visited

    assert all(a <= b for a, b in zip(sizes, sizes[1:]))
    assert sizes[-1] <= 2 ** n_players
    assert engine.state in (EngineState.CONVERGED, EngineState.EXHAUSTED)


# ---------------------------------------------------------------------------
# 2. Outcome agrees with the brute-force equilibrium oracle
# ---------------------------------------------------------------------------

@given(n_players=st.integers(1, 6), seed=st.integers(0, 2**16 - 1))
@settings(max_examples=60, deadline=None)
def test_outcome_matches_brute_force_oracle(n_players, seed):
    game = _random_game(n_players, seed)
    engine = DynamicsEngine(game)
    outcome = engine.run()
    equilibria = game.pure_nash_equilibria()

    assert outcome.iterations >= outcome.movements >= 0
    if outcome.status is Status.EQUILIBRIUM_FOUND:
        assert outcome.equilibrium in equilibria
        assert game.regret(outcome.equilibrium) == 0.0
    else:
        # every profile was visited, and a visited equilibrium is never left
        assert equilibria == []
        assert engine.registry.num_visited == 2 ** n_players


# ---------------------------------------------------------------------------
# 3. Restart count is bounded by the number of unexplored profiles
# ---------------------------------------------------------------------------

@given(n_players=st.integers(2, 6), seed=st.integers(0, 2**16 - 1))
@settings(max_examples=40, deadline=None)
def test_restarts_bounded_by_profile_space(n_players, seed):
    engine = DynamicsEngine(_random_game(n_players, seed), trace=True)
    outcome = engine.run()
    assert outcome.restarts <= 2 ** n_players - 1
    restarted = [r.profile for r in engine.history if r.restarted]
    assert len(restarted) == outcome.restarts
    # restart seeds are all distinct
    assert len(set(restarted)) == len(restarted)


# ---------------------------------------------------------------------------
# 4. Stress: a larger game still terminates
# ---------------------------------------------------------------------------

@pytest.mark.slow
def test_twelve_player_games_terminate():
    for seed in range(5):
        outcome = DynamicsEngine(_random_game(12, seed)).run()
        assert outcome.status in (Status.EQUILIBRIUM_FOUND, Status.EQUILIBRIUM_NOT_FOUND)
