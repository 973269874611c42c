"""
Best-response dynamics with cycle detection and restarts.

Players are asked one at a time (always the lowest-indexed player who has not
yet agreed with the current profile) whether switching strategy pays off.
When a switch leads back onto the current trajectory segment the dynamics are
cycling; play is then re-seeded from the smallest profile code never visited
in this run. The run ends when every player agrees (a pure-strategy Nash
equilibrium) or when no unvisited profile is left.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from brdsim.custom_math.profile_codec import format_profile, num_profiles
from brdsim.dynamics.best_response import evaluate
from brdsim.dynamics.outcome import GameOutcome, Status
from brdsim.dynamics.registry import VisitedProfileRegistry
from brdsim.errors import (
    EngineFinished, EngineNotFinished, InvalidArgument, IterationLimitExceeded
)
from brdsim.game.abstract_game import AbstractGame

logger = logging.getLogger(__name__)


class EngineState(Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class StepRecord:
    """One evaluation step, kept only when tracing is on."""
    iteration: int
    player: int
    profile: int          # profile after the step
    switched: bool
    restarted: bool = False


class DynamicsEngine:
    """
    Runs best-response dynamics on one game until it converges or exhausts the
    profile space. An engine is single-use: build a new one per run.
    """

    def __init__(self,
                 game: AbstractGame,
                 start: int = 0,
                 max_iterations: Optional[int] = None,
                 trace: bool = False):
        """
        Args:
            game: Game to play
            start: Code of the initial profile (all players on strategy 0 by default)
            max_iterations: Optional cap; reaching it while still running raises
                IterationLimitExceeded
            trace: Record a StepRecord for every step
        """
        if start < 0 or start >= num_profiles(game.num_players):
            raise InvalidArgument(
                f"start profile {start} outside [0, {num_profiles(game.num_players)})"
            )
        if max_iterations is not None and max_iterations < 1:
            raise InvalidArgument(f"max_iterations must be positive, got {max_iterations}")

        self.game = game
        self.num_players = game.num_players
        self.max_iterations = max_iterations

        self.state = EngineState.RUNNING
        self.profile = start
        self.agreement: List[bool] = [False] * self.num_players
        self.registry = VisitedProfileRegistry(self.num_players, start)
        self.iterations = 0
        self.movements = 0
        self.restarts = 0
        self.history: Optional[List[StepRecord]] = [] if trace else None

    @property
    def finished(self) -> bool:
        return self.state is not EngineState.RUNNING

    def next_player(self) -> Optional[int]:
        """Lowest-indexed player that has not agreed yet, None if all agree."""
        for player, agreed in enumerate(self.agreement):
            if not agreed:
                return player
        return None

    def step(self) -> EngineState:
        """
        Ask one player for their best response and update the state.

        Returns:
            The engine state after the step
        """
        if self.finished:
            raise EngineFinished(f"engine already {self.state.value}")

        # a running engine always has at least one player left to ask
        player = self.next_player()
        self.iterations += 1
        decision = evaluate(self.game, self.profile, player)
        restarted = False

        if not decision.switch:
            self.agreement[player] = True
        else:
            self.agreement = [False] * self.num_players
            self.agreement[player] = True
            self.profile = decision.profile_code
            self.movements += 1

            if self.registry.visit(self.profile):
                restarted = self._restart()

        if self.history is not None:
            self.history.append(
                StepRecord(self.iterations, player, self.profile, decision.switch, restarted)
            )

        if self.state is EngineState.RUNNING and all(self.agreement):
            self.state = EngineState.CONVERGED
            logger.debug(
                f"converged to {format_profile(self.profile, self.num_players)} after "
                f"{self.iterations} iterations, {self.movements} movements"
            )
        return self.state

    def _restart(self) -> bool:
        cycle_at = self.profile
        code = self.registry.restart()
        if code is None:
            self.state = EngineState.EXHAUSTED
            logger.debug(
                f"cycle at {format_profile(cycle_at, self.num_players)} with all "
                f"{self.registry.total} profiles visited, giving up"
            )
            return False

        self.profile = code
        self.agreement = [False] * self.num_players
        self.movements += 1
        self.iterations += 1
        self.restarts += 1
        logger.debug(
            f"cycle at {format_profile(cycle_at, self.num_players)}, restarting from "
            f"{format_profile(code, self.num_players)} "
            f"({self.registry.num_visited}/{self.registry.total} visited)"
        )
        return True

    def run(self) -> GameOutcome:
        """
        Step until a terminal state is reached.

        Returns:
            GameOutcome for this game

        Raises:
            IterationLimitExceeded: the cap was reached and the engine is still
                running. The check follows each step, and a restart step adds
                two iterations, so the count can overshoot the cap by one.
        """
        while not self.finished:
            self.step()
            if (not self.finished and self.max_iterations is not None
                    and self.iterations >= self.max_iterations):
                raise IterationLimitExceeded(self.max_iterations, self.iterations)
        return self.outcome()

    def outcome(self) -> GameOutcome:
        if self.state is EngineState.RUNNING:
            raise EngineNotFinished("outcome requested before the engine terminated")
        if self.state is EngineState.CONVERGED:
            return GameOutcome(Status.EQUILIBRIUM_FOUND, self.iterations, self.movements,
                               self.restarts, self.profile)
        return GameOutcome(Status.EQUILIBRIUM_NOT_FOUND, self.iterations, self.movements,
                           self.restarts, None)


def run_single_game(game: AbstractGame, start: int = 0,
                    max_iterations: Optional[int] = None) -> GameOutcome:
    """Play one game from `start` (all zeros by default) until it terminates."""
    return DynamicsEngine(game, start=start, max_iterations=max_iterations).run()
