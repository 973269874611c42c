"""
Batch runner: best-response dynamics over many independently sampled games.
"""
import concurrent.futures as cf
import logging
import time
from typing import Iterator, List, Optional

import torch
from tqdm.auto import tqdm

from brdsim.dynamics.engine import run_single_game
from brdsim.dynamics.outcome import GameOutcome
from brdsim.errors import InvalidArgument
from brdsim.game.binary_game import RandomBinaryGame, create_game, validate_num_players

logger = logging.getLogger(__name__)

DEFAULT_SEED = 1804
# games drawn and dispatched to the pool at a time
DEFAULT_CHUNK_SIZE = 1_000


# ---------------------------------------------------------------------------
# Helper for parallel execution (must be top-level to be picklable)
# ---------------------------------------------------------------------------


def _run_table(args):
    """Rebuild one game from its payoff table and play it to the end."""
    payoff_table, max_iterations = args
    return run_single_game(RandomBinaryGame(payoff_table), max_iterations=max_iterations)


def make_generator(seed: Optional[int] = None) -> torch.Generator:
    """CPU generator seeded with `seed`, or from OS entropy when seed is None."""
    gen = torch.Generator()
    if seed is None:
        gen.seed()
    else:
        gen.manual_seed(seed)
    return gen


class BatchRunner:
    """
    Plays best-response dynamics on `n_games` fresh random games.

    All payoffs come from a single torch.Generator, one full payoff table per
    game in game-index order, so results depend only on the seed and not on
    whether the engine runs are spread over worker processes.
    """

    def __init__(self,
                 n_players: int,
                 seed: Optional[int] = None,
                 generator: Optional[torch.Generator] = None,
                 device: str = "cpu",
                 parallel: bool = False,
                 max_workers: Optional[int] = None,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 max_iterations: Optional[int] = None,
                 progress: bool = False):
        """
        Args:
            n_players: Players per game
            seed: Seed for a fresh generator (ignored when `generator` is given)
            generator: Shared generator, e.g. one seeded once for several batches
            device: PyTorch device for the payoff tables
            parallel: Play the games in a process pool
            max_workers: Pool size, defaults to the number of CPUs
            chunk_size: Games drawn and dispatched per pool round
            max_iterations: Optional per-game safety cap
            progress: Show a tqdm progress bar
        """
        validate_num_players(n_players)
        if chunk_size < 1:
            raise InvalidArgument(f"chunk_size must be positive, got {chunk_size}")

        self.n_players = n_players
        self.seed = seed
        self.generator = generator if generator is not None else make_generator(seed)
        self.device = device
        self.parallel = parallel
        self.max_workers = max_workers
        self.chunk_size = chunk_size
        self.max_iterations = max_iterations
        self.progress = progress

    def iter_games(self, n_games: int) -> Iterator[RandomBinaryGame]:
        """Lazily draw `n_games` games from the runner's generator."""
        for _ in range(n_games):
            yield create_game(self.n_players, generator=self.generator, device=self.device)

    def run(self, n_games: int) -> List[GameOutcome]:
        """
        Args:
            n_games: Number of independent games (at least 1)

        Returns:
            One GameOutcome per game, in game-index order
        """
        if not isinstance(n_games, int) or isinstance(n_games, bool) or n_games < 1:
            raise InvalidArgument(f"number of games must be a positive int, got {n_games!r}")

        logger.info(f"Running {n_games} games with {self.n_players} players")
        t0 = time.time()
        bar = tqdm(total=n_games, desc=f"  {self.n_players} players", unit="game",
                   leave=False, disable=not self.progress)

        outcomes: List[GameOutcome] = []
        if self.parallel:
            import multiprocessing as mp
            ctx = mp.get_context("spawn")
            with cf.ProcessPoolExecutor(max_workers=self.max_workers, mp_context=ctx) as pool:
                remaining = n_games
                while remaining > 0:
                    size = min(self.chunk_size, remaining)
                    iter_args = [(game.payoff_table.cpu(), self.max_iterations)
                                 for game in self.iter_games(size)]
                    for out in pool.map(_run_table, iter_args):
                        outcomes.append(out)
                        bar.update(1)
                    remaining -= size
        else:
            for game in self.iter_games(n_games):
                outcomes.append(run_single_game(game, max_iterations=self.max_iterations))
                bar.update(1)
        bar.close()

        dt = time.time() - t0
        found = sum(1 for o in outcomes if o.found)
        logger.info(
            f"Time taken: {dt / 60:.2f} minutes – "
            f"equilibrium found in {found}/{n_games} games"
        )
        return outcomes


def run_batch(n_games: int, n_players: int, seed: Optional[int] = None, **kwargs) -> List[GameOutcome]:
    """
    Run best-response dynamics on `n_games` independent random games.

    Extra keyword arguments are passed to BatchRunner.
    """
    return BatchRunner(n_players, seed=seed, **kwargs).run(n_games)
