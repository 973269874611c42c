"""
Simulate best-response dynamics on random binary games for several player
counts, then save one outcome plot per player count and a summary CSV.
"""
import argparse
import json
import logging
import os

import pandas as pd

from brdsim.batch.runner import DEFAULT_SEED, BatchRunner, make_generator
from brdsim.reporting.summary import format_summary, summarize_outcomes
from brdsim.reporting.visualization import plot_outcome_histograms, save_figure

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Estimate how often best-response dynamics reach a pure Nash equilibrium '
                    'in random n-player binary games'
    )

    parser.add_argument('--players', type=int, nargs='+', default=[2, 4, 6, 8, 10],
                        help='Player counts to simulate')
    parser.add_argument('--games', type=int, default=100_000,
                        help='Games simulated per player count')
    parser.add_argument('--seed', type=int, default=DEFAULT_SEED,
                        help='Random seed, used once for the whole run')
    parser.add_argument('--output_dir', type=str, default='plots',
                        help='Directory for plots, summary.csv and args.json')
    parser.add_argument('--parallel', action='store_true',
                        help='Play the games of each batch in a process pool')
    parser.add_argument('--max_workers', type=int, default=None,
                        help='Process pool size (default: number of CPUs)')
    parser.add_argument('--device', type=str, default='cpu',
                        help='PyTorch device for payoff tables (cpu or cuda)')
    parser.add_argument('--no_plots', action='store_true',
                        help='Skip rendering the per-player-count figures')
    parser.add_argument('--verbose', action='store_true',
                        help='Log progress and show progress bars')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    os.makedirs(args.output_dir, exist_ok=True)
    with open(os.path.join(args.output_dir, 'args.json'), 'w') as f:
        json.dump(vars(args), f, indent=2)

    # one generator for every player count, consumed in the order given
    generator = make_generator(args.seed)
    summaries = []
    for n_players in args.players:
        logger.info(f"Running game with {n_players} players...")
        runner = BatchRunner(
            n_players,
            generator=generator,
            device=args.device,
            parallel=args.parallel,
            max_workers=args.max_workers,
            progress=args.verbose,
        )
        outcomes = runner.run(args.games)

        summary = summarize_outcomes(outcomes)
        logger.info("\n" + format_summary(summary, n_players))
        summary.insert(0, "n_players", n_players)
        summaries.append(summary.reset_index())

        if not args.no_plots:
            path = os.path.join(args.output_dir, f"game_results_{n_players}_players.png")
            save_figure(plot_outcome_histograms(outcomes, n_players), path)
            logger.info(f"Saved {path}")

    summary_path = os.path.join(args.output_dir, 'summary.csv')
    pd.concat(summaries, ignore_index=True).to_csv(summary_path, index=False)
    logger.info(f"Saved {summary_path}")


if __name__ == '__main__':
    main()
