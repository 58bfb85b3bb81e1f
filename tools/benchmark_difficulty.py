"""
Difficulty benchmark using random-player simulation and solver metrics.

For each sample level, generates several puzzles and measures:
  - how often a random player (uniform legal pours, no revisits) solves it
  - branching factor and dead-end ratio from a bounded full exploration

Difficulty score = 100 x (1 - solve rate)
  0   = trivial (everyone solves it)
  100 = no random player solves it

Usage:
    python tools/benchmark_difficulty.py
    python tools/benchmark_difficulty.py --levels 3 10 28 --players 200
"""

import sys
import logging
import argparse
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from watersort.generator import LevelGenerator, tier_for_level
from watersort.solver import SolveContext, create_strategy, simulate_random_players

# One sample per tier midpoint
TEST_LEVELS = [3, 10, 16, 28, 45, 68, 95, 130, 200]


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Random-player difficulty benchmark"
    )
    parser.add_argument("--levels", type=int, nargs="+", default=TEST_LEVELS,
                        help="Level numbers to sample")
    parser.add_argument("--puzzles", type=int, default=15,
                        help="Puzzles per level (default: 15)")
    parser.add_argument("--players", type=int, default=500,
                        help="Random players per puzzle (default: 500)")
    parser.add_argument("--max-moves", type=int, default=400,
                        help="Move cap per player (default: 400)")
    parser.add_argument("--max-states", type=int, default=100_000,
                        help="State ceiling for the metrics pass")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for reproducible runs")
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    generator = LevelGenerator(seed=args.seed)
    metrics_strategy = create_strategy("metrics")
    seeds = np.random.SeedSequence(args.seed).spawn(len(args.levels) * args.puzzles)

    print("Water Sort Difficulty Benchmark")
    print(f"{args.puzzles} puzzles x {args.players} random players per puzzle\n")
    print(f"{'Level':>6}  {'Tier':<10}{'Fill':>5}{'Emp':>4}{'Lock%':>7}"
          f"{'SolveRate':>11}{'AvgMoves':>10}{'StuckAt':>9}{'Branch':>8}{'Dead%':>7}{'SCORE':>7}")
    print("-" * 90)

    seed_index = 0
    for level_number in args.levels:
        tier = tier_for_level(level_number, generator.tiers)
        rates, moves, stuck, branching, dead = [], [], [], [], []

        for _ in range(args.puzzles):
            level = generator.generate(level_number)
            stats = simulate_random_players(
                level.state, players=args.players, max_moves=args.max_moves,
                seed=int(seeds[seed_index].generate_state(1)[0]),
            )
            seed_index += 1
            rates.append(stats.solve_rate)
            moves.append(stats.avg_moves)
            stuck.append(stats.avg_stuck_at)

            result = metrics_strategy.solve(SolveContext(state=level.state, max_states=args.max_states))
            branching.append(result.metrics.avg_branching)
            dead.append(result.metrics.dead_end_ratio)

        solve_rate = float(np.mean(rates))
        score = 100.0 * (1.0 - solve_rate)
        bar = "#" * int(round(score / 5))
        print(f"{level_number:>6}  {tier.name:<10}{tier.filled_tubes:>5}{tier.empty_tubes:>4}"
              f"{tier.locked_fraction * 100:>6.0f}%{solve_rate * 100:>10.1f}%"
              f"{np.mean(moves):>10.1f}{np.mean(stuck):>9.1f}{np.mean(branching):>8.2f}"
              f"{np.mean(dead) * 100:>6.1f}%{score:>7.1f}  {bar}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
