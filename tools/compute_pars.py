"""
Compute average par per difficulty tier.

Samples puzzles for every tier in the settings table the same way the
generator does and reports the spread of exact pars next to the estimate
used for tiers too large to solve. Useful when retuning the tier table.

Usage:
    python tools/compute_pars.py
    python tools/compute_pars.py --samples 20 --config config.json
"""

import sys
import logging
import argparse
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from watersort.generator import GeneratorConfig, LevelGenerator, estimate_par, tiers_from_settings
from watersort.settings import load_settings


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Par statistics per difficulty tier"
    )
    parser.add_argument(
        "--samples", "-n",
        type=int,
        default=50,
        help="Puzzles generated per tier (default: 50)"
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Settings file (default: config.json if present)"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Seed for reproducible runs"
    )
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    settings = load_settings(args.config)
    config = GeneratorConfig.from_settings(settings)
    tiers = tiers_from_settings(settings)
    generator = LevelGenerator(config=config, tiers=tiers, seed=args.seed)

    print("Par computation per tier")
    print("=" * 90)
    print(f"{'Tier':<12}{'Colors':>7}{'Filled':>7}{'Empty':>6}{'Solved':>8}"
          f"{'AvgPar':>8}{'MinPar':>8}{'MaxPar':>8}{'Estimate':>10}")
    print("-" * 90)

    for tier in tiers:
        pars = []
        exact = 0
        for _ in range(args.samples):
            level = generator.generate_for_tier(tier)
            pars.append(level.par)
            exact += int(level.par_is_exact)

        values = np.array(pars)
        estimate = estimate_par(tier.filled_tubes, config.capacity)
        print(f"{tier.name:<12}{tier.colors:>7}{tier.filled_tubes:>7}{tier.empty_tubes:>6}"
              f"{exact:>5}/{args.samples:<3}{values.mean():>7.1f}{values.min():>8}"
              f"{values.max():>8}{estimate:>10}")

    print("=" * 90)
    return 0


if __name__ == "__main__":
    sys.exit(main())
