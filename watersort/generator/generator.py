"""
Level Generator Module - Rejection sampling of random puzzles.

Candidates are built by shuffling a pool of color units into tubes.
Degenerate candidates are dropped without solving; small candidates are
checked by the solver for solvability and a minimum par; large ones are
accepted with an estimated par because exhaustive search is too costly.
Generation never fails: once the attempt ceiling is reached the last
candidate is accepted as-is.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..game.engine import is_level_complete, is_tube_complete
from ..game.state import COLOR_KEYS, Color, LockedMask, PuzzleState, TUBE_CAPACITY
from ..settings import DEFAULT_SETTINGS
from ..solver import SolveContext, SolveOutcome, SolveResult, create_strategy
from .level import Level
from .tiers import DEFAULT_TIERS, DifficultyTier, tier_for_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Tuning knobs for level generation.

    Attributes:
        capacity: Units per tube
        solver_strategy: Registered strategy used to verify candidates
        max_states: Solver exploration ceiling
        feasible_filled_tubes: Largest filled-tube count that is solved exactly
        min_par: Solvable candidates below this par are rejected as trivial
        max_attempts_solved: Attempt ceiling when the solver is used
        max_attempts_unsolved: Attempt ceiling when the solver is skipped
    """
    capacity: int = TUBE_CAPACITY
    solver_strategy: str = "bfs"
    max_states: int = 100_000
    feasible_filled_tubes: int = 8
    min_par: int = 3
    max_attempts_solved: int = 50
    max_attempts_unsolved: int = 20

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> 'GeneratorConfig':
        """Build a config from a settings dict, falling back to defaults per key."""
        def get(key: str) -> Any:
            return settings.get(key, DEFAULT_SETTINGS[key])

        return cls(
            capacity=int(get("capacity")),
            solver_strategy=str(get("solver_strategy")),
            max_states=int(get("max_states")),
            feasible_filled_tubes=int(get("feasible_filled_tubes")),
            min_par=int(get("min_par")),
            max_attempts_solved=int(get("max_attempts_solved")),
            max_attempts_unsolved=int(get("max_attempts_unsolved")),
        )


def create_puzzle(color_count: int, tubes_per_color: int, empty_tubes: int,
                  capacity: int = TUBE_CAPACITY,
                  rng: Optional[np.random.Generator] = None,
                  palette: Sequence[Color] = COLOR_KEYS) -> PuzzleState:
    """
    Distribute a shuffled pool of color units into tubes.

    Each of the first color_count palette colors contributes
    tubes_per_color * capacity units. The pool is shuffled uniformly and
    cut into color_count * tubes_per_color full tubes, followed by
    empty_tubes empty ones.

    Args:
        color_count: Number of distinct colors
        tubes_per_color: Tubes' worth of units per color
        empty_tubes: Number of empty tubes to append
        capacity: Units per tube
        rng: Random source (a fresh unseeded one if None)
        palette: Color names to draw from

    Returns:
        New PuzzleState

    Raises:
        ValueError: If a count is out of range
    """
    if color_count < 1 or tubes_per_color < 1:
        raise ValueError("color_count and tubes_per_color must be positive")
    if empty_tubes < 0:
        raise ValueError("empty_tubes cannot be negative")
    if color_count > len(palette):
        raise ValueError(f"Palette has {len(palette)} colors, {color_count} requested")

    rng = rng if rng is not None else np.random.default_rng()

    units_per_color = tubes_per_color * capacity
    pool = [color for color in palette[:color_count] for _ in range(units_per_color)]
    shuffled = [pool[int(i)] for i in rng.permutation(len(pool))]

    filled = color_count * tubes_per_color
    tubes: List[Tuple[Color, ...]] = [
        tuple(shuffled[i * capacity:(i + 1) * capacity]) for i in range(filled)
    ]
    tubes.extend(() for _ in range(empty_tubes))

    return PuzzleState(tubes=tuple(tubes), capacity=capacity)


def has_uniform_tube(state: PuzzleState) -> bool:
    """True if any tube already holds a full single color."""
    return any(tube and is_tube_complete(tube, state.capacity) for tube in state.tubes)


def estimate_par(filled_tube_count: int, capacity: int = TUBE_CAPACITY) -> int:
    """
    Estimate par when the solver cannot compute it.

    Deliberately generous so that players cannot trivially beat it: each
    tube needs roughly capacity - 1 pours, discounted for overlap.
    """
    return int(math.floor(filled_tube_count * (capacity - 1.5)))


def generate_locked_masks(state: PuzzleState, fraction: float,
                          rng: np.random.Generator) -> Tuple[LockedMask, ...]:
    """
    Pick tubes whose contents are hidden from the player.

    Each filled tube is locked with probability fraction; a locked tube
    hides every unit except its top. Solvability is unaffected.

    Args:
        state: Accepted puzzle
        fraction: Lock probability per filled tube
        rng: Random source

    Returns:
        Tuple of masks parallel to state.tubes
    """
    masks = []
    for tube in state.tubes:
        if not tube or fraction <= 0:
            masks.append((False,) * len(tube))
            continue
        if rng.random() < fraction:
            masks.append(tuple(i < len(tube) - 1 for i in range(len(tube))))
        else:
            masks.append((False,) * len(tube))
    return tuple(masks)


class LevelGenerator:
    """
    Produces levels for difficulty tiers.

    Each generator owns its random source, so two generators seeded alike
    produce identical levels and concurrent generators need no locking.

    Example:
        generator = LevelGenerator(seed=42)
        level = generator.generate(12)
        print(level.par, level.difficulty_tier)
    """

    def __init__(self, config: Optional[GeneratorConfig] = None,
                 tiers: Optional[Sequence[DifficultyTier]] = None,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the generator.

        Args:
            config: Generation tuning (defaults to GeneratorConfig())
            tiers: Tier table (defaults to DEFAULT_TIERS)
            seed: Seed for a fresh random source
            rng: Explicit random source (takes precedence over seed)
        """
        self.config = config or GeneratorConfig()
        self.tiers = list(tiers) if tiers is not None else list(DEFAULT_TIERS)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._strategy = create_strategy(self.config.solver_strategy)

        # Attempt statistics of the last generate call
        self.last_attempts = 0
        self.last_rejections: Dict[str, int] = {}

    def generate(self, level_number: int) -> Level:
        """
        Generate a level for a level number.

        Args:
            level_number: 1-based level number (selects the tier)

        Returns:
            Generated Level
        """
        tier = tier_for_level(level_number, self.tiers)
        return self.generate_for_tier(tier, level_number)

    def generate_for_tier(self, tier: DifficultyTier, level_number: int = 0) -> Level:
        """
        Generate a level for an explicit tier.

        Args:
            tier: Difficulty parameters
            level_number: Level number recorded on the result

        Returns:
            Generated Level (never fails)
        """
        capacity = self.config.capacity
        filled = tier.filled_tubes
        can_solve = filled <= self.config.feasible_filled_tubes
        max_attempts = (self.config.max_attempts_solved if can_solve
                        else self.config.max_attempts_unsolved)

        self.last_rejections = {"complete": 0, "uniform_tube": 0, "unsolvable": 0, "trivial": 0}
        last_state: Optional[PuzzleState] = None

        for attempt in range(max_attempts):
            self.last_attempts = attempt + 1
            state = create_puzzle(tier.colors, tier.tubes_per_color, tier.empty_tubes,
                                  capacity=capacity, rng=self.rng)
            last_state = state

            if is_level_complete(state):
                self.last_rejections["complete"] += 1
                continue
            if has_uniform_tube(state):
                self.last_rejections["uniform_tube"] += 1
                continue

            if not can_solve:
                return self._make_level(state, tier, level_number,
                                        estimate_par(filled, capacity), False, None)

            result = self._solve(state)

            if result.outcome is SolveOutcome.INDETERMINATE:
                logger.info(
                    f"Tier {tier.name}: solver ceiling hit on attempt {attempt + 1}, "
                    f"accepting with estimated par"
                )
                return self._make_level(state, tier, level_number,
                                        estimate_par(filled, capacity), False, result.outcome)

            if result.outcome is SolveOutcome.UNSOLVABLE:
                self.last_rejections["unsolvable"] += 1
                logger.debug(f"Tier {tier.name}: attempt {attempt + 1} unsolvable")
                continue

            if result.par < self.config.min_par:
                self.last_rejections["trivial"] += 1
                logger.debug(f"Tier {tier.name}: attempt {attempt + 1} trivial (par {result.par})")
                continue

            return self._make_level(state, tier, level_number, result.par, True, result.outcome)

        if last_state is None:
            last_state = create_puzzle(tier.colors, tier.tubes_per_color, tier.empty_tubes,
                                       capacity=capacity, rng=self.rng)
        logger.warning(
            f"Tier {tier.name}: no candidate accepted in {max_attempts} attempts "
            f"({self.last_rejections}), using last candidate"
        )
        return self._make_level(last_state, tier, level_number,
                                estimate_par(filled, capacity), False, None)

    def _solve(self, state: PuzzleState) -> SolveResult:
        context = SolveContext(state=state, max_states=self.config.max_states)
        return self._strategy.solve(context)

    def _make_level(self, state: PuzzleState, tier: DifficultyTier, level_number: int,
                    par: int, par_is_exact: bool,
                    outcome: Optional[SolveOutcome]) -> Level:
        locked_masks = generate_locked_masks(state, tier.locked_fraction, self.rng)
        level = Level(
            state=state,
            par=par,
            color_count=tier.colors,
            difficulty_tier=tier.name,
            level_number=level_number,
            par_is_exact=par_is_exact,
            outcome=outcome,
            locked_masks=locked_masks,
        )
        logger.info(
            f"Level {level_number} ({tier.name}): {state.tube_count} tubes, "
            f"par {par}{'' if par_is_exact else ' (estimated)'}, "
            f"{self.last_attempts} attempt(s)"
        )
        return level


def generate_level(tier_or_level: Union[DifficultyTier, int],
                   seed: Optional[int] = None,
                   config: Optional[GeneratorConfig] = None,
                   tiers: Optional[Sequence[DifficultyTier]] = None) -> Level:
    """
    Generate a single level.

    Args:
        tier_or_level: Explicit tier, or a level number to look one up
        seed: Seed for reproducible generation
        config: Generation tuning
        tiers: Tier table used for level-number lookup

    Returns:
        Generated Level
    """
    generator = LevelGenerator(config=config, tiers=tiers, seed=seed)
    if isinstance(tier_or_level, DifficultyTier):
        return generator.generate_for_tier(tier_or_level)
    return generator.generate(int(tier_or_level))
