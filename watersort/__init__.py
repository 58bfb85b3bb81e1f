"""
watersort - Core of a liquid-sorting puzzle.

Tubes hold bounded stacks of colored units; the single action is pouring
the top contiguous block of one tube onto another. This package provides
the rules, a bounded BFS solver that proves solvability and par, and a
rejection-sampling level generator.

Usage:
    from watersort import LevelGenerator, PlaySession

    level = LevelGenerator(seed=1).generate(10)
    session = PlaySession(level)
    session.pour(0, len(level.tubes) - 1)
"""

from .game import (
    PuzzleState,
    Move,
    TUBE_CAPACITY,
    COLOR_KEYS,
    IllegalPourError,
    PourResult,
    top_color,
    top_run_length,
    can_pour,
    pour,
    attempt_pour,
    is_tube_complete,
    is_level_complete,
    get_valid_moves,
    is_stuck,
    canonical_key,
)
from .solver import SolveOutcome, SolveResult, SolveMetrics, solve
from .generator import (
    DifficultyTier,
    GeneratorConfig,
    Level,
    LevelGenerator,
    create_puzzle,
    generate_level,
    tier_for_level,
)
from .session import PlaySession, SessionStatus
from .settings import load_settings, save_settings

__version__ = "0.1.0"

__all__ = [
    "PuzzleState",
    "Move",
    "TUBE_CAPACITY",
    "COLOR_KEYS",
    "IllegalPourError",
    "PourResult",
    "top_color",
    "top_run_length",
    "can_pour",
    "pour",
    "attempt_pour",
    "is_tube_complete",
    "is_level_complete",
    "get_valid_moves",
    "is_stuck",
    "canonical_key",
    "SolveOutcome",
    "SolveResult",
    "SolveMetrics",
    "solve",
    "DifficultyTier",
    "GeneratorConfig",
    "Level",
    "LevelGenerator",
    "create_puzzle",
    "generate_level",
    "tier_for_level",
    "PlaySession",
    "SessionStatus",
    "load_settings",
    "save_settings",
]
