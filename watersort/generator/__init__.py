"""
Generator Package - Random level construction verified by the solver.

Public API:
    - DifficultyTier / DEFAULT_TIERS / tier_for_level(): Tier table
    - Level: Generated puzzle plus par and metadata
    - GeneratorConfig: Tuning knobs (from settings)
    - LevelGenerator: Seeded generator
    - create_puzzle(): Shuffle-and-distribute step on its own
    - generate_level(): One-call convenience wrapper
"""

from .tiers import DifficultyTier, DEFAULT_TIERS, tier_for_level, tiers_from_settings
from .level import Level
from .generator import (
    GeneratorConfig,
    LevelGenerator,
    create_puzzle,
    estimate_par,
    generate_level,
    generate_locked_masks,
    has_uniform_tube,
)

__all__ = [
    "DifficultyTier",
    "DEFAULT_TIERS",
    "tier_for_level",
    "tiers_from_settings",
    "Level",
    "GeneratorConfig",
    "LevelGenerator",
    "create_puzzle",
    "estimate_par",
    "generate_level",
    "generate_locked_masks",
    "has_uniform_tube",
]
