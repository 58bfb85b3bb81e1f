"""
Game Package - State model, pour rules and canonical hashing.

Public API:
    - PuzzleState: Immutable tube configuration
    - Move: Pour between two tubes
    - Pour engine functions: can_pour, pour, attempt_pour, get_valid_moves, ...
    - canonical_key(): Tube-order independent key for search deduplication

Usage:
    from watersort.game import PuzzleState, attempt_pour

    state = PuzzleState.from_lists([["red", "blue"], ["blue", "red"], [], []])
    result = attempt_pour(state, 0, 2)
    if result.ok:
        state = result.state
"""

from .state import (
    Color,
    Tube,
    LockedMask,
    PuzzleState,
    TUBE_CAPACITY,
    COLOR_KEYS,
)
from .move import Move
from .engine import (
    IllegalPourError,
    PourResult,
    REJECTED,
    top_color,
    top_run_length,
    can_pour,
    pour_amount,
    pour,
    attempt_pour,
    is_tube_complete,
    is_level_complete,
    get_valid_moves,
    is_stuck,
    reveal_top_segments,
)
from .hashing import canonical_key, canonical_string, states_equivalent

__all__ = [
    # Data structures
    "Color",
    "Tube",
    "LockedMask",
    "PuzzleState",
    "TUBE_CAPACITY",
    "COLOR_KEYS",
    "Move",
    # Pour engine
    "IllegalPourError",
    "PourResult",
    "REJECTED",
    "top_color",
    "top_run_length",
    "can_pour",
    "pour_amount",
    "pour",
    "attempt_pour",
    "is_tube_complete",
    "is_level_complete",
    "get_valid_moves",
    "is_stuck",
    "reveal_top_segments",
    # Hashing
    "canonical_key",
    "canonical_string",
    "states_equivalent",
]
