"""
Level Module - Immutable generated level and its stable serialized form.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from ..game.state import LockedMask, PuzzleState
from ..solver.result import SolveOutcome


@dataclass(frozen=True)
class Level:
    """
    A generated puzzle with its metadata.

    Created once by the generator and never modified afterwards.

    Attributes:
        state: Initial tube configuration
        par: Minimum pours (exact) or an estimate
        color_count: Number of distinct colors
        difficulty_tier: Name of the tier it was generated for
        level_number: Level number it was generated for
        par_is_exact: True if par was proven by the solver
        outcome: Solver verdict, or None if the solver was skipped
        locked_masks: Per-tube visibility masks (all False when unused)
    """
    state: PuzzleState
    par: int
    color_count: int
    difficulty_tier: str
    level_number: int = 0
    par_is_exact: bool = False
    outcome: Optional[SolveOutcome] = None
    locked_masks: Tuple[LockedMask, ...] = field(default=())

    @property
    def tubes(self):
        """Shortcut to the tube tuples."""
        return self.state.tubes

    @property
    def has_locked_segments(self) -> bool:
        return any(any(mask) for mask in self.locked_masks)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to plain JSON-compatible data.

        The layout is stable: nested lists of color names, bottom-to-top.
        """
        return {
            "tubes": self.state.to_lists(),
            "capacity": self.state.capacity,
            "par": self.par,
            "color_count": self.color_count,
            "difficulty_tier": self.difficulty_tier,
            "level_number": self.level_number,
            "par_is_exact": self.par_is_exact,
            "outcome": self.outcome.value if self.outcome is not None else None,
            "locked_masks": [list(mask) for mask in self.locked_masks],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Level':
        """
        Restore a level from to_dict() output.

        Generation invariants are not re-checked; only the capacity
        invariant is enforced by PuzzleState.
        """
        outcome = data.get("outcome")
        return cls(
            state=PuzzleState.from_lists(data["tubes"], capacity=int(data.get("capacity", 4))),
            par=int(data["par"]),
            color_count=int(data["color_count"]),
            difficulty_tier=str(data["difficulty_tier"]),
            level_number=int(data.get("level_number", 0)),
            par_is_exact=bool(data.get("par_is_exact", False)),
            outcome=SolveOutcome(outcome) if outcome is not None else None,
            locked_masks=tuple(tuple(bool(v) for v in mask) for mask in data.get("locked_masks", [])),
        )
