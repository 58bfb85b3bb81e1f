"""
Solve Result Module - Outcome and statistics of a solver run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..game.move import Move


class SolveOutcome(Enum):
    """
    Three-way solver verdict.

    States:
        SOLVABLE: A complete state was reached; par is exact
        UNSOLVABLE: Every reachable state was explored without a goal
        INDETERMINATE: The exploration ceiling (or a cancel) stopped the
            search first; nothing is proven either way
    """
    SOLVABLE = "solvable"
    UNSOLVABLE = "unsolvable"
    INDETERMINATE = "indeterminate"


@dataclass
class SolveMetrics:
    """
    Search statistics for a solver run.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Distinct canonical states visited
        total_moves: Successor pours generated across all expanded states
        pruned_moves: Legal pours skipped by the pruning rules
        dead_ends: Expanded, unsolved states with no successor
        max_depth: Deepest BFS level reached
        hit_limit: True if the state ceiling stopped the search
        strategy_name: Name of strategy that produced this result
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    total_moves: int = 0
    pruned_moves: int = 0
    dead_ends: int = 0
    max_depth: int = 0
    hit_limit: bool = False
    strategy_name: str = ""

    @property
    def avg_branching(self) -> float:
        """Successor pours per visited state."""
        if self.states_explored == 0:
            return 0.0
        return self.total_moves / self.states_explored

    @property
    def dead_end_ratio(self) -> float:
        """Dead ends per visited state."""
        if self.states_explored == 0:
            return 0.0
        return self.dead_ends / self.states_explored


@dataclass
class SolveResult:
    """
    Result of a solver run.

    Attributes:
        outcome: SOLVABLE, UNSOLVABLE or INDETERMINATE
        par: Minimum pours to solve (0 unless SOLVABLE)
        moves: One shortest pour sequence from the initial state, if recorded
        metrics: Search statistics
    """
    outcome: SolveOutcome
    par: int = 0
    moves: List[Move] = field(default_factory=list)
    metrics: SolveMetrics = field(default_factory=SolveMetrics)

    @property
    def solvable(self) -> bool:
        """True if a solution was proven."""
        return self.outcome is SolveOutcome.SOLVABLE

    @property
    def is_unsolvable(self) -> bool:
        """True if unsolvability was proven."""
        return self.outcome is SolveOutcome.UNSOLVABLE

    @property
    def is_indeterminate(self) -> bool:
        """True if the search gave up before deciding."""
        return self.outcome is SolveOutcome.INDETERMINATE

    @property
    def move_count(self) -> int:
        """Number of moves in the recorded solution."""
        return len(self.moves)
