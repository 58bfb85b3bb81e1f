"""
Base Strategy Module - Abstract base class for search strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple

from ..game.engine import is_tube_complete, top_run_length
from ..game.move import Move
from ..game.state import Tube
from .context import SolveContext
from .result import SolveMetrics, SolveOutcome, SolveResult

# Raw search node: positional tubes without the PuzzleState wrapper
Tubes = Tuple[Tube, ...]


class SolverStrategy(ABC):
    """
    Abstract base class for all search strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Search runs on raw tuples of tubes rather than PuzzleState objects;
    states built here never leave the strategy.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
        prune_uniform_to_empty: Skip pouring a single-color tube into an empty tube
        prune_empty_symmetry: Only pour into the first empty tube
    """
    name: str = "base"
    description: str = "Base strategy"

    def __init__(self, prune_uniform_to_empty: bool = True,
                 prune_empty_symmetry: bool = True):
        self.prune_uniform_to_empty = prune_uniform_to_empty
        self.prune_empty_symmetry = prune_empty_symmetry

    @abstractmethod
    def solve(self, context: SolveContext) -> SolveResult:
        """
        Search from context.state.

        Must check context.is_cancelled() and report INDETERMINATE if True.

        Args:
            context: Solve context with state, ceiling, cancellation

        Returns:
            SolveResult with outcome, par and metrics
        """
        pass

    def iter_successors(self, tubes: Tubes, capacity: int,
                        metrics: SolveMetrics) -> Iterator[Tuple[Move, Tubes]]:
        """
        Yield every pruned successor of a search node.

        Complete tubes are never a source. Pruned pours are counted in
        metrics.pruned_moves.

        Args:
            tubes: Positional tubes of the node
            capacity: Tube capacity
            metrics: Metrics to update

        Yields:
            (move, child_tubes) pairs
        """
        first_empty: Optional[int] = None
        for i, tube in enumerate(tubes):
            if not tube:
                first_empty = i
                break

        for from_index, source in enumerate(tubes):
            if not source:
                continue
            size = len(source)
            run = top_run_length(source)
            if size == capacity and run == size:
                continue
            color = source[-1]

            for to_index, destination in enumerate(tubes):
                if to_index == from_index:
                    continue
                filled = len(destination)
                if filled >= capacity:
                    continue
                if filled:
                    if destination[-1] != color:
                        continue
                else:
                    if self.prune_uniform_to_empty and run == size:
                        metrics.pruned_moves += 1
                        continue
                    if self.prune_empty_symmetry and to_index != first_empty:
                        metrics.pruned_moves += 1
                        continue

                amount = min(run, capacity - filled)
                child = list(tubes)
                child[from_index] = source[:size - amount]
                child[to_index] = destination + (color,) * amount
                yield Move(from_index, to_index), tuple(child)

    @staticmethod
    def is_solved(tubes: Tubes, capacity: int) -> bool:
        """Goal test on raw tubes."""
        return all(not tube or is_tube_complete(tube, capacity) for tube in tubes)

    def _build_result(
        self,
        outcome: SolveOutcome,
        metrics: SolveMetrics,
        start_time: float,
        par: int = 0,
        moves: Optional[List[Move]] = None
    ) -> SolveResult:
        """Build SolveResult object from computation results."""
        metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
        metrics.strategy_name = self.name
        if outcome is SolveOutcome.INDETERMINATE:
            par = 0
        return SolveResult(
            outcome=outcome,
            par=par,
            moves=list(moves) if moves else [],
            metrics=metrics,
        )

    def _check_cancelled(self, context: SolveContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Solve context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()
