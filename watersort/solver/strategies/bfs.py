"""
Breadth-First Strategy - Bounded BFS that proves solvability and par.

Explores the pour graph one depth level at a time, deduplicating states by
canonical key. The first complete state found at depth d gives par = d,
which BFS guarantees is minimal.
"""

import time
import logging
from typing import Dict, List, Optional, Tuple

from ..base import SolverStrategy, Tubes
from ..context import SolveContext
from ..result import SolveMetrics, SolveOutcome, SolveResult
from ..factory import register_strategy
from ...game.hashing import CanonicalKey, canonical_key
from ...game.move import Move

logger = logging.getLogger(__name__)


@register_strategy
class BreadthFirstStrategy(SolverStrategy):
    """
    Level-synchronous breadth-first search with a state ceiling.

    Algorithm:
        1. Seed the visited set with the initial state's canonical key
        2. For each depth level:
           - Expand every frontier state through the pruned successors
           - Goal-test each child before hashing; stop at the first goal
           - Enqueue children whose canonical key is new
        3. At each level boundary, give up (INDETERMINATE) if the visited
           count exceeds the ceiling
        4. An empty frontier proves the puzzle UNSOLVABLE

    Parameters:
        record_path: Keep parent links to return one optimal move sequence
        prune_uniform_to_empty / prune_empty_symmetry: see SolverStrategy
    """
    name = "bfs"
    description = "Breadth-first search (exact par, bounded)"

    def __init__(self, record_path: bool = True, **pruning):
        super().__init__(**pruning)
        self.record_path = record_path

    def solve(self, context: SolveContext) -> SolveResult:
        """
        Search for the shortest solution of context.state.

        Args:
            context: Solve context with state, ceiling and cancellation

        Returns:
            SolveResult with outcome, par, path and metrics
        """
        start_time = time.perf_counter()
        metrics = SolveMetrics()

        initial: Tubes = context.state.tubes
        capacity = context.state.capacity

        if self.is_solved(initial, capacity):
            metrics.states_explored = 1
            return self._build_result(SolveOutcome.SOLVABLE, metrics, start_time, par=0)

        initial_key = canonical_key(initial)
        visited = {initial_key}
        # child key -> (parent key, move); only filled when record_path is set
        parents: Dict[CanonicalKey, Tuple[Optional[CanonicalKey], Optional[Move]]] = {}
        if self.record_path:
            parents[initial_key] = (None, None)

        frontier: List[Tuple[Tubes, CanonicalKey]] = [(initial, initial_key)]
        depth = 0

        while frontier:
            depth += 1
            metrics.max_depth = depth
            next_frontier: List[Tuple[Tubes, CanonicalKey]] = []

            for tubes, key in frontier:
                if self._check_cancelled(context):
                    metrics.states_explored = len(visited)
                    logger.info(f"[BFS] Cancelled at depth {depth}, {len(visited)} states")
                    return self._build_result(SolveOutcome.INDETERMINATE, metrics, start_time)

                for move, child in self.iter_successors(tubes, capacity, metrics):
                    metrics.total_moves += 1

                    if self.is_solved(child, capacity):
                        metrics.states_explored = len(visited)
                        path = self._trace_path(parents, key, move) if self.record_path else None
                        logger.debug(
                            f"[BFS] Solved at depth {depth}, "
                            f"{metrics.states_explored} states explored"
                        )
                        return self._build_result(
                            SolveOutcome.SOLVABLE, metrics, start_time, par=depth, moves=path
                        )

                    child_key = canonical_key(child)
                    if child_key in visited:
                        continue
                    visited.add(child_key)
                    if self.record_path:
                        parents[child_key] = (key, move)
                    next_frontier.append((child, child_key))

            metrics.states_explored = len(visited)
            if len(visited) > context.max_states:
                metrics.hit_limit = True
                logger.debug(
                    f"[BFS] State ceiling {context.max_states} exceeded at depth {depth} "
                    f"({len(visited)} states)"
                )
                return self._build_result(SolveOutcome.INDETERMINATE, metrics, start_time)

            context.report_progress(
                min(0.99, len(visited) / max(1, context.max_states)),
                f"depth {depth}, {len(visited)} states"
            )
            frontier = next_frontier

        metrics.states_explored = len(visited)
        logger.debug(f"[BFS] Exhausted {len(visited)} states without a solution")
        return self._build_result(SolveOutcome.UNSOLVABLE, metrics, start_time)

    @staticmethod
    def _trace_path(
        parents: Dict[CanonicalKey, Tuple[Optional[CanonicalKey], Optional[Move]]],
        key: CanonicalKey,
        last_move: Move
    ) -> List[Move]:
        """Walk parent links back to the root and return moves in play order."""
        path = [last_move]
        current: Optional[CanonicalKey] = key
        while current is not None:
            parent, move = parents[current]
            if move is not None:
                path.append(move)
            current = parent
        path.reverse()
        return path
