"""
Metrics Strategy - Full bounded exploration for difficulty calibration.

Unlike the BFS strategy this does not stop at the first goal: it walks the
whole reachable set (up to the state ceiling) and measures how branching
and how trappy the puzzle is. Intended for offline tuning only.
"""

import time
import logging
from typing import List

from ..base import SolverStrategy, Tubes
from ..context import SolveContext
from ..result import SolveMetrics, SolveOutcome, SolveResult
from ..factory import register_strategy
from ...game.hashing import canonical_key

logger = logging.getLogger(__name__)


@register_strategy
class MetricsStrategy(SolverStrategy):
    """
    Breadth-first exploration of the full bounded state space.

    Uses the same pruning rules and level-boundary ceiling check as the
    BFS strategy. Solved states are recorded but never expanded, and are
    not counted as dead ends.

    Outcome:
        SOLVABLE with the first-goal depth as par if any goal was seen,
        INDETERMINATE if the ceiling or a cancel stopped it first,
        UNSOLVABLE otherwise. hit_limit is set for the ceiling only.
    """
    name = "metrics"
    description = "Exhaustive bounded BFS with branching/dead-end statistics"

    def solve(self, context: SolveContext) -> SolveResult:
        start_time = time.perf_counter()
        metrics = SolveMetrics()

        initial: Tubes = context.state.tubes
        capacity = context.state.capacity

        if self.is_solved(initial, capacity):
            metrics.states_explored = 1
            return self._build_result(SolveOutcome.SOLVABLE, metrics, start_time, par=0)

        visited = {canonical_key(initial)}
        frontier: List[Tubes] = [initial]
        depth = 0
        par = -1
        cancelled = False

        while frontier:
            depth += 1
            next_frontier: List[Tubes] = []

            for tubes in frontier:
                if self._check_cancelled(context):
                    cancelled = True
                    break
                if self.is_solved(tubes, capacity):
                    continue

                moves_from_state = 0
                for _move, child in self.iter_successors(tubes, capacity, metrics):
                    moves_from_state += 1
                    if par < 0 and self.is_solved(child, capacity):
                        par = depth

                    child_key = canonical_key(child)
                    if child_key not in visited:
                        visited.add(child_key)
                        next_frontier.append(child)

                metrics.total_moves += moves_from_state
                if moves_from_state == 0:
                    metrics.dead_ends += 1

            metrics.states_explored = len(visited)
            if next_frontier:
                metrics.max_depth = depth
            if cancelled:
                break
            if len(visited) > context.max_states:
                metrics.hit_limit = True
                break
            frontier = next_frontier

        logger.info(
            f"[Metrics] {metrics.states_explored} states, "
            f"branching {metrics.avg_branching:.2f}, "
            f"dead ends {metrics.dead_ends} ({metrics.dead_end_ratio:.1%}), "
            f"par {par if par >= 0 else '-'}, hit_limit={metrics.hit_limit}, cancelled={cancelled}"
        )

        if par >= 0:
            return self._build_result(SolveOutcome.SOLVABLE, metrics, start_time, par=par)
        if metrics.hit_limit or cancelled:
            return self._build_result(SolveOutcome.INDETERMINATE, metrics, start_time)
        return self._build_result(SolveOutcome.UNSOLVABLE, metrics, start_time)
