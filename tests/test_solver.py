"""
Tests for the bounded BFS solver.

Covers:
1. Exact par on hand-traced puzzles, with replayable solution paths
2. Unsolvable and indeterminate outcomes
3. Optimality against an independent brute-force search
4. Pruning soundness (pruned vs unpruned agree)
5. Metrics mode, random playouts and the strategy registry
"""

import sys
from collections import deque
from pathlib import Path
from typing import Optional

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from watersort.game import PuzzleState, get_valid_moves, is_level_complete, pour
from watersort.generator import create_puzzle
from watersort.solver import (
    SolveContext,
    SolveOutcome,
    create_strategy,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
    simulate_random_players,
    solve,
)

A, B, C = "red", "blue", "green"


def brute_force_par(state: PuzzleState) -> Optional[int]:
    """Plain positional BFS over every legal pour, no pruning, no canonical keys."""
    if is_level_complete(state):
        return 0
    seen = {state}
    queue = deque([(state, 0)])
    while queue:
        current, depth = queue.popleft()
        for move in get_valid_moves(current):
            child = pour(current, move.from_index, move.to_index)
            if is_level_complete(child):
                return depth + 1
            if child not in seen:
                seen.add(child)
                queue.append((child, depth + 1))
    return None


def small_puzzles():
    """Random puzzles small enough for brute force."""
    shapes = [
        (2, 1, 1, 3),
        (2, 1, 2, 4),
        (3, 1, 1, 3),
        (2, 2, 1, 2),
    ]
    puzzles = []
    for shape_index, (colors, per_color, empty, capacity) in enumerate(shapes):
        rng = np.random.default_rng(100 + shape_index)
        for _ in range(6):
            puzzles.append(create_puzzle(colors, per_color, empty, capacity=capacity, rng=rng))
    return puzzles


def replay(state: PuzzleState, moves) -> PuzzleState:
    for move in moves:
        state = pour(state, move.from_index, move.to_index)
    return state


def test_already_complete_has_par_zero():
    state = PuzzleState.from_lists([[A, A, A, A], [B, B, B, B], [], []])
    result = solve(state)
    assert result.outcome is SolveOutcome.SOLVABLE
    assert result.par == 0
    assert result.moves == []


def test_two_color_swap_par_three():
    state = PuzzleState.from_lists([[A, A, A, B], [B, B, B, A], []])
    result = solve(state)

    assert result.solvable
    assert result.par == 3
    assert result.move_count == 3
    assert is_level_complete(replay(state, result.moves))


def test_half_filled_swap_with_small_capacity():
    """[[A,B],[B,A],[],[]] is solved in three pours when the capacity is 2."""
    state = PuzzleState.from_lists([[A, B], [B, A], [], []], capacity=2)
    result = solve(state)
    assert result.solvable
    assert result.par == 3
    assert is_level_complete(replay(state, result.moves))


def test_half_filled_tubes_cannot_complete_at_capacity_four():
    """Two units per color can never fill a capacity-4 tube."""
    state = PuzzleState.from_lists([[A, B], [B, A], [], []], capacity=4)
    result = solve(state)
    assert result.outcome is SolveOutcome.UNSOLVABLE
    assert result.par == 0
    assert not result.metrics.hit_limit


def test_stuck_puzzle_is_unsolvable():
    state = PuzzleState.from_lists([[A, B, A, B], [B, A, B, A]])
    result = solve(state)
    assert result.is_unsolvable
    assert result.metrics.states_explored == 1


def test_state_ceiling_gives_indeterminate():
    state = PuzzleState.from_lists([[A, A, A, B], [B, B, B, A], []])
    result = solve(state, max_states=1)

    assert result.outcome is SolveOutcome.INDETERMINATE
    assert result.is_indeterminate
    assert not result.solvable
    assert result.par == 0
    assert result.metrics.hit_limit


def test_cancelled_search_is_indeterminate():
    state = PuzzleState.from_lists([[A, A, A, B], [B, B, B, A], []])
    context = SolveContext(state=state)
    context.cancel_flag.set()
    result = create_strategy("bfs").solve(context)
    assert result.is_indeterminate
    assert not result.metrics.hit_limit


def test_cancelled_metrics_run_is_not_a_ceiling_hit():
    state = PuzzleState.from_lists([[A, A, A, B], [B, B, B, A], []])
    context = SolveContext(state=state)
    context.cancel_flag.set()
    result = create_strategy("metrics").solve(context)

    assert result.is_indeterminate
    assert result.par == 0
    assert not result.metrics.hit_limit


def test_par_matches_brute_force():
    for state in small_puzzles():
        expected = brute_force_par(state)
        result = solve(state)
        if expected is None:
            assert result.outcome is SolveOutcome.UNSOLVABLE, str(state)
        else:
            assert result.outcome is SolveOutcome.SOLVABLE, str(state)
            assert result.par == expected, str(state)
            assert is_level_complete(replay(state, result.moves))


@pytest.mark.parametrize("pruning", [
    {"prune_uniform_to_empty": False},
    {"prune_empty_symmetry": False},
    {"prune_uniform_to_empty": False, "prune_empty_symmetry": False},
])
def test_pruning_does_not_change_verdict(pruning):
    for state in small_puzzles():
        pruned = solve(state)
        unpruned = solve(state, **pruning)
        assert pruned.outcome is unpruned.outcome, str(state)
        assert pruned.par == unpruned.par, str(state)


def test_pruning_skips_moves():
    state = PuzzleState.from_lists([[A, A, A, B], [B, B, B, A], [], []])
    pruned = solve(state)
    unpruned = solve(state, prune_uniform_to_empty=False, prune_empty_symmetry=False)

    assert pruned.par == unpruned.par == 3
    assert pruned.metrics.pruned_moves > 0
    assert unpruned.metrics.pruned_moves == 0


def test_metrics_mode_explores_everything():
    state = PuzzleState.from_lists([[A, A, A, B], [B, B, B, A], []])
    result = solve(state, strategy="metrics")
    quick = solve(state)

    assert result.outcome is SolveOutcome.SOLVABLE
    assert result.par == 3
    assert result.metrics.strategy_name == "metrics"
    assert result.metrics.states_explored >= quick.metrics.states_explored
    assert result.metrics.avg_branching > 0
    assert 0.0 <= result.metrics.dead_end_ratio <= 1.0
    assert not result.metrics.hit_limit


def test_metrics_mode_counts_dead_ends():
    state = PuzzleState.from_lists([[A, B, A, B], [B, A, B, A]])
    result = solve(state, strategy="metrics")
    assert result.outcome is SolveOutcome.UNSOLVABLE
    assert result.metrics.dead_ends == 1
    assert result.metrics.dead_end_ratio == 1.0


def test_metrics_mode_respects_ceiling():
    rng = np.random.default_rng(5)
    state = create_puzzle(4, 2, 2, rng=rng)
    result = solve(state, max_states=50, strategy="metrics")
    assert result.metrics.hit_limit
    assert result.outcome in (SolveOutcome.SOLVABLE, SolveOutcome.INDETERMINATE)


def test_strategy_registry():
    names = get_strategy_names()
    assert "bfs" in names
    assert "metrics" in names
    assert get_default_strategy_name() == "bfs"
    assert {info["name"] for info in get_strategy_info()} >= {"bfs", "metrics"}

    with pytest.raises(ValueError):
        create_strategy("does-not-exist")


def test_random_players():
    easy = PuzzleState.from_lists([[A, A, A, B], [B, B, B, A], [], []])
    stats = simulate_random_players(easy, players=50, seed=3)
    assert stats.players == 50
    assert stats.solved + len(stats.stuck_at) == 50
    assert 0.0 <= stats.difficulty <= 100.0

    again = simulate_random_players(easy, players=50, seed=3)
    assert again.solved == stats.solved

    stuck = PuzzleState.from_lists([[A, B, A, B], [B, A, B, A]])
    hopeless = simulate_random_players(stuck, players=10, seed=1)
    assert hopeless.solve_rate == 0.0
    assert hopeless.difficulty == 100.0
