"""
Tests for the pour engine and state model.

Covers:
1. PuzzleState construction and invariants
2. Pour legality and execution
3. Completion, move enumeration and deadlock detection
4. Locked-mask visibility rules
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from watersort.game import (
    REJECTED,
    IllegalPourError,
    Move,
    PuzzleState,
    attempt_pour,
    can_pour,
    get_valid_moves,
    is_level_complete,
    is_stuck,
    is_tube_complete,
    pour,
    pour_amount,
    reveal_top_segments,
    top_color,
    top_run_length,
)
from watersort.generator import create_puzzle

A, B, C = "red", "blue", "green"


def test_state_rejects_overfull_tube():
    """A tube longer than the capacity cannot be represented."""
    with pytest.raises(ValueError):
        PuzzleState.from_lists([[A, A, A, A, A], []], capacity=4)


def test_state_round_trips_through_lists():
    tubes = [[A, B, A], [], [B]]
    state = PuzzleState.from_lists(tubes)
    assert state.to_lists() == tubes
    assert state.total_units == 4
    assert state.filled_tube_count == 2
    assert state.first_empty_index() == 1
    assert state.color_counts() == {A: 2, B: 2}


def test_top_color_and_run_length():
    assert top_color(()) is None
    assert top_color((A, B)) == B
    assert top_run_length(()) == 0
    assert top_run_length((A, B, B)) == 2
    assert top_run_length((B, B, B, B)) == 4


def test_run_length_stops_at_locked_unit():
    """The player cannot drag through liquid they cannot see."""
    tube = (A, B, B, B)
    assert top_run_length(tube, (True, True, True, False)) == 1
    assert top_run_length(tube, (True, False, False, False)) == 3


def test_can_pour_rules():
    assert not can_pour((), (A,), 4)                 # empty source
    assert not can_pour((A,), (A, A, A, A), 4)       # full destination
    assert can_pour((A,), (), 4)                     # empty destination
    assert can_pour((B, A), (A,), 4)                 # matching tops
    assert not can_pour((A, B), (A,), 4)             # different tops


def test_locked_destination_top_never_matches():
    assert not can_pour((A,), (B, A), 4, destination_mask=(False, True))
    assert can_pour((A,), (B, A), 4, destination_mask=(True, False))


def test_pour_alternating_tube_into_empty():
    """[[A,B,A,B],[B,A,B,A],[],[]]: pour 0->2 moves a single B."""
    state = PuzzleState.from_lists([[A, B, A, B], [B, A, B, A], [], []])

    assert can_pour(state.tubes[0], state.tubes[2], state.capacity)
    after = pour(state, 0, 2)

    assert after.tubes[0] == (A, B, A)
    assert after.tubes[2] == (B,)
    assert after.tubes[1] is state.tubes[1]
    assert after.tubes[3] is state.tubes[3]
    # Original untouched
    assert state.tubes[0] == (A, B, A, B)


def test_pour_limited_by_free_space():
    state = PuzzleState.from_lists([[A, B, B, B], [B, B], []])
    assert pour_amount(state, 0, 1) == 2
    after = pour(state, 0, 1)
    assert after.tubes[0] == (A, B)
    assert after.tubes[1] == (B, B, B, B)


def test_pour_respects_locked_mask():
    state = PuzzleState.from_lists([[A, B, B, B], []])
    masks = [(True, True, True, False), ()]
    after = pour(state, 0, 1, masks)
    assert after.tubes[0] == (A, B, B)
    assert after.tubes[1] == (B,)


@pytest.mark.parametrize("pair", [(0, 1), (0, 0), (2, 0), (0, 9), (-1, 0)])
def test_illegal_pour_raises(pair):
    state = PuzzleState.from_lists([[A, B], [A, A, A, A], []])
    with pytest.raises(IllegalPourError):
        pour(state, *pair)


def test_attempt_pour_rejects_without_raising():
    state = PuzzleState.from_lists([[A, B], [A, A, A, A], []])

    rejected = attempt_pour(state, 0, 1)
    assert rejected is REJECTED
    assert not rejected.ok
    assert rejected.state is None

    accepted = attempt_pour(state, 0, 2)
    assert accepted.ok
    assert accepted.transferred == 1
    assert accepted.state.tubes[2] == (B,)


def test_tube_completion():
    assert is_tube_complete((A, A, A, A), 4)
    assert not is_tube_complete((A, A, A), 4)
    assert not is_tube_complete((A, A, B, A), 4)
    # Hidden units make a tube incomplete even if it is full and uniform
    assert not is_tube_complete((A, A, A, A), 4, (True, False, False, False))


def test_level_complete_scenarios():
    solved = PuzzleState.from_lists([[A, A, A, A], [B, B, B, B], [], []])
    assert is_level_complete(solved)
    assert is_level_complete(solved)

    unsolved = PuzzleState.from_lists([[A, A, A, A], [B, B, B], [B], []])
    assert not is_level_complete(unsolved)

    masks = [(True, False, False, False), (), (), ()]
    assert not is_level_complete(solved, masks)


def test_valid_moves_order_and_sources():
    state = PuzzleState.from_lists([[A, A, A, A], [B, A], [A], []])
    moves = get_valid_moves(state)

    # Complete tube 0 is never a source; order is by source then destination
    assert moves == [Move(1, 2), Move(1, 3), Move(2, 1), Move(2, 3)]
    assert moves == get_valid_moves(state)


def test_stuck_when_all_tubes_full():
    state = PuzzleState.from_lists([[A, B, A, B], [B, A, B, A]])
    assert get_valid_moves(state) == []
    assert is_stuck(state)


def test_stuck_without_matching_tops():
    """No empty tube and no non-full tube shares a top color."""
    state = PuzzleState.from_lists([[A, A, B], [B, B, C], [C, C, A, A]])
    assert get_valid_moves(state) == []
    assert is_stuck(state)


def test_complete_level_is_not_stuck():
    state = PuzzleState.from_lists([[A, A, A, A], [B, B, B, B]])
    assert get_valid_moves(state) == []
    assert not is_stuck(state)


def test_reveal_top_segments():
    state = PuzzleState.from_lists([[A, B], [B, B, A], []])
    masks = [(True, True, True), (True, True, False), ()]
    revealed = reveal_top_segments(masks, state)
    assert revealed == [(True, False), (True, True, False), ()]

    # Only affected tubes are processed
    partial = reveal_top_segments(masks, state, affected=[1])
    assert partial[0] is masks[0]


def test_pour_preserves_units_and_capacity():
    """Random walks never create, destroy or overflow liquid."""
    rng = np.random.default_rng(11)
    state = create_puzzle(4, 2, 2, rng=rng)
    initial_colors = state.color_counts()

    for _ in range(200):
        moves = get_valid_moves(state)
        if not moves:
            break
        move = moves[int(rng.integers(len(moves)))]
        state = pour(state, move.from_index, move.to_index)

        assert state.total_units == 4 * 2 * 4
        assert state.color_counts() == initial_colors
        assert all(0 <= len(tube) <= state.capacity for tube in state.tubes)
