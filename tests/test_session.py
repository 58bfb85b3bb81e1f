"""
Tests for PlaySession: player pours, undo, restart and hidden units.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from watersort.game import Move, PuzzleState
from watersort.generator import Level
from watersort.session import PlaySession, SessionStatus

A, B = "red", "blue"


def make_level(tubes, par=3, locked_masks=()):
    return Level(
        state=PuzzleState.from_lists(tubes),
        par=par,
        color_count=2,
        difficulty_tier="test",
        level_number=1,
        locked_masks=locked_masks,
    )


def test_play_to_completion():
    session = PlaySession(make_level([[A, A, A, B], [B, B, B, A], []]))
    assert session.status is SessionStatus.PLAYING

    assert session.pour(0, 2)
    assert session.pour(1, 0)
    assert session.pour(2, 1)

    assert session.status is SessionStatus.COMPLETE
    assert session.is_complete
    assert session.moves == [Move(0, 2), Move(1, 0), Move(2, 1)]
    assert session.get_state_string() == "Complete in 3 (par 3)"


def test_illegal_pour_is_rejected():
    session = PlaySession(make_level([[A, A, A, B], [B, B, B, A], []]))

    assert not session.pour(0, 1)      # full destination
    assert not session.pour(2, 0)      # empty source
    assert not session.pour(0, 0)
    assert session.move_count == 0
    assert not session.can_undo
    assert session.state == session.level.state


def test_stuck_status():
    session = PlaySession(make_level([[A, B, A, B], [B, A, B, A]]))
    assert session.status is SessionStatus.STUCK
    assert session.valid_moves() == []
    assert session.get_state_string() == "Stuck after 0 moves"


def test_undo_restores_previous_state():
    session = PlaySession(make_level([[A, A, A, B], [B, B, B, A], []]))
    initial = session.state

    session.pour(0, 2)
    after_first = session.state
    session.pour(1, 0)

    assert session.undo() == Move(1, 0)
    assert session.state == after_first
    assert session.undo() == Move(0, 2)
    assert session.state is initial
    assert session.undo() is None
    assert session.undo_count == 2
    assert session.move_count == 0


def test_restart_returns_to_initial_state():
    session = PlaySession(make_level([[A, A, A, B], [B, B, B, A], []]))
    session.pour(0, 2)
    session.pour(1, 0)

    session.restart()

    assert session.state == session.level.state
    assert session.move_count == 0
    assert not session.can_undo
    assert session.restart_count == 1


def test_hidden_units_limit_pour_and_get_revealed():
    masks = ((True, True, True, False), (True, True, True, False), (), ())
    session = PlaySession(make_level([[A, B, B, B], [B, A, A, A], [], []], locked_masks=masks))

    assert session.locked_masks == masks
    assert session.pour(0, 2)

    # Only the visible top unit moved; the next unit is now exposed
    assert session.state.tubes[0] == (A, B, B)
    assert session.state.tubes[2] == (B,)
    assert session.locked_masks[0] == (True, True, False)
    assert session.locked_masks[2] == (False,)

    session.undo()
    assert session.locked_masks == masks


def test_unmasked_level_gets_visible_masks():
    session = PlaySession(make_level([[A, B], [B, A], []]))
    assert session.locked_masks == ((False, False), (False, False), ())
