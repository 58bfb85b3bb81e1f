"""
Play Session Module - Caller-side state tracking for one level.

The pour engine itself keeps no history. PlaySession is the collaborator
that does: it applies player pours through attempt_pour(), keeps every
prior immutable state as an undo snapshot, reveals hidden units as they
reach the top of a tube, and reports whether the player is still playing,
stuck, or done.

For the rules themselves, see the watersort.game package.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple
import logging

from .game import (
    LockedMask,
    Move,
    PuzzleState,
    attempt_pour,
    get_valid_moves,
    is_level_complete,
    is_stuck,
    reveal_top_segments,
)
from .generator.level import Level

logger = logging.getLogger(__name__)


__all__ = [
    "SessionStatus",
    "PlaySession",
]


class SessionStatus(Enum):
    """
    Session states.

    States:
        PLAYING: Legal pours remain and the level is not solved
        STUCK: No legal pour remains and the level is not solved
        COMPLETE: Every tube is empty or complete
    """
    PLAYING = auto()
    STUCK = auto()
    COMPLETE = auto()


class PlaySession:
    """
    Tracks one play-through of a level.

    State Flow:
        PLAYING --pour--> PLAYING | STUCK | COMPLETE
           ^                  |
           |_____undo/restart_|

    Snapshots are the immutable PuzzleState values returned by the engine,
    so undo is a pop from the history stack.
    """

    def __init__(self, level: Level):
        """
        Start a session on a level.

        Args:
            level: Level to play (never modified)
        """
        self.level = level
        self._history: List[Tuple[PuzzleState, Tuple[LockedMask, ...]]] = []
        self._moves: List[Move] = []
        self.undo_count = 0
        self.restart_count = 0

        self._state = level.state
        self._locked_masks = self._initial_masks()

    def _initial_masks(self) -> Tuple[LockedMask, ...]:
        masks = self.level.locked_masks
        if not masks:
            masks = tuple((False,) * len(tube) for tube in self.level.state.tubes)
        return tuple(reveal_top_segments(masks, self.level.state))

    @property
    def state(self) -> PuzzleState:
        """Current puzzle state."""
        return self._state

    @property
    def locked_masks(self) -> Tuple[LockedMask, ...]:
        """Current per-tube visibility masks."""
        return self._locked_masks

    @property
    def moves(self) -> List[Move]:
        """Pours applied so far (undone pours are removed)."""
        return list(self._moves)

    @property
    def move_count(self) -> int:
        return len(self._moves)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def status(self) -> SessionStatus:
        """Current session status."""
        if is_level_complete(self._state, self._locked_masks):
            return SessionStatus.COMPLETE
        if is_stuck(self._state, self._locked_masks):
            return SessionStatus.STUCK
        return SessionStatus.PLAYING

    @property
    def is_complete(self) -> bool:
        return self.status is SessionStatus.COMPLETE

    def valid_moves(self) -> List[Move]:
        """Legal pours from the player's point of view."""
        return get_valid_moves(self._state, self._locked_masks)

    def pour(self, from_index: int, to_index: int) -> bool:
        """
        Attempt a player pour.

        Args:
            from_index: Source tube index
            to_index: Destination tube index

        Returns:
            True if the pour was legal and applied, False if rejected
        """
        result = attempt_pour(self._state, from_index, to_index, self._locked_masks)
        if not result.ok:
            return False

        self._history.append((self._state, self._locked_masks))
        self._state = result.state
        self._locked_masks = tuple(
            reveal_top_segments(self._locked_masks, self._state, (from_index, to_index))
        )
        self._moves.append(Move(from_index, to_index))

        logger.debug(
            f"Pour {from_index}->{to_index}: {result.transferred} unit(s), "
            f"move {self.move_count}"
        )
        if self.is_complete:
            logger.info(f"Level {self.level.level_number} complete in {self.move_count} moves (par {self.level.par})")
        return True

    def undo(self) -> Optional[Move]:
        """
        Revert the last pour.

        Returns:
            The move that was undone, or None if there is nothing to undo
        """
        if not self._history:
            return None
        self._state, self._locked_masks = self._history.pop()
        self.undo_count += 1
        return self._moves.pop()

    def restart(self) -> None:
        """Return to the level's initial state and clear the history."""
        self._history.clear()
        self._moves.clear()
        self._state = self.level.state
        self._locked_masks = self._initial_masks()
        self.restart_count += 1
        logger.debug(f"Level {self.level.level_number} restarted")

    def get_state_string(self) -> str:
        """
        Get human-readable status.

        Returns:
            Status string
        """
        status = self.status
        if status is SessionStatus.COMPLETE:
            return f"Complete in {self.move_count} (par {self.level.par})"
        if status is SessionStatus.STUCK:
            return f"Stuck after {self.move_count} moves"
        return f"Playing: {self.move_count} moves (par {self.level.par})"
