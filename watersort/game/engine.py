"""
Pour Engine Module - Rules of the sorting puzzle.

Pure functions over PuzzleState: legality checks, pour execution,
completion checks, move enumeration and deadlock detection. No function
here mutates its arguments; pour() always returns a fresh state and shares
untouched tubes with the original.

Locked masks are optional and only ever describe what the player can see.
The solver never passes them.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .move import Move
from .state import Color, LockedMask, PuzzleState, Tube

logger = logging.getLogger(__name__)


__all__ = [
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
]


class IllegalPourError(ValueError):
    """Raised when pour() is called for a pair that cannot be poured."""


@dataclass(frozen=True)
class PourResult:
    """
    Result of a player-initiated pour attempt.

    Attributes:
        state: New state after the pour, or None if the pour was rejected
        transferred: Number of units moved (0 when rejected)
    """
    state: Optional[PuzzleState] = None
    transferred: int = 0

    @property
    def ok(self) -> bool:
        """True if the pour was legal and applied."""
        return self.state is not None


# Shared rejection value; carries nothing beyond "illegal"
REJECTED = PourResult()


def _mask_for(locked_masks: Optional[Sequence[LockedMask]], index: int) -> Optional[LockedMask]:
    if locked_masks is None or index >= len(locked_masks):
        return None
    return locked_masks[index]


def top_color(tube: Tube) -> Optional[Color]:
    """Get the top color of a tube, or None if empty."""
    return tube[-1] if tube else None


def top_run_length(tube: Tube, locked_mask: Optional[LockedMask] = None) -> int:
    """
    Count consecutive same-color units at the top of a tube.

    If a locked mask is given, the run stops at the first locked unit
    below the top (a player cannot pour what they cannot see).

    Args:
        tube: Bottom-to-top tube contents
        locked_mask: Optional visibility mask parallel to the tube

    Returns:
        Length of the top run (0 for an empty tube)
    """
    if not tube:
        return 0
    color = tube[-1]
    count = 1
    for i in range(len(tube) - 2, -1, -1):
        if locked_mask is not None and i < len(locked_mask) and locked_mask[i]:
            break
        if tube[i] != color:
            break
        count += 1
    return count


def can_pour(source: Tube, destination: Tube, capacity: int,
             destination_mask: Optional[LockedMask] = None) -> bool:
    """
    Check if the top of source may be poured into destination.

    Args:
        source: Source tube
        destination: Destination tube
        capacity: Tube capacity of the puzzle
        destination_mask: Optional visibility mask of the destination; a
            hidden top unit never counts as a color match

    Returns:
        True if the pour is legal
    """
    if not source:
        return False
    if len(destination) >= capacity:
        return False
    if not destination:
        return True
    if destination_mask is not None and len(destination_mask) >= len(destination) \
            and destination_mask[len(destination) - 1]:
        return False
    return source[-1] == destination[-1]


def _check_pair(state: PuzzleState, from_index: int, to_index: int,
                locked_masks: Optional[Sequence[LockedMask]]) -> bool:
    count = state.tube_count
    if not (0 <= from_index < count and 0 <= to_index < count):
        return False
    if from_index == to_index:
        return False
    return can_pour(
        state.tubes[from_index],
        state.tubes[to_index],
        state.capacity,
        _mask_for(locked_masks, to_index),
    )


def pour_amount(state: PuzzleState, from_index: int, to_index: int,
                locked_masks: Optional[Sequence[LockedMask]] = None) -> int:
    """
    Number of units a pour would transfer.

    Returns:
        Units moved, or 0 if the pour is illegal
    """
    if not _check_pair(state, from_index, to_index, locked_masks):
        return 0
    source = state.tubes[from_index]
    destination = state.tubes[to_index]
    run = top_run_length(source, _mask_for(locked_masks, from_index))
    return min(run, state.capacity - len(destination))


def pour(state: PuzzleState, from_index: int, to_index: int,
         locked_masks: Optional[Sequence[LockedMask]] = None) -> PuzzleState:
    """
    Execute a pour and return the resulting state.

    Moves min(top run, free space) units of the source's top color onto
    the destination. The original state is unchanged; tubes not involved
    are shared by reference.

    Args:
        state: Current puzzle state
        from_index: Source tube index
        to_index: Destination tube index
        locked_masks: Optional per-tube visibility masks

    Returns:
        New PuzzleState after the pour

    Raises:
        IllegalPourError: If the pair is out of range, identical, or
            can_pour() is False for it
    """
    amount = pour_amount(state, from_index, to_index, locked_masks)
    if amount == 0:
        raise IllegalPourError(
            f"Cannot pour {from_index}->{to_index} in {state}"
        )

    source = state.tubes[from_index]
    destination = state.tubes[to_index]
    color = source[-1]

    return state.replace_tubes({
        from_index: source[:len(source) - amount],
        to_index: destination + (color,) * amount,
    })


def attempt_pour(state: PuzzleState, from_index: int, to_index: int,
                 locked_masks: Optional[Sequence[LockedMask]] = None) -> PourResult:
    """
    Player-facing pour: apply the move if legal, otherwise reject it.

    Args:
        state: Current puzzle state
        from_index: Source tube index
        to_index: Destination tube index
        locked_masks: Optional per-tube visibility masks

    Returns:
        PourResult with the new state, or REJECTED
    """
    amount = pour_amount(state, from_index, to_index, locked_masks)
    if amount == 0:
        logger.debug(f"Rejected pour {from_index}->{to_index}")
        return REJECTED
    return PourResult(
        state=pour(state, from_index, to_index, locked_masks),
        transferred=amount,
    )


def is_tube_complete(tube: Tube, capacity: int,
                     locked_mask: Optional[LockedMask] = None) -> bool:
    """
    Check if a tube is full of a single color with nothing hidden.

    A full tube that still conceals units is never complete, even if the
    hidden units happen to match.
    """
    if len(tube) != capacity:
        return False
    if locked_mask is not None and any(locked_mask):
        return False
    first = tube[0]
    return all(color == first for color in tube)


def is_level_complete(state: PuzzleState,
                      locked_masks: Optional[Sequence[LockedMask]] = None) -> bool:
    """Check that every tube is either empty or complete."""
    return all(
        not tube or is_tube_complete(tube, state.capacity, _mask_for(locked_masks, i))
        for i, tube in enumerate(state.tubes)
    )


def get_valid_moves(state: PuzzleState,
                    locked_masks: Optional[Sequence[LockedMask]] = None) -> List[Move]:
    """
    Find all legal pours in the current state.

    Empty and already-complete tubes are never sources. Order is by source
    index, then destination index.

    Args:
        state: Current puzzle state
        locked_masks: Optional per-tube visibility masks

    Returns:
        List of legal Move objects
    """
    moves = []
    tubes = state.tubes
    capacity = state.capacity

    for from_index, source in enumerate(tubes):
        if not source:
            continue
        if is_tube_complete(source, capacity, _mask_for(locked_masks, from_index)):
            continue
        for to_index, destination in enumerate(tubes):
            if from_index == to_index:
                continue
            if can_pour(source, destination, capacity, _mask_for(locked_masks, to_index)):
                moves.append(Move(from_index, to_index))

    return moves


def is_stuck(state: PuzzleState,
             locked_masks: Optional[Sequence[LockedMask]] = None) -> bool:
    """True if the level is unsolved and no legal pour exists."""
    if is_level_complete(state, locked_masks):
        return False
    return len(get_valid_moves(state, locked_masks)) == 0


def reveal_top_segments(locked_masks: Sequence[LockedMask], state: PuzzleState,
                        affected: Optional[Iterable[int]] = None) -> List[LockedMask]:
    """
    Sync locked masks to the current tube lengths and reveal each top unit.

    Masks of tubes that lost units are truncated; units poured in are
    always visible. The top unit of every processed tube is revealed.

    Args:
        locked_masks: Current per-tube masks
        state: State the masks should describe
        affected: Tube indices to process; all tubes when None

    Returns:
        New list of masks (unprocessed masks are reused)
    """
    indices = set(affected) if affected is not None else None
    result: List[LockedMask] = []

    for i, tube in enumerate(state.tubes):
        mask = locked_masks[i] if i < len(locked_masks) else ()
        if indices is not None and i not in indices:
            result.append(mask)
            continue

        synced = list(mask[:len(tube)])
        synced.extend([False] * (len(tube) - len(synced)))
        if synced:
            synced[-1] = False
        result.append(tuple(synced))

    return result
