"""
Canonical Hashing Module - Tube-order independent state keys.

Tubes are interchangeable for solving purposes, so two states that differ
only by a permutation of tube order are the same search node. The key keeps
the order of units within a tube and discards the order of the tubes.
"""

from typing import Sequence, Tuple, Union

from .state import PuzzleState, Tube

CanonicalKey = Tuple[Tube, ...]

EMPTY_TOKEN = "_"


def canonical_key(state: Union[PuzzleState, Sequence[Tube]]) -> CanonicalKey:
    """
    Compute the canonical key of a state.

    Each tube is its own token (an empty tube is the empty tuple); the
    tokens are sorted so that tube order does not matter. Tuples compare
    element-wise, so distinct multisets of tubes never share a key.

    Args:
        state: PuzzleState or raw sequence of tubes

    Returns:
        Hashable canonical key
    """
    tubes = state.tubes if isinstance(state, PuzzleState) else state
    return tuple(sorted(tubes))


def states_equivalent(a: PuzzleState, b: PuzzleState) -> bool:
    """True if the two states are equal up to tube order."""
    return a.capacity == b.capacity and canonical_key(a) == canonical_key(b)


def canonical_string(state: Union[PuzzleState, Sequence[Tube]]) -> str:
    """
    Render the canonical key as text, e.g. ``_|blue,red|red,red``.

    Intended for logs and tools; use canonical_key() for deduplication.
    """
    return "|".join(
        ",".join(tube) if tube else EMPTY_TOKEN
        for tube in canonical_key(state)
    )
