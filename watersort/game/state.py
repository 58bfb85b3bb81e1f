"""
Puzzle State Module - Immutable tube/color representation for the sorting puzzle.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

# A color is an opaque identifier; the palette names are used as-is.
Color = str

# A tube is bottom-to-top: index 0 is the bottom, the last element is the top.
Tube = Tuple[Color, ...]

# Parallel to a tube; True means the unit at that index is hidden from the player.
LockedMask = Tuple[bool, ...]

TUBE_CAPACITY = 4

# Ordered palette used for level generation
COLOR_KEYS: Tuple[Color, ...] = (
    "red",
    "blue",
    "green",
    "yellow",
    "purple",
    "orange",
    "teal",
    "pink",
    "lime",
    "brown",
    "gray",
    "cyan",
)


@dataclass(frozen=True)
class PuzzleState:
    """
    Immutable puzzle state.

    Uses a tuple of tuples for hashability and immutability. Equality is
    positional: two states with the same tubes in a different order are
    different states here (the UI relies on tube identity). Search-level
    equivalence lives in the canonical hasher instead.

    Attributes:
        tubes: Tuple of tubes, each a bottom-to-top tuple of colors
        capacity: Maximum units per tube (constant across the puzzle)
    """
    tubes: Tuple[Tube, ...]
    capacity: int = TUBE_CAPACITY

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError(f"Capacity must be positive, got {self.capacity}")
        for index, tube in enumerate(self.tubes):
            if len(tube) > self.capacity:
                raise ValueError(
                    f"Tube {index} holds {len(tube)} units, capacity is {self.capacity}"
                )

    @classmethod
    def from_lists(cls, tubes: Iterable[Sequence[Color]],
                   capacity: int = TUBE_CAPACITY) -> 'PuzzleState':
        """
        Create PuzzleState from nested lists (e.g. deserialized JSON).

        Args:
            tubes: Iterable of bottom-to-top color sequences
            capacity: Tube capacity

        Returns:
            PuzzleState instance with immutable tubes
        """
        return cls(tubes=tuple(tuple(tube) for tube in tubes), capacity=capacity)

    def to_lists(self) -> List[List[Color]]:
        """
        Convert to mutable nested list representation.

        Returns:
            List of tubes, each a list of colors
        """
        return [list(tube) for tube in self.tubes]

    def replace_tubes(self, replacements: Dict[int, Tube]) -> 'PuzzleState':
        """
        Return a new state with the given tube indices replaced.

        Tubes that are not replaced are shared by reference with this state.

        Args:
            replacements: Mapping of tube index to new tube contents

        Returns:
            New PuzzleState
        """
        tubes = tuple(
            replacements[i] if i in replacements else tube
            for i, tube in enumerate(self.tubes)
        )
        return PuzzleState(tubes=tubes, capacity=self.capacity)

    def tube(self, index: int) -> Tube:
        """Get tube at index."""
        return self.tubes[index]

    @property
    def tube_count(self) -> int:
        """Number of tubes in the puzzle."""
        return len(self.tubes)

    @property
    def total_units(self) -> int:
        """Total number of liquid units across all tubes."""
        return sum(len(tube) for tube in self.tubes)

    @property
    def filled_tube_count(self) -> int:
        """Number of non-empty tubes."""
        return sum(1 for tube in self.tubes if tube)

    @property
    def empty_tube_indices(self) -> List[int]:
        """Indices of empty tubes, ascending."""
        return [i for i, tube in enumerate(self.tubes) if not tube]

    def first_empty_index(self) -> Optional[int]:
        """
        Get index of the first empty tube.

        Returns:
            Lowest empty tube index, or None if every tube holds liquid
        """
        for i, tube in enumerate(self.tubes):
            if not tube:
                return i
        return None

    def color_counts(self) -> Dict[Color, int]:
        """
        Count units of each color across all tubes.

        Returns:
            Dict mapping color to unit count
        """
        counts: Counter = Counter()
        for tube in self.tubes:
            counts.update(tube)
        return dict(counts)

    @property
    def color_count(self) -> int:
        """Number of distinct colors present."""
        return len(self.color_counts())

    def __str__(self) -> str:
        rendered = " ".join(
            "[" + ",".join(tube) + "]" if tube else "[]"
            for tube in self.tubes
        )
        return f"PuzzleState(cap={self.capacity}) {rendered}"
