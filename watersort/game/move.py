"""
Move Module - Represents a pour from one tube into another.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Move:
    """
    Represents a pour between two tubes.

    A move carries no amount: how many units are transferred is fully
    determined by the state it is applied to.

    Attributes:
        from_index: Source tube index
        to_index: Destination tube index
    """
    from_index: int
    to_index: int

    @classmethod
    def from_pair(cls, pair: Tuple[int, int]) -> 'Move':
        """
        Create a Move from a (from, to) pair.

        Args:
            pair: Tuple of source and destination indices

        Returns:
            Move instance
        """
        source, destination = pair
        return cls(from_index=source, to_index=destination)

    def as_pair(self) -> Tuple[int, int]:
        """(from, to) tuple, e.g. for serialization."""
        return (self.from_index, self.to_index)

    def __str__(self) -> str:
        return f"{self.from_index}->{self.to_index}"
