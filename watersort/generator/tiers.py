"""
Difficulty Tiers Module - Parameter bundles selected by level number.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..settings import DEFAULT_TIER_TABLE


@dataclass(frozen=True)
class DifficultyTier:
    """
    Generation parameters for a band of levels.

    Attributes:
        name: Tier identifier recorded on generated levels
        max_level: Last level number using this tier (None = open-ended)
        colors: Number of distinct colors
        tubes_per_color: Filled tubes' worth of units per color
        empty_tubes: Empty tubes appended after the filled ones
        locked_fraction: Probability that a filled tube hides all but its top
    """
    name: str
    max_level: Optional[int]
    colors: int
    tubes_per_color: int
    empty_tubes: int
    locked_fraction: float = 0.0

    def __post_init__(self):
        if self.colors < 1 or self.tubes_per_color < 1:
            raise ValueError(f"Tier {self.name}: colors and tubes_per_color must be positive")
        if self.empty_tubes < 0:
            raise ValueError(f"Tier {self.name}: empty_tubes cannot be negative")
        if not 0.0 <= self.locked_fraction <= 1.0:
            raise ValueError(f"Tier {self.name}: locked_fraction must be within [0, 1]")

    @property
    def filled_tubes(self) -> int:
        """Number of filled tubes a puzzle of this tier starts with."""
        return self.colors * self.tubes_per_color

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DifficultyTier':
        return cls(
            name=str(data["name"]),
            max_level=data.get("max_level"),
            colors=int(data["colors"]),
            tubes_per_color=int(data["tubes_per_color"]),
            empty_tubes=int(data["empty_tubes"]),
            locked_fraction=float(data.get("locked_fraction", 0.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_TIERS: List[DifficultyTier] = [DifficultyTier.from_dict(t) for t in DEFAULT_TIER_TABLE]


def tiers_from_settings(settings: Mapping[str, Any]) -> List[DifficultyTier]:
    """
    Build the tier table from a settings dictionary.

    Args:
        settings: Settings as returned by load_settings()

    Returns:
        List of tiers, in table order

    Raises:
        ValueError: If the table is empty or a row is malformed
    """
    rows = settings.get("tiers") or []
    if not rows:
        raise ValueError("Settings contain no difficulty tiers")
    try:
        return [DifficultyTier.from_dict(row) for row in rows]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed tier row: {e}") from e


def tier_for_level(level_number: int,
                   tiers: Sequence[DifficultyTier] = DEFAULT_TIERS) -> DifficultyTier:
    """
    Select the tier for a level number.

    The first tier whose max_level is None or >= level_number wins; levels
    past the end of the table use the last tier.

    Args:
        level_number: 1-based level number
        tiers: Ordered tier table

    Returns:
        Matching DifficultyTier
    """
    if not tiers:
        raise ValueError("Tier table is empty")
    for tier in tiers:
        if tier.max_level is None or level_number <= tier.max_level:
            return tier
    return tiers[-1]
