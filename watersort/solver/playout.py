"""
Random Playout Module - Difficulty estimate from simulated random players.

Each simulated player picks uniformly among legal pours, never returning
to a state (up to tube order) it has already seen. The share of players
that finish is a cheap, solver-independent difficulty signal:

    difficulty = 100 * (1 - solve_rate)

0 means everyone stumbles into the solution, 100 means nobody does.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..game.engine import get_valid_moves, is_level_complete, pour
from ..game.hashing import canonical_key
from ..game.state import PuzzleState

logger = logging.getLogger(__name__)

DEFAULT_PLAYERS = 500
DEFAULT_MAX_MOVES = 400


@dataclass
class PlayoutStats:
    """
    Aggregate result of a batch of random players.

    Attributes:
        players: Number of simulated players
        solved: Players that reached a complete state
        move_counts: Moves made by each solving player
        stuck_at: Moves made by each failing player before giving up
    """
    players: int = 0
    solved: int = 0
    move_counts: List[int] = field(default_factory=list)
    stuck_at: List[int] = field(default_factory=list)

    @property
    def solve_rate(self) -> float:
        return self.solved / self.players if self.players else 0.0

    @property
    def avg_moves(self) -> float:
        """Average moves of the players that solved it (0 if none did)."""
        return float(np.mean(self.move_counts)) if self.move_counts else 0.0

    @property
    def avg_stuck_at(self) -> float:
        return float(np.mean(self.stuck_at)) if self.stuck_at else 0.0

    @property
    def difficulty(self) -> float:
        return 100.0 * (1.0 - self.solve_rate)


def play_once(state: PuzzleState, rng: np.random.Generator,
              max_moves: int = DEFAULT_MAX_MOVES) -> Tuple[bool, int]:
    """
    Simulate one random player.

    Args:
        state: Starting puzzle
        rng: Random source
        max_moves: Give up after this many pours

    Returns:
        Tuple of (solved, moves made)
    """
    visited = {canonical_key(state)}

    for step in range(max_moves):
        if is_level_complete(state):
            return True, step
        moves = get_valid_moves(state)
        if not moves:
            return False, step

        moved = False
        for index in rng.permutation(len(moves)):
            move = moves[int(index)]
            candidate = pour(state, move.from_index, move.to_index)
            key = canonical_key(candidate)
            if key not in visited:
                visited.add(key)
                state = candidate
                moved = True
                break
        if not moved:
            return False, step

    return is_level_complete(state), max_moves


def simulate_random_players(state: PuzzleState, players: int = DEFAULT_PLAYERS,
                            max_moves: int = DEFAULT_MAX_MOVES,
                            seed: Optional[int] = None) -> PlayoutStats:
    """
    Run a batch of random players on one puzzle.

    Args:
        state: Puzzle to play
        players: Number of players to simulate
        max_moves: Per-player move cap
        seed: Seed for reproducible batches

    Returns:
        PlayoutStats for the batch
    """
    rng = np.random.default_rng(seed)
    stats = PlayoutStats(players=players)

    for _ in range(players):
        solved, moves = play_once(state, rng, max_moves)
        if solved:
            stats.solved += 1
            stats.move_counts.append(moves)
        else:
            stats.stuck_at.append(moves)

    logger.debug(
        f"[Playout] {stats.solved}/{players} solved, "
        f"difficulty {stats.difficulty:.1f}"
    )
    return stats
