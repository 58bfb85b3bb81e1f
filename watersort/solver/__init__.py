"""
Solver Package - Bounded search over the pour graph.

This package decides whether a puzzle is solvable and, if so, its par
(minimum number of pours). Strategies are pluggable and selected by name.

Public API:
    - SolveOutcome: SOLVABLE / UNSOLVABLE / INDETERMINATE
    - SolveResult: Outcome, par, optimal path and metrics
    - SolveMetrics: Search statistics
    - SolveContext: Ceiling, cancellation and progress for a run
    - SolverStrategy: Abstract base for strategies
    - solve(): One-call convenience wrapper
    - create_strategy(): Factory function
    - get_strategy_names(): List available strategies
    - get_strategy_info(): Get strategy metadata
    - simulate_random_players(): Random-player difficulty estimate

Usage:
    from watersort.solver import solve, SolveOutcome

    result = solve(state, max_states=100_000)
    if result.outcome is SolveOutcome.SOLVABLE:
        print(f"par {result.par}: {[str(m) for m in result.moves]}")
    elif result.is_indeterminate:
        print("too large to verify")
"""

# Core data structures
from .result import SolveOutcome, SolveResult, SolveMetrics
from .context import SolveContext, DEFAULT_MAX_STATES

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
    solve,
)
from .playout import PlayoutStats, simulate_random_players

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "SolveOutcome",
    "SolveResult",
    "SolveMetrics",
    "SolveContext",
    "DEFAULT_MAX_STATES",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    "solve",
    # Playout
    "PlayoutStats",
    "simulate_random_players",
]
