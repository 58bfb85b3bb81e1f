"""
Strategy Factory Module - Registry and factory for strategy instantiation.
"""

from typing import Any, Dict, List, Optional, Type

from ..game.state import PuzzleState
from .base import SolverStrategy
from .context import DEFAULT_MAX_STATES, SolveContext
from .result import SolveResult


# Global registry of strategies
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Decorator to register a strategy class.

    Usage:
        @register_strategy
        class MyStrategy(SolverStrategy):
            name = "my_strategy"
            ...

    Args:
        cls: Strategy class to register

    Returns:
        The same class (for decorator chaining)
    """
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str, **kwargs: Any) -> SolverStrategy:
    """
    Create a strategy instance by name.

    Args:
        name: Strategy name (e.g., "bfs", "metrics")
        **kwargs: Additional arguments passed to strategy constructor

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name not found
    """
    if name not in _STRATEGIES:
        available = ", ".join(_STRATEGIES.keys())
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return _STRATEGIES[name](**kwargs)


def get_strategy_names() -> List[str]:
    """
    Get list of available strategy names.

    Returns:
        List of registered strategy names
    """
    return list(_STRATEGIES.keys())


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered strategies.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _STRATEGIES.values()
    ]


def get_default_strategy_name() -> str:
    """
    Get the default strategy name.

    Returns:
        Default strategy name ("bfs" if available, else first registered)
    """
    if "bfs" in _STRATEGIES:
        return "bfs"
    if _STRATEGIES:
        return next(iter(_STRATEGIES.keys()))
    return ""


def solve(state: PuzzleState, max_states: Optional[int] = None,
          strategy: Optional[str] = None, **kwargs: Any) -> SolveResult:
    """
    Solve a puzzle state with a registered strategy.

    Args:
        state: Puzzle to solve
        max_states: Exploration ceiling (defaults to DEFAULT_MAX_STATES)
        strategy: Strategy name (defaults to get_default_strategy_name())
        **kwargs: Strategy constructor arguments

    Returns:
        SolveResult
    """
    solver = create_strategy(strategy or get_default_strategy_name(), **kwargs)
    context = SolveContext(
        state=state,
        max_states=max_states if max_states is not None else DEFAULT_MAX_STATES,
    )
    return solver.solve(context)
