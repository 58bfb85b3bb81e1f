"""
Solve Context Module - Shared context for strategy execution.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..game.state import PuzzleState

DEFAULT_MAX_STATES = 100_000


@dataclass
class SolveContext:
    """
    Shared context passed to strategies containing the puzzle, the
    exploration ceiling, cancellation, and progress reporting.

    Attributes:
        state: Initial puzzle state to solve
        max_states: Ceiling on distinct visited states
        cancel_flag: Threading event for cancellation
        timeout_sec: Optional wall-clock limit in seconds (None = no limit)
        start_time: When computation started
        progress_callback: Optional callback for progress updates
    """
    state: PuzzleState
    max_states: int = DEFAULT_MAX_STATES
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if strategy should stop execution
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and time.time() - self.start_time > self.timeout_sec:
            return True
        return False

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)

    def elapsed_time(self) -> float:
        """Seconds elapsed since computation started."""
        return time.time() - self.start_time
