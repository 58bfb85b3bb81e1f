"""
Level Worker Module for the watersort core

Provides a background thread that generates upcoming levels ahead of time
so that callers never wait on the solver when a level starts.
Communicates with callers through a request queue and a lock-protected cache.
"""

import logging
import queue
import threading
from typing import Dict, Iterable, List, Optional, Sequence, Set

import numpy as np

from .generator import DifficultyTier, GeneratorConfig, Level, LevelGenerator

# Configure module logger
logger = logging.getLogger(__name__)


class LevelPrefetcher(threading.Thread):
    """
    Background worker thread for level generation.

    Runs a loop that takes level numbers from a request queue, generates
    each one with an independent generator, and stores the result in a
    bounded cache.

    Seeds are derived per level from (base_seed, level_number), so a level
    is the same whichever thread or order produced it.

    Example:
        worker = LevelPrefetcher(base_seed=7)
        worker.start()
        worker.request(range(1, 4))
        level = worker.get(1, timeout=5.0)
        # ...
        worker.request_stop()
        worker.join()
    """

    POLL_INTERVAL_SEC = 0.1
    MAX_CACHED = 16

    def __init__(self, config: Optional[GeneratorConfig] = None,
                 tiers: Optional[Sequence[DifficultyTier]] = None,
                 base_seed: Optional[int] = None,
                 max_cached: int = MAX_CACHED):
        """
        Initialize the prefetcher.

        Args:
            config: Generation tuning passed to every generator
            tiers: Tier table passed to every generator
            base_seed: Root seed; None for non-reproducible levels
            max_cached: Maximum levels kept in the cache
        """
        super().__init__(name="LevelPrefetcher", daemon=True)
        self.config = config
        self.tiers = tiers
        self.base_seed = base_seed
        self.max_cached = max_cached

        self._stop_event = threading.Event()
        self._requests: "queue.Queue[int]" = queue.Queue()
        self._cache: Dict[int, Level] = {}
        self._pending: Set[int] = set()
        self._condition = threading.Condition()

    def run(self):
        """
        Main worker loop. Called when thread starts.

        Generates requested levels until request_stop() is called.
        """
        logger.info("Level prefetcher started")

        while not self._stop_event.is_set():
            try:
                level_number = self._requests.get(timeout=self.POLL_INTERVAL_SEC)
            except queue.Empty:
                continue

            try:
                self._process_request(level_number)
            except Exception:
                logger.exception(f"Error generating level {level_number}")
                with self._condition:
                    self._pending.discard(level_number)
                    self._condition.notify_all()

        logger.info("Level prefetcher stopped")

    def _process_request(self, level_number: int) -> None:
        """Generate one level unless it is already cached."""
        with self._condition:
            if level_number in self._cache:
                self._pending.discard(level_number)
                return

        level = self.generate_now(level_number)

        with self._condition:
            self._cache[level_number] = level
            self._pending.discard(level_number)
            # Evict the furthest-ahead level
            while len(self._cache) > self.max_cached:
                furthest = max(self._cache)
                del self._cache[furthest]
                logger.debug(f"Evicted level {furthest} from cache")
            self._condition.notify_all()

        logger.debug(f"Prefetched level {level_number}")

    def generate_now(self, level_number: int) -> Level:
        """
        Generate a level synchronously with its derived seed.

        Args:
            level_number: Level to generate

        Returns:
            Generated Level
        """
        generator = LevelGenerator(
            config=self.config,
            tiers=self.tiers,
            rng=self._rng_for(level_number),
        )
        return generator.generate(level_number)

    def _rng_for(self, level_number: int) -> np.random.Generator:
        if self.base_seed is None:
            return np.random.default_rng()
        return np.random.default_rng(np.random.SeedSequence([self.base_seed, level_number]))

    def request(self, level_numbers: Iterable[int]) -> None:
        """
        Queue levels for background generation.

        Args:
            level_numbers: Levels to generate (already cached or pending ones are skipped)
        """
        with self._condition:
            if self._stop_event.is_set():
                logger.debug("Ignoring request, prefetcher is stopped")
                return
            for level_number in level_numbers:
                if level_number in self._cache or level_number in self._pending:
                    continue
                self._pending.add(level_number)
                self._requests.put(level_number)

    def get(self, level_number: int, timeout: Optional[float] = None) -> Optional[Level]:
        """
        Take a level from the cache, waiting for it if it is pending.

        Args:
            level_number: Level to fetch
            timeout: Seconds to wait (None = wait indefinitely)

        Returns:
            Level, or None if it is neither cached nor ready within timeout,
            or the worker stopped before producing it
        """
        with self._condition:
            ready = self._condition.wait_for(
                lambda: (level_number in self._cache
                         or level_number not in self._pending
                         or self._stop_event.is_set()),
                timeout=timeout,
            )
            if not ready:
                return None
            return self._cache.pop(level_number, None)

    def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Block until no requested level is still pending.

        Args:
            timeout: Seconds to wait (None = wait indefinitely)

        Returns:
            True if idle, False on timeout
        """
        with self._condition:
            return self._condition.wait_for(
                lambda: not self._pending or self._stop_event.is_set(),
                timeout=timeout,
            )

    def cached_levels(self) -> List[int]:
        """Level numbers currently in the cache, ascending."""
        with self._condition:
            return sorted(self._cache)

    def request_stop(self):
        """
        Request the worker to stop gracefully.

        Queued requests are dropped and waiting get() calls are released.
        The worker will finish the level it is generating before stopping.
        Use join() after calling this to block until stopped.
        """
        logger.info("Stop requested")
        with self._condition:
            self._stop_event.set()
            self._pending.clear()
            while True:
                try:
                    self._requests.get_nowait()
                except queue.Empty:
                    break
            self._condition.notify_all()

    def is_running(self) -> bool:
        """
        Check if the worker is currently running.

        Returns:
            True if worker loop is active, False otherwise
        """
        return self.is_alive() and not self._stop_event.is_set()
