"""
Settings Module for the watersort core

Provides persistent storage for generation and solver tuning using JSON.
Settings are stored in config.json in the working directory unless a
path is given. The difficulty-tier table lives here so it can be swapped
without touching code.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default tier progression (levels up to max_level use the tier)
DEFAULT_TIER_TABLE = [
    {"name": "intro", "max_level": 3, "colors": 3, "tubes_per_color": 2,
     "empty_tubes": 1, "locked_fraction": 0.0},
    {"name": "warmup", "max_level": 4, "colors": 4, "tubes_per_color": 2,
     "empty_tubes": 1, "locked_fraction": 0.0},
    {"name": "hidden", "max_level": 8, "colors": 4, "tubes_per_color": 2,
     "empty_tubes": 1, "locked_fraction": 0.15},
    {"name": "five", "max_level": 18, "colors": 5, "tubes_per_color": 2,
     "empty_tubes": 2, "locked_fraction": 0.25},
    {"name": "five_deep", "max_level": 30, "colors": 5, "tubes_per_color": 3,
     "empty_tubes": 2, "locked_fraction": 0.35},
    {"name": "six", "max_level": 50, "colors": 6, "tubes_per_color": 3,
     "empty_tubes": 2, "locked_fraction": 0.45},
    {"name": "six_deep", "max_level": 75, "colors": 6, "tubes_per_color": 4,
     "empty_tubes": 2, "locked_fraction": 0.55},
    {"name": "seven", "max_level": 105, "colors": 7, "tubes_per_color": 4,
     "empty_tubes": 2, "locked_fraction": 0.65},
    {"name": "master", "max_level": None, "colors": 7, "tubes_per_color": 5,
     "empty_tubes": 3, "locked_fraction": 0.75},
]

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "capacity": 4,
    "solver_strategy": "bfs",
    "max_states": 100_000,
    "feasible_filled_tubes": 8,
    "min_par": 3,
    "max_attempts_solved": 50,
    "max_attempts_unsolved": 20,
    "tiers": DEFAULT_TIER_TABLE,
}


def default_settings() -> Dict[str, Any]:
    """Fresh copy of the defaults (safe to mutate)."""
    return copy.deepcopy(DEFAULT_SETTINGS)


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (defaults to config.json)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE

    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return default_settings()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError(f"expected a JSON object, got {type(settings).__name__}")

        # Merge with defaults to handle missing keys
        result = default_settings()
        result.update(settings)
        logger.debug(f"Settings loaded from {settings_file}")
        return result

    except (json.JSONDecodeError, ValueError, OSError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return default_settings()


def save_settings(settings: Dict[str, Any], path: Optional[Union[str, Path]] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to config.json)
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved to {settings_file}")
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")
