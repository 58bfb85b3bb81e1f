"""
Tests for JSON settings persistence and the config objects built from it.
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from watersort.generator import DEFAULT_TIERS, GeneratorConfig, tiers_from_settings
from watersort.settings import DEFAULT_SETTINGS, default_settings, load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "absent.json") == DEFAULT_SETTINGS


def test_partial_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"max_states": 500, "min_par": 5}), encoding="utf-8")

    settings = load_settings(path)

    assert settings["max_states"] == 500
    assert settings["min_par"] == 5
    assert settings["capacity"] == DEFAULT_SETTINGS["capacity"]
    assert settings["tiers"] == DEFAULT_SETTINGS["tiers"]


def test_invalid_json_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_non_object_json_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_save_then_load(tmp_path):
    path = tmp_path / "config.json"
    settings = default_settings()
    settings["solver_strategy"] = "metrics"
    settings["tiers"] = settings["tiers"][:2]

    save_settings(settings, path)

    assert load_settings(path) == settings


def test_default_settings_is_a_copy():
    settings = default_settings()
    settings["tiers"].clear()
    assert DEFAULT_SETTINGS["tiers"]


def test_generator_config_from_settings():
    assert GeneratorConfig.from_settings(DEFAULT_SETTINGS) == GeneratorConfig()

    config = GeneratorConfig.from_settings({"max_states": "250", "feasible_filled_tubes": 6})
    assert config.max_states == 250
    assert config.feasible_filled_tubes == 6
    assert config.min_par == DEFAULT_SETTINGS["min_par"]


def test_tier_table_round_trips_through_settings(tmp_path):
    path = tmp_path / "config.json"
    settings = default_settings()
    settings["tiers"] = [tier.to_dict() for tier in DEFAULT_TIERS]
    save_settings(settings, path)

    assert tiers_from_settings(load_settings(path)) == DEFAULT_TIERS
