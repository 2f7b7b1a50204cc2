"""Tests for src/common/config_loader.py"""

import pytest

from src.common.config_loader import (
    load_automation_config,
    load_config,
    load_manage_shipping,
    load_pricing_tiers,
)


class TestLoadFromConfigFiles:
    """Tests that load real config YAML files from the repo."""

    def test_load_pricing_tiers_returns_list(self):
        tiers = load_pricing_tiers()
        assert isinstance(tiers, list)
        assert len(tiers) == 5

    def test_last_tier_is_open_ended(self):
        tiers = load_pricing_tiers()
        assert "up_to" not in tiers[-1]
        assert all("up_to" in tier for tier in tiers[:-1])

    def test_tier_values_are_quoted_strings(self):
        for tier in load_pricing_tiers():
            assert isinstance(tier["markup_percent"], str)
            if "up_to" in tier:
                assert isinstance(tier["up_to"], str)

    def test_manage_shipping_flag(self):
        assert load_manage_shipping() is True

    def test_load_automation_config(self):
        config = load_automation_config()
        assert config["max_attempts"] == 3
        assert config["default_timeout_ms"] == 30000

    def test_load_config_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent_file.yaml")
