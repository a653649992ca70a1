"""Tests for config/: PricingConfig, the live config store, YAML and settings."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest
import yaml

from wasteops_pricing.config import PricingConfig, PricingConfigStore, Settings, load_pricing_config
from wasteops_pricing.errors import ConfigurationError, PricingValidationError

DEFAULTS_YAML = Path(__file__).parent.parent / "configs" / "pricing_defaults.yaml"


# ═══════════════════════════════════════════════════════════════════════════
# PricingConfig
# ═══════════════════════════════════════════════════════════════════════════

class TestPricingConfig:

    def test_defaults(self, config):
        assert config.target_margin == 0.35
        assert config.labor_rate_per_hour == 85
        assert config.premium_rules.walkout_premium_percent == 0.33
        assert config.volume_discounts.tier3.min_homes == 500

    def test_wire_round_trip(self, config):
        wire = config.to_wire()
        assert wire["laborRatePerHour"] == 85
        assert wire["premiumRules"]["gatedAccessSurcharge"] == 3.5
        assert PricingConfig.model_validate(wire) == config

    def test_rejects_margin_above_one(self):
        with pytest.raises(ValueError):
            PricingConfig(target_margin=1.5)


# ═══════════════════════════════════════════════════════════════════════════
# Store
# ═══════════════════════════════════════════════════════════════════════════

class TestPricingConfigStore:

    def test_get_returns_copy(self):
        store = PricingConfigStore()
        snapshot = store.get()
        snapshot.labor_rate_per_hour = 1
        assert store.get().labor_rate_per_hour == 85

    def test_update_snake_case(self):
        store = PricingConfigStore()
        updated = store.update({"labor_rate_per_hour": 60})
        assert updated.labor_rate_per_hour == 60
        assert store.get().labor_rate_per_hour == 60
        assert store.get().fuel_cost_per_mile == 0.65

    def test_update_camel_case(self):
        store = PricingConfigStore()
        store.update({"fuelCostPerMile": 0.9, "targetMargin": 0.4})
        current = store.get()
        assert current.fuel_cost_per_mile == 0.9
        assert current.target_margin == 0.4

    def test_update_is_shallow(self):
        # A partial nested section replaces the section; missing keys come
        # from the model defaults, not from the current value.
        store = PricingConfigStore()
        store.update({"premium_rules": {"walkout_premium_percent": 0.5, "gated_access_surcharge": 4.0}})
        store.update({"premium_rules": {"gated_access_surcharge": 5.0}})
        rules = store.get().premium_rules
        assert rules.gated_access_surcharge == 5.0
        assert rules.walkout_premium_percent == 0.33

    def test_invalid_update_leaves_config_unchanged(self):
        store = PricingConfigStore()
        store.update({"labor_rate_per_hour": 60})
        with pytest.raises(PricingValidationError) as exc_info:
            store.update({"labor_rate_per_hour": 70, "target_margin": 2.0})
        assert exc_info.value.message == "Invalid pricing configuration"
        assert exc_info.value.issues[0]["field"] == "target_margin"
        assert store.get().labor_rate_per_hour == 60

    def test_reset(self):
        store = PricingConfigStore()
        store.update({"labor_rate_per_hour": 60})
        assert store.reset() == PricingConfig()
        assert store.get() == PricingConfig()

    def test_reset_to_custom_defaults(self, low_cost_config):
        store = PricingConfigStore(low_cost_config)
        store.update({"labor_rate_per_hour": 99})
        assert store.reset().labor_rate_per_hour == 10
        assert store.defaults == low_cost_config

    def test_concurrent_updates_keep_every_field(self):
        store = PricingConfigStore()
        fields = [
            ("labor_rate_per_hour", 50.0),
            ("fuel_cost_per_mile", 0.8),
            ("equipment_cost_per_hour", 30.0),
            ("disposal_cost_per_ton", 50.0),
        ]
        threads = [threading.Thread(target=store.update, args=({k: v},)) for k, v in fields]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        current = store.get()
        for key, value in fields:
            assert getattr(current, key) == value


# ═══════════════════════════════════════════════════════════════════════════
# YAML loading
# ═══════════════════════════════════════════════════════════════════════════

class TestLoadPricingConfig:

    def test_shipped_defaults_match_model(self):
        assert load_pricing_config(DEFAULTS_YAML) == PricingConfig()

    def test_shipped_file_is_plain_yaml(self):
        with open(DEFAULTS_YAML) as f:
            data = yaml.safe_load(f)
        assert data["volume_discounts"]["tier2"]["min_homes"] == 250

    def test_partial_override(self, tmp_path):
        path = tmp_path / "override.yaml"
        path.write_text("labor_rate_per_hour: 70\npremium_rules:\n  gated_access_surcharge: 4.25\n")
        config = load_pricing_config(path)
        assert config.labor_rate_per_hour == 70
        assert config.premium_rules.gated_access_surcharge == 4.25
        assert config.disposal_cost_per_ton == 45

    def test_empty_file_is_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_pricing_config(path) == PricingConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_pricing_config(tmp_path / "nope.yaml")
        assert exc_info.value.status_code == 404

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            load_pricing_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("labor_rate_per_hour: -5\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_pricing_config(path)
        assert exc_info.value.status_code == 500
        assert exc_info.value.details[0]["field"] == "labor_rate_per_hour"


# ═══════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════

class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("CUSTOMERS_DATA_PATH", "PRICING_CONFIG_PATH", "API_PORT"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.customers_data_path == Path("data/geocoded_customers.json")
        assert settings.pricing_config_path is None
        assert settings.api_port == 8000

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CUSTOMERS_DATA_PATH", str(tmp_path / "c.json"))
        monkeypatch.setenv("PRICING_CONFIG_PATH", str(DEFAULTS_YAML))
        monkeypatch.setenv("API_PORT", "9100")
        settings = Settings(_env_file=None)
        assert settings.customers_data_path == tmp_path / "c.json"
        assert settings.pricing_config_path == DEFAULTS_YAML
        assert settings.api_port == 9100
