"""Tests for configuration loading and validation."""

from dataclasses import replace
from decimal import Decimal

import pytest

from src.config import AppConfig, BusinessConfig, FlowConfig, ModelConfig, _validate_config


def _config(**sections) -> AppConfig:
    return replace(AppConfig(), **sections)


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        _validate_config(AppConfig())  # should not raise

    def test_invalid_temperature_too_high(self):
        config = _config(model=replace(ModelConfig(), llm_temperature=3.0))
        with pytest.raises(ValueError, match="LLM_TEMPERATURE"):
            _validate_config(config)

    def test_invalid_temperature_negative(self):
        config = _config(model=replace(ModelConfig(), llm_temperature=-0.5))
        with pytest.raises(ValueError, match="LLM_TEMPERATURE"):
            _validate_config(config)

    def test_assistant_timeout_must_be_positive(self):
        config = _config(model=replace(ModelConfig(), assistant_timeout_sec=0))
        with pytest.raises(ValueError, match="ASSISTANT_TIMEOUT_SEC"):
            _validate_config(config)

    def test_turn_timeout_covers_assistant_timeout(self):
        config = _config(
            model=replace(ModelConfig(), assistant_timeout_sec=20.0, turn_timeout_sec=10.0)
        )
        with pytest.raises(ValueError, match="TURN_TIMEOUT_SEC"):
            _validate_config(config)

    def test_negative_wage(self):
        config = _config(business=replace(BusinessConfig(), default_hourly_wage=Decimal("-1")))
        with pytest.raises(ValueError, match="DEFAULT_HOURLY_WAGE"):
            _validate_config(config)

    def test_unknown_timezone(self):
        config = _config(business=replace(BusinessConfig(), timezone="Mars/Olympus_Mons"))
        with pytest.raises(ValueError, match="TIMEZONE"):
            _validate_config(config)

    def test_forecast_days_at_least_one(self):
        config = _config(flows=replace(FlowConfig(), forecast_days=0))
        with pytest.raises(ValueError, match="FORECAST_DAYS"):
            _validate_config(config)

    @pytest.mark.parametrize("field, value, env_name", [
        ("onboarding_policy", "triple_done", "ONBOARDING_POLICY"),
        ("clock_in_policy", "average", "CLOCK_IN_POLICY"),
    ])
    def test_unknown_policy(self, field, value, env_name):
        config = _config(flows=replace(FlowConfig(), **{field: value}))
        with pytest.raises(ValueError, match=env_name):
            _validate_config(config)

    def test_port_range(self):
        with pytest.raises(ValueError, match="PORT"):
            _validate_config(_config(port=70000))


class TestEnvParsing:
    def test_safe_int_parsing(self):
        from src.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_float_parsing(self):
        from src.config import _safe_float

        assert _safe_float("NONEXISTENT_VAR_12345", "3.14") == pytest.approx(3.14)

    def test_safe_decimal_parsing(self):
        from src.config import _safe_decimal

        assert _safe_decimal("NONEXISTENT_VAR_12345", "14.50") == Decimal("14.50")

    def test_safe_decimal_rejects_garbage(self, monkeypatch):
        from src.config import _safe_decimal

        monkeypatch.setenv("TEST_WAGE_12345", "fourteen")
        with pytest.raises(ValueError, match="TEST_WAGE_12345"):
            _safe_decimal("TEST_WAGE_12345", "14.50")

    def test_safe_int_rejects_garbage(self, monkeypatch):
        from src.config import _safe_int

        monkeypatch.setenv("TEST_PORT_12345", "eighty")
        with pytest.raises(ValueError, match="TEST_PORT_12345"):
            _safe_int("TEST_PORT_12345", "3000")
