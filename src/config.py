"""
Centralized configuration with environment variable overrides.

All business-specific values, flow policies, and model settings are
configurable here. Nothing is hardcoded in flow or router logic.
"""

import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from src.logging_context import SenderIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

ONBOARDING_POLICIES = ("single_done", "double_done")
CLOCK_IN_POLICIES = ("overwrite", "keep_first")
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [%(sender_id)s]: %(message)s"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_decimal(env_var: str, default: str) -> Decimal:
    """Parse a money amount from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return Decimal(raw)
    except (InvalidOperation, TypeError):
        raise ValueError(
            f"Invalid decimal for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Restaurant-specific settings loaded from environment or defaults."""

    name: str = os.getenv("BUSINESS_NAME", "Pescobar")
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "£")
    timezone: str = os.getenv("TIMEZONE", "Europe/London")
    default_hourly_wage: Decimal = _safe_decimal("DEFAULT_HOURLY_WAGE", "14.50")
    handbook_url: str = os.getenv("HANDBOOK_URL", "https://pescobar.example/handbook")


@dataclass(frozen=True)
class ModelConfig:
    """Text assistant model settings."""

    llm_model: str = os.getenv("LLM_MODEL", "gpt-4o")
    llm_temperature: float = _safe_float("LLM_TEMPERATURE", "0.3")
    assistant_timeout_sec: float = _safe_float("ASSISTANT_TIMEOUT_SEC", "15.0")
    turn_timeout_sec: float = _safe_float("TURN_TIMEOUT_SEC", "25.0")


@dataclass(frozen=True)
class FlowConfig:
    """Policies for the multi-step flows."""

    forecast_days: int = _safe_int("FORECAST_DAYS", "3")
    onboarding_policy: str = os.getenv("ONBOARDING_POLICY", "single_done")
    clock_in_policy: str = os.getenv("CLOCK_IN_POLICY", "overwrite")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    flows: FlowConfig = field(default_factory=FlowConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _safe_int("PORT", "3000")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not 0.0 <= config.model.llm_temperature <= 2.0:
        raise ValueError(
            f"LLM_TEMPERATURE must be between 0.0 and 2.0, got {config.model.llm_temperature}"
        )
    if config.model.assistant_timeout_sec <= 0:
        raise ValueError(
            f"ASSISTANT_TIMEOUT_SEC must be > 0, got {config.model.assistant_timeout_sec}"
        )
    if config.model.turn_timeout_sec < config.model.assistant_timeout_sec:
        raise ValueError(
            "TURN_TIMEOUT_SEC must be >= ASSISTANT_TIMEOUT_SEC, "
            f"got {config.model.turn_timeout_sec}"
        )
    if config.business.default_hourly_wage < 0:
        raise ValueError(
            f"DEFAULT_HOURLY_WAGE must be >= 0, got {config.business.default_hourly_wage}"
        )
    try:
        ZoneInfo(config.business.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown TIMEZONE: {config.business.timezone!r}") from None
    if config.flows.forecast_days < 1:
        raise ValueError(
            f"FORECAST_DAYS must be >= 1, got {config.flows.forecast_days}"
        )
    if config.flows.onboarding_policy not in ONBOARDING_POLICIES:
        raise ValueError(
            f"ONBOARDING_POLICY must be one of {ONBOARDING_POLICIES}, "
            f"got {config.flows.onboarding_policy!r}"
        )
    if config.flows.clock_in_policy not in CLOCK_IN_POLICIES:
        raise ValueError(
            f"CLOCK_IN_POLICY must be one of {CLOCK_IN_POLICIES}, "
            f"got {config.flows.clock_in_policy!r}"
        )
    if not 1 <= config.port <= 65535:
        raise ValueError(f"PORT must be between 1 and 65535, got {config.port}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, SenderIdFilter) for f in handler.filters):
            handler.addFilter(SenderIdFilter())
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
