"""Configuration system for the Three Buckets engine.

This module provides Pydantic Settings-based configuration for the global
defaults an administrator maintains: the HECM lending limit, the default
line-of-credit growth rate, and the planning assumptions new scenarios
start from.

The calculation functions never read these settings. Callers resolve them
into explicit calculation inputs first (see ``records.build_calculation_input``).

Usage:
    from threebuckets_core.config import EngineSettings

    # Load from environment variables and .env file
    settings = EngineSettings()

    print(settings.hecm_lending_limit_cents)
    print(settings.loc_growth_rate_bps)
"""

import logging

import structlog
from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

ENVIRONMENTS = frozenset({"development", "staging", "production", "test"})

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class EngineSettings(BaseSettings):
    """Global settings for retirement cash-flow calculations.

    Environment Variables:
        THREEBUCKETS_ENV: Environment name (development, staging, production, test)
        THREEBUCKETS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        THREEBUCKETS_HECM_LENDING_LIMIT_CENTS: FHA lending limit in cents
        THREEBUCKETS_LOC_GROWTH_RATE_BPS: Default HECM LOC growth rate
        THREEBUCKETS_INFLATION_RATE_BPS: Default scenario inflation rate
        THREEBUCKETS_HOME_APPRECIATION_BPS: Default home appreciation rate
        THREEBUCKETS_PLANNING_HORIZON_AGE: Default planning horizon
        THREEBUCKETS_DEFAULT_BUCKET2_RATE_BPS: Nest egg rate used when a
            client has no accounts
    """

    model_config = SettingsConfigDict(
        env_prefix="THREEBUCKETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    hecm_lending_limit_cents: int = Field(
        default=120_975_000,
        gt=0,
        description="HECM maximum claim amount (FHA lending limit) in cents",
    )
    loc_growth_rate_bps: int = Field(
        default=600,
        ge=0,
        le=5000,
        description="Fallback LOC growth rate when a client has none of their own",
    )
    inflation_rate_bps: int = Field(
        default=300,
        ge=0,
        le=5000,
        description="Default annual inflation rate for new scenarios",
    )
    home_appreciation_bps: int = Field(
        default=400,
        ge=-5000,
        le=5000,
        description="Default annual home appreciation rate",
    )
    planning_horizon_age: int = Field(
        default=90,
        ge=62,
        le=120,
        description="Default age the longevity projection runs to",
    )
    default_bucket2_rate_bps: int = Field(
        default=600,
        description="Blended nest egg return used when no accounts exist",
    )

    @field_validator("env")
    @classmethod
    def normalize_env(cls, v: str) -> str:
        env = v.lower().strip()
        if env not in ENVIRONMENTS:
            raise ValueError(f"Unknown environment {v!r}; expected one of {sorted(ENVIRONMENTS)}")
        return env

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper().strip()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}; expected one of {list(LOG_LEVELS)}")
        return level

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def log_level_number(self) -> int:
        return LOG_LEVELS[self.log_level]


def configure_logging(settings: EngineSettings) -> None:
    """Drop structlog events below ``settings.log_level``.

    Engine modules call ``structlog.get_logger()`` at import time; loggers
    created that way pick up this configuration on first use.
    """
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_number),
        cache_logger_on_first_use=False,
    )


def load_settings(**overrides) -> EngineSettings:
    """Load settings from the environment, raising ConfigurationError on bad values."""
    try:
        return EngineSettings(**overrides)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(
            f"Invalid engine setting: {key}",
            config_key=f"THREEBUCKETS_{key.upper()}",
            expected=first["msg"],
            actual=first.get("input"),
        ) from e
