"""
Configuration Management for Tip 'n Split

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger defaults a new session starts from and the presentation
settings (currency, picker range, logging) are validated at startup.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TIP_PRESETS = [
    Decimal("0"),
    Decimal("0.15"),
    Decimal("0.18"),
    Decimal("0.20"),
    Decimal("0.25"),
]


class LedgerDefaults(BaseSettings):
    """Starting values for a new ledger."""

    model_config = SettingsConfigDict(
        env_prefix="TIPSPLIT_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    subtotal: Decimal = Field(
        default=Decimal("10"),
        ge=0,
        description="Pre-tax bill amount"
    )
    tax: Decimal = Field(
        default=Decimal("2"),
        ge=0,
        description="Tax amount in the same currency unit"
    )
    tip_on_tax: bool = Field(
        default=False,
        description="Whether the tip base includes tax"
    )
    tip_percentage: Decimal = Field(
        default=Decimal("0.20"),
        ge=0,
        description="Tip as a fraction (0.20 for 20%)"
    )
    split_count: int = Field(
        default=1,
        ge=1,
        description="Number of people sharing the bill"
    )
    tip_presets: list[Decimal] = Field(
        default_factory=lambda: list(DEFAULT_TIP_PRESETS),
        description="Tip percentages offered as one-tap presets"
    )

    @field_validator('tip_presets')
    @classmethod
    def validate_tip_presets(cls, v: list[Decimal]) -> list[Decimal]:
        """Presets must be non-negative fractions."""
        for preset in v:
            if preset < 0:
                raise ValueError(f"Tip preset cannot be negative: {preset}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TIPSPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for structured logging"
    )

    # Presentation
    currency_code: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO 4217 code used to format amounts"
    )
    max_split_count: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Largest party size offered by the split picker"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unknown log level: {v}. Allowed: {sorted(allowed)}")
        return v.upper()

    @field_validator('currency_code')
    @classmethod
    def normalize_currency_code(cls, v: str) -> str:
        return v.upper()

    @property
    def effective_log_level(self) -> str:
        """Log level to apply; debug mode forces DEBUG."""
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Loaded lazily so one broken section does not hide the others

    @property
    def ledger(self) -> LedgerDefaults:
        return LedgerDefaults()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {section_name: is_valid}, plus
    {section_name}_error for each failing section.
    Useful for startup checks.
    """
    results: dict[str, object] = {}

    settings = get_settings()

    for name in ("ledger", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
