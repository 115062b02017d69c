"""Configuration package."""

from tipsplit.config.settings import (
    DEFAULT_TIP_PRESETS,
    AppSettings,
    LedgerDefaults,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "DEFAULT_TIP_PRESETS",
    "AppSettings",
    "LedgerDefaults",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
