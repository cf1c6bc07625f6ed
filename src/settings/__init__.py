"""Configuration loading and logging setup."""

from settings.config import (
    ConfigError,
    ScriptAssistConfig,
    ThemeConfig,
    configure_logging,
    load_config,
)

__all__ = [
    "ConfigError",
    "ScriptAssistConfig",
    "ThemeConfig",
    "configure_logging",
    "load_config",
]
