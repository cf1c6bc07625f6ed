from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from errors import ScriptAssistError

CONFIG_FILENAME = "script-assist.toml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class ThemeConfig(BaseModel):
    """Hover colours, as six hex digits without the leading '#'."""

    model_config = ConfigDict(extra="forbid")

    predefined_type: str = Field(
        default="569CD6", description="Keywords such as int and string"
    )
    type: str = Field(default="4EC9B0", description="External class types")
    method: str = Field(default="DCDCAA", description="Method and function names")
    parameter: str = Field(default="9CDCFE", description="Parameter names")
    description: str = Field(default="D4D4D4", description="Everything else")

    @field_validator("*", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> Any:
        """Accept 'RRGGBB' or '#RRGGBB'; store without the hash."""
        if not isinstance(v, str):
            msg = "theme colours must be strings"
            raise ValueError(msg)
        color = v.removeprefix("#")
        if len(color) != 6 or not set(color) <= _HEX_DIGITS:
            msg = f"Invalid colour {v!r}; expected six hex digits"
            raise ValueError(msg)
        return color.upper()


class ScriptAssistConfig(BaseModel):
    """Configuration for the completion and hover providers."""

    model_config = ConfigDict(extra="forbid")

    position_base: Literal[0, 1] = Field(
        default=0,
        description="Index of the first line/column in cursors and ranges",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Threshold for the script-assist loggers",
    )
    theme: ThemeConfig = Field(
        default_factory=ThemeConfig,
        description="Hover text colours",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class ConfigError(ScriptAssistError):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> ScriptAssistConfig:
    """Load configuration from script-assist.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ScriptAssistConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ScriptAssistConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


def configure_logging(config: ScriptAssistConfig) -> None:
    """Route script-assist log records to stderr at the configured level."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ScriptAssistConfig",
    "ThemeConfig",
    "configure_logging",
    "load_config",
]
