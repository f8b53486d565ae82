"""Global configuration for TeachLang.

Settings can be overridden via environment variables or explicit configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class TeachLangConfig:
    """Top-level configuration for the TeachLang tools."""

    # Logging
    log_level: str = "WARNING"

    # Command line output
    show_tokens: bool = False
    color: bool = True

    # Source files
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> TeachLangConfig:
        """Build config from environment variables, falling back to defaults."""
        config = cls()

        if val := os.environ.get("TEACHLANG_LOG_LEVEL"):
            config.log_level = val.upper()
        if val := os.environ.get("TEACHLANG_SHOW_TOKENS"):
            config.show_tokens = _env_flag(val)
        if val := os.environ.get("TEACHLANG_COLOR"):
            config.color = _env_flag(val)
        if val := os.environ.get("TEACHLANG_ENCODING"):
            config.encoding = val

        return config


# Module-level singleton
_config: TeachLangConfig | None = None


def get_config() -> TeachLangConfig:
    """Return the global TeachLang config, lazily initialized from env."""
    global _config
    if _config is None:
        _config = TeachLangConfig.from_env()
    return _config


def set_config(config: TeachLangConfig | None) -> None:
    """Override the global config (useful in tests); None re-reads the environment."""
    global _config
    _config = config
