"""Runtime settings for the validator server and command line.

All settings are read from environment variables; command-line flags take
precedence where both exist.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_SERVER_NAME = "plugin-validator"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """Validator settings."""

    log_level: str = DEFAULT_LOG_LEVEL
    server_name: str = DEFAULT_SERVER_NAME

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables."""
        return cls(
            log_level=os.environ.get("PLUGIN_VALIDATOR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            server_name=os.environ.get("PLUGIN_VALIDATOR_SERVER_NAME", DEFAULT_SERVER_NAME),
        )

    @property
    def log_level_number(self) -> int:
        """Numeric logging level, falling back to WARNING for unknown names."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING
