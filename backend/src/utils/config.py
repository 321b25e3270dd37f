"""
Theme Park Wait Summary - Configuration Management
Reads settings from environment variables, with python-dotenv loading a local
.env file for development.
"""

import logging
import os
from typing import Optional
from dotenv import load_dotenv

# Load .env file for local development
load_dotenv()


class Config:
    """
    Configuration manager backed by the process environment.

    Typed getters never raise on malformed values; they log a warning and
    fall back to the supplied default instead.
    """

    def __init__(self):
        self.environment = os.getenv('ENVIRONMENT', 'local')

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Fetch configuration value from the environment.

        Args:
            key: Configuration key name
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return os.getenv(key, default)

    def get_int(self, key: str, default: int) -> int:
        """
        Get configuration value as integer.

        Args:
            key: Configuration key name
            default: Default value if key not found or conversion fails

        Returns:
            Integer value or default
        """
        value = self.get(key, str(default))
        try:
            return int(value)
        except (ValueError, TypeError) as e:
            logging.warning(
                f"Invalid integer for config key '{key}': '{value}'. "
                f"Using default={default}. Error: {e}"
            )
            return default

    def get_float(self, key: str, default: float) -> float:
        """Get configuration value as float, falling back to default."""
        value = self.get(key, str(default))
        try:
            return float(value)
        except (ValueError, TypeError) as e:
            logging.warning(
                f"Invalid float for config key '{key}': '{value}'. "
                f"Using default={default}. Error: {e}"
            )
            return default

    def get_bool(self, key: str, default: bool) -> bool:
        """
        Get configuration value as boolean.

        Args:
            key: Configuration key name
            default: Default value if key not found

        Returns:
            Boolean value or default
        """
        value = self.get(key, str(default))
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == 'production'

    @property
    def is_local(self) -> bool:
        """Check if running in local development environment."""
        return self.environment == 'local'


# Global configuration instance
config = Config()


# Logging configuration
LOG_LEVEL = config.get('LOG_LEVEL', 'INFO')

# Queue-time CSV feed (one file per park per calendar day)
FEED_BASE_URL = config.get(
    'FEED_BASE_URL',
    'https://bestnextridestack-bestnextridebucket135078ea-swjzevhnqjw9.s3.eu-west-1.amazonaws.com'
)
FEED_REQUEST_TIMEOUT_SECONDS = config.get_float('FEED_REQUEST_TIMEOUT_SECONDS', 10.0)

# 1 attempt = no automatic retry; the dashboard offers a manual refresh instead
FEED_FETCH_MAX_ATTEMPTS = config.get_int('FEED_FETCH_MAX_ATTEMPTS', 1)
FEED_RETRY_BACKOFF_MULTIPLIER = config.get_int('FEED_RETRY_BACKOFF_MULTIPLIER', 2)
