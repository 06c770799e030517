"""
Configuration management for parcel.
Handles loading settings from environment variables and env files.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv
from loguru import logger

from parcel.exceptions import ConfigurationError


TRACKING_URL = "https://www.bing.com/packagetrackingv2?packNum={}&carrier={}"
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/116.0.0.0 Safari/537.36"
)
OUTPUT_FORMATS = ("json", "pickle")
STDOUT = "<stdout>"


@dataclass
class ParcelConfig:
    """Main configuration class for parcel."""

    # IANA zone name used for all timestamps; empty means system local
    timezone: str = ""

    # Upstream endpoint
    tracking_url: str = TRACKING_URL
    user_agent: str = USER_AGENT
    request_timeout: float = 5.0  # seconds

    # Output
    output_format: str = "json"

    # Logging
    log_level: str = "WARNING"
    log_file: str = ""

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ParcelConfig":
        """Load configuration from environment variables."""

        # Try to load from .env file
        if env_file:
            load_dotenv(env_file)
        else:
            # Try common locations
            for env_path in ["parcel.env", ".env", "../parcel.env"]:
                if Path(env_path).exists():
                    load_dotenv(env_path)
                    break

        raw_timeout = os.getenv("PARCEL_TIMEOUT", "5")
        try:
            request_timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"PARCEL_TIMEOUT must be a number of seconds, got {raw_timeout!r}",
                setting="PARCEL_TIMEOUT",
            ) from None

        return cls(
            timezone=os.getenv("PARCEL_TZ", ""),

            # Upstream
            tracking_url=os.getenv("PARCEL_URL", TRACKING_URL),
            user_agent=os.getenv("PARCEL_USER_AGENT", USER_AGENT),
            request_timeout=request_timeout,

            # Output
            output_format=os.getenv("PARCEL_FORMAT", "json").lower(),

            # Logging
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
            log_file=os.getenv("LOG_FILE", ""),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.output_format not in OUTPUT_FORMATS:
            errors.append(
                f"PARCEL_FORMAT must be one of {', '.join(OUTPUT_FORMATS)}, "
                f"got {self.output_format!r}"
            )
        if self.request_timeout <= 0:
            errors.append("PARCEL_TIMEOUT must be positive")
        if "{}" not in self.tracking_url:
            errors.append("PARCEL_URL must contain placeholders for number and carrier")
        try:
            logger.level(self.log_level)
        except ValueError:
            errors.append(f"LOG_LEVEL is not a known level, got {self.log_level!r}")

        return errors


# Global config instance
_config: Optional[ParcelConfig] = None


def init_config(env_file: Optional[str] = None) -> ParcelConfig:
    """Initialize configuration from environment."""
    global _config
    _config = ParcelConfig.from_env(env_file)
    return _config
