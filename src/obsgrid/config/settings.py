"""
Application settings using Pydantic.

Provides environment-based configuration loading with OBSGRID_ prefix.
"""

from functools import lru_cache
from typing import Literal

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from obsgrid.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings."""

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Layout: what to do with panels declared wider than the grid
    overflow_policy: Literal["tolerate", "clamp", "reject"] = "tolerate"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "OBSGRID_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_settings() -> Settings:
    """Get settings, reporting invalid values as a ConfigurationError."""
    try:
        return get_settings()
    except ValidationError as e:
        invalid = ", ".join(
            f"OBSGRID_{'_'.join(str(part) for part in err['loc']).upper()}" for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid settings: {invalid}",
            details={"errors": "; ".join(err["msg"] for err in e.errors())},
        ) from e
