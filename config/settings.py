"""Logger settings loaded from environment variables and .env files.

Uses pydantic-settings for type-safe configuration. All environment variables
are prefixed with SVCLOG_ to avoid collisions.
"""

from pydantic_settings import BaseSettings


class LoggerSettings(BaseSettings):
    """Logger settings loaded from environment variables and .env files."""

    # Records
    severity: str = "info"
    mode: str | None = None

    # Identity
    service: str
    version: str

    model_config = {"env_prefix": "SVCLOG_", "env_file": ".env", "extra": "ignore"}
