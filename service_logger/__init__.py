"""Service logger — severity-gated structured logging in pretty or production mode."""

from routing.errors import InvalidConfiguration
from service_logger.factory import ServiceLogger, create_logger, create_logger_from_settings

__all__ = ["InvalidConfiguration", "ServiceLogger", "create_logger", "create_logger_from_settings"]
