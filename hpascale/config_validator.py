"""
Configuration Validator
Validates environment variables and command-line configuration values
"""

import logging
import os

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("auto", "terminal", "plain")
LOG_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(ValueError):
    """Raised for invalid or missing configuration"""


class ConfigValidator:
    """Validate configuration values"""

    @staticmethod
    def validate_kubeconfig(path: str) -> str:
        """Validate kubeconfig path"""
        if not path:
            raise ConfigurationError("KUBECONFIG is required")
        if len(path) > 4096:
            raise ConfigurationError("KUBECONFIG path too long (max 4096 chars)")
        return os.path.expanduser(path.strip())

    @staticmethod
    def validate_gauge_width(width: str) -> int:
        """Validate gauge width"""
        try:
            value = int(width)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid GAUGE_WIDTH: {width}. Must be an integer") from e
        if value < 10:
            raise ConfigurationError(f"GAUGE_WIDTH must be at least 10, got {value}")
        if value > 200:
            raise ConfigurationError(f"GAUGE_WIDTH must be at most 200, got {value}")
        return value

    @staticmethod
    def validate_output_format(value: str) -> str:
        """Validate output format"""
        value = (value or "").strip().lower()
        if value not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid OUTPUT_FORMAT: {value}. Must be one of {', '.join(OUTPUT_FORMATS)}"
            )
        return value

    @staticmethod
    def validate_log_level(value: str) -> str:
        """Validate log level"""
        value = (value or "").strip().upper()
        if value not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid LOG_LEVEL: {value}. Must be one of {', '.join(LOG_LEVELS)}")
        return value

    @staticmethod
    def validate_log_format(value: str) -> str:
        """Validate log format"""
        value = (value or "").strip().lower()
        if value == "structured":
            return "json"
        if value not in LOG_FORMATS:
            raise ConfigurationError(f"Invalid LOG_FORMAT: {value}. Must be one of {', '.join(LOG_FORMATS)}")
        return value

    @staticmethod
    def validate_bool(value: str, name: str = "value") -> bool:
        """Validate a true/false flag"""
        normalized = (value or "").strip().lower()
        if normalized in ("true", "1", "yes"):
            return True
        if normalized in ("false", "0", "no", ""):
            return False
        raise ConfigurationError(f"Invalid {name}: {value}. Must be true or false")
