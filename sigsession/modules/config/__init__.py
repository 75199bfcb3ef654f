"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: get_config(), ConfigModule.get(), ConfigModule.get_config_schema()
Hidden: Config sources, validation logic, environment parsing

Can be replaced with different config systems (Consul, etcd, AWS Parameter Store).
"""

import os
from typing import Any, Dict, List, Optional


# Configuration Contract: Required and Optional Keys
# This defines the black box interface - what the config module guarantees to provide

REQUIRED_CONFIG_KEYS = {
    "redis_host": "Redis server hostname",
    "redis_port": "Redis server port number",
    "redis_db": "Redis database number",
    "host": "API server bind address",
    "port": "API server port",
    "log_level": "Logging level (DEBUG, INFO, WARNING, ERROR)",
}

OPTIONAL_CONFIG_KEYS = {
    "redis_password": {
        "description": "Redis authentication password",
        "default": None,
    },
    "debug": {
        "description": "Enable debug mode (uvicorn auto-reload)",
        "default": False,
    },
    "cors_origins": {
        "description": "Origins allowed by CORS, comma separated in CORS_ORIGINS",
        "default": ["*"],
    },
}


def _parse_port(value: str, name: str) -> int:
    """Parse a port number, accepting the tcp://host:port form Kubernetes injects."""
    if value.startswith("tcp://"):
        value = value.split(":")[-1]
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer port, got {value!r}") from None


def _parse_origins(value: Optional[str]) -> List[str]:
    if not value:
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class ConfigModule:
    """Configuration management module."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        """
        Initialize from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (used by tests)
        """
        self._environ = os.environ if environ is None else environ
        self._config = self._load_from_env()
        self._validate_required_keys()

    def _getenv(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(key, default)

    def _validate_required_keys(self) -> None:
        """
        Validate that all required configuration keys are present.

        Raises:
            ValueError: If required keys are missing
        """
        missing_keys = []
        for key in REQUIRED_CONFIG_KEYS:
            if key not in self._config or self._config[key] in (None, ""):
                missing_keys.append(key)

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}. "
                f"Check environment variables and deployment configuration."
            )

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment."""
        redis_db = self._getenv("REDIS_DB", "0")
        try:
            redis_db_number = int(redis_db)
        except ValueError:
            raise ValueError(f"REDIS_DB must be an integer, got {redis_db!r}") from None

        # API_PORT wins over the bare PORT variable set by most PaaS hosts
        api_port = self._getenv("API_PORT") or self._getenv("PORT", "4000")

        return {
            # Redis settings
            "redis_host": self._getenv("REDIS_HOST", "127.0.0.1"),
            "redis_port": _parse_port(self._getenv("REDIS_PORT", "6379"), "REDIS_PORT"),
            "redis_db": redis_db_number,
            "redis_password": self._getenv("REDIS_PASSWORD") or None,
            # API settings
            "host": self._getenv("API_HOST", "0.0.0.0"),
            "port": _parse_port(api_port, "API_PORT"),
            "log_level": self._getenv("LOG_LEVEL", "INFO").upper(),
            "debug": self._getenv("DEBUG", "false").lower() == "true",
            "cors_origins": _parse_origins(self._getenv("CORS_ORIGINS")),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        self._config[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return self._config.copy()

    @property
    def redis_url(self) -> str:
        """Redis URL without the password (passed separately to avoid URL encoding issues)."""
        return f"redis://{self.get('redis_host')}:{self.get('redis_port')}/{self.get('redis_db')}"

    @staticmethod
    def get_config_schema() -> Dict[str, Any]:
        """
        Get the configuration schema (contract) for this module.

        Returns:
            Dictionary with 'required' and 'optional' key specifications

        Example:
            >>> schema = ConfigModule.get_config_schema()
            >>> print(schema['required']['redis_host'])
            Redis server hostname
        """
        return {
            "required": REQUIRED_CONFIG_KEYS.copy(),
            "optional": OPTIONAL_CONFIG_KEYS.copy(),
        }


# Singleton instance
_instance = None


def get_config() -> ConfigModule:
    """Get the configuration module singleton."""
    global _instance
    if _instance is None:
        _instance = ConfigModule()
    return _instance


def reset_config() -> None:
    """Drop the singleton so the next get_config() re-reads the environment."""
    global _instance
    _instance = None


__all__ = ["get_config", "reset_config", "ConfigModule"]
