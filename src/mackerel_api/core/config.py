import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

from .exceptions import ConfigurationError
from .utils import merge_dicts

if TYPE_CHECKING:
    from ..utils.api.api_client import APIConfig

ENV_PREFIX = "MACKEREL_"
DEFAULT_BASE_URL = "https://api.mackerelio.com/"
DEFAULT_TIMEOUT = 30.0

_ENV_ALIASES = {
    "MACKEREL_APIKEY": "api.api_key",
    "MACKEREL_API_KEY": "api.api_key",
}

# Values under these keys are never coerced to numbers or booleans
_STRING_KEYS = {"api.api_key", "api.user_agent", "api.base_url"}

class Config:
    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = {}
        self._load_defaults()
        self._load_environment_variables()
        if config_path:
            self.load(config_path)
        self.validate(self._config)

    def _load_defaults(self) -> None:
        """Load default configuration values"""
        self._config = {
            "api": {
                "base_url": DEFAULT_BASE_URL,
                "api_key": "",
                "verbose": False,
                "user_agent": "",
                "timeout": DEFAULT_TIMEOUT,
                "headers": {}
            },
            "logging": {
                "level": "INFO",
                "file": None,
                "console_output": False,
                "max_size": 1024 * 1024,
                "backup_count": 3
            }
        }

    def load(self, path: Path) -> None:
        """Load configuration from JSON file"""
        try:
            with open(path, 'r') as f:
                file_config = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {str(e)}")
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")
        self.update(file_config)

    def save(self, path: Path) -> None:
        """Save configuration to JSON file"""
        with open(path, 'w') as f:
            json.dump(self._config, f, indent=2)

    def _load_environment_variables(self) -> None:
        """Load configuration from environment variables"""
        for key, value in os.environ.items():
            if key in _ENV_ALIASES:
                self.set(_ENV_ALIASES[key], value)
            elif key.startswith(ENV_PREFIX):
                # Convert MACKEREL_API_BASE_URL to api.base_url
                parts = key[len(ENV_PREFIX):].lower().split('_')

                if len(parts) > 2:
                    config_key = f"{parts[0]}.{'_'.join(parts[1:])}"
                else:
                    config_key = '.'.join(parts)

                if config_key in _STRING_KEYS:
                    self.set(config_key, value)
                else:
                    self.set(config_key, self._convert_value(value))

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot notation key"""
        try:
            value = self._config
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dot notation key"""
        keys = key.split('.')
        d = self._config
        for k in keys[:-1]:
            if not isinstance(d.get(k), dict):
                d[k] = {}
            d = d[k]
        d[keys[-1]] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration with dictionary"""
        self._config = merge_dicts(self._config, config_dict)

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        api_config = config.get("api", {})
        timeout = api_config.get("timeout")
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigurationError("api.timeout must be a positive number")
        headers = api_config.get("headers")
        if headers is not None and not isinstance(headers, dict):
            raise ConfigurationError("api.headers must be a mapping")

        level = config.get("logging", {}).get("level")
        if level is not None and not isinstance(logging.getLevelName(str(level).upper()), int):
            raise ConfigurationError(f"Invalid log level: {level}")

    def api_config(self, logger: Optional[logging.Logger] = None) -> "APIConfig":
        """Build the API client configuration from the 'api' section"""
        from ..utils.api.api_client import APIConfig

        self.validate(self._config)
        headers = {}
        for name, values in (self.get("api.headers") or {}).items():
            if isinstance(values, (list, tuple)):
                headers[name] = [str(v) for v in values]
            else:
                headers[name] = [str(values)]

        return APIConfig(
            base_url=str(self.get("api.base_url", DEFAULT_BASE_URL)),
            api_key=str(self.get("api.api_key", "")),
            verbose=bool(self.get("api.verbose", False)),
            user_agent=str(self.get("api.user_agent") or ""),
            default_headers=headers,
            timeout=float(self.get("api.timeout", DEFAULT_TIMEOUT)),
            logger=logger
        )

    @staticmethod
    def _convert_value(value: str) -> Any:
        """Convert string value to appropriate type"""
        # Handle boolean values
        if value.lower() == "true":
            return True
        if value.lower() == "false":
            return False

        # Handle numeric values
        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            # If not a number, return as string
            return value
