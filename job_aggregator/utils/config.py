"""
Configuration management for the job aggregator.
"""

from pathlib import Path
from typing import Optional
import copy
import json
import os


class Config:
    """Manages application configuration and API keys."""

    DEFAULT_CONFIG = {
        "api_keys": {
            "serpapi": "",
            "rapidapi": "",
            "rapidapi_2": "",
            "rapidapi_3": "",
        },
        "search": {
            "request_timeout": 30,
            "default_limit": 20,
        },
        "lookup": {
            "min_request_interval": 30,
            "max_requests_per_key": 100,
            "cache_expiry": 3600,
            "request_timeout": 30,
        },
    }

    # Environment variables take precedence over the config file.
    API_KEY_ENV_VARS = {
        "serpapi": "SERPAPI_KEY",
        "rapidapi": "RAPIDAPI_LINKEDIN_KEY",
        "rapidapi_2": "RAPIDAPI_LINKEDIN_KEY_2",
        "rapidapi_3": "RAPIDAPI_LINKEDIN_KEY_3",
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file (default: ~/.job_aggregator/config.json)
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / ".job_aggregator" / "config.json"

        self.config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from file or fall back to defaults."""
        defaults = copy.deepcopy(self.DEFAULT_CONFIG)
        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                user_config = json.load(f)

            return self._deep_merge(defaults, user_config)

        return defaults

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def save(self) -> None:
        """Save current configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default=None):
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "lookup.cache_expiry")
            default: Default value if key not found
        """
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value) -> None:
        """Set a configuration value using dot notation."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_api_key(self, provider: str) -> str:
        """
        Get API key for a provider.

        Checks the provider's environment variable first (SERPAPI_KEY,
        RAPIDAPI_LINKEDIN_KEY, ...), then the config file.
        """
        env_var = self.API_KEY_ENV_VARS.get(provider, f"{provider.upper()}_API_KEY")
        env_value = os.environ.get(env_var)

        if env_value:
            return env_value

        return self.get(f"api_keys.{provider}", "")

    def set_api_key(self, provider: str, key: str) -> None:
        """Set API key for a provider."""
        self.set(f"api_keys.{provider}", key)
        self.save()

    def get_providers_config(self) -> dict:
        """Settings for the job aggregator's default providers."""
        return {
            "serpapi_api_key": self.get_api_key("serpapi"),
            "rapidapi_api_key": self.get_api_key("rapidapi"),
            "request_timeout": self.get("search.request_timeout", 30),
        }

    def get_lookup_keys(self) -> list[str]:
        """RapidAPI keys for the profile lookup, in rotation order."""
        keys = [self.get_api_key(name) for name in ("rapidapi", "rapidapi_2", "rapidapi_3")]
        return [key for key in keys if key]

    def get_lookup_settings(self) -> dict:
        """Profile lookup tunables, as ProfileLookupClient keyword arguments."""
        return {
            "min_request_interval": float(self.get("lookup.min_request_interval", 30)),
            "max_requests_per_key": int(self.get("lookup.max_requests_per_key", 100)),
            "cache_expiry": float(self.get("lookup.cache_expiry", 3600)),
            "timeout": float(self.get("lookup.request_timeout", 30)),
        }

    def get_default_limit(self) -> int:
        return int(self.get("search.default_limit", 20))

    def print_config(self) -> None:
        """Print current configuration (with API keys masked)."""
        masked_config = self._mask_sensitive(self.config)
        print(json.dumps(masked_config, indent=2))

    def _mask_sensitive(self, data: dict, sensitive_keys: set = None, masked: bool = False) -> dict:
        """Mask sensitive values in configuration."""
        if sensitive_keys is None:
            sensitive_keys = {"api_key", "api_keys", "secret", "password", "token"}

        result = {}
        for key, value in data.items():
            is_sensitive = masked or any(s in key.lower() for s in sensitive_keys)
            if isinstance(value, dict):
                result[key] = self._mask_sensitive(value, sensitive_keys, is_sensitive)
            elif is_sensitive:
                if value:
                    value = str(value)
                    result[key] = f"{value[:4]}...{value[-4:]}" if len(value) > 8 else "****"
                else:
                    result[key] = "(not set)"
            else:
                result[key] = value
        return result

    @classmethod
    def create_default_config(cls, path: str = None) -> 'Config':
        """Create a new config file with default values."""
        config = cls(path)
        config.save()
        return config
