"""Configuration management for Forex Sage."""
import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv
from src.utils.errors import ConfigurationError
from src.utils.logging import setup_logging
import logging

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"


class Config:
    """Application configuration."""

    def __init__(self, config_path: str = "config.yaml", configure_logging: bool = True):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file
            configure_logging: Apply the ``logging`` section on load
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load(configure_logging)

    def _load(self, configure_logging: bool) -> None:
        """Load configuration from YAML and environment."""
        load_dotenv()

        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            self._config = yaml.safe_load(f)

        if not self._config:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")

        self._validate()

        if configure_logging:
            log_config = self._config.get('logging', {})
            setup_logging(
                level=os.getenv('LOG_LEVEL', log_config.get('level', 'INFO')),
                log_file=log_config.get('file'),
                format_type=log_config.get('format', 'json'),
                enabled=log_config.get('enabled', True)
            )

        logger.info("Configuration loaded successfully")

    def _validate(self) -> None:
        """Validate required configuration sections."""
        for section in ('app', 'api'):
            if section not in self._config:
                raise ConfigurationError(f"Missing required config section: {section}")

        if 'alpha_vantage' not in self._config['api']:
            raise ConfigurationError("Missing api.alpha_vantage in config")

        for key in ('current_price_ttl', 'historical_ttl'):
            value = self.get(f'cache.{key}')
            if value is not None and (not isinstance(value, (int, float)) or value <= 0):
                raise ConfigurationError(f"cache.{key} must be a positive number of seconds")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "api.alpha_vantage.timeout")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get environment variable."""
        return os.getenv(key, default)

    def require_env(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key)
        if value is None:
            raise ConfigurationError(f"Required environment variable not set: {key}")
        return value

    @property
    def app_name(self) -> str:
        return self.get('app.name', 'Forex Sage')

    @property
    def app_version(self) -> str:
        return self.get('app.version', '0.1.0')

    @property
    def debug(self) -> bool:
        return self.get('app.debug', False)

    @property
    def alpha_vantage_base_url(self) -> str:
        return self.get('api.alpha_vantage.base_url', DEFAULT_BASE_URL)

    @property
    def alpha_vantage_timeout(self) -> float:
        return float(self.get('api.alpha_vantage.timeout', 10))

    @property
    def alpha_vantage_api_key(self) -> str:
        """API key; ALPHA_VANTAGE_API_KEY in the environment wins over the file."""
        key = os.getenv('ALPHA_VANTAGE_API_KEY') or self.get('api.alpha_vantage.api_key')
        if not key:
            raise ConfigurationError(
                "Alpha Vantage requires an API key (set ALPHA_VANTAGE_API_KEY)"
            )
        return key

    @property
    def current_price_ttl(self) -> float:
        return float(self.get('cache.current_price_ttl', 300))

    @property
    def historical_ttl(self) -> float:
        return float(self.get('cache.historical_ttl', 3600))

    @property
    def database_path(self) -> str:
        return self.get('database.path', 'data/forex_sage.db')


# Global config instance
_config: Optional[Config] = None


def load_config(config_path: str = "config.yaml") -> Config:
    """Load and return global configuration instance."""
    global _config
    if _config is None:
        _config = Config(config_path)
    return _config


def get_config() -> Config:
    """Get global configuration instance."""
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


def reset_config() -> None:
    """Forget the global configuration (used by tests and the CLI)."""
    global _config
    _config = None
