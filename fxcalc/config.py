"""Configuration management for fxcalc."""
import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv
from fxcalc.utils.errors import ConfigurationError
from fxcalc.utils.logging import setup_logging
import logging

logger = logging.getLogger(__name__)


class Config:
    """Application configuration."""
    
    def __init__(self, config_path: str = "config.yaml", console_logging: bool = True):
        """
        Initialize configuration.
        
        Args:
            config_path: Path to YAML configuration file
            console_logging: Whether log records go to stderr as well as the log file
        """
        self.config_path = Path(config_path)
        self.console_logging = console_logging
        self._config: Dict[str, Any] = {}
        self._load()
    
    def _load(self) -> None:
        """Load configuration from YAML and environment."""
        load_dotenv()
        
        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")
        
        with open(self.config_path, 'r') as f:
            try:
                self._config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}")
        
        if not self._config:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")
        
        self._validate()
        
        log_config = self._config.get('logging', {})
        setup_logging(
            level=os.getenv('LOG_LEVEL', log_config.get('level', 'INFO')),
            log_file=log_config.get('file'),
            format_type=log_config.get('format', 'json'),
            enabled=log_config.get('enabled', True),
            console=self.console_logging
        )
        
        logger.info("Configuration loaded successfully")
    
    def _validate(self) -> None:
        """Validate required configuration sections."""
        required_sections = ['app', 'calculator']
        
        for section in required_sections:
            if section not in self._config:
                raise ConfigurationError(f"Missing required config section: {section}")
        
        rates = self._config.get('rates') or {}
        source = rates.get('source')
        if source is not None and source not in ('exchange_rate_host', 'text_feed', 'static'):
            raise ConfigurationError(f"Unknown rates.source: {source}")
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key.
        
        Args:
            key: Dot-separated key (e.g., "calculator.history_max_entries")
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
    
    @property
    def app_name(self) -> str:
        """Get application name."""
        return self.get('app.name', 'fxcalc')
    
    @property
    def app_version(self) -> str:
        """Get application version."""
        return self.get('app.version', '0.1.0')
    
    @property
    def debug(self) -> bool:
        """Get debug mode."""
        return self.get('app.debug', False)
    
    @property
    def database_path(self) -> str:
        """Get database path."""
        return self.get('database.path', 'data/fxcalc.db')


# Global config instance
_config: Optional[Config] = None


def load_config(config_path: str = "config.yaml", console_logging: bool = True) -> Config:
    """Load and return global configuration instance."""
    global _config
    if _config is None:
        _config = Config(config_path, console_logging=console_logging)
    return _config


def get_config() -> Config:
    """Get global configuration instance."""
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


def reset_config() -> None:
    """Forget the global configuration (used by tests)."""
    global _config
    _config = None
