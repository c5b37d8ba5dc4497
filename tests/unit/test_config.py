"""Tests for configuration module."""
import pytest
from fxcalc.config import Config, get_config, load_config
from fxcalc.calculator.config import CalculatorSettings, Precision
from fxcalc.utils.errors import ConfigurationError


def test_config_load(temp_config_file):
    """Test basic config loading."""
    config = Config(temp_config_file)
    assert config.app_name == 'Test App'
    assert config.app_version == '0.1.0'
    assert config.debug is True


def test_config_get_nested(temp_config_file):
    """Test getting nested config values."""
    config = Config(temp_config_file)
    assert config.get('calculator.currency_a') == 'IDR'
    assert config.get('calculator.precision.b') == 3


def test_config_get_default(temp_config_file):
    """Test default values."""
    config = Config(temp_config_file)
    assert config.get('nonexistent.key', 'default') == 'default'


def test_config_missing_file():
    """Test error on missing config file."""
    with pytest.raises(ConfigurationError):
        Config('nonexistent.yaml')


def test_config_missing_section(tmp_path):
    """Test error when the calculator section is absent."""
    path = tmp_path / "config.yaml"
    path.write_text("app:\n  name: x\n")
    with pytest.raises(ConfigurationError, match="calculator"):
        Config(str(path))


def test_config_unknown_rate_source(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("app:\n  name: x\ncalculator: {}\nrates:\n  source: carrier_pigeon\n")
    with pytest.raises(ConfigurationError, match="rates.source"):
        Config(str(path))


def test_get_config_before_load():
    with pytest.raises(ConfigurationError):
        get_config()


def test_load_config_is_global(temp_config_file):
    cfg = load_config(temp_config_file)
    assert get_config() is cfg


def test_calculator_settings_from_config(temp_config_file):
    settings = CalculatorSettings.from_config(Config(temp_config_file))
    assert settings.currency_a == 'IDR'
    assert settings.default_amount_a == '1000'
    assert settings.history_max_entries == 5
    assert settings.precision == Precision(a=0, b=3, usd=2)
    assert settings.rate_source == 'static'
    assert settings.refresh_interval_seconds == 60.0
    assert settings.database_path == ':memory:'


def test_calculator_settings_defaults():
    settings = CalculatorSettings.from_config(None)
    assert settings.precision == Precision(a=0, b=2, usd=2)
    assert settings.history_max_entries == 50
    assert settings.refresh_interval_seconds == 600.0
