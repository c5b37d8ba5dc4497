"""Pytest configuration and fixtures."""
import pytest
from pathlib import Path
import tempfile
import yaml

from fxcalc.config import reset_config
from fxcalc.calculator.config import CalculatorSettings
from fxcalc.calculator.session import CalculatorSession
from fxcalc.rates.table import RateTable
from fxcalc.storage import MemoryStore, PreferenceStore


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    config_data = {
        'app': {
            'name': 'Test App',
            'version': '0.1.0',
            'debug': True
        },
        'calculator': {
            'currency_a': 'IDR',
            'currency_b': 'RUB',
            'default_amount_a': '1000',
            'history_max_entries': 5,
            'precision': {'a': 0, 'b': 3, 'usd': 2}
        },
        'rates': {
            'source': 'static',
            'refresh_interval_seconds': 60
        },
        'database': {
            'path': ':memory:'
        },
        'logging': {
            'level': 'DEBUG',
            'format': 'text'
        }
    }
    
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        config_path = f.name
    
    yield config_path
    
    Path(config_path).unlink()


@pytest.fixture(autouse=True)
def clear_global_config():
    """Forget the global config before and after each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def usd_rates():
    """Sparse table with only USD legs."""
    return RateTable({"USD/RUB": 90.0, "USD/IDR": 15000.0})


@pytest.fixture
def preferences():
    return PreferenceStore(MemoryStore())


@pytest.fixture
def session(usd_rates):
    """Session over the USD-legs table with IDR as A and RUB as B."""
    settings = CalculatorSettings(currency_a="IDR", currency_b="RUB", default_amount_a="15000000")
    return CalculatorSession(settings, rates=usd_rates)
