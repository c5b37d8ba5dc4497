from __future__ import annotations

import pytest
import yaml
from typer.testing import CliRunner

from fxcalc.cli.main import app
from fxcalc.utils.logging import setup_logging


runner = CliRunner()


@pytest.fixture
def cli_config(tmp_path):
    config_data = {
        "app": {"name": "Test App", "version": "0.1.0"},
        "calculator": {"currency_a": "IDR", "currency_b": "RUB", "default_amount_a": "1000"},
        "rates": {"source": "static"},
        "database": {"path": str(tmp_path / "fxcalc.db")},
        "logging": {"level": "WARNING", "format": "text"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config_data))
    yield str(path)
    setup_logging(level="WARNING", format_type="text", console=False)


def test_rates_command(cli_config):
    result = runner.invoke(app, ["rates", "--config", cli_config])
    assert result.exit_code == 0
    assert "IDR/RUB: base 0.004700" in result.output


def test_convert_records_history(cli_config):
    result = runner.invoke(app, ["convert", "1000*2", "--config", cli_config])
    assert result.exit_code == 0

    listing = runner.invoke(app, ["history", "list", "--config", cli_config])
    assert listing.exit_code == 0
    assert "2 000 IDR" in listing.output


def test_convert_rejects_bad_currency(cli_config):
    result = runner.invoke(app, ["convert", "100", "--b", "RUBLE", "--config", cli_config])
    assert result.exit_code == 1


def test_journal_add_and_list(cli_config):
    result = runner.invoke(app, ["journal", "add", "buy", "rub", "100", "90", "--config", cli_config])
    assert result.exit_code == 0
    assert "Logged buy 100 USD at 90 RUB" in result.output

    listing = runner.invoke(app, ["journal", "list", "--config", cli_config])
    assert listing.exit_code == 0
    assert "USD/RUB" in listing.output

    bad = runner.invoke(app, ["journal", "add", "hold", "RUB", "100", "90", "--config", cli_config])
    assert bad.exit_code == 1
