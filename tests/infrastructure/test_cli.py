"""Tests for the click command-line interface."""

import json

import pytest
from click.testing import CliRunner

from backoffice.infrastructure.cli.main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("BACKOFFICE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("BACKOFFICE_PRODUCTS_FILE", raising=False)
    return CliRunner()


def _add_tee(runner):
    result = runner.invoke(cli, [
        "product", "add", "--title", "Tee", "--price", "20", "--category", "Shirts",
        "--type", "collection", "--colors", "red:2,blue:1",
    ])
    assert result.exit_code == 0, result.output
    return result


class TestProductCommands:

    def test_add_and_show(self, runner):
        assert "Product #1 'Tee' added at $20.00" in _add_tee(runner).output

        result = runner.invoke(cli, ["product", "show", "--id", "1"])
        assert result.exit_code == 0
        assert "red" in result.output
        assert "OUT OF STOCK" not in result.output

    def test_add_writes_store(self, runner, tmp_path):
        _add_tee(runner)
        records = json.loads((tmp_path / "products.json").read_text())
        assert records[0]["color"] == [{"color": "red", "qty": 2}, {"color": "blue", "qty": 1}]

    def test_list_empty(self, runner):
        result = runner.invoke(cli, ["product", "list"])
        assert result.exit_code == 0
        assert "No products found." in result.output

    def test_show_missing(self, runner):
        result = runner.invoke(cli, ["product", "show", "--id", "42"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestInventoryCommands:

    def test_add_color(self, runner):
        _add_tee(runner)
        result = runner.invoke(
            cli, ["inventory", "add-color", "--id", "1", "--color", "red", "--quantity", "3"]
        )
        assert result.exit_code == 0
        assert "red quantity is now 5" in result.output

    def test_set_color_unknown(self, runner):
        _add_tee(runner)
        result = runner.invoke(
            cli, ["inventory", "set-color", "--id", "1", "--color", "green", "--quantity", "1"]
        )
        assert result.exit_code == 1
        assert "Color 'green' not found" in result.output

    def test_set_color_negative(self, runner):
        _add_tee(runner)
        result = runner.invoke(
            cli, ["inventory", "set-color", "--id", "1", "--color", "red", "--quantity=-1"]
        )
        assert result.exit_code == 1
        assert "cannot be negative" in result.output

    def test_set_stock_on_collection(self, runner):
        _add_tee(runner)
        result = runner.invoke(cli, ["inventory", "set-stock", "--id", "1", "--stock", "3"])
        assert result.exit_code == 1
        assert "requires a single product" in result.output
