"""Unit tests for the rebalance command-line tool."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from rebalancer.cli import cli


@pytest.fixture
def inputs(tmp_path: Path) -> dict:
    """Write a small model, market, portfolio and config to disk."""
    model = tmp_path / "model.json"
    model.write_text(json.dumps({"assets": {"A": {"weight": 1}, "B": {"weight": 1}}}))

    market = tmp_path / "market.yaml"
    market.write_text("A:\n  last: 1\n  bid: 1\n  ask: 1\nB:\n  last: 1\n  bid: 1\n  ask: 1\n")

    portfolio = tmp_path / "portfolio.yaml"
    portfolio.write_text("cash: 100\npositions: {}\n")

    config = tmp_path / "config.yaml"
    config.write_text(
        "logging:\n  level: WARNING\n"
        "calculator:\n  support_fractional_share: true\n"
        "rebalance:\n  limit: 100\n"
    )

    return {
        "model": str(model),
        "market": str(market),
        "portfolio": str(portfolio),
        "config": str(config),
    }


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "REBALANCER_LIMIT",
        "REBALANCER_SLOT_SIZE",
        "REBALANCER_LOG_LEVEL",
        "REBALANCER_FRACTIONAL",
    ):
        monkeypatch.delenv(var, raising=False)


def run_orders(inputs: dict, *extra: str):
    args = [
        "orders",
        "--config", inputs["config"],
        "--model", inputs["model"],
        "--market", inputs["market"],
        "--portfolio", inputs["portfolio"],
        "--log-level", "WARNING",
        *extra,
    ]
    return CliRunner().invoke(cli, args)


class TestOrdersCommand:
    """Test cases for the orders command."""

    def test_prints_orders(self, inputs: dict) -> None:
        """Test orders are printed with totals."""
        result = run_orders(inputs)

        assert result.exit_code == 0, result.output
        assert "PORTFOLIO REBALANCE" in result.output
        assert "BUY" in result.output
        assert "Total buy:     $100.00" in result.output
        assert "Cash after:    $0.00" in result.output

    def test_bundled_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the command runs on the bundled config and demo data alone."""
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(cli, ["orders", "--log-level", "WARNING"])

        assert result.exit_code == 0, result.output
        assert "Limit:         $5,000.00" in result.output
        assert "Total buy:" in result.output

    def test_limit_option(self, inputs: dict) -> None:
        """Test --limit overrides the configured spend."""
        result = run_orders(inputs, "--limit", "40")

        assert result.exit_code == 0, result.output
        assert "Limit:         $40.00" in result.output
        assert "Total buy:     $40.00" in result.output

    def test_no_fractional_option(self, inputs: dict) -> None:
        """Test --no-fractional truncates to whole shares."""
        result = run_orders(inputs, "--limit", "3", "--no-fractional")

        assert result.exit_code == 0, result.output
        # 1.5 shares each truncate to 1
        assert "Total buy:     $2.00" in result.output

    def test_no_orders_needed(self, inputs: dict) -> None:
        """Test a zero limit with nothing held prints no orders."""
        result = run_orders(inputs, "--limit", "0")

        assert result.exit_code == 0, result.output
        assert "No orders needed." in result.output

    def test_invalid_model_fails(self, inputs: dict, tmp_path: Path) -> None:
        """Test a rule-violating model stops the command."""
        bad_model = tmp_path / "bad.json"
        bad_model.write_text(json.dumps({"assets": {}}))
        inputs = {**inputs, "model": str(bad_model)}

        result = run_orders(inputs)

        assert result.exit_code != 0
        assert "model is empty" in result.output

    def test_missing_portfolio_fails(self, inputs: dict, tmp_path: Path) -> None:
        """Test a missing input file stops the command."""
        inputs = {**inputs, "portfolio": str(tmp_path / "missing.yaml")}

        result = run_orders(inputs)

        assert result.exit_code != 0
        assert "Portfolio file not found" in result.output


class TestValidateModelCommand:
    """Test cases for the validate-model command."""

    def test_valid_model(self, tmp_path: Path) -> None:
        """Test a valid model is reported with its size."""
        path = tmp_path / "model.json"
        path.write_text(
            json.dumps({"assets": {"VOO": {"weight": 1, "equivalents": ["CSPX"]}}})
        )

        result = CliRunner().invoke(cli, ["validate-model", str(path)])

        assert result.exit_code == 0
        assert "Model OK: 1 assets, 1 equivalents" in result.output

    def test_invalid_model(self, tmp_path: Path) -> None:
        """Test a rule violation is reported with exit code 1."""
        path = tmp_path / "model.json"
        path.write_text(
            json.dumps(
                {
                    "assets": {
                        "A": {"weight": 1, "equivalents": ["B"]},
                        "C": {"weight": 1, "equivalents": ["B"]},
                    }
                }
            )
        )

        result = CliRunner().invoke(cli, ["validate-model", str(path)])

        assert result.exit_code == 1
        assert "DuplicateEquivalentOwnershipError" in result.output
