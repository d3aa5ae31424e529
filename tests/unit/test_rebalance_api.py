"""Unit tests for RebalanceAPI."""

import pandas as pd
import pytest

from rebalancer.api.rebalance_api import ORDER_COLUMNS, RebalanceAPI, RebalanceResult
from rebalancer.market.base import select_bid
from rebalancer.market.static_market import StaticMarket
from rebalancer.model.base import Model, ModelAsset
from rebalancer.portfolio.base import Order, OrderSide, Portfolio
from rebalancer.rebalance.calculator import Calculator, CalculatorConfig
from rebalancer.utils.config import Config


class TestRebalanceAPIInit:
    """Test cases for RebalanceAPI construction."""

    def test_default_calculator(self) -> None:
        """Test a default calculator is created."""
        api = RebalanceAPI()

        assert isinstance(api.calculator, Calculator)
        assert api.calculator.config.support_fractional_share is True

    def test_calculator_from_config(self) -> None:
        """Test the calculator is built from config when given."""
        config = Config({"calculator": {"support_fractional_share": False, "value_price": "bid"}})

        api = RebalanceAPI(config=config)

        assert api.calculator.config.support_fractional_share is False
        assert api.calculator.config.value_price_selector is select_bid

    def test_explicit_calculator_wins(self) -> None:
        """Test an explicit calculator is used as-is."""
        calculator = Calculator(CalculatorConfig(slot_size=100))

        api = RebalanceAPI(calculator=calculator, config=Config({}))

        assert api.calculator is calculator


class TestRebalance:
    """Test cases for RebalanceAPI.rebalance."""

    def test_rebalance_totals(
        self, unit_market: StaticMarket, equal_weight_model: Model
    ) -> None:
        """Test buy/sell totals and remaining cash."""
        portfolio = Portfolio.from_positions(20.0, {"A": 30})

        result = RebalanceAPI().rebalance(unit_market, equal_weight_model, portfolio, 20)

        assert isinstance(result, RebalanceResult)
        # post_tav 50: A sells 5, B buys 25
        assert result.total_sell_value == pytest.approx(5.0)
        assert result.total_buy_value == pytest.approx(25.0)
        assert result.estimated_cash_after == pytest.approx(0.0)

    def test_rebalance_without_orders(
        self, unit_market: StaticMarket, equal_weight_model: Model
    ) -> None:
        """Test an on-target portfolio yields an empty result."""
        portfolio = Portfolio.from_positions(0.0, {"A": 1, "B": 1})

        result = RebalanceAPI().rebalance(unit_market, equal_weight_model, portfolio, 0)

        assert result.orders == []
        assert result.total_buy_value == 0
        assert result.estimated_cash_after == 0


class TestCurrentWeights:
    """Test cases for RebalanceAPI.current_weights."""

    def test_weights_include_equivalents(self) -> None:
        """Test equivalents count toward their parent's weight."""
        model = Model(
            {
                "VOO": ModelAsset(weight=1, equivalents=("CSPX",)),
                "TLT": ModelAsset(weight=1),
            }
        )
        market = StaticMarket.from_dict(
            {"VOO": {"last": 1.0}, "CSPX": {"last": 2.0}, "TLT": {"last": 1.0}}
        )
        portfolio = Portfolio.from_positions(1000.0, {"VOO": 1, "CSPX": 2, "TLT": 5, "X": 9})

        weights = RebalanceAPI().current_weights(market, model, portfolio)

        assert weights == pytest.approx({"TLT": 0.5, "VOO": 0.5})

    def test_weights_when_nothing_held(
        self, unit_market: StaticMarket, equal_weight_model: Model, cash_portfolio: Portfolio
    ) -> None:
        """Test all weights are 0 for a cash-only portfolio."""
        weights = RebalanceAPI().current_weights(unit_market, equal_weight_model, cash_portfolio)

        assert weights == {"A": 0.0, "B": 0.0}


class TestFormatting:
    """Test cases for DataFrame formatting."""

    def test_format_orders(self) -> None:
        """Test orders are rendered one row each."""
        orders = [
            Order(symbol="A", side=OrderSide.SELL, amount=2, limit_price=1.5),
            Order(symbol="B", side=OrderSide.BUY, amount=3, limit_price=2.0),
        ]

        df = RebalanceAPI().format_orders(orders)

        assert list(df.columns) == ORDER_COLUMNS
        assert df["symbol"].tolist() == ["A", "B"]
        assert df["side"].tolist() == ["SELL", "BUY"]
        assert df["type"].tolist() == ["limit", "limit"]
        assert df["value"].tolist() == [3.0, 6.0]

    def test_format_orders_empty(self) -> None:
        """Test an empty order list keeps the columns."""
        df = RebalanceAPI().format_orders([])

        assert isinstance(df, pd.DataFrame)
        assert df.empty
        assert list(df.columns) == ORDER_COLUMNS

    def test_format_weights(self) -> None:
        """Test weights table carries drift from target."""
        model = Model({"A": ModelAsset(weight=3), "B": ModelAsset(weight=1)})

        df = RebalanceAPI().format_weights({"A": 0.5, "B": 0.5}, model)

        assert df["symbol"].tolist() == ["A", "B"]
        assert df["target"].tolist() == pytest.approx([0.75, 0.25])
        assert df["drift"].tolist() == pytest.approx([-0.25, 0.25])
