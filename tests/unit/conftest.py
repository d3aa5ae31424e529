"""Shared fixtures for unit tests."""

import pytest

from rebalancer.market.static_market import MarketPrice, StaticMarket
from rebalancer.model.base import Model, ModelAsset
from rebalancer.portfolio.base import Portfolio


def flat_price(price: float) -> MarketPrice:
    return MarketPrice(last=price, bid=price, ask=price)


@pytest.fixture
def unit_market() -> StaticMarket:
    """Market where A, B and C all trade at 1."""
    return StaticMarket({"A": flat_price(1.0), "B": flat_price(1.0), "C": flat_price(1.0)})


@pytest.fixture
def equal_weight_model() -> Model:
    """Two equally weighted assets A and B."""
    return Model({"A": ModelAsset(weight=1), "B": ModelAsset(weight=1)})


@pytest.fixture
def cash_portfolio() -> Portfolio:
    """Portfolio holding only 100 in cash."""
    return Portfolio(cash=100.0)


@pytest.fixture
def spx_market() -> StaticMarket:
    """VOO and its equivalent CSPX at different prices."""
    return StaticMarket(
        {
            "VOO": MarketPrice(last=1.0, bid=1.0, ask=1.0),
            "CSPX": MarketPrice(last=2.0, bid=2.0, ask=2.0),
        }
    )


@pytest.fixture
def spx_model() -> Model:
    """Single-asset model folding CSPX into VOO."""
    return Model({"VOO": ModelAsset(weight=100, equivalents=("CSPX",))})
