"""Market Price Layer.

Components:
- Market: Abstract last/bid/ask price source
- StaticMarket: Fixed price table for fixtures and tests
- PriceSelector: (market, symbol) -> price strategy functions
"""

from rebalancer.market.base import (
    PRICE_SELECTORS,
    Market,
    PriceSelector,
    get_price_selector,
    select_ask,
    select_bid,
    select_last,
)
from rebalancer.market.static_market import MarketPrice, StaticMarket

__all__ = [
    "Market",
    "MarketPrice",
    "StaticMarket",
    "PriceSelector",
    "PRICE_SELECTORS",
    "get_price_selector",
    "select_last",
    "select_bid",
    "select_ask",
]
