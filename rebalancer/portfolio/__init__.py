"""Portfolio Layer.

Holds the current-holdings snapshot and the order value types produced by
rebalancing.

Components:
- Portfolio: Cash and positions, with select/aggregate_equivalents transforms
- PortfolioAsset: A single holding
- Order: Rebalancing limit order
- OrderSide / OrderType: Order enums
"""

from rebalancer.portfolio.base import (
    Order,
    OrderSide,
    OrderType,
    Portfolio,
    PortfolioAsset,
    load_portfolio_from_file,
)

__all__ = [
    "Portfolio",
    "PortfolioAsset",
    "Order",
    "OrderSide",
    "OrderType",
    "load_portfolio_from_file",
]
