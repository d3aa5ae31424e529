"""User-friendly Rebalance API.

This module provides a simple, high-level interface for computing
rebalancing orders and presenting them for review.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from rebalancer.market.base import Market
from rebalancer.model.base import Model
from rebalancer.portfolio.base import Order, OrderSide, Portfolio
from rebalancer.rebalance.calculator import Calculator
from rebalancer.utils.config import Config
from rebalancer.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_COLUMNS = ["symbol", "side", "type", "amount", "limit_price", "value"]


@dataclass(frozen=True)
class RebalanceResult:
    """Result of a rebalance run.

    Attributes:
        orders: Orders sorted by ascending value
        total_buy_value: Sum of buy order values
        total_sell_value: Sum of sell order values
        estimated_cash_after: Cash left if every order fills at its limit
    """

    orders: List[Order] = field(default_factory=list)
    total_buy_value: float = 0.0
    total_sell_value: float = 0.0
    estimated_cash_after: float = 0.0


class RebalanceAPI:
    """High-level API for portfolio rebalancing.

    Example:
        >>> from rebalancer.api.rebalance_api import RebalanceAPI
        >>> from rebalancer.utils.config import load_config
        >>>
        >>> api = RebalanceAPI(config=load_config())
        >>> result = api.rebalance(market, model, portfolio, limit=5000.0)
        >>> print(api.format_orders(result.orders))
    """

    def __init__(
        self,
        calculator: Optional[Calculator] = None,
        config: Optional[Config] = None,
    ):
        """Initialize RebalanceAPI.

        Args:
            calculator: Calculator instance. Built from ``config`` when omitted.
            config: Application configuration (used only without a calculator)
        """
        if calculator is None:
            calculator = Calculator.from_config(config) if config is not None else Calculator()
        self.calculator = calculator

        logger.debug(
            "RebalanceAPI initialized with fractional=%s slot_size=%s",
            self.calculator.config.support_fractional_share,
            self.calculator.config.slot_size,
        )

    def rebalance(
        self,
        market: Market,
        model: Model,
        portfolio: Portfolio,
        limit: float,
    ) -> RebalanceResult:
        """Calculate rebalancing orders and summarise them.

        Args:
            market: Price source
            model: Target model
            portfolio: Current holdings
            limit: Maximum amount of cash to spend

        Returns:
            RebalanceResult with orders and totals
        """
        logger.info(
            "Rebalancing %d model symbols with limit %.2f", len(model.symbols()), limit
        )

        orders = self.calculator.calculate_orders(market, model, portfolio, limit)

        total_buy = sum(o.value for o in orders if o.side == OrderSide.BUY)
        total_sell = sum(o.value for o in orders if o.side == OrderSide.SELL)

        return RebalanceResult(
            orders=orders,
            total_buy_value=total_buy,
            total_sell_value=total_sell,
            estimated_cash_after=portfolio.cash_amount() - total_buy + total_sell,
        )

    def current_weights(
        self,
        market: Market,
        model: Model,
        portfolio: Portfolio,
    ) -> Dict[str, float]:
        """Current weight of each model symbol after aggregating equivalents.

        Weights are shares of the invested model value (cash excluded).
        All weights are 0 when nothing is held.
        """
        value_selector = self.calculator.config.value_price_selector
        aggregated = portfolio.aggregate_equivalents(market, model, value_selector).select(
            model.symbols()
        )

        values = {
            s: self.calculator.calculate_position_value(market, s, aggregated.position(s))
            for s in sorted(model.symbols())
        }
        total = sum(values.values())
        if total <= 0:
            return {s: 0.0 for s in values}

        return {s: v / total for s, v in values.items()}

    def format_orders(self, orders: List[Order]) -> pd.DataFrame:
        """Format orders as a DataFrame for display.

        Args:
            orders: List of Order objects

        Returns:
            DataFrame with one row per order, in the given order
        """
        if not orders:
            return pd.DataFrame(columns=ORDER_COLUMNS)

        data = [
            {
                "symbol": o.symbol,
                "side": o.side.value,
                "type": o.type.value,
                "amount": o.amount,
                "limit_price": o.limit_price,
                "value": o.value,
            }
            for o in orders
        ]

        return pd.DataFrame(data, columns=ORDER_COLUMNS)

    def format_weights(
        self,
        current: Dict[str, float],
        model: Model,
    ) -> pd.DataFrame:
        """Format current vs target weights as a DataFrame.

        Returns:
            DataFrame sorted by target weight descending
        """
        data = [
            {
                "symbol": s,
                "current": current.get(s, 0.0),
                "target": model.target_proportion(s),
                "drift": current.get(s, 0.0) - model.target_proportion(s),
            }
            for s in sorted(model.symbols())
        ]

        df = pd.DataFrame(data, columns=["symbol", "current", "target", "drift"])
        if not df.empty:
            df = df.sort_values("target", ascending=False).reset_index(drop=True)

        return df
