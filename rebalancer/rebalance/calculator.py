"""Rebalance order calculator.

Turns a model, a portfolio snapshot, market prices and a spending limit into
the orders that move the portfolio toward the model.

Algorithm:
1. Aggregate equivalent holdings into their model asset, drop non-model holdings
2. Cap the spend at available cash
3. Value current holdings (pre-trade total asset value)
4. Add the spend to get the post-trade total asset value
5. Compute each model symbol's share delta against its target value
6. Round deltas to tradeable amounts and build limit orders
7. Sort orders by ascending value
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from rebalancer.market.base import Market, PriceSelector, get_price_selector, select_last
from rebalancer.model.base import Model
from rebalancer.portfolio.base import Order, OrderSide, OrderType, Portfolio
from rebalancer.symbols import Symbol
from rebalancer.utils.config import Config
from rebalancer.utils.exceptions import CalculatorConfigError
from rebalancer.utils.logging import get_logger, log_order, log_with_context

logger = get_logger(__name__)


@dataclass(frozen=True)
class CalculatorConfig:
    """Rebalance calculator settings.

    Attributes:
        buy_only: Advisory flag, not applied to order generation
        support_fractional_share: Allow fractional order amounts
        slot_size: Tradeable slots per share when fractions are not supported
        buy_price_selector: Limit price for buy orders
        sell_price_selector: Limit price for sell orders
        value_price_selector: Price used to value holdings and targets
    """

    buy_only: bool = False
    support_fractional_share: bool = True
    slot_size: float = 1.0
    buy_price_selector: PriceSelector = select_last
    sell_price_selector: PriceSelector = select_last
    value_price_selector: PriceSelector = select_last


class Calculator:
    """Calculates rebalancing orders for a model, portfolio and spend limit.

    Example:
        >>> calculator = Calculator(CalculatorConfig(
        ...     support_fractional_share=False,
        ...     buy_price_selector=select_bid,
        ...     sell_price_selector=select_bid,
        ...     value_price_selector=select_bid,
        ... ))
        >>> orders = calculator.calculate_orders(market, model, portfolio, 5000)
        >>> for order in orders:
        ...     print(f"{order.side.value} {order.amount} {order.symbol}")
    """

    def __init__(self, config: Optional[CalculatorConfig] = None):
        """Initialize calculator with configuration.

        Args:
            config: Calculator settings. Uses defaults if not provided.
        """
        self.config = config or CalculatorConfig()
        self._validate_config()

        if self.config.buy_only:
            logger.info("buy_only is set but not applied; sell orders are still generated")

    @classmethod
    def from_config(cls, config: Config) -> "Calculator":
        """Build a calculator from the ``calculator`` section of a Config.

        Raises:
            ConfigurationError: If a setting is malformed or a selector unknown
        """
        return cls(
            CalculatorConfig(
                buy_only=config.get_bool("calculator.buy_only", False),
                support_fractional_share=config.get_bool(
                    "calculator.support_fractional_share", True
                ),
                slot_size=config.get_float("calculator.slot_size", 1.0),
                buy_price_selector=get_price_selector(
                    config.get("calculator.buy_price", "last")
                ),
                sell_price_selector=get_price_selector(
                    config.get("calculator.sell_price", "last")
                ),
                value_price_selector=get_price_selector(
                    config.get("calculator.value_price", "last")
                ),
            )
        )

    def _validate_config(self) -> None:
        """Validate configuration parameters."""
        if not self.config.slot_size > 0:
            raise CalculatorConfigError(
                f"slot_size must be > 0, got {self.config.slot_size}"
            )
        for name in ("buy_price_selector", "sell_price_selector", "value_price_selector"):
            if not callable(getattr(self.config, name)):
                raise CalculatorConfigError(f"{name} must be callable")

    def calculate_orders(
        self,
        market: Market,
        model: Model,
        portfolio: Portfolio,
        limit: float,
    ) -> List[Order]:
        """Calculate orders that move the portfolio toward the model.

        The whole capped spend is assumed to be allocated in this rebalance.
        Holdings outside the model are ignored.

        Args:
            market: Price source
            model: Validated target model
            portfolio: Current holdings
            limit: Maximum amount of cash to spend

        Returns:
            Orders sorted by ascending value

        Raises:
            ZeroDivisionError: If a model symbol has a zero valuation price
        """
        portfolio = portfolio.aggregate_equivalents(
            market, model, self.config.value_price_selector
        ).select(model.symbols())

        estimated_order_value = float(min(limit, portfolio.cash_amount()))
        pre_tav = self.calculate_total_asset_value(market, portfolio)
        post_tav = pre_tav + estimated_order_value

        log_with_context(
            logger,
            "debug",
            "Portfolio valued",
            pre_tav=pre_tav,
            post_tav=post_tav,
            estimated_order_value=estimated_order_value,
        )

        position_deltas: Dict[Symbol, float] = {}
        for symbol in sorted(model.symbols()):
            target_value = model.target_proportion(symbol) * post_tav
            current_value = self.calculate_position_value(
                market, symbol, portfolio.position(symbol)
            )
            price = self.config.value_price_selector(market, symbol)
            position_deltas[symbol] = (target_value - current_value) / price

        orders: List[Order] = []
        for symbol, delta in position_deltas.items():
            amount = self._order_amount(delta)
            if amount == 0:
                continue

            if delta > 0:
                side = OrderSide.BUY
                limit_price = self.config.buy_price_selector(market, symbol)
            else:
                side = OrderSide.SELL
                limit_price = self.config.sell_price_selector(market, symbol)

            orders.append(
                Order(
                    symbol=symbol,
                    side=side,
                    amount=amount,
                    limit_price=limit_price,
                    type=OrderType.LIMIT,
                )
            )

        orders.sort(key=lambda o: o.value)
        for order in orders:
            log_order(logger, order)

        log_with_context(
            logger,
            "info",
            "Orders calculated",
            order_count=len(orders),
            limit=limit,
        )

        return orders

    def calculate_total_asset_value(self, market: Market, portfolio: Portfolio) -> float:
        """Value of all holdings at the valuation price (cash excluded)."""
        return sum(
            (
                self.calculate_position_value(market, symbol, portfolio.position(symbol))
                for symbol in portfolio.symbols()
            ),
            0.0,
        )

    def calculate_position_value(
        self, market: Market, symbol: Symbol, position: float
    ) -> float:
        return self.config.value_price_selector(market, symbol) * position

    def _order_amount(self, delta: float) -> float:
        # Whole slots only, truncated toward zero so orders never exceed the delta
        if self.config.support_fractional_share:
            return abs(delta)
        slot_size = self.config.slot_size
        return abs(math.trunc(delta * slot_size) / slot_size)
