"""Portfolio holdings and rebalancing orders.

This module defines the value types that flow in and out of the rebalance
calculator:
- Order: A limit order produced by rebalancing
- Portfolio: Cash plus positions per symbol, immutable

Portfolio transforms (select, aggregate_equivalents) return new instances and
never modify the receiver.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Mapping

import yaml

from rebalancer.symbols import Symbol, SymbolSet
from rebalancer.utils.exceptions import PortfolioFormatError

if TYPE_CHECKING:
    from rebalancer.market.base import Market, PriceSelector
    from rebalancer.model.base import Model


class OrderSide(Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(Enum):
    """Order types produced by rebalancing."""

    LIMIT = "limit"  # Execute only at specified price or better


@dataclass(frozen=True)
class Order:
    """A rebalancing order.

    Attributes:
        symbol: Ticker symbol
        side: BUY or SELL
        amount: Number of shares (may be fractional), never negative
        limit_price: Limit price per share
        type: Order type, always LIMIT for now
    """

    symbol: Symbol
    side: OrderSide
    amount: float
    limit_price: float
    type: OrderType = OrderType.LIMIT

    def __post_init__(self):
        """Validate order fields."""
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative, got {self.amount}")

    @property
    def value(self) -> float:
        """Order value at the limit price."""
        return self.amount * self.limit_price


@dataclass(frozen=True)
class PortfolioAsset:
    """A holding in a Portfolio."""

    position: float


@dataclass(frozen=True)
class Portfolio:
    """Current holdings: cash and a position per symbol.

    Positions are expected to be non-negative but this is not enforced.

    Attributes:
        cash: Cash available
        assets: Holdings keyed by symbol

    Example:
        >>> portfolio = Portfolio(
        ...     cash=5000,
        ...     assets={"VOO": PortfolioAsset(1.5), "CSPX": PortfolioAsset(15)},
        ... )
        >>> portfolio.position("VOO")
        1.5
        >>> portfolio.select(SymbolSet(["VOO"])).symbols()
        SymbolSet(['VOO'])
    """

    cash: float = 0.0
    assets: Mapping[Symbol, PortfolioAsset] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "assets", MappingProxyType(dict(self.assets)))

    @classmethod
    def from_positions(cls, cash: float, positions: Mapping[Symbol, float]) -> "Portfolio":
        """Build a portfolio from a plain {symbol: position} mapping."""
        return cls(
            cash=cash,
            assets={s: PortfolioAsset(position=p) for s, p in positions.items()},
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Portfolio":
        """Build a portfolio from a snapshot ``{"cash": .., "positions": {..}}``.

        Raises:
            PortfolioFormatError: If the snapshot is malformed
        """
        if not isinstance(data, Mapping):
            raise PortfolioFormatError("portfolio snapshot must be a mapping")

        positions = data.get("positions") or {}
        if not isinstance(positions, Mapping):
            raise PortfolioFormatError("portfolio 'positions' must be a mapping")

        try:
            cash = float(data.get("cash", 0.0))
            parsed = {str(s): float(p) for s, p in positions.items()}
        except (TypeError, ValueError) as e:
            raise PortfolioFormatError(f"invalid portfolio snapshot: {e}") from e

        return cls.from_positions(cash, parsed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cash": self.cash,
            "positions": {s: a.position for s, a in self.assets.items()},
        }

    def symbols(self) -> SymbolSet:
        return SymbolSet(self.assets)

    def position(self, symbol: Symbol) -> float:
        """Position size of a symbol, 0 if not held."""
        asset = self.assets.get(symbol)
        return asset.position if asset is not None else 0.0

    def cash_amount(self) -> float:
        return self.cash

    def select(self, symbols: SymbolSet) -> "Portfolio":
        """Project onto the given symbols, keeping cash.

        Symbols in ``symbols`` that are not held stay absent.
        """
        return Portfolio(
            cash=self.cash,
            assets={s: a for s, a in self.assets.items() if symbols.contains(s)},
        )

    def aggregate_equivalents(
        self,
        market: "Market",
        model: "Model",
        selector: "PriceSelector",
    ) -> "Portfolio":
        """Fold positions held in equivalent symbols into their model asset.

        For each model asset ``s`` and each held equivalent ``e``, the
        equivalent position is converted to shares of ``s`` at the selected
        prices and added to the position of ``s``; ``e`` is dropped:

            position(s) += position(e) * price(e) / price(s)

        Args:
            market: Price source
            model: Model declaring the equivalents
            selector: Price selector used on both sides of the exchange

        Returns:
            New Portfolio with equivalents aggregated

        Raises:
            ZeroDivisionError: If an aggregated asset has a zero price
        """
        positions: Dict[Symbol, float] = {s: a.position for s, a in self.assets.items()}

        for symbol in sorted(model.symbols()):
            for equivalent in sorted(model.equivalents(symbol)):
                if equivalent not in positions:
                    continue
                exchanged = (
                    positions.pop(equivalent)
                    * selector(market, equivalent)
                    / selector(market, symbol)
                )
                positions[symbol] = positions.get(symbol, 0.0) + exchanged

        return Portfolio.from_positions(self.cash, positions)


def load_portfolio_from_file(filepath: str | Path) -> Portfolio:
    """Load a portfolio snapshot from a .json, .yaml or .yml file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PortfolioFormatError: If the content is malformed
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Portfolio file not found: {filepath}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise PortfolioFormatError(f"invalid portfolio file {filepath}: {e}") from e

    return Portfolio.from_dict(data)
