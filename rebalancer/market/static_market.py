"""Static market backed by a fixed price table.

Used for demo fixtures and tests. Prices can be given in code or loaded from
a YAML/JSON file shaped as ``{SYMBOL: {last: .., bid: .., ask: ..}}``.
Missing quote fields default to 0.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

import yaml

from rebalancer.market.base import Market
from rebalancer.symbols import Symbol
from rebalancer.utils.exceptions import MarketDataError
from rebalancer.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MarketPrice:
    """Quote triple for one symbol."""

    last: float = 0.0
    bid: float = 0.0
    ask: float = 0.0

    def __post_init__(self):
        for name in ("last", "bid", "ask"):
            value = getattr(self, name)
            if value < 0:
                raise MarketDataError(f"{name} price must be non-negative, got {value}")


class StaticMarket(Market):
    """Market with prices fixed at construction.

    Example:
        >>> market = StaticMarket({"VOO": MarketPrice(last=360, bid=359.9, ask=360.1)})
        >>> market.bid("VOO")
        359.9
        >>> market.bid("UNKNOWN")
        0.0
    """

    def __init__(self, prices: Mapping[Symbol, MarketPrice] | None = None):
        self._prices: Mapping[Symbol, MarketPrice] = MappingProxyType(dict(prices or {}))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StaticMarket":
        """Build a market from plain quote mappings.

        Raises:
            MarketDataError: If an entry is not a mapping of numbers
        """
        if not isinstance(data, Mapping):
            raise MarketDataError("market data must be a mapping of symbol to quotes")

        prices: Dict[Symbol, MarketPrice] = {}
        for symbol, quote in data.items():
            if not isinstance(quote, Mapping):
                raise MarketDataError(f"quote for {symbol} must be a mapping")
            try:
                prices[str(symbol)] = MarketPrice(
                    last=float(quote.get("last", 0.0)),
                    bid=float(quote.get("bid", 0.0)),
                    ask=float(quote.get("ask", 0.0)),
                )
            except (TypeError, ValueError) as e:
                raise MarketDataError(f"invalid quote for {symbol}: {e}") from e

        return cls(prices)

    @classmethod
    def from_file(cls, filepath: str | Path) -> "StaticMarket":
        """Load a market fixture from a .json, .yaml or .yml file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            MarketDataError: If the content is malformed
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Market file not found: {filepath}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise MarketDataError(f"invalid market file {filepath}: {e}") from e

        market = cls.from_dict(data or {})
        logger.debug("Loaded %d quotes from %s", len(market), path)
        return market

    def symbols(self) -> list[Symbol]:
        return list(self._prices)

    def last(self, symbol: Symbol) -> float:
        price = self._prices.get(symbol)
        return price.last if price is not None else 0.0

    def bid(self, symbol: Symbol) -> float:
        price = self._prices.get(symbol)
        return price.bid if price is not None else 0.0

    def ask(self, symbol: Symbol) -> float:
        price = self._prices.get(symbol)
        return price.ask if price is not None else 0.0

    def __len__(self) -> int:
        return len(self._prices)
