"""Market price lookup and price selection strategies.

A Market answers last, bid and ask prices per symbol. Unknown symbols price
at 0: absence is a valid "no price" signal, not an error.

A PriceSelector is a plain function ``(market, symbol) -> price`` that picks
which quote to use. The rebalance calculator takes one selector each for
buy limits, sell limits and valuation.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict

from rebalancer.symbols import Symbol
from rebalancer.utils.exceptions import ConfigurationError


class Market(ABC):
    """Abstract interface for market price sources.

    Example:
        >>> class FlatMarket(Market):
        ...     def last(self, symbol): return 1.0
        ...     def bid(self, symbol): return 1.0
        ...     def ask(self, symbol): return 1.0
    """

    @abstractmethod
    def last(self, symbol: Symbol) -> float:
        """Last traded price, 0 if unknown."""
        pass

    @abstractmethod
    def bid(self, symbol: Symbol) -> float:
        """Best bid price, 0 if unknown."""
        pass

    @abstractmethod
    def ask(self, symbol: Symbol) -> float:
        """Best ask price, 0 if unknown."""
        pass


PriceSelector = Callable[[Market, Symbol], float]


def select_last(market: Market, symbol: Symbol) -> float:
    return market.last(symbol)


def select_bid(market: Market, symbol: Symbol) -> float:
    return market.bid(symbol)


def select_ask(market: Market, symbol: Symbol) -> float:
    return market.ask(symbol)


PRICE_SELECTORS: Dict[str, PriceSelector] = {
    "last": select_last,
    "bid": select_bid,
    "ask": select_ask,
}


def get_price_selector(name: str) -> PriceSelector:
    """Resolve a price selector by name.

    Args:
        name: One of "last", "bid", "ask" (case-insensitive)

    Returns:
        Matching selector function

    Raises:
        ConfigurationError: If the name is unknown
    """
    selector = PRICE_SELECTORS.get(str(name).strip().lower())
    if selector is None:
        raise ConfigurationError(
            f"Unknown price selector: {name}. "
            f"Available: {', '.join(PRICE_SELECTORS)}"
        )
    return selector
